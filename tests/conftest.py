"""Shared test fixtures for wksync."""

from typing import Any, Callable, Dict, List, Optional

import pytest

from wksync.common.config import SyncConfig
from wksync.common.progress import ProgressReporter
from wksync.wanikani.client import WaniKaniClient
from wksync.wanikani.limiter import RateLimiter


API = "https://api.wanikani.com/v2"

NOT_JSON = object()


class FakeResponse:
    """Just enough of requests.Response for the client."""

    def __init__(self, status_code: int = 200, body: Any = None, text: str = "") -> None:
        self.status_code = status_code
        self._body = body
        self.text = text

    def json(self) -> Any:
        if self._body is NOT_JSON:
            raise ValueError("not JSON")
        return self._body


class FakeSession:
    """Records requests and answers them from a handler or a queue of responses."""

    def __init__(self, responses: Optional[List[Any]] = None, handler: Optional[Callable[..., Any]] = None) -> None:
        self.responses = list(responses or [])
        self.handler = handler
        self.calls: List[Dict[str, Any]] = []

    def request(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        call = {"method": method, "url": url, **kwargs}
        self.calls.append(call)
        if self.handler is not None:
            result = self.handler(call)
        else:
            result = self.responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


class RecordingProgress(ProgressReporter):
    """Collect progress events as tuples."""

    def __init__(self) -> None:
        self.events: List[tuple] = []

    def reset(self) -> None:
        self.events.append(("reset",))

    def set_text(self, text: str) -> None:
        self.events.append(("text", text))

    def set_max_steps(self, max_steps: int) -> None:
        self.events.append(("max", max_steps))

    def next_step(self) -> None:
        self.events.append(("step",))

    def set_estimate(self, finish_at) -> None:
        self.events.append(("estimate", finish_at))

    def named(self, name: str) -> List[tuple]:
        return [e for e in self.events if e[0] == name]


def collection(items: List[Any], total_count: Optional[int] = None, per_page: int = 500,
               next_url: Optional[str] = None) -> Dict[str, Any]:
    """Build a collection page payload."""
    return {
        "object": "collection",
        "url": f"{API}/whatever",
        "pages": {"per_page": per_page, "next_url": next_url, "previous_url": None},
        "total_count": len(items) if total_count is None else total_count,
        "data_updated_at": None,
        "data": items,
    }


def vocabulary(subject_id: int, characters: str, obj: str = "vocabulary") -> Dict[str, Any]:
    return {
        "id": subject_id,
        "object": obj,
        "url": f"{API}/subjects/{subject_id}",
        "data": {"characters": characters, "level": 1},
    }


def study_material(material_id: int, subject_id: int, synonyms: List[str]) -> Dict[str, Any]:
    return {
        "id": material_id,
        "object": "study_material",
        "url": f"{API}/study_materials/{material_id}",
        "data": {
            "subject_id": subject_id,
            "subject_type": "vocabulary",
            "meaning_synonyms": synonyms,
            "meaning_note": None,
            "reading_note": None,
            "hidden": False,
        },
    }


def assignment(assignment_id: int, subject_id: int, burned_at: Optional[str] = None) -> Dict[str, Any]:
    return {
        "id": assignment_id,
        "object": "assignment",
        "data": {"subject_id": subject_id, "subject_type": "vocabulary", "burned_at": burned_at},
    }


@pytest.fixture
def config():
    """Config without request pacing."""
    return SyncConfig(min_interval_s=0.0)


@pytest.fixture
def progress():
    return RecordingProgress()


@pytest.fixture
def make_client(config, progress):
    """Factory for a client talking to a FakeSession."""

    def _make(session: FakeSession, token: str = "secret-token") -> WaniKaniClient:
        limiter = RateLimiter(config.min_interval_s, clock=lambda: 0.0, sleep=lambda s: None)
        return WaniKaniClient(token, config=config, session=session, limiter=limiter, progress=progress)

    return _make
