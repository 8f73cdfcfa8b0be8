"""WaniKani API v2 client.

All requests of a client share one RateLimiter, so fetching and writing
together stay below the account-wide request ceiling. Failures are raised as
categorized WaniKaniError subclasses; nothing is retried here because a
retry after a partial write could clobber edits made in the meantime.
"""

import math
from typing import Any, Dict, Iterable, List, Optional

import requests

from wksync.common.config import SyncConfig
from wksync.common.errors import RemoteRequestError, ResponseValidationError, error_for_status
from wksync.common.logging import log_debug
from wksync.common.progress import ProgressReporter
from wksync.schema.wanikani import (
    Assignment,
    StudyMaterial,
    Subject,
    parse_assignment,
    parse_collection,
    parse_study_material,
    parse_subject,
)
from wksync.wanikani.limiter import RateLimiter


USER_AGENT = "wksync/0.1"


class WaniKaniClient:
    """Authenticated, rate-limited access to the WaniKani API.

    The progress reporter given here receives the events of every paginated
    fetch and of the sync engine's write phase.
    """

    def __init__(
        self,
        token: str,
        config: Optional[SyncConfig] = None,
        session: Optional[requests.Session] = None,
        limiter: Optional[RateLimiter] = None,
        progress: Optional[ProgressReporter] = None,
        verbose: bool = False,
        debug: bool = False,
    ) -> None:
        if not token:
            raise ValueError("WaniKani API token must not be empty")
        self.config = config or SyncConfig()
        if session is None:
            session = requests.Session()
            session.headers.update({"User-Agent": USER_AGENT})
        self.session = session
        self.limiter = limiter or RateLimiter(self.config.min_interval_s)
        self.progress = progress or ProgressReporter()
        self.verbose = verbose
        self.debug = debug
        self._headers = {
            "Authorization": f"Bearer {token}",
            "Wanikani-Revision": self.config.api_revision,
        }

    def _url(self, path: str) -> str:
        if path.startswith("http://") or path.startswith("https://"):
            return path
        return f"{self.config.api_base_url.rstrip('/')}/{path.lstrip('/')}"

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, str]] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Send one rate-limited request and return the decoded JSON body."""
        url = self._url(path)

        def send() -> requests.Response:
            return self.session.request(
                method,
                url,
                params=params,
                json=payload,
                headers=self._headers,
                timeout=self.config.request_timeout_s,
            )

        try:
            resp = self.limiter.schedule(send)
        except requests.exceptions.RequestException as e:
            raise RemoteRequestError(f"{method} {url} failed: {e}") from e

        log_debug(self.debug, f"{method} {url} -> {resp.status_code}")
        if not 200 <= resp.status_code < 300:
            raise error_for_status(resp.status_code, _error_detail(resp))

        try:
            return resp.json()
        except ValueError as e:
            raise ResponseValidationError(f"{method} {url}: response is not JSON", status=resp.status_code) from e

    def get_pages(self, path: str, params: Optional[Dict[str, str]] = None, text: str = "") -> List[Any]:
        """Fetch every page of a collection and return the raw items.

        Progress is reported per page against an estimate derived from the
        collection's total_count and page size. Any failed page fails the
        whole fetch.
        """
        url: Optional[str] = path
        items: List[Any] = []
        pages_seen = 0
        self.progress.reset()
        if text:
            self.progress.set_text(text)

        while url:
            page = parse_collection(self._request("GET", url, params=params))
            items.extend(page.items)
            pages_seen += 1
            total_pages = max(1, math.ceil(page.total_count / page.per_page))
            self.progress.set_max_steps(total_pages)
            self.progress.next_step()
            if self.verbose:
                print(f"[wanikani] [fetch] {path} page {pages_seen}/{total_pages}")
            # next_url already carries the query string
            url = page.next_url
            params = None

        return items

    def get_subjects(self, types: Iterable[str] = ("vocabulary",)) -> List[Subject]:
        params = {"types": ",".join(types)} if types else None
        raw = self.get_pages("subjects", params=params, text="Getting vocabulary...")
        return [parse_subject(item) for item in raw]

    def get_assignments(self, burned: Optional[bool] = None) -> List[Assignment]:
        params = {"burned": "true" if burned else "false"} if burned is not None else None
        raw = self.get_pages("assignments", params=params, text="Getting assignments...")
        return [parse_assignment(item) for item in raw]

    def get_study_materials(self, subject_types: Iterable[str] = ("vocabulary",)) -> List[StudyMaterial]:
        params = {"subject_types": ",".join(subject_types)} if subject_types else None
        raw = self.get_pages("study_materials", params=params, text="Getting study materials...")
        return [parse_study_material(item) for item in raw]

    def create_study_material(self, subject_id: int, synonyms: List[str]) -> StudyMaterial:
        body = {"study_material": {"subject_id": subject_id, "meaning_synonyms": list(synonyms)}}
        return parse_study_material(self._request("POST", "study_materials", payload=body))

    def update_study_material(self, material_id: int, synonyms: List[str]) -> StudyMaterial:
        body = {"study_material": {"meaning_synonyms": list(synonyms)}}
        return parse_study_material(self._request("PUT", f"study_materials/{material_id}", payload=body))


def _error_detail(resp: requests.Response) -> str:
    """Extract WaniKani's error text from a failed response."""
    try:
        body = resp.json()
    except ValueError:
        return (resp.text or "").strip()[:200]
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return str(body)[:200]
