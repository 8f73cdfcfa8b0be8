"""Progress reporting for long-running WaniKani operations.

A single ProgressReporter is handed to the WaniKaniClient once; the paginated
fetcher and the sync engine both report through it. The base class ignores
every event, so callers that don't care about progress pass nothing.
"""

from datetime import datetime
from typing import Optional


class ProgressReporter:
    """Observer for step-based progress. All methods are no-ops."""

    def reset(self) -> None:
        pass

    def set_text(self, text: str) -> None:
        pass

    def set_max_steps(self, max_steps: int) -> None:
        pass

    def next_step(self) -> None:
        pass

    def set_estimate(self, finish_at: datetime) -> None:
        pass


class ConsoleProgress(ProgressReporter):
    """Print one [progress] line per step."""

    def __init__(self) -> None:
        self.text = ""
        self.step = 0
        self.max_steps = 0
        self.finish_at: Optional[datetime] = None

    def reset(self) -> None:
        self.text = ""
        self.step = 0
        self.max_steps = 0
        self.finish_at = None

    def set_text(self, text: str) -> None:
        self.text = text
        print(f"[progress] {text}")

    def set_max_steps(self, max_steps: int) -> None:
        self.max_steps = max_steps

    def set_estimate(self, finish_at: datetime) -> None:
        self.finish_at = finish_at
        print(f"[progress] Estimated completion at {finish_at:%H:%M:%S}")

    def next_step(self) -> None:
        self.step += 1
        line = f"[progress] {self.text} {self.step}/{self.max_steps}"
        if self.finish_at is not None:
            line += f" (eta {self.finish_at:%H:%M:%S})"
        print(line)
