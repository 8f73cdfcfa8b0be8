"""Common utility functions shared across the library."""

import os
import re
from pathlib import Path
from typing import Iterable, List, Set


_DEF_ENV_LOADED = False

_WHITESPACE_RE = re.compile(r"\s+")


def _load_env_file() -> None:
    """Load environment variables from .env file if present."""
    global _DEF_ENV_LOADED
    if _DEF_ENV_LOADED:
        return
    _DEF_ENV_LOADED = True
    # Look for .env in the working directory, then the project root
    here = Path(__file__).parent
    candidates = [
        Path.cwd() / ".env",
        here.parent.parent / ".env",
    ]
    for p in candidates:
        if not p.exists():
            continue
        for raw in p.read_text(encoding="utf-8", errors="ignore").splitlines():
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            if line.startswith("export "):
                line = line[len("export "):].strip()
            if "=" not in line:
                continue
            k, v = line.split("=", 1)
            key = k.strip()
            val = v.strip().strip('"').strip("'")
            if key and os.environ.get(key) is None:
                os.environ[key] = val


def unique_ignore_case(items: Iterable[str]) -> List[str]:
    """Return unique items compared case-insensitively, keeping the first-seen casing and order."""
    seen: Set[str] = set()
    ordered: List[str] = []
    for item in items:
        key = item.lower()
        if key not in seen:
            seen.add(key)
            ordered.append(item)
    return ordered


def collapse_whitespace(text: str) -> str:
    """Collapse runs of any Unicode whitespace to a single plain space and trim."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def utf8_len(text: str) -> int:
    """Length of text in UTF-8 bytes."""
    return len(text.encode("utf-8"))


def ensure_dir(path: Path) -> None:
    """Create directory if it doesn't exist."""
    path.mkdir(parents=True, exist_ok=True)
