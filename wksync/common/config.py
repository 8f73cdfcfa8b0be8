"""Configuration for dictionary building and WaniKani sync.

A project can have a wksync.config.json file that overrides any of:
- api_base_url / api_revision: WaniKani API endpoint and revision header
- min_interval_s: minimum seconds between request starts (default 1.1, below 60/minute)
- request_timeout_s: per-request timeout
- max_synonyms / max_synonym_bytes: limits of the meaning_synonyms field
- truncation_marker: one-byte character appended to truncated synonyms
- headword_marker: canonical abbreviation glyph for headwords (e.g. 〜倒れ)
- dictionary_file, vocab_file, translations_file, misses_file: artifact paths,
  relative to the config file's folder
"""

import json
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Optional

from wksync.common.errors import ConfigError
from wksync.common.utils import _load_env_file


CONFIG_FILENAME = "wksync.config.json"
TOKEN_ENV_VAR = "WANIKANI_API_TOKEN"

# Hard limit of the WaniKani meaning_synonyms field
WANIKANI_MAX_SYNONYMS = 8


@dataclass
class SyncConfig:
    """Settings shared by the dictionary builder and the sync engine."""
    api_base_url: str = "https://api.wanikani.com/v2"
    api_revision: str = "20170710"
    min_interval_s: float = 1.1
    request_timeout_s: float = 30.0
    max_synonyms: int = WANIKANI_MAX_SYNONYMS
    # Documented limit is 64 bytes, but WaniKani rejects some shorter UTF-8 strings
    max_synonym_bytes: int = 50
    truncation_marker: str = "~"
    headword_marker: str = "〜"
    dictionary_file: str = "data/wadokudict2"
    vocab_file: str = "data/vocab.json"
    translations_file: str = "data/translations.json"
    misses_file: str = "data/misses.json"

    def __post_init__(self):
        if not 1 <= self.max_synonyms <= WANIKANI_MAX_SYNONYMS:
            raise ConfigError(
                f"max_synonyms must be between 1 and {WANIKANI_MAX_SYNONYMS}, got {self.max_synonyms}"
            )
        if self.min_interval_s < 0:
            raise ConfigError(f"min_interval_s must not be negative, got {self.min_interval_s}")
        if self.request_timeout_s <= 0:
            raise ConfigError(f"request_timeout_s must be positive, got {self.request_timeout_s}")
        if len(self.truncation_marker.encode("utf-8")) != 1:
            raise ConfigError(
                f"truncation_marker must be a single one-byte character, got '{self.truncation_marker}'"
            )
        if self.max_synonym_bytes <= 1:
            raise ConfigError(f"max_synonym_bytes must be greater than 1, got {self.max_synonym_bytes}")
        if not self.headword_marker:
            raise ConfigError("headword_marker must not be empty")


def load_config(path: Optional[Path] = None) -> SyncConfig:
    """Load configuration from a JSON file.

    Returns the defaults if the file doesn't exist.
    """
    config_path = Path(path) if path is not None else Path(CONFIG_FILENAME)
    if not config_path.exists():
        return SyncConfig()

    try:
        with open(config_path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"{config_path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{config_path} must contain a JSON object")

    known = {f.name for f in fields(SyncConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown config keys in {config_path}: {', '.join(unknown)}")

    try:
        return SyncConfig(**data)
    except TypeError as e:
        raise ConfigError(f"Invalid config in {config_path}: {e}") from e


def write_config(path: Path, config: SyncConfig) -> Path:
    """Write a configuration file."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(asdict(config), f, indent=2, ensure_ascii=False)
    return path


def resolve_path(config_path: Optional[Path], value: str) -> Path:
    """Resolve an artifact path from the config against the config file's folder."""
    candidate = Path(value)
    if candidate.is_absolute() or config_path is None:
        return candidate
    return (Path(config_path).parent / candidate).resolve()


def get_api_token(explicit: Optional[str] = None) -> Optional[str]:
    """Return the API token from the argument, the environment or .env (in that order)."""
    if explicit:
        return explicit
    _load_env_file()
    token = os.environ.get(TOKEN_ENV_VAR, "").strip()
    return token or None
