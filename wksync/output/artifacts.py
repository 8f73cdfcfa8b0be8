"""JSON artifacts exchanged between the dictionary builder and the uploader.

- translations.json: {"<subject id>": ["synonym", ...], ...}
- misses.json: ["vocabulary word without dictionary entry", ...]
- vocab.json: {"<characters>": <subject id>, ...}, the offline vocabulary copy
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence

from wksync.common.errors import ConfigError
from wksync.common.utils import ensure_dir


def _write_json(path: Path, data: Any) -> Path:
    ensure_dir(path.parent)
    path.write_text(json.dumps(data, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
    return path


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigError(f"{path} is not valid JSON: {e}") from e


def write_translations(path: Path, translations: Mapping[int, Sequence[str]]) -> Path:
    """Write the translation table with subject ids as string keys."""
    return _write_json(path, {str(subject_id): list(synonyms) for subject_id, synonyms in translations.items()})


def read_translations(path: Path) -> Dict[int, List[str]]:
    """Read a translation table, restoring integer subject ids."""
    data = _read_json(path)
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a JSON object")
    translations: Dict[int, List[str]] = {}
    for key, synonyms in data.items():
        try:
            subject_id = int(key)
        except ValueError as e:
            raise ConfigError(f"{path}: subject id '{key}' is not a number") from e
        if not isinstance(synonyms, list) or not all(isinstance(s, str) for s in synonyms):
            raise ConfigError(f"{path}: synonyms for subject {key} must be a list of strings")
        translations[subject_id] = synonyms
    return translations


def write_misses(path: Path, untranslated: Sequence[str]) -> Path:
    return _write_json(path, list(untranslated))


def write_vocab(path: Path, vocab: Mapping[str, int]) -> Path:
    return _write_json(path, dict(vocab))


def read_vocab(path: Path) -> Dict[str, int]:
    data = _read_json(path)
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a JSON object")
    vocab: Dict[str, int] = {}
    for word, subject_id in data.items():
        if not isinstance(subject_id, int) or isinstance(subject_id, bool):
            raise ConfigError(f"{path}: subject id for '{word}' must be an integer")
        vocab[word] = subject_id
    return vocab
