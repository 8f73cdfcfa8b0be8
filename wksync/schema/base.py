"""Local record types shared by the dictionary builder and the sync engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional


# headword -> ordered, case-insensitively unique meanings
Dictionary = Dict[str, List[str]]

# subject id -> ordered synonyms to store on WaniKani
TranslationTable = Dict[int, List[str]]


@dataclass(frozen=True)
class VocabularyItem:
    """A WaniKani vocabulary subject as seen by the resolver."""
    characters: str
    subject_id: int
    burned: Optional[bool] = None


@dataclass(frozen=True)
class TranslationRecord:
    """Desired synonyms for one subject that has no study material yet."""
    subject_id: int
    synonyms: List[str]


@dataclass(frozen=True)
class StudyMaterialUpdate:
    """Replacement synonym list for an existing study material."""
    material_id: int
    subject_id: int
    synonyms: List[str]


@dataclass
class SyncDelta:
    """Writes needed to bring WaniKani in line with a translation table.

    A subject id appears in at most one of the two lists.
    """
    to_create: List[TranslationRecord] = field(default_factory=list)
    to_update: List[StudyMaterialUpdate] = field(default_factory=list)

    @property
    def total_steps(self) -> int:
        return len(self.to_create) + len(self.to_update)

    def is_empty(self) -> bool:
        return self.total_steps == 0


@dataclass(frozen=True)
class SyncResult:
    """Outcome of a sync run."""
    created: int
    updated: int
    unchanged: int
    dry_run: bool = False


__all__ = [
    "Dictionary",
    "TranslationTable",
    "VocabularyItem",
    "TranslationRecord",
    "StudyMaterialUpdate",
    "SyncDelta",
    "SyncResult",
]
