"""WaniKani API v2 payload types, validated at the client boundary.

Every resource carries an "object" discriminant. The parse_* functions turn
decoded JSON into frozen dataclasses and raise ResponseValidationError for
anything that doesn't match, so malformed payloads never travel further in.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from wksync.common.errors import ResponseValidationError


COLLECTION_OBJECT = "collection"
STUDY_MATERIAL_OBJECT = "study_material"
ASSIGNMENT_OBJECT = "assignment"
VOCABULARY_OBJECT = "vocabulary"
SUBJECT_OBJECTS = ("radical", "kanji", VOCABULARY_OBJECT, "kana_vocabulary")


@dataclass(frozen=True)
class CollectionPage:
    """One page of a cursor-paginated collection."""
    items: List[Any]
    total_count: int
    per_page: int
    next_url: Optional[str]


@dataclass(frozen=True)
class Subject:
    """A subject of any kind; characters is None for image-only radicals."""
    id: int
    object: str
    characters: Optional[str]

    @property
    def is_vocabulary(self) -> bool:
        return self.object == VOCABULARY_OBJECT


@dataclass(frozen=True)
class StudyMaterial:
    """A user's study material for one subject."""
    id: int
    subject_id: int
    subject_type: str
    meaning_synonyms: Tuple[str, ...]


@dataclass(frozen=True)
class Assignment:
    id: int
    subject_id: int
    subject_type: str
    burned: bool


def _field(payload: Dict[str, Any], key: str, expected: Any, where: str, optional: bool = False) -> Any:
    """Fetch a key and check its type."""
    if key not in payload:
        if optional:
            return None
        raise ResponseValidationError(f"{where}: missing '{key}'")
    value = payload[key]
    if value is None and optional:
        return None
    # bool is an int subclass, never accept it for numeric ids and counts
    if isinstance(value, bool) and expected is not bool:
        raise ResponseValidationError(f"{where}: '{key}' has unexpected type bool")
    if not isinstance(value, expected):
        raise ResponseValidationError(f"{where}: '{key}' has unexpected type {type(value).__name__}")
    return value


def _resource(payload: Any, expected_objects: Tuple[str, ...], where: str) -> Tuple[int, str, Dict[str, Any]]:
    """Validate the common resource envelope and return (id, object, data)."""
    if not isinstance(payload, dict):
        raise ResponseValidationError(f"{where}: expected an object, got {type(payload).__name__}")
    obj = _field(payload, "object", str, where)
    if obj not in expected_objects:
        raise ResponseValidationError(f"{where}: unexpected object type '{obj}'")
    resource_id = _field(payload, "id", int, where)
    data = _field(payload, "data", dict, where)
    return resource_id, obj, data


def parse_collection(payload: Any) -> CollectionPage:
    """Validate a collection page. Items are left raw for the item parser."""
    where = "collection"
    if not isinstance(payload, dict):
        raise ResponseValidationError(f"{where}: expected an object, got {type(payload).__name__}")
    obj = _field(payload, "object", str, where)
    if obj != COLLECTION_OBJECT:
        raise ResponseValidationError(f"{where}: unexpected object type '{obj}'")
    items = _field(payload, "data", list, where)
    total_count = _field(payload, "total_count", int, where)
    pages = _field(payload, "pages", dict, where)
    per_page = _field(pages, "per_page", int, "collection.pages")
    if per_page <= 0:
        raise ResponseValidationError(f"collection.pages: per_page must be positive, got {per_page}")
    next_url = _field(pages, "next_url", str, "collection.pages", optional=True)
    return CollectionPage(items=items, total_count=total_count, per_page=per_page, next_url=next_url)


def parse_subject(payload: Any) -> Subject:
    subject_id, obj, data = _resource(payload, SUBJECT_OBJECTS, "subject")
    characters = _field(data, "characters", str, f"subject {subject_id}", optional=True)
    if obj == VOCABULARY_OBJECT and not characters:
        raise ResponseValidationError(f"subject {subject_id}: vocabulary without characters")
    return Subject(id=subject_id, object=obj, characters=characters)


def parse_study_material(payload: Any) -> StudyMaterial:
    material_id, _, data = _resource(payload, (STUDY_MATERIAL_OBJECT,), "study_material")
    where = f"study_material {material_id}"
    subject_id = _field(data, "subject_id", int, where)
    subject_type = _field(data, "subject_type", str, where, optional=True) or ""
    synonyms = _field(data, "meaning_synonyms", list, where, optional=True) or []
    if not all(isinstance(s, str) for s in synonyms):
        raise ResponseValidationError(f"{where}: meaning_synonyms must be strings")
    return StudyMaterial(
        id=material_id,
        subject_id=subject_id,
        subject_type=subject_type,
        meaning_synonyms=tuple(synonyms),
    )


def parse_assignment(payload: Any) -> Assignment:
    assignment_id, _, data = _resource(payload, (ASSIGNMENT_OBJECT,), "assignment")
    where = f"assignment {assignment_id}"
    subject_id = _field(data, "subject_id", int, where)
    subject_type = _field(data, "subject_type", str, where, optional=True) or ""
    burned_at = _field(data, "burned_at", str, where, optional=True)
    return Assignment(
        id=assignment_id,
        subject_id=subject_id,
        subject_type=subject_type,
        burned=burned_at is not None,
    )


__all__ = [
    "CollectionPage",
    "Subject",
    "StudyMaterial",
    "Assignment",
    "parse_collection",
    "parse_subject",
    "parse_study_material",
    "parse_assignment",
    "VOCABULARY_OBJECT",
    "SUBJECT_OBJECTS",
]
