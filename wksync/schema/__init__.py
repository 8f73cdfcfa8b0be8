"""Data types: local records and validated WaniKani payloads."""

from wksync.schema.base import (
    Dictionary,
    TranslationTable,
    VocabularyItem,
    TranslationRecord,
    StudyMaterialUpdate,
    SyncDelta,
    SyncResult,
)
from wksync.schema.wanikani import (
    CollectionPage,
    Subject,
    StudyMaterial,
    Assignment,
    parse_collection,
    parse_subject,
    parse_study_material,
    parse_assignment,
    VOCABULARY_OBJECT,
    SUBJECT_OBJECTS,
)

__all__ = [
    # Local records
    "Dictionary",
    "TranslationTable",
    "VocabularyItem",
    "TranslationRecord",
    "StudyMaterialUpdate",
    "SyncDelta",
    "SyncResult",
    # WaniKani payloads
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
