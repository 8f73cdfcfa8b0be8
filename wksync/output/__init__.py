"""Output library: translation tables, JSON artifacts and study-material sync."""

from wksync.output.translations import (
    build_translations,
    canonical_headword,
)
from wksync.output.artifacts import (
    write_translations,
    read_translations,
    write_misses,
    write_vocab,
    read_vocab,
)
from wksync.output.sync import (
    merge_synonyms,
    compute_delta,
    apply_delta,
    write_study_materials,
)

__all__ = [
    # translations
    "build_translations",
    "canonical_headword",
    # artifacts
    "write_translations",
    "read_translations",
    "write_misses",
    "write_vocab",
    "read_vocab",
    # sync
    "merge_synonyms",
    "compute_delta",
    "apply_delta",
    "write_study_materials",
]
