"""Input processing library for parsing EDICT2 dictionary files."""

from wksync.input.edict import (
    parse,
    parse_line,
    merge_meanings,
    split_meanings,
    normalize_headword,
    build_dictionary,
    read_dictionary_file,
)
from wksync.input.condense import (
    condense,
    utf8_truncate,
)

__all__ = [
    # edict
    "parse",
    "parse_line",
    "merge_meanings",
    "split_meanings",
    "normalize_headword",
    "build_dictionary",
    "read_dictionary_file",
    # condense
    "condense",
    "utf8_truncate",
]
