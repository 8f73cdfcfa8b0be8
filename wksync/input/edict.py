"""EDICT2 dictionary parsing.

Reads an EDICT2 file (e.g. the Wadoku Japanese-German export) into a table
of headword -> meanings, cleaning up a number of oddities of the source:

- Several headwords per line, separated by ";"
- A bracketed reading, sometimes followed by a usage hint up to the first "/"
- Abbreviated headwords written with "…" where WaniKani uses "〜"
- Stray and non-ASCII whitespace around and inside meanings
- Definitions glued straight onto a translation without a separator
- The same meaning listed twice, sometimes in a different case

A fair number of lines in the source don't match the EDICT2 shape at all.
Those are broken upstream and are skipped silently.
"""

import re
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from wksync.common.config import SyncConfig
from wksync.common.logging import log_debug
from wksync.common.utils import collapse_whitespace, unique_ignore_case
from wksync.input.condense import condense
from wksync.schema.base import Dictionary


# headwords, " [reading]" plus optional hint up to the first "/", then "/meaning/.../"
EDICT2_LINE_RE = re.compile(r"\s*(.+) \[[^/]+/(.*)/")

# A lowercase letter running straight into an uppercase letter or digit,
# e.g. "Grundz.B. Ursache" where a definition was glued onto the translation
GLUED_DEFINITION_RE = re.compile(r"[a-z][A-Z0-9]")

# Glyphs used for the abbreviation placeholder in headwords
ABBREVIATION_GLYPHS = ("…", "～", "〜")

DEFAULT_HEADWORD_MARKER = "〜"

# What errors="replace" decodes invalid UTF-8 bytes to
REPLACEMENT_CHAR = "\ufffd"


def normalize_headword(word: str, marker: str = DEFAULT_HEADWORD_MARKER) -> str:
    """Strip a headword and replace abbreviation glyphs with the canonical marker."""
    word = word.strip()
    for glyph in ABBREVIATION_GLYPHS:
        if glyph != marker:
            word = word.replace(glyph, marker)
    return word


def split_meanings(block: str) -> List[str]:
    """Split a "/"-separated meanings block into clean, non-empty meanings."""
    meanings = []
    for piece in block.split("/"):
        meaning = collapse_whitespace(piece)
        if not meaning:
            continue
        if GLUED_DEFINITION_RE.search(meaning):
            continue
        meanings.append(meaning)
    return meanings


def merge_meanings(existing: List[str], new: Iterable[str]) -> List[str]:
    """Append new meanings, dropping case-insensitive duplicates (first casing wins)."""
    return unique_ignore_case([*existing, *new])


def parse_line(line: str, marker: str = DEFAULT_HEADWORD_MARKER) -> List[Tuple[str, List[str]]]:
    """Parse one EDICT2 line into (headword, meanings) pairs.

    Returns an empty list for lines that don't match the EDICT2 shape.
    """
    match = EDICT2_LINE_RE.search(line)
    if not match:
        return []
    headwords, block = match.groups()
    meanings = split_meanings(block)
    if not meanings:
        return []

    entries: List[Tuple[str, List[str]]] = []
    for raw in headwords.split(";"):
        headword = normalize_headword(raw, marker)
        if headword:
            entries.append((headword, list(meanings)))
    return entries


def parse(
    line: str,
    dictionary: Dictionary,
    marker: str = DEFAULT_HEADWORD_MARKER,
) -> Dictionary:
    """Return a new dictionary with the meanings of one line merged in.

    The given dictionary is left untouched. Copying it makes folding a whole
    file through parse quadratic; build_dictionary is the bulk path.
    """
    result = dict(dictionary)
    for headword, meanings in parse_line(line, marker):
        result[headword] = merge_meanings(result.get(headword, []), meanings)
    return result


def build_dictionary(
    lines: Iterable[str],
    config: Optional[SyncConfig] = None,
    verbose: bool = False,
    debug: bool = False,
) -> Dictionary:
    """Parse all lines and condense every entry to fit WaniKani's limits."""
    config = config or SyncConfig()
    table: Dictionary = {}
    total = 0
    skipped = 0
    for line in lines:
        if not line.strip():
            continue
        total += 1
        if REPLACEMENT_CHAR in line:
            skipped += 1
            log_debug(debug, f"skipped undecodable line: {line.rstrip()[:80]}")
            continue
        entries = parse_line(line, config.headword_marker)
        if not entries:
            skipped += 1
            log_debug(debug, f"skipped line: {line.rstrip()[:80]}")
            continue
        for headword, meanings in entries:
            table[headword] = merge_meanings(table.get(headword, []), meanings)

    dictionary = {
        headword: unique_ignore_case(
            condense(
                meanings,
                max_synonyms=config.max_synonyms,
                max_bytes=config.max_synonym_bytes,
                marker=config.truncation_marker,
            )
        )
        for headword, meanings in table.items()
    }
    if verbose:
        print(f"[edict] [ok] {len(dictionary)} headwords from {total} lines ({skipped} skipped)")
    return dictionary


def read_dictionary_file(
    path: Path,
    config: Optional[SyncConfig] = None,
    verbose: bool = False,
    debug: bool = False,
) -> Dictionary:
    """Read an EDICT2 file and return a map of headword to condensed meanings."""
    if verbose:
        print(f"[edict] [read] {path}")
    with open(path, encoding="utf-8", errors="replace") as f:
        return build_dictionary(f, config=config, verbose=verbose, debug=debug)
