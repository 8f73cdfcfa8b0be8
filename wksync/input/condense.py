"""Condensing meaning lists to fit the WaniKani meaning_synonyms field.

The field takes at most eight synonyms, each limited in UTF-8 bytes. Many
dictionary entries have far more meanings than that. The heuristic here is
that shorter meanings are more concise and more useful as synonyms, so the
shortest ones are kept and long ones are cut down to the byte budget.
See https://community.wanikani.com/t/updates-to-synonyms-on-item-pages/53932
"""

from typing import List, Sequence

from wksync.common.utils import utf8_len


ELLIPSIS = "…"

DEFAULT_MAX_SYNONYMS = 8
DEFAULT_MAX_BYTES = 50
DEFAULT_MARKER = "~"


def utf8_truncate(text: str, max_bytes: int = DEFAULT_MAX_BYTES, marker: str = DEFAULT_MARKER) -> str:
    """Fit text into max_bytes of UTF-8, appending marker if anything was cut.

    Ellipses are replaced with the marker first since "…" alone takes three bytes.
    Only whole characters are removed, so multi-byte code points are never split.
    """
    truncated = text.replace(ELLIPSIS, marker)
    if utf8_len(truncated) <= max_bytes:
        return truncated

    budget = max_bytes - utf8_len(marker)
    size = 0
    end = 0
    for ch in truncated:
        ch_size = utf8_len(ch)
        if size + ch_size > budget:
            break
        size += ch_size
        end += 1
    return truncated[:end] + marker


def condense(
    meanings: Sequence[str],
    max_synonyms: int = DEFAULT_MAX_SYNONYMS,
    max_bytes: int = DEFAULT_MAX_BYTES,
    marker: str = DEFAULT_MARKER,
) -> List[str]:
    """Keep the shortest max_synonyms meanings, each truncated to max_bytes."""
    shortest = sorted(meanings, key=len)[:max_synonyms]
    return [utf8_truncate(meaning, max_bytes, marker) for meaning in shortest]
