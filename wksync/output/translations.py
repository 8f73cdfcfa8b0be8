"""Translation table building: dictionary x WaniKani vocabulary."""

from typing import List, Mapping, Sequence, Tuple

from wksync.input.edict import ABBREVIATION_GLYPHS, DEFAULT_HEADWORD_MARKER
from wksync.schema.base import TranslationTable


def canonical_headword(word: str, marker: str = DEFAULT_HEADWORD_MARKER) -> str:
    """Rewrite a vocabulary word to the dictionary's abbreviation marker.

    WaniKani and the dictionary use different glyphs for the same placeholder,
    e.g. "〜倒れ" and "…倒れ".
    """
    for glyph in ABBREVIATION_GLYPHS:
        if glyph != marker:
            word = word.replace(glyph, marker)
    return word


def build_translations(
    dictionary: Mapping[str, Sequence[str]],
    vocabulary: Mapping[str, int],
    marker: str = DEFAULT_HEADWORD_MARKER,
) -> Tuple[TranslationTable, List[str]]:
    """Look up every vocabulary word in the dictionary.

    Returns (translations, untranslated): subject id -> meanings for words
    found, and the words that weren't, in vocabulary order. Every word ends
    up in exactly one of the two.
    """
    translations: TranslationTable = {}
    untranslated: List[str] = []

    for word, subject_id in vocabulary.items():
        meanings = dictionary.get(canonical_headword(word, marker))
        if meanings:
            translations[subject_id] = list(meanings)
        else:
            untranslated.append(word)

    return translations, untranslated
