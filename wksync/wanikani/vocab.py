"""WaniKani vocabulary sources: online fetch or the offline vocab.json copy."""

from dataclasses import replace
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from wksync.output.artifacts import read_vocab, write_vocab
from wksync.schema.base import VocabularyItem
from wksync.wanikani.client import WaniKaniClient


def get_vocabulary(client: WaniKaniClient) -> List[VocabularyItem]:
    """Fetch all vocabulary subjects."""
    subjects = client.get_subjects(types=("vocabulary",))
    return [
        VocabularyItem(characters=s.characters, subject_id=s.id)
        for s in subjects
        if s.is_vocabulary and s.characters
    ]


def get_unburned_vocabulary(client: WaniKaniClient) -> List[VocabularyItem]:
    """Fetch vocabulary the user hasn't burned yet."""
    vocabulary = get_vocabulary(client)
    burned = {a.subject_id for a in client.get_assignments(burned=True)}
    return [replace(v, burned=False) for v in vocabulary if v.subject_id not in burned]


def vocabulary_map(items: Iterable[VocabularyItem]) -> Dict[str, int]:
    """Map characters to subject id."""
    return {item.characters: item.subject_id for item in items}


def get_vocab_map(
    client: Optional[WaniKaniClient],
    vocab_file: Path,
    unburned: bool = False,
    verbose: bool = False,
) -> Dict[str, int]:
    """Fetch the vocabulary online and refresh the offline copy, or read the copy without a client."""
    if client is None:
        vocab = read_vocab(vocab_file)
        if verbose:
            print(f"[vocab] [offline] {len(vocab)} words from {vocab_file}")
        return vocab

    items = get_unburned_vocabulary(client) if unburned else get_vocabulary(client)
    vocab = vocabulary_map(items)
    write_vocab(vocab_file, vocab)
    if verbose:
        print(f"[vocab] [online] {len(vocab)} words, saved offline copy to {vocab_file}")
    return vocab
