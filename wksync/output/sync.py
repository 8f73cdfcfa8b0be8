"""Study material synchronisation.

Brings the meaning synonyms on WaniKani in line with a translation table
without destroying anything the user entered themselves:

1. Fetch all study materials fresh from WaniKani. They are never cached,
   so edits made elsewhere since the last run are seen.
2. Compute the delta: subjects without a study material get one created,
   subjects with one get the missing synonyms appended (existing synonyms
   stay first and in place, matching is case-insensitive).
3. Apply the delta: all creates, then all updates, one request per limiter
   slot. The first failure stops the run; writes already made stay. Since
   the delta is recomputed from remote state, running again picks up where
   an interrupted run stopped.
"""

from datetime import datetime, timedelta
from typing import Dict, List, Mapping, Optional, Sequence

from wksync.common.config import WANIKANI_MAX_SYNONYMS
from wksync.common.progress import ProgressReporter
from wksync.schema.base import (
    StudyMaterialUpdate,
    SyncDelta,
    SyncResult,
    TranslationRecord,
)
from wksync.schema.wanikani import StudyMaterial
from wksync.wanikani.client import WaniKaniClient


def merge_synonyms(
    existing: Sequence[str],
    desired: Sequence[str],
    limit: int = WANIKANI_MAX_SYNONYMS,
) -> List[str]:
    """Existing synonyms followed by the desired ones not yet present, capped at limit.

    Existing synonyms are kept verbatim and always win over new ones when
    the limit is reached, e.g. ["a", "B"] + ["b", "c"] gives ["a", "B", "c"].
    """
    merged = list(existing)
    seen = {s.lower() for s in existing}
    for synonym in desired:
        key = synonym.lower()
        if key not in seen:
            seen.add(key)
            merged.append(synonym)
    return merged[:max(limit, len(existing))]


def compute_delta(
    materials: Sequence[StudyMaterial],
    translations: Mapping[int, Sequence[str]],
    limit: int = WANIKANI_MAX_SYNONYMS,
) -> SyncDelta:
    """Work out which study materials to create and which to update.

    Both lists follow the order of the translation table. A subject needing
    no change appears in neither list, so applying the delta and computing
    it again yields an empty delta.
    """
    by_subject: Dict[int, StudyMaterial] = {m.subject_id: m for m in materials}
    delta = SyncDelta()

    for subject_id, desired in translations.items():
        material = by_subject.get(subject_id)
        if material is None:
            synonyms = merge_synonyms([], desired, limit)
            if synonyms:
                delta.to_create.append(TranslationRecord(subject_id=subject_id, synonyms=synonyms))
            continue

        existing = list(material.meaning_synonyms)
        merged = merge_synonyms(existing, desired, limit)
        # Also skips desired synonyms that only would have fit past the limit
        if merged != existing:
            delta.to_update.append(
                StudyMaterialUpdate(material_id=material.id, subject_id=subject_id, synonyms=merged)
            )

    return delta


def apply_delta(
    client: WaniKaniClient,
    delta: SyncDelta,
    progress: Optional[ProgressReporter] = None,
    verbose: bool = False,
) -> None:
    """Write the delta to WaniKani: creates first, then updates.

    Every write waits for the client's rate limiter. Any failure propagates
    immediately and leaves the remaining writes undone.
    """
    progress = progress or client.progress
    total = delta.total_steps
    progress.reset()
    progress.set_text("Updating study materials...")
    progress.set_max_steps(total)
    progress.set_estimate(datetime.now() + timedelta(seconds=total * client.limiter.min_interval_s))

    for record in delta.to_create:
        client.create_study_material(record.subject_id, record.synonyms)
        progress.next_step()
        if verbose:
            print(f"[sync] [create] subject {record.subject_id}: {len(record.synonyms)} synonyms")

    for update in delta.to_update:
        client.update_study_material(update.material_id, update.synonyms)
        progress.next_step()
        if verbose:
            print(f"[sync] [update] subject {update.subject_id}: {len(update.synonyms)} synonyms")


def write_study_materials(
    client: WaniKaniClient,
    translations: Mapping[int, Sequence[str]],
    dry_run: bool = False,
    verbose: bool = False,
) -> SyncResult:
    """Fetch current study materials, then create/update to match translations."""
    materials = client.get_study_materials()
    delta = compute_delta(materials, translations, client.config.max_synonyms)
    unchanged = len(translations) - delta.total_steps

    if verbose:
        print(
            f"[sync] [delta] {len(delta.to_create)} to create, {len(delta.to_update)} to update, "
            f"{unchanged} unchanged ({len(materials)} existing study materials)"
        )

    if not dry_run and not delta.is_empty():
        apply_delta(client, delta, verbose=verbose)

    return SyncResult(
        created=len(delta.to_create),
        updated=len(delta.to_update),
        unchanged=unchanged,
        dry_run=dry_run,
    )
