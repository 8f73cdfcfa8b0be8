"""Tests for study material delta computation and application."""

import pytest

from conftest import FakeResponse, FakeSession, collection, study_material
from wksync.common.errors import MissingScopeError, PayloadRejectedError
from wksync.output import apply_delta, compute_delta, merge_synonyms, write_study_materials
from wksync.schema import StudyMaterial, StudyMaterialUpdate, SyncDelta, TranslationRecord


def _material(subject_id, synonyms, material_id=4711):
    return StudyMaterial(
        id=material_id,
        subject_id=subject_id,
        subject_type="vocabulary",
        meaning_synonyms=tuple(synonyms),
    )


def _apply_locally(materials, delta):
    """Simulate what WaniKani holds after the delta was written."""
    by_subject = {m.subject_id: m for m in materials}
    next_id = 9000
    for record in delta.to_create:
        by_subject[record.subject_id] = _material(record.subject_id, record.synonyms, next_id)
        next_id += 1
    for update in delta.to_update:
        old = by_subject[update.subject_id]
        by_subject[update.subject_id] = _material(update.subject_id, update.synonyms, old.id)
    return list(by_subject.values())


class TestMergeSynonyms:

    def test_merge(self):
        assert merge_synonyms(["1", "2"], ["3", "4"]) == ["1", "2", "3", "4"]
        assert merge_synonyms(["1", "2"], ["2", "3"]) == ["1", "2", "3"]
        assert merge_synonyms(["1"], []) == ["1"]

    def test_merge_caps_at_eight_keeping_existing(self):
        assert merge_synonyms(["1", "2", "3", "4", "5", "6", "7"], ["8", "9"]) == [
            "1", "2", "3", "4", "5", "6", "7", "8",
        ]
        assert merge_synonyms([], [str(i) for i in range(1, 10)]) == [str(i) for i in range(1, 9)]

    def test_merge_ignores_case_and_keeps_existing_casing(self):
        assert merge_synonyms(["a", "B"], ["b", "c"]) == ["a", "B", "c"]

    def test_existing_case_duplicates_are_kept(self):
        assert merge_synonyms(["a", "A"], ["a"]) == ["a", "A"]


class TestComputeDelta:

    def test_new_materials(self):
        delta = compute_delta([_material(1, ["x"])], {1: ["x"], 2: ["y"]})

        assert delta.to_create == [TranslationRecord(subject_id=2, synonyms=["y"])]
        assert delta.to_update == []

    def test_all_new_with_no_existing_materials(self):
        delta = compute_delta([], {1: ["x"], 2: ["y"]})

        assert [r.subject_id for r in delta.to_create] == [1, 2]

    def test_empty_translations(self):
        assert compute_delta([_material(1, [])], {}).is_empty()

    def test_empty_desired_synonyms_are_not_created(self):
        assert compute_delta([], {1: []}).is_empty()

    def test_material_without_translation_is_left_alone(self):
        delta = compute_delta([_material(1, [])], {2: ["y"]})

        assert delta.to_update == []
        assert [r.subject_id for r in delta.to_create] == [2]

    def test_no_update_when_covered_ignoring_case(self):
        assert compute_delta([_material(1, ["a"])], {1: ["A"]}).is_empty()

    def test_update_ignoring_case(self):
        delta = compute_delta([_material(1, ["a", "B"])], {1: ["b", "c"]})

        assert delta.to_update == [StudyMaterialUpdate(material_id=4711, subject_id=1, synonyms=["a", "B", "c"])]
        assert delta.to_create == []

    def test_no_update_when_new_synonyms_would_not_fit(self):
        full = [str(i) for i in range(8)]

        assert compute_delta([_material(1, full)], {1: ["new"]}).is_empty()

    def test_delta(self):
        delta = compute_delta([_material(1, ["1", "2"])], {1: ["2", "3"], 2: ["4"]})

        assert len(delta.to_create) == 1
        assert len(delta.to_update) == 1
        assert delta.total_steps == 2

    def test_subject_is_in_at_most_one_list(self):
        materials = [_material(1, ["a"], 11), _material(3, ["c"], 13)]
        translations = {1: ["b"], 2: ["x"], 3: ["C"], 4: ["y"]}

        delta = compute_delta(materials, translations)

        created = {r.subject_id for r in delta.to_create}
        updated = {u.subject_id for u in delta.to_update}
        assert created == {2, 4}
        assert updated == {1}
        assert not created & updated

    def test_lists_follow_translation_order(self):
        materials = [_material(5, ["a"], 15), _material(1, ["a"], 11)]
        translations = {3: ["x"], 1: ["b"], 2: ["y"], 5: ["c"]}

        delta = compute_delta(materials, translations)

        assert [r.subject_id for r in delta.to_create] == [3, 2]
        assert [u.subject_id for u in delta.to_update] == [1, 5]

    def test_applying_delta_is_idempotent(self):
        materials = [
            _material(1, ["a", "B"], 11),
            _material(2, [str(i) for i in range(7)], 12),
            _material(3, ["Eins"], 13),
        ]
        translations = {
            1: ["b", "c"],
            2: ["x", "y", "z"],
            3: ["eins"],
            4: ["neu", "Neu", "neuer"],
        }

        delta = compute_delta(materials, translations)
        assert not delta.is_empty()

        after = _apply_locally(materials, delta)

        assert compute_delta(after, translations).is_empty()


class FakeWriter:
    """Stands in for WaniKaniClient in apply_delta."""

    class _Limiter:
        min_interval_s = 1.1

    def __init__(self, progress, fail_on=None):
        self.progress = progress
        self.limiter = self._Limiter()
        self.calls = []
        self.fail_on = fail_on

    def create_study_material(self, subject_id, synonyms):
        self.calls.append(("create", subject_id, list(synonyms)))
        if self.fail_on == ("create", subject_id):
            raise PayloadRejectedError("Meaning synonyms is too long", status=422)

    def update_study_material(self, material_id, synonyms):
        self.calls.append(("update", material_id, list(synonyms)))
        if self.fail_on == ("update", material_id):
            raise MissingScopeError("study_materials:update", status=403)


class TestApplyDelta:

    def _delta(self):
        return SyncDelta(
            to_create=[TranslationRecord(1, ["a"]), TranslationRecord(2, ["b"])],
            to_update=[StudyMaterialUpdate(30, 3, ["c", "d"]), StudyMaterialUpdate(40, 4, ["e"])],
        )

    def test_creates_then_updates_in_order(self, progress):
        writer = FakeWriter(progress)

        apply_delta(writer, self._delta())

        assert writer.calls == [
            ("create", 1, ["a"]),
            ("create", 2, ["b"]),
            ("update", 30, ["c", "d"]),
            ("update", 40, ["e"]),
        ]

    def test_progress_counts_steps_with_one_estimate(self, progress):
        writer = FakeWriter(progress)

        apply_delta(writer, self._delta())

        assert ("max", 4) in progress.events
        assert len(progress.named("step")) == 4
        assert len(progress.named("estimate")) == 1

    def test_failure_stops_remaining_writes(self, progress):
        writer = FakeWriter(progress, fail_on=("create", 2))

        with pytest.raises(PayloadRejectedError):
            apply_delta(writer, self._delta())

        assert writer.calls == [("create", 1, ["a"]), ("create", 2, ["b"])]
        assert len(progress.named("step")) == 1

    def test_update_failure_keeps_applied_writes(self, progress):
        writer = FakeWriter(progress, fail_on=("update", 30))

        with pytest.raises(MissingScopeError) as excinfo:
            apply_delta(writer, self._delta())

        assert excinfo.value.category == "missing_scope"
        assert [c[0] for c in writer.calls] == ["create", "create", "update"]


class TestWriteStudyMaterials:

    def _session(self):
        def handler(call):
            if call["method"] == "GET":
                return FakeResponse(200, collection([
                    study_material(11, 1, ["a", "B"]),
                    study_material(12, 2, ["zwei"]),
                ]))
            if call["method"] == "POST":
                subject_id = call["json"]["study_material"]["subject_id"]
                synonyms = call["json"]["study_material"]["meaning_synonyms"]
                return FakeResponse(201, study_material(99, subject_id, synonyms))
            material_id = int(call["url"].rsplit("/", 1)[1])
            return FakeResponse(200, study_material(material_id, 1, call["json"]["study_material"]["meaning_synonyms"]))

        return FakeSession(handler=handler)

    def test_fetches_fresh_and_writes_delta(self, make_client):
        session = self._session()
        client = make_client(session)

        result = write_study_materials(client, {1: ["b", "c"], 2: ["Zwei"], 3: ["drei"]})

        assert (result.created, result.updated, result.unchanged) == (1, 1, 1)
        assert [c["method"] for c in session.calls] == ["GET", "POST", "PUT"]
        assert session.calls[0]["params"] == {"subject_types": "vocabulary"}
        assert session.calls[1]["json"] == {"study_material": {"subject_id": 3, "meaning_synonyms": ["drei"]}}
        assert session.calls[2]["url"].endswith("/study_materials/11")
        assert session.calls[2]["json"] == {"study_material": {"meaning_synonyms": ["a", "B", "c"]}}

    def test_dry_run_does_not_write(self, make_client):
        session = self._session()
        client = make_client(session)

        result = write_study_materials(client, {1: ["b", "c"], 3: ["drei"]}, dry_run=True)

        assert result.dry_run
        assert (result.created, result.updated) == (1, 1)
        assert [c["method"] for c in session.calls] == ["GET"]
