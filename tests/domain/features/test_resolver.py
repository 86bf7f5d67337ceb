from __future__ import annotations

import pytest

from abcsync.domain.errors import InvalidReference, RepositoryNotFound
from abcsync.domain.model import FeatType, FeatureEntry, LocalRef, RepositoryRef
from tests.helpers.records import feat_record, make_engine


def _repo_entry(slot: str, repository: str, record_id: str, level: int) -> FeatureEntry:
    return FeatureEntry(
        slot_id=slot,
        level=level,
        reference=RepositoryRef(repository=repository, record_id=record_id),
    )


def _local_entry(slot: str, record_id: str, level: int = 1) -> FeatureEntry:
    return FeatureEntry(slot_id=slot, level=level, reference=LocalRef(record_id=record_id))


def test_one_batch_per_repository() -> None:
    engine = make_engine(
        {
            "feats-srd": [feat_record(f"s{index}", f"Srd {index}") for index in range(5)],
            "feats-extra": [feat_record(f"x{index}", f"Extra {index}") for index in range(2)],
        }
    )
    entries = [_repo_entry(f"a{index}", "feats-srd", f"s{index}", 1) for index in range(5)]
    entries += [_repo_entry(f"b{index}", "feats-extra", f"x{index}", 1) for index in range(2)]

    features = engine.resolver.resolve(entries, "loc")

    assert len(features) == 7
    assert engine.repository("feats-srd").queries == [
        ("ids", frozenset({"s0", "s1", "s2", "s3", "s4"}))
    ]
    assert engine.repository("feats-extra").queries == [("ids", frozenset({"x0", "x1"}))]


def test_repository_features_get_fresh_ids_location_and_origin() -> None:
    engine = make_engine({"classfeatures": [feat_record("f1", "Shield Block")]})

    (feature,) = engine.resolver.resolve(
        [_repo_entry("slot", "classfeatures", "f1", 1)], "class-1"
    )

    assert feature.id == "id-0001"
    assert feature.location_id == "class-1"
    assert feature.source_id == "Compendium.classfeatures.f1"
    assert feature.is_prepared


def test_class_feature_takes_the_entry_level() -> None:
    engine = make_engine({"classfeatures": [feat_record("f1", "Weapon Mastery", level=1)]})

    (feature,) = engine.resolver.resolve(
        [_repo_entry("slot", "classfeatures", "f1", 5)], "class-1"
    )

    assert feature.level == 5
    assert feature.sort_key == (5, "Weapon Mastery")
    assert feature.level_label == "Level 5"


def test_non_class_feature_keeps_its_own_level() -> None:
    engine = make_engine(
        {"feats": [feat_record("f1", "Toughness", level=1, feat_type="general")]}
    )

    (feature,) = engine.resolver.resolve([_repo_entry("slot", "feats", "f1", 7)], "bg-1")

    assert feature.level == 1
    assert feature.feat_type == FeatType.GENERAL


def test_missing_records_are_skipped() -> None:
    engine = make_engine({"classfeatures": [feat_record("f1", "Present")]})

    features = engine.resolver.resolve(
        [
            _repo_entry("a", "classfeatures", "f1", 1),
            _repo_entry("b", "classfeatures", "gone", 1),
        ],
        "class-1",
    )

    assert [feature.name for feature in features] == ["Present"]


def test_local_entries_follow_repository_entries_without_location() -> None:
    engine = make_engine(
        {"classfeatures": [feat_record("f1", "Remote")]},
        local_records=[feat_record("l1", "Homebrew", level=1)],
    )

    features = engine.resolver.resolve(
        [_local_entry("a", "l1", level=4), _repo_entry("b", "classfeatures", "f1", 1)],
        "class-1",
    )

    assert [feature.name for feature in features] == ["Remote", "Homebrew"]
    local = features[1]
    assert local.location_id is None
    assert local.source_id == "Item.l1"
    assert local.level == 1


def test_unknown_local_entry_is_rejected() -> None:
    engine = make_engine()

    with pytest.raises(InvalidReference) as excinfo:
        engine.resolver.resolve([_local_entry("a", "nope")], None)

    assert excinfo.value.record_id == "nope"


def test_unknown_repository_propagates() -> None:
    engine = make_engine()

    with pytest.raises(RepositoryNotFound):
        engine.resolver.resolve([_repo_entry("a", "missing", "f1", 1)], None)


def test_empty_entries_make_no_queries() -> None:
    engine = make_engine({"classfeatures": [feat_record("f1", "Unused")]})

    assert engine.resolver.resolve([], "class-1") == []
    assert engine.repository("classfeatures").queries == []


def test_non_feat_record_aborts_the_whole_resolution() -> None:
    engine = make_engine(
        {
            "classfeatures": [
                feat_record("f1", "Shield Block"),
                feat_record("s1", "Fireball", record_type="spell"),
            ]
        }
    )
    entries = [
        _repo_entry("a", "classfeatures", "f1", 1),
        _repo_entry("b", "classfeatures", "s1", 1),
    ]

    with pytest.raises(InvalidReference) as excinfo:
        engine.resolver.resolve(entries, "class-1")

    assert excinfo.value.record_id == "s1"


def test_local_entry_pointing_at_a_non_feat_is_rejected() -> None:
    engine = make_engine(local_records=[feat_record("l1", "Longsword", record_type="equipment")])

    with pytest.raises(InvalidReference) as excinfo:
        engine.resolver.resolve([_local_entry("a", "l1")], None)

    assert excinfo.value.record_id == "l1"
