from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from abcsync.adapters.memory import InMemoryCatalog, InMemoryLocalRegistry, InMemoryRepository
from abcsync.domain.errors import LookupFailed, NameNotFound, RepositoryNotFound
from abcsync.domain.features import RepositoryGateway
from tests.helpers.records import feat_record

if TYPE_CHECKING:
    from collections.abc import Collection

    from abcsync.domain.model import RawRecord


class _BrokenRepository:
    def query_by_ids(self, ids: Collection[str]) -> list[RawRecord]:
        raise OSError("connection reset")

    def query_by_slug(self, slug: str) -> list[RawRecord]:
        raise OSError("connection reset")


class _BrokenCatalog:
    def get(self, name: str) -> _BrokenRepository:
        return _BrokenRepository()


def _gateway(**repositories: InMemoryRepository) -> RepositoryGateway:
    return RepositoryGateway(
        catalog=InMemoryCatalog(repositories),
        local_registry=InMemoryLocalRegistry([feat_record("local-1", "Local Feat")]),
    )


def test_fetch_by_ids_runs_one_batched_query() -> None:
    repository = InMemoryRepository(
        [feat_record("a", "Alpha"), feat_record("b", "Beta"), feat_record("c", "Gamma")]
    )
    gateway = _gateway(feats=repository)

    records = gateway.fetch_by_ids("feats", ["a", "c"])

    assert [record["_id"] for record in records] == ["a", "c"]
    assert repository.queries == [("ids", frozenset({"a", "c"}))]


def test_fetch_by_ids_unknown_repository() -> None:
    with pytest.raises(RepositoryNotFound) as excinfo:
        _gateway().fetch_by_ids("missing", ["a"])

    assert excinfo.value.name == "missing"


def test_fetch_by_ids_wraps_query_errors() -> None:
    gateway = RepositoryGateway(catalog=_BrokenCatalog(), local_registry=InMemoryLocalRegistry())

    with pytest.raises(LookupFailed) as excinfo:
        gateway.fetch_by_ids("feats", ["a"])

    assert excinfo.value.repository == "feats"
    assert isinstance(excinfo.value.__cause__, OSError)


def test_fetch_groups_queries_each_repository_once_in_order() -> None:
    first = InMemoryRepository([feat_record("a", "Alpha")])
    second = InMemoryRepository([feat_record("b", "Beta")])
    gateway = _gateway(second=second, first=first)

    result = gateway.fetch_groups({"first": ["a"], "second": ["b"]})

    assert list(result) == ["first", "second"]
    assert len(first.queries) == 1
    assert len(second.queries) == 1


def test_fetch_local_returns_none_for_unknown_ids() -> None:
    gateway = _gateway()

    assert gateway.fetch_local("unknown") is None
    found = gateway.fetch_local("local-1")
    assert found is not None
    assert found["name"] == "Local Feat"


def test_fetch_by_name_uses_the_slug() -> None:
    repository = InMemoryRepository(
        [feat_record("a1", "Assurance (Stealth)", feat_type="skill")]
    )
    gateway = _gateway(feats=repository)

    record = gateway.fetch_by_name("feats", "Assurance (Stealth)")

    assert record["_id"] == "a1"
    assert repository.queries == [("slug", "assurance-stealth")]


@pytest.mark.parametrize("records", [[], [feat_record("a", "Twin"), feat_record("b", "Twin")]])
def test_fetch_by_name_requires_exactly_one_match(records: list[RawRecord]) -> None:
    gateway = _gateway(feats=InMemoryRepository(records))

    with pytest.raises(NameNotFound) as excinfo:
        gateway.fetch_by_name("feats", "Twin")

    assert excinfo.value.matches == len(records)


def test_fetch_by_name_wraps_query_errors() -> None:
    gateway = RepositoryGateway(catalog=_BrokenCatalog(), local_registry=InMemoryLocalRegistry())

    with pytest.raises(LookupFailed):
        gateway.fetch_by_name("feats", "Twin")
