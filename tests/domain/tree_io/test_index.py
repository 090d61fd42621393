from __future__ import annotations

from currisync.domain.model import Domain, SubCompetency
from currisync.domain.tree_io.context import ImportContext, MergeContext
from currisync.domain.tree_io.index import (
    ScopedIndex,
    build_competency_index,
    build_evaluation_indexes,
    build_resource_indexes,
    build_sub_competency_indexes,
)


def test_competency_index_is_keyed_by_id(live_domain: Domain) -> None:
    index = build_competency_index(live_domain.competencies)

    assert list(index) == ["c1"]
    assert index["c1"] is live_domain.competencies[0]


def test_nested_indexes_are_scoped_by_parent(live_domain: Domain) -> None:
    subs = build_sub_competency_indexes(live_domain.competencies)
    resources = build_resource_indexes(live_domain.competencies)
    evaluations = build_evaluation_indexes(live_domain.competencies)

    assert subs.parent_ids == ("c1",)
    assert list(subs.scope("c1")) == ["s1"]
    assert list(resources.scope("s1")) == ["r1"]
    assert list(evaluations.scope("s1")) == ["e1"]


def test_scope_creates_empty_map_for_unknown_parent() -> None:
    index: ScopedIndex[SubCompetency] = ScopedIndex()

    assert "c9" not in index
    scoped = index.scope("c9")

    assert scoped == {}
    assert "c9" in index
    assert index.scope("c9") is scoped


def test_sub_competency_ids_do_not_leak_across_competencies(live_domain: Domain) -> None:
    subs = build_sub_competency_indexes(live_domain.competencies)

    assert "s1" not in subs.scope("some-other-competency")


def test_merge_context_is_fresh_per_import(live_domain: Domain) -> None:
    context = ImportContext.from_domain(live_domain)

    first = MergeContext.from_import_context(context)
    first.competencies["added"] = live_domain.competencies[0]
    second = MergeContext.from_import_context(context)

    assert second.domain_id == "d1"
    assert "added" not in second.competencies
    assert second.summary.total_writes == 0
