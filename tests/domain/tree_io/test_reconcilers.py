from __future__ import annotations

import asyncio

import pytest

from currisync.domain.model import (
    EntityKind,
    EvaluationFormat,
    EvaluationMode,
    ResourceType,
    SubCompetency,
)
from currisync.domain.tree_io import (
    EvaluationNode,
    ImportSummary,
    InvalidNodeValueError,
    ResourceNode,
    SubCompetencyNode,
)
from currisync.domain.tree_io.reconcilers import (
    build_reconcilers,
    evaluation_update,
    resource_create,
    sub_competency_create,
    sub_competency_update,
)
from tests.support.curriculum import FakeCurriculum


def test_sub_competency_level_only_sent_when_numeric() -> None:
    without_level = sub_competency_update(SubCompetencyNode(name="Cells"))
    with_level = sub_competency_update(SubCompetencyNode(name="Cells", level=3))

    assert "level" not in without_level
    assert with_level["level"] == 3


def test_create_payload_carries_parent_id_and_no_node_id() -> None:
    payload = sub_competency_create("c1", SubCompetencyNode(id="s-old", name="Cells", level=0))

    assert payload == {
        "competency_id": "c1",
        "name": "Cells",
        "description": None,
        "objectives": None,
        "level": 0,
    }


def test_resource_payload_normalises_type() -> None:
    payload = resource_create("s1", ResourceNode(name="Atlas", type="Document"))

    assert payload["type"] is ResourceType.DOCUMENT
    assert payload["sub_competency_id"] == "s1"


def test_evaluation_payload_normalises_mode_and_format() -> None:
    payload = evaluation_update(EvaluationNode(name="Quiz", mode="Peer", format="PaperPencil"))

    assert payload["mode"] is EvaluationMode.PEER
    assert payload["format"] is EvaluationFormat.PAPER_PENCIL
    assert "sub_competency_id" not in payload


def test_unknown_resource_type_is_rejected() -> None:
    with pytest.raises(InvalidNodeValueError) as excinfo:
        resource_create("s1", ResourceNode(name="Atlas", type="Video"))

    assert str(excinfo.value) == "Invalid resource type: Video"
    assert excinfo.value.value == "Video"


@pytest.mark.parametrize(
    ("mode", "evaluation_format", "message"),
    [
        ("Group", "Oral", "Invalid evaluation mode: Group"),
        ("Solo", "Essay", "Invalid evaluation format: Essay"),
    ],
)
def test_unknown_evaluation_values_are_rejected(
    mode: str, evaluation_format: str, message: str
) -> None:
    node = EvaluationNode(name="Quiz", mode=mode, format=evaluation_format)

    with pytest.raises(InvalidNodeValueError) as excinfo:
        evaluation_update(node)

    assert str(excinfo.value) == message


def test_reconcile_updates_known_id_and_replaces_map_entry(curriculum: FakeCurriculum) -> None:
    reconcilers = build_reconcilers(curriculum.stores())
    summary = ImportSummary()
    live_sub = curriculum.domain.competencies[0].sub_competencies[0]
    index: dict[str, SubCompetency] = {live_sub.id: live_sub}

    result = asyncio.run(
        reconcilers.sub_competencies.reconcile(
            SubCompetencyNode(id="s1", name="Cells (updated)"),
            parent_id="c1",
            index=index,
            summary=summary,
        )
    )

    assert result is not None
    assert result.name == "Cells (updated)"
    assert index["s1"] is result
    assert summary.sub_competencies.updated == 1
    [call] = curriculum.calls
    assert call.action == "update"
    assert call.entity_id == "s1"


def test_reconcile_creates_when_id_unknown(curriculum: FakeCurriculum) -> None:
    reconcilers = build_reconcilers(curriculum.stores())
    summary = ImportSummary()
    index: dict[str, SubCompetency] = {}

    result = asyncio.run(
        reconcilers.sub_competencies.reconcile(
            SubCompetencyNode(id="s-from-elsewhere", name="Tissues"),
            parent_id="c1",
            index=index,
            summary=summary,
        )
    )

    assert result is not None
    assert result.id == "generated-sub-0"
    assert result.competency_id == "c1"
    assert index == {"generated-sub-0": result}
    assert summary.sub_competencies.created == 1
    assert curriculum.calls_for(EntityKind.SUB_COMPETENCY, "create")[0].data == {
        "competency_id": "c1",
        "name": "Tissues",
        "description": None,
        "objectives": None,
    }


@pytest.mark.parametrize(
    "node",
    [
        ResourceNode(type="Link"),
        ResourceNode(name="Atlas"),
        ResourceNode(name="", type="Link"),
    ],
)
def test_incomplete_resources_are_skipped(curriculum: FakeCurriculum, node: ResourceNode) -> None:
    reconcilers = build_reconcilers(curriculum.stores())
    summary = ImportSummary()

    result = asyncio.run(
        reconcilers.resources.reconcile(node, parent_id="s1", index={}, summary=summary)
    )

    assert result is None
    assert curriculum.calls == []
    assert summary.total_writes == 0


@pytest.mark.parametrize(
    "node",
    [
        EvaluationNode(mode="Solo", format="Oral"),
        EvaluationNode(name="Quiz", format="Oral"),
        EvaluationNode(name="Quiz", mode="Solo"),
    ],
)
def test_incomplete_evaluations_are_skipped(
    curriculum: FakeCurriculum, node: EvaluationNode
) -> None:
    reconcilers = build_reconcilers(curriculum.stores())
    summary = ImportSummary()

    result = asyncio.run(
        reconcilers.evaluations.reconcile(node, parent_id="s1", index={}, summary=summary)
    )

    assert result is None
    assert curriculum.calls == []
