"""Per-level create-vs-update decisions for imported tree nodes.

Every level follows the same contract:

1) skip nodes missing their required field(s), silently
2) an ``id`` found in the level's identity map means update
3) anything else (no ``id``, or an unknown one) means create under the parent
4) record the store's result in the identity map and the summary

Store failures are never caught here; the first one aborts the import.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from currisync.domain.model import (
    Competency,
    CompetencyCreate,
    CompetencyUpdate,
    Entity,
    EntityKind,
    Evaluation,
    EvaluationCreate,
    EvaluationFormat,
    EvaluationMode,
    EvaluationUpdate,
    Resource,
    ResourceCreate,
    ResourceType,
    ResourceUpdate,
    SubCompetency,
    SubCompetencyCreate,
    SubCompetencyUpdate,
)

from .document import CompetencyNode, EvaluationNode, ResourceNode, SubCompetencyNode, TreeNode
from .errors import InvalidNodeValueError

if TYPE_CHECKING:
    from currisync.domain.ports import CurriculumStores, EntityStore

    from .context import ImportSummary
    from .index import IdentityMap

log = getLogger(__name__)


@dataclass(frozen=True)
class LevelReconciler[TNode: TreeNode, TEntity: Entity, TCreate, TUpdate]:
    """Create-or-update one imported node against one identity map."""

    kind: EntityKind
    store: EntityStore[TEntity, TCreate, TUpdate]
    is_complete: Callable[[TNode], bool]
    build_create: Callable[[str, TNode], TCreate]
    build_update: Callable[[TNode], TUpdate]

    async def reconcile(
        self,
        node: TNode,
        *,
        parent_id: str,
        index: IdentityMap[TEntity],
        summary: ImportSummary,
    ) -> TEntity | None:
        """Apply ``node`` and return the persisted entity, or ``None`` if skipped."""

        if not self.is_complete(node):
            log.debug("Skipping %s node without required fields (id=%s)", self.kind, node.id)
            return None

        existing = index.get(node.id) if node.id else None
        if existing is not None:
            entity = await self.store.update(existing.id, self.build_update(node))
            index[entity.id] = entity
            summary.record_updated(self.kind)
            log.debug("Updated %s %s", self.kind, entity.id)
            return entity

        entity = await self.store.create(self.build_create(parent_id, node))
        index[entity.id] = entity
        summary.record_created(self.kind)
        log.debug("Created %s %s under %s", self.kind, entity.id, parent_id)
        return entity


def _require(value: str | None) -> str:
    if not value:
        raise ValueError("required node field is missing")
    return value


def _enum_member[TEnum: StrEnum](enum_cls: type[TEnum], value: str | None, label: str) -> TEnum:
    try:
        return enum_cls(value)
    except ValueError as exc:
        raise InvalidNodeValueError(f"Invalid {label}: {value}", value=value) from exc


# Competency ------------------------------------------------------------------


def _has_name(node: CompetencyNode | SubCompetencyNode) -> bool:
    return bool(node.name)


def competency_update(node: CompetencyNode) -> CompetencyUpdate:
    return {
        "name": _require(node.name),
        "description": node.description,
        "objectives": node.objectives,
    }


def competency_create(domain_id: str, node: CompetencyNode) -> CompetencyCreate:
    return {"domain_id": domain_id, **competency_update(node)}


# Sub-competency --------------------------------------------------------------


def sub_competency_update(node: SubCompetencyNode) -> SubCompetencyUpdate:
    update: SubCompetencyUpdate = {
        "name": _require(node.name),
        "description": node.description,
        "objectives": node.objectives,
    }
    if node.level is not None:
        update["level"] = node.level
    return update


def sub_competency_create(competency_id: str, node: SubCompetencyNode) -> SubCompetencyCreate:
    return {"competency_id": competency_id, **sub_competency_update(node)}


# Resource --------------------------------------------------------------------


def _resource_complete(node: ResourceNode) -> bool:
    return bool(node.name) and bool(node.type)


def resource_update(node: ResourceNode) -> ResourceUpdate:
    return {
        "type": _enum_member(ResourceType, node.type, "resource type"),
        "name": _require(node.name),
        "description": node.description,
        "url": node.url,
        "file_key": node.file_key,
        "person_user_id": node.person_user_id,
    }


def resource_create(sub_competency_id: str, node: ResourceNode) -> ResourceCreate:
    return {"sub_competency_id": sub_competency_id, **resource_update(node)}


# Evaluation ------------------------------------------------------------------


def _evaluation_complete(node: EvaluationNode) -> bool:
    return bool(node.name) and bool(node.mode) and bool(node.format)


def evaluation_update(node: EvaluationNode) -> EvaluationUpdate:
    return {
        "name": _require(node.name),
        "description": node.description,
        "mode": _enum_member(EvaluationMode, node.mode, "evaluation mode"),
        "format": _enum_member(EvaluationFormat, node.format, "evaluation format"),
        "duration_min": node.duration_min,
        "url": node.url,
        "file_key": node.file_key,
    }


def evaluation_create(sub_competency_id: str, node: EvaluationNode) -> EvaluationCreate:
    return {"sub_competency_id": sub_competency_id, **evaluation_update(node)}


@dataclass(frozen=True, slots=True)
class LevelReconcilers:
    competencies: LevelReconciler[CompetencyNode, Competency, CompetencyCreate, CompetencyUpdate]
    sub_competencies: LevelReconciler[
        SubCompetencyNode, SubCompetency, SubCompetencyCreate, SubCompetencyUpdate
    ]
    resources: LevelReconciler[ResourceNode, Resource, ResourceCreate, ResourceUpdate]
    evaluations: LevelReconciler[EvaluationNode, Evaluation, EvaluationCreate, EvaluationUpdate]


def build_reconcilers(stores: CurriculumStores) -> LevelReconcilers:
    """Instantiate the four level reconcilers over ``stores``."""

    return LevelReconcilers(
        competencies=LevelReconciler(
            kind=EntityKind.COMPETENCY,
            store=stores.competencies,
            is_complete=_has_name,
            build_create=competency_create,
            build_update=competency_update,
        ),
        sub_competencies=LevelReconciler(
            kind=EntityKind.SUB_COMPETENCY,
            store=stores.sub_competencies,
            is_complete=_has_name,
            build_create=sub_competency_create,
            build_update=sub_competency_update,
        ),
        resources=LevelReconciler(
            kind=EntityKind.RESOURCE,
            store=stores.resources,
            is_complete=_resource_complete,
            build_create=resource_create,
            build_update=resource_update,
        ),
        evaluations=LevelReconciler(
            kind=EntityKind.EVALUATION,
            store=stores.evaluations,
            is_complete=_evaluation_complete,
            build_create=evaluation_create,
            build_update=evaluation_update,
        ),
    )
