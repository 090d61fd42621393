"""Public domain model surface."""

from __future__ import annotations

from currisync.domain.model.curriculum import (
    Competency,
    Domain,
    Evaluation,
    Resource,
    SubCompetency,
)
from currisync.domain.model.entity import Entity, new_id
from currisync.domain.model.enums import (
    EntityKind,
    EvaluationFormat,
    EvaluationMode,
    ResourceType,
)
from currisync.domain.model.inputs import (
    CompetencyCreate,
    CompetencyUpdate,
    DomainCreate,
    DomainUpdate,
    EvaluationCreate,
    EvaluationUpdate,
    ResourceCreate,
    ResourceUpdate,
    SubCompetencyCreate,
    SubCompetencyUpdate,
)

__all__ = [
    "Competency",
    "CompetencyCreate",
    "CompetencyUpdate",
    "Domain",
    "DomainCreate",
    "DomainUpdate",
    "Entity",
    "EntityKind",
    "Evaluation",
    "EvaluationCreate",
    "EvaluationFormat",
    "EvaluationMode",
    "EvaluationUpdate",
    "Resource",
    "ResourceCreate",
    "ResourceType",
    "ResourceUpdate",
    "SubCompetency",
    "SubCompetencyCreate",
    "SubCompetencyUpdate",
    "new_id",
]
