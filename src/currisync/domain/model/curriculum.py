"""Curriculum hierarchy entities (live, persisted state).

Ownership runs strictly top-down:
- Domain owns Competencies
- Competency owns SubCompetencies
- SubCompetency owns Resources and Evaluations
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from currisync.domain.model.entity import Entity
from currisync.domain.model.enums import (
    EntityKind,
    EvaluationFormat,
    EvaluationMode,
    ResourceType,
)


@dataclass(eq=False, kw_only=True)
class Resource(Entity):
    ENTITY_KIND: ClassVar[EntityKind] = EntityKind.RESOURCE

    sub_competency_id: str
    type: ResourceType
    name: str
    description: str | None = None
    url: str | None = None
    file_key: str | None = None
    person_user_id: str | None = None


@dataclass(eq=False, kw_only=True)
class Evaluation(Entity):
    ENTITY_KIND: ClassVar[EntityKind] = EntityKind.EVALUATION

    sub_competency_id: str
    name: str
    mode: EvaluationMode
    format: EvaluationFormat
    description: str | None = None
    duration_min: int | None = None
    url: str | None = None
    file_key: str | None = None


@dataclass(eq=False, kw_only=True)
class SubCompetency(Entity):
    ENTITY_KIND: ClassVar[EntityKind] = EntityKind.SUB_COMPETENCY

    competency_id: str
    name: str
    description: str | None = None
    objectives: str | None = None
    level: int = 0

    resources: list[Resource] = field(default_factory=list["Resource"], repr=False)
    evaluations: list[Evaluation] = field(default_factory=list["Evaluation"], repr=False)


@dataclass(eq=False, kw_only=True)
class Competency(Entity):
    ENTITY_KIND: ClassVar[EntityKind] = EntityKind.COMPETENCY

    domain_id: str
    name: str
    description: str | None = None
    objectives: str | None = None

    sub_competencies: list[SubCompetency] = field(
        default_factory=list["SubCompetency"], repr=False
    )

    @property
    def sub_competency_count(self) -> int:
        return len(self.sub_competencies)


@dataclass(eq=False, kw_only=True)
class Domain(Entity):
    ENTITY_KIND: ClassVar[EntityKind] = EntityKind.DOMAIN

    name: str
    color_code: str | None = None

    competencies: list[Competency] = field(default_factory=list["Competency"], repr=False)

    @property
    def competency_count(self) -> int:
        return len(self.competencies)
