"""Ports for persisting curriculum entities.

Every call is one independent write; no batch or transactional variant is
assumed by the domain.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from currisync.domain.model import (
    Competency,
    CompetencyCreate,
    CompetencyUpdate,
    Domain,
    DomainCreate,
    DomainUpdate,
    Evaluation,
    EvaluationCreate,
    EvaluationUpdate,
    Resource,
    ResourceCreate,
    ResourceUpdate,
    SubCompetency,
    SubCompetencyCreate,
    SubCompetencyUpdate,
)


@runtime_checkable
class EntityStore[TEntity, TCreate, TUpdate](Protocol):
    """Minimal create/update contract for one entity kind."""

    async def create(self, data: TCreate) -> TEntity: ...

    async def update(self, entity_id: str, data: TUpdate) -> TEntity: ...


@runtime_checkable
class DomainStore(Protocol):
    """Persistence contract for domains; imports only ever update them."""

    async def create(self, data: DomainCreate) -> Domain: ...

    async def update(self, entity_id: str, data: DomainUpdate) -> Domain: ...


type CompetencyStore = EntityStore[Competency, CompetencyCreate, CompetencyUpdate]
type SubCompetencyStore = EntityStore[SubCompetency, SubCompetencyCreate, SubCompetencyUpdate]
type ResourceStore = EntityStore[Resource, ResourceCreate, ResourceUpdate]
type EvaluationStore = EntityStore[Evaluation, EvaluationCreate, EvaluationUpdate]


@runtime_checkable
class HierarchyReader(Protocol):
    """Load a domain together with its full competency tree."""

    async def get_domain(self, domain_id: str) -> Domain: ...


@dataclass(slots=True)
class CurriculumStores:
    """Stores required to merge a document into a live hierarchy."""

    domains: DomainStore
    competencies: CompetencyStore
    sub_competencies: SubCompetencyStore
    resources: ResourceStore
    evaluations: EvaluationStore
