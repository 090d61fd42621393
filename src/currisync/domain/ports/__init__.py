"""Domain port definitions for adapters."""

from __future__ import annotations

from .persistence import (
    CompetencyStore,
    CurriculumStores,
    DomainStore,
    EntityStore,
    EvaluationStore,
    HierarchyReader,
    ResourceStore,
    SubCompetencyStore,
)

__all__ = [
    "CompetencyStore",
    "CurriculumStores",
    "DomainStore",
    "EntityStore",
    "EvaluationStore",
    "HierarchyReader",
    "ResourceStore",
    "SubCompetencyStore",
]
