"""State owned by one import call: identity maps and the running summary."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from currisync.domain.model import EntityKind

from .index import (
    build_competency_index,
    build_evaluation_indexes,
    build_resource_indexes,
    build_sub_competency_indexes,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from currisync.domain.model import Competency, Domain, Evaluation, Resource, SubCompetency

    from .index import IdentityMap, ScopedIndex


@dataclass(slots=True)
class LevelCounts:
    created: int = 0
    updated: int = 0

    def to_payload(self) -> dict[str, int]:
        return {"created": self.created, "updated": self.updated}


@dataclass(slots=True)
class ImportSummary:
    """Per-level count of writes applied by one import.

    Every persisted write increments exactly one counter of one level.
    """

    domain_updated: bool = False
    competencies: LevelCounts = field(default_factory=LevelCounts)
    sub_competencies: LevelCounts = field(default_factory=LevelCounts)
    resources: LevelCounts = field(default_factory=LevelCounts)
    evaluations: LevelCounts = field(default_factory=LevelCounts)

    def counts_for(self, kind: EntityKind) -> LevelCounts:
        match kind:
            case EntityKind.COMPETENCY:
                return self.competencies
            case EntityKind.SUB_COMPETENCY:
                return self.sub_competencies
            case EntityKind.RESOURCE:
                return self.resources
            case EntityKind.EVALUATION:
                return self.evaluations
            case _:
                raise ValueError(f"No summary counters for {kind}")

    def record_created(self, kind: EntityKind) -> None:
        self.counts_for(kind).created += 1

    def record_updated(self, kind: EntityKind) -> None:
        self.counts_for(kind).updated += 1

    @property
    def total_writes(self) -> int:
        levels = (self.competencies, self.sub_competencies, self.resources, self.evaluations)
        return int(self.domain_updated) + sum(c.created + c.updated for c in levels)

    def to_payload(self) -> dict[str, Any]:
        return {
            "domainUpdated": self.domain_updated,
            "competencies": self.competencies.to_payload(),
            "subCompetencies": self.sub_competencies.to_payload(),
            "resources": self.resources.to_payload(),
            "evaluations": self.evaluations.to_payload(),
        }


@dataclass(frozen=True, slots=True)
class ImportContext:
    """Caller-supplied snapshot of the live hierarchy to merge into."""

    current_domain: Domain
    existing_competencies: Sequence[Competency]

    @classmethod
    def from_domain(cls, domain: Domain) -> ImportContext:
        return cls(current_domain=domain, existing_competencies=tuple(domain.competencies))


@dataclass(slots=True)
class MergeContext:
    """Identity maps and summary threaded through one import call.

    Built fresh per call and never shared between calls.
    """

    domain_id: str
    competencies: IdentityMap[Competency]
    sub_competencies: ScopedIndex[SubCompetency]
    resources: ScopedIndex[Resource]
    evaluations: ScopedIndex[Evaluation]
    summary: ImportSummary = field(default_factory=ImportSummary)

    @classmethod
    def from_import_context(cls, context: ImportContext) -> MergeContext:
        existing = context.existing_competencies
        return cls(
            domain_id=context.current_domain.id,
            competencies=build_competency_index(existing),
            sub_competencies=build_sub_competency_indexes(existing),
            resources=build_resource_indexes(existing),
            evaluations=build_evaluation_indexes(existing),
        )
