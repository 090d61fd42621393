"""Identity maps over the live hierarchy, one per nesting level.

Nested levels are scoped under their parent id: a sub-competency id is only
looked up among the sub-competencies of the competency currently being merged,
and resources/evaluations among those of their sub-competency.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from currisync.domain.model import Entity

if TYPE_CHECKING:
    from collections.abc import Iterable

    from currisync.domain.model import Competency, Evaluation, Resource, SubCompetency


type IdentityMap[TEntity: Entity] = dict[str, TEntity]


def _identity_map[TEntity: Entity](entities: Iterable[TEntity]) -> IdentityMap[TEntity]:
    return {entity.id: entity for entity in entities}


@dataclass
class ScopedIndex[TEntity: Entity]:
    """Identity maps keyed by parent id."""

    _maps: dict[str, IdentityMap[TEntity]] = field(
        default_factory=dict[str, "IdentityMap[TEntity]"], repr=False
    )

    def scope(self, parent_id: str) -> IdentityMap[TEntity]:
        """Return the map for ``parent_id``, creating an empty one on first access.

        Parents created earlier in the same import pass have no live children,
        so their map starts empty and fills as children are created.
        """
        if parent_id not in self._maps:
            self._maps[parent_id] = {}
        return self._maps[parent_id]

    def seed(self, parent_id: str, entities: Iterable[TEntity]) -> None:
        self.scope(parent_id).update(_identity_map(entities))

    def __contains__(self, parent_id: object) -> bool:
        return parent_id in self._maps

    @property
    def parent_ids(self) -> tuple[str, ...]:
        return tuple(self._maps)


def build_competency_index(existing: Iterable[Competency]) -> IdentityMap[Competency]:
    return _identity_map(existing)


def build_sub_competency_indexes(existing: Iterable[Competency]) -> ScopedIndex[SubCompetency]:
    """Map every known competency id to the identity map of its sub-competencies."""

    index: ScopedIndex[SubCompetency] = ScopedIndex()
    for competency in existing:
        index.seed(competency.id, competency.sub_competencies)
    return index


def build_resource_indexes(existing: Iterable[Competency]) -> ScopedIndex[Resource]:
    index: ScopedIndex[Resource] = ScopedIndex()
    for competency in existing:
        for sub in competency.sub_competencies:
            index.seed(sub.id, sub.resources)
    return index


def build_evaluation_indexes(existing: Iterable[Competency]) -> ScopedIndex[Evaluation]:
    index: ScopedIndex[Evaluation] = ScopedIndex()
    for competency in existing:
        for sub in competency.sub_competencies:
            index.seed(sub.id, sub.evaluations)
    return index
