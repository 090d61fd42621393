"""
Base building blocks:
identity and the entity kind contract.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar
from uuid import uuid4

if TYPE_CHECKING:
    from currisync.domain.model.enums import EntityKind


def new_id() -> str:
    return str(uuid4())


@dataclass(eq=False, kw_only=True)
class Entity:
    """Persisted identity. Live entities always carry an id."""

    id: str = field(default_factory=new_id)

    # class-level discriminator; subclasses must override
    ENTITY_KIND: ClassVar[EntityKind]

    @property
    def entity_kind(self) -> EntityKind:
        return self.ENTITY_KIND
