"""Entity stores backed by SQLAlchemy sessions.

Every store call opens its own session and commits before returning, so each
write stands alone exactly like a call against the remote data API. The blocking
session work runs in a worker thread; the awaiting import can be cancelled or
timed out between writes.
"""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import select

from currisync.domain.model import Competency, Domain, Evaluation, Resource, SubCompetency
from currisync.domain.ports import CurriculumStores

from .mappings import TABLE_BY_CLASS, domain_table
from .session import session_factory

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sqlalchemy.orm import Session, sessionmaker

    from currisync.domain.model import (
        DomainCreate,
        Entity,
        ResourceCreate,
        ResourceUpdate,
    )
    from currisync.domain.ports import DomainStore, EntityStore, HierarchyReader

log = getLogger(__name__)


class EntityNotFoundError(LookupError):
    """Raised when an update targets an id the database does not hold."""

    def __init__(self, entity_cls: type, entity_id: str) -> None:
        super().__init__(f"{entity_cls.__name__} {entity_id} not found")
        self.entity_id = entity_id


def _load[TEntity: Entity](session: Session, entity_cls: type[TEntity], entity_id: str) -> TEntity:
    table = TABLE_BY_CLASS[entity_cls]
    stmt = select(entity_cls).where(table.c.id == entity_id)
    entity = session.execute(stmt).scalar_one_or_none()
    if entity is None:
        raise EntityNotFoundError(entity_cls, entity_id)
    return entity


class SqlAlchemyEntityStore[TEntity: Entity, TCreate, TUpdate]:
    """Create/update one mapped entity kind, one commit per call."""

    def __init__(
        self,
        entity_cls: type[TEntity],
        *,
        sessions: sessionmaker[Session] | None = None,
    ) -> None:
        self.entity_cls = entity_cls
        self.sessions = sessions or session_factory()

    async def create(self, data: TCreate) -> TEntity:
        return await asyncio.to_thread(self._create, cast("Mapping[str, Any]", data))

    async def update(self, entity_id: str, data: TUpdate) -> TEntity:
        return await asyncio.to_thread(self._update, entity_id, cast("Mapping[str, Any]", data))

    def _create(self, fields: Mapping[str, Any]) -> TEntity:
        with self.sessions() as session:
            entity = self.entity_cls(**fields)
            session.add(entity)
            session.commit()
            log.debug("Inserted %s %s", self.entity_cls.__name__, entity.id)
            return entity

    def _update(self, entity_id: str, fields: Mapping[str, Any]) -> TEntity:
        with self.sessions() as session:
            entity = _load(session, self.entity_cls, entity_id)
            for name, value in fields.items():
                setattr(entity, name, value)
            session.commit()
            log.debug("Updated %s %s", self.entity_cls.__name__, entity_id)
            return entity


class SqlAlchemyHierarchyReader:
    def __init__(self, *, sessions: sessionmaker[Session] | None = None) -> None:
        self.sessions = sessions or session_factory()

    async def get_domain(self, domain_id: str) -> Domain:
        return await asyncio.to_thread(self._get_domain, domain_id)

    def _get_domain(self, domain_id: str) -> Domain:
        with self.sessions() as session:
            stmt = select(Domain).where(domain_table.c.id == domain_id)
            domain = session.execute(stmt).scalar_one_or_none()
            if domain is None:
                raise EntityNotFoundError(Domain, domain_id)
            return domain

    async def create_domain(self, data: DomainCreate) -> Domain:
        return await SqlAlchemyEntityStore(Domain, sessions=self.sessions).create(data)


def build_stores(*, sessions: sessionmaker[Session] | None = None) -> CurriculumStores:
    """Bundle one store per entity kind sharing ``sessions``."""

    factory = sessions or session_factory()
    return CurriculumStores(
        domains=SqlAlchemyEntityStore(Domain, sessions=factory),
        competencies=SqlAlchemyEntityStore(Competency, sessions=factory),
        sub_competencies=SqlAlchemyEntityStore(SubCompetency, sessions=factory),
        resources=SqlAlchemyEntityStore(Resource, sessions=factory),
        evaluations=SqlAlchemyEntityStore(Evaluation, sessions=factory),
    )


if TYPE_CHECKING:
    _reader_check: HierarchyReader = SqlAlchemyHierarchyReader()
    _domain_store_check: DomainStore = SqlAlchemyEntityStore(Domain)
    _store_check: EntityStore[Resource, ResourceCreate, ResourceUpdate] = SqlAlchemyEntityStore(
        Resource
    )
