"""SQLAlchemy mapping metadata for the curriculum hierarchy."""

from __future__ import annotations

import logging
from enum import StrEnum
from functools import cache
from typing import TYPE_CHECKING, Final

from sqlalchemy import (
    Column,
    Enum,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
    orm,
)
from sqlalchemy.orm import relationship

from currisync.domain.model import (
    Competency,
    Domain,
    Evaluation,
    EvaluationFormat,
    EvaluationMode,
    Resource,
    ResourceType,
    SubCompetency,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

ID_LENGTH: Final[int] = 36


def _enum_column_type(enum_cls: type[StrEnum]) -> Enum:
    # persist the wire values ("PaperPencil"), not the member names
    return Enum(
        enum_cls,
        native_enum=False,
        values_callable=lambda members: [member.value for member in members],
        validate_strings=True,
    )


def _pk_column() -> Column[int]:
    # insertion order for child collections; ids are random
    return Column("pk", Integer, key="_pk", primary_key=True, autoincrement=True)


def _id_column() -> Column[str]:
    return Column("id", String(ID_LENGTH), nullable=False, unique=True)


def _parent_column(name: str, parent_table: str) -> Column[str]:
    return Column(
        name,
        String(ID_LENGTH),
        ForeignKey(f"{parent_table}.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# Core tables -----------------------------------------------------------------

domain_table = Table(
    "domain",
    mapper_registry.metadata,
    _pk_column(),
    _id_column(),
    Column("name", String, nullable=False),
    Column("color_code", String(32), nullable=True),
)

competency_table = Table(
    "competency",
    mapper_registry.metadata,
    _pk_column(),
    _id_column(),
    _parent_column("domain_id", "domain"),
    Column("name", String, nullable=False),
    Column("description", Text, nullable=True),
    Column("objectives", Text, nullable=True),
)

sub_competency_table = Table(
    "sub_competency",
    mapper_registry.metadata,
    _pk_column(),
    _id_column(),
    _parent_column("competency_id", "competency"),
    Column("name", String, nullable=False),
    Column("description", Text, nullable=True),
    Column("objectives", Text, nullable=True),
    Column("level", Integer, nullable=False, default=0),
)

resource_table = Table(
    "resource",
    mapper_registry.metadata,
    _pk_column(),
    _id_column(),
    _parent_column("sub_competency_id", "sub_competency"),
    Column("type", _enum_column_type(ResourceType), nullable=False),
    Column("name", String, nullable=False),
    Column("description", Text, nullable=True),
    Column("url", String, nullable=True),
    Column("file_key", String, nullable=True),
    Column("person_user_id", String(ID_LENGTH), nullable=True),
)

evaluation_table = Table(
    "evaluation",
    mapper_registry.metadata,
    _pk_column(),
    _id_column(),
    _parent_column("sub_competency_id", "sub_competency"),
    Column("name", String, nullable=False),
    Column("description", Text, nullable=True),
    Column("mode", _enum_column_type(EvaluationMode), nullable=False),
    Column("format", _enum_column_type(EvaluationFormat), nullable=False),
    Column("duration_min", Integer, nullable=True),
    Column("url", String, nullable=True),
    Column("file_key", String, nullable=True),
)

TABLE_BY_CLASS: Final[dict[type, Table]] = {
    Domain: domain_table,
    Competency: competency_table,
    SubCompetency: sub_competency_table,
    Resource: resource_table,
    Evaluation: evaluation_table,
}


def _children(target: type, table: Table) -> orm.RelationshipProperty[object]:
    # the whole tree is read eagerly so loaded entities stay usable once detached
    return relationship(target, order_by=table.c._pk, lazy="selectin")  # noqa: SLF001


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the curriculum model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(
        Domain,
        domain_table,
        properties={"competencies": _children(Competency, competency_table)},
    )
    mapper_registry.map_imperatively(
        Competency,
        competency_table,
        properties={"sub_competencies": _children(SubCompetency, sub_competency_table)},
    )
    mapper_registry.map_imperatively(
        SubCompetency,
        sub_competency_table,
        properties={
            "resources": _children(Resource, resource_table),
            "evaluations": _children(Evaluation, evaluation_table),
        },
    )
    mapper_registry.map_imperatively(Resource, resource_table)
    mapper_registry.map_imperatively(Evaluation, evaluation_table)

    orm.configure_mappers()
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
