from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy.engine import Engine  # noqa: TC002

from currisync.adapters.sqlalchemy import build_engine, shutdown, start_mappers, startup
from currisync.adapters.sqlalchemy.mappings import create_all_tables
from tests.support.curriculum import FakeCurriculum, science_domain

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Iterator

    from currisync.domain.model import Domain


@pytest.fixture
def live_domain() -> Domain:
    return science_domain()


@pytest.fixture
def curriculum(live_domain: Domain) -> FakeCurriculum:
    return FakeCurriculum(live_domain)


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = build_engine("sqlite+pysqlite:///:memory:")
    start_mappers()
    create_all_tables(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_stores(sqlite_engine: Engine) -> Iterator[Engine]:
    """Start the adapter on the in-memory engine for the duration of a test."""

    startup(engine=sqlite_engine, force=True)
    try:
        yield sqlite_engine
    finally:
        shutdown()
