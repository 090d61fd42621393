from __future__ import annotations

import asyncio
import json
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import pytest

from currisync import app as app_module
from currisync.adapters.sqlalchemy import SqlAlchemyEntityStore, SqlAlchemyHierarchyReader
from currisync.app import Backend, create_domain, export_domain_json, import_domain_json
from currisync.domain.tree_io import InvalidDocumentShapeError, MalformedDocumentError
from tests.support.curriculum import FakeCurriculum

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from sqlalchemy.engine import Engine

    from currisync.domain.model import Domain
    from currisync.app import BackendFactory


class _FakeReader:
    def __init__(self, domain: Domain) -> None:
        self.domain = domain

    async def get_domain(self, domain_id: str) -> Domain:
        assert domain_id == self.domain.id
        return self.domain


def _factory(curriculum: FakeCurriculum) -> BackendFactory:
    @asynccontextmanager
    async def open_fake() -> AsyncIterator[Backend]:
        yield Backend(reader=_FakeReader(curriculum.domain), stores=curriculum.stores())

    return open_fake


def test_import_domain_json_merges_into_requested_domain(curriculum: FakeCurriculum) -> None:
    raw = json.dumps({"domain": {"name": "Science"}, "competencies": [{"name": "Physics"}]})

    summary = import_domain_json(raw, domain_id="d1", backend_factory=_factory(curriculum))

    assert summary.competencies.created == 1
    assert curriculum.calls[0].data["domain_id"] == "d1"


def test_import_rejects_documents_before_opening_backend(curriculum: FakeCurriculum) -> None:
    opened: list[bool] = []

    @asynccontextmanager
    async def tracking() -> AsyncIterator[Backend]:
        opened.append(True)
        yield Backend(reader=_FakeReader(curriculum.domain), stores=curriculum.stores())

    with pytest.raises(MalformedDocumentError):
        import_domain_json("{oops", domain_id="d1", backend_factory=tracking)
    with pytest.raises(InvalidDocumentShapeError):
        import_domain_json('{"domain": {}}', domain_id="d1", backend_factory=tracking)

    assert opened == []


def test_import_timeout_cancels_the_merge(curriculum: FakeCurriculum) -> None:
    class SlowStore:
        async def create(self, data: object) -> object:
            await asyncio.sleep(5)
            raise AssertionError("should have been cancelled")

        async def update(self, entity_id: str, data: object) -> object:
            await asyncio.sleep(5)
            raise AssertionError("should have been cancelled")

    @asynccontextmanager
    async def slow_backend() -> AsyncIterator[Backend]:
        stores = curriculum.stores()
        stores.competencies = SlowStore()  # type: ignore[assignment]
        yield Backend(reader=_FakeReader(curriculum.domain), stores=stores)

    raw = json.dumps({"domain": {"name": "Science"}, "competencies": [{"name": "Physics"}]})

    with pytest.raises(TimeoutError):
        import_domain_json(raw, domain_id="d1", timeout_seconds=0.05, backend_factory=slow_backend)


def test_export_domain_json_renders_live_tree(curriculum: FakeCurriculum) -> None:
    rendered = export_domain_json(domain_id="d1", backend_factory=_factory(curriculum))

    payload = json.loads(rendered)
    assert payload["domain"] == {"id": "d1", "name": "Science", "colorCode": "#00AAFF"}
    assert payload["competencies"][0]["subCompetencies"][0]["resources"][0]["id"] == "r1"


def test_local_backend_round_trip(sqlite_stores: Engine, monkeypatch: pytest.MonkeyPatch) -> None:
    _ = sqlite_stores
    monkeypatch.delenv("CURRISYNC_BACKEND", raising=False)
    monkeypatch.delenv("CURRISYNC_IMPORT_TIMEOUT", raising=False)

    domain = create_domain(name="Science", color_code=None)
    summary = import_domain_json(
        json.dumps(
            {
                "domain": {"name": "Science", "colorCode": "#112233"},
                "competencies": [{"name": "Bio", "subCompetencies": [{"name": "Cells"}]}],
            }
        ),
        domain_id=domain.id,
    )
    rendered = export_domain_json(domain_id=domain.id)

    assert summary.domain_updated
    assert summary.sub_competencies.created == 1
    payload = json.loads(rendered)
    assert payload["domain"]["colorCode"] == "#112233"
    assert payload["competencies"][0]["subCompetencies"][0]["name"] == "Cells"


def test_open_backend_uses_sqlalchemy_by_default(
    sqlite_stores: Engine, monkeypatch: pytest.MonkeyPatch
) -> None:
    _ = sqlite_stores
    monkeypatch.delenv("CURRISYNC_BACKEND", raising=False)

    async def scenario() -> Backend:
        async with app_module.open_backend() as backend:
            return backend

    backend = asyncio.run(scenario())

    assert isinstance(backend.reader, SqlAlchemyHierarchyReader)
    assert isinstance(backend.stores.domains, SqlAlchemyEntityStore)


def test_import_timeout_interrupts_local_store(
    sqlite_stores: Engine, monkeypatch: pytest.MonkeyPatch
) -> None:
    _ = sqlite_stores
    monkeypatch.delenv("CURRISYNC_BACKEND", raising=False)
    domain = create_domain(name="Science")
    raw = json.dumps(
        {
            "domain": {"name": "Science"},
            "competencies": [{"name": f"Competency {n}"} for n in range(400)],
        }
    )

    with pytest.raises(TimeoutError):
        import_domain_json(raw, domain_id=domain.id, timeout_seconds=0.001)

    payload = json.loads(export_domain_json(domain_id=domain.id))
    assert payload["domain"]["id"] == domain.id
    assert len(payload["competencies"]) < 400
