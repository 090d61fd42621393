"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from currisync.adapters.data_api import DataApiClient
from currisync.adapters.sqlalchemy import (
    SqlAlchemyHierarchyReader,
    build_stores,
    is_started,
    startup,
)
from currisync.config import ImportConfig, StoreBackend, get_import_config
from currisync.domain.tree_io import (
    DomainImporter,
    ImportContext,
    parse_document,
    render_document,
)

if TYPE_CHECKING:
    from currisync.domain.model import Domain
    from currisync.domain.ports import CurriculumStores, HierarchyReader
    from currisync.domain.tree_io import Document, ImportSummary


log = getLogger(__name__)


@dataclass(slots=True)
class Backend:
    """Reader and stores talking to the same persistence target."""

    reader: HierarchyReader
    stores: CurriculumStores


BackendFactory = Callable[[], AbstractAsyncContextManager[Backend]]


@asynccontextmanager
async def open_backend(config: ImportConfig | None = None) -> AsyncIterator[Backend]:
    """Open the configured backend: local SQLite by default, or the data API."""

    backend = (config or get_import_config()).backend
    if backend is StoreBackend.API:
        async with DataApiClient() as api:
            yield Backend(reader=api, stores=api.stores())
        return

    if not is_started():
        startup()
    yield Backend(reader=SqlAlchemyHierarchyReader(), stores=build_stores())


async def create_domain_async(
    *,
    name: str,
    color_code: str | None = None,
    backend_factory: BackendFactory | None = None,
) -> Domain:
    async with (backend_factory or open_backend)() as backend:
        domain = await backend.stores.domains.create({"name": name, "color_code": color_code})
    log.info("Created domain %s (%s)", domain.id, domain.name)
    return domain


async def export_domain_json_async(
    *,
    domain_id: str,
    backend_factory: BackendFactory | None = None,
) -> str:
    async with (backend_factory or open_backend)() as backend:
        domain = await backend.reader.get_domain(domain_id)
    log.info("Exporting domain %s: competencies=%s", domain.id, domain.competency_count)
    return render_document(domain)


async def import_domain_document_async(
    document: Document,
    *,
    domain_id: str,
    timeout_seconds: float | None = None,
    backend_factory: BackendFactory | None = None,
) -> ImportSummary:
    """Merge ``document`` into the live domain ``domain_id``.

    When ``timeout_seconds`` elapses the import is cancelled and ``TimeoutError``
    is raised; writes applied up to that point stay applied.
    """

    async with (backend_factory or open_backend)() as backend:
        current = await backend.reader.get_domain(domain_id)
        importer = DomainImporter(backend.stores)
        async with asyncio.timeout(timeout_seconds):
            return await importer.import_document(document, ImportContext.from_domain(current))


def create_domain(
    *,
    name: str,
    color_code: str | None = None,
    backend_factory: BackendFactory | None = None,
) -> Domain:
    """Create an empty domain to import into."""

    return asyncio.run(
        create_domain_async(name=name, color_code=color_code, backend_factory=backend_factory)
    )


def export_domain_json(
    *,
    domain_id: str,
    backend_factory: BackendFactory | None = None,
) -> str:
    """Return the pretty-printed JSON export of the live domain ``domain_id``."""

    return asyncio.run(
        export_domain_json_async(domain_id=domain_id, backend_factory=backend_factory)
    )


def import_domain_json(
    raw: str | bytes,
    *,
    domain_id: str,
    timeout_seconds: float | None = None,
    backend_factory: BackendFactory | None = None,
) -> ImportSummary:
    """Parse ``raw`` and merge it into the live domain ``domain_id``.

    Document errors are raised before the backend is opened.
    """

    document = parse_document(raw)
    if timeout_seconds is None:
        timeout_seconds = get_import_config().timeout_seconds

    summary = asyncio.run(
        import_domain_document_async(
            document,
            domain_id=domain_id,
            timeout_seconds=timeout_seconds,
            backend_factory=backend_factory,
        )
    )
    log.info(
        "Finished import: domain_updated=%s, competencies=%s/%s, sub_competencies=%s/%s, "
        "resources=%s/%s, evaluations=%s/%s (created/updated)",
        summary.domain_updated,
        summary.competencies.created,
        summary.competencies.updated,
        summary.sub_competencies.created,
        summary.sub_competencies.updated,
        summary.resources.created,
        summary.resources.updated,
        summary.evaluations.created,
        summary.evaluations.updated,
    )
    return summary
