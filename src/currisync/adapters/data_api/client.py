"""HTTP entity stores backed by the remote data API."""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Any, Final, cast

import httpx
from pydantic import ValidationError

from currisync.adapters.http_resilience import ResilienceConfig, ResilientClient
from currisync.config import DataApiConfig, get_data_api_config
from currisync.domain.ports import CurriculumStores

from .errors import DataApiError
from .schema import ErrorPayload
from .translator import (
    parse_competency,
    parse_domain,
    parse_evaluation,
    parse_resource,
    parse_sub_competency,
    to_request_body,
)

if TYPE_CHECKING:
    from types import TracebackType

    from currisync.domain.model import (
        Domain,
        DomainCreate,
        DomainUpdate,
        Resource,
        ResourceCreate,
        ResourceUpdate,
    )
    from currisync.domain.ports import DomainStore, EntityStore, HierarchyReader

log = getLogger(__name__)

DOMAINS_PATH: Final[str] = "domains"
COMPETENCIES_PATH: Final[str] = "competencies"
SUB_COMPETENCIES_PATH: Final[str] = "sub-competencies"
RESOURCES_PATH: Final[str] = "resources"
EVALUATIONS_PATH: Final[str] = "evaluations"
HIERARCHY_EXPANSION: Final[str] = "hierarchy"


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


def _error_message(response: httpx.Response) -> str | None:
    try:
        payload = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    if not isinstance(payload, Mapping):
        return None
    try:
        return ErrorPayload.model_validate(payload).message
    except ValidationError:
        return None


@dataclass(slots=True)
class DataApiClient:
    """Session against the data API; use as an async context manager.

    Each store call is one HTTP request. Nothing is batched and no request is
    re-sent after a response, so a failed write is never applied twice.
    """

    config: DataApiConfig = field(default_factory=get_data_api_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )
    _client: ResilientClient | None = field(default=None, init=False, repr=False)

    async def __aenter__(self) -> DataApiClient:
        self._client = self.client_factory(self.config.resilience)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> ResilientClient:
        if self._client is None:
            raise RuntimeError("DataApiClient used outside of its context manager")
        return self._client

    async def send(
        self,
        method: str,
        path: str,
        *,
        body: Mapping[str, object] | None = None,
        params: Mapping[str, str] | None = None,
    ) -> object:
        """Issue one request and return its decoded JSON body."""

        response = await self.client.request(
            method,
            path,
            json=to_request_body(body) if body is not None else None,
            params=httpx.QueryParams(params) if params else None,
        )
        if response.is_error:
            message = _error_message(response)
            if message is not None:
                log.error(
                    "Data API %s %s failed (%s): %s", method, path, response.status_code, message
                )
        response.raise_for_status()

        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise DataApiError(
                f"Data API returned a non-JSON body for {method} {path}",
                status_code=response.status_code,
            ) from exc

    async def get_domain(self, domain_id: str) -> Domain:
        payload = await self.send(
            "GET", f"{DOMAINS_PATH}/{domain_id}", params={"expand": HIERARCHY_EXPANSION}
        )
        domain = parse_domain(payload)
        log.debug("Loaded domain %s with %s competencies", domain.id, domain.competency_count)
        return domain

    async def create_domain(self, data: DomainCreate) -> Domain:
        return await self.domains.create(data)

    @property
    def domains(self) -> RestEntityStore[Domain, DomainCreate, DomainUpdate]:
        return RestEntityStore(self, DOMAINS_PATH, parse_domain)

    def stores(self) -> CurriculumStores:
        """Bundle one REST store per entity kind over this session."""

        return CurriculumStores(
            domains=self.domains,
            competencies=RestEntityStore(self, COMPETENCIES_PATH, parse_competency),
            sub_competencies=RestEntityStore(self, SUB_COMPETENCIES_PATH, parse_sub_competency),
            resources=RestEntityStore(self, RESOURCES_PATH, parse_resource),
            evaluations=RestEntityStore(self, EVALUATIONS_PATH, parse_evaluation),
        )


@dataclass
class RestEntityStore[TEntity, TCreate, TUpdate]:
    """Create with ``POST {path}`` and update with ``PATCH {path}/{id}``."""

    api: DataApiClient
    path: str
    parse: Callable[[object], TEntity]

    async def create(self, data: TCreate) -> TEntity:
        payload = await self.api.send("POST", self.path, body=cast(Mapping[str, Any], data))
        return self.parse(payload)

    async def update(self, entity_id: str, data: TUpdate) -> TEntity:
        payload = await self.api.send(
            "PATCH", f"{self.path}/{entity_id}", body=cast(Mapping[str, Any], data)
        )
        return self.parse(payload)


if TYPE_CHECKING:
    _reader_check: HierarchyReader = DataApiClient()
    _domain_store_check: DomainStore = DataApiClient().domains
    _store_check: EntityStore[Resource, ResourceCreate, ResourceUpdate] = RestEntityStore(
        DataApiClient(), RESOURCES_PATH, parse_resource
    )
