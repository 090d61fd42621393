"""Public interface for the data API adapter."""

from __future__ import annotations

from .client import DataApiClient, RestEntityStore
from .errors import DataApiError
from .schema import DomainPayload
from .translator import parse_domain, to_request_body

__all__ = [
    "DataApiClient",
    "DataApiError",
    "DomainPayload",
    "RestEntityStore",
    "parse_domain",
    "to_request_body",
]
