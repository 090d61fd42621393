"""Defaults for tree document imports."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import StrEnum

from .env import optional_positive_float
from .errors import ConfigurationError


class StoreBackend(StrEnum):
    LOCAL = "local"
    API = "api"


@dataclass(frozen=True, slots=True)
class ImportConfig:
    backend: StoreBackend = StoreBackend.LOCAL
    timeout_seconds: float | None = None


def _backend_from_env() -> StoreBackend:
    raw = (os.getenv("CURRISYNC_BACKEND") or StoreBackend.LOCAL.value).strip().lower()
    try:
        return StoreBackend(raw)
    except ValueError as exc:
        choices = ", ".join(member.value for member in StoreBackend)
        raise ConfigurationError(f"CURRISYNC_BACKEND must be one of: {choices}") from exc


def get_import_config() -> ImportConfig:
    return ImportConfig(
        backend=_backend_from_env(),
        timeout_seconds=optional_positive_float("CURRISYNC_IMPORT_TIMEOUT"),
    )
