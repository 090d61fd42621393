"""Remote data API configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, require_env_vars
from .http_resilience import RateLimit, ResilienceConfig

DATA_API_TIMEOUT_SECONDS = 15.0


@dataclass(frozen=True)
class DataApiConfig:
    """Holds data API connection values."""

    base_url: str
    resilience: ResilienceConfig


def _with_trailing_slash(url: str) -> str:
    # httpx joins relative paths onto base_url; keep the last path segment
    return url if url.endswith("/") else f"{url}/"


def get_data_api_config(*, resilience: ResilienceConfig | None = None) -> DataApiConfig:
    values = require_env_vars(("CURRISYNC_API_URL",))
    base_url = _with_trailing_slash(values["CURRISYNC_API_URL"].strip())
    token = optional_env_var("CURRISYNC_API_TOKEN")
    headers = {"Accept": "application/json"}
    if token is not None:
        headers["Authorization"] = f"Bearer {token}"
    return DataApiConfig(
        base_url=base_url,
        resilience=resilience
        or ResilienceConfig(
            name="data-api",
            base_url=base_url,
            timeout_seconds=DATA_API_TIMEOUT_SECONDS,
            ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
            default_headers=headers,
        ),
    )
