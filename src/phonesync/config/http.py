"""Configuration types for the HTTP change-log source."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .env import float_env_var, int_env_var

if TYPE_CHECKING:
    from collections.abc import Mapping

DEFAULT_TIMEOUT_SECONDS = 30.0


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    total: int = 4
    backoff_factor: float = 0.5
    max_backoff_wait: float = 60.0
    respect_retry_after_header: bool = True
    status_forcelist: frozenset[int] = field(
        default_factory=lambda: frozenset({429, 500, 502, 503, 504})
    )
    backoff_jitter: float = 1.0


@dataclass(slots=True, frozen=True)
class HttpConfig:
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    default_headers: Mapping[str, str] | None = None


def get_http_config() -> HttpConfig:
    return HttpConfig(
        timeout_seconds=float_env_var("PHONESYNC_HTTP_TIMEOUT", DEFAULT_TIMEOUT_SECONDS),
        retry=RetryPolicy(total=int_env_var("PHONESYNC_HTTP_RETRIES", RetryPolicy().total)),
    )
