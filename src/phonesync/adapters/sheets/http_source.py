"""Sheet source fetching the CSV export over HTTP (e.g. a spreadsheet export link)."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from httpx_retries import Retry, RetryTransport

from phonesync.config.http import HttpConfig, RetryPolicy, get_http_config
from phonesync.domain.errors import SourceError

from .csv_source import SHEET_COLUMNS, SheetColumns, parse_sheet_csv

if TYPE_CHECKING:
    from collections.abc import Callable

    from phonesync.domain.model import ChangeRow

log = getLogger(__name__)


def build_retry(policy: RetryPolicy) -> Retry:
    return Retry(
        total=policy.total,
        backoff_factor=policy.backoff_factor,
        max_backoff_wait=policy.max_backoff_wait,
        respect_retry_after_header=policy.respect_retry_after_header,
        allowed_methods=("GET", "HEAD"),
        status_forcelist=tuple(policy.status_forcelist),
        retry_on_exceptions=(
            httpx.TimeoutException,
            httpx.NetworkError,
            httpx.RemoteProtocolError,
        ),
        backoff_jitter=policy.backoff_jitter,
    )


def _default_client_factory(config: HttpConfig) -> httpx.Client:
    return httpx.Client(
        timeout=config.timeout_seconds,
        transport=RetryTransport(retry=build_retry(config.retry)),
        headers=dict(config.default_headers) if config.default_headers else None,
        follow_redirects=True,
    )


@dataclass(slots=True)
class HttpSheetSource:
    url: str
    columns: SheetColumns = field(default=SHEET_COLUMNS)
    config: HttpConfig = field(default_factory=get_http_config)
    client_factory: Callable[[HttpConfig], httpx.Client] = field(default=_default_client_factory)

    def load_rows(self) -> list[ChangeRow]:
        log.info("Fetching change-log from %s", self.url)
        with self.client_factory(self.config) as client:
            try:
                response = client.get(self.url)
                response.raise_for_status()
            except httpx.HTTPError as exc:
                raise SourceError(
                    f"Cannot fetch change-log from {self.url}: {exc}", location=self.url
                ) from exc
            text = response.text
        return parse_sheet_csv(text, columns=self.columns)


if TYPE_CHECKING:
    from phonesync.domain.ports.sources import ChangeRowSource

    _source_check: ChangeRowSource = HttpSheetSource("https://example.invalid/sheet.csv")
