"""Dataclasses for lookup records, result pages, and raw HTTP exchanges."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass(frozen=True)
class LookupResult:
    """A domain name that was seen on the looked-up IP address."""

    name: str
    first_seen: int  # epoch seconds
    last_visit: int  # epoch seconds

    @property
    def first_seen_at(self) -> datetime:
        return datetime.fromtimestamp(self.first_seen, tz=timezone.utc)

    @property
    def last_visit_at(self) -> datetime:
        return datetime.fromtimestamp(self.last_visit, tz=timezone.utc)


@dataclass(frozen=True)
class LookupResponse:
    """One page of Reverse IP/DNS results.

    *size* is the number of records the service reports for this page.
    A page with fewer than ``PAGE_LIMIT`` records is the last one.
    """

    results: tuple[LookupResult, ...] = ()
    current_page: str = ""
    size: int = 0


@dataclass(frozen=True)
class Response:
    """Snapshot of an HTTP exchange with the body read into memory.

    Built for failed calls too, so the bytes that actually arrived can be
    inspected. ``status_code`` is 0 when no status line was received.
    """

    status_code: int = 0
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""
    url: str = ""
    reason: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code <= 299

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")
