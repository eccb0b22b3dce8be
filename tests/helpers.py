"""Record builders and a fake client shared by the nscli tests."""

from __future__ import annotations

import datetime as dt
import threading
import time
from collections.abc import Callable

from nscli.models import (
    DeviceStatus,
    Entry,
    EventKind,
    EventType,
    SimpleEvent,
    Treatment,
)

T0 = dt.datetime(2026, 3, 21, 14, 0, tzinfo=dt.UTC)


def make_entry(
    minutes: float,
    glucose: float,
    *,
    source: str = "sgv",
    direction: str | None = "Flat",
    device: str | None = None,
) -> Entry:
    """Build an Entry `minutes` after T0."""
    return Entry(
        timestamp=T0 + dt.timedelta(minutes=minutes),
        glucose=glucose,
        source=source,
        direction=direction,
        device=device,
    )


def make_treatment(
    minutes: float = 0,
    event_type: EventType | None = None,
    **fields,
) -> Treatment:
    """Build a Treatment `minutes` after T0."""
    return Treatment(
        timestamp=T0 + dt.timedelta(minutes=minutes),
        event_type=event_type or SimpleEvent(EventKind.NOTE),
        **fields,
    )


class FakeClient:
    """In-memory RemoteDataClient.

    `errors` maps a resource name to the exception its fetch raises and
    `delays` to seconds slept before returning or raising.
    """

    def __init__(
        self,
        *,
        entries: list[Entry] | None = None,
        treatments: list[Treatment] | None = None,
        device_statuses: list[DeviceStatus] | None = None,
        errors: dict[str, Exception] | None = None,
        delays: dict[str, float] | None = None,
    ):
        self.entries = entries or []
        self.treatments = treatments or []
        self.device_statuses = device_statuses or []
        self.errors = errors or {}
        self.delays = delays or {}
        self.calls: list[tuple[str, int | None]] = []
        self.finished: list[str] = []
        self.closed = False
        self._lock = threading.Lock()

    def _run(self, resource: str, count: int | None, result: Callable[[], list]):
        with self._lock:
            self.calls.append((resource, count))
        time.sleep(self.delays.get(resource, 0))
        try:
            if resource in self.errors:
                raise self.errors[resource]
            return result()
        finally:
            with self._lock:
                self.finished.append(resource)

    def fetch_entries(self, count: int) -> list[Entry]:
        return self._run("entries", count, lambda: self.entries[:count])

    def fetch_treatments(self, count: int) -> list[Treatment]:
        return self._run("treatments", count, lambda: self.treatments[:count])

    def fetch_device_statuses(self) -> list[DeviceStatus]:
        return self._run("devicestatus", None, lambda: list(self.device_statuses))

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> FakeClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
