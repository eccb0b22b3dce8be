"""Nightscout REST API client."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Protocol, TypeVar

import requests

from .constants import (
    API_SECRET_HEADER,
    DEVICE_STATUS_PATH,
    ENTRIES_PATH,
    HTTP_TIMEOUT_S,
    TREATMENTS_PATH,
)
from .exceptions import FetchError
from .models import (
    DeviceStatus,
    Entry,
    Treatment,
    parse_device_status,
    parse_entry,
    parse_treatment,
)
from .utils import hash_api_secret, is_absolute_url

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RemoteDataClient(Protocol):
    """Fetch operations the orchestrator needs.

    Implementations must allow the three calls to run concurrently on the
    same instance and report failures by raising FetchError.
    """

    def fetch_entries(self, count: int) -> list[Entry]: ...

    def fetch_treatments(self, count: int) -> list[Treatment]: ...

    def fetch_device_statuses(self) -> list[DeviceStatus]: ...


class NightscoutClient:
    """RemoteDataClient backed by a Nightscout site's /api/v1 endpoints."""

    def __init__(
        self,
        base_url: str,
        *,
        api_secret: str | None = None,
        timeout: float = HTTP_TIMEOUT_S,
        session: requests.Session | None = None,
    ):
        if not is_absolute_url(base_url):
            raise FetchError("invalid_url")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.has_api_secret = bool(api_secret)
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json", "User-Agent": "nscli"})
        if api_secret:
            self.session.headers[API_SECRET_HEADER] = hash_api_secret(api_secret)

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> NightscoutClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def fetch_entries(self, count: int) -> list[Entry]:
        """Fetch the most recent `count` glucose entries, newest first.

        Calibration records without a glucose value are dropped, so fewer
        than `count` entries may come back.
        """
        documents = self._get_documents(ENTRIES_PATH, {"count": count})
        entries = _parse_documents(documents, parse_entry)
        return [entry for entry in entries if entry is not None]

    def fetch_treatments(self, count: int) -> list[Treatment]:
        """Fetch the most recent `count` treatments, newest first."""
        documents = self._get_documents(TREATMENTS_PATH, {"count": count})
        return _parse_documents(documents, parse_treatment)

    def fetch_device_statuses(self) -> list[DeviceStatus]:
        """Fetch the most recent device statuses (server default count), newest first."""
        documents = self._get_documents(DEVICE_STATUS_PATH)
        return _parse_documents(documents, parse_device_status)

    def _get_documents(
        self, path: str, params: dict[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        """GET a JSON array from the API.

        Raises:
            FetchError: On transport failure, non-200 status or a body that
                is not a JSON array
        """
        url = f"{self.base_url}{path}"
        logger.debug("GET %s params=%s", url, params)
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise FetchError("fetch_error", str(e)) from e

        logger.debug("GET %s -> %s (%d bytes)", url, response.status_code, len(response.content))

        if response.status_code == 401:
            raise FetchError("unauthorized" if self.has_api_secret else "missing_api_secret")
        if response.status_code != 200:
            raise FetchError("http_error", f"{response.status_code} {response.text}")
        if not response.content:
            raise FetchError("missing_data")

        try:
            data = response.json()
        except ValueError as e:
            raise FetchError("json_parsing_error", str(e)) from e

        if not isinstance(data, list):
            raise FetchError("data_parsing_failure", f"expected a JSON array from {path}")
        return data


def _parse_documents(
    documents: list[dict[str, Any]], parser: Callable[[dict[str, Any]], T]
) -> list[T]:
    try:
        return [parser(document) for document in documents]
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        logger.debug("Failed to parse document: %s", e)
        raise FetchError("data_parsing_failure", str(e)) from e
