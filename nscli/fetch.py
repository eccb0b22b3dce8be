"""Concurrent fetch of everything a FetchPlan asks for."""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any

from .client import RemoteDataClient
from .exceptions import FetchError
from .models import DeviceStatus, Entry, Treatment
from .options import FetchPlan

logger = logging.getLogger(__name__)

# Errors are reported for the first failed resource in this order,
# whichever finished first.
RESOURCE_ORDER = ("entries", "treatments", "devicestatus")


@dataclass(frozen=True)
class DisplayData:
    """Fetched records to render. None means "not requested"."""

    entries: list[Entry] | None = None
    treatments: list[Treatment] | None = None
    device_statuses: list[DeviceStatus] | None = None


def _jobs_for_plan(plan: FetchPlan, client: RemoteDataClient) -> dict[str, Callable[[], Any]]:
    jobs: dict[str, Callable[[], Any]] = {}
    if plan.entry_count is not None:
        # One extra entry seeds the delta of the oldest displayed entry
        entry_count = plan.entry_count + 1
        jobs["entries"] = lambda: client.fetch_entries(entry_count)
    if plan.treatment_count is not None:
        treatment_count = plan.treatment_count
        jobs["treatments"] = lambda: client.fetch_treatments(treatment_count)
    if plan.include_device_statuses:
        jobs["devicestatus"] = client.fetch_device_statuses
    return jobs


def _result_or_raise(resource: str, future: Future) -> Any:
    error = future.exception()
    if error is None:
        return future.result()
    logger.debug("Fetch of %s failed: %s", resource, error)
    if isinstance(error, FetchError):
        error.resource = resource
        raise error
    raise FetchError("fetch_error", str(error), resource=resource) from error


def fetch_display_data(plan: FetchPlan, client: RemoteDataClient) -> DisplayData:
    """Run the plan's fetches in parallel and bundle the results.

    Every launched fetch runs to completion before this returns. If any
    fetch failed, the error of the first failed resource in RESOURCE_ORDER
    is raised and nothing is returned.

    Raises:
        FetchError: For the first failed resource
    """
    jobs = _jobs_for_plan(plan, client)
    if not jobs:
        return DisplayData()

    logger.debug("Fetching %s", ", ".join(jobs))
    with ThreadPoolExecutor(max_workers=len(jobs)) as executor:
        futures = {resource: executor.submit(job) for resource, job in jobs.items()}
    # Leaving the executor block waits for all futures.

    results = {
        resource: _result_or_raise(resource, futures[resource])
        for resource in RESOURCE_ORDER
        if resource in futures
    }
    return DisplayData(
        entries=results.get("entries"),
        treatments=results.get("treatments"),
        device_statuses=results.get("devicestatus"),
    )
