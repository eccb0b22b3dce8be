"""Device status rendering: one line each for the loop, the pump and the uploader."""

from __future__ import annotations

import datetime as dt
from collections.abc import Sequence
from typing import Any

from ..formatting import format_date, join_columns, left_aligned, max_width
from ..models import ClosedLoopSystem, DeviceStatus, EnactedTemporaryBasal, LoopStatus
from ..utils import format_number, utc_now


def _first_with(
    statuses: Sequence[DeviceStatus], attribute: str
) -> tuple[DeviceStatus, ClosedLoopSystem, Any] | None:
    for status in statuses:
        system = status.closed_loop_system
        sub_status = getattr(system, attribute, None)
        if sub_status is not None:
            return status, system, sub_status
    return None


def enacted_temp_basal_text(temp: EnactedTemporaryBasal, now: dt.datetime) -> str | None:
    """Describe a temp basal that is still running, or None once it has expired."""
    elapsed = now - temp.start
    remaining = dt.timedelta(minutes=temp.duration_minutes) - elapsed
    if remaining <= dt.timedelta(0):
        return None
    remaining_minutes = int(remaining.total_seconds() // 60)
    return f"enacted: {float(temp.rate)}U/hr, {remaining_minutes}min remaining"


def _loop_pieces(loop: LoopStatus, now: dt.datetime) -> list[str | None]:
    temp = loop.enacted_temporary_basal
    return [
        f"{loop.insulin_on_board:.2f}U IOB" if loop.insulin_on_board is not None else None,
        f"{format_number(loop.carbs_on_board)}g COB" if loop.carbs_on_board is not None else None,
        enacted_temp_basal_text(temp, now) if temp is not None else None,
    ]


def render_device_statuses(
    statuses: Sequence[DeviceStatus], *, now: dt.datetime | None = None
) -> list[str]:
    """Render the newest loop, pump and uploader status found in `statuses`.

    For each sub-system only the first status (in fetch order) that reports
    on it is used. The uploader line is skipped without a battery percentage.
    """
    if not statuses:
        return []
    now = now or utc_now()

    # (label, timestamp, detail pieces) per emitted line
    rows: list[tuple[str, dt.datetime, list[str | None]]] = []

    found = _first_with(statuses, "loop_status")
    if found is not None:
        status, system, loop = found
        rows.append((system.name, loop.timestamp or status.timestamp, _loop_pieces(loop, now)))

    found = _first_with(statuses, "pump_status")
    if found is not None:
        status, _, pump = found
        rows.append(
            (
                "Pump",
                status.timestamp,
                [
                    f"{pump.reservoir:.1f}U remaining" if pump.reservoir is not None else None,
                    "low" if pump.battery_low else None,
                    "suspended" if pump.suspended else None,
                ],
            )
        )

    found = _first_with(statuses, "uploader_status")
    if found is not None:
        status, _, uploader = found
        if uploader.battery_percentage is not None:
            rows.append(
                ("Uploader", status.timestamp, [f"{uploader.battery_percentage}% remaining"])
            )

    label_width = max_width(rows, lambda row: row[0]) or 0
    return [
        join_columns(
            [format_date(timestamp), left_aligned(label, label_width)]
            + [piece for piece in pieces if piece is not None]
        )
        for label, timestamp, pieces in rows
    ]
