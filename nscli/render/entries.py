"""Glucose entry rendering."""

from __future__ import annotations

import datetime as dt
from collections.abc import Sequence
from dataclasses import dataclass

from ..constants import DELTA_GAP_MINUTES
from ..formatting import (
    format_date,
    join_columns,
    left_aligned,
    left_aligned_or_spaces,
    max_width,
    right_aligned,
    spaces,
)
from ..models import Entry
from ..utils import format_number

DELTA_GAP = dt.timedelta(minutes=DELTA_GAP_MINUTES)


@dataclass(frozen=True)
class DeltaEntry:
    """An entry paired with its change since the chronologically previous entry."""

    entry: Entry
    delta: float
    time_since_previous: dt.timedelta

    @property
    def delta_text(self) -> str:
        sign = "-" if self.delta < 0 else "+"
        return f"{sign}{format_number(abs(self.delta))}"

    @property
    def shows_delta(self) -> bool:
        # A gap this long means readings were missed and the delta would mislead
        return self.time_since_previous < DELTA_GAP


def recording_deltas(entries: Sequence[Entry]) -> list[DeltaEntry]:
    """Pair each entry with its delta, newest first.

    The oldest entry only seeds the first delta, so the result has one
    element fewer than the input.
    """
    ordered = sorted(entries, key=lambda entry: entry.timestamp)
    deltas = [
        DeltaEntry(
            entry=current,
            delta=current.glucose - previous.glucose,
            time_since_previous=current.timestamp - previous.timestamp,
        )
        for previous, current in zip(ordered, ordered[1:])
    ]
    deltas.reverse()
    return deltas


def render_entries(entries: Sequence[Entry]) -> list[str]:
    """Render fetched entries (requested count + 1) as aligned lines."""
    rows = recording_deltas(entries)
    if not rows:
        return []

    date_width = max_width(rows, lambda row: format_date(row.entry.timestamp)) or 0
    glucose_width = max_width(rows, lambda row: format_number(row.entry.glucose)) or 0
    delta_width = (max_width(rows, lambda row: row.delta_text) or 0) + len("()")
    trend_width = max_width(rows, lambda row: row.entry.trend_symbol) or 0
    device_width = max_width(rows, lambda row: row.entry.device) or 0

    lines = []
    for row in rows:
        if row.shows_delta:
            delta_cell = right_aligned(f"({row.delta_text})", delta_width)
        else:
            delta_cell = spaces(delta_width)
        lines.append(
            join_columns(
                [
                    left_aligned(format_date(row.entry.timestamp), date_width),
                    right_aligned(format_number(row.entry.glucose), glucose_width),
                    delta_cell,
                    left_aligned_or_spaces(row.entry.trend_symbol, trend_width),
                    left_aligned_or_spaces(row.entry.device, device_width),
                ]
            )
        )
    return lines
