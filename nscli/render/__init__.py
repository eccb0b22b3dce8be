"""Text rendering of fetched Nightscout data."""

from __future__ import annotations

import datetime as dt
from collections.abc import Callable

import click

from ..fetch import DisplayData
from .devices import enacted_temp_basal_text, render_device_statuses
from .entries import DeltaEntry, recording_deltas, render_entries
from .treatments import detail_description, render_treatments, simple_description

__all__ = [
    "DeltaEntry",
    "detail_description",
    "enacted_temp_basal_text",
    "recording_deltas",
    "render_device_statuses",
    "render_display_data",
    "render_display_lines",
    "render_entries",
    "render_treatments",
    "simple_description",
]


def render_display_lines(data: DisplayData, *, now: dt.datetime | None = None) -> list[str]:
    """Render every requested section, with a blank line between sections."""
    sections = []
    if data.entries is not None:
        sections.append(render_entries(data.entries))
    if data.treatments is not None:
        sections.append(render_treatments(data.treatments))
    if data.device_statuses is not None:
        sections.append(render_device_statuses(data.device_statuses, now=now))

    lines: list[str] = []
    for idx, section in enumerate(sections):
        if idx > 0:
            lines.append("")
        lines.extend(section)
    return lines


def render_display_data(
    data: DisplayData,
    *,
    echo: Callable[[str], None] = click.echo,
    now: dt.datetime | None = None,
) -> None:
    """Print all sections of `data`."""
    for line in render_display_lines(data, now=now):
        echo(line)
