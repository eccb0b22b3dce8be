"""Treatment rendering."""

from __future__ import annotations

from collections.abc import Sequence

from ..constants import CARBS_LABEL, DURATION_LABEL, INSULIN_LABEL
from ..formatting import (
    format_date,
    join_columns,
    left_aligned,
    left_aligned_or_spaces,
    max_width,
    right_aligned_or_spaces,
)
from ..models import (
    Bolus,
    BolusKind,
    EventType,
    ProfileSwitch,
    SimpleEvent,
    TemporaryBasal,
    TempBasalKind,
    Treatment,
    UnknownEvent,
)
from ..utils import format_number


def simple_description(event_type: EventType) -> str:
    """Short label for a treatment's event type."""
    if isinstance(event_type, SimpleEvent):
        return event_type.kind.value
    if isinstance(event_type, Bolus):
        return f"{event_type.kind.value} Bolus"
    if isinstance(event_type, TemporaryBasal):
        if event_type.kind is TempBasalKind.ENDED:
            return "Temp Basal Ended"
        return "Temp Basal"
    if isinstance(event_type, ProfileSwitch):
        return "Profile Switch"
    if isinstance(event_type, UnknownEvent):
        return event_type.description
    raise TypeError(f"unhandled event type: {event_type!r}")


def detail_description(event_type: EventType) -> str | None:
    """Extra detail for combo boluses, temp basals and profile switches."""
    if isinstance(event_type, Bolus):
        if (
            event_type.kind is BolusKind.COMBO
            and event_type.total_insulin is not None
            and event_type.percentage_up_front is not None
        ):
            up_front = event_type.percentage_up_front
            return f"{event_type.total_insulin:.2f}U {up_front}%/{100 - up_front}%"
        return None
    if isinstance(event_type, TemporaryBasal):
        if event_type.value is None:
            return None
        if event_type.kind is TempBasalKind.ABSOLUTE:
            return f"{event_type.value:.3f}U/hr"
        if event_type.kind is TempBasalKind.PERCENTAGE:
            return f"{format_number(event_type.value)}%"
        return None
    if isinstance(event_type, ProfileSwitch):
        return event_type.profile_name
    return None


def _duration_text(treatment: Treatment) -> str | None:
    if treatment.duration_minutes is None:
        return None
    minutes = int(treatment.duration_minutes)
    if minutes <= 0:
        return None
    return f"{minutes}{DURATION_LABEL}"


def _glucose_text(treatment: Treatment) -> str | None:
    if treatment.glucose is None:
        return None
    return format_number(treatment.glucose)


def _insulin_text(treatment: Treatment) -> str | None:
    if treatment.insulin is None:
        return None
    return f"{format_number(treatment.insulin)}{INSULIN_LABEL}"


def _carbs_text(treatment: Treatment) -> str | None:
    if treatment.carbs is None:
        return None
    return f"{format_number(treatment.carbs)}{CARBS_LABEL}"


def render_treatments(treatments: Sequence[Treatment]) -> list[str]:
    """Render treatments in the order given.

    Optional columns that no treatment fills are left out of every row.
    """
    if not treatments:
        return []

    date_width = max_width(treatments, lambda t: format_date(t.timestamp)) or 0
    simple_width = max_width(treatments, lambda t: simple_description(t.event_type)) or 0
    detail_width = max_width(treatments, lambda t: detail_description(t.event_type)) or 0
    duration_width = max_width(treatments, _duration_text) or 0
    glucose_width = max_width(treatments, _glucose_text) or 0
    insulin_width = max_width(treatments, _insulin_text) or 0
    carbs_width = max_width(treatments, _carbs_text) or 0
    recorder_width = max_width(treatments, lambda t: t.recorder) or 0

    lines = []
    for treatment in treatments:
        cells = [
            left_aligned(format_date(treatment.timestamp), date_width),
            left_aligned(simple_description(treatment.event_type), simple_width),
            left_aligned_or_spaces(detail_description(treatment.event_type), detail_width),
            right_aligned_or_spaces(_duration_text(treatment), duration_width),
            right_aligned_or_spaces(_glucose_text(treatment), glucose_width),
            right_aligned_or_spaces(_insulin_text(treatment), insulin_width),
            right_aligned_or_spaces(_carbs_text(treatment), carbs_width),
            left_aligned_or_spaces(treatment.recorder, recorder_width),
        ]
        lines.append(join_columns(cell for cell in cells if cell))
    return lines
