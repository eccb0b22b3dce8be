"""Typed records for Nightscout entries, treatments and device statuses.

The parse_* functions turn the JSON documents served by the Nightscout REST
API into these records. They raise ValueError (or KeyError/TypeError) on
documents they cannot make sense of; the client reports those as data
parsing failures.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .constants import TREND_NUMBERS, TREND_SYMBOLS
from .utils import parse_timestamp


def _require_timestamp(raw: dict[str, Any], *keys: str) -> dt.datetime:
    for key in keys:
        timestamp = parse_timestamp(raw.get(key))
        if timestamp is not None:
            return timestamp
    raise ValueError(f"missing timestamp (looked for {', '.join(keys)})")


def _optional_float(value: Any) -> float | None:
    if value is None or value == "" or isinstance(value, bool):
        return None
    return float(value)


def _optional_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


# Entries


@dataclass(frozen=True)
class Entry:
    """One glucose reading."""

    timestamp: dt.datetime
    glucose: float
    source: str
    direction: str | None = None
    device: str | None = None

    @property
    def is_sensor(self) -> bool:
        return self.source == "sgv"

    @property
    def trend_symbol(self) -> str | None:
        """Arrow for sensor readings; None for meter and other readings."""
        if not self.is_sensor:
            return None
        return TREND_SYMBOLS.get(self.direction or "NONE", "")


def parse_entry(raw: dict[str, Any]) -> Entry | None:
    """Parse an /api/v1/entries document.

    Sensor ("sgv") and meter ("mbg") documents must carry a glucose value.
    Any other type is a calibration record, which is kept as a non-sensor
    reading when it has a value and skipped (None) when it only carries
    slope/intercept data.
    """
    source = raw.get("type") or "sgv"
    if source == "sgv":
        value = raw.get("sgv")
    else:
        value = raw.get("mbg", raw.get("sgv"))
    if value is None:
        if source not in ("sgv", "mbg"):
            return None
        raise ValueError(f"entry of type {source!r} has no glucose value")
    direction = raw.get("direction")
    if direction is None and isinstance(raw.get("trend"), int):
        direction = TREND_NUMBERS.get(raw["trend"])
    return Entry(
        timestamp=_require_timestamp(raw, "date", "dateString"),
        glucose=float(value),
        source=source,
        direction=direction,
        device=_optional_str(raw.get("device")),
    )


# Treatments


class EventKind(Enum):
    """Treatment event types that carry no extra data."""

    BG_CHECK = "BG Check"
    CARB_CORRECTION = "Carb Correction"
    ANNOUNCEMENT = "Announcement"
    NOTE = "Note"
    QUESTION = "Question"
    EXERCISE = "Exercise"
    SUSPEND_PUMP = "Suspend Pump"
    RESUME_PUMP = "Resume Pump"
    SITE_CHANGE = "Site Change"
    INSULIN_CHANGE = "Insulin Change"
    SENSOR_START = "Sensor Start"
    SENSOR_CHANGE = "Sensor Change"
    DAD_ALERT = "D.A.D. Alert"
    NONE = "<none>"


class BolusKind(Enum):
    SNACK = "Snack"
    MEAL = "Meal"
    CORRECTION = "Correction"
    COMBO = "Combo"


class TempBasalKind(Enum):
    PERCENTAGE = "percentage"
    ABSOLUTE = "absolute"
    ENDED = "ended"


@dataclass(frozen=True)
class SimpleEvent:
    kind: EventKind


@dataclass(frozen=True)
class Bolus:
    """A bolus; combo boluses also carry the up-front/extended split."""

    kind: BolusKind
    total_insulin: float | None = None
    percentage_up_front: int | None = None


@dataclass(frozen=True)
class TemporaryBasal:
    """A temp basal as an absolute rate (U/hr) or a percentage, or its end."""

    kind: TempBasalKind
    value: float | None = None


@dataclass(frozen=True)
class ProfileSwitch:
    profile_name: str | None = None


@dataclass(frozen=True)
class UnknownEvent:
    description: str


EventType = SimpleEvent | Bolus | TemporaryBasal | ProfileSwitch | UnknownEvent

_SIMPLE_EVENTS = {kind.value: kind for kind in EventKind}
_BOLUS_EVENTS = {f"{kind.value} Bolus": kind for kind in BolusKind}


@dataclass(frozen=True)
class Treatment:
    """One logged treatment event."""

    timestamp: dt.datetime
    event_type: EventType
    duration_minutes: float | None = None
    glucose: float | None = None
    insulin: float | None = None
    carbs: float | None = None
    recorder: str | None = None
    notes: str | None = None


def parse_event_type(raw: dict[str, Any]) -> EventType:
    """Map a treatment's eventType string (plus its payload) onto EventType."""
    name = raw.get("eventType")
    if not name:
        return SimpleEvent(EventKind.NONE)
    if name in _SIMPLE_EVENTS:
        return SimpleEvent(_SIMPLE_EVENTS[name])
    if name in _BOLUS_EVENTS:
        kind = _BOLUS_EVENTS[name]
        if kind is not BolusKind.COMBO:
            return Bolus(kind)
        total = _optional_float(raw.get("enteredinsulin", raw.get("insulin")))
        split_now = _optional_float(raw.get("splitNow"))
        return Bolus(
            kind,
            total_insulin=total,
            percentage_up_front=int(split_now) if split_now is not None else None,
        )
    if name == "Temp Basal":
        if _optional_float(raw.get("duration")) == 0:
            return TemporaryBasal(TempBasalKind.ENDED)
        absolute = _optional_float(raw.get("absolute", raw.get("rate")))
        percent = _optional_float(raw.get("percent"))
        if absolute is not None:
            return TemporaryBasal(TempBasalKind.ABSOLUTE, absolute)
        if percent is not None:
            return TemporaryBasal(TempBasalKind.PERCENTAGE, percent)
        return TemporaryBasal(TempBasalKind.ENDED)
    if name == "Profile Switch":
        return ProfileSwitch(_optional_str(raw.get("profile")))
    return UnknownEvent(str(name))


def parse_treatment(raw: dict[str, Any]) -> Treatment:
    """Parse an /api/v1/treatments document."""
    return Treatment(
        timestamp=_require_timestamp(raw, "created_at", "timestamp"),
        event_type=parse_event_type(raw),
        duration_minutes=_optional_float(raw.get("duration")),
        glucose=_optional_float(raw.get("glucose")),
        insulin=_optional_float(raw.get("insulin")),
        carbs=_optional_float(raw.get("carbs")),
        recorder=_optional_str(raw.get("enteredBy")),
        notes=_optional_str(raw.get("notes")),
    )


# Device statuses


@dataclass(frozen=True)
class EnactedTemporaryBasal:
    start: dt.datetime
    duration_minutes: float
    rate: float


@dataclass(frozen=True)
class LoopStatus:
    timestamp: dt.datetime | None
    insulin_on_board: float | None = None
    carbs_on_board: float | None = None
    enacted_temporary_basal: EnactedTemporaryBasal | None = None


@dataclass(frozen=True)
class PumpStatus:
    reservoir: float | None = None
    battery_status: str | None = None
    suspended: bool | None = None

    @property
    def battery_low(self) -> bool:
        return (self.battery_status or "").lower() == "low"


@dataclass(frozen=True)
class UploaderStatus:
    battery_percentage: int | None = None


@dataclass(frozen=True)
class ClosedLoopSystem:
    """Telemetry from a Loop or OpenAPS rig and the devices it reports on."""

    name: str
    loop_status: LoopStatus | None = None
    pump_status: PumpStatus | None = None
    uploader_status: UploaderStatus | None = None


@dataclass(frozen=True)
class DeviceStatus:
    timestamp: dt.datetime
    device: str | None = None
    closed_loop_system: ClosedLoopSystem | None = None


def _parse_enacted(enacted: Any) -> EnactedTemporaryBasal | None:
    if not isinstance(enacted, dict):
        return None
    rate = _optional_float(enacted.get("rate"))
    duration = _optional_float(enacted.get("duration"))
    start = parse_timestamp(enacted.get("timestamp"))
    if rate is None or duration is None or start is None:
        return None
    return EnactedTemporaryBasal(start=start, duration_minutes=duration, rate=rate)


def _parse_loop_status(loop: dict[str, Any]) -> LoopStatus:
    iob = loop.get("iob") or {}
    cob = loop.get("cob") or {}
    return LoopStatus(
        timestamp=parse_timestamp(loop.get("timestamp")),
        insulin_on_board=_optional_float(iob.get("iob")),
        carbs_on_board=_optional_float(cob.get("cob")),
        enacted_temporary_basal=_parse_enacted(loop.get("enacted")),
    )


def _parse_openaps_status(openaps: dict[str, Any]) -> LoopStatus:
    iob = openaps.get("iob") or {}
    if isinstance(iob, list):
        iob = iob[0] if iob else {}
    enacted = openaps.get("enacted") or {}
    suggested = openaps.get("suggested") or {}
    cob = enacted.get("COB", suggested.get("COB"))
    timestamp = parse_timestamp(iob.get("timestamp")) or parse_timestamp(
        suggested.get("timestamp")
    )
    return LoopStatus(
        timestamp=timestamp,
        insulin_on_board=_optional_float(iob.get("iob")),
        carbs_on_board=_optional_float(cob),
        enacted_temporary_basal=_parse_enacted(enacted),
    )


def _parse_pump_status(pump: dict[str, Any]) -> PumpStatus:
    battery = pump.get("battery") or {}
    status = pump.get("status") or {}
    suspended = pump.get("suspended", status.get("suspended"))
    return PumpStatus(
        reservoir=_optional_float(pump.get("reservoir")),
        battery_status=_optional_str(battery.get("status")),
        suspended=bool(suspended) if suspended is not None else None,
    )


def parse_device_status(raw: dict[str, Any]) -> DeviceStatus:
    """Parse an /api/v1/devicestatus document."""
    loop = raw.get("loop")
    openaps = raw.get("openaps")
    pump = raw.get("pump")
    uploader = raw.get("uploader")
    uploader_battery = raw.get("uploaderBattery")

    system = None
    if any(isinstance(part, dict) for part in (loop, openaps, pump, uploader)) or (
        uploader_battery is not None
    ):
        if isinstance(loop, dict):
            name, loop_status = "Loop", _parse_loop_status(loop)
        elif isinstance(openaps, dict):
            name, loop_status = "OpenAPS", _parse_openaps_status(openaps)
        else:
            name, loop_status = "Loop", None
        uploader_status = None
        if isinstance(uploader, dict):
            battery = uploader.get("battery", uploader_battery)
            uploader_status = UploaderStatus(int(battery) if battery is not None else None)
        elif uploader_battery is not None:
            uploader_status = UploaderStatus(int(uploader_battery))
        system = ClosedLoopSystem(
            name=name,
            loop_status=loop_status,
            pump_status=_parse_pump_status(pump) if isinstance(pump, dict) else None,
            uploader_status=uploader_status,
        )

    return DeviceStatus(
        timestamp=_require_timestamp(raw, "created_at", "date"),
        device=_optional_str(raw.get("device")),
        closed_loop_system=system,
    )
