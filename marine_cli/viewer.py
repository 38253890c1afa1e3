"""
Load the two artifacts and project them into one display shape.

Short-range records are raw upstream samples, multi-day records are
daily averages. Both become a DisplayRecord so the table and the
charts never look at the artifact layout.
"""
import json
import logging
from dataclasses import dataclass
from typing import Optional

import pandas as pd
import requests

logger = logging.getLogger(__name__)

SHORT_RANGE = "shortRange"
MULTI_DAY = "multiDay"
VIEWS = (SHORT_RANGE, MULTI_DAY)

# field -> (unit, scale to a 0-100 bar)
METRICS = {
    "temperature": ("°C", lambda v: v * 2.5),
    "wind": ("m/s", lambda v: v * 10),
    "pressure": ("hPa", lambda v: (v - 950) / 2),
    "wave_height": ("m", lambda v: v * 20),
}


@dataclass(frozen=True)
class DisplayRecord:
    label: str
    temperature: Optional[float]
    wind: Optional[float]
    pressure: Optional[float]
    wave_height: Optional[float]
    row_label: str = ""

    def values(self) -> dict:
        return {name: getattr(self, name) for name in METRICS}


def load_artifact(location, key, session=None) -> list:
    """Read one artifact list from a path or URL. Any failure gives []."""
    location = str(location)
    try:
        if location.startswith(("http://", "https://")):
            r = (session or requests).get(location, timeout=10)
            r.raise_for_status()
            data = r.json()
        else:
            with open(location) as f:
                data = json.load(f)
    except (requests.RequestException, OSError, ValueError) as e:
        logger.debug(f"Could not load {location}: {e}")
        return []

    records = data.get(key) if isinstance(data, dict) else None
    if not isinstance(records, list):
        return []
    return [r for r in records if isinstance(r, dict)]


def load_views(short_range_location, daily_location, session=None) -> dict:
    return {
        SHORT_RANGE: load_artifact(short_range_location, "hours", session),
        MULTI_DAY: load_artifact(daily_location, "days", session),
    }


def _number(value) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _parse_time(value, **kwargs):
    if not isinstance(value, str):
        return pd.NaT
    return pd.to_datetime(value, errors="coerce", **kwargs)


def _source_value(sample, metric, source):
    by_source = sample.get(metric)
    return _number(by_source.get(source)) if isinstance(by_source, dict) else None


def project_short_range(sample: dict, source="noaa", tz="Europe/Amsterdam") -> DisplayRecord:
    stamp = _parse_time(sample.get("time"), utc=True)
    if pd.isna(stamp):
        label = row_label = str(sample.get("time", ""))
    else:
        local = stamp.tz_convert(tz)
        label = local.strftime("%H:%M")
        row_label = local.strftime("%a %H:%M")
    return DisplayRecord(
        label=label,
        temperature=_source_value(sample, "airTemperature", source),
        wind=_source_value(sample, "windSpeed", source),
        pressure=_source_value(sample, "pressure", source),
        wave_height=_source_value(sample, "waveHeight", source),
        row_label=row_label,
    )


def project_multi_day(day: dict) -> DisplayRecord:
    parsed = _parse_time(day.get("date"))
    label = str(day.get("date", "")) if pd.isna(parsed) else parsed.strftime("%a %d").replace(" 0", " ")
    return DisplayRecord(
        label=label,
        temperature=_number(day.get("tempAvg")),
        wind=_number(day.get("windAvg")),
        pressure=_number(day.get("pressureAvg")),
        wave_height=_number(day.get("waveAvg")),
        row_label=label,
    )


def project(records, view, source="noaa", tz="Europe/Amsterdam") -> list:
    if view == SHORT_RANGE:
        return [project_short_range(r, source, tz) for r in records]
    if view == MULTI_DAY:
        return [project_multi_day(r) for r in records]
    raise ValueError(f"Unknown view {view!r}, expected one of {VIEWS}")


def bar_widths(record: DisplayRecord) -> dict:
    """Bar width per metric as a percentage, clamped to [0, 100]."""
    widths = {}
    for name, (_, scale) in METRICS.items():
        value = getattr(record, name) or 0
        widths[name] = max(0.0, min(scale(value), 100.0))
    return widths


def format_value(value) -> str:
    if value is None:
        return "-"
    return f"{value:g}"


def render_table(records, bar_width=20) -> str:
    """Text table, one row per record, each metric with a proportional bar."""
    if not records:
        return "(no data)"
    lines = []
    for rec in records:
        cells = [f"{rec.row_label or rec.label:<12}"]
        widths = bar_widths(rec)
        for name, (unit, _) in METRICS.items():
            text = f"{format_value(getattr(rec, name))} {unit}"
            bar = "█" * round(widths[name] / 100 * bar_width)
            cells.append(f"{text:>11} {bar:<{bar_width}}")
        lines.append(" ".join(cells).rstrip())
    return "\n".join(lines)
