"""
Fetch Stormglass data for the dashboard.

Two stages run one after the other: a 1-day hourly artifact written
verbatim, then an N-day artifact of daily averages. A stage that fails
copies its checked-in fallback file over the artifact instead.
"""
import json
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path

import requests

from .aggregate import daily_aggregate
from .errors import FetchError
from .stormglass import fetch_ranged_series

logger = logging.getLogger(__name__)


def write_artifact(path, payload) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(payload, f, indent=2)


def copy_fallback(fallback_path, output_path) -> None:
    """Copy the fallback file over the artifact byte-for-byte."""
    content = Path(fallback_path).read_bytes()
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(content)


def with_fallback(stage, build, output_path, fallback_path) -> bool:
    """
    Run `build()` and write its payload to `output_path`.

    If building fails, the fallback file is copied instead. Returns True
    when the artifact was written from either source, False when both
    failed. Errors never propagate past this point.
    """
    try:
        write_artifact(output_path, build())
        logger.info(f"{stage} data saved to {output_path}")
        return True
    except Exception as e:
        logger.error(f"Failed to fetch {stage} data, using local fallback: {e}")

    try:
        copy_fallback(fallback_path, output_path)
    except Exception as e:
        logger.error(f"Failed to load {stage} fallback {fallback_path}: {e}")
        return False
    logger.info(f"Loaded {stage} fallback from {fallback_path}")
    return True


def _now(now):
    return now or datetime.now(timezone.utc)


def build_short_range(config, session=None, now=None) -> dict:
    start = _now(now)
    end = start + timedelta(days=1)

    logger.info("Fetching 1-day hourly data...")
    hours = fetch_ranged_series(config, start, end, session=session)
    if not hours:
        raise FetchError("No data from Stormglass")

    logger.info(f"1-day data fetched ({len(hours)} hours)")
    return {"hours": hours}


def build_daily_aggregates(config, days=10, session=None, now=None) -> dict:
    origin = _now(now)
    records = []
    for i in range(days):
        start = origin + timedelta(days=i)
        end = start + timedelta(days=1)

        logger.info(f"Fetching day {i + 1} data...")
        hours = fetch_ranged_series(config, start, end, session=session)
        if not hours:
            raise FetchError(f"No data from Stormglass for day {i + 1}")

        day = start.astimezone(timezone.utc).date()
        records.append(daily_aggregate(day, hours, config.source).to_json())

    logger.info(f"{days}-day data fetched")
    return {"days": records}


def produce_short_range_artifact(config, session=None, now=None) -> bool:
    return with_fallback(
        "1-day",
        lambda: build_short_range(config, session=session, now=now),
        config.short_range_path,
        config.short_range_fallback,
    )


def produce_daily_aggregate_artifact(config, days=10, session=None, now=None) -> bool:
    return with_fallback(
        f"{days}-day",
        lambda: build_daily_aggregates(config, days, session=session, now=now),
        config.daily_path,
        config.daily_fallback,
    )


def run(config, days=10, session=None, now=None) -> dict:
    """Produce both artifacts, short-range first. Never raises on fetch errors."""
    session = session or requests.Session()
    results = {
        "shortRange": produce_short_range_artifact(config, session=session, now=now),
        "multiDay": produce_daily_aggregate_artifact(
            config, days, session=session, now=now
        ),
    }
    logger.info(f"Fetch run finished: {results}")
    return results
