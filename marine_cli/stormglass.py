import logging
import math
from datetime import datetime, timezone

import pandas as pd
import requests

logger = logging.getLogger(__name__)


def iso_utc(moment: datetime) -> str:
    """Format a datetime as an ISO-8601 UTC timestamp, e.g. 2024-05-01T10:00:00Z."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def reading(sample: dict, metric: str, source: str) -> float:
    """Value of one metric from one source, zero when absent, null or not a finite number."""
    by_source = sample.get(metric) or {}
    if not isinstance(by_source, dict):
        return 0.0
    value = by_source.get(source)
    if value is None:
        return 0.0
    try:
        value = float(value)
    except (TypeError, ValueError):
        return 0.0
    return value if math.isfinite(value) else 0.0


def _before_end(sample: dict, end: datetime) -> bool:
    stamp = pd.to_datetime(sample.get("time"), utc=True, errors="coerce")
    if pd.isna(stamp):
        return True
    return stamp < pd.Timestamp(iso_utc(end))


def fetch_ranged_series(config, start: datetime, end: datetime, session=None) -> list:
    """
    Fetch hourly samples for the half-open window [start, end).

    Returns the upstream `hours` list, or an empty list when the payload
    has no such field. Samples stamped at or after `end` are dropped.
    """
    session = session or requests.Session()
    params = {
        "lat": config.lat,
        "lng": config.lon,
        "params": ",".join(config.params),
        "start": iso_utc(start),
        "end": iso_utc(end),
    }
    logger.debug(f"GET {config.base_url} {params}")
    r = session.get(
        config.base_url,
        params=params,
        headers={"Authorization": config.api_key},
        timeout=config.timeout,
    )
    r.raise_for_status()
    data = r.json()

    hours = data.get("hours") if isinstance(data, dict) else None
    if not isinstance(hours, list):
        logger.warning(f"Response for {params['start']} has no 'hours' field")
        return []
    return [h for h in hours if isinstance(h, dict) and _before_end(h, end)]
