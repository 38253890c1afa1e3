from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

import pandas as pd

from .errors import FetchError
from .stormglass import reading

# metric -> (DailyAggregate field, JSON key, decimals)
AVERAGES = {
    "airTemperature": ("temp_avg", "tempAvg", 1),
    "windSpeed": ("wind_avg", "windAvg", 1),
    "pressure": ("pressure_avg", "pressureAvg", 1),
    "waveHeight": ("wave_avg", "waveAvg", 2),
}


@dataclass(frozen=True)
class DailyAggregate:
    date: str
    temp_avg: float
    wind_avg: float
    pressure_avg: float
    wave_avg: float

    def to_json(self) -> dict:
        out = {"date": self.date}
        for attr, key, _ in AVERAGES.values():
            out[key] = getattr(self, attr)
        return out

    @classmethod
    def from_json(cls, obj: dict):
        values = {attr: float(obj.get(key) or 0) for attr, key, _ in AVERAGES.values()}
        return cls(date=str(obj["date"]), **values)


def hourly_frame(hours, source="noaa") -> pd.DataFrame:
    """One row per sample, one column per metric, absent readings as 0."""
    return pd.DataFrame(
        [{metric: reading(h, metric, source) for metric in AVERAGES} for h in hours],
        columns=list(AVERAGES),
    )


def round_half_up(value: float, decimals: int) -> float:
    # ties on the exact binary value go away from zero
    return float(Decimal(value).quantize(Decimal(10) ** -decimals, rounding=ROUND_HALF_UP))


def daily_aggregate(day, hours, source="noaa") -> DailyAggregate:
    if not hours:
        raise FetchError(f"No samples to average for {day}")
    if isinstance(day, date):
        day = day.isoformat()

    means = hourly_frame(hours, source).mean()
    values = {
        attr: round_half_up(float(means[metric]), decimals)
        for metric, (attr, _, decimals) in AVERAGES.items()
    }
    return DailyAggregate(date=day, **values)
