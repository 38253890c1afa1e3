from pathlib import Path

import pandas as pd

from .aggregate import AVERAGES, hourly_frame
from .viewer import load_artifact

HOURLY_COLUMNS = {
    "airTemperature": "temp_c",
    "windSpeed": "wind_speed",
    "pressure": "pressure",
    "waveHeight": "wave_height",
}


def export_hourly(artifact_path, out_csv, source="noaa") -> pd.DataFrame:
    hours = load_artifact(artifact_path, "hours")
    df = hourly_frame(hours, source).rename(columns=HOURLY_COLUMNS)
    df.insert(0, "time", pd.to_datetime([h.get("time") for h in hours], utc=True, errors="coerce"))
    df = df.sort_values("time").reset_index(drop=True)
    Path(out_csv).parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(out_csv, index=False)
    return df


def export_daily(artifact_path, out_csv) -> pd.DataFrame:
    days = load_artifact(artifact_path, "days")
    columns = ["date"] + [key for _, key, _ in AVERAGES.values()]
    df = pd.DataFrame(days, columns=columns)
    Path(out_csv).parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(out_csv, index=False)
    return df
