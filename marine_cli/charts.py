import io
import os
from pathlib import Path

RESULTS_DIR = "results"

os.environ.setdefault("MPLCONFIGDIR", os.path.join(RESULTS_DIR, ".matplotlib"))
os.environ.setdefault("XDG_CACHE_HOME", os.path.join(RESULTS_DIR, ".cache"))

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

COLORS = {
    "temperature": "#FF6B6B",
    "wind": "#4D96FF",
    "pressure": "#2ECC71",
    "wave_height": "#FFC300",
}


def _series(records, name):
    # None plots as a gap
    return np.array(
        [np.nan if getattr(r, name) is None else getattr(r, name) for r in records],
        dtype=float,
    )


def _finish(fig, ax, title):
    ax.set_title(title)
    ax.grid(True, linestyle="--", color="#e0e0e0")
    ax.legend()
    plt.setp(ax.get_xticklabels(), rotation=45, ha="right")
    fig.tight_layout()
    return fig


def _label_axis(ax, records):
    # positional ticks, labels can repeat across days
    x = np.arange(len(records))
    ax.set_xticks(x)
    ax.set_xticklabels([r.label for r in records])
    return x


def temperature_wind_figure(records):
    fig, ax = plt.subplots(figsize=(10, 4))
    x = _label_axis(ax, records)
    ax.plot(x, _series(records, "temperature"), marker="o",
            color=COLORS["temperature"], label="Temp °C")
    ax.plot(x, _series(records, "wind"), marker="o",
            color=COLORS["wind"], label="Wind m/s")
    return _finish(fig, ax, "Temperature & Wind")


def pressure_waves_figure(records):
    width = 0.4
    fig, ax = plt.subplots(figsize=(10, 4))
    x = _label_axis(ax, records)
    ax.bar(x - width / 2, _series(records, "pressure"), width,
           color=COLORS["pressure"], label="Pressure hPa")
    ax.bar(x + width / 2, _series(records, "wave_height"), width,
           color=COLORS["wave_height"], label="Waves m")
    return _finish(fig, ax, "Pressure & Waves")


def ensure_dirs():
    Path(os.environ["MPLCONFIGDIR"]).mkdir(parents=True, exist_ok=True)
    Path(os.environ["XDG_CACHE_HOME"]).mkdir(parents=True, exist_ok=True)


def chart_png(fig) -> bytes:
    ensure_dirs()
    buf = io.BytesIO()
    fig.savefig(buf, format="png")
    plt.close(fig)
    return buf.getvalue()


def save_chart(fig, path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(chart_png(fig))
    return path


def plot_temperature_wind(records, path) -> Path:
    return save_chart(temperature_wind_figure(records), path)


def plot_pressure_waves(records, path) -> Path:
    return save_chart(pressure_waves_figure(records), path)
