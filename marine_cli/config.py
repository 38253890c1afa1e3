import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .errors import MissingCredentialError

# Rotterdam
DEFAULT_LAT = 51.9225
DEFAULT_LON = 4.47917
BASE_URL = "https://api.stormglass.io/v2/weather/point"
PARAMS = ("airTemperature", "windSpeed", "pressure", "waveHeight")

SHORT_RANGE_FILE = "data-1day.json"
DAILY_FILE = "data-10day.json"


@dataclass(frozen=True)
class FetcherConfig:
    api_key: str
    lat: float = DEFAULT_LAT
    lon: float = DEFAULT_LON
    base_url: str = BASE_URL
    source: str = "noaa"
    params: tuple = PARAMS
    output_dir: Path = Path("public")
    fallback_dir: Path = Path("fallback")
    timeout: float = 20
    display_tz: str = "Europe/Amsterdam"
    log_file: Path = Path("logs/app.log")

    @property
    def short_range_path(self) -> Path:
        return Path(self.output_dir) / SHORT_RANGE_FILE

    @property
    def daily_path(self) -> Path:
        return Path(self.output_dir) / DAILY_FILE

    @property
    def short_range_fallback(self) -> Path:
        return Path(self.fallback_dir) / SHORT_RANGE_FILE

    @property
    def daily_fallback(self) -> Path:
        return Path(self.fallback_dir) / DAILY_FILE

    @classmethod
    def from_env(cls, env=None, require_key=True):
        """
        Build a config from environment variables.
        `env` defaults to os.environ; pass a dict in tests instead of
        mutating the process environment.
        """
        env = os.environ if env is None else env
        api_key = (env.get("STORMGLASS_API_KEY") or "").strip()
        if require_key and not api_key:
            raise MissingCredentialError(
                "Please set STORMGLASS_API_KEY in your .env file"
            )
        return cls(
            api_key=api_key,
            lat=float(env.get("MARINE_LAT", DEFAULT_LAT)),
            lon=float(env.get("MARINE_LON", DEFAULT_LON)),
            source=env.get("STORMGLASS_SOURCE", "noaa"),
            output_dir=Path(env.get("MARINE_OUTPUT_DIR", "public")),
            fallback_dir=Path(env.get("MARINE_FALLBACK_DIR", "fallback")),
            display_tz=env.get("MARINE_TZ", "Europe/Amsterdam"),
            log_file=Path(env.get("LOG_FILE", "logs/app.log")),
        )


def setup_logging(log_file="logs/app.log", level=logging.INFO):
    log_file = Path(log_file)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[logging.FileHandler(log_file), logging.StreamHandler()],
    )
    # requests/urllib3 chatter stays out of the app log
    logging.getLogger("urllib3").setLevel(logging.WARNING)
