"""Environment-driven settings. Entry points call ``load_dotenv()`` first."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

logger = logging.getLogger(__name__)

_ROOT = Path(__file__).parent.parent.parent

DEFAULT_TABLE_DIR = str(_ROOT / "resources")
DEFAULT_HTTP_TIMEOUT = 10.0
DEFAULT_HTTP_RETRIES = 2


def is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


@dataclass(frozen=True)
class Settings:
    """Where lookup tables come from and how to fetch them."""

    table_dir: str = DEFAULT_TABLE_DIR  # directory or base URL
    trl: str = "trl.json"
    tl: str = "tl.json"
    lum_by_mag: str = "lumbymag.json"
    blackbody: str = "blackbody.json"
    http_timeout: float = DEFAULT_HTTP_TIMEOUT  # seconds
    http_retries: int = DEFAULT_HTTP_RETRIES
    log_level: str = "INFO"

    def table_source(self, name: str) -> str:
        """Resolve a table file name against ``table_dir``. URLs and absolute paths pass through."""
        if is_url(name) or Path(name).is_absolute():
            return name
        if is_url(self.table_dir):
            return f"{self.table_dir.rstrip('/')}/{name}"
        return str(Path(self.table_dir) / name)


def _number(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("%s=%r is not a number, using %s", name, raw, default)
        return default


def _log_level(env: Mapping[str, str]) -> str:
    raw = (env.get("PLUTONIAN_LOG_LEVEL") or "INFO").strip().upper()
    if not isinstance(logging.getLevelName(raw), int):
        logger.warning("PLUTONIAN_LOG_LEVEL=%r is not a log level, using INFO", raw)
        return "INFO"
    return raw


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Read PLUTONIAN_* variables into Settings.

    Args:
        env: Variable mapping. Defaults to ``os.environ``.

    Returns:
        Settings with defaults for anything unset or malformed.
    """
    env = os.environ if env is None else env
    return Settings(
        table_dir=env.get("PLUTONIAN_TABLE_DIR") or DEFAULT_TABLE_DIR,
        trl=env.get("PLUTONIAN_TRL") or "trl.json",
        tl=env.get("PLUTONIAN_TL") or "tl.json",
        lum_by_mag=env.get("PLUTONIAN_LUMBYMAG") or "lumbymag.json",
        blackbody=env.get("PLUTONIAN_BLACKBODY") or "blackbody.json",
        http_timeout=_number(env, "PLUTONIAN_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT),
        http_retries=int(_number(env, "PLUTONIAN_HTTP_RETRIES", DEFAULT_HTTP_RETRIES)),
        log_level=_log_level(env),
    )
