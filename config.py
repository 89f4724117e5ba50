import logging
import logging.handlers
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


def _get_env_int(name: str, default: int) -> int:
    val = os.getenv(name)
    if val is None or val == "":
        return default
    try:
        return int(val)
    except ValueError as exc:
        raise ValueError(f"Environment variable {name} must be an integer") from exc


def _get_env_float(name: str, default: float) -> float:
    val = os.getenv(name)
    if val is None or val == "":
        return default
    try:
        return float(val)
    except ValueError as exc:
        raise ValueError(f"Environment variable {name} must be a float") from exc


@dataclass
class Config:
    settings_path: Path
    log_level: str
    tick_interval_ms: int
    rearm_spacing_ms: int
    time_jump_seconds: float
    banner_hide_ms: int
    tone_frequency_hz: float
    tone_duration_ms: int
    output_device_index: Optional[int]
    replay_path: Optional[Path]
    notification_title: str


def load_config(env_path: Optional[Path] = None) -> Config:
    if env_path is None:
        env_path = Path(".env")
    if env_path.exists():
        load_dotenv(env_path)

    settings_path = Path(os.getenv("SETTINGS_PATH", "data/settings.json"))
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    tick_interval_ms = _get_env_int("TICK_INTERVAL_MS", 500)
    rearm_spacing_ms = _get_env_int("REARM_SPACING_MS", 4000)
    time_jump_seconds = _get_env_float("TIME_JUMP_SECONDS", 180.0)
    banner_hide_ms = _get_env_int("BANNER_HIDE_MS", 3500)
    tone_frequency_hz = _get_env_float("TONE_FREQUENCY_HZ", 880.0)
    tone_duration_ms = _get_env_int("TONE_DURATION_MS", 300)
    output_device_env = os.getenv("OUTPUT_DEVICE_INDEX")
    output_device_index = int(output_device_env) if output_device_env else None
    replay_env = os.getenv("REPLAY_PATH")
    replay_path = Path(replay_env) if replay_env else None
    if replay_path and not replay_path.exists():
        logging.warning("REPLAY_PATH is set but file is missing: %s", replay_path)
    notification_title = os.getenv("NOTIFICATION_TITLE", "Chess.com Alert")

    return Config(
        settings_path=settings_path,
        log_level=log_level,
        tick_interval_ms=tick_interval_ms,
        rearm_spacing_ms=rearm_spacing_ms,
        time_jump_seconds=time_jump_seconds,
        banner_hide_ms=banner_hide_ms,
        tone_frequency_hz=tone_frequency_hz,
        tone_duration_ms=tone_duration_ms,
        output_device_index=output_device_index,
        replay_path=replay_path,
        notification_title=notification_title,
    )


def setup_logging(log_level: str = "INFO") -> None:
    logs_dir = Path("logs")
    logs_dir.mkdir(exist_ok=True)

    log_path = logs_dir / "lowtime.log"
    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    file_handler = logging.handlers.RotatingFileHandler(
        log_path, maxBytes=1_000_000, backupCount=3, encoding="utf-8"
    )
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        handlers=[file_handler, console_handler],
    )
