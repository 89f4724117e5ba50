from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, FrozenSet, Mapping, Optional

from .messages import resolve_message

logger = logging.getLogger(__name__)

MODE_VOICE = "voice"
MODE_NOTIFICATION = "notification"
MODE_BANNER = "banner"
MODE_SOUND = "sound"

DEFAULT_CUSTOM_MESSAGE = "Time is running low!"


@dataclass(frozen=True)
class AlertModes:
    voice: bool = True
    notification: bool = True
    banner: bool = True
    sound: bool = False

    def enabled(self) -> FrozenSet[str]:
        flags = {
            MODE_VOICE: self.voice,
            MODE_NOTIFICATION: self.notification,
            MODE_BANNER: self.banner,
            MODE_SOUND: self.sound,
        }
        return frozenset(name for name, on in flags.items() if on)

    def to_dict(self) -> dict:
        return {
            MODE_VOICE: self.voice,
            MODE_NOTIFICATION: self.notification,
            MODE_BANNER: self.banner,
            MODE_SOUND: self.sound,
        }

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "AlertModes":
        data = data or {}
        defaults = cls()
        return cls(
            voice=_flag_or_default(data.get(MODE_VOICE), defaults.voice),
            notification=_flag_or_default(data.get(MODE_NOTIFICATION), defaults.notification),
            banner=_flag_or_default(data.get(MODE_BANNER), defaults.banner),
            sound=_flag_or_default(data.get(MODE_SOUND), defaults.sound),
        )


@dataclass(frozen=True)
class Settings:
    """Immutable snapshot of the user's alert preferences."""

    threshold_seconds: float = 30.0
    language: str = "en"
    alert_modes: AlertModes = field(default_factory=AlertModes)
    custom_message: str = DEFAULT_CUSTOM_MESSAGE
    voice_rate: float = 1.0
    voice_pitch: float = 1.0
    voice_volume: float = 1.0

    @property
    def message(self) -> str:
        return resolve_message(self.language, self.custom_message)

    def to_dict(self) -> dict:
        return {
            "thresholdSeconds": self.threshold_seconds,
            "language": self.language,
            "alertModes": self.alert_modes.to_dict(),
            "customMessage": self.custom_message,
            "voiceRate": self.voice_rate,
            "voicePitch": self.voice_pitch,
            "voiceVolume": self.voice_volume,
        }

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "Settings":
        data = data or {}
        defaults = cls()
        return cls(
            threshold_seconds=_number_or_default(data.get("thresholdSeconds"), defaults.threshold_seconds),
            language=str(data.get("language") or defaults.language),
            alert_modes=AlertModes.from_dict(data.get("alertModes")),
            custom_message=_text_or_default(data.get("customMessage"), defaults.custom_message),
            voice_rate=_number_or_default(data.get("voiceRate"), defaults.voice_rate),
            voice_pitch=_number_or_default(data.get("voicePitch"), defaults.voice_pitch),
            voice_volume=_number_or_default(data.get("voiceVolume"), defaults.voice_volume),
        )


def _flag_or_default(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "1", "yes", "on"}:
            return True
        if lowered in {"false", "0", "no", "off", ""}:
            return False
    if isinstance(value, (int, float)):
        return value != 0
    return default


def _text_or_default(value: Any, default: str) -> str:
    # a stored "" is kept: it switches back to the language phrase
    return default if value is None else str(value)


def _number_or_default(value: Any, default: float) -> float:
    # Zero and garbage both mean "not configured", like the options form does
    if isinstance(value, bool) or value is None:
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number) or number == 0:
        return default
    return number


def load_settings(path: Path) -> Settings:
    if not path.exists():
        return Settings()
    try:
        with path.open("r", encoding="utf-8") as f:
            payload = json.load(f)
    except Exception as exc:  # pragma: no cover - corrupted file
        logger.error("Failed to load settings from %s: %s", path, exc)
        return Settings()
    if not isinstance(payload, dict):
        logger.warning("Ignoring settings file %s: expected an object", path)
        return Settings()
    return Settings.from_dict(payload)


def save_settings(path: Path, settings: Settings) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(settings.to_dict(), f, ensure_ascii=False, indent=2)


def ensure_default_settings(path: Path) -> Settings:
    if path.exists():
        return load_settings(path)
    settings = Settings()
    save_settings(path, settings)
    logger.info("Wrote default settings to %s", path)
    return settings


def update_settings(path: Path, **changes: Any) -> Settings:
    """Apply field changes (snake_case names) to the stored settings and save them."""

    current = load_settings(path)
    modes = changes.pop("alert_modes", None)
    if isinstance(modes, Mapping):
        changes["alert_modes"] = AlertModes.from_dict({**current.alert_modes.to_dict(), **modes})
    elif modes is not None:
        changes["alert_modes"] = modes
    updated = replace(current, **changes)
    save_settings(path, updated)
    logger.info("Settings saved to %s", path)
    return updated


class SettingsStore:
    """Reads a fresh snapshot from disk for every tick."""

    def __init__(self, path: Path):
        self.path = path

    def snapshot(self) -> Settings:
        return load_settings(self.path)
