from __future__ import annotations

from types import MappingProxyType
from typing import Optional

DEFAULT_LANGUAGE = "en"

LOW_TIME_PHRASES = MappingProxyType(
    {
        "en": "Your time is low",
        "tr": "Süren azaldı",
        "hu": "Kevés az időd",
        "es": "Te queda poco tiempo",
        "de": "Deine Zeit wird knapp",
        "it": "Il tuo tempo è basso",
        "pt": "Seu tempo está acabando",
    }
)


def resolve_message(language: Optional[str], custom_message: Optional[str] = None) -> str:
    custom = (custom_message or "").strip()
    if custom:
        return custom
    return LOW_TIME_PHRASES.get((language or "").strip().lower(), LOW_TIME_PHRASES[DEFAULT_LANGUAGE])
