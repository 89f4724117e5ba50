from __future__ import annotations

import logging
from threading import Lock, Thread
from typing import Optional

from audio_io import ToneOutput, render_tone

try:
    import winsound
except ImportError:  # pragma: no cover - non-Windows fallback
    winsound = None  # type: ignore

try:  # Optional local TTS for the spoken alert
    import pyttsx3
except ImportError:  # pragma: no cover - optional
    pyttsx3 = None  # type: ignore

logger = logging.getLogger(__name__)

BASE_SPEECH_RATE = 185


class TonePlayer:
    """Short alert tone, played off the caller's thread."""

    def __init__(
        self,
        frequency_hz: float = 880.0,
        duration_ms: int = 300,
        output: Optional[ToneOutput] = None,
    ):
        self.frequency_hz = frequency_hz
        self.duration_ms = duration_ms
        self.output = output or ToneOutput()

    def play_async(self, volume: float = 1.0) -> None:
        Thread(target=self._play, args=(volume,), name="alert-tone", daemon=True).start()

    def _play(self, volume: float) -> None:
        if self.output.available:
            try:
                self.output.play(render_tone(self.frequency_hz, self.duration_ms, volume))
                return
            except Exception:
                logger.warning("Tone playback via pyaudio failed, falling back to beep", exc_info=True)
        if winsound:
            try:
                winsound.Beep(int(self.frequency_hz), self.duration_ms)
                return
            except RuntimeError:
                logger.debug("winsound.Beep failed, falling back to log")
        logger.info("Beep")


class LocalSpeaker:
    """Offline TTS wrapper around pyttsx3 (SAPI on Windows, espeak on Linux)."""

    def __init__(self, base_rate: int = BASE_SPEECH_RATE):
        self.base_rate = base_rate
        self._lock = Lock()
        self._engine = None
        if pyttsx3:
            try:
                self._engine = pyttsx3.init()
            except Exception:
                logger.warning("pyttsx3 engine unavailable, voice alerts disabled", exc_info=True)

    @property
    def available(self) -> bool:
        return self._engine is not None

    def speak_async(
        self,
        text: str,
        language: str = "en",
        rate: float = 1.0,
        pitch: float = 1.0,
        volume: float = 1.0,
    ) -> bool:
        if not self._engine:
            return False
        Thread(
            target=self._speak,
            args=(text, language, rate, pitch, volume),
            name="alert-voice",
            daemon=True,
        ).start()
        return True

    def _speak(self, text: str, language: str, rate: float, pitch: float, volume: float) -> None:
        if not self._engine:
            return
        with self._lock:
            try:
                self._configure(language, rate, pitch, volume)
                self._engine.say(text)
                self._engine.runAndWait()
            except Exception:  # pragma: no cover - engine runtime errors
                logger.error("pyttsx3 failed to speak text", exc_info=True)

    def _configure(self, language: str, rate: float, pitch: float, volume: float) -> None:
        self._engine.setProperty("rate", int(self.base_rate * rate))
        self._engine.setProperty("volume", min(max(volume, 0.0), 1.0))
        try:
            self._engine.setProperty("pitch", pitch)
        except Exception:
            logger.debug("pyttsx3 driver does not support pitch")
        voice_id = pick_voice_id(self._engine.getProperty("voices") or [], language)
        if voice_id:
            self._engine.setProperty("voice", voice_id)


def pick_voice_id(voices, language: str) -> Optional[str]:
    """Return the id of the first voice whose language starts with ``language``."""

    prefix = (language or "").lower()
    if not prefix:
        return None
    for voice in voices:
        for lang in _voice_languages(voice):
            if lang.lower().startswith(prefix):
                return voice.id
    return None


def _voice_languages(voice) -> list:
    langs = []
    for lang in getattr(voice, "languages", None) or []:
        if isinstance(lang, bytes):
            # espeak reports e.g. b"\x05en-gb"
            lang = "".join(ch for ch in lang.decode("utf-8", errors="ignore") if ch.isprintable())
        langs.append(str(lang).replace("_", "-"))
    return langs
