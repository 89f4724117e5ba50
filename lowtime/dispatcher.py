from __future__ import annotations

import logging
from typing import Optional

from .banner import ConsoleBanner
from .coordinator import AlertRequest, NotificationCoordinator, get_coordinator
from .engine import FireDecision
from .settings import MODE_BANNER, MODE_SOUND, MODE_VOICE, Settings
from .sounds import LocalSpeaker, TonePlayer

logger = logging.getLogger(__name__)


class AlertDispatcher:
    """Runs the side effects of a fire decision without waiting on any of them.

    Every effect is independent: a missing audio device or TTS engine is
    logged and the remaining effects still run. The OS notification is always
    handed to the process-wide coordinator, which decides from the settings
    snapshot whether to show it.
    """

    def __init__(
        self,
        banner: Optional[ConsoleBanner] = None,
        tone_player: Optional[TonePlayer] = None,
        speaker: Optional[LocalSpeaker] = None,
        coordinator: Optional[NotificationCoordinator] = None,
        source: str = "",
    ):
        self.banner = banner or ConsoleBanner()
        self.tone_player = tone_player or TonePlayer()
        self.speaker = speaker if speaker is not None else LocalSpeaker()
        self.coordinator = coordinator or get_coordinator()
        self.source = source

    def dispatch(self, decision: FireDecision, settings: Settings) -> None:
        self._run("notification", self.coordinator.post, AlertRequest(settings, decision.message, self.source))
        if MODE_BANNER in decision.effects:
            self._run(MODE_BANNER, self.banner.show, decision.message)
        if MODE_SOUND in decision.effects:
            self._run(MODE_SOUND, self.tone_player.play_async, settings.voice_volume)
        if MODE_VOICE in decision.effects:
            self._run(MODE_VOICE, self._speak, decision.message, settings)

    def _speak(self, message: str, settings: Settings) -> None:
        spoken = self.speaker.speak_async(
            message,
            language=settings.language,
            rate=settings.voice_rate,
            pitch=settings.voice_pitch,
            volume=settings.voice_volume,
        )
        if not spoken:
            logger.info("Voice alert skipped, no TTS engine available")

    def _run(self, name: str, fn, *args) -> None:
        try:
            fn(*args)
        except Exception:
            logger.error("%s alert failed", name, exc_info=True)
