from types import SimpleNamespace

import numpy as np

from audio_io import render_tone
from lowtime.banner import ConsoleBanner
from lowtime.sounds import pick_voice_id
from time_utils import format_clock


def test_render_tone_length_and_volume():
    samples = render_tone(880.0, 300, volume=0.5, rate=24000)
    assert samples.dtype == np.float32
    assert len(samples) == 7200
    assert np.max(np.abs(samples)) <= 0.5 + 1e-6
    assert samples[0] == 0.0


def test_pick_voice_by_language_prefix():
    voices = [
        SimpleNamespace(id="v-en", languages=["en_US"]),
        SimpleNamespace(id="v-de", languages=[b"\x05de"]),
        SimpleNamespace(id="v-none", languages=[]),
    ]
    assert pick_voice_id(voices, "de") == "v-de"
    assert pick_voice_id(voices, "en") == "v-en"
    assert pick_voice_id(voices, "tr") is None


def test_banner_hides_itself():
    banner = ConsoleBanner(hide_after_ms=10_000)
    banner.show("Your time is low")
    assert banner.visible_text == "Your time is low"
    banner.hide()
    assert banner.visible_text is None


def test_format_clock():
    assert format_clock(3723.5) == "1:02:03"
    assert format_clock(129.8) == "2:09"
    assert format_clock(9.84) == "0:09.8"
    assert format_clock(None) == "--:--"
