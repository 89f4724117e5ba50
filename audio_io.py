import logging
import math
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

try:
    import pyaudio
except ImportError:  # pragma: no cover - optional dep
    pyaudio = None  # type: ignore

logger = logging.getLogger(__name__)

TONE_SAMPLE_RATE = 24000


@dataclass
class OutputDeviceInfo:
    index: int
    name: str
    rate: int
    channels: int


def render_tone(
    frequency_hz: float = 880.0,
    duration_ms: int = 300,
    volume: float = 1.0,
    rate: int = TONE_SAMPLE_RATE,
    fade_ms: int = 5,
) -> np.ndarray:
    """Render a mono float32 sine tone with short fades against clicks."""

    volume = min(max(volume, 0.0), 1.0)
    count = int(rate * duration_ms / 1000)
    samples = volume * np.sin(2 * math.pi * np.arange(count) * frequency_hz / rate)
    fade = min(int(rate * fade_ms / 1000), count // 2)
    if fade:
        ramp = np.linspace(0.0, 1.0, fade)
        samples[:fade] *= ramp
        samples[-fade:] *= ramp[::-1]
    return samples.astype(np.float32)


def list_output_devices() -> List[OutputDeviceInfo]:
    if pyaudio is None:
        return []
    pa = pyaudio.PyAudio()
    try:
        devices = []
        for i in range(pa.get_device_count()):
            info = pa.get_device_info_by_index(i)
            if info.get("maxOutputChannels", 0) > 0:
                devices.append(
                    OutputDeviceInfo(
                        index=i,
                        name=info.get("name", "unknown"),
                        rate=int(info.get("defaultSampleRate", TONE_SAMPLE_RATE)),
                        channels=int(info["maxOutputChannels"]),
                    )
                )
        return devices
    finally:
        pa.terminate()


class ToneOutput:
    """Plays rendered tones on a pyaudio output stream opened per call."""

    def __init__(self, device_index: Optional[int] = None, rate: int = TONE_SAMPLE_RATE):
        self.device_index = device_index
        self.rate = rate

    @property
    def available(self) -> bool:
        return pyaudio is not None

    def play(self, samples: np.ndarray) -> None:
        if pyaudio is None:
            raise RuntimeError("pyaudio is not installed")
        pa = pyaudio.PyAudio()
        try:
            stream = pa.open(
                format=pyaudio.paFloat32,
                channels=1,
                rate=self.rate,
                output=True,
                output_device_index=self.device_index,
            )
            stream.write(samples.tobytes())
            stream.stop_stream()
            stream.close()
        finally:
            pa.terminate()
