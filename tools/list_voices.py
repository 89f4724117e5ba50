from lowtime.messages import LOW_TIME_PHRASES
from lowtime.sounds import pick_voice_id, pyttsx3


def main():
    if pyttsx3 is None:
        print("pyttsx3 is not installed")
        return
    engine = pyttsx3.init()
    voices = engine.getProperty("voices") or []
    for voice in voices:
        print(f"{voice.id} | {voice.name} | languages={getattr(voice, 'languages', [])}")
    print("\nVoice picked per supported language:")
    for language in LOW_TIME_PHRASES:
        print(f"  {language}: {pick_voice_id(voices, language) or '(engine default)'}")


if __name__ == "__main__":
    main()
