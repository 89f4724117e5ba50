from audio_io import list_output_devices


def main():
    devices = list_output_devices()
    if not devices:
        print("No output devices found (is pyaudio installed?)")
        return
    print("Output devices:")
    for device in devices:
        print(f"[{device.index}] {device.name} rate={device.rate} channels={device.channels}")


if __name__ == "__main__":
    main()
