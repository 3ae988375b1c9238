"""
generate_assets.py — One-time setup script.
Run this once to generate the alert sounds used by the notification
collaborators:
  - alert.wav     driver-side drowsiness alert (looped while active)
  - critical.wav  control-room critical transition chime
"""

import math
import os
import struct
import wave

import config

SAMPLE_RATE = 44100
MAX_AMP = 32767  # 16-bit signed max


def _envelope(i, n_samples, fade_samples):
    if i < fade_samples:
        return i / fade_samples
    if i > n_samples - fade_samples:
        return (n_samples - i) / fade_samples
    return 1.0


def _tone_frames(frequency, duration_ms, volume, fade_ms):
    n_samples = int(SAMPLE_RATE * duration_ms / 1000)
    fade_samples = max(1, int(SAMPLE_RATE * fade_ms / 1000))
    frames = bytearray()
    for i in range(n_samples):
        t = i / SAMPLE_RATE
        value = volume * _envelope(i, n_samples, fade_samples) * math.sin(2 * math.pi * frequency * t)
        sample = max(-32768, min(32767, int(value * MAX_AMP)))
        frames += struct.pack("<h", sample)
    return bytes(frames)


def _silence_frames(duration_ms):
    return struct.pack("<h", 0) * int(SAMPLE_RATE * duration_ms / 1000)


def write_wav(filename, frames):
    """Write mono 16-bit PCM frames to a WAV file."""
    with wave.open(filename, "w") as wav_file:
        wav_file.setnchannels(1)
        wav_file.setsampwidth(2)
        wav_file.setframerate(SAMPLE_RATE)
        wav_file.writeframes(frames)


def generate_beeps(filename, frequency, beep_ms, silence_ms, count, volume=0.8):
    """Generate a series of beep tones separated by silence."""
    frames = bytearray()
    for beep_idx in range(count):
        frames += _tone_frames(frequency, beep_ms, volume, fade_ms=10)
        if beep_idx < count - 1:
            frames += _silence_frames(silence_ms)
    write_wav(filename, bytes(frames))


def generate_chime(filename, frequencies, note_ms, volume=0.9):
    """Generate a rising chime, one note per frequency."""
    frames = bytearray()
    for frequency in frequencies:
        frames += _tone_frames(frequency, note_ms, volume, fade_ms=20)
    write_wav(filename, bytes(frames))


def main():
    os.makedirs(config.ASSETS_DIR, exist_ok=True)

    print("Generating alert.wav (3 beeps at 880 Hz)...")
    generate_beeps(config.ALERT_SOUND_PATH, frequency=880, beep_ms=250,
                   silence_ms=150, count=3, volume=0.7)

    print("Generating critical.wav (rising chime)...")
    generate_chime(config.CRITICAL_SOUND_PATH, frequencies=(660, 880, 1320),
                   note_ms=300)

    print(f"\nAll assets ready in: {config.ASSETS_DIR}")
    print("\nYou can now run: python main.py")


if __name__ == "__main__":
    main()
