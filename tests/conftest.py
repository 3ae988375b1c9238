"""Shared fixtures: deterministic clock and random source, Qt app, fake mixer."""

import os

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt6.QtCore import QCoreApplication


class ScriptedRandom:
    """Random source that replays a fixed list of variates, then a default."""

    def __init__(self, values, default=0.99):
        self.values = list(values)
        self.default = default
        self.calls = 0

    def random(self):
        self.calls += 1
        if self.values:
            return self.values.pop(0)
        return self.default


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, start=1000.0, step=0.0):
        self.now = start
        self.step = step

    def __call__(self):
        value = self.now
        self.now += self.step
        return value

    def advance(self, seconds):
        self.now += seconds


class FakeSound:
    def __init__(self, path):
        self.path = path
        self.plays = []
        self.stops = 0

    def play(self, loops=0):
        self.plays.append(loops)

    def stop(self):
        self.stops += 1


class FakeMixer:
    def __init__(self, fail=False):
        self.fail = fail
        self.sounds = []
        self.quit_called = False

    def init(self):
        if self.fail:
            import pygame
            raise pygame.error("no audio device")

    def Sound(self, path):
        sound = FakeSound(path)
        self.sounds.append(sound)
        return sound

    def stop(self):
        pass

    def quit(self):
        self.quit_called = True


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def scripted_random():
    return ScriptedRandom


@pytest.fixture(scope="session")
def qapp():
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app


@pytest.fixture
def fake_mixer(monkeypatch):
    import alarm

    mixer = FakeMixer()
    monkeypatch.setattr(alarm.pygame, "mixer", mixer)
    return mixer


@pytest.fixture
def sound_file(tmp_path):
    path = tmp_path / "alert.wav"
    path.write_bytes(b"RIFF")
    return str(path)
