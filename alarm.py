"""
alarm.py — Notification collaborators for the DriveGuard core.
AlarmManager plays the driver-side alert sound while an active alert exists.
ControlRoomFeed collects critical-transition banners for the control room.
Both use pygame.mixer and respect a sound-enabled toggle.
"""

import os
from collections import deque
from datetime import datetime

import pygame

import config


def _init_mixer() -> bool:
    """Initialise pygame.mixer; False when no audio device is available."""
    try:
        pygame.mixer.init()
    except pygame.error:
        return False
    return True


def _load_sound(path: str):
    if not os.path.exists(path):
        return None
    return pygame.mixer.Sound(path)


class AlarmManager:
    """Driver-side alert sound, driven by the aggregator's active alert.

    It is only told *that* an alert is active; the loop plays until the
    active alert goes away or sound is switched off.
    """

    def __init__(self, sound_enabled: bool = True,
                 sound_path: str = config.ALERT_SOUND_PATH):
        self._sound_enabled = sound_enabled
        self._active_alert = None
        self._is_playing = False

        self._audio_ready = _init_mixer()
        self._alert_sound = _load_sound(sound_path) if self._audio_ready else None

    # ──────────────────────────────────────────────────────────────────────────
    # Public API
    # ──────────────────────────────────────────────────────────────────────────

    @property
    def sound_enabled(self) -> bool:
        return self._sound_enabled

    @property
    def active_alert(self):
        return self._active_alert

    @property
    def is_alarming(self) -> bool:
        """True while an alert is active and sound is enabled."""
        return self._active_alert is not None and self._sound_enabled

    def on_active_alert_changed(self, alert):
        """Listener for AlertAggregator: called with the new active alert or None."""
        self._active_alert = alert
        self._update()

    def set_sound_enabled(self, enabled: bool):
        self._sound_enabled = bool(enabled)
        self._update()

    def toggle_sound(self) -> bool:
        self.set_sound_enabled(not self._sound_enabled)
        return self._sound_enabled

    def cleanup(self):
        """Stop playback and release pygame mixer resources."""
        self._stop()
        if self._audio_ready:
            pygame.mixer.quit()
            self._audio_ready = False

    # ──────────────────────────────────────────────────────────────────────────
    # Internal helpers
    # ──────────────────────────────────────────────────────────────────────────

    def _update(self):
        if self.is_alarming:
            self._play_loop()
        else:
            self._stop()

    def _play_loop(self):
        if self._is_playing or self._alert_sound is None:
            return
        self._alert_sound.play(loops=-1)
        self._is_playing = True

    def _stop(self):
        if self._is_playing and self._alert_sound is not None:
            self._alert_sound.stop()
        self._is_playing = False


class ControlRoomFeed:
    """Control-room side of the fleet engine: banners plus a one-shot alarm.

    Banners are kept newest-last in a bounded deque for whatever display
    consumes them.
    """

    def __init__(self, logger=None, sound_enabled: bool = True,
                 sound_path: str = config.CRITICAL_SOUND_PATH,
                 maxlen: int = config.CONTROL_ROOM_FEED_SIZE):
        self._logger = logger
        self.sound_enabled = sound_enabled
        self.messages = deque(maxlen=maxlen)
        self.critical_transitions = 0

        self._audio_ready = _init_mixer()
        self._critical_sound = _load_sound(sound_path) if self._audio_ready else None

    def on_critical_transition(self, driver_id: str, name: str, vehicle_id: str,
                               timestamp: float):
        self.critical_transitions += 1
        self._post(
            driver_id,
            title="Critical Alert",
            description=f"{name} ({vehicle_id}) - Drowsiness detected!",
            variant="destructive",
            timestamp=timestamp,
        )
        if self.sound_enabled and self._critical_sound is not None:
            self._critical_sound.play()
        if self._logger is not None:
            self._logger.log_fleet_event(driver_id, name, vehicle_id,
                                         "critical_transition")

    def on_driver_contacted(self, driver_id: str, name: str, vehicle_id: str):
        self._post(
            driver_id,
            title="Driver Contacted",
            description=f"Connecting to {name} ({vehicle_id})...",
            variant="default",
            timestamp=None,
        )
        if self._logger is not None:
            self._logger.log_fleet_event(driver_id, name, vehicle_id,
                                         "driver_contacted")

    def latest(self):
        return self.messages[-1] if self.messages else None

    def cleanup(self):
        """Stop the chime and release pygame mixer resources."""
        if self._critical_sound is not None:
            self._critical_sound.stop()
            self._critical_sound = None
        if self._audio_ready:
            pygame.mixer.quit()
            self._audio_ready = False

    def _post(self, driver_id, title, description, variant, timestamp):
        self.messages.append({
            "driver_id": driver_id,
            "title": title,
            "description": description,
            "variant": variant,
            "timestamp": timestamp,
            "posted_at": datetime.now().strftime("%H:%M:%S"),
        })
