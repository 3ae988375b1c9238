"""
utils.py — Stateless helpers shared by the DriveGuard core.
Provides the injectable clock and random source, alert ids, and the
configuration error raised when a component is built with missing parts.
"""

import time
import uuid
from datetime import datetime, timedelta

import numpy as np


class ConfigurationError(ValueError):
    """A component was constructed with a missing or malformed dependency."""


def monotonic_clock():
    """Default clock: monotonic seconds as a float."""
    return time.monotonic()


def make_rng(seed=None):
    """Create the default uniform random source.

    Args:
        seed: Optional integer seed for reproducible runs.

    Returns:
        numpy Generator; anything exposing ``random() -> float in [0, 1)``
        can be used in its place.
    """
    return np.random.default_rng(seed)


def new_alert_id():
    """Return a process-unique alert identifier."""
    return uuid.uuid4().hex


def require(value, name):
    """Raise ConfigurationError if a mandatory collaborator is missing."""
    if value is None:
        raise ConfigurationError(f"{name} must be provided")
    return value


def monotonic_to_wall(timestamp, clock=monotonic_clock):
    """Convert a monotonic timestamp to a wall-clock datetime for display.

    Args:
        timestamp: Monotonic seconds produced by ``clock``.
        clock: The clock that produced ``timestamp``.

    Returns:
        datetime, or None when ``timestamp`` is None.
    """
    if timestamp is None:
        return None
    return datetime.now() - timedelta(seconds=clock() - timestamp)


def format_timestamp(timestamp, clock=monotonic_clock):
    """Human-readable HH:MM:SS for a monotonic timestamp ("None" if unset)."""
    wall = monotonic_to_wall(timestamp, clock)
    if wall is None:
        return "None"
    return wall.strftime("%H:%M:%S")
