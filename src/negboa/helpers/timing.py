from __future__ import annotations

import time

from negboa.config import CONFIG_KEY_MAX_DELAY, negboa_config

__all__ = ["bounded_delay"]


def bounded_delay(seconds: float, max_seconds: float | None = None) -> float:
    """
    Pauses the calling thread for at most `max_seconds`.

    Args:
        seconds: Requested pause. Non-positive values return immediately.
        max_seconds: Upper limit of the pause. Read from the `max_delay`
                     config key if not given.

    Returns:
        The number of seconds actually requested from the clock.
    """
    if max_seconds is None:
        max_seconds = float(negboa_config(CONFIG_KEY_MAX_DELAY, 1.0))
    seconds = min(float(seconds), max(0.0, max_seconds))
    if seconds <= 0:
        return 0.0
    time.sleep(seconds)
    return seconds
