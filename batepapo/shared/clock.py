# batepapo/shared/clock.py
from __future__ import annotations

import time
from datetime import datetime
from typing import Callable

Clock = Callable[[], int]
TimeOfDay = Callable[[], str]


def now_ms() -> int:
    """Wall-clock milliseconds since the epoch."""
    return int(time.time() * 1000)


def time_of_day() -> str:
    # local time, HH:MM:SS
    return datetime.now().strftime("%H:%M:%S")
