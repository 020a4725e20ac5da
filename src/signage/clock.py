"""Wall-clock helpers; every timestamp exchanged with players is epoch milliseconds."""

from __future__ import annotations

import time
from typing import Callable

Clock = Callable[[], int]


def epoch_ms() -> int:
    return int(time.time() * 1000)
