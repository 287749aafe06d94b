"""Wall-clock access that can be replaced in tests."""

from __future__ import annotations

import time


class TimeService:
    """Reports the current time."""

    def current_time_seconds(self) -> int:
        """Whole seconds since the Unix epoch."""
        return int(time.time())