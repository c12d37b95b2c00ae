"""
Clock sources for time-dependent pick visibility

Visibility rules compare a reveal instant against "now". The engine gets its
notion of now from an injected clock so tests and the demo tools can move time.
"""

import logging
import threading
from datetime import datetime

from parlay_club.utils.timezone_utils import get_zone_provider

logger = logging.getLogger(__name__)


class SystemClock:
    """Real current time in the pool's canonical zone"""

    def __init__(self, zone=None):
        self.zone = zone or get_zone_provider()

    def now(self):
        return self.zone.now()

    @property
    def is_overridden(self):
        return False


class OverridableClock(SystemClock):
    """
    System clock with a settable override for testing and demo time travel.

    The override is shared by every request in the process, so reads and
    writes go through a lock.
    """

    def __init__(self, zone=None):
        super().__init__(zone)
        self._lock = threading.Lock()
        self._override = None

    def __repr__(self):
        override = self.override
        return f"<OverridableClock override={override.isoformat() if override else None}>"

    def now(self):
        with self._lock:
            override = self._override
        if override is not None:
            return override
        return super().now()

    @property
    def override(self):
        with self._lock:
            return self._override

    @property
    def is_overridden(self):
        return self.override is not None

    def set_override(self, instant):
        """
        Pin "now" to a fixed instant.

        Args:
            instant: datetime; naive values are read as local pool time
        """
        if not isinstance(instant, datetime):
            raise ValueError(f"Clock override must be a datetime, got {instant!r}")

        if instant.tzinfo is None:
            instant = self.zone.localize(instant)
        instant = self.zone.to_local(instant)

        with self._lock:
            self._override = instant

        logger.info(f"Clock override set to {instant.strftime('%Y-%m-%d %H:%M:%S %Z')}")

    def clear_override(self):
        """Return to real time"""
        with self._lock:
            self._override = None
        logger.info("Clock override cleared, using real time")


def parse_override(value, zone=None):
    """Parse an ISO datetime string for the clock override"""
    if not value:
        raise ValueError("No datetime provided")
    if not isinstance(value, str):
        raise ValueError(f"Datetime must be an ISO string, got {value!r}")

    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError as e:
        raise ValueError(f"Invalid datetime '{value}': {e}") from e

    if parsed.tzinfo is None:
        zone = zone or get_zone_provider()
        parsed = zone.localize(parsed)
    return parsed
