"""
Timezone utility functions for the Parlay Club pool

Every "day of week" and clock-based reveal rule is evaluated in one canonical
local zone. Game kickoffs are stored in UTC; naive datetimes are read as UTC.
"""

import logging
from datetime import datetime, time, timezone

import pytz
from flask import current_app, has_app_context

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "America/Los_Angeles"

# Pacific Standard Time, used when the zone database cannot be loaded
FALLBACK_UTC_OFFSET_MINUTES = -8 * 60


class LocalZoneProvider:
    """Converts instants to the pool's canonical local zone.

    If the zone name cannot be resolved the provider switches to a fixed
    UTC-8 offset and sets ``degraded``. Results in degraded mode are wrong by
    one hour while daylight saving time is in effect.
    """

    def __init__(self, zone_name=DEFAULT_TIMEZONE):
        self.zone_name = zone_name
        self.degraded = False
        try:
            self.zone = pytz.timezone(zone_name)
        except pytz.UnknownTimeZoneError:
            self.zone = pytz.FixedOffset(FALLBACK_UTC_OFFSET_MINUTES)
            self.degraded = True
            logger.error(
                f"Timezone '{zone_name}' unavailable, falling back to fixed "
                f"UTC{FALLBACK_UTC_OFFSET_MINUTES // 60:+d} offset "
                "(reveal times will drift across DST transitions)"
            )

    def __repr__(self):
        mode = " degraded" if self.degraded else ""
        return f"<LocalZoneProvider {self.zone_name}{mode}>"

    def to_local(self, dt):
        """Convert a datetime to the canonical zone (naive is read as UTC)"""
        if dt is None:
            return None

        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)

        return self.zone.normalize(dt.astimezone(self.zone))

    def localize(self, naive_dt):
        """Attach the canonical zone to a naive local wall-clock datetime"""
        return self.zone.localize(naive_dt)

    def local_date(self, dt):
        return self.to_local(dt).date()

    def local_weekday(self, dt):
        """Weekday of the local date (Monday=0 ... Sunday=6)"""
        return self.local_date(dt).weekday()

    def local_date_key(self, dt):
        """Local calendar date as a YYYY-MM-DD string"""
        return self.local_date(dt).strftime("%Y-%m-%d")

    def at_local_time(self, day, hour, minute=0, second=0):
        """Aware instant for a wall-clock time on a local calendar date"""
        return self.localize(datetime.combine(day, time(hour, minute, second)))

    def now(self):
        return datetime.now(timezone.utc).astimezone(self.zone)


_default_provider = None


def get_default_provider():
    """Module-level provider for the default zone, used outside an app"""
    global _default_provider
    if _default_provider is None:
        _default_provider = LocalZoneProvider(DEFAULT_TIMEZONE)
    return _default_provider


def get_zone_provider():
    """Get the zone provider configured on the current app"""
    if has_app_context():
        extension = current_app.extensions.get("parlay_club")
        if extension is not None:
            return extension.zone

        zone_name = current_app.config.get("POOL_TIMEZONE", DEFAULT_TIMEZONE)
        if zone_name != DEFAULT_TIMEZONE:
            return LocalZoneProvider(zone_name)

    return get_default_provider()
