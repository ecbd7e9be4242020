"""Clock - The only place where the wall clock is read."""

from collections.abc import Callable
from datetime import datetime
from zoneinfo import ZoneInfo

from aribe.config.settings import get_settings

Clock = Callable[[], datetime]


def local_now(timezone: str | None = None) -> datetime:
    """Current wall-clock time in the shop's timezone.

    Args:
        timezone: IANA timezone name. Defaults to settings.shop_timezone.

    Returns:
        Naive datetime holding the local wall-clock reading.
    """
    tz = ZoneInfo(timezone or get_settings().shop_timezone)
    return datetime.now(tz).replace(tzinfo=None)
