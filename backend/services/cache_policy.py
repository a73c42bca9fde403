from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable

Clock = Callable[[], datetime]

# We cannot simply compare against today: stats for the previous day may still
# be finalizing. Allow up to one hour for that.
FINALIZATION_DELAY = timedelta(hours=1)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class CacheDirective:
    max_age: int
    immutable: bool = False

    @property
    def header_value(self) -> str:
        value = f"public, max-age={self.max_age}"
        if self.immutable:
            value += ", immutable"
        return value


# partial data for the current period, cache for 10 minutes only
SHORT_PUBLIC = CacheDirective(max_age=600)
# historical data never changes, cache for one year
LONG_IMMUTABLE = CacheDirective(max_age=365 * 24 * 3600, immutable=True)


def select_cache_directive(date_range, now: Clock = utc_now) -> CacheDirective:
    """Pick the cache directive for a stats response covering ``date_range``.

    Only ``date_range.to`` and the clock matter, the rows themselves are never
    inspected.
    """
    boundary = (now() - FINALIZATION_DELAY).date()
    if date_range.to >= boundary:
        return SHORT_PUBLIC
    return LONG_IMMUTABLE
