"""Normalization of the ``from``/``to`` query parameters.

Grafana sends full timestamps, browsers and scripts often send nothing at all.
Both cases are answered with a redirect to the canonical URL so that caches
key on exactly one URL per calendar range:

- a missing parameter is defaulted and answered with 302 (today moves daily)
- a timestamp is trimmed to its day and answered with 301 (the mapping is stable)
- a canonical ``YYYY-MM-DD`` pair is served
"""

import re
from dataclasses import dataclass
from datetime import date
from enum import Enum
from urllib.parse import urlencode

from errors import BadRequest
from services.cache_policy import (
    LONG_IMMUTABLE,
    SHORT_PUBLIC,
    CacheDirective,
    Clock,
    utc_now,
)

DATE_PARAM_PATTERN = re.compile(r"(\d{4}-\d{2}-\d{2})(T\d{2}:\d{2}:\d{2}\.\d{3}Z)?", re.ASCII)


class RedirectReason(str, Enum):
    MISSING_TO = "missing_to"
    MISSING_FROM = "missing_from"
    TIMESTAMP_TRIMMED = "timestamp_trimmed"


@dataclass(frozen=True)
class DateRange:
    from_: date
    to: date


@dataclass(frozen=True)
class Redirect:
    status_code: int
    location: str
    cache: CacheDirective
    reasons: frozenset[RedirectReason]


@dataclass(frozen=True)
class Serve:
    date_range: DateRange


NormalizedRange = Redirect | Serve


def today(now: Clock = utc_now) -> str:
    return now().date().isoformat()


def _location(path: str, from_: str, to: str) -> str:
    return f"{path}?{urlencode({'from': from_, 'to': to})}"


def _parse_param(name: str, raw: str) -> tuple[date, bool]:
    """Return the calendar day of ``raw`` and whether a timestamp was trimmed."""
    match = DATE_PARAM_PATTERN.fullmatch(raw)
    if not match:
        raise BadRequest(f'"{name}" must have format YYYY-MM-DD or YYYY-MM-DDThh:mm:ss.sssZ')
    try:
        day = date.fromisoformat(match.group(1))
    except ValueError:
        raise BadRequest(f'"{name}" is not a valid calendar date')
    return day, match.group(2) is not None


def normalize_date_range(
    from_raw: str | None,
    to_raw: str | None,
    path: str,
    now: Clock = utc_now,
) -> NormalizedRange:
    reasons: set[RedirectReason] = set()

    to = to_raw
    if not to:
        to = today(now)
        reasons.add(RedirectReason.MISSING_TO)
    from_ = from_raw
    if not from_:
        from_ = to
        reasons.add(RedirectReason.MISSING_FROM)
    if reasons:
        return Redirect(
            status_code=302,
            location=_location(path, from_, to),
            cache=SHORT_PUBLIC,
            reasons=frozenset(reasons),
        )

    from_day, from_trimmed = _parse_param("from", from_)
    to_day, to_trimmed = _parse_param("to", to)
    date_range = DateRange(from_=from_day, to=to_day)

    if from_trimmed or to_trimmed:
        return Redirect(
            status_code=301,
            location=_location(path, from_day.isoformat(), to_day.isoformat()),
            cache=LONG_IMMUTABLE,
            reasons=frozenset({RedirectReason.TIMESTAMP_TRIMMED}),
        )

    return Serve(date_range)
