import logging

from fastapi.responses import JSONResponse, Response
from sqlalchemy.orm import Session

from services.cache_policy import Clock, select_cache_directive, utc_now
from services.date_range import Redirect, normalize_date_range
from services.stats_queries import StatsFetcher

logger = logging.getLogger(__name__)


def redirect_response(redirect: Redirect) -> Response:
    return Response(
        status_code=redirect.status_code,
        headers={
            "location": redirect.location,
            "cache-control": redirect.cache.header_value,
        },
    )


def serve_stats(
    path: str,
    from_raw: str | None,
    to_raw: str | None,
    fetch_stats: StatsFetcher,
    db: Session,
    now: Clock = utc_now,
) -> Response:
    """Answer one stats request: redirect to the canonical URL or run the query.

    Raises ``BadRequest`` for malformed dates before any query is executed.
    """
    outcome = normalize_date_range(from_raw, to_raw, path, now=now)
    if isinstance(outcome, Redirect):
        logger.debug(f"Redirecting {path} to {outcome.location} ({outcome.status_code})")
        return redirect_response(outcome)

    stats = fetch_stats(db, outcome.date_range)
    directive = select_cache_directive(outcome.date_range, now=now)
    return JSONResponse(content=stats, headers={"cache-control": directive.header_value})
