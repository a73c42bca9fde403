"""Stats endpoints. Public, read only, cache friendly."""

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from database import get_db
from services.cache_policy import Clock, utc_now
from services.stats_pipeline import serve_stats
from services.stats_queries import (
    StatsFetcher,
    fetch_daily_participants,
    fetch_miners_retrieval_success_rate_summary,
    fetch_monthly_participants,
    fetch_retrieval_success_rate,
)

router = APIRouter(tags=["stats"])


def get_clock() -> Clock:
    return utc_now


def _serve(
    request: Request,
    from_: str | None,
    to: str | None,
    fetch_stats: StatsFetcher,
    db: Session,
    now: Clock,
):
    return serve_stats(request.url.path, from_, to, fetch_stats, db, now=now)


@router.get("/retrieval-success-rate")
def retrieval_success_rate(
    request: Request,
    from_: str | None = Query(None, alias="from"),
    to: str | None = Query(None),
    db: Session = Depends(get_db),
    now: Clock = Depends(get_clock),
):
    return _serve(request, from_, to, fetch_retrieval_success_rate, db, now)


@router.get("/participants/daily")
def daily_participants(
    request: Request,
    from_: str | None = Query(None, alias="from"),
    to: str | None = Query(None),
    db: Session = Depends(get_db),
    now: Clock = Depends(get_clock),
):
    return _serve(request, from_, to, fetch_daily_participants, db, now)


@router.get("/participants/monthly")
def monthly_participants(
    request: Request,
    from_: str | None = Query(None, alias="from"),
    to: str | None = Query(None),
    db: Session = Depends(get_db),
    now: Clock = Depends(get_clock),
):
    return _serve(request, from_, to, fetch_monthly_participants, db, now)


@router.get("/miners/retrieval-success-rate/summary")
def miners_retrieval_success_rate_summary(
    request: Request,
    from_: str | None = Query(None, alias="from"),
    to: str | None = Query(None),
    db: Session = Depends(get_db),
    now: Clock = Depends(get_clock),
):
    return _serve(request, from_, to, fetch_miners_retrieval_success_rate_summary, db, now)
