"""Aggregate queries over the daily stats tables.

Days are rendered to ``YYYY-MM-DD`` in Python from ``datetime.date`` values,
never from a timezone-aware datetime, so a row can't shift one day forward or
back on its way out.
"""

from datetime import date
from typing import Any, Callable

from sqlalchemy import distinct, extract, func, select
from sqlalchemy.orm import Session

from models.daily_participant import DailyParticipant
from models.retrieval_stats import RetrievalStats
from services.date_range import DateRange

StatsFetcher = Callable[[Session, DateRange], list[dict[str, Any]]]


def _success_rate(total: int | None, successful: int | None) -> float | None:
    if not total:
        return None
    return int(successful) / int(total)


def month_start(day: date) -> date:
    return day.replace(day=1)


def next_month_start(day: date) -> date:
    if day.month == 12:
        return date(day.year + 1, 1, 1)
    return date(day.year, day.month + 1, 1)


def fetch_retrieval_success_rate(db: Session, date_range: DateRange) -> list[dict[str, Any]]:
    """Retrieval success rate per day, summed across all miners."""
    stmt = (
        select(
            RetrievalStats.day,
            func.sum(RetrievalStats.total).label("total"),
            func.sum(RetrievalStats.successful).label("successful"),
        )
        .where(RetrievalStats.day >= date_range.from_, RetrievalStats.day <= date_range.to)
        .group_by(RetrievalStats.day)
        .order_by(RetrievalStats.day)
    )
    return [
        {"day": row.day.isoformat(), "success_rate": _success_rate(row.total, row.successful)}
        for row in db.execute(stmt)
    ]


def fetch_daily_participants(db: Session, date_range: DateRange) -> list[dict[str, Any]]:
    stmt = (
        select(
            DailyParticipant.day,
            func.count(distinct(DailyParticipant.participant_id)).label("participants"),
        )
        .where(DailyParticipant.day >= date_range.from_, DailyParticipant.day <= date_range.to)
        .group_by(DailyParticipant.day)
        .order_by(DailyParticipant.day)
    )
    return [
        {"day": row.day.isoformat(), "participants": row.participants}
        for row in db.execute(stmt)
    ]


def fetch_monthly_participants(db: Session, date_range: DateRange) -> list[dict[str, Any]]:
    """Distinct participants per calendar month.

    The range is widened to whole months: from the first day of the month of
    ``from`` up to (excluding) the first day of the month after ``to``.
    """
    year = extract("year", DailyParticipant.day).label("year")
    month = extract("month", DailyParticipant.day).label("month")
    stmt = (
        select(
            year,
            month,
            func.count(distinct(DailyParticipant.participant_id)).label("participants"),
        )
        .where(
            DailyParticipant.day >= month_start(date_range.from_),
            DailyParticipant.day < next_month_start(date_range.to),
        )
        .group_by(year, month)
        .order_by(year, month)
    )
    return [
        {
            "month": date(int(row.year), int(row.month), 1).isoformat(),
            "participants": row.participants,
        }
        for row in db.execute(stmt)
    ]


def fetch_miners_retrieval_success_rate_summary(
    db: Session, date_range: DateRange
) -> list[dict[str, Any]]:
    """Retrieval success rate per miner over the whole range."""
    stmt = (
        select(
            RetrievalStats.miner_id,
            func.sum(RetrievalStats.total).label("total"),
            func.sum(RetrievalStats.successful).label("successful"),
        )
        .where(RetrievalStats.day >= date_range.from_, RetrievalStats.day <= date_range.to)
        .group_by(RetrievalStats.miner_id)
        .order_by(RetrievalStats.miner_id)
    )
    return [
        {"miner_id": row.miner_id, "success_rate": _success_rate(row.total, row.successful)}
        for row in db.execute(stmt)
    ]
