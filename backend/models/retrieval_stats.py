from datetime import date
from sqlalchemy import Date, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column
from database import Base


class RetrievalStats(Base):
    """Per-miner retrieval totals for one day, written by the evaluation service."""

    __tablename__ = "retrieval_stats"

    day: Mapped[date] = mapped_column(Date, primary_key=True)
    miner_id: Mapped[str] = mapped_column(Text, primary_key=True)
    total: Mapped[int] = mapped_column(Integer, nullable=False)
    successful: Mapped[int] = mapped_column(Integer, nullable=False)
