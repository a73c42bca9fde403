from datetime import date
from sqlalchemy import Date, Integer
from sqlalchemy.orm import Mapped, mapped_column
from database import Base


class DailyParticipant(Base):
    __tablename__ = "daily_participants"

    day: Mapped[date] = mapped_column(Date, primary_key=True)
    participant_id: Mapped[int] = mapped_column(Integer, primary_key=True)
