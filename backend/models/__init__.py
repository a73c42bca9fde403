from models.retrieval_stats import RetrievalStats
from models.daily_participant import DailyParticipant

__all__ = ["RetrievalStats", "DailyParticipant"]
