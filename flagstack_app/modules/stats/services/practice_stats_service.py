"""
Practice Stats Service - loads a user's sessions and aggregates them.
"""

from flagstack_app.modules.auth.schemas import AuthenticatedUser
from flagstack_app.modules.practice.interface import PracticeInterface
from ..logics.aggregation import aggregate_practice_stats
from ..schemas import SessionRecord, UserPracticeStats


class PracticeStatsService:
    @staticmethod
    def get_user_stats(user: AuthenticatedUser) -> UserPracticeStats:
        sessions = PracticeInterface.list_user_sessions(user.user_id)
        return aggregate_practice_stats(SessionRecord.from_model(s) for s in sessions)
