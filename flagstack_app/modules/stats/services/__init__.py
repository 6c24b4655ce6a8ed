from .practice_stats_service import PracticeStatsService

__all__ = ['PracticeStatsService']
