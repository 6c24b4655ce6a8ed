# File: flagstack_app/modules/practice/config.py
from flagstack_app.models.enums import PracticeMode


class PracticeConfig:
    """
    Default configuration for the practice module.
    """
    # Presets offered by the client; any positive length is accepted
    SESSION_LENGTHS = (5, 10, 15, 30)
    ALL_FLAGS = 'all'

    DEFAULT_MODE = PracticeMode.LEARN
    DEFAULT_SESSION_LENGTH = 10

    # Every question is a 4-way multiple choice
    OPTION_COUNT = 4
    DISTRACTOR_COUNT = OPTION_COUNT - 1
    MIN_CATALOG_SIZE = OPTION_COUNT

    STREAK_MILESTONES = (5, 10, 15, 20)
