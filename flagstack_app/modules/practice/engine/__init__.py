from .answer_engine import AnswerEngine
from .distractor_engine import DistractorEngine

__all__ = ['AnswerEngine', 'DistractorEngine']
