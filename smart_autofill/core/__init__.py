"""
smart_autofill.core

The engine behind letter-by-letter autofill.
Contains:
 - prefix tree with cached completions (PrefixIndex)
 - unigram/bigram/trigram statistics (FrequencyModel)
 - per-keystroke ranking state machine (SuggestionEngine)
 - online reward/penalty learning (FeedbackLearner)
 - the SmartWord facade tying them together
"""

from .trie import PrefixIndex, PrefixNode
from .frequency_model import FrequencyModel
from .suggestion_engine import DEAD, IDLE, TYPING, DeadReason, EngineState, SessionState, SuggestionEngine
from .feedback_learner import FeedbackLearner
from .autofill import SmartWord

__all__ = [
    "PrefixIndex",
    "PrefixNode",
    "FrequencyModel",
    "SuggestionEngine",
    "SessionState",
    "EngineState",
    "DeadReason",
    "IDLE",
    "TYPING",
    "DEAD",
    "FeedbackLearner",
    "SmartWord",
]
