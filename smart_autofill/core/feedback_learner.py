# smart_autofill/core/feedback_learner.py
"""
FeedbackLearner
---------------
Online learning step run once per resolved word.
 - reward/penalty on the word's unigram weight (FrequencyModel)
 - refresh of that one word in the prefix caches along its path
 - bigram/trigram update from the context the word was typed in
 - context rotation for the next SuggestionEngine call
"""

from __future__ import annotations
import logging
import re
from collections import Counter
from typing import Dict, Optional

from smart_autofill.core.frequency_model import FrequencyModel
from smart_autofill.core.suggestion_engine import SessionState
from smart_autofill.core.trie import PrefixIndex

logger = logging.getLogger(__name__)

_WORD_RE = re.compile(r"[a-z]+")


def is_word(token: Optional[str]) -> bool:
    """True for a non-empty, purely lowercase a-z token."""
    return isinstance(token, str) and _WORD_RE.fullmatch(token) is not None


class FeedbackLearner:
    """
    Public API:
        on_feedback(accepted, correct_word) -> bool (False when ignored)
        stats()
    """

    def __init__(self, index: PrefixIndex, model: FrequencyModel, session: SessionState) -> None:
        self.index = index
        self.model = model
        self.session = session
        self._counts: Counter = Counter()

    def on_feedback(self, accepted: bool, correct_word: Optional[str]) -> bool:
        if not is_word(correct_word):
            # feedback not determinable yet, or a malformed word
            self._counts["ignored"] += 1
            logger.debug("feedback ignored for %r", correct_word)
            return False

        s = self.session
        new_weight = self.model.apply_feedback(correct_word, accepted)
        self.index.refresh(correct_word, new_weight)
        self.model.observe_context(correct_word, s.last_word, s.second_last_word)
        s.rotate(correct_word)

        self._counts["accepted" if accepted else "rejected"] += 1
        logger.debug(
            "feedback %s %r -> weight %d",
            "accept" if accepted else "reject", correct_word, new_weight,
        )
        return True

    def stats(self) -> Dict[str, int]:
        return {k: self._counts[k] for k in ("accepted", "rejected", "ignored")}
