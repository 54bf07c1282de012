# autofill.py
"""
SmartWord - application facade.

Purpose:
 - own one PrefixIndex, FrequencyModel and SessionState per typing session
 - wire the SuggestionEngine and FeedbackLearner onto the shared state
 - small public API for the CLI, the evaluation harness and tests:
     SmartWord(vocabulary), train(corpus), guess(letter, letter_pos, word_pos),
     feedback(accepted, correct_word), stats()
 - one lock per instance, every public call holds it for its whole duration
"""

from __future__ import annotations
import logging
import threading
from typing import Any, Dict, Iterable, List, Optional

from smart_autofill.core.feedback_learner import FeedbackLearner, is_word
from smart_autofill.core.frequency_model import FrequencyModel
from smart_autofill.core.suggestion_engine import (
    EngineState,
    SessionState,
    SuggestionEngine,
)
from smart_autofill.core.trie import PrefixIndex
from smart_autofill.utils.config_manager import AutofillConfig

logger = logging.getLogger(__name__)


class SmartWord:
    """Autofill engine for one typing session.
    Public API:
      - guess(letter, letter_position, word_position) -> [w|None, w|None, w|None]
      - feedback(accepted, correct_word) -> None
      - train(corpus) -> int (tokens consumed)
      - stats() -> Dict[str, Any]
    """

    def __init__(
        self,
        vocabulary: Iterable[str] = (),
        config: Optional[AutofillConfig] = None,
    ) -> None:
        self.cfg = config or AutofillConfig()
        self._lock = threading.RLock()
        self.index = PrefixIndex(
            cache_size=self.cfg.cache_size, use_cache=self.cfg.cache_completions
        )
        self.model = FrequencyModel(self.cfg)
        self.session = SessionState()
        self.engine = SuggestionEngine(self.index, self.model, self.session, self.cfg)
        self.learner = FeedbackLearner(self.index, self.model, self.session)
        self._guesses = 0

        skipped = 0
        for word in vocabulary:
            if not is_word(word):
                skipped += 1
                continue
            self.index.insert(word, self.model.seed(word))
        if skipped:
            logger.warning("skipped %d vocabulary entries that are not lowercase words", skipped)
        logger.info("vocabulary loaded: %d words", len(self.index))

    # Training ---------------------------------------------------------
    def train(self, corpus: Iterable[str]) -> int:
        """
        Consume a token stream. Context starts empty on every call and rolls
        over the last two accepted tokens.
        """
        consumed = 0
        with self._lock:
            prev: Optional[str] = None
            prev_prev: Optional[str] = None
            for token in corpus:
                if not is_word(token):
                    logger.debug("skipping corpus token %r", token)
                    continue
                weight = self.model.train_token(token, prev, prev_prev)
                self.index.insert(token, weight)
                prev_prev, prev = prev, token
                consumed += 1
        logger.info("trained on %d tokens", consumed)
        return consumed

    # Runtime API ---------------------------------------------------------
    def guess(self, letter: str, letter_position: int, word_position: int) -> List[Optional[str]]:
        with self._lock:
            self._guesses += 1
            return self.engine.on_letter(letter, letter_position, word_position)

    def feedback(self, accepted: bool, correct_word: Optional[str]) -> None:
        with self._lock:
            self.learner.on_feedback(accepted, correct_word)

    # Context ---------------------------------------------------------
    @property
    def state(self) -> EngineState:
        return self.session.state

    def set_context(self, last_word: Optional[str], second_last_word: Optional[str] = None) -> None:
        """Restore the rolling context, e.g. after loading a saved model."""
        with self._lock:
            self.session.last_word = last_word if is_word(last_word) else None
            self.session.second_last_word = (
                second_last_word if is_word(second_last_word) else None
            )

    def snapshot(self) -> Dict[str, Any]:
        """Learned tables plus the rolling context, taken under the lock."""
        with self._lock:
            data = self.model.export_state()
            data["context"] = {
                "last_word": self.session.last_word,
                "second_last_word": self.session.second_last_word,
            }
            return data

    def stats(self) -> Dict[str, Any]:
        with self._lock:
            out: Dict[str, Any] = {
                "vocab_size": self.model.vocabulary_size(),
                "guesses": self._guesses,
                "state": self.session.state,
                "last_word": self.session.last_word,
                "second_last_word": self.session.second_last_word,
            }
            out.update(self.learner.stats())
            return out
