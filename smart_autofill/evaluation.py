"""
evaluation.py - typing simulation harness

- Builds an engine from a vocabulary and trains it on old messages.
- Types every word of a test text letter by letter through guess().
- Stops typing a word as soon as it shows up among the guesses and reports
  accepted feedback; words never guessed get rejected feedback at the end.
- Summarises hits, accuracy and keystrokes saved.
"""
from __future__ import annotations

import logging
import time
from dataclasses import asdict, dataclass
from typing import Dict, Iterable, Optional

from smart_autofill.core.autofill import SmartWord
from smart_autofill.utils.config_manager import AutofillConfig

logger = logging.getLogger(__name__)


@dataclass
class EvaluationReport:
    words: int = 0
    letters_total: int = 0   # letters in the test words
    letters_typed: int = 0   # letters actually fed to guess()
    guesses: int = 0         # guess() calls
    hits: int = 0            # words that appeared among the guesses
    elapsed: float = 0.0

    @property
    def accuracy(self) -> float:
        """Share of guess() calls that contained the intended word."""
        return self.hits / self.guesses if self.guesses else 0.0

    @property
    def keystrokes_saved(self) -> int:
        return self.letters_total - self.letters_typed

    @property
    def word_hit_rate(self) -> float:
        return self.hits / self.words if self.words else 0.0

    def to_dict(self) -> Dict[str, float]:
        d = asdict(self)
        d["accuracy"] = self.accuracy
        d["keystrokes_saved"] = self.keystrokes_saved
        d["word_hit_rate"] = self.word_hit_rate
        return d


def build_engine(
    vocabulary: Iterable[str],
    corpus: Iterable[str] = (),
    config: Optional[AutofillConfig] = None,
) -> SmartWord:
    """Vocabulary first, then one pass over the old messages."""
    engine = SmartWord(vocabulary, config=config)
    engine.train(corpus)
    return engine


def simulate_typing(engine: SmartWord, words: Iterable[str]) -> EvaluationReport:
    """
    Feed `words` (already tokenized) to the engine one letter at a time.
    Mutates the engine through feedback, exactly like a live session would.
    """
    report = EvaluationReport()
    t0 = time.perf_counter()
    for word_pos, word in enumerate(words):
        report.words += 1
        report.letters_total += len(word)
        guessed = False
        for letter_pos, letter in enumerate(word):
            report.letters_typed += 1
            report.guesses += 1
            if word in engine.guess(letter, letter_pos, word_pos):
                guessed = True
                break
        if guessed:
            report.hits += 1
        engine.feedback(guessed, word)
    report.elapsed = time.perf_counter() - t0
    logger.info(
        "evaluated %d words: %d hits, accuracy %.4f",
        report.words, report.hits, report.accuracy,
    )
    return report
