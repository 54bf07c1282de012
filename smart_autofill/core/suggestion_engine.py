# suggestion_engine.py
"""
SuggestionEngine
----------------
Per-keystroke state machine. Walks the PrefixIndex one letter at a time and
ranks the completions below the cursor with the FrequencyModel.

States:
    IDLE   -> nothing typed yet
    TYPING -> cursor sits on a valid prefix node
    DEAD   -> cursor lost (bad letter or unknown prefix) until letter position 0

Ranking key: context score desc, weight desc, word asc.
Nothing here mutates the index or the model.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Literal, Optional

from smart_autofill.core.frequency_model import FrequencyModel
from smart_autofill.core.trie import PrefixIndex, PrefixNode, letter_index
from smart_autofill.utils.config_manager import AutofillConfig

logger = logging.getLogger(__name__)

Guesses = List[Optional[str]]


EngineState = Literal["idle", "typing", "dead"]
DeadReason = Literal["invalid_character", "unmatched_prefix"]

IDLE: EngineState = "idle"
TYPING: EngineState = "typing"
DEAD: EngineState = "dead"

INVALID_CHARACTER: DeadReason = "invalid_character"
UNMATCHED_PREFIX: DeadReason = "unmatched_prefix"


@dataclass
class SessionState:
    """Everything that belongs to one typing session."""
    buffer: List[str] = field(default_factory=list)
    cursor: Optional[PrefixNode] = None
    state: EngineState = IDLE
    dead_reason: Optional[DeadReason] = None
    last_word: Optional[str] = None
    second_last_word: Optional[str] = None

    @property
    def prefix(self) -> str:
        return "".join(self.buffer)

    def rotate(self, word: str) -> None:
        self.second_last_word = self.last_word
        self.last_word = word


class SuggestionEngine:
    def __init__(
        self,
        index: PrefixIndex,
        model: FrequencyModel,
        session: Optional[SessionState] = None,
        config: Optional[AutofillConfig] = None,
    ) -> None:
        self.index = index
        self.model = model
        self.session = session or SessionState()
        self.cfg = config or model.cfg

    @property
    def state(self) -> EngineState:
        return self.session.state

    def on_letter(self, letter: str, letter_position: int, word_position: int) -> Guesses:
        s = self.session
        if letter_position == 0:
            s.buffer.clear()
            s.cursor = self.index.root
            s.state = TYPING
            s.dead_reason = None

        # non-text input is kept as a placeholder so the prefix stays printable
        s.buffer.append(letter if isinstance(letter, str) else "?")

        if s.state != TYPING:
            # still DEAD, or IDLE because the word never started at position 0
            return self._die(s.dead_reason or UNMATCHED_PREFIX)
        if letter_index(letter) < 0:
            return self._die(INVALID_CHARACTER)

        nxt = s.cursor.child(letter)
        if nxt is None:
            return self._die(UNMATCHED_PREFIX)
        s.cursor = nxt

        candidates = self.index.completions_under(nxt, self.cfg.candidate_limit)
        return self._pad(self.rank(candidates))

    def rank(self, candidates: Iterable[str]) -> List[str]:
        """Order candidates by context, then weight, then alphabetically."""
        last, second = self.session.last_word, self.session.second_last_word
        score = self.model.context_score
        weight = self.model.weight
        return sorted(
            candidates,
            key=lambda w: (-score(w, last, second), -weight(w), w),
        )

    def _die(self, reason: DeadReason) -> Guesses:
        s = self.session
        if s.state != DEAD:
            logger.debug("prefix %r dead: %s", s.prefix, reason)
        s.state = DEAD
        s.dead_reason = reason
        s.cursor = None
        return self._pad([])

    def _pad(self, ranked: List[str]) -> Guesses:
        n = self.cfg.suggestion_count
        out: Guesses = list(ranked[:n])
        out.extend([None] * (n - len(out)))
        return out
