# frequency_model.py
# unigram weights plus bigram/trigram context counts with bounded memory.

from __future__ import annotations
from collections import defaultdict
from typing import Dict, Optional, Tuple

from smart_autofill.utils.config_manager import AutofillConfig

Word = str
Counts = Dict[Word, int]
TrigramKey = Tuple[Word, Word]


def _enforce_bound(counts: Counts, limit: int) -> None:
    """
    Drop entries until `counts` holds at most `limit` words.
    The victim is the first minimum found in insertion order, so eviction is
    reproducible between runs.
    """
    while len(counts) > limit:
        victim = None
        lowest = 0
        for w, c in counts.items():
            if victim is None or c < lowest:
                victim, lowest = w, c
        del counts[victim]


class FrequencyModel:
    """
    Statistical side of the engine:
      - unigram weights (ranking key for every candidate)
      - bigram[prev][next] and trigram[(prev_prev, prev)][next] counts
      - the fixed reward/penalty rule applied on feedback

    Counts never go down except through eviction, weights never go below 0.
    """

    def __init__(self, config: Optional[AutofillConfig] = None) -> None:
        self.cfg = config or AutofillConfig()
        self._uni: Counts = {}
        self._bi: Dict[Word, Counts] = defaultdict(dict)
        self._tri: Dict[TrigramKey, Counts] = defaultdict(dict)

    # ------------------------------------------------------------------
    # Vocabulary and training
    # ------------------------------------------------------------------
    def seed(self, word: Word) -> int:
        """First sighting gets the seed weight, later ones keep what is there."""
        return self._uni.setdefault(word, self.cfg.seed_weight)

    def train_token(
        self,
        word: Word,
        prev_word: Optional[Word] = None,
        prev_prev_word: Optional[Word] = None,
    ) -> int:
        self._uni[word] = self._uni.get(word, 0) + 1
        self.observe_context(word, prev_word, prev_prev_word)
        return self._uni[word]

    def observe_context(
        self,
        word: Word,
        prev_word: Optional[Word] = None,
        prev_prev_word: Optional[Word] = None,
    ) -> None:
        """Record `word` as the observed follower of its 1- and 2-word context."""
        if prev_word is None:
            return
        limit = self.cfg.context_limit

        inner = self._bi[prev_word]
        inner[word] = inner.get(word, 0) + 1
        _enforce_bound(inner, limit)

        if prev_prev_word is not None:
            inner = self._tri[(prev_prev_word, prev_word)]
            inner[word] = inner.get(word, 0) + 1
            _enforce_bound(inner, limit)

    # ------------------------------------------------------------------
    # Feedback
    # ------------------------------------------------------------------
    def apply_feedback(self, word: Word, accepted: bool) -> int:
        """
        Accepted: fast promotion (+reward).
        Rejected: slow decay (-penalty), clamped at zero.
        """
        cur = self._uni.get(word, 0)
        if accepted:
            new = cur + self.cfg.reward
        else:
            new = max(0, cur - self.cfg.penalty)
        self._uni[word] = new
        return new

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------
    def weight(self, word: Word) -> int:
        return self._uni.get(word, 0)

    def context_score(
        self,
        candidate: Word,
        last_word: Optional[Word],
        second_last_word: Optional[Word],
    ) -> int:
        if last_word is None:
            return 0
        score = 0
        bi = self._bi.get(last_word)
        if bi:
            score += bi.get(candidate, 0)
        if second_last_word is not None:
            tri = self._tri.get((second_last_word, last_word))
            if tri:
                score += tri.get(candidate, 0)
        return score

    # ------------------------------------------------------------------
    # Introspection helpers
    # ------------------------------------------------------------------
    def bigram_count(self, prev_word: Word, word: Word) -> int:
        return self._bi.get(prev_word, {}).get(word, 0)

    def trigram_count(self, prev_prev_word: Word, prev_word: Word, word: Word) -> int:
        return self._tri.get((prev_prev_word, prev_word), {}).get(word, 0)

    def bigram_followers(self, prev_word: Word) -> Counts:
        return dict(self._bi.get(prev_word, {}))

    def trigram_followers(self, prev_prev_word: Word, prev_word: Word) -> Counts:
        return dict(self._tri.get((prev_prev_word, prev_word), {}))

    def vocabulary_size(self) -> int:
        return len(self._uni)

    def unigrams(self) -> Counts:
        return dict(self._uni)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def export_state(self) -> dict:
        return {
            "unigrams": dict(self._uni),
            "bigrams": {k: dict(v) for k, v in self._bi.items() if v},
            "trigrams": {f"{a} {b}": dict(v) for (a, b), v in self._tri.items() if v},
        }

    def load_state(self, data: dict) -> None:
        """Replace all tables; raises ValueError/TypeError on a malformed payload."""
        uni = {str(w): int(c) for w, c in data.get("unigrams", {}).items()}
        if any(c < 0 for c in uni.values()):
            raise ValueError("negative weight in unigrams")

        bi: Dict[Word, Counts] = defaultdict(dict)
        for prev, inner in data.get("bigrams", {}).items():
            bi[str(prev)] = self._load_counts(inner)

        tri: Dict[TrigramKey, Counts] = defaultdict(dict)
        for key, inner in data.get("trigrams", {}).items():
            a, b = str(key).split(" ")
            tri[(a, b)] = self._load_counts(inner)

        self._uni, self._bi, self._tri = uni, bi, tri

    def _load_counts(self, inner: dict) -> Counts:
        """One follower map from a payload, bounded like a trained one."""
        counts = {str(w): int(c) for w, c in inner.items()}
        if any(c < 0 for c in counts.values()):
            raise ValueError("negative count in context table")
        _enforce_bound(counts, self.cfg.context_limit)
        return counts
