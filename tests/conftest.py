import pytest

from smart_autofill.core.autofill import SmartWord


@pytest.fixture
def small_vocab():
    return ["cat", "car", "care", "dog"]


@pytest.fixture
def engine(small_vocab):
    return SmartWord(small_vocab)


def type_word(engine, word, word_position=0):
    """Feed every letter of `word`, return the guesses after each one."""
    return [engine.guess(ch, i, word_position) for i, ch in enumerate(word)]
