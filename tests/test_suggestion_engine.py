# tests/test_suggestion_engine.py
from smart_autofill.core.autofill import SmartWord
from smart_autofill.core.suggestion_engine import (
    DEAD,
    IDLE,
    INVALID_CHARACTER,
    TYPING,
    UNMATCHED_PREFIX,
)

from conftest import type_word


def test_scenario_weight_tie_is_lexicographic(engine):
    assert engine.guess("c", 0, 0) == ["car", "care", "cat"]
    assert engine.guess("a", 1, 0) == ["car", "care", "cat"]
    assert engine.state == TYPING


def test_fewer_candidates_are_padded_with_none(engine):
    assert engine.guess("d", 0, 0) == ["dog", None, None]
    assert engine.guess("o", 1, 0) == ["dog", None, None]


def test_unmatched_prefix_stays_dead_for_the_word(engine):
    out = type_word(engine, "cxat")
    assert out[0] == ["car", "care", "cat"]
    assert out[1:] == [[None, None, None]] * 3
    assert engine.state == DEAD
    assert engine.session.dead_reason == UNMATCHED_PREFIX
    # a new word at position 0 revives the cursor
    assert engine.guess("d", 0, 1) == ["dog", None, None]
    assert engine.state == TYPING


def test_invalid_character_kills_the_word(engine):
    assert engine.guess("c", 0, 0)[0] == "car"
    assert engine.guess("A", 1, 0) == [None, None, None]
    assert engine.session.dead_reason == INVALID_CHARACTER
    assert engine.guess("r", 2, 0) == [None, None, None]


def test_invalid_first_letter(engine):
    assert engine.guess("7", 0, 0) == [None, None, None]
    assert engine.state == DEAD


def test_letters_without_a_word_start_are_dead(engine):
    assert engine.state == IDLE
    assert engine.guess("a", 1, 0) == [None, None, None]
    assert engine.state == DEAD


def test_buffer_tracks_prefix(engine):
    type_word(engine, "cax")
    assert engine.session.prefix == "cax"
    engine.guess("d", 0, 1)
    assert engine.session.prefix == "d"


def test_guess_does_not_mutate_model(engine):
    before = engine.model.unigrams()
    type_word(engine, "care")
    type_word(engine, "zzz", 1)
    assert engine.model.unigrams() == before
    assert len(engine.index) == 4


def test_context_breaks_ties_before_lexicographic_order():
    sw = SmartWord(["ran", "sat"])
    sw.train("the cat sat".split())
    sw.train("the cat ran".split())
    sw.set_context("cat", "the")
    assert sw.engine.rank(["sat", "ran"]) == ["ran", "sat"]


def test_context_outranks_weight():
    sw = SmartWord(["sam", "sat"])
    sw.train("dog sam dog sam cat sat".split())
    assert sw.model.weight("sam") > sw.model.weight("sat")
    assert sw.guess("s", 0, 0)[:2] == ["sam", "sat"]

    sw.set_context("cat")
    assert sw.guess("s", 0, 1)[:2] == ["sat", "sam"]


def test_non_text_letter_kills_the_word(engine):
    assert engine.guess(None, 0, 0) == [None, None, None]
    assert engine.state == DEAD
    assert engine.session.dead_reason == INVALID_CHARACTER
    assert engine.guess("c", 0, 1) == ["car", "care", "cat"]
