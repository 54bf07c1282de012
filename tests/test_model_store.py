import json

import pytest

from smart_autofill.core.autofill import SmartWord
from smart_autofill.errors import ModelStoreError
from smart_autofill.utils.model_store import export_state, import_state, load_model, save_model

from conftest import type_word


@pytest.fixture
def trained():
    sw = SmartWord(["the", "then", "cat", "car", "care", "sat"])
    sw.train("the cat sat on the car".split())
    sw.feedback(True, "care")
    sw.feedback(False, "cat")
    return sw


def test_round_trip_preserves_guesses(trained, tmp_path):
    path = tmp_path / "model.json"
    save_model(trained, path)
    restored = load_model(path)

    assert restored.model.unigrams() == trained.model.unigrams()
    assert restored.session.last_word == "cat"
    assert restored.session.second_last_word == "care"
    assert restored.model.trigram_count("the", "cat", "sat") == 1
    for word in ("c", "ca", "th", "s"):
        assert type_word(restored, word, 3) == type_word(trained, word, 3)


def test_saved_file_is_plain_json(trained, tmp_path):
    path = tmp_path / "model.json"
    save_model(trained, path)
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["format"] == 1
    assert data["unigrams"]["care"] == 51
    assert data["trigrams"]["the cat"] == {"sat": 1}


def test_unreadable_model_raises(tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(ModelStoreError):
        load_model(bad)
    with pytest.raises(ModelStoreError):
        load_model(tmp_path / "missing.json")


def test_malformed_payloads_raise(trained):
    with pytest.raises(ModelStoreError):
        import_state({"format": 99})
    data = export_state(trained)
    data["unigrams"]["Not A Word"] = 3
    with pytest.raises(ModelStoreError):
        import_state(data)
    with pytest.raises(ModelStoreError):
        import_state({"format": 1, "unigrams": {"cat": "many"}})


def test_negative_context_count_is_rejected():
    data = {
        "format": 1,
        "unigrams": {"cat": 1, "sat": 1},
        "bigrams": {"cat": {"sat": -7}},
        "trigrams": {},
    }
    with pytest.raises(ModelStoreError):
        import_state(data)
    data["bigrams"] = {}
    data["trigrams"] = {"the cat": {"sat": -1}}
    with pytest.raises(ModelStoreError):
        import_state(data)


def test_oversized_follower_map_is_bounded_on_load():
    followers = {"w" + "abcdefghij"[i // 10] + "abcdefghij"[i % 10]: i + 1 for i in range(80)}
    data = {
        "format": 1,
        "unigrams": {"cat": 1},
        "bigrams": {"cat": followers},
        "trigrams": {"the cat": dict(followers)},
    }
    restored = import_state(data)
    bi = restored.model.bigram_followers("cat")
    assert len(bi) == 50
    # the 30 lowest counts were evicted
    assert min(bi.values()) == 31
    assert len(restored.model.trigram_followers("the", "cat")) == 50


def test_context_must_be_an_object():
    with pytest.raises(ModelStoreError, match="context"):
        import_state({"format": 1, "unigrams": {"cat": 1}, "context": ["cat"]})


def test_export_matches_engine_snapshot(trained):
    data = export_state(trained)
    snap = trained.snapshot()
    assert data.pop("format") == 1
    assert data == snap
    assert snap["context"] == {"last_word": "cat", "second_last_word": "care"}
