import pytest

from smart_autofill.errors import ResourceLoadError
from smart_autofill.utils.loader import load_corpus, load_vocabulary


def test_load_vocabulary_trims_and_lowercases(tmp_path):
    p = tmp_path / "words.txt"
    p.write_text("Cat\n  car \n\ncare\n", encoding="utf-8")
    assert load_vocabulary(p) == ["cat", "car", "care"]


def test_load_corpus_tokenizes(tmp_path):
    p = tmp_path / "old.txt"
    p.write_text("The cat sat.\nThe CAT ran!\n", encoding="utf-8")
    assert load_corpus(str(p)) == ["the", "cat", "sat", "the", "cat", "ran"]


def test_missing_file_raises(tmp_path):
    with pytest.raises(ResourceLoadError) as exc:
        load_vocabulary(tmp_path / "nope.txt")
    assert "nope.txt" in str(exc.value)


def test_undecodable_file_raises(tmp_path):
    p = tmp_path / "bad.txt"
    p.write_bytes(b"cat\n\xff\xfe\xfa\n")
    with pytest.raises(ResourceLoadError):
        load_corpus(p)
