from smart_autofill.context.tokenizer import iter_tokens, tokenize


def test_tokenize_splits_on_non_letters():
    assert tokenize("Don't stop-me now, 42times!") == ["don", "t", "stop", "me", "now", "times"]


def test_tokenize_drops_non_ascii_words():
    assert tokenize("café au lait") == ["au", "lait"]
    assert tokenize("snake_case") == ["snake", "case"]


def test_tokenize_empty():
    assert tokenize("") == []
    assert tokenize("... 123 ---") == []


def test_iter_tokens_spans_lines():
    assert list(iter_tokens(["Hello world", "", "again"])) == ["hello", "world", "again"]
