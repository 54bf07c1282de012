# smart_autofill/context/tokenizer.py
# raw message text -> lowercase a-z word tokens

import re
from typing import Iterable, Iterator, List

_split_re = re.compile(r"[^\w]+|[\d_]+")  # anything that is not a letter
_word_re = re.compile(r"[a-z]+")


def tokenize(s: str) -> List[str]:
    """
    Split on non-letter boundaries and lowercase.
    Tokens that still are not plain a-z (accented letters etc) are dropped.
    """
    if not s:
        return []
    out = []
    for t in _split_re.split(s.lower()):
        if t and _word_re.fullmatch(t):
            out.append(t)
    return out


def iter_tokens(lines: Iterable[str]) -> Iterator[str]:
    """Stream tokens across lines; a line break is just another boundary."""
    for line in lines:
        yield from tokenize(line)
