# loader.py - read vocabulary and old-message files for the engine.
# Files are read completely before anything is returned, so a failure part
# way through never leaves a half-built engine behind.

from __future__ import annotations
import logging
from pathlib import Path
from typing import List, Union

from smart_autofill.context.tokenizer import tokenize
from smart_autofill.errors import ResourceLoadError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _read_lines(path: PathLike) -> List[str]:
    p = Path(path)
    try:
        with p.open("r", encoding="utf-8") as fh:
            return fh.read().splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise ResourceLoadError(p, e) from e


def load_vocabulary(path: PathLike) -> List[str]:
    """One word per line; trimmed, lowercased, blank lines skipped."""
    words = [w.strip().lower() for w in _read_lines(path)]
    words = [w for w in words if w]
    logger.info("read %d vocabulary entries from %s", len(words), path)
    return words


def load_corpus(path: PathLike) -> List[str]:
    """Whole file split into lowercase letter tokens."""
    toks: List[str] = []
    for line in _read_lines(path):
        toks.extend(tokenize(line))
    logger.info("read %d corpus tokens from %s", len(toks), path)
    return toks
