# text handling that sits in front of the engine

from .tokenizer import iter_tokens, tokenize

__all__ = [
    "tokenize",
    "iter_tokens",
]
