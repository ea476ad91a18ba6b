"""
Term frequency counting with feature hashing.

Each token is mapped to a dimension id with 32-bit MurmurHash3 (seed 0,
unsigned). Collisions between distinct tokens are accepted: two tokens that
hash to the same id are counted as one term.
"""

from typing import Dict, List, Tuple

import mmh3

from .tokenizer import BM25Tokenizer


def hash_token(token: str) -> int:
    """
    Map a token to an unsigned 32-bit dimension id.

    Examples:
        >>> hash_token("foo")
        4138058784
    """
    return mmh3.hash(token, signed=False)


def term_frequencies(text: str, tokenizer: BM25Tokenizer) -> Tuple[List[int], List[int]]:
    """
    Count hashed terms in a text.

    Args:
        text: Input text
        tokenizer: Tokenizer producing normalized terms

    Returns:
        (indices, counts): unique term ids in first-occurrence order and the
        number of occurrences of each. Both empty when the text has no tokens.

    Example:
        >>> indices, counts = term_frequencies("fox and fox", BM25Tokenizer())
        >>> counts
        [2]
    """
    counts: Dict[int, int] = {}

    for token in tokenizer.tokenize(text):
        idx = hash_token(token)
        counts[idx] = counts.get(idx, 0) + 1

    # dicts keep insertion order, so keys follow first occurrence
    indices = list(counts)
    return indices, [counts[idx] for idx in indices]
