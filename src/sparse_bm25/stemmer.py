"""
Snowball stemmers (via NLTK), one cached instance per language.

Uses the Snowball stemming algorithm (improved Porter2 stemmer):
https://snowballstem.org/

Examples (english):
- "jumps" → "jump"
- "lazy" → "lazi"
- "strategies" → "strategi"
"""

import logging
from functools import lru_cache

from nltk.stem.snowball import SnowballStemmer

logger = logging.getLogger(__name__)

FALLBACK_LANGUAGE = "english"


@lru_cache(maxsize=None)
def get_stemmer(language: str) -> SnowballStemmer:
    """
    Return the Snowball stemmer for a language.

    Languages Snowball does not support fall back to English.

    Args:
        language: Lowercase language name ("english", "german", ...)

    Returns:
        Shared, reusable SnowballStemmer
    """
    if language not in SnowballStemmer.languages:
        logger.warning(f"No Snowball stemmer for '{language}', falling back to {FALLBACK_LANGUAGE}")
        return get_stemmer(FALLBACK_LANGUAGE)
    return SnowballStemmer(language)


def stem(word: str, language: str = FALLBACK_LANGUAGE) -> str:
    """
    Stem a single word using Snowball algorithm.

    Args:
        word: Lowercase word to stem
        language: Stemmer language

    Returns:
        Stemmed word

    Examples:
        >>> stem("jumps")
        'jump'
        >>> stem("lazy")
        'lazi'
    """
    return get_stemmer(language).stem(word)
