"""
Tokenizer for BM25 text processing.

Tokenization pipeline:
1. Split into word runs and punctuation runs (Unicode aware)
2. Lowercase conversion (optional)
3. Drop punctuation-only tokens (optional)
4. Filter stopwords for the configured language (optional)
5. Apply Snowball stemming (optional, requires lowercase)
6. Return tokens in source order
"""

import logging
import re
from functools import lru_cache
from typing import FrozenSet, List

from nltk.corpus import stopwords as nltk_stopwords

from .config import EncoderConfig
from .exceptions import ConfigError
from .stemmer import FALLBACK_LANGUAGE, get_stemmer

logger = logging.getLogger(__name__)

# Word runs (letters, digits, underscore in any script) or punctuation runs
TOKEN_PATTERN = re.compile(r"\w+|[^\w\s]+")

PUNCTUATION_PATTERN = re.compile(r"^[^\w\s]+$")

# NLTK English stopword list, shipped inline so English needs no corpus download
ENGLISH_STOPWORDS = frozenset([
    'i', 'me', 'my', 'myself', 'we', 'our', 'ours', 'ourselves', 'you',
    "you're", "you've", "you'll", "you'd", 'your', 'yours', 'yourself',
    'yourselves', 'he', 'him', 'his', 'himself', 'she', "she's", 'her', 'hers',
    'herself', 'it', "it's", 'its', 'itself', 'they', 'them', 'their', 'theirs',
    'themselves', 'what', 'which', 'who', 'whom', 'this', 'that', "that'll",
    'these', 'those', 'am', 'is', 'are', 'was', 'were', 'be', 'been', 'being',
    'have', 'has', 'had', 'having', 'do', 'does', 'did', 'doing', 'a', 'an',
    'the', 'and', 'but', 'if', 'or', 'because', 'as', 'until', 'while', 'of',
    'at', 'by', 'for', 'with', 'about', 'against', 'between', 'into', 'through',
    'during', 'before', 'after', 'above', 'below', 'to', 'from', 'up', 'down',
    'in', 'out', 'on', 'off', 'over', 'under', 'again', 'further', 'then',
    'once', 'here', 'there', 'when', 'where', 'why', 'how', 'all', 'any',
    'both', 'each', 'few', 'more', 'most', 'other', 'some', 'such', 'no', 'nor',
    'not', 'only', 'own', 'same', 'so', 'than', 'too', 'very', 's', 't', 'can',
    'will', 'just', 'don', "don't", 'should', "should've", 'now', 'd', 'll',
    'm', 'o', 're', 've', 'y', 'ain', 'aren', "aren't", 'couldn', "couldn't",
    'didn', "didn't", 'doesn', "doesn't", 'hadn', "hadn't", 'hasn', "hasn't",
    'haven', "haven't", 'isn', "isn't", 'ma', 'mightn', "mightn't", 'mustn',
    "mustn't", 'needn', "needn't", 'shan', "shan't", 'shouldn', "shouldn't",
    'wasn', "wasn't", 'weren', "weren't", 'won', "won't", 'wouldn', "wouldn't"
])


@lru_cache(maxsize=None)
def get_stopwords(language: str) -> FrozenSet[str]:
    """
    Stopword set for a language.

    English uses the inline list. Other languages are read from the NLTK
    stopwords corpus; if the corpus or the language is unavailable the
    English list is used instead.
    """
    if language == FALLBACK_LANGUAGE:
        return ENGLISH_STOPWORDS
    try:
        return frozenset(nltk_stopwords.words(language))
    except (LookupError, OSError) as exc:
        logger.warning(f"No stopword list for '{language}' ({exc.__class__.__name__}), falling back to {FALLBACK_LANGUAGE}")
        return ENGLISH_STOPWORDS


class BM25Tokenizer:
    """
    Configurable tokenizer producing normalized terms for hashing.

    Options mirror the persisted parameter fields so a loaded parameter file
    rebuilds exactly the tokenizer it was fitted with.
    """

    def __init__(
        self,
        lower_case: bool = True,
        remove_punctuation: bool = True,
        remove_stopwords: bool = True,
        stem: bool = True,
        language: str = FALLBACK_LANGUAGE,
    ):
        if stem and not lower_case:
            raise ConfigError(
                "Stemming applies lower case to tokens, so lower_case must be true if stem is true."
            )
        self.lower_case = lower_case
        self.remove_punctuation = remove_punctuation
        self.remove_stopwords = remove_stopwords
        self.stem = stem
        self.language = language

        self._stopwords = get_stopwords(language) if remove_stopwords else frozenset()
        self._stemmer = get_stemmer(language) if stem else None

    @classmethod
    def from_config(cls, config: EncoderConfig) -> "BM25Tokenizer":
        return cls(
            lower_case=config.lower_case,
            remove_punctuation=config.remove_punctuation,
            remove_stopwords=config.remove_stopwords,
            stem=config.stem,
            language=config.language,
        )

    def tokenize(self, text: str) -> List[str]:
        """
        Tokenize text into BM25 terms.

        Args:
            text: Input text

        Returns:
            Ordered list of tokens (duplicates kept)

        Examples:
            >>> BM25Tokenizer().tokenize("The quick brown fox jumps over the lazy dog")
            ['quick', 'brown', 'fox', 'jump', 'lazi', 'dog']

            >>> BM25Tokenizer().tokenize("   ")
            []
        """
        if not text:
            return []

        tokens = TOKEN_PATTERN.findall(text)

        if self.lower_case:
            tokens = [t.lower() for t in tokens]

        if self.remove_punctuation:
            tokens = [t for t in tokens if not PUNCTUATION_PATTERN.match(t)]

        # Stopword lists are lowercase; compare case-insensitively
        if self.remove_stopwords:
            tokens = [t for t in tokens if t.lower() not in self._stopwords]

        if self._stemmer is not None:
            tokens = [self._stemmer.stem(t) for t in tokens]

        return tokens

    def __repr__(self) -> str:
        return (
            f"BM25Tokenizer(lower_case={self.lower_case}, remove_punctuation={self.remove_punctuation}, "
            f"remove_stopwords={self.remove_stopwords}, stem={self.stem}, language={self.language!r})"
        )
