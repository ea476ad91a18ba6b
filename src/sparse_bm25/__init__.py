"""
BM25 sparse vectors for hybrid (dense + sparse) search.

Texts are turned into sparse vectors over a hashed term space. Document
vectors carry BM25 term-saturation weights, query vectors carry normalized
idf weights, and their dot product approximates a BM25 score.

Components:
- tokenizer / stemmer: Text normalization (stopwords, Snowball stemming)
- term_frequency: Hashed term counting (MurmurHash3, 32-bit)
- statistics: Corpus document frequencies and average document length
- encoder: BM25Encoder - fit, encode documents and queries
- params: Parameter validation and JSON persistence
- pretrained: Default MS MARCO parameters with download caching

Hash collisions between distinct terms are accepted: the term space is a
fixed 32-bit range with no collision handling.
"""

from .config import DEFAULT_PARAMS_URL, EncoderConfig, PretrainedSettings
from .encoder import BM25Encoder, Fitted, Unfit
from .exceptions import (
    BM25Error,
    ConfigError,
    InvalidExtensionError,
    InvalidInputError,
    NoFittableDocumentsError,
    NotFittedError,
    ParamsFormatError,
    ParamsIOError,
    ZeroIdfSumError,
)
from .params import BM25Params
from .pretrained import load_default
from .statistics import CorpusStatistics, fit_corpus
from .term_frequency import hash_token, term_frequencies
from .tokenizer import BM25Tokenizer
from .vectors import SparseVector

__all__ = [
    "BM25Encoder",
    "BM25Tokenizer",
    "BM25Params",
    "SparseVector",
    "CorpusStatistics",
    "EncoderConfig",
    "PretrainedSettings",
    "DEFAULT_PARAMS_URL",
    "Fitted",
    "Unfit",
    "fit_corpus",
    "hash_token",
    "term_frequencies",
    "load_default",
    "BM25Error",
    "ConfigError",
    "InvalidExtensionError",
    "InvalidInputError",
    "NoFittableDocumentsError",
    "NotFittedError",
    "ParamsFormatError",
    "ParamsIOError",
    "ZeroIdfSumError",
]
