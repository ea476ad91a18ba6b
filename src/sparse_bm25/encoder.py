"""
BM25 sparse encoder for hybrid (dense + sparse) search.

Document vectors hold the BM25 term-saturation component only:

    w(t, d) = tf / (tf + k1 × (1 - b + b × dl/avgdl))

Query vectors hold L1-normalized inverse document frequencies:

    idf(t) = ln((N + 1) / (df + 0.5)),   w(t, q) = idf(t) / Σ idf

The dot product of a query vector with a document vector is then a BM25
score (up to the per-query normalization), so document vectors can be
computed once and indexed while idf is applied at query time.

Where:
    tf = term frequency in document
    dl = document length (number of tokens)
    avgdl = average document length of the fitted corpus
    N = number of non-empty documents in the fitted corpus
    df = number of documents containing the term (1 for unseen terms)
"""

import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from .config import EncoderConfig, PretrainedSettings
from .exceptions import InvalidInputError, NotFittedError, ZeroIdfSumError
from .params import BM25Params, parse_params, read_params, write_params
from .statistics import CorpusStatistics, fit_corpus
from .term_frequency import term_frequencies
from .tokenizer import BM25Tokenizer
from .vectors import SparseVector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Unfit:
    """Encoder has no corpus statistics yet"""


@dataclass(frozen=True)
class Fitted:
    """Encoder holds corpus statistics from fit() or loaded parameters"""
    stats: CorpusStatistics


EncoderState = Union[Unfit, Fitted]

TextInput = Union[str, Sequence[str]]


class BM25Encoder:
    """
    Fit BM25 statistics on a corpus and encode texts as sparse vectors.

    Example:
        >>> encoder = BM25Encoder().fit(["The lazy dog is brown", "The fox is brown"])
        >>> doc = encoder.encode_documents("The brown fox")
        >>> query = encoder.encode_queries("which fox?")
    """

    def __init__(
        self,
        b: float = 0.75,
        k1: float = 1.2,
        lower_case: bool = True,
        remove_punctuation: bool = True,
        remove_stopwords: bool = True,
        stem: bool = True,
        language: str = "english",
    ):
        """
        Initialize an unfit encoder.

        Args:
            b: Length normalization parameter
                Higher = more penalty for long documents
                Range: 0.0 - 1.0
                Default: 0.75 (standard)

            k1: Term frequency saturation parameter
                Higher = more weight to repeated terms
                Default: 1.2 (standard)

            lower_case, remove_punctuation, remove_stopwords, stem, language:
                Tokenizer options (stem requires lower_case)

        Raises:
            ConfigError: invalid b / k1, or stem without lower_case
        """
        self._config = EncoderConfig(
            b=b,
            k1=k1,
            lower_case=lower_case,
            remove_punctuation=remove_punctuation,
            remove_stopwords=remove_stopwords,
            stem=stem,
            language=language,
        )
        self._tokenizer = BM25Tokenizer.from_config(self._config)
        self._state: EncoderState = Unfit()

    @property
    def config(self) -> EncoderConfig:
        return self._config

    @property
    def tokenizer(self) -> BM25Tokenizer:
        return self._tokenizer

    @property
    def is_fitted(self) -> bool:
        return isinstance(self._state, Fitted)

    @property
    def statistics(self) -> CorpusStatistics:
        return self._require_fitted("reading statistics")

    def _require_fitted(self, action: str) -> CorpusStatistics:
        if not isinstance(self._state, Fitted):
            raise NotFittedError(f"BM25 must be fit before {action}")
        return self._state.stats

    def fit(self, corpus: Sequence[str], max_workers: Optional[int] = None) -> "BM25Encoder":
        """
        Fit document frequencies and average document length on a corpus.

        Args:
            corpus: Document texts
            max_workers: Parallel threads for counting (None = sequential)

        Returns:
            self, now fitted

        Raises:
            InvalidInputError: corpus is not a list of strings
            NoFittableDocumentsError: no document produced tokens (state unchanged)
        """
        stats = fit_corpus(corpus, self._tokenizer, max_workers=max_workers)
        self._state = Fitted(stats)
        logger.info(f"BM25 fitted on {stats.n_docs} documents ({len(stats.doc_freq)} terms)")
        return self

    def encode_documents(self, texts: TextInput) -> Union[SparseVector, List[SparseVector]]:
        """
        Encode one document (str) or many (list of str) as BM25 document vectors.

        Returns:
            SparseVector for a str input, list of SparseVector otherwise.
            Values lie in [0, 1).
        """
        stats = self._require_fitted("encoding documents")
        return self._apply(texts, lambda text: self._encode_document(text, stats))

    def encode_queries(self, texts: TextInput) -> Union[SparseVector, List[SparseVector]]:
        """
        Encode one query (str) or many (list of str) as normalized idf vectors.

        Returns:
            SparseVector for a str input, list of SparseVector otherwise.
            Non-empty query values sum to 1.

        Raises:
            ZeroIdfSumError: query idf weights sum to zero
        """
        stats = self._require_fitted("encoding queries")
        return self._apply(texts, lambda text: self._encode_query(text, stats))

    @staticmethod
    def _apply(texts: TextInput, encode_one):
        if isinstance(texts, str):
            return encode_one(texts)
        if isinstance(texts, (list, tuple)):
            for position, text in enumerate(texts):
                if not isinstance(text, str):
                    raise InvalidInputError(
                        f"texts must be a string or list of strings, got {type(text).__name__} at position {position}"
                    )
            return [encode_one(text) for text in texts]
        raise InvalidInputError(f"texts must be a string or list of strings, got {type(texts).__name__}")

    def _encode_document(self, text: str, stats: CorpusStatistics) -> SparseVector:
        indices, tf = term_frequencies(text, self._tokenizer)
        doc_len = sum(tf)
        k1, b = self._config.k1, self._config.b
        norm = k1 * (1 - b + b * (doc_len / stats.avgdl))
        return SparseVector.from_lists(indices, [t / (norm + t) for t in tf])

    def _encode_query(self, text: str, stats: CorpusStatistics) -> SparseVector:
        # Query term counts are ignored; only presence is weighted
        indices, _ = term_frequencies(text, self._tokenizer)
        if not indices:
            return SparseVector.from_lists([], [])

        idf = [
            math.log((stats.n_docs + 1) / (stats.doc_freq.get(idx, 1) + 0.5))
            for idx in indices
        ]
        idf_sum = sum(idf)
        if idf_sum == 0:
            raise ZeroIdfSumError(f"Query idf weights sum to zero and cannot be normalized: {text!r}")
        return SparseVector.from_lists(indices, [v / idf_sum for v in idf])

    def get_params(self) -> Dict[str, Any]:
        """
        Export fitted state and configuration as a JSON-compatible dict.

        doc_freq is emitted as parallel `indices` / `values` lists.

        Raises:
            NotFittedError: encoder is not fitted
        """
        stats = self._require_fitted("storing params")
        return BM25Params.from_state(stats, self._config).model_dump()

    def set_params(self, params: Union[BM25Params, Dict[str, Any]]) -> "BM25Encoder":
        """
        Replace configuration and statistics from a parameter record.

        Raises:
            ParamsFormatError: record has the wrong shape
            ConfigError: record violates encoder config invariants
        """
        record = parse_params(params)
        config = record.to_config()
        tokenizer = BM25Tokenizer.from_config(config)

        self._config = config
        self._tokenizer = tokenizer
        self._state = Fitted(record.to_statistics())
        logger.debug(f"BM25 params set: {record.n_docs} documents, {len(record.doc_freq.indices)} terms")
        return self

    def dump(self, path: Union[str, Path]) -> None:
        """Write parameters as JSON to `path` (requires a fitted encoder)"""
        stats = self._require_fitted("storing params")
        write_params(BM25Params.from_state(stats, self._config), path)

    def load(self, path: Union[str, Path]) -> "BM25Encoder":
        """Load parameters from a JSON file written by dump()"""
        return self.set_params(read_params(path))

    @classmethod
    def default(
        cls,
        path: Optional[Union[str, Path]] = None,
        settings: Optional[PretrainedSettings] = None,
    ) -> "BM25Encoder":
        """
        Encoder with the default pretrained (MS MARCO) parameters.

        See sparse_bm25.pretrained.load_default.
        """
        from .pretrained import load_default

        return load_default(path, settings=settings)

    def __repr__(self) -> str:
        state = "fitted" if self.is_fitted else "unfit"
        return f"BM25Encoder(b={self._config.b}, k1={self._config.k1}, {state})"
