"""
Corpus statistics for BM25 - document frequencies and average length.

Fitting is a reduction over documents: each document contributes its
distinct term ids (document frequency, not term frequency) and its token
count. All accumulation is integer addition, so the result does not depend
on corpus order and partial accumulators can be merged in any order.
"""

import logging
from collections import defaultdict
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from .exceptions import InvalidInputError, NoFittableDocumentsError
from .term_frequency import term_frequencies
from .tokenizer import BM25Tokenizer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CorpusStatistics:
    """
    Fitted BM25 corpus statistics.

    doc_freq: term id -> number of documents containing the term
    n_docs: documents that produced at least one token
    avgdl: mean token count of those documents
    """
    doc_freq: Dict[int, int]
    n_docs: int
    avgdl: float


class DocFreqAccumulator:
    """Running document-frequency totals for part (or all) of a corpus"""

    def __init__(self):
        self.doc_freq: Dict[int, int] = defaultdict(int)
        self.n_docs = 0
        self.total_tokens = 0

    def add_document(self, indices: Sequence[int], counts: Sequence[int]) -> None:
        # Empty documents carry no signal and must not shift avgdl
        if not indices:
            return
        self.n_docs += 1
        self.total_tokens += sum(counts)
        for idx in indices:
            self.doc_freq[idx] += 1

    def merge(self, other: "DocFreqAccumulator") -> "DocFreqAccumulator":
        self.n_docs += other.n_docs
        self.total_tokens += other.total_tokens
        for idx, df in other.doc_freq.items():
            self.doc_freq[idx] += df
        return self

    def finalize(self) -> CorpusStatistics:
        if self.n_docs == 0:
            raise NoFittableDocumentsError(
                "No document produced any tokens after preprocessing; cannot compute average document length"
            )
        return CorpusStatistics(
            doc_freq=dict(self.doc_freq),
            n_docs=self.n_docs,
            avgdl=self.total_tokens / self.n_docs,
        )


def validate_corpus(corpus) -> List[str]:
    """Materialize a corpus, rejecting anything but an iterable of strings"""
    if isinstance(corpus, (str, bytes)) or not isinstance(corpus, Iterable):
        raise InvalidInputError("corpus must be a list of strings")
    documents = list(corpus)
    for position, doc in enumerate(documents):
        if not isinstance(doc, str):
            raise InvalidInputError(
                f"corpus must be a list of strings, got {type(doc).__name__} at position {position}"
            )
    return documents


def _accumulate(documents: Sequence[str], tokenizer: BM25Tokenizer) -> DocFreqAccumulator:
    accumulator = DocFreqAccumulator()
    for doc in documents:
        indices, counts = term_frequencies(doc, tokenizer)
        accumulator.add_document(indices, counts)
    return accumulator


def fit_corpus(corpus, tokenizer: BM25Tokenizer, max_workers: Optional[int] = None) -> CorpusStatistics:
    """
    Compute BM25 corpus statistics.

    Args:
        corpus: Iterable of document strings
        tokenizer: Tokenizer used for both fitting and encoding
        max_workers: Count chunks of the corpus in parallel threads when > 1

    Returns:
        CorpusStatistics

    Raises:
        InvalidInputError: corpus is not an iterable of strings
        NoFittableDocumentsError: every document was empty after tokenization

    Example:
        >>> stats = fit_corpus(["The lazy dog is brown", "The fox is brown"], BM25Tokenizer())
        >>> stats.n_docs, stats.avgdl
        (2, 2.5)
    """
    documents = validate_corpus(corpus)

    if max_workers is not None and max_workers > 1 and len(documents) > 1:
        chunk_size = -(-len(documents) // max_workers)
        chunks = [documents[i:i + chunk_size] for i in range(0, len(documents), chunk_size)]
        logger.debug(f"Fitting {len(documents)} documents in {len(chunks)} chunks (max {max_workers} parallel)")
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            partials = list(executor.map(lambda chunk: _accumulate(chunk, tokenizer), chunks))
        accumulator = DocFreqAccumulator()
        for partial in partials:
            accumulator.merge(partial)
    else:
        accumulator = _accumulate(documents, tokenizer)

    stats = accumulator.finalize()
    skipped = len(documents) - stats.n_docs
    logger.debug(
        f"Fitted BM25 statistics: {stats.n_docs} documents ({skipped} empty skipped), "
        f"{len(stats.doc_freq)} unique terms, avgdl={stats.avgdl:.2f}"
    )
    return stats
