"""
BM25 parameter documents - validation and JSON persistence.

A parameter document captures everything needed to rebuild a fitted encoder:

{
    "avgdl": 3.67,
    "n_docs": 3,
    "doc_freq": {"indices": [123, 456], "values": [2, 3]},
    "b": 0.75,
    "k1": 1.2,
    "lower_case": true,
    "remove_punctuation": true,
    "remove_stopwords": true,
    "stem": true,
    "language": "english"
}

doc_freq is stored as two parallel lists rather than a JSON object because
JSON object keys are strings and term ids are integers.
"""

import json
import logging
from pathlib import Path
from typing import Annotated, Any, Dict, List, Union

from pydantic import BaseModel, BeforeValidator, Field, ValidationError, model_validator

from .config import EncoderConfig
from .exceptions import ParamsFormatError, ParamsIOError
from .statistics import CorpusStatistics

logger = logging.getLogger(__name__)

MAX_TERM_ID = 2**32 - 1


def _reject_non_numeric(value: Any) -> Any:
    # Lax int coercion would accept "5" and true; only JSON numbers are counts
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"expected an integer, got {value!r}")
    return value


# int, or a float with no fractional part (3.0)
JsonInt = Annotated[int, BeforeValidator(_reject_non_numeric)]


class DocFreqParams(BaseModel):
    indices: List[JsonInt] = Field(..., description="Term ids (unsigned 32-bit)")
    values: List[JsonInt] = Field(..., description="Document frequency of each term id")

    @model_validator(mode="after")
    def check_parallel_lists(self) -> "DocFreqParams":
        if len(self.indices) != len(self.values):
            raise ValueError(
                f"doc_freq indices and values must have equal length, got {len(self.indices)} and {len(self.values)}"
            )
        if len(set(self.indices)) != len(self.indices):
            raise ValueError("doc_freq indices must be unique")
        if any(idx < 0 or idx > MAX_TERM_ID for idx in self.indices):
            raise ValueError("doc_freq indices must be unsigned 32-bit integers")
        if any(df < 0 for df in self.values):
            raise ValueError("doc_freq values must be non-negative")
        return self


class BM25Params(BaseModel):
    """Persisted state of a fitted encoder"""
    avgdl: float = Field(..., gt=0, allow_inf_nan=False)
    n_docs: JsonInt = Field(..., ge=0)
    doc_freq: DocFreqParams
    b: float = Field(..., allow_inf_nan=False)
    k1: float = Field(..., allow_inf_nan=False)
    lower_case: bool
    remove_punctuation: bool
    remove_stopwords: bool
    stem: bool
    language: str

    @classmethod
    def from_state(cls, stats: CorpusStatistics, config: EncoderConfig) -> "BM25Params":
        # Sorted for reproducible files; readers must not rely on the order
        indices = sorted(stats.doc_freq)
        return cls(
            avgdl=stats.avgdl,
            n_docs=stats.n_docs,
            doc_freq=DocFreqParams(indices=indices, values=[stats.doc_freq[idx] for idx in indices]),
            b=config.b,
            k1=config.k1,
            lower_case=config.lower_case,
            remove_punctuation=config.remove_punctuation,
            remove_stopwords=config.remove_stopwords,
            stem=config.stem,
            language=config.language,
        )

    def to_statistics(self) -> CorpusStatistics:
        return CorpusStatistics(
            doc_freq=dict(zip(self.doc_freq.indices, self.doc_freq.values)),
            n_docs=self.n_docs,
            avgdl=self.avgdl,
        )

    def to_config(self) -> EncoderConfig:
        """Raises ConfigError when the stored options violate encoder invariants"""
        return EncoderConfig(
            b=self.b,
            k1=self.k1,
            lower_case=self.lower_case,
            remove_punctuation=self.remove_punctuation,
            remove_stopwords=self.remove_stopwords,
            stem=self.stem,
            language=self.language,
        )


def parse_params(params: Union[BM25Params, Dict[str, Any]]) -> BM25Params:
    """Validate a parameter record, raising ParamsFormatError on bad shape"""
    if isinstance(params, BM25Params):
        return params
    if not isinstance(params, dict):
        raise ParamsFormatError(f"BM25 params must be a JSON object, got {type(params).__name__}")
    try:
        return BM25Params.model_validate(params)
    except ValidationError as exc:
        raise ParamsFormatError(f"Invalid BM25 params: {exc}") from exc


def write_params(params: BM25Params, path: Union[str, Path]) -> None:
    """Write a parameter document as JSON. Not atomic: a failed write may leave a partial file."""
    path = Path(path)
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(params.model_dump(), f)
    except OSError as exc:
        raise ParamsIOError(f"Failed to write BM25 params to {path}: {exc}") from exc
    logger.debug(f"Wrote BM25 params ({len(params.doc_freq.indices)} terms) to {path}")


def read_params(path: Union[str, Path]) -> BM25Params:
    """Read and validate a JSON parameter document"""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ParamsFormatError(f"BM25 params file {path} is not valid UTF-8 JSON: {exc}") from exc
    except OSError as exc:
        raise ParamsIOError(f"Failed to read BM25 params from {path}: {exc}") from exc
    return parse_params(raw)
