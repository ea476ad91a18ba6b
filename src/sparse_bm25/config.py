"""
Configuration for the BM25 encoder and the pretrained parameter loader.

EncoderConfig carries the BM25 hyperparameters and tokenizer options that are
fixed for the life of an encoder instance.

PretrainedSettings carries the download source and cache location for the
default parameters. Values can be passed explicitly or read from the
environment (optionally from a .env file):

    BM25_PARAMS_URL         Remote JSON parameter file
    BM25_PARAMS_CACHE       Local .json path used as a persistent cache
    BM25_DOWNLOAD_TIMEOUT   HTTP timeout in seconds (default: 60)
"""

import logging
import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

# BM25 parameters fitted on the MS MARCO passage corpus
DEFAULT_PARAMS_URL = (
    "https://storage.googleapis.com/pinecone-datasets-dev/"
    "bm25_params/msmarco_bm25_params_v4_0_0.json"
)
DEFAULT_DOWNLOAD_TIMEOUT = 60.0


@dataclass(frozen=True)
class EncoderConfig:
    """
    BM25 hyperparameters plus tokenizer options.

    Args:
        b: Length normalization strength, 0.0 (none) to 1.0 (full)
        k1: Term frequency saturation point, >= 0
        lower_case: Lowercase tokens
        remove_punctuation: Drop punctuation-only tokens
        remove_stopwords: Drop stopwords for `language`
        stem: Apply Snowball stemming (requires lower_case)
        language: Language name for stopwords and stemming
    """
    b: float = 0.75
    k1: float = 1.2
    lower_case: bool = True
    remove_punctuation: bool = True
    remove_stopwords: bool = True
    stem: bool = True
    language: str = "english"

    def __post_init__(self):
        if not 0.0 <= self.b <= 1.0:
            raise ConfigError(f"b must be between 0 and 1, got {self.b}")
        if not (math.isfinite(self.k1) and self.k1 >= 0):
            raise ConfigError(f"k1 must be a finite non-negative number, got {self.k1}")
        if not isinstance(self.language, str) or not self.language:
            raise ConfigError(f"language must be a non-empty string, got {self.language!r}")
        if self.stem and not self.lower_case:
            raise ConfigError(
                "Stemming applies lower case to tokens, so lower_case must be true if stem is true."
            )


@dataclass(frozen=True)
class PretrainedSettings:
    """Where default parameters come from and where they are cached"""
    url: str = DEFAULT_PARAMS_URL
    cache_path: Optional[str] = None
    timeout: float = DEFAULT_DOWNLOAD_TIMEOUT

    @classmethod
    def from_env(cls, env_file: Optional[Union[str, Path]] = None) -> "PretrainedSettings":
        """
        Build settings from environment variables.

        Args:
            env_file: Optional .env file loaded first (existing variables win)

        Returns:
            PretrainedSettings with unset variables left at their defaults
        """
        if env_file is not None:
            env_path = Path(env_file)
            if env_path.exists():
                logger.debug(f"Loading environment from: {env_path}")
                load_dotenv(env_path)
            else:
                logger.warning(f"Env file not found, using process environment: {env_path}")

        timeout_value = os.getenv("BM25_DOWNLOAD_TIMEOUT", str(DEFAULT_DOWNLOAD_TIMEOUT))
        try:
            timeout = float(timeout_value)
        except ValueError as exc:
            raise ConfigError(f"BM25_DOWNLOAD_TIMEOUT must be a number, got {timeout_value!r}") from exc
        if timeout <= 0:
            raise ConfigError(f"BM25_DOWNLOAD_TIMEOUT must be positive, got {timeout}")

        return cls(
            url=os.getenv("BM25_PARAMS_URL") or DEFAULT_PARAMS_URL,
            cache_path=os.getenv("BM25_PARAMS_CACHE") or None,
            timeout=timeout,
        )
