"""Unit test configuration - shared corpus, fitted encoder, clean environment"""

import os

import pytest

from sparse_bm25 import BM25Encoder

SETTINGS_ENV_VARS = ("BM25_PARAMS_URL", "BM25_PARAMS_CACHE", "BM25_DOWNLOAD_TIMEOUT")


@pytest.fixture(autouse=True)
def clean_settings_env():
    """
    Remove BM25_* settings variables before and after each test.

    load_dotenv() writes straight into os.environ, so variables loaded by
    one test must not leak into the next.
    """
    saved = {name: os.environ.pop(name) for name in SETTINGS_ENV_VARS if name in os.environ}
    yield
    for name in SETTINGS_ENV_VARS:
        os.environ.pop(name, None)
    os.environ.update(saved)


@pytest.fixture
def corpus():
    return [
        "The quick brown fox jumps over the lazy dog",
        "The lazy dog is brown",
        "The fox is brown",
    ]


@pytest.fixture
def fitted_encoder(corpus):
    return BM25Encoder().fit(corpus)
