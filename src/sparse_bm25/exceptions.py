"""
Error types raised by the BM25 encoder.

Every error derives from BM25Error and from the closest builtin exception,
so callers can catch either the library-specific class or the builtin one.
"""


class BM25Error(Exception):
    """Base class for all sparse_bm25 errors"""


class InvalidInputError(BM25Error, TypeError):
    """Corpus or texts are not a string / sequence of strings"""


class NotFittedError(BM25Error, RuntimeError):
    """Encoder used before fit(), set_params() or load()"""


class NoFittableDocumentsError(BM25Error, ValueError):
    """Every document in the corpus was empty after tokenization"""


class InvalidExtensionError(BM25Error, ValueError):
    """Pretrained cache path does not end in .json"""


class ConfigError(BM25Error, ValueError):
    """Invalid encoder or loader configuration"""


class ZeroIdfSumError(BM25Error, ArithmeticError):
    """Query idf weights sum to zero and cannot be normalized"""


class ParamsIOError(BM25Error, OSError):
    """Reading, writing or downloading a parameter file failed"""


class ParamsFormatError(ParamsIOError):
    """Parameter file content is not a valid BM25 parameter document"""
