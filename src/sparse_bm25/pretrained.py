"""
Default BM25 parameters - download, cache and load.

With a cache path, the parameter file is downloaded once and reused:

    encoder = load_default("~/.cache/bm25/msmarco_bm25_params.json")

Without one, the file goes to a temporary directory that is removed after
loading, whether or not the download and load succeeded.

Download and load failures are raised as ParamsIOError. An encoder is only
returned once its parameters have actually been loaded.
"""

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional, Union

import requests

from .config import PretrainedSettings
from .encoder import BM25Encoder
from .exceptions import BM25Error, InvalidExtensionError, ParamsIOError

logger = logging.getLogger(__name__)

PARAMS_EXTENSION = ".json"
TEMP_FILENAME = "msmarco_bm25_params.json"


def resolve_cache_path(path: Union[str, Path]) -> Path:
    """Absolute cache path, rejecting anything that is not a .json file"""
    cache_path = Path(path).expanduser()
    if cache_path.suffix.lower() != PARAMS_EXTENSION:
        raise InvalidExtensionError(f"BM25 params cache must be a {PARAMS_EXTENSION} file, got: {path}")
    return cache_path.resolve()


def download_params(url: str, destination: Path, timeout: float) -> None:
    """
    Fetch the parameter file and write the body verbatim to `destination`.

    Raises:
        ParamsIOError: request failed, non-2xx status, or write failed
    """
    logger.info(f"Downloading default BM25 params from {url}")
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        logger.error(f"Failed to download BM25 params from {url}: {exc}")
        raise ParamsIOError(f"Failed to download BM25 params from {url}: {exc}") from exc

    # Write beside the destination, then rename into place
    partial = destination.with_name(destination.name + ".part")
    try:
        partial.write_bytes(response.content)
        os.replace(partial, destination)
    except OSError as exc:
        try:
            partial.unlink()
        except FileNotFoundError:
            pass
        except OSError as cleanup_exc:
            logger.warning(f"Failed to remove partial download {partial}: {cleanup_exc}")
        raise ParamsIOError(f"Failed to write BM25 params to {destination}: {exc}") from exc
    logger.debug(f"Saved {len(response.content)} bytes to {destination}")


def _load_cached(cache_path: Path, settings: PretrainedSettings) -> BM25Encoder:
    if cache_path.exists():
        logger.info(f"Loading BM25 params from cache: {cache_path}")
        return BM25Encoder().load(cache_path)

    try:
        cache_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ParamsIOError(f"Failed to create cache directory {cache_path.parent}: {exc}") from exc

    download_params(settings.url, cache_path, settings.timeout)
    try:
        return BM25Encoder().load(cache_path)
    except BM25Error:
        # Do not leave an unloadable file behind as a future cache hit
        try:
            cache_path.unlink()
        except OSError as cleanup_exc:
            logger.warning(f"Failed to remove unloadable cache file {cache_path}: {cleanup_exc}")
        raise


def _load_ephemeral(settings: PretrainedSettings) -> BM25Encoder:
    try:
        temp_dir = Path(tempfile.mkdtemp(prefix="bm25_params_"))
    except OSError as exc:
        raise ParamsIOError(f"Failed to create temporary directory: {exc}") from exc

    try:
        temp_path = temp_dir / TEMP_FILENAME
        download_params(settings.url, temp_path, settings.timeout)
        return BM25Encoder().load(temp_path)
    finally:
        try:
            shutil.rmtree(temp_dir)
        except OSError as cleanup_exc:
            logger.warning(f"Failed to remove temporary directory {temp_dir}: {cleanup_exc}")


def load_default(
    path: Optional[Union[str, Path]] = None,
    settings: Optional[PretrainedSettings] = None,
) -> BM25Encoder:
    """
    Encoder loaded with the default pretrained parameters.

    Args:
        path: Persistent .json cache path; downloaded there if missing.
            Defaults to settings.cache_path, then to a temporary location.
        settings: Download source and timeout (default: PretrainedSettings())

    Returns:
        Fitted BM25Encoder

    Raises:
        InvalidExtensionError: path is not a .json file
        ParamsIOError: download, filesystem or parse failure
    """
    settings = settings or PretrainedSettings()
    if path is None:
        path = settings.cache_path

    if path:
        return _load_cached(resolve_cache_path(path), settings)
    return _load_ephemeral(settings)
