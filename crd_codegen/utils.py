"""Utility functions for loading CustomResourceDefinition manifests.

This module provides functions for loading YAML or JSON manifests from
files, directories and URLs, and for picking the CRD documents out of them.
"""

from pathlib import Path
from typing import Any, Iterable
from urllib.parse import urlparse

import requests
import yaml

from .logging_config import get_logger

logger = get_logger(__name__)

CRD_KIND = "CustomResourceDefinition"
MANIFEST_SUFFIXES = (".yaml", ".yml", ".json")


class CRDLoaderError(Exception):
    """Custom exception for manifest loading errors."""

    pass


def parse_manifests(text: str, source: str = "<string>") -> list[Any]:
    """Parse a multi-document YAML (or JSON) string.

    Args:
        text: Manifest text.
        source: Description of where the text came from, for error messages.

    Returns:
        List of non-empty documents, in order.

    Raises:
        CRDLoaderError: If the text is not valid YAML.
    """
    try:
        documents = list(yaml.safe_load_all(text))
    except yaml.YAMLError as e:
        logger.error(f"Invalid YAML in {source}: {e}")
        raise CRDLoaderError(f"Invalid YAML in {source}: {e}") from e
    return [document for document in documents if document is not None]


def load_manifests_from_file(file_path: str | Path) -> tuple[str, list[Any]]:
    """Load all documents from a local manifest file.

    Returns:
        Tuple of (source description, parsed documents).

    Raises:
        FileNotFoundError: If file doesn't exist.
        CRDLoaderError: If file cannot be read or parsed.
    """
    file_path = Path(file_path)
    logger.debug(f"Attempting to load manifests from file: {file_path}")

    if not file_path.exists():
        logger.error(f"File not found: {file_path}")
        raise FileNotFoundError(f"File not found: {file_path}")

    if file_path.suffix.lower() not in MANIFEST_SUFFIXES:
        logger.warning(f"File does not have a YAML or JSON extension: {file_path}")

    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        logger.error(f"Error reading file {file_path}: {e}", exc_info=True)
        raise CRDLoaderError(f"Error reading file {file_path}: {e}") from e

    documents = parse_manifests(text, str(file_path))
    logger.info(f"Loaded {len(documents)} document(s) from {file_path}")
    return str(file_path), documents


def load_manifests_from_directory(directory: str | Path) -> list[tuple[str, list[Any]]]:
    """Load every YAML or JSON file below a directory, sorted by path."""
    directory = Path(directory)
    files = sorted(
        path
        for path in directory.rglob("*")
        if path.is_file() and path.suffix.lower() in MANIFEST_SUFFIXES
    )
    if not files:
        logger.warning(f"No manifest files found in {directory}")
    return [load_manifests_from_file(path) for path in files]


def load_manifests_from_url(url: str, timeout: int = 30) -> tuple[str, list[Any]]:
    """Load all documents from a URL.

    Args:
        url: URL to fetch the manifest from.
        timeout: Request timeout in seconds.

    Returns:
        Tuple of (source description, parsed documents).

    Raises:
        CRDLoaderError: If URL is invalid, request fails, or the body isn't valid YAML.
    """
    logger.debug(f"Attempting to load manifests from URL: {url}")

    parsed_url = urlparse(url)
    if not all([parsed_url.scheme, parsed_url.netloc]):
        logger.error(f"Invalid URL format: {url}")
        raise CRDLoaderError(f"Invalid URL: {url}")

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.Timeout:
        logger.error(f"Request timeout for URL: {url}")
        raise CRDLoaderError(f"Request timeout for URL: {url}")
    except requests.exceptions.ConnectionError as e:
        logger.error(f"Connection error for URL {url}: {e}")
        raise CRDLoaderError(f"Connection error for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        logger.error(f"HTTP error {e.response.status_code} for URL: {url}")
        raise CRDLoaderError(
            f"HTTP error {e.response.status_code} for URL: {url}"
        ) from e
    except requests.exceptions.RequestException as e:
        logger.error(f"Request error for URL {url}: {e}", exc_info=True)
        raise CRDLoaderError(f"Request error for URL {url}: {e}") from e

    documents = parse_manifests(response.text, url)
    logger.info(f"Loaded {len(documents)} document(s) from {url}")
    return url, documents


def is_url(source: str) -> bool:
    parsed = urlparse(str(source))
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def load_manifests(source: str | Path, timeout: int = 30) -> list[tuple[str, list[Any]]]:
    """Load documents from a file, a directory or a URL.

    Returns:
        List of (source description, parsed documents) tuples.
    """
    if isinstance(source, str) and is_url(source):
        return [load_manifests_from_url(source, timeout)]

    path = Path(source)
    if path.is_dir():
        return load_manifests_from_directory(path)
    return [load_manifests_from_file(path)]


def iter_crds(documents: Iterable[Any]) -> Iterable[dict]:
    """Yield the CustomResourceDefinition documents, unwrapping ``List`` kinds."""
    for document in documents:
        if not isinstance(document, dict):
            logger.warning(f"Skipping non-mapping document of type {type(document).__name__}")
            continue

        kind = document.get("kind")
        if kind == CRD_KIND:
            yield document
        elif kind == "List" or (kind or "").endswith("List"):
            yield from iter_crds(document.get("items") or [])
        else:
            logger.warning(f"Skipping document of kind {kind!r}")


def load_crds(sources: Iterable[str | Path], timeout: int = 30) -> list[tuple[str, dict]]:
    """Load every CRD from the given sources.

    Returns:
        List of (source description, CRD document) tuples, in source order.
    """
    crds = []
    for source in sources:
        for description, documents in load_manifests(source, timeout):
            for crd in iter_crds(documents):
                crds.append((description, crd))
    return crds
