"""
Network download primitive.

download_tool() fetches a URL into a local file:
- HTTP/HTTPS downloads with TLS verification (requests, streamed)
- Retry with exponential backoff for transient failures only
- Partial files are removed on failure

It does not verify checksums and does not resume partial downloads.
"""

import logging
import time
import uuid
from pathlib import Path
from typing import Optional, Union

import requests
from requests.exceptions import ConnectionError, HTTPError, RequestException, Timeout

from chromekit.core.directory import get_temp_dir

logger = logging.getLogger(__name__)

CHUNK_SIZE = 8192

# Statuses worth another attempt; any other HTTP error fails immediately
RETRYABLE_STATUS_CODES = frozenset({408, 429})


class DownloadError(Exception):
    """Exception raised when download fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


def _is_retryable(error: RequestException) -> bool:
    if isinstance(error, (Timeout, ConnectionError)):
        return True
    if isinstance(error, HTTPError) and error.response is not None:
        status = error.response.status_code
        return status >= 500 or status in RETRYABLE_STATUS_CODES
    return False


def _status_code(error: RequestException) -> Optional[int]:
    response = getattr(error, "response", None)
    return response.status_code if response is not None else None


def download_tool(
    url: str,
    destination: Optional[Union[str, Path]] = None,
    timeout: int = 30,
    max_retries: int = 3,
    temp_dir: Optional[Union[str, Path]] = None,
) -> Path:
    """
    Download a URL to a local file.

    Args:
        url: URL to download from
        destination: File to write. Defaults to a uuid-named file in temp_dir.
        timeout: Request timeout in seconds
        max_retries: Maximum number of attempts
        temp_dir: Directory for the default destination
            (default: chromekit.core.directory.get_temp_dir())

    Returns:
        Path to the downloaded file

    Raises:
        DownloadError: If the download fails (status_code set for HTTP errors)
        ValueError: If the URL is empty or the destination already exists

    Example:
        >>> archive = download_tool(
        ...     "https://storage.googleapis.com/chrome-for-testing-public/"
        ...     "120.0.6099.109/linux64/chrome-linux64.zip"
        ... )
    """
    if not url:
        raise ValueError("URL cannot be empty")

    if destination is None:
        destination = Path(temp_dir or get_temp_dir()) / str(uuid.uuid4())
    destination = Path(destination)

    if destination.exists():
        raise ValueError(f"Destination file path {destination} already exists")

    destination.parent.mkdir(parents=True, exist_ok=True)

    for attempt in range(max_retries):
        try:
            return _download(url, destination, timeout)
        except RequestException as e:
            destination.unlink(missing_ok=True)

            if not _is_retryable(e):
                raise DownloadError(
                    f"Failed to download {url}: {e}", status_code=_status_code(e)
                ) from e

            if attempt == max_retries - 1:
                raise DownloadError(
                    f"Download failed after {max_retries} attempts: {e}",
                    status_code=_status_code(e),
                ) from e

            backoff_seconds = 2**attempt
            logger.warning(
                f"Download attempt {attempt + 1} failed: {e}. "
                f"Retrying in {backoff_seconds}s..."
            )
            time.sleep(backoff_seconds)

    raise DownloadError(f"Download failed for unknown reason: {url}")


def _download(url: str, destination: Path, timeout: int) -> Path:
    """Stream one response body into destination."""
    logger.debug(f"Downloading {url} to {destination}")

    with requests.get(
        url, stream=True, timeout=timeout, allow_redirects=True
    ) as response:
        response.raise_for_status()

        downloaded = 0
        try:
            with open(destination, "wb") as f:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)
                        downloaded += len(chunk)
        except OSError:
            destination.unlink(missing_ok=True)
            raise

    logger.debug(f"Download complete: {destination} ({downloaded} bytes)")
    return destination


__all__ = ["DownloadError", "download_tool"]
