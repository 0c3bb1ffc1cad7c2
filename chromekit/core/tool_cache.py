"""
Keyed on-disk cache of installed tools.

Entries are laid out the way hosted tool caches lay them out:

    <root>/<tool>/<key>/<arch>/            installed files
    <root>/<tool>/<key>/<arch>.complete    marker written after the copy

An entry without its marker is treated as absent, so an interrupted copy
never shows up as installed.
"""

import hashlib
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import List, Optional, Union

from filelock import FileLock, Timeout

from chromekit.core.directory import get_tool_cache_dir
from chromekit.core.exceptions import CacheSourceNotFoundError, ToolCacheLockTimeout
from chromekit.core.filesystem import recursive_copy, safe_rmtree
from chromekit.core.platform import detect_platform

logger = logging.getLogger(__name__)

COMPLETE_SUFFIX = ".complete"


def cache_key(value: str) -> str:
    """
    Derive a cache directory name from an arbitrary string.

    The value is hashed verbatim (no URL normalisation), so two spellings of
    the same URL get different keys. MD5 is used for deduplication only.

    Example:
        >>> cache_key("https://foo.com")
        'aa2e0510b66edff7f05e2b30d4f1b361'
    """
    return hashlib.md5(value.encode("utf-8"), usedforsecurity=False).hexdigest()


def _check_segment(name: str, value: str) -> None:
    if not value or value in (".", "..") or "/" in value or "\\" in value:
        raise ValueError(f"Invalid {name} for tool cache: {value!r}")


class ToolCache:
    """
    Filesystem tool cache with find / register semantics.

    Example:
        >>> tool_cache = ToolCache(Path("/opt/hostedtoolcache/chromekit"), arch="x64")
        >>> tool_cache.find("chromium", "aa2e0510b66edff7f05e2b30d4f1b361")
        PosixPath('/opt/hostedtoolcache/chromekit/chromium/aa2e.../x64')
    """

    def __init__(
        self,
        root: Optional[Union[str, Path]] = None,
        arch: Optional[str] = None,
        lock_timeout: int = 60,
    ):
        """
        Initialize tool cache.

        Args:
            root: Cache root directory (default: directory.get_tool_cache_dir())
            arch: Architecture segment used when a call does not pass one
                (default: the detected platform architecture)
            lock_timeout: Seconds to wait for an entry lock in cache_dir()
        """
        self.root = Path(root) if root is not None else get_tool_cache_dir()
        self.arch = arch or detect_platform().arch
        self.lock_timeout = lock_timeout

        logger.debug(f"Initialized tool cache at {self.root}")

    def entry_path(self, tool: str, key: str, arch: Optional[str] = None) -> Path:
        """Get the directory an entry occupies, whether or not it exists."""
        arch = arch or self.arch
        _check_segment("tool name", tool)
        _check_segment("key", key)
        _check_segment("arch", arch)
        return self.root / tool / key / arch

    def find(self, tool: str, key: str, arch: Optional[str] = None) -> Optional[Path]:
        """
        Find a completed cache entry.

        Returns:
            Entry directory, or None if not cached
        """
        path = self.entry_path(tool, key, arch)
        marker = path.with_name(path.name + COMPLETE_SUFFIX)

        if path.is_dir() and marker.is_file():
            logger.debug(f"Found tool in cache {tool} {key} {path.name}")
            return path

        logger.debug(f"Tool not found in cache: {tool} {key}")
        return None

    def list_versions(self, tool: str, arch: Optional[str] = None) -> List[str]:
        """List keys that have a completed entry for tool."""
        _check_segment("tool name", tool)
        tool_dir = self.root / tool

        if not tool_dir.is_dir():
            return []

        return sorted(
            child.name
            for child in tool_dir.iterdir()
            if child.is_dir() and self.find(tool, child.name, arch) is not None
        )

    @contextmanager
    def _lock(self, path: Path):
        lock_path = path.with_name(path.name + ".lock")
        lock_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            with FileLock(lock_path, timeout=self.lock_timeout):
                logger.debug(f"Acquired cache entry lock: {lock_path}")
                yield
        except Timeout as e:
            raise ToolCacheLockTimeout(
                f"Could not acquire lock {lock_path} within {self.lock_timeout} seconds"
            ) from e

    def cache_dir(
        self,
        source_dir: Union[str, Path],
        tool: str,
        key: str,
        arch: Optional[str] = None,
    ) -> Path:
        """
        Copy a directory into the cache under (tool, key, arch).

        Any existing entry for the same key is replaced.

        Args:
            source_dir: Directory whose contents are cached
            tool: Tool name, e.g. 'chromium'
            key: Entry key, e.g. cache_key(url)
            arch: Architecture segment (default: self.arch)

        Returns:
            Path to the cache entry

        Raises:
            CacheSourceNotFoundError: If source_dir is not a directory
            ToolCacheLockTimeout: If the entry lock is held too long
        """
        source_dir = Path(source_dir)
        if not source_dir.is_dir():
            raise CacheSourceNotFoundError(source_dir)

        path = self.entry_path(tool, key, arch)
        marker = path.with_name(path.name + COMPLETE_SUFFIX)

        logger.debug(f"Caching tool {tool} {key} {path.name} from {source_dir}")

        with self._lock(path):
            marker.unlink(missing_ok=True)
            safe_rmtree(path, require_prefix=self.root)
            path.mkdir(parents=True)

            recursive_copy(source_dir, path)
            marker.touch()

        return path


__all__ = ["COMPLETE_SUFFIX", "cache_key", "ToolCache"]
