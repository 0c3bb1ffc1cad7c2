"""
Directory resolution for chromekit.

Default locations used when configuration does not name them explicitly:

    Tool cache:
        - $RUNNER_TOOL_CACHE/chromekit on CI runners that provide one
        - %USERPROFILE%\\.chromekit\\toolcache on Windows
        - ~/.chromekit/toolcache on Linux/macOS

    Temporary storage (downloaded archives, extraction trees):
        - $RUNNER_TEMP when set
        - <system temp dir>/chromekit otherwise
"""

import os
import tempfile
from pathlib import Path


class DirectoryError(Exception):
    """Base exception for directory-related errors."""

    pass


def get_home_dir() -> Path:
    """
    Get the chromekit home directory.

    Raises:
        DirectoryError: If USERPROFILE is not set on Windows
    """
    if os.name == "nt":
        user_profile = os.environ.get("USERPROFILE")
        if not user_profile:
            raise DirectoryError(
                "USERPROFILE environment variable is not set. "
                "Cannot determine chromekit home directory."
            )
        return Path(user_profile) / ".chromekit"
    return Path.home() / ".chromekit"


def get_tool_cache_dir() -> Path:
    """
    Get the default tool cache root.

    Example:
        >>> get_tool_cache_dir()
        PosixPath('/opt/hostedtoolcache/chromekit')  # on a hosted runner
    """
    runner_cache = os.environ.get("RUNNER_TOOL_CACHE")
    if runner_cache:
        return Path(runner_cache) / "chromekit"
    return get_home_dir() / "toolcache"


def get_temp_dir() -> Path:
    """Get the default directory for downloads and extraction trees."""
    runner_temp = os.environ.get("RUNNER_TEMP")
    if runner_temp:
        return Path(runner_temp)
    return Path(tempfile.gettempdir()) / "chromekit"


__all__ = [
    "DirectoryError",
    "get_home_dir",
    "get_tool_cache_dir",
    "get_temp_dir",
]
