"""
Core functionality for chromekit.

This package contains the foundational modules the installer depends on:
platform description, the download and extraction primitives, and the
tool cache store.
"""

from .exceptions import (
    ChromeKitError,
    UnsupportedPlatformError,
    InstallerError,
    ArchiveLayoutError,
    BrowserOnlyModeError,
    ToolCacheError,
    CacheSourceNotFoundError,
    ToolCacheLockTimeout,
)

from .platform import (
    OS,
    Arch,
    Platform,
    detect_platform,
    as_platform,
    clear_platform_cache,
)

from .directory import (
    DirectoryError,
    get_tool_cache_dir,
    get_temp_dir,
)

from .download import (
    DownloadError,
    download_tool,
)

from .filesystem import (
    FilesystemError,
    ArchiveExtractionError,
    InsecureArchiveError,
    extract_zip,
)

from .tool_cache import (
    ToolCache,
    cache_key,
)

__all__ = [
    "ChromeKitError",
    "UnsupportedPlatformError",
    "InstallerError",
    "ArchiveLayoutError",
    "BrowserOnlyModeError",
    "ToolCacheError",
    "CacheSourceNotFoundError",
    "ToolCacheLockTimeout",
    "OS",
    "Arch",
    "Platform",
    "detect_platform",
    "as_platform",
    "clear_platform_cache",
    "DirectoryError",
    "get_tool_cache_dir",
    "get_temp_dir",
    "DownloadError",
    "download_tool",
    "FilesystemError",
    "ArchiveExtractionError",
    "InsecureArchiveError",
    "extract_zip",
    "ToolCache",
    "cache_key",
]
