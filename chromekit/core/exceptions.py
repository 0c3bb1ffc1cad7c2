"""
Centralized exception hierarchy for chromekit.

Errors raised by the download and extraction primitives live beside those
primitives (see core.download and core.filesystem) and pass through the
installer unmodified.
"""


# ============================================================================
# Base Exceptions
# ============================================================================


class ChromeKitError(Exception):
    """Base exception for all chromekit errors."""

    pass


class UnsupportedPlatformError(ChromeKitError):
    """Raised when an (os, arch) pair has no Chrome for Testing build."""

    def __init__(self, os_name: str, arch: str):
        self.os_name = os_name
        self.arch = arch
        super().__init__(f"Unsupported platform: {os_name}/{arch}")


# ============================================================================
# Installer Exceptions
# ============================================================================


class InstallerError(ChromeKitError):
    """Base exception for installer errors."""

    pass


class ArchiveLayoutError(InstallerError):
    """Raised when the expected folder is missing from an extracted archive."""

    def __init__(self, path):
        self.path = path
        super().__init__(
            f"Expected directory not found in extracted archive: {path}"
        )


class BrowserOnlyModeError(InstallerError):
    """Raised when a driver operation is attempted in browser-only mode."""

    pass


# ============================================================================
# Tool Cache Exceptions
# ============================================================================


class ToolCacheError(ChromeKitError):
    """Base exception for tool cache errors."""

    pass


class CacheSourceNotFoundError(ToolCacheError):
    """Raised when the directory to cache does not exist."""

    def __init__(self, source_dir):
        self.source_dir = source_dir
        super().__init__(f"Source directory not found: {source_dir}")


class ToolCacheLockTimeout(ToolCacheError):
    """Raised when a cache entry lock cannot be acquired within timeout."""

    pass
