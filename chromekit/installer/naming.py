"""
Archive and executable naming for Chrome for Testing downloads.

Archive folder labels are fixed by the publisher: a zip for linux64 holds a
single 'chrome-linux64/' folder, and so on. Any (os, arch) pair missing from
PLATFORM_LABELS has no published build.
"""

from enum import Enum
from typing import Dict, Tuple

from chromekit.core.exceptions import UnsupportedPlatformError
from chromekit.core.platform import OS, Arch, Platform


class ArtifactKind(str, Enum):
    """The two tools an installer manages."""

    BROWSER = "browser"
    DRIVER = "driver"


PLATFORM_LABELS: Dict[Tuple[OS, str], str] = {
    (OS.LINUX, Arch.AMD64): "linux64",
    (OS.DARWIN, Arch.AMD64): "mac-x64",
    (OS.DARWIN, Arch.ARM64): "mac-arm64",
    (OS.WINDOWS, Arch.AMD64): "win64",
    (OS.WINDOWS, Arch.I686): "win32",
}

EXECUTABLES: Dict[Tuple[OS, ArtifactKind], str] = {
    (OS.LINUX, ArtifactKind.BROWSER): "chrome",
    (
        OS.DARWIN,
        ArtifactKind.BROWSER,
    ): "Google Chrome for Testing.app/Contents/MacOS/Google Chrome for Testing",
    (OS.WINDOWS, ArtifactKind.BROWSER): "chrome.exe",
    (OS.LINUX, ArtifactKind.DRIVER): "chromedriver",
    (OS.DARWIN, ArtifactKind.DRIVER): "chromedriver",
    (OS.WINDOWS, ArtifactKind.DRIVER): "chromedriver.exe",
}

# Cache tool names and archive folder prefixes
TOOL_NAMES: Dict[ArtifactKind, str] = {
    ArtifactKind.BROWSER: "chromium",
    ArtifactKind.DRIVER: "chromedriver",
}

ARCHIVE_PREFIXES: Dict[ArtifactKind, str] = {
    ArtifactKind.BROWSER: "chrome",
    ArtifactKind.DRIVER: "chromedriver",
}


def platform_string(platform: Platform) -> str:
    """
    Get the Chrome for Testing label for a platform.

    Raises:
        UnsupportedPlatformError: If no build exists for the platform

    Example:
        >>> platform_string(Platform("darwin", "arm64"))
        'mac-arm64'
    """
    try:
        return PLATFORM_LABELS[(platform.os, platform.arch)]
    except KeyError:
        raise UnsupportedPlatformError(platform.os.value, platform.arch) from None


def executable_name(os_name: OS, kind: ArtifactKind) -> str:
    """Get the executable path relative to an installed tool's root."""
    return EXECUTABLES[(OS(os_name), ArtifactKind(kind))]


def archive_folder_name(platform: Platform, kind: ArtifactKind) -> str:
    """
    Get the top-level folder inside a downloaded archive.

    Example:
        >>> archive_folder_name(Platform("linux", "amd64"), ArtifactKind.DRIVER)
        'chromedriver-linux64'
    """
    return f"{ARCHIVE_PREFIXES[ArtifactKind(kind)]}-{platform_string(platform)}"


def tool_name(kind: ArtifactKind) -> str:
    """Get the tool cache name for an artifact kind."""
    return TOOL_NAMES[ArtifactKind(kind)]


__all__ = [
    "ArtifactKind",
    "PLATFORM_LABELS",
    "EXECUTABLES",
    "platform_string",
    "executable_name",
    "archive_folder_name",
    "tool_name",
]
