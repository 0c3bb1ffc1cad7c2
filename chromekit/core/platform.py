"""
Platform detection for chromekit.

Chrome for Testing publishes one archive per (os, arch) pair, so the
installer only needs the operating system and the CPU architecture of the
target machine.

Usage:
    from chromekit.core.platform import detect_platform

    platform_info = detect_platform()
    print(f"OS: {platform_info.os.value}")
    print(f"Architecture: {platform_info.arch}")
"""

import functools
import platform
from dataclasses import dataclass
from enum import Enum
from typing import Union

from chromekit.core.exceptions import UnsupportedPlatformError


class OS(str, Enum):
    """Operating systems Chrome for Testing is built for."""

    LINUX = "linux"
    DARWIN = "darwin"
    WINDOWS = "windows"


class Arch:
    """Architecture names used in Platform.arch."""

    AMD64 = "amd64"
    ARM64 = "arm64"
    I686 = "i686"


@dataclass(frozen=True)
class Platform:
    """
    Target operating system and CPU architecture.

    Attributes:
        os: Operating system (a plain string such as 'linux' is accepted)
        arch: CPU architecture ('amd64', 'arm64', 'i686')

    Example:
        >>> Platform("linux", "amd64")
        Platform(os=<OS.LINUX: 'linux'>, arch='amd64')
    """

    os: OS
    arch: str

    def __post_init__(self):
        if not isinstance(self.os, OS):
            object.__setattr__(self, "os", OS(str(self.os).lower()))

    def __str__(self) -> str:
        return f"{self.os.value}-{self.arch}"


def _detect_os() -> OS:
    system = platform.system().lower()

    if system == "linux":
        return OS.LINUX
    elif system == "darwin":
        return OS.DARWIN
    elif system == "windows":
        return OS.WINDOWS
    else:
        raise UnsupportedPlatformError(system, platform.machine().lower())


def _detect_architecture() -> str:
    machine = platform.machine().lower()

    if machine in ("x86_64", "amd64", "x64"):
        return Arch.AMD64
    elif machine in ("aarch64", "arm64"):
        return Arch.ARM64
    elif machine in ("i386", "i686", "x86"):
        return Arch.I686
    else:
        # Unknown architectures are rejected later by the naming tables
        return machine


@functools.lru_cache(maxsize=1)
def detect_platform() -> Platform:
    """
    Detect the platform of the running interpreter.

    This function is cached - it only runs detection once per process.

    Returns:
        Platform for the current machine

    Raises:
        UnsupportedPlatformError: If the operating system is not supported
    """
    return Platform(os=_detect_os(), arch=_detect_architecture())


def as_platform(value: Union[Platform, str]) -> Platform:
    """
    Coerce 'os-arch' strings (e.g. 'darwin-arm64') into a Platform.

    Raises:
        ValueError: If the string is not of the form 'os-arch'
    """
    if isinstance(value, Platform):
        return value

    os_name, sep, arch = str(value).partition("-")
    if not sep or not arch:
        raise ValueError(f"Invalid platform string: {value!r}")
    return Platform(os=os_name, arch=arch)


def clear_platform_cache():
    """Forget the cached result of detect_platform()."""
    detect_platform.cache_clear()


__all__ = [
    "OS",
    "Arch",
    "Platform",
    "detect_platform",
    "as_platform",
    "clear_platform_cache",
]
