"""
Installer interface and the check / download / install flow.

An installer handles two tools, the browser and its driver, each through
the same lifecycle:

1. check_installed_*  - look the source up in the tool cache
2. download_*         - fetch the archive
3. install_*          - extract it and register it in the tool cache

install_browser() and install_driver() run that lifecycle and return the
absolute path of the executable.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DownloadResult:
    """A downloaded archive waiting to be installed."""

    archive: Path


@dataclass(frozen=True)
class InstallResult:
    """Location of an installed tool."""

    root: Path
    """Tool cache entry directory"""

    bin: str
    """Executable path relative to root"""

    @property
    def executable(self) -> Path:
        """Absolute path of the executable."""
        return Path(self.root) / self.bin


class Installer(ABC):
    """Lifecycle operations shared by all installers."""

    @abstractmethod
    def check_installed_browser(self, version: str) -> Optional[InstallResult]:
        pass

    @abstractmethod
    def download_browser(self, version: str) -> DownloadResult:
        pass

    @abstractmethod
    def install_browser(self, version: str, archive: Path) -> InstallResult:
        pass

    @abstractmethod
    def check_installed_driver(self, version: str) -> Optional[InstallResult]:
        pass

    @abstractmethod
    def download_driver(self, version: str) -> DownloadResult:
        pass

    @abstractmethod
    def install_driver(self, version: str, archive: Path) -> InstallResult:
        pass


def install_browser(installer: Installer, version: str) -> Path:
    """
    Make the browser for version available and return its executable.

    Example:
        >>> installer = URLInstaller(detect_platform())
        >>> install_browser(installer, url)
        PosixPath('/home/user/.chromekit/toolcache/chromium/aa2e.../amd64/chrome')
    """
    cached = installer.check_installed_browser(version)
    if cached:
        logger.info(f"Found in cache @ {cached.root}")
        return cached.executable

    logger.info(f"Attempting to download chrome {version}...")
    downloaded = installer.download_browser(version)

    logger.info("Installing chrome...")
    return installer.install_browser(version, downloaded.archive).executable


def install_driver(installer: Installer, version: str) -> Path:
    """Make the driver for version available and return its executable."""
    cached = installer.check_installed_driver(version)
    if cached:
        logger.info(f"Found in cache @ {cached.root}")
        return cached.executable

    logger.info(f"Attempting to download chromedriver {version}...")
    downloaded = installer.download_driver(version)

    logger.info("Installing chromedriver...")
    return installer.install_driver(version, downloaded.archive).executable


__all__ = [
    "DownloadResult",
    "InstallResult",
    "Installer",
    "install_browser",
    "install_driver",
]
