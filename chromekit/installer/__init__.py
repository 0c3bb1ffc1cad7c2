"""
Installer module for chromekit.

This module provides:
- The Installer interface and the install_browser / install_driver flow
- URLInstaller, which caches archives keyed by their download URL
- Platform and executable naming for Chrome for Testing archives
"""

from chromekit.installer.base import (
    DownloadResult,
    InstallResult,
    Installer,
    install_browser,
    install_driver,
)
from chromekit.installer.naming import (
    ArtifactKind,
    archive_folder_name,
    executable_name,
    platform_string,
    tool_name,
)
from chromekit.installer.url_installer import URLInstaller

__all__ = [
    "DownloadResult",
    "InstallResult",
    "Installer",
    "install_browser",
    "install_driver",
    "ArtifactKind",
    "archive_folder_name",
    "executable_name",
    "platform_string",
    "tool_name",
    "URLInstaller",
]
