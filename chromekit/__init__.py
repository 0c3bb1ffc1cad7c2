"""
chromekit - cached installs of Chrome for Testing and chromedriver.

Usage:
    from chromekit import URLInstaller, install_browser

    installer = URLInstaller.from_config()
    chrome = install_browser(installer, url)
"""

__version__ = "0.1.0"

from chromekit.core.platform import OS, Platform, detect_platform
from chromekit.core.tool_cache import ToolCache, cache_key
from chromekit.installer import (
    DownloadResult,
    InstallResult,
    Installer,
    URLInstaller,
    install_browser,
    install_driver,
)

__all__ = [
    "__version__",
    "OS",
    "Platform",
    "detect_platform",
    "ToolCache",
    "cache_key",
    "DownloadResult",
    "InstallResult",
    "Installer",
    "URLInstaller",
    "install_browser",
    "install_driver",
]
