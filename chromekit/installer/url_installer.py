"""
Installer for Chrome for Testing archives addressed by URL.

Each archive is cached under the MD5 of its URL, so a given URL is
downloaded at most once per tool cache. The cache key is the raw URL: if the
publisher replaces the archive behind a URL, the cached copy is kept.
"""

import logging
import uuid
from pathlib import Path
from typing import Optional

from chromekit.config.parser import ChromeKitConfig, load_config
from chromekit.core.directory import get_temp_dir
from chromekit.core.download import download_tool
from chromekit.core.exceptions import (
    ArchiveLayoutError,
    BrowserOnlyModeError,
    CacheSourceNotFoundError,
)
from chromekit.core.filesystem import extract_zip, safe_rmtree
from chromekit.core.platform import Platform, as_platform, detect_platform
from chromekit.core.tool_cache import ToolCache, cache_key
from chromekit.installer.base import DownloadResult, InstallResult, Installer
from chromekit.installer.naming import (
    ArtifactKind,
    archive_folder_name,
    executable_name,
    platform_string,
    tool_name,
)

logger = logging.getLogger(__name__)


class URLInstaller(Installer):
    """
    Downloads, extracts and caches the browser and driver from URLs.

    In browser-only mode (resolve_browser_version_only=True) the driver
    download and install operations raise BrowserOnlyModeError; callers in
    that mode are expected never to reach them.

    Example:
        >>> installer = URLInstaller(Platform("linux", "amd64"))
        >>> result = installer.check_installed_browser(url)
        >>> if result is None:
        ...     archive = installer.download_browser(url).archive
        ...     result = installer.install_browser(url, archive)
        >>> print(result.executable)
    """

    def __init__(
        self,
        platform: Platform,
        resolve_browser_version_only: bool = False,
        tool_cache: Optional[ToolCache] = None,
        config: Optional[ChromeKitConfig] = None,
    ):
        """
        Initialize URL installer.

        Args:
            platform: Target platform
            resolve_browser_version_only: Forbid driver download/install
            tool_cache: Tool cache store (default: built from config)
            config: Download and directory settings (default: ChromeKitConfig())

        Raises:
            UnsupportedPlatformError: If no build exists for platform
        """
        self.platform = as_platform(platform)
        self.resolve_browser_version_only = resolve_browser_version_only
        self.config = config or ChromeKitConfig()

        # Fail on unsupported platforms before any I/O happens
        platform_string(self.platform)

        self.tool_cache = tool_cache or ToolCache(
            self.config.tool_cache_dir,
            arch=self.platform.arch,
            lock_timeout=self.config.lock_timeout,
        )

    @classmethod
    def from_config(
        cls,
        config: Optional[ChromeKitConfig] = None,
        platform: Optional[Platform] = None,
    ) -> "URLInstaller":
        """
        Build an installer from configuration.

        Args:
            config: Configuration (default: load_config())
            platform: Target platform (default: config.platform or detected)
        """
        config = config or load_config()
        if platform is None:
            platform = (
                as_platform(config.platform) if config.platform else detect_platform()
            )

        return cls(
            platform,
            resolve_browser_version_only=config.resolve_browser_version_only,
            config=config,
        )

    def get_cache_dir_name(self, version: str) -> str:
        """Get the cache key for a URL (or any version string)."""
        return cache_key(version)

    # ------------------------------------------------------------------
    # Browser
    # ------------------------------------------------------------------

    def check_installed_browser(self, version: str) -> Optional[InstallResult]:
        return self._check_installed(ArtifactKind.BROWSER, version)

    def download_browser(self, url: str) -> DownloadResult:
        logger.info(f"Acquiring chrome from {url}")
        return self._download(url)

    def install_browser(self, url: str, archive: Path) -> InstallResult:
        return self._install(ArtifactKind.BROWSER, url, archive)

    # ------------------------------------------------------------------
    # Driver
    # ------------------------------------------------------------------

    def check_installed_driver(self, version: str) -> Optional[InstallResult]:
        return self._check_installed(ArtifactKind.DRIVER, version)

    def download_driver(self, url: str) -> DownloadResult:
        if self.resolve_browser_version_only:
            raise BrowserOnlyModeError("Unexpectedly trying to download chromedriver")

        logger.info(f"Acquiring chromedriver from {url}")
        return self._download(url)

    def install_driver(self, url: str, archive: Path) -> InstallResult:
        if self.resolve_browser_version_only:
            raise BrowserOnlyModeError("Unexpectedly trying to install chromedriver")

        return self._install(ArtifactKind.DRIVER, url, archive)

    # ------------------------------------------------------------------

    def _check_installed(
        self, kind: ArtifactKind, version: str
    ) -> Optional[InstallResult]:
        root = self.tool_cache.find(tool_name(kind), self.get_cache_dir_name(version))
        if root:
            return InstallResult(
                root=root, bin=executable_name(self.platform.os, kind)
            )
        return None

    def _download(self, url: str) -> DownloadResult:
        archive = download_tool(
            url,
            timeout=self.config.download_timeout,
            max_retries=self.config.download_retries,
            temp_dir=self.config.temp_dir,
        )
        return DownloadResult(archive=archive)

    def _install(self, kind: ArtifactKind, url: str, archive: Path) -> InstallResult:
        temp_root = Path(self.config.temp_dir or get_temp_dir())
        extract_dir = temp_root / str(uuid.uuid4())

        name = tool_name(kind)
        try:
            ext_path = extract_zip(archive, extract_dir)
            ext_app_root = Path(ext_path) / archive_folder_name(self.platform, kind)
            try:
                root = self.tool_cache.cache_dir(
                    ext_app_root, name, self.get_cache_dir_name(url)
                )
            except CacheSourceNotFoundError as e:
                raise ArchiveLayoutError(ext_app_root) from e
        finally:
            # The cache holds its own copy; the extraction tree is scratch
            safe_rmtree(extract_dir, require_prefix=temp_root)

        logger.info(f"Successfully installed {name} to {root}")
        return InstallResult(root=root, bin=executable_name(self.platform.os, kind))


__all__ = ["URLInstaller"]
