"""
Unit tests for archive and executable naming.
"""

import pytest

from chromekit.core.exceptions import UnsupportedPlatformError
from chromekit.core.platform import OS, Platform
from chromekit.installer.naming import (
    ArtifactKind,
    archive_folder_name,
    executable_name,
    platform_string,
    tool_name,
)


class TestPlatformString:
    """Tests for platform_string()."""

    @pytest.mark.parametrize(
        "os_name,arch,expected",
        [
            ("linux", "amd64", "linux64"),
            ("darwin", "amd64", "mac-x64"),
            ("darwin", "arm64", "mac-arm64"),
            ("windows", "amd64", "win64"),
            ("windows", "i686", "win32"),
        ],
    )
    def test_supported(self, os_name, arch, expected):
        assert platform_string(Platform(os_name, arch)) == expected

    @pytest.mark.parametrize(
        "os_name,arch",
        [("linux", "arm64"), ("linux", "i686"), ("darwin", "i686"), ("windows", "arm64")],
    )
    def test_unsupported(self, os_name, arch):
        with pytest.raises(UnsupportedPlatformError) as exc_info:
            platform_string(Platform(os_name, arch))

        assert exc_info.value.os_name == os_name
        assert exc_info.value.arch == arch


class TestExecutableName:
    """Tests for executable_name()."""

    @pytest.mark.parametrize(
        "os_name,kind,expected",
        [
            (OS.LINUX, ArtifactKind.BROWSER, "chrome"),
            (OS.WINDOWS, ArtifactKind.BROWSER, "chrome.exe"),
            (
                OS.DARWIN,
                ArtifactKind.BROWSER,
                "Google Chrome for Testing.app/Contents/MacOS/Google Chrome for Testing",
            ),
            (OS.LINUX, ArtifactKind.DRIVER, "chromedriver"),
            (OS.DARWIN, ArtifactKind.DRIVER, "chromedriver"),
            (OS.WINDOWS, ArtifactKind.DRIVER, "chromedriver.exe"),
        ],
    )
    def test_executables(self, os_name, kind, expected):
        assert executable_name(os_name, kind) == expected

    def test_accepts_plain_strings(self):
        assert executable_name("windows", "driver") == "chromedriver.exe"


class TestArchiveFolderName:
    """Tests for archive_folder_name() and tool_name()."""

    def test_browser_folder(self):
        platform_info = Platform("linux", "amd64")
        assert archive_folder_name(platform_info, ArtifactKind.BROWSER) == "chrome-linux64"

    def test_driver_folder(self):
        platform_info = Platform("darwin", "arm64")
        assert archive_folder_name(platform_info, ArtifactKind.DRIVER) == "chromedriver-mac-arm64"

    def test_folder_unsupported_platform(self):
        with pytest.raises(UnsupportedPlatformError):
            archive_folder_name(Platform("linux", "arm64"), ArtifactKind.BROWSER)

    def test_tool_names(self):
        assert tool_name(ArtifactKind.BROWSER) == "chromium"
        assert tool_name(ArtifactKind.DRIVER) == "chromedriver"
