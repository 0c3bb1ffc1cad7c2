"""
Unit tests for the platform module.

Tests cover:
- Platform dataclass coercion and immutability
- OS and architecture detection with mocking
- 'os-arch' string parsing
- Cache behavior
"""

import dataclasses

import pytest
from unittest.mock import patch

from chromekit.core.exceptions import UnsupportedPlatformError
from chromekit.core.platform import (
    OS,
    Arch,
    Platform,
    as_platform,
    clear_platform_cache,
    detect_platform,
    _detect_architecture,
    _detect_os,
)


class TestPlatform:
    """Tests for Platform dataclass."""

    def test_string_os_is_coerced(self):
        """Test plain string OS becomes an OS member."""
        platform_info = Platform("linux", "amd64")
        assert platform_info.os is OS.LINUX
        assert platform_info.arch == "amd64"

    def test_uppercase_os_is_coerced(self):
        """Test OS coercion is case-insensitive."""
        assert Platform("Darwin", "arm64").os is OS.DARWIN

    def test_invalid_os(self):
        """Test unknown OS raises ValueError."""
        with pytest.raises(ValueError):
            Platform("solaris", "amd64")

    def test_frozen(self):
        """Test Platform cannot be mutated."""
        platform_info = Platform(OS.WINDOWS, "amd64")
        with pytest.raises(dataclasses.FrozenInstanceError):
            platform_info.arch = "i686"

    def test_equality_and_hash(self):
        """Test equal platforms hash alike."""
        assert Platform("linux", "amd64") == Platform(OS.LINUX, "amd64")
        assert len({Platform("linux", "amd64"), Platform(OS.LINUX, "amd64")}) == 1

    def test_str(self):
        """Test string representation."""
        assert str(Platform("darwin", "arm64")) == "darwin-arm64"


class TestAsPlatform:
    """Tests for as_platform()."""

    def test_passthrough(self, linux_platform):
        """Test Platform instances are returned unchanged."""
        assert as_platform(linux_platform) is linux_platform

    def test_parse_string(self):
        """Test 'os-arch' strings are parsed."""
        assert as_platform("windows-i686") == Platform("windows", "i686")

    @pytest.mark.parametrize("value", ["linux", "linux-", "-amd64"])
    def test_invalid_string(self, value):
        """Test malformed strings raise ValueError."""
        with pytest.raises(ValueError):
            as_platform(value)


class TestDetectOS:
    """Tests for OS detection."""

    @patch("platform.system")
    def test_detect_linux(self, mock_system):
        """Test Linux OS detection."""
        mock_system.return_value = "Linux"
        assert _detect_os() is OS.LINUX

    @patch("platform.system")
    def test_detect_darwin(self, mock_system):
        """Test macOS detection."""
        mock_system.return_value = "Darwin"
        assert _detect_os() is OS.DARWIN

    @patch("platform.system")
    def test_detect_windows(self, mock_system):
        """Test Windows OS detection."""
        mock_system.return_value = "Windows"
        assert _detect_os() is OS.WINDOWS

    @patch("platform.machine")
    @patch("platform.system")
    def test_unsupported_os(self, mock_system, mock_machine):
        """Test unsupported OS raises UnsupportedPlatformError."""
        mock_system.return_value = "FreeBSD"
        mock_machine.return_value = "amd64"

        with pytest.raises(UnsupportedPlatformError, match="freebsd"):
            _detect_os()


class TestDetectArchitecture:
    """Tests for architecture detection and normalization."""

    @pytest.mark.parametrize(
        "machine,expected",
        [
            ("x86_64", Arch.AMD64),
            ("AMD64", Arch.AMD64),
            ("aarch64", Arch.ARM64),
            ("arm64", Arch.ARM64),
            ("i686", Arch.I686),
            ("x86", Arch.I686),
        ],
    )
    def test_normalization(self, machine, expected):
        """Test machine names are normalized."""
        with patch("platform.machine", return_value=machine):
            assert _detect_architecture() == expected

    def test_unknown_architecture_passthrough(self):
        """Test unknown architectures are returned lowercased."""
        with patch("platform.machine", return_value="RISCV64"):
            assert _detect_architecture() == "riscv64"


class TestDetectPlatform:
    """Tests for detect_platform() caching."""

    def setup_method(self):
        clear_platform_cache()

    def teardown_method(self):
        clear_platform_cache()

    def test_detect_platform(self):
        """Test detection combines OS and architecture."""
        with patch("platform.system", return_value="Darwin"), patch(
            "platform.machine", return_value="arm64"
        ):
            assert detect_platform() == Platform("darwin", "arm64")

    def test_detect_platform_cached(self):
        """Test detection runs once until the cache is cleared."""
        with patch("platform.system", return_value="Linux") as mock_system, patch(
            "platform.machine", return_value="x86_64"
        ):
            first = detect_platform()
            second = detect_platform()

            assert first is second
            assert mock_system.call_count == 1

            clear_platform_cache()
            detect_platform()
            assert mock_system.call_count == 2
