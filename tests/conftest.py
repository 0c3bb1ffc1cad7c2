"""
Pytest configuration and shared fixtures for chromekit tests.
"""

import stat
import zipfile
from pathlib import Path
from typing import Callable, Dict, Optional

import pytest

from chromekit.config.parser import ENV_OVERRIDES
from chromekit.core.platform import Platform


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="run integration tests that require network access",
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless --integration flag is provided."""
    if not config.getoption("--integration"):
        skip_integration = pytest.mark.skip(reason="need --integration option to run")
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip_integration)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests (requires --integration)",
    )


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture
def clean_env(monkeypatch):
    """Remove environment variables that change default directories."""
    for var in ("RUNNER_TOOL_CACHE", "RUNNER_TEMP", *ENV_OVERRIDES):
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


@pytest.fixture
def linux_platform() -> Platform:
    """Linux x86-64 platform."""
    return Platform("linux", "amd64")


@pytest.fixture
def make_zip(tmp_path) -> Callable[..., Path]:
    """
    Factory building a zip archive from {member name: content}.

    Members ending in '/' become directories. Members listed in
    executables get 0o755 permissions in the zip headers. Entries in
    symlinks ({member name: link target}) are stored as Unix symlinks.
    """

    def _make_zip(
        files: Dict[str, str],
        name: str = "archive.zip",
        executables: Optional[set] = None,
        symlinks: Optional[Dict[str, str]] = None,
    ) -> Path:
        archive = tmp_path / name
        executables = executables or set()

        with zipfile.ZipFile(archive, "w") as zf:
            for member, content in files.items():
                info = zipfile.ZipInfo(member)
                if member.endswith("/"):
                    info.external_attr = (stat.S_IFDIR | 0o755) << 16
                else:
                    mode = 0o755 if member in executables else 0o644
                    info.external_attr = (stat.S_IFREG | mode) << 16
                zf.writestr(info, content)
            for member, link_target in (symlinks or {}).items():
                info = zipfile.ZipInfo(member)
                info.external_attr = (stat.S_IFLNK | 0o777) << 16
                zf.writestr(info, link_target)

        return archive

    return _make_zip
