"""
File system utilities for chromekit.

This module provides:
- ZIP extraction with path validation and POSIX permission restore
- Safe directory deletion and recursive copy
"""

import logging
import os
import shutil
import stat
import uuid
import zipfile
from pathlib import Path
from typing import Optional, Union

from chromekit.core.directory import get_temp_dir

logger = logging.getLogger(__name__)

IS_WINDOWS = os.name == "nt"


# ============================================================================
# Errors
# ============================================================================


class FilesystemError(Exception):
    """Base exception for filesystem operations."""

    pass


class ArchiveExtractionError(FilesystemError):
    """Failed to extract an archive."""

    pass


class InsecureArchiveError(ArchiveExtractionError):
    """Archive contains insecure paths (directory traversal attempt)."""

    pass


# ============================================================================
# Path Utilities
# ============================================================================


def is_relative_to(path: Path, parent: Path) -> bool:
    """
    Check whether path is located under parent.

    Example:
        >>> is_relative_to(Path('/a/b/c'), Path('/a'))
        True
    """
    try:
        path.relative_to(parent)
        return True
    except ValueError:
        return False


# ============================================================================
# Archive Extraction
# ============================================================================


def _validate_archive_path(path: str, destination: Path) -> None:
    """
    Reject archive members that would land outside destination.

    Raises:
        InsecureArchiveError: If path attempts directory traversal
    """
    member_path = (destination / path).resolve()

    if not is_relative_to(member_path, destination.resolve()):
        raise InsecureArchiveError(
            f"Archive member '{path}' attempts directory traversal. "
            "This is a security risk and extraction has been blocked."
        )


def _is_symlink(info: zipfile.ZipInfo) -> bool:
    # Upper 16 bits of external_attr hold st_mode for archives made on Unix
    return stat.S_ISLNK(info.external_attr >> 16)


def _validate_symlink(info: zipfile.ZipInfo, link_target: str, destination: Path) -> None:
    """
    Reject symlink members whose target resolves outside destination.

    Raises:
        InsecureArchiveError: If the link points outside destination
    """
    resolved = (destination / info.filename).parent / link_target
    if not is_relative_to(resolved.resolve(), destination.resolve()):
        raise InsecureArchiveError(
            f"Archive symlink '{info.filename}' -> '{link_target}' points outside "
            "the extraction directory. Extraction has been blocked."
        )


def _extract_symlink(info: zipfile.ZipInfo, link_target: str, destination: Path) -> Path:
    target = destination / info.filename.rstrip("/")
    target.parent.mkdir(parents=True, exist_ok=True)
    if target.is_symlink() or target.exists():
        target.unlink()
    os.symlink(link_target, target)
    return target


def _restore_permissions(info: zipfile.ZipInfo, target: Path) -> None:
    mode = (info.external_attr >> 16) & 0o777
    if mode and not info.is_dir():
        os.chmod(target, mode)


def extract_zip(
    archive_path: Union[str, Path],
    destination: Optional[Union[str, Path]] = None,
    temp_dir: Optional[Union[str, Path]] = None,
) -> Path:
    """
    Extract a ZIP archive.

    Chrome for Testing archives carry executable bits in the ZIP headers;
    these are restored on POSIX systems so the extracted binaries can run.
    Symlink members (the macOS framework bundles use them) are recreated
    as links on POSIX systems.

    Args:
        archive_path: Path to the archive file
        destination: Directory to extract to. Defaults to a uuid-named
            directory in temp_dir.
        temp_dir: Directory for the default destination
            (default: chromekit.core.directory.get_temp_dir())

    Returns:
        Path to the extraction directory

    Raises:
        ArchiveExtractionError: If the archive is missing or extraction fails
        InsecureArchiveError: If the archive contains malicious paths

    Example:
        >>> extract_zip('/tmp/chrome-linux64.zip')
        PosixPath('/tmp/chromekit/0f6c...')
    """
    archive_path = Path(archive_path)

    if not archive_path.exists():
        raise ArchiveExtractionError(f"Archive not found: {archive_path}")

    if destination is None:
        destination = Path(temp_dir or get_temp_dir()) / str(uuid.uuid4())
    destination = Path(destination)
    destination.mkdir(parents=True, exist_ok=True)

    logger.debug(f"Extracting {archive_path} to {destination}")

    try:
        with zipfile.ZipFile(archive_path, "r") as zf:
            members = zf.infolist()

            # Validate all paths first
            links = {}
            for info in members:
                _validate_archive_path(info.filename, destination)
                if _is_symlink(info) and not IS_WINDOWS:
                    link_target = zf.read(info).decode("utf-8")
                    _validate_symlink(info, link_target, destination)
                    links[info.filename] = link_target

            for info in members:
                if info.filename in links:
                    _extract_symlink(info, links[info.filename], destination)
                    continue
                target = Path(zf.extract(info, destination))
                if not IS_WINDOWS:
                    _restore_permissions(info, target)
    except InsecureArchiveError:
        raise
    except (zipfile.BadZipFile, OSError) as e:
        raise ArchiveExtractionError(f"Failed to extract {archive_path}: {e}") from e

    return destination


# ============================================================================
# Safe File Operations
# ============================================================================


def safe_rmtree(
    path: Union[str, Path], require_prefix: Optional[Union[str, Path]] = None
) -> None:
    """
    Remove a directory tree with safeguards.

    Args:
        path: Directory to remove
        require_prefix: If specified, path must be under this directory

    Raises:
        ValueError: If path is not under require_prefix
        FilesystemError: If deletion fails
    """
    path = Path(path).resolve()

    if require_prefix is not None:
        require_prefix = Path(require_prefix).resolve()
        if not is_relative_to(path, require_prefix):
            raise ValueError(
                f"Refusing to delete '{path}': not under required prefix '{require_prefix}'"
            )

    if not path.exists():
        return

    if not path.is_dir():
        raise FilesystemError(f"Path is not a directory: {path}")

    try:
        if IS_WINDOWS:

            def handle_remove_readonly(func, path, exc):
                """Error handler for Windows read-only files."""
                if not os.access(path, os.W_OK):
                    os.chmod(path, stat.S_IWRITE)
                    func(path)
                else:
                    raise

            shutil.rmtree(path, onerror=handle_remove_readonly)
        else:
            shutil.rmtree(path)

    except Exception as e:
        raise FilesystemError(f"Failed to remove directory '{path}': {e}") from e


def recursive_copy(source: Union[str, Path], destination: Union[str, Path]) -> None:
    """
    Copy the contents of source into destination.

    Symlinks are copied as symlinks; the macOS app bundle relies on them.

    Raises:
        FilesystemError: If source is not a directory
    """
    source = Path(source)
    destination = Path(destination)

    if not source.is_dir():
        raise FilesystemError(f"Source is not a directory: {source}")

    shutil.copytree(source, destination, symlinks=True, dirs_exist_ok=True)


__all__ = [
    "FilesystemError",
    "ArchiveExtractionError",
    "InsecureArchiveError",
    "is_relative_to",
    "extract_zip",
    "safe_rmtree",
    "recursive_copy",
]
