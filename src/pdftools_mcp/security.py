"""Output path confinement for the pdftools-mcp server.

Every PDF the server writes must land beneath one of a fixed set of
directories under the invoking user's home (Downloads, Documents,
Desktop). This module computes that allow-list once at import time and
provides the checks the dispatcher runs before touching the file system.

Functions
---------
- allowed_output_roots: Canonical allowed roots for a home directory
- validate_output_path: Validate a path against the allowed roots
- resolve_output_target: Join directory and filename, then validate
- ensure_parent_directory: Create the parent directory of a validated path
- secure_open_for_write: Open a validated file without following symlinks

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import logging
import os
import sys
from pathlib import Path
from typing import BinaryIO, Sequence

from pdftools_mcp.constants import ALLOWED_OUTPUT_SUBDIRS, DEFAULT_OUTPUT_SUBDIR
from pdftools_mcp.exceptions import FilesystemError, PathNotAllowedError, SecurityError

logger = logging.getLogger(__name__)


def _canonicalize(path: str | Path) -> Path:
    # Textual resolution only: "." and ".." are collapsed, symlinks on disk are not followed
    return Path(os.path.normpath(os.path.abspath(os.path.expanduser(str(path)))))


def allowed_output_roots(home: str | Path | None = None) -> list[Path]:
    """Return the canonical allowed output roots for a home directory.

    Parameters
    ----------
    home : str | Path | None
        Home directory to derive the roots from. Defaults to the invoking
        user's home directory.

    Returns
    -------
    list[Path]
        ``<home>/Downloads``, ``<home>/Documents`` and ``<home>/Desktop``,
        canonicalized. The directories are not required to exist.

    """
    base = Path.home() if home is None else Path(home)
    return [_canonicalize(base / subdir) for subdir in ALLOWED_OUTPUT_SUBDIRS]


def default_output_dir(home: str | Path | None = None) -> Path:
    """Return the directory outputs go to when the caller names none."""
    base = Path.home() if home is None else Path(home)
    return _canonicalize(base / DEFAULT_OUTPUT_SUBDIR)


# Computed once at process start; there is no runtime mechanism to change them
ALLOWED_OUTPUT_ROOTS: tuple[Path, ...] = tuple(allowed_output_roots())
DEFAULT_OUTPUT_DIR: Path = default_output_dir()


def validate_output_path(requested_path: str | Path, allowed_roots: Sequence[Path] | None = None) -> Path:
    """Validate that a requested output path lives beneath an allowed root.

    Parameters
    ----------
    requested_path : str | Path
        Path to validate. Relative paths are resolved against the current
        working directory.
    allowed_roots : sequence of Path, optional
        Canonical allowed roots. Defaults to ``ALLOWED_OUTPUT_ROOTS``.

    Returns
    -------
    Path
        The canonical absolute path

    Raises
    ------
    PathNotAllowedError
        If no allowed root is a proper ancestor of the canonical path

    Notes
    -----
    Containment is checked per path segment, so ``~/Downloads2`` is not
    considered to be inside ``~/Downloads``. A path equal to a root is not
    a descendant of it and is rejected as well.

    """
    roots = ALLOWED_OUTPUT_ROOTS if allowed_roots is None else tuple(allowed_roots)
    candidate = _canonicalize(requested_path)

    for root in roots:
        try:
            relative = candidate.relative_to(root)
        except ValueError:
            continue
        if relative.parts:
            logger.debug(f"Output path validated: {candidate} (under {root})")
            return candidate

    logger.warning(f"Rejected output path outside allowed roots: {candidate}")
    raise PathNotAllowedError(str(candidate), roots)


def resolve_output_target(
    output_dir: str | Path, output_filename: str, allowed_roots: Sequence[Path] | None = None
) -> Path:
    """Join a caller-supplied directory and filename and validate the result.

    Parameters
    ----------
    output_dir : str | Path
        Requested output directory
    output_filename : str
        Requested file name. An absolute file name replaces the directory,
        which is still subject to validation.
    allowed_roots : sequence of Path, optional
        Canonical allowed roots. Defaults to ``ALLOWED_OUTPUT_ROOTS``.

    Returns
    -------
    Path
        The validated canonical output path

    """
    return validate_output_path(os.path.join(str(output_dir), output_filename), allowed_roots)


def ensure_parent_directory(validated_path: Path) -> None:
    """Create the parent directory of a validated path, recursively.

    Succeeds silently when the directory already exists.

    Raises
    ------
    FilesystemError
        If the directory cannot be created

    """
    parent = validated_path.parent
    try:
        parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FilesystemError(
            f"Failed to create output directory {parent}: {e.strerror or e}", file_path=str(parent), original_error=e
        ) from e


def secure_open_for_write(validated_path: Path) -> BinaryIO:
    """Open a validated file for writing without following symlinks.

    Parameters
    ----------
    validated_path : Path
        Path that has already been validated by validate_output_path().
        Must be absolute.

    Returns
    -------
    BinaryIO
        Binary file object opened for writing. Caller is responsible for
        closing it.

    Raises
    ------
    SecurityError
        If the path is not absolute or is a symlink
    FilesystemError
        If the file cannot be opened

    Notes
    -----
    On platforms with ``O_NOFOLLOW`` the open fails if a symlink was swapped
    in between validation and write.

    """
    if not validated_path.is_absolute():
        raise SecurityError(f"secure_open_for_write requires absolute path, got: {validated_path}")

    if validated_path.is_symlink():
        raise SecurityError(f"Refusing to write to symlink: {validated_path}")

    flags = os.O_WRONLY | os.O_CREAT | os.O_TRUNC
    if hasattr(os, "O_NOFOLLOW"):
        flags |= os.O_NOFOLLOW
    if sys.platform == "win32" and hasattr(os, "O_BINARY"):
        flags |= os.O_BINARY

    try:
        fd = os.open(str(validated_path), flags, mode=0o644)
    except OSError as e:
        raise FilesystemError(
            f"Failed to open output file for writing: {validated_path} ({e.strerror or e})",
            file_path=str(validated_path),
            original_error=e,
        ) from e

    logger.debug(f"Opened file for writing: {validated_path}")
    return os.fdopen(fd, "wb")
