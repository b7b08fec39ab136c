#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the pdftools-mcp server.

Every failure a tool call can run into is expressed as one of these
exceptions. The dispatcher catches them at its boundary and turns them
into an error-flagged result, so none of them ever reaches the transport.

Exception Hierarchy
-------------------
- PdfToolsError (base exception)

  - ValidationError (missing or malformed tool arguments)

  - SecurityError (security violations)
    - PathNotAllowedError (output path outside the allowed roots)

  - UnknownToolError (tool name not in the registry)

  - RenderingError (output generation failures)
    - BackendFailureError (headless browser or document writer failed)

  - FileError (file system access)
    - FilesystemError (directory creation or output stream failures)

  - DependencyError (missing/incompatible packages)

"""

from pathlib import Path
from typing import Any, Sequence


class PdfToolsError(Exception):
    """Base exception class for all pdftools-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(PdfToolsError):
    """Exception raised for invalid tool arguments.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class SecurityError(PdfToolsError):
    """Base exception for security violations."""


class PathNotAllowedError(SecurityError):
    """Raised when a resolved output path escapes every allowed root.

    Parameters
    ----------
    path : str
        The resolved path that was rejected
    allowed_roots : sequence of Path
        The directories an output path must live under

    """

    def __init__(self, path: str, allowed_roots: Sequence[Path]):
        """Initialize the error, naming the allowed roots in the message."""
        roots = ", ".join(str(root) for root in allowed_roots)
        super().__init__(f"Output path must be within allowed directories: {roots}")
        self.path = path
        self.allowed_roots = list(allowed_roots)


class UnknownToolError(PdfToolsError):
    """Raised when a call names a tool that is not registered."""

    def __init__(self, tool_name: str):
        """Initialize the error with the offending tool name."""
        super().__init__(f"Unknown tool: {tool_name}")
        self.tool_name = tool_name


class RenderingError(PdfToolsError):
    """Exception raised when output rendering fails.

    Parameters
    ----------
    message : str
        Description of the rendering failure
    rendering_stage : str, optional
        The stage of rendering where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the rendering failure

    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error."""
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage


class BackendFailureError(RenderingError):
    """Raised when the HTML renderer or the document writer fails."""


class FileError(PdfToolsError):
    """Base exception for file access and I/O errors.

    Parameters
    ----------
    message : str
        Description of the file error
    file_path : str, optional
        Path to the problematic file
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the file error with path and message."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class FilesystemError(FileError):
    """Raised when creating the output directory or writing the output stream fails."""


class DependencyError(PdfToolsError):
    """Exception raised when required dependencies are not available.

    Parameters
    ----------
    component : str
        Name of the backend requiring dependencies
    missing_packages : list[tuple[str, str]]
        List of (package_name, version_spec) tuples for missing packages
    version_mismatches : list[tuple[str, str, str]], optional
        List of (package_name, required_version, installed_version) tuples
    message : str, optional
        Custom error message. If not provided, generates a helpful message
    original_import_error : ImportError, optional
        The import error raised when loading the package

    """

    def __init__(
        self,
        component: str,
        missing_packages: list[tuple[str, str]],
        version_mismatches: list[tuple[str, str, str]] | None = None,
        message: str | None = None,
        original_import_error: ImportError | None = None,
    ):
        """Initialize the dependency error with package details."""
        version_mismatches = version_mismatches or []
        if message is None:
            message_parts = []

            if missing_packages:
                pkg_list = ", ".join(f"'{name}{spec}'" if spec else f"'{name}'" for name, spec in missing_packages)
                message_parts.append(f"{component} requires the following packages: {pkg_list}")

            if version_mismatches:
                mismatch_str = ", ".join(
                    f"'{name}' (requires {required}, but {installed} is installed)"
                    for name, required, installed in version_mismatches
                )
                message_parts.append(f"{component} has version mismatches: {mismatch_str}")

            message = "\n".join(message_parts)

            all_packages = missing_packages + [(name, req) for name, req, _ in version_mismatches]
            if all_packages:
                packages_str = " ".join(f'"{name}{spec}"' if spec else name for name, spec in all_packages)
                message += f"\nInstall with: pip install --upgrade {packages_str}"

        super().__init__(message, original_error=original_import_error)
        self.component = component
        self.missing_packages = missing_packages
        self.version_mismatches = version_mismatches
