#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pdftools_mcp/utils/decorators.py
"""Utility decorators for the pdftools-mcp rendering backends.

This module provides reusable decorators for dependency checking and
debug timing shared by the HTML renderer and the document writer.

"""

from __future__ import annotations

import importlib
import inspect
import logging
import time
from contextlib import contextmanager
from functools import wraps
from typing import Any, Callable, Generator, List, Tuple

from pdftools_mcp.exceptions import DependencyError
from pdftools_mcp.utils.packages import check_version_requirement


def _check_dependencies(component: str, packages: List[Tuple[str, str, str]]) -> None:
    missing = []
    version_mismatches = []
    original_error = None

    for install_name, import_name, version_spec in packages:
        try:
            # nosemgrep: python.lang.security.audit.non-literal-import.non-literal-import
            importlib.import_module(import_name)

            if version_spec:
                meets_requirement, installed_version = check_version_requirement(install_name, version_spec)
                if not meets_requirement:
                    version_mismatches.append((install_name, version_spec, installed_version or "unknown"))

        except ImportError as e:
            missing.append((install_name, version_spec))
            if original_error is None:
                original_error = e

    if missing or version_mismatches:
        raise DependencyError(
            component=component,
            missing_packages=missing,
            version_mismatches=version_mismatches,
            original_import_error=original_error,
        ) from original_error


def requires_dependencies(component: str, packages: List[Tuple[str, str, str]]) -> Callable:
    """Check required dependencies and versions before method execution.

    Works on plain and ``async`` methods alike; for coroutine functions the
    check runs when the coroutine is awaited.

    Parameters
    ----------
    component : str
        Name of the backend (e.g., "HTML renderer"). This appears in error
        messages to help users identify which backend needs dependencies.
    packages : list of tuple
        Required packages as (install_name, import_name, version_spec) tuples where:
        - install_name: Package name for pip install (e.g., "reportlab")
        - import_name: Module name for import statement (e.g., "reportlab")
        - version_spec: Version requirement (e.g., ">=4.0.0" or "" for any version)

    Returns
    -------
    Callable
        Decorated method that checks dependencies before execution

    Raises
    ------
    DependencyError
        If any required package is missing or has an incompatible version.

    Examples
    --------
        >>> @requires_dependencies("document writer", [("reportlab", "reportlab", ">=4.0.0")])
        ... def build(self, text, output):
        ...     from reportlab.platypus import SimpleDocTemplate
        ...     # writing logic here

    """

    def decorator(method: Callable) -> Callable:
        if inspect.iscoroutinefunction(method):

            @wraps(method)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                _check_dependencies(component, packages)
                return await method(*args, **kwargs)

            return async_wrapper

        @wraps(method)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            _check_dependencies(component, packages)
            return method(*args, **kwargs)

        return wrapper

    return decorator


@contextmanager
def debug_timer(logger: logging.Logger, operation: str) -> Generator[None, None, None]:
    """Time a block and log the elapsed time at DEBUG level.

    Parameters
    ----------
    logger : logging.Logger
        Logger instance to use for DEBUG messages
    operation : str
        Description of the operation being timed (e.g., "HTML render")

    Notes
    -----
    Only measures time when the logger has DEBUG level enabled.

    """
    if logger.isEnabledFor(logging.DEBUG):
        start_time = time.perf_counter()
        yield
        elapsed = time.perf_counter() - start_time
        logger.debug(f"{operation} completed in {elapsed:.2f}s")
    else:
        yield
