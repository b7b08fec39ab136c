#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pdftools_mcp/utils/__init__.py
"""Utility modules for the pdftools-mcp package."""

from pdftools_mcp.utils.decorators import requires_dependencies
from pdftools_mcp.utils.packages import check_version_requirement, get_package_version

__all__ = [
    "check_version_requirement",
    "get_package_version",
    "requires_dependencies",
]
