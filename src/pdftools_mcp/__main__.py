#!/usr/bin/env python3
#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/pdftools_mcp/__main__.py

"""Entry point for running pdftools-mcp as a module.

This allows the package to be executed as:
    python -m pdftools_mcp [arguments]
"""

import sys

from pdftools_mcp.server import main

if __name__ == "__main__":
    sys.exit(main())
