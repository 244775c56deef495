"""CLI module for the MCP runtime.

This module provides the ``mcp-runtime`` command-line interface.
"""

from .main import main

__all__ = ["main"]
