"""
tcrun CLI module.

This module provides the command-line interface for tcrun.
"""

from .parser import CLI, main

__all__ = ["CLI", "main"]
