"""Command-line interface for QuickOpen."""

from .main import main

__all__ = ["main"]
