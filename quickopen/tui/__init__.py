"""Terminal UI for QuickOpen."""

from .app import QuickOpenApp

__all__ = ["QuickOpenApp"]
