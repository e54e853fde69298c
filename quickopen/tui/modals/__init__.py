"""TUI modals for QuickOpen."""

from .quick_open import QuickOpenItem, QuickOpenModal

__all__ = ["QuickOpenItem", "QuickOpenModal"]
