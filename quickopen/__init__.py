"""QuickOpen - fuzzy quick-open ranking for file lists."""

__version__ = "0.1.0"
