"""Command-line RSS aggregator keeping users, feeds and feed follows in SQLite."""

__version__ = "0.1.0"

__all__ = ["__version__"]