"""Declarative browser automation and paginated scraping."""

__version__ = "1.0.0"
