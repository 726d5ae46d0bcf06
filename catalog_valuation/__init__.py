"""Catalog valuation engine for music publishing catalogs."""

__version__ = "1.0.0"
