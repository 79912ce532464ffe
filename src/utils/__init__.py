"""Utility modules for Seller Tools."""

from .export import Exporter, format_number

__all__ = [
    "Exporter",
    "format_number",
]
