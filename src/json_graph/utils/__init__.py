"""Utility modules for the JSON graph engine."""

from .graph_index import GraphIndex
from .validation import ValidationUtils

__all__ = ["GraphIndex", "ValidationUtils"]
