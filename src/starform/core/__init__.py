"""
StarForm Core Module

Small helpers shared by the form controller: value cloning, key
assignment and one-shot store reads.
"""

from .utils import FieldValue, assign, clone_values, subscribe_once

__all__ = [
    "FieldValue",
    "assign",
    "clone_values",
    "subscribe_once",
]
