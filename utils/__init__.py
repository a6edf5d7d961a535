"""Utility modules"""

from .encoding import detect_encoding, read_text
from .numbers import parse_number
from .slug import slugify_label

__all__ = [
    "detect_encoding",
    "read_text",
    "parse_number",
    "slugify_label",
]
