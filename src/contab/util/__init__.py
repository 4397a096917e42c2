"""
contab/util
~~~~~~~~~~~
"""

from .format import find_index, format_number, parse_number
from .warnings import warn

__all__ = [
    "find_index",
    "format_number",
    "parse_number",
    "warn",
]
