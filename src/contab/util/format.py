"""
contab/util/format
~~~~~~~~~~~~~~~~~~

Stateless helpers for rendering cell values and searching label arrays.
"""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np


def format_number(value: float, precision: int) -> str:
    """
    Renders a number in fixed-decimal notation.

    Args:
        value (float): Number to render.
        precision (int): Exact number of fractional digits.

    Returns:
        str: Fixed-decimal text, e.g. ``format_number(1.5, 3) == "1.500"``.

    Raises:
        ValueError: If precision is negative.
    """
    if precision < 0:
        raise ValueError(f"precision must be non-negative, got {precision}")
    text = f"{float(value):.{int(precision)}f}"
    # Rounding tiny negatives yields "-0.000"; keep a single zero spelling
    if text.startswith("-") and float(text) == 0.0:
        text = text[1:]
    return text


def parse_number(token: str) -> float:
    """
    Parses one serialized cell value.

    Args:
        token (str): Numeric text. Surrounding whitespace is ignored.

    Returns:
        float: Parsed finite value.

    Raises:
        ValueError: If the token is empty, not numeric, uses digit separators, or
            is not finite.
    """
    text = token.strip()
    if not text:
        raise ValueError("empty numeric token")
    if "_" in text:
        raise ValueError(f"digit separators are not allowed in {token!r}")
    value = float(text)
    if not np.isfinite(value):
        raise ValueError(f"non-finite numeric token {token!r}")
    return value


def find_index(labels: Optional[Sequence[str]], target: str) -> Optional[int]:
    """
    Linear search of a label array.

    Args:
        labels (Optional[Sequence[str]]): Labels to search. None behaves as empty.
        target (str): Label to find (exact match).

    Returns:
        Optional[int]: Position of the first match, or None when absent.
    """
    if labels is None:
        return None
    for i, label in enumerate(labels):
        if label == target:
            return i
    return None
