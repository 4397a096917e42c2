"""
contab/util/warnings
"""

from __future__ import annotations

import warnings
from typing import Type


def warn(message: str, category: Type[Warning] = RuntimeWarning, stacklevel: int = 3) -> None:
    """
    Reports a non-fatal matrix condition, such as labels that no longer fit the
    shape. The default stacklevel points at the code that called the public
    LabeledMatrix method rather than at the method itself.

    Args:
        message (str): What went wrong and how to fix it.
        category (Type[Warning]): Warning class. Defaults to RuntimeWarning.
        stacklevel (int): Frames to skip when attributing the warning. Defaults to 3.
    """
    warnings.warn(message, category=category, stacklevel=stacklevel)
