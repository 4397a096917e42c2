"""
contab/core
~~~~~~~~~~~
"""

from .errors import (
    DimensionMismatch,
    IndexOutOfRange,
    LabelNotFound,
    MalformedSerialization,
    MatrixError,
)
from .matrix import DEFAULT_PRECISION, DELIMITER, LINE_SEPARATOR, LabeledMatrix

__all__ = [
    "LabeledMatrix",
    "MatrixError",
    "DimensionMismatch",
    "LabelNotFound",
    "IndexOutOfRange",
    "MalformedSerialization",
    "DEFAULT_PRECISION",
    "DELIMITER",
    "LINE_SEPARATOR",
]
