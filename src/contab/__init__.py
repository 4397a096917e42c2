"""
contab
~~~~~~

contab: labeled dense matrices for accumulating counts and sums
"""

from .core.errors import (
    DimensionMismatch,
    IndexOutOfRange,
    LabelNotFound,
    MalformedSerialization,
    MatrixError,
)
from .core.matrix import LabeledMatrix

__all__ = [
    "LabeledMatrix",
    "MatrixError",
    "DimensionMismatch",
    "LabelNotFound",
    "IndexOutOfRange",
    "MalformedSerialization",
]

__version__ = "0.1.0"
