"""
contab/core/errors
~~~~~~~~~~~~~~~~~~
"""

from __future__ import annotations

from typing import Optional


class MatrixError(Exception):
    """
    Base class for LabeledMatrix failures.
    """


class DimensionMismatch(MatrixError, ValueError):
    """
    Raised when a label array, buffer, or input table does not fit the matrix shape.
    """


class LabelNotFound(MatrixError, KeyError):
    """
    Raised when a row or column label is absent from the matrix labels.
    """

    def __init__(self, label: str, axis: str) -> None:
        """
        Initializes LabelNotFound.

        Args:
            label (str): Label that failed to resolve.
            axis (str): Axis searched, one of {"row", "column"}.
        """
        self.label = label
        self.axis = axis
        super().__init__(label, axis)

    def __str__(self) -> str:
        return f"{self.axis} label {self.label!r} not found"


class IndexOutOfRange(MatrixError, IndexError):
    """
    Raised when an integer index falls outside ``[0, size)``.
    """

    def __init__(self, index: int, axis: str, size: int) -> None:
        """
        Initializes IndexOutOfRange.

        Args:
            index (int): Offending index.
            axis (str): Axis addressed, one of {"row", "column"}.
            size (int): Number of entries along the axis.
        """
        self.index = index
        self.axis = axis
        self.size = size
        super().__init__(index, axis, size)

    def __str__(self) -> str:
        return f"{self.axis} index {self.index} out of range for size {self.size}"


class MalformedSerialization(MatrixError, ValueError):
    """
    Raised when serialized text does not parse into the expected number of cells.
    """

    def __init__(
        self,
        message: str,
        *,
        expected: Optional[int] = None,
        received: Optional[int] = None,
    ) -> None:
        """
        Initializes MalformedSerialization.

        Args:
            message (str): Description of the failure.

        Kwargs:
            expected (Optional[int]): Expected token or line count. Defaults to None.
            received (Optional[int]): Received token or line count. Defaults to None.
        """
        self.expected = expected
        self.received = received
        super().__init__(message)
