"""
contab/core/matrix
~~~~~~~~~~~~~~~~~~
"""

from __future__ import annotations

from typing import Iterable, List, MutableSequence, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from .errors import DimensionMismatch, IndexOutOfRange, LabelNotFound, MalformedSerialization
from ..util.format import find_index, format_number, parse_number
from ..util.warnings import warn

DELIMITER = ","
LINE_SEPARATOR = "\n"
DEFAULT_PRECISION = 6

Key = Union[int, str]
Buffer = Union[np.ndarray, MutableSequence[float]]


def _as_size(value: int, name: str) -> int:
    """
    Validates a dimension or precision argument.

    Args:
        value (int): Candidate non-negative integer.
        name (str): Argument name used in error messages.

    Returns:
        int: The value as a Python int.

    Raises:
        TypeError: If value is not an integer (bools included).
        ValueError: If value is negative.
    """
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, np.integer)):
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
    return int(value)


def _as_finite(value: float, name: str) -> float:
    """
    Validates a cell value, delta, or scale factor.

    Args:
        value (float): Candidate real number. Strings and bools are not numbers here.
        name (str): Argument name used in error messages.

    Returns:
        float: The value as a Python float.

    Raises:
        TypeError: If value is a string, bytes, or bool.
        ValueError: If value is NaN or infinite.
    """
    if isinstance(value, (str, bytes, bool, np.bool_)):
        raise TypeError(f"{name} must be a real number, got {type(value).__name__}")
    value = float(value)
    if not np.isfinite(value):
        raise ValueError(f"{name} must be finite, got {value}")
    return value


def _as_labels(labels: Iterable[str], axis: str) -> Tuple[str, ...]:
    """
    Normalizes a label sequence to a tuple of strings.

    Args:
        labels (Iterable[str]): Labels in axis order.
        axis (str): Axis name used in error messages.

    Returns:
        Tuple[str, ...]: Labels coerced with str().

    Raises:
        TypeError: If labels is a single string.
    """
    if isinstance(labels, (str, bytes)):
        raise TypeError(f"{axis} labels must be a sequence of labels, not a string")
    return tuple(str(label) for label in labels)


class LabeledMatrix:
    """
    Dense two-dimensional table of floats with optional row and column labels.

    Cells are addressed by 0-based integer index or by label, independently per
    axis. The table is intended for accumulating counts and sums, e.g. contingency
    tables keyed by category pairs. Instances are not thread-safe.
    """

    def __init__(
        self, n_rows: int = 0, n_cols: int = 0, *, output_precision: int = DEFAULT_PRECISION
    ) -> None:
        """
        Initializes LabeledMatrix with zeroed cells and no labels.

        Args:
            n_rows (int, optional): Number of rows. Defaults to 0.
            n_cols (int, optional): Number of columns. Defaults to 0.

        Kwargs:
            output_precision (int): Fractional digits used by serialization when no
                explicit precision is given. Defaults to 6.
        """
        self.row_labels: Optional[Tuple[str, ...]] = None
        self.col_labels: Optional[Tuple[str, ...]] = None
        self.output_precision = output_precision
        self.initialize(n_rows, n_cols)

    @classmethod
    def from_labels(
        cls,
        row_labels: Sequence[str],
        col_labels: Sequence[str],
        *,
        output_precision: int = DEFAULT_PRECISION,
    ) -> LabeledMatrix:
        """
        Creates a zeroed matrix whose shape is fixed by the given labels.

        Args:
            row_labels (Sequence[str]): Row labels, in row order.
            col_labels (Sequence[str]): Column labels, in column order.

        Kwargs:
            output_precision (int): Default serialization precision. Defaults to 6.

        Returns:
            LabeledMatrix: Labeled matrix of shape (len(row_labels), len(col_labels)).
        """
        rows = _as_labels(row_labels, "row")
        cols = _as_labels(col_labels, "column")
        matrix = cls(len(rows), len(cols), output_precision=output_precision)
        matrix.set_labels(rows, cols)
        return matrix

    @classmethod
    def from_frame(
        cls, df: pd.DataFrame, *, output_precision: int = DEFAULT_PRECISION
    ) -> LabeledMatrix:
        """
        Creates a matrix from a numeric DataFrame. The index and columns become the
        row and column labels.

        Args:
            df (pd.DataFrame): Numeric table.

        Kwargs:
            output_precision (int): Default serialization precision. Defaults to 6.

        Returns:
            LabeledMatrix: Matrix holding a copy of the DataFrame values.

        Raises:
            ValueError: If values are non-numeric or not finite.
        """
        try:
            values = df.to_numpy(dtype=np.float64, copy=True)
        except (TypeError, ValueError) as exc:
            raise ValueError("DataFrame values must be numeric") from exc
        if not np.all(np.isfinite(values)):
            raise ValueError("DataFrame values must be finite")
        matrix = cls.from_labels(
            df.index.tolist(), df.columns.tolist(), output_precision=output_precision
        )
        matrix.values[:, :] = values
        return matrix

    @classmethod
    def from_pairs(
        cls,
        pairs: Iterable[Tuple[str, str]],
        row_labels: Optional[Sequence[str]] = None,
        col_labels: Optional[Sequence[str]] = None,
        weights: Optional[Iterable[float]] = None,
        *,
        output_precision: int = DEFAULT_PRECISION,
    ) -> LabeledMatrix:
        """
        Tallies (row label, column label) pairs into a contingency table.

        Args:
            pairs (Iterable[Tuple[str, str]]): Category pairs, one per observation.
            row_labels (Optional[Sequence[str]]): Fixed row labels. Defaults to the
                row categories in order of first appearance.
            col_labels (Optional[Sequence[str]]): Fixed column labels. Defaults to the
                column categories in order of first appearance.
            weights (Optional[Iterable[float]]): Amount added per pair. Defaults to 1.0
                for every pair.

        Kwargs:
            output_precision (int): Default serialization precision. Defaults to 6.

        Returns:
            LabeledMatrix: Table of counts (or weight sums).

        Raises:
            ValueError: If weights length does not match pairs length.
            LabelNotFound: If a pair uses a category missing from fixed labels.
        """
        pairs = [(str(row), str(col)) for row, col in pairs]
        if weights is None:
            weights = [1.0] * len(pairs)
        else:
            weights = list(weights)
            if len(weights) != len(pairs):
                raise ValueError("weights length must match pairs length")

        # dict.fromkeys keeps first-appearance order
        if row_labels is None:
            row_labels = list(dict.fromkeys(row for row, _ in pairs))
        if col_labels is None:
            col_labels = list(dict.fromkeys(col for _, col in pairs))

        matrix = cls.from_labels(row_labels, col_labels, output_precision=output_precision)
        for (row, col), weight in zip(pairs, weights):
            matrix.add(row, col, weight)
        return matrix

    # Shape and configuration

    @property
    def n_rows(self) -> int:
        """
        Number of rows.
        """
        return self.values.shape[0]

    @property
    def n_cols(self) -> int:
        """
        Number of columns.
        """
        return self.values.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        """
        (n_rows, n_cols) of the cell storage.
        """
        return self.values.shape

    @property
    def output_precision(self) -> int:
        """
        Fractional digits used by serialization when no precision is passed.
        """
        return self._output_precision

    @output_precision.setter
    def output_precision(self, value: int) -> None:
        self._output_precision = _as_size(value, "output_precision")

    def initialize(self, n_rows: int, n_cols: int) -> None:
        """
        Reallocates the table to the given shape with every cell set to 0. Labels are
        kept as they are; call set_labels() again when the shape changes.

        Args:
            n_rows (int): Number of rows.
            n_cols (int): Number of columns.

        Raises:
            ValueError: If a dimension is negative.
            TypeError: If a dimension is not an integer.
        """
        n_rows = _as_size(n_rows, "n_rows")
        n_cols = _as_size(n_cols, "n_cols")
        self.values = np.zeros((n_rows, n_cols), dtype=np.float64)
        stale = (self.row_labels is not None and len(self.row_labels) != n_rows) or (
            self.col_labels is not None and len(self.col_labels) != n_cols
        )
        if stale:
            warn(
                f"Labels no longer match matrix shape {self.shape}; call set_labels()",
                RuntimeWarning,
            )

    def set_labels(self, row_labels: Sequence[str], col_labels: Sequence[str]) -> None:
        """
        Replaces both label arrays. Either both are replaced or neither is.

        Args:
            row_labels (Sequence[str]): Row labels, length n_rows.
            col_labels (Sequence[str]): Column labels, length n_cols.

        Raises:
            DimensionMismatch: If a label array length differs from its dimension.
        """
        rows = _as_labels(row_labels, "row")
        cols = _as_labels(col_labels, "column")
        if len(rows) != self.n_rows:
            raise DimensionMismatch(f"{len(rows)} row labels for {self.n_rows} rows")
        if len(cols) != self.n_cols:
            raise DimensionMismatch(f"{len(cols)} column labels for {self.n_cols} columns")
        for axis, labels in (("row", rows), ("column", cols)):
            if len(set(labels)) != len(labels):
                warn(
                    f"Duplicate {axis} labels; only the first occurrence is addressable",
                    RuntimeWarning,
                )
        self.row_labels = rows
        self.col_labels = cols

    def clear_labels(self) -> None:
        """
        Removes both label arrays. Cells stay addressable by index only.
        """
        self.row_labels = None
        self.col_labels = None

    def reset(self) -> None:
        """
        Sets every cell to 0, keeping shape and labels.
        """
        self.values.fill(0.0)

    # Addressing

    def _resolve(self, key: Key, axis: str) -> int:
        """
        Maps an index or label on one axis to a validated integer index.

        Args:
            key (Key): Integer index or string label.
            axis (str): One of {"row", "column"}.

        Returns:
            int: Index in [0, size) for the axis.

        Raises:
            LabelNotFound: If a label is absent (or the axis is unlabeled).
            IndexOutOfRange: If the index is outside the axis.
            TypeError: If key is neither an int nor a str.
        """
        if axis == "row":
            labels, size = self.row_labels, self.n_rows
        else:
            labels, size = self.col_labels, self.n_cols

        if isinstance(key, str):
            index = find_index(labels, key)
            if index is None:
                raise LabelNotFound(key, axis)
        elif isinstance(key, (int, np.integer)) and not isinstance(key, (bool, np.bool_)):
            index = int(key)
        else:
            raise TypeError(f"{axis} key must be an int index or str label, got {key!r}")

        # Labels left stale by initialize() may point past the current shape
        if not 0 <= index < size:
            raise IndexOutOfRange(index, axis, size)
        return index

    def row_index(self, row: Key) -> int:
        """
        Resolves a row label or index to a validated row index.

        Args:
            row (Key): Row index or label.

        Returns:
            int: Row index in [0, n_rows).

        Raises:
            LabelNotFound: If the label is not a row label.
            IndexOutOfRange: If the index is outside [0, n_rows).
        """
        return self._resolve(row, "row")

    def col_index(self, col: Key) -> int:
        """
        Resolves a column label or index to a validated column index.

        Args:
            col (Key): Column index or label.

        Returns:
            int: Column index in [0, n_cols).

        Raises:
            LabelNotFound: If the label is not a column label.
            IndexOutOfRange: If the index is outside [0, n_cols).
        """
        return self._resolve(col, "column")

    # Mutation

    def set(self, row: Key, col: Key, value: float) -> None:
        """
        Overwrites one cell.

        Args:
            row (Key): Row index or label.
            col (Key): Column index or label.
            value (float): New finite value.
        """
        r, c = self.row_index(row), self.col_index(col)
        self.values[r, c] = _as_finite(value, "value")

    def add(self, row: Key, col: Key, delta: float) -> None:
        """
        Adds delta to one cell.

        Args:
            row (Key): Row index or label.
            col (Key): Column index or label.
            delta (float): Finite amount to add.

        Raises:
            ValueError: If delta, or the resulting cell value, is not finite.
        """
        r, c = self.row_index(row), self.col_index(col)
        delta = _as_finite(delta, "delta")
        with np.errstate(over="ignore"):
            updated = self.values[r, c] + delta
        self.values[r, c] = _as_finite(updated, "cell value")

    def increment(self, row: Key, col: Key) -> None:
        """
        Adds exactly 1.0 to one cell.

        Args:
            row (Key): Row index or label.
            col (Key): Column index or label.
        """
        self.add(row, col, 1.0)

    def scale_row(self, row: Key, factor: float) -> None:
        """
        Multiplies every cell of a row by factor in place.

        Args:
            row (Key): Row index or label.
            factor (float): Finite scale factor.
        """
        r = self.row_index(row)
        self.values[r, :] = self._scaled(self.values[r, :], factor)

    def scale_column(self, col: Key, factor: float) -> None:
        """
        Multiplies every cell of a column by factor in place.

        Args:
            col (Key): Column index or label.
            factor (float): Finite scale factor.
        """
        c = self.col_index(col)
        self.values[:, c] = self._scaled(self.values[:, c], factor)

    @staticmethod
    def _scaled(vector: np.ndarray, factor: float) -> np.ndarray:
        factor = _as_finite(factor, "factor")
        with np.errstate(over="ignore"):
            scaled = vector * factor
        if not np.all(np.isfinite(scaled)):
            raise ValueError("scaling overflows to a non-finite value")
        return scaled

    # Read access

    def get(self, row: Key, col: Key) -> float:
        """
        Returns one cell value.

        Args:
            row (Key): Row index or label.
            col (Key): Column index or label.

        Returns:
            float: Cell value.
        """
        return float(self.values[self.row_index(row), self.col_index(col)])

    def get_row(self, row: Key, out: Optional[Buffer] = None) -> Buffer:
        """
        Returns a copy of a row, or copies it into a caller-supplied buffer.

        Args:
            row (Key): Row index or label.
            out (Optional[Buffer]): Writable buffer of length n_cols. Defaults to None.

        Returns:
            Buffer: New array, or `out` after filling it.

        Raises:
            DimensionMismatch: If `out` length is not n_cols.
        """
        vector = self.values[self.row_index(row), :]
        if out is None:
            return vector.copy()
        return self._copy_into(vector, out, "row")

    def readonly_row_view(self, row: Key) -> np.ndarray:
        """
        Returns a live, read-only view of a row. The view follows later changes to
        the table without copying; writes through it raise ValueError.

        Args:
            row (Key): Row index or label.

        Returns:
            np.ndarray: Non-writeable view into the table storage.
        """
        view = self.values[self.row_index(row), :]
        view.flags.writeable = False
        return view

    def get_column(self, col: Key, out: Optional[Buffer] = None) -> Buffer:
        """
        Returns a copy of a column, or copies it into a caller-supplied buffer.

        Args:
            col (Key): Column index or label.
            out (Optional[Buffer]): Writable buffer of length n_rows. Defaults to None.

        Returns:
            Buffer: New array, or `out` after filling it.

        Raises:
            DimensionMismatch: If `out` length is not n_rows.
        """
        vector = self.values[:, self.col_index(col)]
        if out is None:
            return vector.copy()
        return self._copy_into(vector, out, "column")

    @staticmethod
    def _copy_into(vector: np.ndarray, out: Buffer, axis: str) -> Buffer:
        if len(out) != len(vector):
            raise DimensionMismatch(
                f"{axis} buffer has length {len(out)}, expected {len(vector)}"
            )
        if isinstance(out, np.ndarray):
            out[:] = vector
        else:
            for i, value in enumerate(vector):
                out[i] = float(value)
        return out

    def get_row_sum(self, row: Key) -> float:
        """
        Returns the sum of one row.

        Args:
            row (Key): Row index or label.

        Returns:
            float: Sum of the row's cells.
        """
        return float(self.values[self.row_index(row), :].sum())

    def get_column_sum(self, col: Key) -> float:
        """
        Returns the sum of one column.

        Args:
            col (Key): Column index or label.

        Returns:
            float: Sum of the column's cells.
        """
        return float(self.values[:, self.col_index(col)].sum())

    def row_sums(self) -> np.ndarray:
        """
        Returns the marginal totals of every row.

        Returns:
            np.ndarray: Array of length n_rows.
        """
        return self.values.sum(axis=1)

    def column_sums(self) -> np.ndarray:
        """
        Returns the marginal totals of every column.

        Returns:
            np.ndarray: Array of length n_cols.
        """
        return self.values.sum(axis=0)

    def total(self) -> float:
        """
        Returns the grand total of every cell.

        Returns:
            float: Sum of all cells.
        """
        return float(self.values.sum())

    # Serialization

    def _precision(self, precision: Optional[int]) -> int:
        if precision is None:
            return self.output_precision
        return _as_size(precision, "precision")

    def serialize(self, precision: Optional[int] = None) -> str:
        """
        Serializes every cell in row-major order as one delimited string.

        Args:
            precision (Optional[int]): Fractional digits per value. Defaults to
                `output_precision`.

        Returns:
            str: Values joined by DELIMITER, e.g. "1.500000,2.500000".
        """
        precision = self._precision(precision)
        return DELIMITER.join(format_number(value, precision) for value in self.values.ravel())

    def serialize_row(self, row: Key, precision: Optional[int] = None) -> str:
        """
        Serializes one row as a delimited string.

        Args:
            row (Key): Row index or label.
            precision (Optional[int]): Fractional digits per value. Defaults to
                `output_precision`.

        Returns:
            str: Row values joined by DELIMITER.
        """
        r = self.row_index(row)
        precision = self._precision(precision)
        return DELIMITER.join(format_number(value, precision) for value in self.values[r, :])

    def serialize_tabular(self, precision: Optional[int] = None) -> str:
        """
        Serializes the table with one row per line.

        Args:
            precision (Optional[int]): Fractional digits per value. Defaults to
                `output_precision`.

        Returns:
            str: serialize_row() output per row joined by LINE_SEPARATOR, with no
                trailing line break.
        """
        precision = self._precision(precision)
        return LINE_SEPARATOR.join(
            self.serialize_row(r, precision) for r in range(self.n_rows)
        )

    @staticmethod
    def _parse_tokens(text: str, expected: int) -> np.ndarray:
        tokens = text.split(DELIMITER) if text.strip() else []
        if len(tokens) != expected:
            raise MalformedSerialization(
                f"expected {expected} values, got {len(tokens)}",
                expected=expected,
                received=len(tokens),
            )
        values: List[float] = []
        for position, token in enumerate(tokens):
            try:
                values.append(parse_number(token))
            except ValueError as exc:
                raise MalformedSerialization(
                    f"invalid value {token!r} at position {position}"
                ) from exc
        return np.asarray(values, dtype=np.float64)

    def deserialize(self, text: str) -> None:
        """
        Assigns every cell from a row-major delimited string. Nothing is written
        unless the whole input parses.

        Args:
            text (str): Output of serialize() for a matrix of the same shape.

        Raises:
            MalformedSerialization: If the token count is not n_rows * n_cols or a
                token is not a finite number.
        """
        parsed = self._parse_tokens(text, self.n_rows * self.n_cols)
        self.values[:, :] = parsed.reshape(self.shape)

    def deserialize_row(self, text: str, row: Key) -> None:
        """
        Assigns one row from a delimited string.

        Args:
            text (str): Output of serialize_row() for a row of the same length.
            row (Key): Row index or label.

        Raises:
            MalformedSerialization: If the token count is not n_cols or a token is
                not a finite number.
        """
        r = self.row_index(row)
        self.values[r, :] = self._parse_tokens(text, self.n_cols)

    def deserialize_tabular(self, text: str) -> None:
        """
        Assigns every cell from serialize_tabular() output. Nothing is written unless
        every line parses.

        Args:
            text (str): One delimited row per line.

        Raises:
            MalformedSerialization: If the line count is not n_rows or any line is
                malformed.
        """
        # An empty table serializes to "", which must read back as zero lines
        lines = text.split(LINE_SEPARATOR) if self.n_rows or text.strip() else []
        if len(lines) != self.n_rows:
            raise MalformedSerialization(
                f"expected {self.n_rows} lines, got {len(lines)}",
                expected=self.n_rows,
                received=len(lines),
            )
        parsed = [self._parse_tokens(line.rstrip("\r"), self.n_cols) for line in lines]
        for r, vector in enumerate(parsed):
            self.values[r, :] = vector

    # pandas interop and protocol methods

    def to_frame(self) -> pd.DataFrame:
        """
        Returns a DataFrame copy of the table. Unlabeled axes use integer positions.

        Returns:
            pd.DataFrame: Table with row labels as index and column labels as columns.
        """
        index = (
            list(self.row_labels) if self.row_labels is not None else pd.RangeIndex(self.n_rows)
        )
        columns = (
            list(self.col_labels) if self.col_labels is not None else pd.RangeIndex(self.n_cols)
        )
        return pd.DataFrame(self.values.copy(), index=index, columns=columns)

    def copy(self) -> LabeledMatrix:
        """
        Returns an independent copy with the same cells, labels, and precision.

        Returns:
            LabeledMatrix: Copy that shares no cell storage with this matrix.
        """
        clone = type(self)(output_precision=self.output_precision)
        clone.values = self.values.copy()
        clone.row_labels = self.row_labels
        clone.col_labels = self.col_labels
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LabeledMatrix):
            return NotImplemented
        return (
            self.row_labels == other.row_labels
            and self.col_labels == other.col_labels
            and np.array_equal(self.values, other.values)
        )

    __hash__ = None

    def __len__(self) -> int:
        return self.n_rows

    def __str__(self) -> str:
        return self.serialize()

    def __repr__(self) -> str:
        labeled = self.row_labels is not None
        return f"LabeledMatrix(n_rows={self.n_rows}, n_cols={self.n_cols}, labeled={labeled})"
