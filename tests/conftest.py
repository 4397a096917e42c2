"""
tests/conftest
~~~~~~~~~~~~~~
"""

import pytest

from contab import LabeledMatrix


@pytest.fixture
def labeled_2x2():
    """
    Returns the 2x2 labeled matrix with rows A, B and columns X, Y filled in.

    Returns:
        LabeledMatrix: Matrix with cells [[1.5, 2.5], [3.0, 4.0]].
    """
    matrix = LabeledMatrix.from_labels(["A", "B"], ["X", "Y"])
    matrix.set("A", "X", 1.5)
    matrix.set("A", "Y", 2.5)
    matrix.set("B", "X", 3.0)
    matrix.set("B", "Y", 4.0)
    return matrix


@pytest.fixture
def counts_3x4():
    """
    Returns an unlabeled 3x4 matrix with distinct non-integer cell values.

    Returns:
        LabeledMatrix: Matrix where cell (r, c) holds r * 4 + c + 1/3.
    """
    matrix = LabeledMatrix(3, 4)
    for r in range(3):
        for c in range(4):
            matrix.set(r, c, r * 4 + c + 1.0 / 3.0)
    return matrix
