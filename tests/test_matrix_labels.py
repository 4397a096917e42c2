"""
tests/test_matrix_labels
~~~~~~~~~~~~~~~~~~~~~~~~
"""

import pytest

from contab import DimensionMismatch, LabeledMatrix, LabelNotFound


@pytest.mark.api
def test_scenario_sums_by_label(labeled_2x2):
    """
    Ensures label-addressed sums over the 2x2 scenario matrix.
    """
    assert labeled_2x2.get_row_sum("A") == 4.0
    assert labeled_2x2.get_column_sum("Y") == 6.5
    assert labeled_2x2.get_row_sum("B") == 7.0
    assert labeled_2x2.get_column_sum("X") == 4.5


@pytest.mark.api
def test_label_and_index_addressing_agree(labeled_2x2):
    """
    Ensures get(row_label, col_label) equals get at the resolved indices.
    """
    for row_label in labeled_2x2.row_labels:
        for col_label in labeled_2x2.col_labels:
            r = labeled_2x2.row_index(row_label)
            c = labeled_2x2.col_index(col_label)
            assert labeled_2x2.get(row_label, col_label) == labeled_2x2.get(r, c)


@pytest.mark.api
def test_label_and_index_can_mix_per_axis(labeled_2x2):
    """
    Ensures a label on one axis and an index on the other address the same cell.
    """
    assert labeled_2x2.get("B", 1) == 4.0
    assert labeled_2x2.get(1, "Y") == 4.0


@pytest.mark.api
def test_mutations_by_label():
    """
    Ensures add/increment/scale by label touch the labeled cells.
    """
    matrix = LabeledMatrix.from_labels(["r1", "r2"], ["c1", "c2", "c3"])
    matrix.increment("r1", "c2")
    matrix.increment("r1", "c2")
    matrix.add("r2", "c3", 4.0)
    matrix.scale_row("r2", 0.5)
    matrix.scale_column("c2", 10.0)

    assert matrix.get("r1", "c2") == 20.0
    assert matrix.get("r2", "c3") == 2.0
    assert matrix.total() == 22.0


@pytest.mark.api
@pytest.mark.parametrize(
    "call",
    [
        lambda m: m.get("Z", "X"),
        lambda m: m.get("A", "Z"),
        lambda m: m.set("Z", "X", 1.0),
        lambda m: m.add("A", "Z", 1.0),
        lambda m: m.increment("Z", "Y"),
        lambda m: m.scale_row("Z", 2.0),
        lambda m: m.scale_column("Z", 2.0),
        lambda m: m.get_row("Z"),
        lambda m: m.get_column("Z"),
        lambda m: m.get_row_sum("Z"),
        lambda m: m.get_column_sum("Z"),
        lambda m: m.serialize_row("Z"),
        lambda m: m.deserialize_row("1,2", "Z"),
    ],
)
def test_unknown_label_raises_label_not_found(labeled_2x2, call):
    """
    Ensures every label-based accessor raises LabelNotFound for unknown labels and
    leaves the cells untouched.
    """
    before = labeled_2x2.values.copy()
    with pytest.raises(LabelNotFound):
        call(labeled_2x2)
    assert (labeled_2x2.values == before).all()


@pytest.mark.api
def test_label_not_found_reports_axis(labeled_2x2):
    """
    Ensures LabelNotFound carries the missing label and its axis.
    """
    with pytest.raises(LabelNotFound) as excinfo:
        labeled_2x2.get("A", "W")

    assert excinfo.value.label == "W"
    assert excinfo.value.axis == "column"
    assert isinstance(excinfo.value, KeyError)


@pytest.mark.api
def test_label_lookup_without_labels_raises():
    """
    Ensures label addressing on an unlabeled matrix raises LabelNotFound.
    """
    matrix = LabeledMatrix(2, 2)
    with pytest.raises(LabelNotFound):
        matrix.get("A", "X")


@pytest.mark.api
def test_set_labels_after_counts_construction():
    """
    Ensures labels can be attached after a counts-only construction.
    """
    matrix = LabeledMatrix(2, 3)
    matrix.set_labels(["a", "b"], ("x", "y", "z"))
    matrix.set("b", "z", 5.0)

    assert matrix.row_labels == ("a", "b")
    assert matrix.col_labels == ("x", "y", "z")
    assert matrix.get(1, 2) == 5.0


@pytest.mark.api
def test_set_labels_length_mismatch_keeps_old_labels(labeled_2x2):
    """
    Ensures a mismatched label array raises DimensionMismatch and replaces nothing.
    """
    with pytest.raises(DimensionMismatch):
        labeled_2x2.set_labels(["P", "Q"], ["U", "V", "W"])
    with pytest.raises(DimensionMismatch):
        labeled_2x2.set_labels(["P"], ["U", "V"])

    assert labeled_2x2.row_labels == ("A", "B")
    assert labeled_2x2.col_labels == ("X", "Y")


@pytest.mark.api
def test_set_labels_rejects_plain_string(labeled_2x2):
    """
    Ensures a bare string is not split into single-character labels.
    """
    with pytest.raises(TypeError):
        labeled_2x2.set_labels("AB", ["X", "Y"])


@pytest.mark.api
def test_duplicate_labels_warn_and_resolve_first(labeled_2x2):
    """
    Ensures duplicate labels warn and resolve to the first occurrence.
    """
    with pytest.warns(RuntimeWarning):
        labeled_2x2.set_labels(["A", "A"], ["X", "Y"])

    assert labeled_2x2.row_index("A") == 0


@pytest.mark.api
def test_initialize_with_stale_labels_warns(labeled_2x2):
    """
    Ensures resizing a labeled matrix warns that labels no longer fit.
    """
    with pytest.warns(RuntimeWarning):
        labeled_2x2.initialize(3, 2)

    assert labeled_2x2.row_labels == ("A", "B")
    labeled_2x2.set_labels(["A", "B", "C"], ["X", "Y"])
    assert labeled_2x2.get("C", "Y") == 0.0


@pytest.mark.api
def test_clear_labels(labeled_2x2):
    """
    Ensures clear_labels() drops labels so only index addressing remains.
    """
    labeled_2x2.clear_labels()

    assert labeled_2x2.get(0, 0) == 1.5
    with pytest.raises(LabelNotFound):
        labeled_2x2.get("A", "X")
