"""Tests for LodData."""

import numpy as np
import pandas as pd
import pytest

from qtl_linkview.core.errors import DataShapeError
from qtl_linkview.core.lod_data import LodData, chromosome_sort_key


class TestLodDataFromDict:
    def test_basic(self, lod):
        assert lod.chromosomes == ("1", "2")
        assert lod.trait_names == ("liver", "kidney")
        assert lod.n_traits == 2
        assert lod.n_positions == 5

    def test_none_becomes_nan(self, lod):
        assert np.isnan(lod.values("1")[2, 0])

    def test_missing_keys_raise(self):
        with pytest.raises(DataShapeError, match="missing keys"):
            LodData.from_dict({"positions": {}})

    def test_explicit_order_is_kept(self, lod_payload):
        lod = LodData.from_dict({**lod_payload, "chromosomes": ["2", "1"]})
        assert lod.chromosomes == ("2", "1")

    def test_default_order_is_as_supplied(self):
        positions = {"X": [1.0], "10": [1.0], "2": [1.0]}
        values = {c: [[0.0]] for c in positions}
        lod = LodData(values, positions, ["t"])
        assert lod.chromosomes == ("X", "10", "2")

    def test_natural_order_is_opt_in(self):
        positions = {"X": [1.0], "10": [1.0], "2": [1.0]}
        payload = {
            "traitValues": {c: [[0.0]] for c in positions},
            "positions": positions,
            "traitNames": ["t"],
        }
        lod = LodData.from_dict(payload, natural_order=True)
        assert lod.chromosomes == ("2", "10", "X")

    def test_object_array_with_none_becomes_nan(self):
        rows = np.array([[1.0, None], [None, 2.0]], dtype=object)
        lod = LodData({"1": rows}, {"1": [0.0, 5.0]}, ["a", "b"])
        assert np.isnan(lod.values("1")[0, 1])
        assert lod.values("1")[1, 1] == 2.0

    def test_object_array_of_text_raises(self):
        rows = np.array([["high"], ["low"]], dtype=object)
        with pytest.raises(DataShapeError, match="rectangular"):
            LodData({"1": rows}, {"1": [0.0, 5.0]}, ["t"])


class TestLodDataSorting:
    def test_positions_sorted_with_rows(self):
        lod = LodData({"1": [[3.0], [1.0], [2.0]]}, {"1": [30.0, 10.0, 20.0]}, ["t"])
        assert lod.positions("1").tolist() == [10.0, 20.0, 30.0]
        assert lod.values("1")[:, 0].tolist() == [1.0, 2.0, 3.0]

    def test_views_are_read_only(self, lod):
        with pytest.raises(ValueError):
            lod.positions("1")[0] = 5.0
        with pytest.raises(ValueError):
            lod.values("1")[0, 0] = 5.0


class TestLodDataValidation:
    def test_duplicate_positions_raise(self):
        with pytest.raises(DataShapeError, match="duplicate"):
            LodData({"1": [[1.0], [2.0]]}, {"1": [5.0, 5.0]}, ["t"])

    def test_empty_chromosome_raises(self):
        with pytest.raises(DataShapeError, match="at least one position"):
            LodData({"1": []}, {"1": []}, ["t"])

    def test_unknown_chromosome_in_order_raises(self, lod_payload):
        with pytest.raises(DataShapeError, match="unknown chromosomes"):
            LodData.from_dict({**lod_payload, "chromosomes": ["1", "2", "3"]})

    def test_trait_values_without_positions_raise(self):
        with pytest.raises(DataShapeError, match="no positions"):
            LodData({"1": [[1.0]], "9": [[1.0]]}, {"1": [0.0]}, ["t"])

    def test_ragged_matrix_raises(self):
        with pytest.raises(DataShapeError, match="rectangular"):
            LodData({"1": [[1.0, 2.0], [3.0]]}, {"1": [0.0, 1.0]}, ["a", "b"])

    def test_trait_count_mismatch_found_by_validate(self):
        lod = LodData({"1": [[1.0, 2.0]]}, {"1": [0.0]}, ["only_one"])
        with pytest.raises(DataShapeError, match="1 trait names"):
            lod.validate()

    def test_valid_data_passes(self, lod):
        lod.validate()


class TestLodDataFromFrame:
    def test_long_table(self):
        df = pd.DataFrame({
            "chr": ["5", "5", "1"],
            "pos": [20.0, 10.0, 0.0],
            "liver": [1.0, 2.0, 3.0],
            "kidney": [-1.0, -2.0, -3.0],
        })
        lod = LodData.from_frame(df)
        assert lod.chromosomes == ("5", "1")
        assert lod.trait_names == ("liver", "kidney")
        assert lod.positions("5").tolist() == [10.0, 20.0]
        assert lod.values("5").tolist() == [[2.0, -2.0], [1.0, -1.0]]

    def test_selected_traits(self):
        df = pd.DataFrame({"chr": ["1"], "pos": [0.0], "a": [1.0], "b": [2.0]})
        assert LodData.from_frame(df, traits=["b"]).trait_names == ("b",)

    def test_missing_column_raises(self):
        df = pd.DataFrame({"chrom": ["1"], "pos": [0.0], "a": [1.0]})
        with pytest.raises(DataShapeError, match="Column 'chr' not found"):
            LodData.from_frame(df)

    def test_non_numeric_trait_raises(self):
        df = pd.DataFrame({"chr": ["1"], "pos": [0.0], "a": ["high"]})
        with pytest.raises(DataShapeError, match="numeric"):
            LodData.from_frame(df)

    def test_rejects_non_dataframe(self):
        with pytest.raises(TypeError, match="DataFrame"):
            LodData.from_frame({"chr": ["1"]})


class TestLodDataRanges:
    def test_finite_range(self, lod):
        assert lod.finite_range() == (-3.0, 4.0)

    def test_all_values_length(self, lod):
        assert len(lod.all_values()) == 10

    def test_finite_range_without_values(self):
        lod = LodData({"1": [[None]]}, {"1": [0.0]}, ["t"])
        assert lod.finite_range() == (0.0, 0.0)


class TestChromosomeSortKey:
    def test_numbers_then_letters(self):
        names = ["X", "10", "2", "chr1", "Y"]
        assert sorted(names, key=chromosome_sort_key) == ["chr1", "2", "10", "X", "Y"]
