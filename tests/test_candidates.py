# tests/test_candidates.py
import numpy as np
import pytest

from sudsol.grid.candidates import (
    CandidateGrid,
    any_mask,
    is_solid_mask,
    popcount,
    solid_value,
    value_bit,
)
from sudsol.types import COLUMN, ROW


def test_masks_use_bits_one_to_n():
    assert any_mask(9) == 1022
    assert any_mask(4) == 0b11110
    assert value_bit(1) == 2
    assert value_bit(9) == 512
    assert popcount(any_mask(9)) == 9


def test_solid_detection():
    assert is_solid_mask(value_bit(5))
    assert not is_solid_mask(value_bit(5) | value_bit(6))
    assert not is_solid_mask(0)
    assert not is_solid_mask(1)  # bit 0 is never a value
    assert solid_value(value_bit(7)) == 7
    assert solid_value(any_mask(9)) is None


def test_new_grid_is_all_any():
    grid = CandidateGrid()
    assert grid.size == 9
    assert (grid.cells == 1022).all()
    assert not grid.solid_mask().any()
    assert grid.value_at(0, 0) is None


def test_assign_only_touches_target_cell():
    grid = CandidateGrid()
    grid.assign(3, 4, 6)
    assert grid.is_solid(3, 4)
    assert grid.value_at(3, 4) == 6
    assert grid.candidates(3, 4) == value_bit(6)
    assert int(grid.solid_mask().sum()) == 1
    with pytest.raises(ValueError):
        grid.assign(0, 0, 10)


def test_locate_skips_solid_cells_and_counts_instances():
    grid = CandidateGrid()
    grid.assign(2, 0, 4)
    grid.cells[2, 1] &= ~value_bit(5)

    assert grid.locate(5, ROW, 2, 0) == (2, 2)
    assert grid.locate(5, ROW, 2, 1) == (2, 3)
    assert grid.locate(5, ROW, 2, 6) == (2, 8)
    assert grid.locate(5, ROW, 2, 7) is None

    assert grid.locate(5, COLUMN, 0, 0) == (0, 0)
    assert grid.locate(5, COLUMN, 0, 2) == (3, 0)  # (2, 0) is solid


def test_snapshot_restore_roundtrip():
    grid = CandidateGrid()
    snap = grid.snapshot()
    grid.assign(0, 0, 1)
    grid.cells[8, 8] = value_bit(2)
    grid.restore(snap)
    assert (grid.cells == 1022).all()

    # snapshot is an independent copy
    snap[0, 0] = 0
    assert grid.candidates(0, 0) == 1022


def test_blocks_are_views():
    grid = CandidateGrid(block_rows=2, block_cols=2)
    assert grid.size == 4
    assert grid.block_origins() == [(0, 0), (0, 2), (2, 0), (2, 2)]
    block = grid.block(2, 2)
    block[1, 1] = value_bit(3)
    assert grid.value_at(3, 3) == 3


def test_bad_shape_rejected():
    with pytest.raises(ValueError):
        CandidateGrid(np.zeros((3, 3), dtype=np.int64))


def test_copy_is_independent_and_equal():
    grid = CandidateGrid()
    grid.assign(4, 4, 5)
    clone = grid.copy()
    assert clone == grid
    assert clone.cells is not grid.cells

    clone.assign(0, 0, 1)
    assert clone != grid
    assert grid.value_at(0, 0) is None
    assert CandidateGrid(block_rows=2, block_cols=2) != CandidateGrid()


def test_block_size_must_be_positive_and_fit_digits():
    with pytest.raises(ValueError):
        CandidateGrid(block_rows=-3, block_cols=-3)
    with pytest.raises(ValueError):
        CandidateGrid(block_rows=0, block_cols=9)
    with pytest.raises(ValueError):
        CandidateGrid(block_rows=10, block_cols=10)
    assert CandidateGrid(block_rows=1, block_cols=9).size == 9
