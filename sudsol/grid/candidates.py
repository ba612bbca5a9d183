# -*- coding: utf-8 -*-
"""
各マスの「候補集合」をビットマスクで持つ盤面クラスです。

表現方法
--------
- 値 v（1..N）が候補に残っていれば、ビット (1 << v) が立っています。
- ビット 0 は使いません。そのため「何でも入りうる」状態は
  ANY = (1 << (N + 1)) - 2 になります（9x9 なら 1022）。
- ちょうど1ビットだけ立っているマスを「確定マス（solid）」と呼びます。

盤面そのものは numpy の 2次元配列 (N, N) で、dtype は int64 です。
負のマスク（~bit）との AND をそのまま書けるように、符号付きにしています。
"""

from __future__ import annotations

from typing import List, Optional

import numpy as np

from ..config import BLOCK_COLS, BLOCK_ROWS, MAX_GRID_SIZE
from ..types import ROW, CellCoord


def value_bit(value: int) -> int:
    """値 v に対応するビットマスクを返します。"""
    return 1 << value


def any_mask(size: int) -> int:
    """1..size のすべての値を候補に持つマスクを返します。"""
    return (1 << (size + 1)) - 2


def popcount(mask: int) -> int:
    """立っているビットの数を返します。"""
    return bin(int(mask)).count("1")


def is_solid_mask(mask: int) -> bool:
    """マスクがちょうど1ビットだけ立っているか（確定マスか）を判定します。"""
    mask = int(mask)
    return mask > 1 and (mask & (mask - 1)) == 0


def solid_value(mask: int) -> Optional[int]:
    """確定マスなら、その値（1..N）を返します。未確定なら None。"""
    if not is_solid_mask(mask):
        return None
    return int(mask).bit_length() - 1


def solid_mask_array(cells: np.ndarray) -> np.ndarray:
    """配列の各要素が確定マスかどうかを bool 配列で返します。"""
    return (cells > 1) & ((cells & (cells - 1)) == 0)


def popcount_array(cells: np.ndarray, size: int) -> np.ndarray:
    """配列の各要素について、値 1..size のビット数を数えます。"""
    counts = np.zeros(cells.shape, dtype=np.int64)
    for value in range(1, size + 1):
        counts += (cells >> value) & 1
    return counts


class CandidateGrid:
    """
    N×N の候補マスク盤面です。

    Parameters
    ----------
    cells : numpy.ndarray, optional
        shape = (N, N) のマスク配列。省略時はすべて ANY。
    block_rows, block_cols : int
        ブロックの行数・列数。N = block_rows * block_cols。
        どちらも 1 以上で、N は MAX_GRID_SIZE 以下でなければ ValueError です。
    """

    def __init__(
        self,
        cells: Optional[np.ndarray] = None,
        block_rows: int = BLOCK_ROWS,
        block_cols: int = BLOCK_COLS,
    ):
        if block_rows < 1 or block_cols < 1:
            raise ValueError(
                f"block size must be positive, got {block_rows}x{block_cols}"
            )
        if block_rows * block_cols > MAX_GRID_SIZE:
            raise ValueError(
                f"grid size {block_rows * block_cols} exceeds {MAX_GRID_SIZE} "
                f"(block {block_rows}x{block_cols})"
            )

        self.block_rows = block_rows
        self.block_cols = block_cols
        self.size = block_rows * block_cols
        self.any_mask = any_mask(self.size)

        if cells is None:
            self.cells = np.full((self.size, self.size), self.any_mask, dtype=np.int64)
        else:
            arr = np.array(cells, dtype=np.int64)
            if arr.shape != (self.size, self.size):
                raise ValueError(
                    f"cells must have shape ({self.size}, {self.size}), got {arr.shape}"
                )
            self.cells = arr

    # -------------------------------------------------------------------------
    # 参照系
    # -------------------------------------------------------------------------
    def candidates(self, row: int, col: int) -> int:
        return int(self.cells[row, col])

    def is_solid(self, row: int, col: int) -> bool:
        return is_solid_mask(self.cells[row, col])

    def value_at(self, row: int, col: int) -> Optional[int]:
        return solid_value(self.cells[row, col])

    def solid_mask(self) -> np.ndarray:
        return solid_mask_array(self.cells)

    def values(self) -> List[List[Optional[int]]]:
        """確定マスは値、未確定マスは None にした2次元リストを返します。"""
        return [
            [self.value_at(r, c) for c in range(self.size)]
            for r in range(self.size)
        ]

    def locate(
        self,
        value: int,
        direction: str,
        line: int,
        instance: int = 0,
    ) -> Optional[CellCoord]:
        """
        指定した行（または列）の中で、value を候補に持つ未確定マスのうち
        instance 番目（0 始まり、走査順）の座標を返します。

        見つからなければ None を返します。
        """
        bit = value_bit(value)
        for i in range(self.size):
            r, c = (line, i) if direction == ROW else (i, line)
            mask = int(self.cells[r, c])
            if is_solid_mask(mask) or not mask & bit:
                continue
            if instance == 0:
                return (r, c)
            instance -= 1
        return None

    # -------------------------------------------------------------------------
    # 更新系
    # -------------------------------------------------------------------------
    def assign(self, row: int, col: int, value: int) -> None:
        """マスを value で確定させます（候補集合を1ビットに置き換え）。"""
        if not 1 <= value <= self.size:
            raise ValueError(f"value {value} out of range 1..{self.size}")
        self.cells[row, col] = value_bit(value)

    def snapshot(self) -> np.ndarray:
        return self.cells.copy()

    def restore(self, snapshot: np.ndarray) -> None:
        self.cells[...] = snapshot

    def copy(self) -> "CandidateGrid":
        return CandidateGrid(self.snapshot(), self.block_rows, self.block_cols)

    # -------------------------------------------------------------------------
    # ブロック
    # -------------------------------------------------------------------------
    def block_origins(self) -> List[CellCoord]:
        """各ブロックの左上の座標を、行優先の順で返します。"""
        return [
            (r0, c0)
            for r0 in range(0, self.size, self.block_rows)
            for c0 in range(0, self.size, self.block_cols)
        ]

    def block(self, r0: int, c0: int) -> np.ndarray:
        """ブロックのビュー（書き込むと盤面にも反映される）を返します。"""
        return self.cells[r0:r0 + self.block_rows, c0:c0 + self.block_cols]

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, CandidateGrid)
            and self.block_rows == other.block_rows
            and self.block_cols == other.block_cols
            and np.array_equal(self.cells, other.cells)
        )

    def __repr__(self) -> str:
        solid = int(self.solid_mask().sum())
        return f"CandidateGrid(size={self.size}, solid={solid}/{self.size * self.size})"

