# sudsol/eval/verify.py
# -*- coding: utf-8 -*-
from __future__ import annotations

from typing import List

import numpy as np

from ..grid.candidates import CandidateGrid


def _is_permutation(masks: np.ndarray, full: int) -> bool:
    """マスクの並びが 1..N の並べ替え（すべて確定・重複なし）になっているか。"""
    seen = 0
    for mask in masks.ravel():
        mask = int(mask)
        if seen & mask:
            return False
        seen |= mask
    return seen == full


def check_solved(grid: CandidateGrid) -> bool:
    """
    盤面が完全に解けているかを判定する。

    すべてのマスが確定していて、
    すべての行・列・ブロックが 1..N の並べ替えになっていれば True。
    """
    if not grid.solid_mask().all():
        return False

    full = grid.any_mask
    cells = grid.cells
    for i in range(grid.size):
        if not _is_permutation(cells[i, :], full):
            return False
        if not _is_permutation(cells[:, i], full):
            return False
    for r0, c0 in grid.block_origins():
        if not _is_permutation(grid.block(r0, c0), full):
            return False
    return True


def solution_string(grid: CandidateGrid) -> str:
    """
    盤面を「行を連結した1本の文字列」にする（未確定マスは "."）。
    テストや他のソルバーとの比較用。
    """
    chars: List[str] = []
    for row in grid.values():
        chars.extend(str(v) if v is not None else "." for v in row)
    return "".join(chars)
