# -*- coding: utf-8 -*-
"""
制約伝播（propagation）を行うモジュールです。

ここでの制約伝播は、数独のハード制約をそのまま使う「強い」ものです。

1. 行・列の消去:
   値 v の確定マスがあれば、同じ行・列の他のマスの候補から v を消す。
   同じ行・列に v の確定マスがもう1つあれば矛盾（Contradiction）。
2. ブロックの消去:
   ブロック内の確定値をまとめたマスクを作り、
   ブロック内の未確定マスの候補からそのビットを消す。

propagate() は1回呼ぶと両方のパスを1回ずつ行い、消したビット数を返します。
不動点（変化ゼロ）まで回したいときは propagate_to_fixpoint() を使います。

矛盾を見つけた時点で、盤面は途中まで書き換わっている可能性があります。
探索側はスナップショットから盤面を戻すので、ここでは巻き戻しは行いません。
"""

from __future__ import annotations

import numpy as np

from ..errors import Contradiction
from ..grid.candidates import (
    CandidateGrid,
    popcount,
    popcount_array,
    solid_mask_array,
    value_bit,
)


def eliminate_lines(grid: CandidateGrid) -> int:
    """
    行・列の消去パスです。消したビット数を返します。

    値ごとに「その値の確定マスを含む行・列」を求め、
    その行・列に属する未確定マスから一括でビットを落とします。
    """
    cells = grid.cells
    changes = 0

    for value in range(1, grid.size + 1):
        bit = value_bit(value)
        solid_v = cells == bit
        if not solid_v.any():
            continue

        # 同じ行・列に同じ確定値が2つ以上あれば矛盾
        dup_rows = np.flatnonzero(solid_v.sum(axis=1) > 1)
        if dup_rows.size:
            raise Contradiction(f"number {value} is found twice in row {dup_rows[0]}")
        dup_cols = np.flatnonzero(solid_v.sum(axis=0) > 1)
        if dup_cols.size:
            raise Contradiction(f"number {value} is found twice in column {dup_cols[0]}")

        lines = solid_v.any(axis=1)[:, None] | solid_v.any(axis=0)[None, :]
        hit = lines & ~solid_v & ((cells & bit) != 0)
        n_hit = int(hit.sum())
        if n_hit:
            cells[hit] &= ~bit
            changes += n_hit

    return changes


def eliminate_blocks(grid: CandidateGrid) -> int:
    """
    ブロックの消去パスです。消したビット数を返します。

    確定マス自体は書き換えません。ブロック内に同じ確定値が2つあれば矛盾です。
    候補が空になったマスは propagate() の最後でまとめて検出します。
    """
    changes = 0

    for r0, c0 in grid.block_origins():
        block = grid.block(r0, c0)
        solid = solid_mask_array(block)
        if not solid.any():
            continue

        mask = int(np.bitwise_or.reduce(block[solid]))
        if int(solid.sum()) != popcount(mask):
            raise Contradiction(
                f"duplicate solid number in block at ({r0},{c0})", coord=(r0, c0)
            )

        hit = ~solid & ((block & mask) != 0)
        if not hit.any():
            continue

        changes += int(popcount_array(block[hit] & mask, grid.size).sum())
        block[hit] &= ~mask

    return changes


def propagate(grid: CandidateGrid) -> int:
    """
    行・列の消去とブロックの消去を1回ずつ行います。

    Returns
    -------
    int
        消した候補ビットの総数。0 なら不動点。

    Raises
    ------
    Contradiction
        同じ行・列に同じ確定値がある、または候補が空のマスができたとき。
    """
    changes = eliminate_lines(grid)
    changes += eliminate_blocks(grid)

    empty = np.argwhere(grid.cells == 0)
    if len(empty):
        r, c = (int(v) for v in empty[0])
        raise Contradiction(f"no candidates left at ({r},{c})", coord=(r, c))

    return changes


def propagate_to_fixpoint(grid: CandidateGrid) -> int:
    """propagate() を変化がなくなるまで繰り返し、消したビットの合計を返します。"""
    total = 0
    while True:
        changes = propagate(grid)
        if not changes:
            return total
        total += changes
