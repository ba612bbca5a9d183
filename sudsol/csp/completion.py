# -*- coding: utf-8 -*-
"""
ブロックの「最後の1マス」を埋めるモジュールです。

ブロックには 1..N がちょうど1回ずつ入るので、
N-1 個の値が確定していれば、残りの値は必ず残りの1マスに入ります。

値を書き込んだ直後に制約伝播を不動点まで回し、
その結果を次のブロックの判定に使います。
"""

from __future__ import annotations

from ..errors import Contradiction
from ..grid.candidates import CandidateGrid, popcount, solid_mask_array, solid_value
from .propagation import propagate_to_fixpoint


def fill(grid: CandidateGrid) -> int:
    """
    値が1つだけ欠けているブロックを埋めます。

    Returns
    -------
    int
        埋めたマスの数。

    Raises
    ------
    Contradiction
        埋めた後の制約伝播で矛盾が出たとき。
        または「値が1つだけ欠けているのに空きマスが1つではない」
        「空きマスの候補に欠けている値がない」など、ブロックが壊れているとき。
    """
    changes = 0

    for r0, c0 in grid.block_origins():
        block = grid.block(r0, c0)
        solid = solid_mask_array(block)

        missing = grid.any_mask
        for mask in block[solid]:
            missing &= ~int(mask)

        if popcount(missing) != 1:
            continue

        open_cells = [(r0 + int(dy), c0 + int(dx)) for dy, dx in zip(*(~solid).nonzero())]
        if len(open_cells) != 1:
            raise Contradiction(
                f"block at ({r0},{c0}) misses one number but has {len(open_cells)} open cells",
                coord=(r0, c0),
            )

        r, c = open_cells[0]
        if not grid.candidates(r, c) & missing:
            raise Contradiction(
                f"missing number {solid_value(missing)} is not a candidate at ({r},{c})",
                coord=(r, c),
            )

        grid.assign(r, c, solid_value(missing))
        # 新しい確定値を周囲から消す（1回では足りないので不動点まで）
        propagate_to_fixpoint(grid)
        changes += 1

    return changes


def fill_to_fixpoint(grid: CandidateGrid) -> int:
    """fill() を変化がなくなるまで繰り返し、埋めたマスの合計を返します。"""
    total = 0
    while True:
        changes = fill(grid)
        if not changes:
            return total
        total += changes


def settle(grid: CandidateGrid) -> None:
    """制約伝播と穴埋めを、どちらも変化がなくなるまで回します。"""
    propagate_to_fixpoint(grid)
    fill_to_fixpoint(grid)
