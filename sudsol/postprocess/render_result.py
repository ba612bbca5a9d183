# -*- coding: utf-8 -*-
"""
探索結果をもとに表示用の情報を構築するモジュールです。

- render_candidates : 各マスの生マスクと候補の一覧（デバッグ用の詳細表示）
- render_solved     : 確定した数字だけを並べたコンパクトな表示
- render_status     : 解けた / 解けなかった の1行（＋補足）
- build_result      : API などで返す dict
"""

from __future__ import annotations

from typing import Any, Dict, List

import pandas as pd

from ..config import BLOCK_COL_SEPARATOR, BLOCK_ROW_SEPARATOR
from ..grid.candidates import CandidateGrid, value_bit
from ..types import STATUS_SOLVED, STATUS_UNSOLVABLE, SolveResult


def _ends_block(index: int, block: int, size: int) -> bool:
    """index がブロックの最後の行（列）で、かつ盤面の端ではないか。"""
    return (index + 1) % block == 0 and index != size - 1


def render_candidates(grid: CandidateGrid) -> str:
    """
    各マスについて "<マスク値>" と「候補に残っている数字（なければ '.'）」を並べます。

    例（9x9 の1マス分）: "<1022>123456789 " / "<008>..3...... "
    """
    size = grid.size
    lines: List[str] = []

    for y in range(size):
        parts: List[str] = []
        for x in range(size):
            mask = grid.candidates(y, x)
            digits = "".join(
                str(v) if mask & value_bit(v) else "." for v in range(1, size + 1)
            )
            sep = BLOCK_COL_SEPARATOR if _ends_block(x, grid.block_cols, size) else " "
            parts.append(f"<{mask:03d}>{digits}{sep}")
        lines.append("".join(parts))
        if _ends_block(y, grid.block_rows, size):
            lines.append(BLOCK_ROW_SEPARATOR * (size * size))

    return "\n".join(lines)


def render_solved(grid: CandidateGrid) -> str:
    """確定マスは数字、未確定マスは空白で盤面を表示します。"""
    size = grid.size
    lines: List[str] = []

    for y in range(size):
        parts: List[str] = []
        for x in range(size):
            value = grid.value_at(y, x)
            parts.append(str(value) if value is not None else " ")
            if _ends_block(x, grid.block_cols, size):
                parts.append(BLOCK_COL_SEPARATOR)
        lines.append("".join(parts))
        if _ends_block(y, grid.block_rows, size):
            lines.append(BLOCK_ROW_SEPARATOR * (size * 2))

    return "\n".join(lines)


def render_status(result: SolveResult) -> str:
    """
    最後に表示する状態行です。

    解けなかった場合は、原因の切り分けに役立つ補足を1行追加します。
    """
    if result.status == STATUS_SOLVED:
        return "Puzzle is solved"
    if result.status == STATUS_UNSOLVABLE:
        return (
            "Puzzle is NOT solved\n"
            "The puzzle is inconsistent: every branch ended in a contradiction."
        )
    return (
        "Puzzle is NOT solved\n"
        "This solver should be able to solve any valid puzzle of this kind; "
        "an unsolved result indicates a bug. Please debug and fix..."
    )


def render_report(result: SolveResult) -> str:
    """CLI で表示する全文（詳細表示 + 空行 + 盤面 + 空行 + 状態行）を返します。"""
    return "\n\n".join(
        [
            render_candidates(result.grid),
            render_solved(result.grid),
            render_status(result),
        ]
    )


def build_result(result: SolveResult) -> Dict[str, Any]:
    """
    API などで返す dict を作ります。

    solved_board は DataFrame を経由して list of list にします（未確定マスは None）。
    """
    grid = result.grid
    solved_df = pd.DataFrame(grid.values(), dtype=object)

    return {
        "status": result.status,
        "solved": result.solved,
        "solved_board": solved_df.values.tolist(),  # ★ DataFrameを返さない
        "candidates": grid.cells.tolist(),
        "shape": (grid.size, grid.size),
        "stats": dict(result.stats),
    }
