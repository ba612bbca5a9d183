# -*- coding: utf-8 -*-
"""
sudsol パッケージの入口となるモジュールです。

api_proto/local_api.py や cli.py などから:

    from sudsol import solve

と呼び出されることを想定しています。

ここでは、盤面（文字列の行のリスト、または pandas.DataFrame）を受け取り、
1. 盤面のパース（CandidateGrid の作成）
2. 制約伝播と穴埋め
3. MRV による分岐とバックトラック
4. 最終チェック
を順番に呼び出します。
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Optional, Sequence, Union

import pandas as pd

from .config import BLOCK_COLS, BLOCK_ROWS, MAX_BACKLOG
from .csp.search import SudokuSolver
from .grid.candidates import CandidateGrid
from .grid.parser import load_dataframe, load_puzzle_file, load_rows
from .logging_utils import get_logger
from .types import SolveResult

__version__ = "1.0.0"
__all__ = [
    "CandidateGrid",
    "SolveResult",
    "SudokuSolver",
    "solve",
    "solve_file",
    "solve_grid",
]

logger = get_logger()

Board = Union[Sequence[str], pd.DataFrame]


def solve_grid(
    grid: CandidateGrid,
    capacity: Optional[int] = MAX_BACKLOG,
    cancel_event: Optional[threading.Event] = None,
) -> SolveResult:
    """読み込み済みの CandidateGrid を解きます（grid はその場で書き換わります）。"""
    logger.info("=== solve() START ===")
    logger.info("Grid: %r", grid)

    result = SudokuSolver(grid, capacity=capacity, cancel_event=cancel_event).run()

    logger.info("=== solve() END (%s) ===", result.status)
    return result


def solve(
    board: Board,
    block_rows: int = BLOCK_ROWS,
    block_cols: int = BLOCK_COLS,
    capacity: Optional[int] = MAX_BACKLOG,
    cancel_event: Optional[threading.Event] = None,
) -> SolveResult:
    """
    数独を解くメイン関数。

    Parameters
    ----------
    board : list of str or pandas.DataFrame
        "53..7...." のような N 文字の行を N 本、または同じ内容の DataFrame。
    capacity : int or None
        バックトラック用スタックの上限（None で上限なし）。

    Raises
    ------
    FormatError
        盤面の形式が不正なとき。
    CapacityExceeded
        スタックの上限を超えたとき。
    """
    if isinstance(board, pd.DataFrame):
        grid = load_dataframe(board, block_rows, block_cols)
    else:
        grid = load_rows(list(board), block_rows, block_cols)
    return solve_grid(grid, capacity=capacity, cancel_event=cancel_event)


def solve_file(
    path: str | Path,
    block_rows: int = BLOCK_ROWS,
    block_cols: int = BLOCK_COLS,
    capacity: Optional[int] = MAX_BACKLOG,
) -> SolveResult:
    """パズルのテキストファイルを読み込んで解きます。"""
    grid = load_puzzle_file(path, block_rows, block_cols)
    return solve_grid(grid, capacity=capacity)
