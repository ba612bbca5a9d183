# -*- coding: utf-8 -*-
"""
盤面の入力を内部表現（CandidateGrid）に変換するモジュールです。

主な役割:
- テキストファイル（N 行 × N 文字）を読み込む
- pandas.DataFrame の盤面を文字列の行に正規化する
- 各文字を候補マスクに変換する（数字 → 確定マス、"." → ANY）
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import Any, List, Sequence

import pandas as pd

from ..config import BLANK_CELL_VALUES, BLOCK_COLS, BLOCK_ROWS, EMPTY_CELL_CHAR
from ..errors import FormatError
from .candidates import CandidateGrid, value_bit


def normalize_cell(x: Any) -> str:
    """
    DataFrame の個々のセルの値を、1文字の内部表現に変換します。

    変換ルール
    ----------
    - None / NaN / "" / "." / 0 : "."（空きマス）
    - 数字（int や "5"）         : "5" のような1文字
    - それ以外                   : そのまま文字列として返す（後段で FormatError）
    """
    if x is None:
        return EMPTY_CELL_CHAR
    if isinstance(x, float):
        if math.isnan(x):
            return EMPTY_CELL_CHAR
        if x.is_integer():
            x = int(x)

    s = str(x).strip()
    if s in BLANK_CELL_VALUES:
        return EMPTY_CELL_CHAR
    return s


def normalize_board(df: pd.DataFrame) -> List[str]:
    """
    DataFrame の盤面を「1行 = N 文字の文字列」のリストに変換します。

    Parameters
    ----------
    df : pandas.DataFrame
        shape = (N, N) の盤面データ。
    """
    rows, cols = df.shape
    return [
        "".join(normalize_cell(df.iat[i, j]) for j in range(cols))
        for i in range(rows)
    ]


def load_rows(
    rows: Sequence[str],
    block_rows: int = BLOCK_ROWS,
    block_cols: int = BLOCK_COLS,
) -> CandidateGrid:
    """
    文字列の行から初期の候補盤面を作ります。

    - 数字 d（1..N）のマスは、d だけを候補に持つ確定マスになります。
    - "." のマスは ANY（すべての値が候補）になります。

    Raises
    ------
    FormatError
        行数・列数が N と一致しない、または不明な文字があるとき。
    """
    grid = CandidateGrid(block_rows=block_rows, block_cols=block_cols)
    size = grid.size

    if len(rows) > size:
        raise FormatError(
            f"too many lines in datafile (reached line {size + 1}, expected {size})",
            line_no=size + 1,
        )
    if len(rows) < size:
        raise FormatError(
            f"too few lines in datafile ({len(rows)} lines, expected {size})",
            line_no=len(rows) + 1,
        )

    for y, line in enumerate(rows):
        if len(line) != size:
            raise FormatError(
                f"invalid line {y + 1} column count ({len(line)} != size {size})",
                line_no=y + 1,
            )
        for x, ch in enumerate(line):
            if ch == EMPTY_CELL_CHAR:
                continue
            if not "1" <= ch <= "9" or int(ch) > size:
                raise FormatError(
                    f"invalid character {ch!r} at line {y + 1}, column {x + 1}",
                    line_no=y + 1,
                )
            grid.cells[y, x] = value_bit(int(ch))

    return grid


def load_dataframe(
    df: pd.DataFrame,
    block_rows: int = BLOCK_ROWS,
    block_cols: int = BLOCK_COLS,
) -> CandidateGrid:
    """DataFrame の盤面から初期の候補盤面を作ります。"""
    return load_rows(normalize_board(df), block_rows, block_cols)


def load_puzzle_file(
    path: str | Path,
    block_rows: int = BLOCK_ROWS,
    block_cols: int = BLOCK_COLS,
) -> CandidateGrid:
    """
    パズルのテキストファイルを読み込みます。

    ファイルが開けない場合は OSError（FileNotFoundError など）を
    そのまま送出します。UTF-8 として読めない場合は FormatError です。
    """
    p = Path(path)
    data = p.read_bytes()
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        line_no = data[: e.start].count(b"\n") + 1
        raise FormatError(
            f"undecodable byte 0x{data[e.start]:02x} at line {line_no} (expected UTF-8 text)",
            line_no=line_no,
        ) from e
    return load_rows(text.splitlines(), block_rows, block_cols)
