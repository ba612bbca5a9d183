# -*- coding: utf-8 -*-
"""
sudsol で使う例外クラスをまとめたモジュールです。

- FormatError      : 入力盤面の形式エラー（読み込み時）
- Contradiction    : 制約伝播中に見つかった矛盾（探索側でバックトラックに変換）
- CapacityExceeded : バックトラック用スタックの上限超過（致命的）
- SolveCancelled   : 外部からのキャンセル要求

ファイルが開けない場合は、標準の OSError / FileNotFoundError をそのまま使います。
"""

from __future__ import annotations


class SudokuError(Exception):
    """sudsol が送出する例外の基底クラスです。"""


class FormatError(SudokuError, ValueError):
    """
    盤面の行数・列数・文字が不正なときに送出されます。

    Attributes
    ----------
    line_no : int | None
        問題のあった行番号（1 始まり）。行に依らないエラーなら None。
    """

    def __init__(self, message: str, line_no: int | None = None):
        super().__init__(message)
        self.line_no = line_no


class Contradiction(SudokuError):
    """
    同じ行・列に同じ確定値が2つある、または候補が空になったことを表します。

    探索中はバックトラックのきっかけとして扱われ、
    利用者に直接見えるのはスタックが空のとき（解なし）だけです。
    """

    def __init__(self, message: str, coord: tuple[int, int] | None = None):
        super().__init__(message)
        self.coord = coord


class CapacityExceeded(SudokuError):
    """バックトラック用スタックの上限を超えたときに送出されます。"""

    def __init__(self, capacity: int):
        super().__init__(
            f"Out of backlog entries (capacity={capacity}). "
            "Increase MAX_BACKLOG or pass capacity=None."
        )
        self.capacity = capacity


class SolveCancelled(SudokuError):
    """cancel_event がセットされ、探索を途中で打ち切ったときに送出されます。"""
