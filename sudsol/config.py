# -*- coding: utf-8 -*-
"""
sudsol 全体で共通して使う設定値をまとめたモジュールです。

ここを編集することで
- 盤面のサイズ（ブロックの縦横）
- バックトラック用スタックの上限
- 入力ファイルで「空きマス」とみなす文字
などを簡単に変更できます。
"""

from __future__ import annotations

# ==== 盤面サイズ ===========================================================

# ブロック（3x3 など）の行数・列数
BLOCK_ROWS: int = 3
BLOCK_COLS: int = 3

# 盤面の一辺の上限。入力で使える数字が '1'..'9' なので 9 まで。
MAX_GRID_SIZE: int = 9

# ==== 入力フォーマット =====================================================

# テキスト入力で「未確定マス」を表す文字
EMPTY_CELL_CHAR: str = "."

# DataFrame 入力で「空きマス」とみなす値（文字列化したもの）
BLANK_CELL_VALUES: tuple = ("", ".", "0", "nan", "None")

# ==== 探索関連 =============================================================

# バックトラック用スタックに積めるフレーム数の上限。
# None にすると上限なし（リストがそのまま伸びる）。
MAX_BACKLOG: int | None = 99

# ==== 表示関連 =============================================================

# ブロックの区切りに使う文字
BLOCK_COL_SEPARATOR: str = "|"
BLOCK_ROW_SEPARATOR: str = "-"
