# -*- coding: utf-8 -*-
"""
数独 solver で使う主なデータ構造（型）と定数をまとめたモジュールです。

dataclass を使うことで、
「この構造体はどんなフィールドを持っているのか」を
分かりやすく表現しています。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Tuple

import numpy as np

if TYPE_CHECKING:
    from .grid.candidates import CandidateGrid

# グリッド上の座標を表す型 (row, col)。どちらも 0 始まり。
CellCoord = Tuple[int, int]

# ==== 走査方向 =============================================================

ROW = "row"
COLUMN = "column"

# ==== 探索エンジンの状態 ===================================================

STATE_PROPAGATING = "propagating"
STATE_SELECTING = "selecting"
STATE_COMMITTING = "committing"
STATE_BACKTRACKING = "backtracking"
STATE_SOLVED = "solved"
STATE_FAILED = "failed"

# ==== 解いた結果の状態 =====================================================

STATUS_SOLVED = "solved"
# 探索は「解けた」と判断したが、最終チェックに通らなかった（ロジックのバグの兆候）
STATUS_INCOMPLETE = "incomplete"
# 初期状態まで戻っても矛盾が解消できなかった
STATUS_UNSOLVABLE = "unsolvable"


@dataclass(frozen=True)
class Branch:
    """
    選択ステップで見つかった「最も候補の少ない 行/列 × 値」を表します。

    Attributes
    ----------
    count : int
        その行（列）で value を候補に持つ未確定マスの数。
    value : int
        対象の値（1..N）。
    direction : str
        "row" または "column"。
    line : int
        行番号または列番号（0 始まり）。
    """

    count: int
    value: int
    direction: str
    line: int


@dataclass
class BacktrackFrame:
    """
    バックトラック用スタックに積む1つの分岐点です。

    snapshot は分岐した瞬間の盤面のコピーで、以後書き換えません。
    戻ってくるたびに instance（何番目の候補位置を試すか）だけが増えます。
    """

    snapshot: np.ndarray
    value: int
    direction: str  # "row" or "column"
    line: int
    instance: int = 0


@dataclass
class SolveResult:
    """
    1回の solve の結果をまとめたクラスです。

    Attributes
    ----------
    status : str
        "solved" / "incomplete" / "unsolvable" のいずれか。
    grid : CandidateGrid
        探索終了時の盤面。
    stats : dict[str, int]
        forced_singles, branches, backtracks, max_depth, steps などの統計。
    """

    status: str
    grid: "CandidateGrid"
    stats: Dict[str, int] = field(default_factory=dict)

    @property
    def solved(self) -> bool:
        return self.status == STATUS_SOLVED
