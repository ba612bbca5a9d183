# -*- coding: utf-8 -*-
"""
制約伝播だけでは決まらない盤面を、探索（＋バックトラック）で解くモジュールです。

ざっくり流れ
------------
1. propagating : 制約伝播と穴埋めを不動点まで回す
2. selecting   : 「ある行（列）で、ある値を置けるマスが最も少ない」組を探す
   - 1マスしかない → その場で確定（スタックは使わない）
   - どこにも N 未満の組がない → 解けた（solved）
   - 2マス以上 → 盤面のスナップショットをスタックに積み、committing へ
3. committing  : スタック先頭のフレームの instance 番目の候補位置に値を置く
4. backtracking: 矛盾が出たら先頭フレームの盤面に戻し、instance を1つ進める
   - 候補位置を使い切ったらフレームを捨て、1つ前の分岐をやり直す
   - スタックが空なら、初期状態から解けない（failed）

再帰は使わず、状態を文字列で持って while ループで回します。
盤面とスタックは SudokuSolver のインスタンスが持つので、
別スレッドで別の SudokuSolver を同時に動かしても干渉しません。
"""

from __future__ import annotations

import threading
from typing import Dict, List, Optional

import numpy as np

from ..config import MAX_BACKLOG
from ..errors import CapacityExceeded, Contradiction, SolveCancelled
from ..eval.verify import check_solved
from ..grid.candidates import CandidateGrid, solid_mask_array
from ..logging_utils import get_logger
from ..types import (
    COLUMN,
    ROW,
    STATE_BACKTRACKING,
    STATE_COMMITTING,
    STATE_FAILED,
    STATE_PROPAGATING,
    STATE_SELECTING,
    STATE_SOLVED,
    STATUS_INCOMPLETE,
    STATUS_SOLVED,
    STATUS_UNSOLVABLE,
    BacktrackFrame,
    Branch,
    SolveResult,
)
from .completion import settle

logger = get_logger()


class BacktrackStack:
    """
    分岐点（BacktrackFrame）を積むスタックです。

    capacity を超えて push しようとすると CapacityExceeded を送出します。
    capacity=None なら上限なしです。
    """

    def __init__(self, capacity: Optional[int] = MAX_BACKLOG):
        self.capacity = capacity
        self._frames: List[BacktrackFrame] = []

    def push(self, frame: BacktrackFrame) -> None:
        if self.capacity is not None and len(self._frames) >= self.capacity:
            raise CapacityExceeded(self.capacity)
        self._frames.append(frame)

    def pop(self) -> BacktrackFrame:
        return self._frames.pop()

    def top(self) -> BacktrackFrame:
        return self._frames[-1]

    def __len__(self) -> int:
        return len(self._frames)

    def __bool__(self) -> bool:
        return bool(self._frames)


def _first_minimum(counts: np.ndarray, size: int) -> Optional[tuple]:
    """
    counts[line, value-1] を (line, value) の順に走査したときの
    「最初に現れる最小の正の値」を返します。size 以上しかなければ None。
    """
    masked = np.where(counts > 0, counts, size)
    idx = int(np.argmin(masked))
    line, vidx = divmod(idx, counts.shape[1])
    count = int(masked[line, vidx])
    if count >= size:
        return None
    return count, line, vidx + 1


def select_branch(grid: CandidateGrid) -> Optional[Branch]:
    """
    MRV（Minimum Remaining Values）で次に決める「行/列 × 値」を選びます。

    - まず全行について、値ごとに「その値を候補に持つ未確定マスの数」を数え、
      最小の正の数とその (行, 値) を記録する（行 → 値 の順に走査し、最初のもの）。
    - 次に全列について同じことを行い、行の最小値より「真に小さい」ときだけ置き換える。
      （同数なら行を優先）
    - N 未満の組が1つもなければ None（もう消せるものがない＝解けた）。
    """
    size = grid.size
    cells = grid.cells
    open_ = ~solid_mask_array(cells)
    bits = np.array([1 << v for v in range(1, size + 1)], dtype=np.int64)

    # has[r, c, v-1] : マス (r, c) が未確定で、値 v を候補に持つか
    has = open_[:, :, None] & ((cells[:, :, None] & bits) != 0)

    best = _first_minimum(has.sum(axis=1), size)
    direction = ROW

    by_col = _first_minimum(has.sum(axis=0), size)
    if by_col is not None and (best is None or by_col[0] < best[0]):
        best = by_col
        direction = COLUMN

    if best is None:
        return None
    count, line, value = best
    return Branch(count=count, value=value, direction=direction, line=line)


def mark(grid: CandidateGrid, value: int, instance: int, direction: str, line: int) -> bool:
    """
    行（列）line の中で value を置ける instance 番目のマスに value を置き、
    制約伝播と穴埋めを不動点まで回します。

    Returns
    -------
    bool
        置けたら True、instance 番目の候補位置がなければ False。

    Raises
    ------
    Contradiction
        置いた結果、矛盾が出たとき。
    """
    coord = grid.locate(value, direction, line, instance)
    if coord is None:
        return False
    grid.assign(coord[0], coord[1], value)
    settle(grid)
    return True


class SudokuSolver:
    """
    探索エンジン本体です。

    Parameters
    ----------
    grid : CandidateGrid
        初期盤面。solve 中はこのインスタンスが書き換えます。
    capacity : int or None
        バックトラック用スタックの上限。None なら上限なし。
    cancel_event : threading.Event, optional
        セットされると、次の propagating の先頭で SolveCancelled を送出します。
    """

    def __init__(
        self,
        grid: CandidateGrid,
        capacity: Optional[int] = MAX_BACKLOG,
        cancel_event: Optional[threading.Event] = None,
    ):
        self.grid = grid
        self.stack = BacktrackStack(capacity)
        self.cancel_event = cancel_event
        self.state = STATE_PROPAGATING
        self.stats: Dict[str, int] = {
            "steps": 0,
            "forced_singles": 0,
            "branches": 0,
            "backtracks": 0,
            "max_depth": 0,
        }

    # -------------------------------------------------------------------------
    # Main solving driver
    # -------------------------------------------------------------------------
    def run(self) -> SolveResult:
        """solved か failed になるまで step() を回し、結果を返します。"""
        while self.state not in (STATE_SOLVED, STATE_FAILED):
            self.step()

        if self.state == STATE_FAILED:
            status = STATUS_UNSOLVABLE
            logger.error("Unsolvable puzzle: backtracking exhausted at the root.")
        elif check_solved(self.grid):
            status = STATUS_SOLVED
        else:
            status = STATUS_INCOMPLETE
            logger.warning(
                "Search finished but the grid is not a valid solution (incomplete)."
            )

        logger.info(
            "Search done: status=%s, steps=%d, forced=%d, branches=%d, backtracks=%d, max_depth=%d",
            status,
            self.stats["steps"],
            self.stats["forced_singles"],
            self.stats["branches"],
            self.stats["backtracks"],
            self.stats["max_depth"],
        )
        return SolveResult(status=status, grid=self.grid, stats=dict(self.stats))

    def step(self) -> str:
        """状態を1つ進め、新しい状態を返します。"""
        self.stats["steps"] += 1

        if self.state == STATE_PROPAGATING:
            self.state = self._propagating()
        elif self.state == STATE_SELECTING:
            self.state = self._selecting()
        elif self.state == STATE_COMMITTING:
            self.state = self._committing()
        elif self.state == STATE_BACKTRACKING:
            self.state = self._backtracking()

        return self.state

    # -------------------------------------------------------------------------
    # States
    # -------------------------------------------------------------------------
    def _propagating(self) -> str:
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise SolveCancelled("solve cancelled")
        try:
            settle(self.grid)
        except Contradiction as e:
            logger.debug("Contradiction while propagating: %s", e)
            return STATE_BACKTRACKING
        return STATE_SELECTING

    def _selecting(self) -> str:
        branch = select_branch(self.grid)
        if branch is None:
            return STATE_SOLVED

        if branch.count == 1:
            # 1マスしか置けないので、分岐せずにそのまま確定させる
            r, c = self.grid.locate(branch.value, branch.direction, branch.line)
            logger.debug("Forced single: (%d,%d)=%d", r, c, branch.value)
            self.stats["forced_singles"] += 1
            self.grid.assign(r, c, branch.value)
            try:
                settle(self.grid)
            except Contradiction as e:
                logger.debug("Contradiction after forced single: %s", e)
                return STATE_BACKTRACKING
            return STATE_PROPAGATING

        frame = BacktrackFrame(
            snapshot=self.grid.snapshot(),
            value=branch.value,
            direction=branch.direction,
            line=branch.line,
        )
        self.stack.push(frame)
        self.stats["branches"] += 1
        self.stats["max_depth"] = max(self.stats["max_depth"], len(self.stack))
        logger.debug(
            "Branch #%d: %s %d, number %d, %d candidates (depth=%d)",
            self.stats["branches"],
            branch.direction,
            branch.line,
            branch.value,
            branch.count,
            len(self.stack),
        )
        return STATE_COMMITTING

    def _committing(self) -> str:
        frame = self.stack.top()
        try:
            placed = mark(self.grid, frame.value, frame.instance, frame.direction, frame.line)
        except Contradiction as e:
            logger.debug(
                "Trial %d of number %d in %s %d failed: %s",
                frame.instance, frame.value, frame.direction, frame.line, e,
            )
            return STATE_BACKTRACKING

        if not placed:
            # この分岐の候補位置を使い切った → 1つ前の分岐をやり直す
            self.stack.pop()
            logger.debug("Branch exhausted, depth=%d", len(self.stack))
        return STATE_PROPAGATING if placed else STATE_BACKTRACKING

    def _backtracking(self) -> str:
        if not self.stack:
            return STATE_FAILED

        frame = self.stack.top()
        self.grid.restore(frame.snapshot)
        frame.instance += 1
        self.stats["backtracks"] += 1
        return STATE_COMMITTING
