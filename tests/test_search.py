# tests/test_search.py
import threading

import pytest

from sudsol import solve, solve_grid
from sudsol.csp.search import BacktrackStack, SudokuSolver, mark, select_branch
from sudsol.errors import CapacityExceeded, SolveCancelled
from sudsol.eval.verify import check_solved, solution_string
from sudsol.grid.candidates import CandidateGrid, value_bit
from sudsol.grid.parser import load_rows
from sudsol.types import (
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
)


def _grid_with_single_position():
    # row 4: number 5 can only go to (4, 6)
    grid = CandidateGrid()
    for c in range(9):
        if c != 6:
            grid.cells[4, c] &= ~value_bit(5)
    return grid


# -------------------------------------------------------------------------
# selection
# -------------------------------------------------------------------------
def test_select_finds_forced_single():
    assert select_branch(_grid_with_single_position()) == Branch(
        count=1, value=5, direction=ROW, line=4
    )


def test_select_prefers_rows_on_ties():
    grid = CandidateGrid()
    for c in range(2, 9):
        grid.cells[2, c] &= ~value_bit(3)
    for r in range(2, 9):
        grid.cells[r, 7] &= ~value_bit(4)
    assert select_branch(grid) == Branch(count=2, value=3, direction=ROW, line=2)

    # a strictly smaller column count wins
    grid.cells[1, 7] &= ~value_bit(4)
    assert select_branch(grid) == Branch(count=1, value=4, direction=COLUMN, line=7)


def test_select_returns_none_when_nothing_is_left(easy_solution):
    assert select_branch(load_rows(easy_solution)) is None
    assert select_branch(CandidateGrid()) is None


def test_mark_reports_missing_instance():
    grid = CandidateGrid()
    assert mark(grid, 5, 9, ROW, 0) is False
    assert (grid.cells == grid.any_mask).all()
    assert mark(grid, 5, 2, COLUMN, 3) is True
    assert grid.value_at(2, 3) == 5


# -------------------------------------------------------------------------
# state machine
# -------------------------------------------------------------------------
def test_forced_single_is_assigned_without_a_frame():
    grid = _grid_with_single_position()
    solver = SudokuSolver(grid)

    assert solver.step() == STATE_SELECTING
    assert solver.step() == STATE_PROPAGATING
    assert grid.value_at(4, 6) == 5
    assert len(solver.stack) == 0
    assert solver.stats["forced_singles"] == 1


def test_backtracking_restores_snapshot_and_tries_next_instance():
    grid = CandidateGrid()
    solver = SudokuSolver(grid)
    frame = BacktrackFrame(snapshot=grid.snapshot(), value=5, direction=ROW, line=0)
    solver.stack.push(frame)
    grid.assign(0, 0, 5)  # first trial
    solver.state = STATE_BACKTRACKING

    assert solver.step() == STATE_COMMITTING
    assert (grid.cells == grid.any_mask).all()
    assert frame.instance == 1

    assert solver.step() == STATE_PROPAGATING
    assert grid.value_at(0, 1) == 5
    assert grid.value_at(0, 0) is None
    assert len(solver.stack) == 1


def test_exhausted_frame_is_popped_and_empty_stack_fails():
    grid = CandidateGrid()
    solver = SudokuSolver(grid)
    solver.stack.push(
        BacktrackFrame(snapshot=grid.snapshot(), value=5, direction=ROW, line=0, instance=8)
    )
    solver.state = STATE_BACKTRACKING

    assert solver.step() == STATE_COMMITTING
    assert solver.step() == STATE_BACKTRACKING
    assert len(solver.stack) == 0
    assert solver.step() == STATE_FAILED


def test_stack_capacity():
    stack = BacktrackStack(capacity=1)
    frame = BacktrackFrame(snapshot=CandidateGrid().snapshot(), value=1, direction=ROW, line=0)
    stack.push(frame)
    with pytest.raises(CapacityExceeded):
        stack.push(frame)

    unlimited = BacktrackStack(capacity=None)
    for _ in range(200):
        unlimited.push(frame)
    assert len(unlimited) == 200


def test_candidates_stay_in_domain_while_stepping(easy_puzzle):
    grid = load_rows(easy_puzzle)
    solver = SudokuSolver(grid)
    while solver.state not in (STATE_SOLVED, STATE_FAILED):
        state = solver.step()
        assert ((grid.cells & ~grid.any_mask) == 0).all()
        if state == STATE_SELECTING:
            assert (grid.cells != 0).all()
    assert solver.state == STATE_SOLVED


# -------------------------------------------------------------------------
# whole puzzles
# -------------------------------------------------------------------------
def test_single_missing_row_solves_without_branching(easy_solution):
    rows = list(easy_solution)
    rows[4] = "........."
    result = solve(rows)

    assert result.status == STATUS_SOLVED
    assert result.stats["branches"] == 0
    assert result.stats["max_depth"] == 0
    assert solution_string(result.grid) == "".join(easy_solution)


def test_presolved_input_is_solved_immediately(easy_solution):
    result = solve(easy_solution)
    assert result.solved
    assert result.stats["forced_singles"] == 0
    assert result.stats["branches"] == 0


def test_easy_puzzle(easy_puzzle, easy_solution):
    result = solve(easy_puzzle)
    assert result.solved
    assert solution_string(result.grid) == "".join(easy_solution)


def test_hard_puzzle_needs_branching(hard_puzzle, hard_solution):
    result = solve(hard_puzzle, capacity=None)

    assert result.status == STATUS_SOLVED
    assert result.stats["branches"] >= 1
    # a dead first trial was undone before reaching the solution
    assert result.stats["backtracks"] >= 1
    assert solution_string(result.grid) == "".join(hard_solution)
    assert check_solved(result.grid)


def test_capacity_exceeded_is_fatal(hard_puzzle):
    with pytest.raises(CapacityExceeded):
        solve(hard_puzzle, capacity=0)


def test_duplicate_digits_are_unsolvable(duplicate_row_puzzle):
    result = solve(duplicate_row_puzzle)
    assert result.status == STATUS_UNSOLVABLE
    assert not result.solved
    assert result.stats["branches"] == 0


def test_empty_board_is_reported_incomplete():
    result = solve(["........."] * 9)
    assert result.status == STATUS_INCOMPLETE
    assert not result.solved


def test_cancel_event_stops_the_search(easy_puzzle):
    event = threading.Event()
    event.set()
    with pytest.raises(SolveCancelled):
        solve(easy_puzzle, cancel_event=event)


def test_independent_solves_in_threads(easy_puzzle, easy_solution):
    results = {}

    def run(name, rows):
        results[name] = solve_grid(load_rows(rows), capacity=None)

    threads = [
        threading.Thread(target=run, args=("easy", easy_puzzle)),
        threading.Thread(target=run, args=("presolved", easy_solution)),
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert solution_string(results["easy"].grid) == "".join(easy_solution)
    assert solution_string(results["presolved"].grid) == "".join(easy_solution)


def test_small_grid():
    result = solve(["1.3.", "3..2", ".1..", "4..1"], block_rows=2, block_cols=2)
    assert result.solved
    assert solution_string(result.grid) == "1234341221434321"
