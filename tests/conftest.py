# tests/conftest.py
import sys
from pathlib import Path

import pytest

# Add project root to sys.path so "sudsol" and "api_proto" can be imported in tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture
def easy_puzzle():
    return [
        "53..7....",
        "6..195...",
        ".98....6.",
        "8...6...3",
        "4..8.3..1",
        "7...2...6",
        ".6....28.",
        "...419..5",
        "....8..79",
    ]


@pytest.fixture
def easy_solution():
    return [
        "534678912",
        "672195348",
        "198342567",
        "859761423",
        "426853791",
        "713924856",
        "961537284",
        "287419635",
        "345286179",
    ]


@pytest.fixture
def hard_puzzle():
    # Needs branching: rows/columns never expose enough forced singles on their own.
    return [
        "8........",
        "..36.....",
        ".7..9.2..",
        ".5...7...",
        "....457..",
        "...1...3.",
        "..1....68",
        "..85...1.",
        ".9....4..",
    ]


@pytest.fixture
def hard_solution():
    return [
        "812753649",
        "943682175",
        "675491283",
        "154237896",
        "369845721",
        "287169534",
        "521974368",
        "438526917",
        "796318452",
    ]


@pytest.fixture
def duplicate_row_puzzle():
    return [
        "55.......",
        ".........",
        ".........",
        ".........",
        ".........",
        ".........",
        ".........",
        ".........",
        ".........",
    ]
