# tictactoe/engine.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

EMPTY = "."
X = "X"
O = "O"
SYMBOLS = (X, O)

WIN_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)

CENTER = 4
CORNERS = (0, 2, 6, 8)
SIDES = (1, 3, 5, 7)


@dataclass(frozen=True)
class WinnerInfo:
    player: str  # "X" або "O"
    line: Tuple[int, int, int]


def new_board() -> str:
    return EMPTY * 9


def opponent(mark: str) -> str:
    return O if mark == X else X


def detect_winner(board: str) -> Optional[WinnerInfo]:
    """
    Returns the first complete line in WIN_LINES order, or None.
    """
    for a, b, c in WIN_LINES:
        if board[a] != EMPTY and board[a] == board[b] == board[c]:
            return WinnerInfo(board[a], (a, b, c))
    return None


def is_draw(board: str) -> bool:
    return detect_winner(board) is None and EMPTY not in board


def empty_indices(board: str) -> List[int]:
    return [i for i, ch in enumerate(board) if ch == EMPTY]


def current_player(board: str) -> str:
    # X ходить першим, тож черга виводиться з кількості знаків
    return X if board.count(X) == board.count(O) else O


def apply_move(board: str, cell: int, mark: str) -> str:
    if cell < 0 or cell > 8:
        raise ValueError("cell out of range")
    if board[cell] != EMPTY:
        raise ValueError("cell already taken")
    if mark not in SYMBOLS:
        raise ValueError(f"unknown mark {mark!r}")
    return board[:cell] + mark + board[cell+1:]
