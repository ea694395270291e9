# tictactoe/ai.py
from __future__ import annotations

import random
from typing import Optional

from .engine import (
    CENTER, CORNERS, SIDES, EMPTY,
    apply_move, detect_winner, empty_indices, opponent,
)

_RNG = random.Random()


def find_winning_move(board: str, player: str) -> Optional[int]:
    for m in empty_indices(board):
        w = detect_winner(apply_move(board, m, player))
        if w is not None and w.player == player:
            return m
    return None


def find_blocking_move(board: str, player: str) -> Optional[int]:
    # клітинка, де суперник виграв би наступним ходом
    return find_winning_move(board, opponent(player))


def strategic_move(board: str, rng=None) -> Optional[int]:
    rng = rng or _RNG
    if board[CENTER] == EMPTY:
        return CENTER
    corners = [i for i in CORNERS if board[i] == EMPTY]
    if corners:
        return rng.choice(corners)
    sides = [i for i in SIDES if board[i] == EMPTY]
    if sides:
        return rng.choice(sides)
    return None


def choose_move(board: str, player: str, rng=None) -> Optional[int]:
    """
    Heuristic computer move: win > block > center > corner > side > first empty.

    Only one ply is examined, forks are not detected, so a careful
    opponent can beat it. `rng` needs a `.choice()`; pass a seeded
    random.Random for reproducible corner/side picks.
    """
    # 1) виграти якщо можна
    m = find_winning_move(board, player)
    if m is not None:
        return m
    # 2) заблокувати суперника
    m = find_blocking_move(board, player)
    if m is not None:
        return m
    # 3-5) центр, кут, сторона
    m = strategic_move(board, rng)
    if m is not None:
        return m
    # 6) будь-що
    moves = empty_indices(board)
    return moves[0] if moves else None
