# tictactoe/controller.py
from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from tictactoe import config
from tictactoe.ai import choose_move
from tictactoe.engine import (
    EMPTY, SYMBOLS, WinnerInfo,
    apply_move, current_player, detect_winner, is_draw, new_board, opponent,
)

log = logging.getLogger("tictactoe.controller")


class GameMode(str, Enum):
    PVP = "pvp"
    CPU = "cpu"


class GameStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    WON = "won"
    DRAW = "draw"


def _check_symbol(symbol: str) -> str:
    s = str(symbol).strip().upper()
    if s not in SYMBOLS:
        raise ValueError(f"symbol must be X or O, got {symbol!r}")
    return s


class GameController:
    """
    Owns one game: the board, the mode and which symbol the human plays.

    Winner, draw and whose turn it is are always recomputed from the board.
    In CPU mode the computer's reply is deferred through `scheduler`, any
    object with asyncio's `call_later(delay, callback)` signature. When no
    scheduler is given the running event loop is used; if none is
    running yet, the computer move is armed later by `start()`. Every
    board change bumps `generation`; a deferred move scheduled for an older generation
    does nothing when it fires.
    """

    def __init__(
        self,
        mode: GameMode | str = GameMode.PVP,
        human_symbol: str = "X",
        rng=None,
        scheduler=None,
        cpu_delay: float = config.CPU_MOVE_DELAY_SEC,
    ):
        self.mode = GameMode(mode)
        self.human_symbol = _check_symbol(human_symbol)
        self.rng = rng
        self.cpu_delay = cpu_delay
        self._scheduler = scheduler

        self.board: str = new_board()
        self.generation = 0
        self._pending: Optional[Tuple[int, Any]] = None  # (generation, handle)
        self._arm_on_start = False
        self._resolve_scheduler()

    # ---------- queries ----------
    @property
    def current_player(self) -> str:
        return current_player(self.board)

    @property
    def cpu_symbol(self) -> str:
        return opponent(self.human_symbol)

    @property
    def winner_info(self) -> Optional[WinnerInfo]:
        return detect_winner(self.board)

    @property
    def is_draw(self) -> bool:
        return is_draw(self.board)

    @property
    def status(self) -> GameStatus:
        if self.winner_info is not None:
            return GameStatus.WON
        if self.is_draw:
            return GameStatus.DRAW
        return GameStatus.IN_PROGRESS

    @property
    def is_cpu_turn(self) -> bool:
        return (
            self.mode is GameMode.CPU
            and self.status is GameStatus.IN_PROGRESS
            and self.current_player == self.cpu_symbol
        )

    @property
    def can_interact(self) -> bool:
        return self.status is GameStatus.IN_PROGRESS and not self.is_cpu_turn

    @property
    def has_pending_cpu_move(self) -> bool:
        return self._pending is not None

    @property
    def awaiting_start(self) -> bool:
        return self._arm_on_start and self._pending is None

    @property
    def winning_cells(self) -> List[int]:
        w = self.winner_info
        return list(w.line) if w else []

    @property
    def status_text(self) -> str:
        w = self.winner_info
        if w:
            return f"Winner: {w.player}"
        if self.is_draw:
            return "It's a draw"
        return f"Turn: {self.current_player}"

    def snapshot(self) -> Dict[str, Any]:
        w = self.winner_info
        cells = self.winning_cells
        return {
            "board": [None if c == EMPTY else c for c in self.board],
            "current_player": self.current_player,
            "mode": self.mode.value,
            "human_symbol": self.human_symbol,
            "cpu_symbol": self.cpu_symbol,
            "status": self.status.value,
            "status_text": self.status_text,
            "winner": w.player if w else None,
            "winning_line": cells or None,
            "is_draw": self.is_draw,
            "can_interact": self.can_interact,
            "cpu_thinking": self.is_cpu_turn,
        }

    # ---------- commands ----------
    def play_at(self, index: int) -> bool:
        if not 0 <= index <= 8:
            log.debug("play_at ignored: index out of range index=%s", index)
            return False
        if self.status is not GameStatus.IN_PROGRESS:
            log.debug("play_at ignored: game over index=%s status=%s", index, self.status.value)
            return False
        if self.is_cpu_turn:
            log.debug("play_at ignored: computer's turn index=%s", index)
            return False
        if self.board[index] != EMPTY:
            log.debug("play_at ignored: cell taken index=%s", index)
            return False

        self._apply(index, self.current_player)
        return True

    def reset(self) -> None:
        self._clear()
        self._maybe_schedule_cpu()

    def set_mode(self, mode: GameMode | str) -> None:
        mode = GameMode(mode)
        self._clear()
        self.mode = mode
        log.info("mode set mode=%s", mode.value)
        self._maybe_schedule_cpu()

    def set_human_symbol(self, symbol: str) -> None:
        symbol = _check_symbol(symbol)
        self._clear()
        self.human_symbol = symbol
        log.info("human symbol set human=%s cpu=%s", symbol, self.cpu_symbol)
        # human picked O -> computer opens as X
        self._maybe_schedule_cpu()

    def start(self) -> None:
        """
        Arms a computer move that could not be scheduled yet: its opening
        move as X, or a reply to a move made before any loop was running.
        Call once an event loop is running.
        """
        self._maybe_schedule_cpu()

    # ---------- internals ----------
    def _clear(self) -> None:
        self._cancel_pending()
        self._arm_on_start = False
        self.board = new_board()
        self.generation += 1
        log.info("game reset generation=%s", self.generation)

    def _apply(self, index: int, mark: str) -> None:
        self.board = apply_move(self.board, index, mark)
        self.generation += 1
        log.debug("move mark=%s index=%s board=%s", mark, index, self.board)

        status = self.status
        if status is GameStatus.WON:
            w = self.winner_info
            log.info("game won player=%s line=%s", w.player, w.line)
        elif status is GameStatus.DRAW:
            log.info("game drawn")
        else:
            self._maybe_schedule_cpu()

    def _resolve_scheduler(self):
        if self._scheduler is None:
            try:
                self._scheduler = asyncio.get_running_loop()
            except RuntimeError:
                return None
        return self._scheduler

    def _maybe_schedule_cpu(self) -> None:
        if not self.is_cpu_turn or self._pending is not None:
            return
        scheduler = self._resolve_scheduler()
        if scheduler is None:
            # no loop yet; start() arms the reply
            self._arm_on_start = True
            log.debug("computer move waits for start() generation=%s", self.generation)
            return
        self._arm_on_start = False
        generation = self.generation
        handle = scheduler.call_later(self.cpu_delay, lambda: self._cpu_move(generation))
        self._pending = (generation, handle)

    def _cancel_pending(self) -> None:
        if self._pending is None:
            return
        _gen, handle = self._pending
        self._pending = None
        handle.cancel()

    def _cpu_move(self, generation: int) -> None:
        if self._pending is not None and self._pending[0] == generation:
            self._pending = None

        if generation != self.generation:
            log.debug("stale computer move ignored scheduled=%s current=%s", generation, self.generation)
            return
        if not self.is_cpu_turn:
            return

        idx = choose_move(self.board, self.cpu_symbol, self.rng)
        if idx is None or self.board[idx] != EMPTY:
            return
        log.debug("computer plays mark=%s index=%s", self.cpu_symbol, idx)
        self._apply(idx, self.cpu_symbol)
