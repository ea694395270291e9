import random

import pytest

from tictactoe.controller import GameController


class _Handle:
    def __init__(self, callback):
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class ManualScheduler:
    """call_later() stand-in; nothing fires until run_all()/run_all_including_cancelled()."""

    def __init__(self):
        self.handles = []
        self.delays = []

    def call_later(self, delay, callback):
        h = _Handle(callback)
        self.handles.append(h)
        self.delays.append(delay)
        return h

    @property
    def pending(self):
        return [h for h in self.handles if not h.cancelled]

    def run_all(self):
        while self.pending:
            h = self.pending[0]
            self.handles.remove(h)
            h.callback()

    def run_all_including_cancelled(self):
        # simulates a timer that could not be cancelled in time
        handles, self.handles = self.handles, []
        for h in handles:
            h.callback()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def make_game(scheduler):
    def _make(mode="pvp", human_symbol="X", seed=0):
        return GameController(
            mode=mode,
            human_symbol=human_symbol,
            rng=random.Random(seed),
            scheduler=scheduler,
            cpu_delay=0.22,
        )
    return _make
