import pytest

from tictactoe.controller import GameController, GameMode, GameStatus


def _play(game, *cells):
    for c in cells:
        assert game.play_at(c), f"move {c} rejected"


def test_initial_state(make_game):
    g = make_game()
    assert g.board == "." * 9
    assert g.status is GameStatus.IN_PROGRESS
    assert g.current_player == "X"
    assert g.status_text == "Turn: X"
    assert g.can_interact


def test_pvp_turns_alternate(make_game):
    g = make_game()
    _play(g, 0)
    assert g.board[0] == "X"
    assert g.current_player == "O"
    _play(g, 4)
    assert g.board[4] == "O"
    assert g.status_text == "Turn: X"


def test_pvp_win(make_game):
    g = make_game()
    _play(g, 0, 3, 1, 4, 2)
    assert g.status is GameStatus.WON
    assert g.winner_info.player == "X"
    assert g.winning_cells == [0, 1, 2]
    assert g.snapshot()["winning_line"] == [0, 1, 2]
    assert g.status_text == "Winner: X"
    assert not g.can_interact


def test_pvp_draw(make_game):
    g = make_game()
    _play(g, 0, 1, 2, 4, 3, 5, 7, 6, 8)
    assert g.board == "XOXXOOOXX"
    assert g.status is GameStatus.DRAW
    assert g.is_draw
    assert g.status_text == "It's a draw"


def test_occupied_cell_rejected_repeatedly(make_game):
    g = make_game()
    _play(g, 4)
    before = g.snapshot()
    for _ in range(3):
        assert not g.play_at(4)
    assert g.snapshot() == before


@pytest.mark.parametrize("index", [-1, 9, 100])
def test_out_of_range_rejected(make_game, index):
    g = make_game()
    assert not g.play_at(index)
    assert g.board == "." * 9


def test_moves_rejected_after_win(make_game):
    g = make_game()
    _play(g, 0, 3, 1, 4, 2)
    board = g.board
    for idx in (5, 6, 7, 8):
        assert not g.play_at(idx)
    assert g.board == board


def test_reset_from_any_state(make_game):
    g = make_game()
    _play(g, 0, 3, 1, 4, 2)
    g.reset()
    assert g.board == "." * 9
    assert g.status is GameStatus.IN_PROGRESS
    assert g.current_player == "X"
    g.reset()
    assert g.board == "." * 9


def test_cpu_replies_after_delay(make_game, scheduler):
    g = make_game(mode="cpu", human_symbol="X")
    _play(g, 0)
    assert g.is_cpu_turn
    assert not g.can_interact
    assert g.board.count("O") == 0
    assert scheduler.delays == [0.22]

    scheduler.run_all()
    assert g.board[4] == "O"
    assert g.can_interact


def test_cpu_blocks_end_to_end(make_game, scheduler):
    g = make_game(mode="cpu", human_symbol="X")
    _play(g, 0)
    scheduler.run_all()
    _play(g, 1)
    scheduler.run_all()
    assert g.board[2] == "O"
    assert g.current_player == "X"


def test_human_cannot_move_on_cpu_turn(make_game, scheduler):
    g = make_game(mode="cpu", human_symbol="X")
    _play(g, 0)
    assert not g.play_at(8)
    assert g.board == "X........"


def test_cpu_takes_win(make_game, scheduler):
    g = make_game(mode="cpu", human_symbol="X")
    _play(g, 0)
    scheduler.run_all()  # O center
    _play(g, 8)
    scheduler.run_all()  # O corner
    corner = [i for i in (2, 6) if g.board[i] == "O"]
    assert corner
    # X must block the anti-diagonal or lose it
    other = 6 if corner[0] == 2 else 2
    _play(g, 1 if other == 6 else 3)
    scheduler.run_all()
    assert g.status is GameStatus.WON
    assert g.winner_info.player == "O"
    assert g.winner_info.line == (2, 4, 6)


def test_symbol_o_lets_cpu_open(make_game, scheduler):
    g = make_game(mode="cpu", human_symbol="X")
    g.set_human_symbol("O")
    assert g.cpu_symbol == "X"
    assert g.is_cpu_turn
    scheduler.run_all()
    assert g.board == "....X...."
    assert g.can_interact


def test_start_arms_opening_move(make_game, scheduler):
    g = make_game(mode="cpu", human_symbol="O")
    assert scheduler.pending == []
    g.start()
    g.start()
    assert len(scheduler.pending) == 1
    scheduler.run_all()
    assert g.board.count("X") == 1


def test_reset_cancels_pending_cpu_move(make_game, scheduler):
    g = make_game(mode="cpu", human_symbol="X")
    _play(g, 0)
    assert g.has_pending_cpu_move
    g.reset()
    assert not g.has_pending_cpu_move
    assert scheduler.pending == []
    assert g.board == "." * 9


def test_stale_cpu_move_is_noop(make_game, scheduler):
    g = make_game(mode="cpu", human_symbol="X")
    _play(g, 0)
    g.reset()
    _play(g, 8)
    # old timer fires even though it was cancelled
    scheduler.run_all_including_cancelled()
    assert g.board.count("O") == 1
    assert g.board[8] == "X"


def test_stale_cpu_move_after_mode_change(make_game, scheduler):
    g = make_game(mode="cpu", human_symbol="X")
    _play(g, 0)
    g.set_mode(GameMode.PVP)
    scheduler.run_all_including_cancelled()
    assert g.board == "." * 9
    assert g.mode is GameMode.PVP


def test_set_mode_resets(make_game):
    g = make_game()
    _play(g, 0, 1)
    g.set_mode("cpu")
    assert g.mode is GameMode.CPU
    assert g.board == "." * 9


def test_pvp_never_schedules(make_game, scheduler):
    g = make_game(mode="pvp", human_symbol="O")
    g.start()
    _play(g, 0, 1, 2)
    assert scheduler.handles == []


def test_invalid_mode_and_symbol(make_game):
    g = make_game()
    with pytest.raises(ValueError):
        g.set_mode("online")
    with pytest.raises(ValueError):
        g.set_human_symbol("Z")
    with pytest.raises(ValueError):
        GameController(human_symbol="Q")


def test_cpu_game_always_finishes(make_game, scheduler):
    g = make_game(mode="cpu", human_symbol="X", seed=3)
    while g.status is GameStatus.IN_PROGRESS:
        if g.can_interact:
            _play(g, g.board.index("."))
        scheduler.run_all()
    assert g.status in (GameStatus.WON, GameStatus.DRAW)
    assert not g.has_pending_cpu_move


def test_snapshot(make_game):
    g = make_game(mode="cpu", human_symbol="O")
    snap = g.snapshot()
    assert snap["board"] == [None] * 9
    assert snap["mode"] == "cpu"
    assert snap["human_symbol"] == "O"
    assert snap["cpu_symbol"] == "X"
    assert snap["status"] == "in_progress"
    assert snap["winner"] is None
    assert snap["winning_line"] is None
    assert snap["cpu_thinking"] is True
    assert snap["can_interact"] is False
