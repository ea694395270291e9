from __future__ import annotations

import argparse
import json
import sys
import time
import urllib.request
from pathlib import Path

from dotenv import load_dotenv


def _call(url: str, method: str = "GET", body: dict | None = None) -> tuple[int, dict]:
    data = json.dumps(body).encode("utf-8") if body is not None else None
    req = urllib.request.Request(url, data=data, method=method)
    if data is not None:
        req.add_header("Content-Type", "application/json")
    with urllib.request.urlopen(req, timeout=20) as resp:
        return resp.status, json.loads(resp.read().decode("utf-8"))


def _wait_for_cpu(base: str, timeout: float = 5.0) -> dict:
    deadline = time.time() + timeout
    while True:
        _, st = _call(f"{base}/state")
        if not st["cpu_thinking"]:
            return st
        assert time.time() < deadline, "Computer did not move in time"
        time.sleep(0.05)


def run(base: str) -> None:
    status, st = _call(f"{base}/healthz")
    assert status == 200 and st.get("ok"), f"/healthz failed: {status} {st}"

    # PvP: X takes the top row
    _call(f"{base}/mode", "POST", {"mode": "pvp"})
    for idx in (0, 3, 1, 4, 2):
        _, st = _call(f"{base}/play/{idx}", "POST")
        assert st["accepted"], f"Move {idx} rejected: {st}"
    assert st["status"] == "won" and st["winner"] == "X", f"Expected X win: {st}"
    assert st["winning_line"] == [0, 1, 2], f"Wrong winning line: {st}"

    # Finished game rejects further moves.
    _, after = _call(f"{base}/play/5", "POST")
    assert not after["accepted"], "Move accepted after game over"
    assert after["board"] == st["board"], "Board changed after game over"

    _, st = _call(f"{base}/reset", "POST")
    assert st["board"] == [None] * 9 and st["current_player"] == "X", f"Reset failed: {st}"

    # CPU: center reply, then block on 2
    _call(f"{base}/mode", "POST", {"mode": "cpu"})
    _call(f"{base}/symbol", "POST", {"symbol": "X"})
    _call(f"{base}/play/0", "POST")
    st = _wait_for_cpu(base)
    assert st["board"][4] == "O", f"Computer did not take center: {st}"
    _call(f"{base}/play/1", "POST")
    st = _wait_for_cpu(base)
    assert st["board"][2] == "O", f"Computer did not block: {st}"

    # Human as O: computer opens.
    _call(f"{base}/symbol", "POST", {"symbol": "O"})
    st = _wait_for_cpu(base)
    assert st["board"].count("X") == 1, f"Computer did not open: {st}"

    _call(f"{base}/mode", "POST", {"mode": "pvp"})
    print("OK pvp_win=True")
    print("OK cpu_center_then_block=True")
    print("OK cpu_opens_as_x=True")


def main() -> None:
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))
    load_dotenv(root / ".env")

    from tictactoe import config

    parser = argparse.ArgumentParser(description="Play a few scripted games against a running Tic Tac Toe server.")
    parser.add_argument("--base-url", default=f"http://127.0.0.1:{config.WEB_PORT}", help="Server base URL")
    args = parser.parse_args()
    run(args.base_url.rstrip("/"))


if __name__ == "__main__":
    main()
