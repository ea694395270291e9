# tictactoe/main.py
from __future__ import annotations

import asyncio
import logging

import uvicorn

from tictactoe import config
from tictactoe.logging_setup import setup_logging
from tictactoe.web import create_app


async def _run_web_server(log: logging.Logger) -> None:
    """Serve the renderer bridge; restart it if it crashes."""
    host = (config.WEB_HOST or "127.0.0.1").strip()
    port = int(config.WEB_PORT or 8080)

    while True:
        try:
            app = create_app()
            uv_cfg = uvicorn.Config(app=app, host=host, port=port, log_level="info", reload=False)
            server = uvicorn.Server(uv_cfg)
            log.info("Web server: http://%s:%s", host, port)
            await server.serve()
            if server.should_exit:
                log.info("Web server stopped")
                return
            log.warning("Web server stopped; restarting in 3s")
            await asyncio.sleep(3)
        except asyncio.CancelledError:
            raise
        except Exception:
            log.exception("Web server crashed; restarting in 5s")
            await asyncio.sleep(5)


async def main() -> None:
    setup_logging()
    log = logging.getLogger("tictactoe")
    log.info("Starting Tic Tac Toe")
    log.info(
        "Config: DEFAULT_MODE=%s DEFAULT_HUMAN_SYMBOL=%s CPU_MOVE_DELAY_MS=%s RNG_SEED=%s",
        config.DEFAULT_MODE,
        config.DEFAULT_HUMAN_SYMBOL,
        config.CPU_MOVE_DELAY_MS,
        "set" if config.RNG_SEED is not None else "unset",
    )
    await _run_web_server(log)


if __name__ == "__main__":
    asyncio.run(main())
