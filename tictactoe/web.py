import logging
import random
from contextlib import asynccontextmanager
from typing import Literal, Optional

from fastapi import FastAPI, Path
from pydantic import BaseModel

from tictactoe import config
from tictactoe.controller import GameController, GameMode

log = logging.getLogger("tictactoe.web")


class ModeIn(BaseModel):
    mode: GameMode


class SymbolIn(BaseModel):
    symbol: Literal["X", "O"]


def default_controller() -> GameController:
    rng = random.Random(config.RNG_SEED) if config.RNG_SEED is not None else None
    return GameController(
        mode=config.DEFAULT_MODE,
        human_symbol=config.DEFAULT_HUMAN_SYMBOL,
        rng=rng,
    )


def create_app(controller: Optional[GameController] = None) -> FastAPI:
    game = controller or default_controller()

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        # needs the running loop when the computer opens as X
        game.start()
        log.info("game ready mode=%s human=%s", game.mode.value, game.human_symbol)
        yield

    app = FastAPI(lifespan=lifespan)
    app.state.game = game

    @app.get("/healthz")
    async def healthz():
        return {"ok": True}

    @app.get("/state")
    async def state():
        return game.snapshot()

    @app.post("/play/{index}")
    async def play(index: int = Path(..., ge=0, le=8)):
        accepted = game.play_at(index)
        if not accepted:
            log.debug("play rejected index=%s status=%s", index, game.status.value)
        return {"accepted": accepted, **game.snapshot()}

    @app.post("/reset")
    async def reset():
        game.reset()
        return game.snapshot()

    @app.post("/mode")
    async def set_mode(body: ModeIn):
        game.set_mode(body.mode)
        return game.snapshot()

    @app.post("/symbol")
    async def set_symbol(body: SymbolIn):
        game.set_human_symbol(body.symbol)
        return game.snapshot()

    return app
