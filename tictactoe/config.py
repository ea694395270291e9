# tictactoe/config.py
import os
from pathlib import Path

from dotenv import dotenv_values

_ENV_PATH = Path(__file__).resolve().parent.parent / ".env"

_ENV_FILE_VALUES = {k: v for k, v in dotenv_values(_ENV_PATH).items() if v is not None} if _ENV_PATH.exists() else {}


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    if v is not None and str(v).strip() != "":
        return str(v)
    return _ENV_FILE_VALUES.get(name, default)


def _env_int(name: str, default: int) -> int:
    raw = _env(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}")


# ================== GAME ==================
# затримка перед ходом комп'ютера, щоб хід людини встиг відобразитись
CPU_MOVE_DELAY_MS = _env_int("CPU_MOVE_DELAY_MS", 220)
CPU_MOVE_DELAY_SEC = max(CPU_MOVE_DELAY_MS, 0) / 1000.0

DEFAULT_MODE = _env("DEFAULT_MODE", "pvp").strip().lower()
DEFAULT_HUMAN_SYMBOL = _env("DEFAULT_HUMAN_SYMBOL", "X").strip().upper()

# None = unseeded, corner/side choices differ between runs
_seed_raw = _env("RNG_SEED", "").strip()
RNG_SEED = int(_seed_raw) if _seed_raw else None

# ================== WEB ==================
WEB_HOST = _env("WEB_HOST", "127.0.0.1")
WEB_PORT = int(_env("PORT", _env("WEB_PORT", "8080")))

# ================== LOGGING ==================
LOG_LEVEL = (_env("LOG_LEVEL", "INFO") or "INFO").upper()
LOG_DIR = _env("LOG_DIR", "logs")
LOG_MAX_MB = _env_int("LOG_MAX_MB", 10)
LOG_BACKUP_COUNT = _env_int("LOG_BACKUP_COUNT", 5)
