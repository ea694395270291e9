import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from tictactoe import config

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_FILE = "tictactoe.log"

# loggers that are too chatty at INFO for a game polled by a browser
QUIET_LOGGERS = ("uvicorn.access",)


def setup_logging(level: Optional[str] = None, log_dir: Optional[str] = None) -> Path:
    """
    Configures the root logger for the game server and returns the log file path.

    `level` and `log_dir` default to LOG_LEVEL and LOG_DIR from config.
    """
    level = (level or config.LOG_LEVEL).upper()
    path = Path(log_dir or config.LOG_DIR)
    path.mkdir(parents=True, exist_ok=True)
    log_file = path / LOG_FILE

    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    root.setLevel(level)

    fmt = logging.Formatter(LOG_FORMAT)
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=config.LOG_MAX_MB * 1024 * 1024,
        backupCount=config.LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    stream_handler = logging.StreamHandler()
    for h in (file_handler, stream_handler):
        h.setFormatter(fmt)
        root.addHandler(h)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return log_file
