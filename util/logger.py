# util/logger.py
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import List
from config.settings import settings

logging.captureWarnings(True)

_INIT_FLAG = "_public_monster_inited"
_TEXT_FMT = "%(asctime)s %(levelname)s %(name)s - %(message)s"
_DATE_FMT = "%Y-%m-%dT%H:%M:%S%z"
MASK = "***"


class ColoredFormatter(logging.Formatter):
    COLORS = {
        "DEBUG": "\033[37m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[41m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        lvl = record.levelname
        record.levelname = f"{self.COLORS.get(lvl, self.RESET)}{lvl}{self.RESET}"
        try:
            return super().format(record)
        finally:
            # The same record also reaches the file handler
            record.levelname = lvl


class SecretsFilter(logging.Filter):
    """
    Masks backend credentials in rendered messages. Storage keys and identity
    URLs are logged freely; the storage AccessKey must never be.
    """

    def __init__(self, secrets: List[str]) -> None:
        super().__init__()
        self._secrets = [s for s in secrets if s]

    def filter(self, record: logging.LogRecord) -> bool:
        if not self._secrets:
            return True
        msg = record.getMessage()
        masked = msg
        for s in self._secrets:
            masked = masked.replace(s, MASK)
        if masked != msg:
            record.msg, record.args = masked, None
        return True


def _console_handler(level: int) -> logging.Handler:
    ch = logging.StreamHandler(sys.stdout)
    ch.setLevel(level)
    ch.setFormatter(ColoredFormatter(_TEXT_FMT, datefmt=_DATE_FMT))
    return ch


def _file_handler(level: int) -> logging.Handler:
    os.makedirs(settings.LOG_DIR, exist_ok=True)
    fh = RotatingFileHandler(
        os.path.join(settings.LOG_DIR, settings.LOG_FILE_NAME),
        maxBytes=settings.LOG_MAX_BYTES,
        backupCount=settings.LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    fh.setLevel(level)
    fh.setFormatter(logging.Formatter(_TEXT_FMT, datefmt=_DATE_FMT))
    return fh


def init_logger() -> logging.Logger:
    """
    Idempotent logger init:
    - stdout always (coloured levels), LOG_DIR/LOG_FILE_NAME when LOG_TO_FILE;
    - the storage AccessKey is masked on every handler;
    - httpx per-request lines stay below INFO, every storage call goes through it.
    """
    root = logging.getLogger()
    if getattr(root, _INIT_FLAG, False):
        return logging.getLogger(settings.LOGGER_NAME)

    level = getattr(logging, (settings.LOG_LEVEL or "INFO").upper(), logging.INFO)
    root.setLevel(level)
    for h in list(root.handlers):
        root.removeHandler(h)

    handlers = [_console_handler(level)]
    if settings.LOG_TO_FILE:
        handlers.append(_file_handler(level))

    secrets = SecretsFilter([settings.BUNNY_API_KEY])
    for h in handlers:
        h.addFilter(secrets)
        root.addHandler(h)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.INFO)

    setattr(root, _INIT_FLAG, True)
    logger = logging.getLogger(settings.LOGGER_NAME)
    logger.debug("logger.init level=%s file=%s", settings.LOG_LEVEL, settings.LOG_TO_FILE)
    return logger
