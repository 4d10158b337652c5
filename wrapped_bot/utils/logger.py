import logging
import sys
from datetime import datetime
from pathlib import Path

from wrapped_bot.config import Config

PACKAGE_LOGGER = 'wrapped_bot'

_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def log_level() -> int:
    """Level from LOG_LEVEL, falling back to DEBUG/INFO by the DEBUG flag."""
    if Config.LOG_LEVEL:
        level = logging.getLevelName(Config.LOG_LEVEL.upper())
        if isinstance(level, int):
            return level
    return logging.DEBUG if Config.DEBUG else logging.INFO


def _configure(logger: logging.Logger):
    level = log_level()
    logger.setLevel(level)
    formatter = logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # File handler, one file per day; everything down to DEBUG
    if Config.LOG_DIR:
        log_dir = Path(Config.LOG_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(
            log_dir / f'wrapped_bot_{datetime.now().strftime("%Y%m%d")}.log',
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)


def setup_logger(name: str) -> logging.Logger:
    """
    Logger for a module of the bot.

    Handlers live on the ``wrapped_bot`` package logger and are attached once;
    module loggers inherit them through propagation. A name outside the
    package (e.g. ``__main__``) gets its own handlers.
    """
    logger = logging.getLogger(name)
    owner = logger if not (name == PACKAGE_LOGGER or name.startswith(PACKAGE_LOGGER + '.')) \
        else logging.getLogger(PACKAGE_LOGGER)

    if not owner.handlers:
        _configure(owner)
    return logger
