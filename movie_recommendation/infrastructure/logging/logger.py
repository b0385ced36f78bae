import logging
from logging import Logger as StdLogger
from typing import Optional

from movie_recommendation.domain.ports.services.logger import LoggerPort

DEFAULT_NOISY_LIBS = {"httpx": logging.WARNING, "httpcore": logging.WARNING}


def setup_logging(level: str = "INFO", noisy_libs: Optional[dict[str, int]] = None):
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
    )
    logging.basicConfig(
        level=level.upper(),
        handlers=[handler],
        force=True,
    )

    for lib, lib_level in (noisy_libs if noisy_libs is not None else DEFAULT_NOISY_LIBS).items():
        logging.getLogger(lib).setLevel(lib_level)


class Logger:
    @staticmethod
    def get_logger(name: Optional[str] = None) -> StdLogger:
        return logging.getLogger(name)


class StdLoggerAdapter(LoggerPort):
    """LoggerPort that forwards to a stdlib logger"""

    def __init__(self, name: Optional[str] = None):
        self._logger = Logger.get_logger(name)

    @property
    def name(self) -> str:
        return self._logger.name

    def debug(self, msg: str, *args, **kwargs) -> None:
        self._logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        self._logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        self._logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs) -> None:
        self._logger.error(msg, *args, **kwargs)
