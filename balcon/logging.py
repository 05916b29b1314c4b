import logging
import os
from logging import Handler, Logger
from pathlib import Path


class ModuleLogger:
    """
    Factory of the per-module loggers of the package:
    `logger = ModuleLogger.get_logger(__name__)`.

    The default level is WARNING. It can be changed for the whole package
    through environment variable BALCON_LOG_LEVEL (e.g. 'DEBUG'), or for a
    single module with `set_level`.
    """
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL

    LEVEL_ENV_VAR = 'BALCON_LOG_LEVEL'
    FORMATTER = logging.Formatter(
        '[%(process)s | %(name)s | %(levelname)s] %(message)s'
    )

    @classmethod
    def default_level(cls) -> int:
        name = os.environ.get(cls.LEVEL_ENV_VAR, '').upper()
        level = logging.getLevelName(name) if name else cls.WARNING
        # getLevelName returns a string for unknown names
        return level if isinstance(level, int) else cls.WARNING

    @classmethod
    def _configure(cls, handler: Handler, log_level: int) -> Handler:
        handler.setFormatter(cls.FORMATTER)
        handler.setLevel(log_level)
        return handler

    @classmethod
    def get_logger(
        cls,
        logger_name: str,
        file_path: Path | str | None = None,
        log_level: int | None = None
    ) -> Logger:
        """Returns the logger named `logger_name`.

        The first time a name is requested, the logger gets a console handler
        and, if `file_path` is given, a file handler that appends the same
        records to that file. Later calls return the same logger unchanged.
        """
        logger = logging.getLogger(logger_name)
        if logger.handlers:
            return logger
        log_level = cls.default_level() if log_level is None else log_level
        logger.addHandler(cls._configure(logging.StreamHandler(), log_level))
        if file_path is not None:
            file_handler = logging.FileHandler(file_path, mode='a', encoding='utf-8')
            logger.addHandler(cls._configure(file_handler, log_level))
        logger.setLevel(log_level)
        return logger

    @classmethod
    def set_level(cls, logger_name: str, log_level: int) -> None:
        """Changes the level of a logger and of all its handlers, e.g. to see
        the debug records of the sampler:
        `ModuleLogger.set_level('balcon.sun.sampling', ModuleLogger.DEBUG)`.
        """
        logger = logging.getLogger(logger_name)
        logger.setLevel(log_level)
        for handler in logger.handlers:
            handler.setLevel(log_level)
