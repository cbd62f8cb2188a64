"""Console and file output for the ``thermocalc`` loggers.

The calculation modules only create loggers (``thermocalc.core``,
``thermocalc.solar``, ...) and never attach handlers. An application such as
the web API calls ``ModuleLogger.get_logger('thermocalc')`` once to make the
rejected inputs and, at DEBUG, the intermediate results visible.
"""
import logging
from logging import Handler, Logger
from pathlib import Path


class ModuleLogger:
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR

    # [pid | logger | level] message
    FORMATTER = logging.Formatter(
        '[%(process)s | %(name)s | %(levelname)s] %(message)s'
    )

    @classmethod
    def _with_format(cls, handler: Handler, log_level: int) -> Handler:
        handler.setFormatter(cls.FORMATTER)
        handler.setLevel(log_level)
        return handler

    @classmethod
    def get_logger(
        cls,
        logger_name: str,
        file_path: Path | str | None = None,
        log_level: int = logging.INFO
    ) -> Logger:
        """Return the logger `logger_name`, writing to stderr and, when
        `file_path` is given, appending to that file as well.

        Handlers are attached on the first call only; later calls for the same
        name return the configured logger untouched.
        """
        logger = logging.getLogger(logger_name)
        if logger.handlers:
            return logger
        logger.addHandler(cls._with_format(logging.StreamHandler(), log_level))
        if file_path is not None:
            file_handler = logging.FileHandler(file_path, mode='a', encoding='utf-8')
            logger.addHandler(cls._with_format(file_handler, log_level))
        logger.setLevel(log_level)
        return logger
