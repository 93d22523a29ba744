import logging
import os
from logging import WARNING, FileHandler
from logging.handlers import TimedRotatingFileHandler

FORMAT = "%(asctime)s %(levelname)s [%(name)s] [%(filename)s (%(funcName)s:%(lineno)d)] - %(message)s"


class GetLog:
    logger = None
    log_folder = None
    file_handlers = []

    @classmethod
    def get_log(cls, log_folder=None, level="warning"):
        """Get logger and initialize logging system.

        Args:
            log_folder (str): Folder receiving log.log and error.log, usually the
                run's documentation folder. No file handlers without it. A
                different folder on a later call moves the file handlers there.
            level (str): Level of the console handler.
        """
        if cls.logger is None:
            cls.logger = logging.getLogger("e2e2d")
            cls.logger.setLevel(logging.DEBUG)

            # Console stays quiet by default, it shares stdout/stderr with the narration
            console_handler = logging.StreamHandler()
            console_handler.setLevel(logging.getLevelName(level.upper()))
            console_handler.setFormatter(logging.Formatter(FORMAT))
            cls.logger.addHandler(console_handler)

        if log_folder and log_folder != cls.log_folder:
            cls._set_log_folder(log_folder)

        return cls.logger

    @classmethod
    def _set_log_folder(cls, log_folder):
        cls._close_file_handlers()
        cls.log_folder = log_folder
        os.makedirs(cls.log_folder, exist_ok=True)
        fm = logging.Formatter(FORMAT)

        # main log file handler
        th = TimedRotatingFileHandler(
            filename=os.path.join(cls.log_folder, "log.log"),
            when="midnight",
            interval=1,
            backupCount=3,
            encoding="utf-8",
        )
        th.setLevel(logging.INFO)
        th.setFormatter(fm)

        # error log file handler
        error_handler = FileHandler(filename=os.path.join(cls.log_folder, "error.log"), encoding="utf-8")
        error_handler.setLevel(WARNING)
        error_handler.setFormatter(fm)

        cls.file_handlers = [th, error_handler]
        for handler in cls.file_handlers:
            cls.logger.addHandler(handler)

    @classmethod
    def _close_file_handlers(cls):
        for handler in cls.file_handlers:
            cls.logger.removeHandler(handler)
            handler.close()
        cls.file_handlers = []

    @classmethod
    def reset(cls):
        """Detach and close every handler so the next get_log starts over."""
        if cls.logger is not None:
            for handler in list(cls.logger.handlers):
                cls.logger.removeHandler(handler)
                handler.close()
        cls.logger = None
        cls.log_folder = None
        cls.file_handlers = []
