import logging
import os
from datetime import datetime
from logging import WARNING, FileHandler
from logging.handlers import TimedRotatingFileHandler


class GetLog:
    logger = None
    log_folder = None

    @classmethod
    def get_log(cls, log_level="info", shared_log_folder=None):
        """Get logger and initialize logging system.

        Args:
            log_level (str): Level for the main log file and console, default is "info"
            shared_log_folder (str): Existing run folder to log into instead of a new timestamped one
        """
        if cls.logger is None:
            if shared_log_folder:
                cls.log_folder = shared_log_folder
            else:
                log_dir = "./logs"
                current_time = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
                cls.log_folder = os.path.join(log_dir, current_time)

                # Store timestamp so artifacts of the same run share it
                os.environ["FORMQA_TIMESTAMP"] = current_time

            if not os.path.exists(cls.log_folder):
                os.makedirs(cls.log_folder)

            level = getattr(logging, str(log_level).upper(), logging.INFO)

            cls.logger = logging.getLogger()
            cls.logger.setLevel(level)

            # Main log file handler
            log_file = os.path.join(cls.log_folder, "log.log")
            th = TimedRotatingFileHandler(
                filename=log_file,
                when="midnight",
                interval=1,
                backupCount=3,
                encoding="utf-8",
            )
            th.setLevel(level)

            # Warnings and errors also go to their own file
            error_log_file = os.path.join(cls.log_folder, "error.log")
            error_handler = FileHandler(filename=error_log_file, encoding="utf-8")
            error_handler.setLevel(WARNING)

            fmt = "%(asctime)s %(levelname)s [%(name)s] [%(filename)s (%(funcName)s:%(lineno)d)] - %(message)s"
            fm = logging.Formatter(fmt)

            th.setFormatter(fm)
            cls.logger.addHandler(th)

            error_handler.setFormatter(fm)
            cls.logger.addHandler(error_handler)

            console_handler = logging.StreamHandler()
            console_handler.setLevel(level)
            console_handler.setFormatter(fm)
            cls.logger.addHandler(console_handler)

        return cls.logger

    @classmethod
    def artifact_dir(cls, name: str) -> str:
        """Return (and create) a sub folder of the current run folder for
        videos, screenshots and similar artifacts."""
        if cls.log_folder is None:
            cls.get_log()
        path = os.path.join(cls.log_folder, name)
        os.makedirs(path, exist_ok=True)
        return path
