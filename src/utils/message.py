import logging
import os
import sys
from datetime import datetime
from logging import Logger
from typing import Optional
from colorama import init, Fore, Style
init(autoreset=True)


def create_log_directory(log_folder: str = None):
    """
    Ensures that the log directory exists. If not, it creates it.

    Args:
        log_folder: Optional path to log folder. If None, uses platform-specific location.
    """
    if log_folder is None:
        from src.utils.paths import get_logs_dir
        log_folder = str(get_logs_dir())

    if not os.path.exists(log_folder):
        os.makedirs(log_folder)
    return log_folder


def get_log_file_path(log_folder: str) -> str:
    """
    Returns a log file path with a timestamp in the name.
    Format: logs/daygrid_YYYY-mm-dd_HHMMSS.log
    """
    timestamp = datetime.now().strftime("%Y-%m-%d_%H%M%S")
    return os.path.join(log_folder, f"daygrid_{timestamp}.log")


def purge_old_logs(log_folder: str, keep: int = 10):
    """
    Removes older log files, keeping only the most recent 'keep' files.
    Logs are named daygrid_YYYY-mm-dd_HHMMSS.log, so lexicographical
    sort matches chronological order.
    """
    all_logs = [f for f in os.listdir(log_folder)
                if f.startswith("daygrid_") and f.endswith(".log")]
    all_logs.sort()

    for old_file in all_logs[:-keep]:
        os.remove(os.path.join(log_folder, old_file))


class ColorFormatter(logging.Formatter):
    """
    A formatter that colorizes log level names using colorama.
    """
    color_map = {
        logging.DEBUG: Fore.BLUE,
        logging.INFO: Fore.GREEN,
        logging.WARNING: Fore.YELLOW,
        logging.ERROR: Fore.RED,
        logging.CRITICAL: Fore.LIGHTRED_EX,
    }

    def format(self, record):
        color = self.color_map.get(record.levelno, Fore.WHITE)
        # Copy so file handlers never see the escape codes
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{color}{record.levelname}{Style.RESET_ALL}"
        return super().format(record)


def init_logger(
    name: str = "primary logger",
    log_folder: str = None,
    console_logging: bool = True,
    file_logging: bool = True,
    level: int = logging.DEBUG
) -> Logger:
    """
    Initializes and configures the logger with the specified settings.
    :param name: The logger's name.
    :param log_folder: The folder where log files should go. If None, uses platform-specific location.
    :param console_logging: Whether to log to the console.
    :param file_logging: Whether to log to a file.
    :param level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    :return: A configured logger instance.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False  # Prevent duplicate logs if root logger also logs

    # Repeated calls must not stack handlers
    if not logger.handlers:
        if file_logging:
            log_folder = create_log_directory(log_folder)
            purge_old_logs(log_folder, keep=10)
            file_handler = logging.FileHandler(get_log_file_path(log_folder), encoding="utf-8")
            file_handler.setLevel(level)
            file_handler.setFormatter(logging.Formatter(
                fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S"
            ))
            logger.addHandler(file_handler)

        if console_logging:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(level)
            console_handler.setFormatter(ColorFormatter(
                fmt="%(asctime)s | %(levelname)s | %(message)s",
                datefmt="%H:%M:%S"
            ))
            logger.addHandler(console_handler)

    return logger


LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


class Log:
    """
    Class-level logging facade (Log.info(...), Log.warning(...)).

    The underlying logger is created on first use so that environment
    configuration loaded at startup (.env files) is honored.
    """
    LOGGER_NAME = "DayGridLogger"
    _logger: Optional[Logger] = None

    @classmethod
    def configure(cls, level: str | int = None, file_logging: bool = None) -> Logger:
        """
        (Re)build the logger from explicit arguments or the runtime config.
        """
        from src.utils.config import RuntimeConfig
        config = RuntimeConfig.from_env()
        if level is None:
            level = config.log_level
        if file_logging is None:
            file_logging = config.file_logging

        existing = logging.getLogger(cls.LOGGER_NAME)
        for handler in list(existing.handlers):
            existing.removeHandler(handler)
            handler.close()

        cls._logger = init_logger(
            name=cls.LOGGER_NAME,
            console_logging=True,
            file_logging=file_logging,
            level=cls._to_level(level),
        )
        return cls._logger

    @classmethod
    def _get(cls) -> Logger:
        if cls._logger is None:
            cls.configure()
        return cls._logger

    @staticmethod
    def _to_level(level: str | int) -> int:
        if isinstance(level, str):
            return LEVELS.get(level.upper(), logging.INFO)
        return level

    @classmethod
    def set_logger(cls, logger: Logger):
        """Replace the logger at runtime."""
        cls._logger = logger

    @classmethod
    def set_level(cls, level: str | int):
        """
        Set the logging level dynamically.

        Args:
            level: Log level as string ("DEBUG", "INFO", "WARNING", "ERROR") or int
        """
        level = cls._to_level(level)
        logger = cls._get()
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)

    @classmethod
    def debug(cls, text: str):
        cls._get().debug(text)

    @classmethod
    def info(cls, text: str):
        cls._get().info(text)

    @classmethod
    def warning(cls, text: str, exc_info: bool = False):
        cls._get().warning(text, exc_info=exc_info)

    @classmethod
    def error(cls, text: str):
        cls._get().error(text)

    @classmethod
    def exception(cls, text: str):
        cls._get().exception(text)
