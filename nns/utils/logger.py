"""
Centralized logging configuration for NNS.

Colored console output on stderr, so CLI stdout stays clean, with one
child logger per subsystem (commitment, ledger, storage.sqlite, cli).
"""

import logging
import sys

import colorlog


class NNSLogger:
    """Centralized logger for NNS components"""

    _initialized = False

    @classmethod
    def setup(cls, level: int = logging.INFO):
        """
        Setup logging configuration.

        Safe to call again later (e.g. from the CLI's --debug flag):
        the handler is installed once and only the level changes.

        Args:
            level: Logging level (DEBUG, INFO, WARNING, ERROR)
        """
        root_logger = logging.getLogger("nns")

        if not cls._initialized:
            root_logger.handlers.clear()
            console_handler = colorlog.StreamHandler(sys.stderr)
            console_handler.setFormatter(colorlog.ColoredFormatter(
                "%(log_color)s%(asctime)s [%(name)s] %(levelname)-8s%(reset)s %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
                log_colors={
                    "DEBUG": "cyan",
                    "INFO": "green",
                    "WARNING": "yellow",
                    "ERROR": "red",
                    "CRITICAL": "red,bg_white",
                },
            ))
            root_logger.addHandler(console_handler)
            cls._initialized = True

        root_logger.setLevel(level)
        for handler in root_logger.handlers:
            handler.setLevel(level)

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """Get the logger for a subsystem, e.g. 'ledger' -> 'nns.ledger'."""
        if not cls._initialized:
            cls.setup()

        return logging.getLogger(f"nns.{name}")


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a specific subsystem"""
    return NNSLogger.get_logger(name)


def setup_logging(level: int = logging.INFO):
    """Setup logging configuration"""
    NNSLogger.setup(level=level)
