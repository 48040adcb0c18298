"""
Leveled logging for the 2048 game.
Console output is colored; an optional plain-text copy goes to a file.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone

LOGGER_NAME = 'game2048'

# Sits between INFO and DEBUG: success messages are the chattiest after debug
SUCCESS = 15
logging.addLevelName(SUCCESS, 'SUCCESS')

LEVELS = {
    'error': logging.ERROR,
    'warn': logging.WARNING,
    'info': logging.INFO,
    'success': SUCCESS,
    'debug': logging.DEBUG,
}

LEVEL_NAMES = {
    logging.ERROR: 'ERROR',
    logging.WARNING: 'WARN',
    logging.INFO: 'INFO',
    SUCCESS: 'SUCCESS',
    logging.DEBUG: 'DEBUG',
}

COLORS = {
    logging.ERROR: '\033[31m',    # red
    logging.WARNING: '\033[33m',  # yellow
    logging.INFO: '\033[34m',     # blue
    SUCCESS: '\033[32m',          # green
    logging.DEBUG: '\033[90m',    # gray
}
RESET = '\033[0m'


def _format_payload(payload) -> str:
    if isinstance(payload, (dict, list, tuple)):
        try:
            return '\n' + json.dumps(payload, indent=2, default=str)
        except (TypeError, ValueError):
            return '\n[Object - Unable to serialize]'
    return f" {payload}"


class GameFormatter(logging.Formatter):
    """Formats records as "[timestamp] LEVEL: message" plus any payload."""

    def __init__(self, use_color: bool = False):
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(timespec='milliseconds')
        level = LEVEL_NAMES.get(record.levelno, record.levelname)
        if self.use_color and record.levelno in COLORS:
            level = f"{COLORS[record.levelno]}{level}{RESET}"

        message = f"[{timestamp}] {level}: {record.getMessage()}"
        payload = getattr(record, 'payload', None)
        if payload is not None:
            message += _format_payload(payload)
        if record.exc_info:
            message += '\n' + self.formatException(record.exc_info)
        return message


def get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


def success(logger: logging.Logger, message: str, *args, **kwargs) -> None:
    """Log at the SUCCESS level."""
    logger.log(SUCCESS, message, *args, **kwargs)


def setup_logging(config: dict) -> logging.Logger:
    """
    Configure the shared game logger from a config dict.

    Args:
        config: Dict with LOG_LEVEL, LOG_TO_FILE and LOG_FILE_PATH keys

    Returns:
        The configured logger. Calling again replaces its handlers.
    """
    logger = get_logger()
    logger.setLevel(LEVELS.get(str(config.get('LOG_LEVEL', 'info')).lower(), logging.INFO))

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    # Output goes only through the handlers added here
    logger.propagate = False

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(GameFormatter(use_color=sys.stdout.isatty()))
    logger.addHandler(console)

    if config.get('LOG_TO_FILE'):
        log_file = config.get('LOG_FILE_PATH', 'logs/app.log')
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(GameFormatter(use_color=False))
        logger.addHandler(file_handler)

    return logger
