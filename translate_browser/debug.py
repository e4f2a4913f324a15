import logging
import os
from typing import Mapping, Optional, Tuple

from .config import DEBUG_ENV, TRUTHY

PACKAGE_LOGGER = "translate_browser"
LOG_PATH_ENV = "TRANSLATE_BROWSER_LOG"
DEFAULT_LOG_FILE = "translate_browser_debug.log"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_LOGGER: Optional[logging.Logger] = None


def debug_enabled(environ: Optional[Mapping[str, str]] = None) -> bool:
    env = os.environ if environ is None else environ
    return env.get(DEBUG_ENV, "0").lower() in TRUTHY


def requested_log_path(environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """Explicit ``TRANSLATE_BROWSER_LOG`` path, else the default file in debug mode."""
    env = os.environ if environ is None else environ
    path = env.get(LOG_PATH_ENV)
    if path:
        return os.path.expanduser(path)
    if debug_enabled(env):
        return os.path.join(os.getcwd(), DEFAULT_LOG_FILE)
    return None


def _file_or_stderr_handler(log_path: str, level: int) -> Tuple[logging.Handler, Optional[OSError]]:
    """A file handler on ``log_path``, or a stderr handler plus the error that prevented it."""
    error: Optional[OSError] = None
    try:
        handler: logging.Handler = logging.FileHandler(log_path, encoding="utf-8")
    except OSError as exc:
        handler = logging.StreamHandler()
        error = exc
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    return handler, error


def _configure(logger: logging.Logger) -> logging.Logger:
    level = logging.DEBUG if debug_enabled() else logging.INFO
    logger.setLevel(level)

    # Handlers installed by a host application win.
    if logger.handlers or logging.getLogger().handlers:
        return logger

    log_path = requested_log_path()
    if not log_path:
        # The TUI owns the terminal.
        logger.addHandler(logging.NullHandler())
        return logger

    handler, error = _file_or_stderr_handler(log_path, level)
    logger.addHandler(handler)
    if error is not None:
        logger.warning("cannot open log file %s (%s), logging to stderr", log_path, error)
    return logger


def get_logger(name: str = PACKAGE_LOGGER) -> logging.Logger:
    global _LOGGER
    if _LOGGER is None:
        _LOGGER = _configure(logging.getLogger(PACKAGE_LOGGER))
    return _LOGGER.getChild(name)
