"""
Logging configuration for SN-Formal.

All module loggers live under the ``snformal`` package logger, which
``setup_logging`` gives its own handler. The root logger and loggers of
other libraries are left alone, so embedding applications keep their own
logging setup.
"""

import logging
from typing import Optional, TextIO

PACKAGE_LOGGER = "snformal"
DEFAULT_FORMAT = "[%(asctime)s] %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: str = "INFO", format_string: Optional[str] = None, stream: Optional[TextIO] = None
) -> logging.Logger:
    """
    Attach a stream handler to the ``snformal`` package logger.

    Calling it again replaces the previous handler instead of adding a
    second one.

    Parameters
    ----------
    level : str
        Logging level: 'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'
    format_string : str, optional
        Custom format string. If None, uses ``DEFAULT_FORMAT``.
    stream : file-like object, optional
        Stream to write logs to. If None, uses sys.stderr.

    Returns
    -------
    logging.Logger
        The configured package logger
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)

    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT, datefmt=DATE_FORMAT))
    package_logger.addHandler(handler)
    package_logger.setLevel(level.upper())

    return package_logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Parameters
    ----------
    name : str
        Logger name relative to the package (e.g. 'integral.integrator')

    Returns
    -------
    logging.Logger
        Logger instance
    """
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")
