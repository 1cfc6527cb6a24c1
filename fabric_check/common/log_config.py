"""
Logging Configuration

Sends fabric_check log records to stderr so stdout stays free for the
report or JSON output of check_product.py. With --verbose, timestamps are
added and the connection log of urllib3 (used by requests) is shown too,
which is where slow or redirected page fetches become visible.
"""

import logging
import sys

PACKAGE_LOGGER = "fabric_check"
HTTP_LOGGER = "urllib3"

LOG_FORMAT = "%(levelname)-8s %(name)s: %(message)s"
VERBOSE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


class _StderrHandler(logging.StreamHandler):
    """Marks handlers installed here so a repeated setup replaces only these."""

    def __init__(self):
        super().__init__(sys.stderr)


def _install(logger: logging.Logger, handler: logging.Handler, level: int) -> None:
    for existing in [h for h in logger.handlers if isinstance(h, _StderrHandler)]:
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(level)
    # Records would otherwise be printed again by a root handler
    logger.propagate = False


def _uninstall(logger: logging.Logger) -> None:
    for existing in [h for h in logger.handlers if isinstance(h, _StderrHandler)]:
        logger.removeHandler(existing)


def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    logger_name: str = PACKAGE_LOGGER,
) -> logging.Logger:
    """
    Configure stderr logging for a command-line run.

    Args:
        verbose: DEBUG level, timestamps, and urllib3 connection logs
        quiet: WARNING level (ignored when verbose is set)
        logger_name: Logger to configure

    Returns:
        The configured logger
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    handler = _StderrHandler()
    handler.setFormatter(logging.Formatter(VERBOSE_FORMAT if verbose else LOG_FORMAT))

    logger = logging.getLogger(logger_name)
    _install(logger, handler, level)

    http_logger = logging.getLogger(HTTP_LOGGER)
    if verbose:
        _install(http_logger, handler, logging.DEBUG)
    else:
        _uninstall(http_logger)
        http_logger.propagate = True

    return logger
