"""
Logging configuration for wdapty.

Records go through rich on stderr so that they never mix with a table printed
on stdout. Every handler carries a filter that masks AWS secrets, in case a
credentials line or storage options end up inside a message.
"""

import logging
import re
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "wdapty"

_SECRET = re.compile(
    r"(?P<key>aws_secret_access_key|aws_session_token|AWS_SECRET_ACCESS_KEY|AWS_SESSION_TOKEN)"
    r"(?P<sep>['\"]?\s*[=:]\s*['\"]?)(?P<value>[^\s'\",}]+)"
)


class RedactSecretsFilter(logging.Filter):
    """Replace secret values in the rendered message with ``***``."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = _SECRET.sub(r"\g<key>\g<sep>***", message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def _level(verbose: bool, quiet: bool) -> int:
    if quiet:
        return logging.ERROR
    if verbose:
        return logging.DEBUG
    return logging.WARNING


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Install the rich stderr handler (and optionally a file handler).

    Args:
        verbose: DEBUG level, with timestamps and source paths
        quiet: ERROR level only; wins over ``verbose``
        log_file: Append plain-text records to this file as well

    Returns:
        The ``wdapty`` logger
    """
    level = _level(verbose, quiet)
    redact = RedactSecretsFilter()

    rich_handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        tracebacks_show_locals=False,
        markup=False,
        show_time=verbose,
        show_path=verbose,
    )
    rich_handler.addFilter(redact)
    handlers: list = [rich_handler]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        file_handler.addFilter(redact)
        handlers.append(file_handler)

    logging.basicConfig(
        level=level, format="%(message)s", datefmt="[%X]", handlers=handlers, force=True
    )

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger under the ``wdapty`` namespace; ``name`` is prefixed if needed."""
    if name is None:
        return logging.getLogger(ROOT_LOGGER)
    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
