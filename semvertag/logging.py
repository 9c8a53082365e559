"""Module to handle logging to the console."""

import logging

from typing import Optional


NOTICE = 25


class PrefixFilter(logging.Filter):
    """A logging filter that prefixes each message according to its level."""

    # pylint: disable=too-few-public-methods

    prefixes = {
        logging.DEBUG: "debug: ",
        logging.INFO: "> ",
        NOTICE: "> ",
        logging.WARNING: "warning: ",
        logging.ERROR: "error: ",
        logging.CRITICAL: "error: ",
    }

    def filter(self, record):
        record.levelprefix = self.prefixes.get(record.levelno, "")
        return True


def setup_logging(verbose: bool = False):
    """Set up console logging for the package logger."""
    root_logger = logging.getLogger(__name__.rpartition(".")[0])

    if logging.getLevelName("NOTICE") == NOTICE and root_logger.handlers:
        # Only adjust the verbosity when called a second time
        for handler in root_logger.handlers:
            handler.setLevel(logging.DEBUG if verbose else logging.INFO)
        return

    logging.addLevelName(NOTICE, "NOTICE")

    handler = logging.StreamHandler()
    handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    handler.setFormatter(logging.Formatter("%(levelprefix)s%(message)s"))
    handler.addFilter(PrefixFilter())

    # Set these handlers on the root logger of this module
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.DEBUG)


class LoggingMixin:
    """Give classes a logger named after them under the `semvertag` logger."""

    # pylint: disable=too-few-public-methods

    _logger: Optional[logging.Logger] = None

    @property
    def logger(self) -> logging.Logger:
        """Return the `<module>.<class>` logger, so setup_logging() applies."""
        if self._logger is None:
            cls = type(self)
            self._logger = logging.getLogger(f"{cls.__module__}.{cls.__qualname__}")
        return self._logger
