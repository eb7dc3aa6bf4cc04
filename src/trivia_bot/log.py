"""Logger access for the trivia bot."""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger as _logger

if TYPE_CHECKING:
    from loguru import Logger


def get_logger(name: str) -> Logger:
    """Return the shared loguru logger bound to ``name``.

    Call sites log dotted event names with keyword context, e.g.
    ``logger.info("trivia.store.saved", key=key)``; the keywords land in the
    record's ``extra`` mapping. Records from this package are disabled until
    the host calls ``logger.enable("trivia_bot")``.
    """
    return _logger.bind(logger_name=name)
