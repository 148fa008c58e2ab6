"""Exchange logging interceptor."""

from __future__ import annotations

import logging
import time
from typing import Optional

from specfetch.exceptions import OperationError
from specfetch.models import ExchangeResult, Handler, Interceptor, RequestOptions

_default_logger = logging.getLogger("specfetch.exchange")


def logging_interceptor(
    logger: Optional[logging.Logger] = None, level: int = logging.INFO
) -> Interceptor:
    """Log every exchange that passes through the chain.

    One record is emitted per exchange once the response (or error) is
    known, with the method, URL, status and elapsed milliseconds. Errors
    are logged and re-raised.

    Args:
        logger: Target logger. Defaults to ``specfetch.exchange``.
        level: Level for successful exchanges; failures use ``WARNING``.
    """
    log = logger or _default_logger

    async def _interceptor(
        url: str, options: RequestOptions, next: Handler
    ) -> ExchangeResult:
        method = options.method or "GET"
        started = time.monotonic()
        try:
            result = await next(url, options)
        except OperationError as exc:
            log.warning(
                "%s %s -> %d %s (%.1f ms)",
                method, url, exc.status, exc.status_text, _elapsed_ms(started),
            )
            raise
        except Exception as exc:
            log.warning(
                "%s %s failed: %s (%.1f ms)", method, url, exc, _elapsed_ms(started)
            )
            raise

        log.log(
            level,
            "%s %s -> %d %s (%.1f ms)",
            method, url, result.status, result.status_text, _elapsed_ms(started),
        )
        return result

    return _interceptor


def _elapsed_ms(started: float) -> float:
    return (time.monotonic() - started) * 1000
