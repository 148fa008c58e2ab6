"""Interceptor chain composition.

Interceptors wrap each other like an onion: given ``[A, B]`` and terminal
``T``, a call runs A (before), B (before), T, B (after), A (after). Each
interceptor decides whether to continue by awaiting ``next``; returning
without it short-circuits the rest of the chain, terminal included.
"""

from __future__ import annotations

from typing import Sequence

from specfetch.models import ExchangeResult, Handler, Interceptor, RequestOptions


def compose_chain(interceptors: Sequence[Interceptor], terminal: Handler) -> Handler:
    """Compose *interceptors* around *terminal* into a single handler.

    The sequence is copied, so later changes to the caller's list do not
    affect the returned handler. Every interceptor receives its own
    :meth:`~specfetch.models.RequestOptions.clone` of the in-flight options.

    Args:
        interceptors: Interceptors in outermost-first order.
        terminal: The handler invoked after the last interceptor.

    Returns:
        ``terminal`` itself when *interceptors* is empty, otherwise a handler
        that enters the chain at its first interceptor.
    """
    chain = tuple(interceptors)
    if not chain:
        return terminal

    async def _dispatch(index: int, url: str, options: RequestOptions) -> ExchangeResult:
        if index == len(chain):
            return await terminal(url, options)

        async def _next(next_url: str, next_options: RequestOptions) -> ExchangeResult:
            return await _dispatch(index + 1, next_url, next_options)

        return await chain[index](url, options.clone(), _next)

    async def _handler(url: str, options: RequestOptions) -> ExchangeResult:
        return await _dispatch(0, url, options)

    return _handler
