"""Static header interceptor."""

from __future__ import annotations

from typing import Mapping

from specfetch.models import ExchangeResult, Handler, Interceptor, RequestOptions


def header_interceptor(headers: Mapping[str, str], override: bool = False) -> Interceptor:
    """Add *headers* to every request.

    Args:
        headers: Headers to add.
        override: Replace headers the request already carries. By default
            existing values win.
    """
    fixed = dict(headers)

    async def _interceptor(
        url: str, options: RequestOptions, next: Handler
    ) -> ExchangeResult:
        for name, value in fixed.items():
            if override or name not in options.headers:
                options.headers[name] = value
        return await next(url, options)

    return _interceptor
