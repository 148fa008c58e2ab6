"""Authentication interceptors.

Tokens are resolved from a source descriptor on the first request and then
reused; a resolution failure raises :class:`~specfetch.exceptions.ConfigError`
from the call that triggered it.
"""

from __future__ import annotations

from typing import Optional
from urllib.parse import quote

from specfetch.config import resolve_credential
from specfetch.exceptions import ConfigError
from specfetch.models import ExchangeResult, Handler, Interceptor, RequestOptions

_LOCATIONS = ("header", "query", "cookie")


class _LazyCredential:
    def __init__(self, source: str) -> None:
        self._source = source
        self._value: Optional[str] = None

    def get(self) -> str:
        if self._value is None:
            self._value = resolve_credential(self._source)
        return self._value


def bearer_auth(source: str) -> Interceptor:
    """Send ``Authorization: Bearer <token>`` unless the request already has one.

    Args:
        source: Token source, e.g. ``"env:API_TOKEN"``.
    """
    credential = _LazyCredential(source)

    async def _interceptor(
        url: str, options: RequestOptions, next: Handler
    ) -> ExchangeResult:
        if "authorization" not in options.headers:
            options.headers["Authorization"] = f"Bearer {credential.get()}"
        return await next(url, options)

    return _interceptor


def api_key_auth(
    source: str, name: Optional[str] = None, location: str = "header"
) -> Interceptor:
    """Send an API key in a header, query parameter, or cookie.

    Args:
        source: Key source, e.g. ``"env:API_KEY"``.
        name: Header, parameter or cookie name. Defaults to ``X-API-Key``
            for headers and ``api_key`` otherwise.
        location: One of ``"header"``, ``"query"`` or ``"cookie"``.

    Raises:
        ConfigError: If *location* is not supported.
    """
    if location not in _LOCATIONS:
        raise ConfigError(
            f"Unsupported API key location '{location}' (expected one of {', '.join(_LOCATIONS)})"
        )
    key_name = name or ("X-API-Key" if location == "header" else "api_key")
    credential = _LazyCredential(source)

    async def _interceptor(
        url: str, options: RequestOptions, next: Handler
    ) -> ExchangeResult:
        value = credential.get()
        if location == "header":
            options.headers[key_name] = value
        elif location == "query":
            separator = "&" if "?" in url else "?"
            url = f"{url}{separator}{quote(key_name, safe='')}={quote(value, safe='')}"
        else:
            cookie = f"{key_name}={value}"
            existing = options.headers.get("Cookie")
            options.headers["Cookie"] = f"{existing}; {cookie}" if existing else cookie
        return await next(url, options)

    return _interceptor
