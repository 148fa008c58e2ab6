"""Terminal transport backed by :class:`httpx.AsyncClient`.

The transport is the only component that performs network I/O. It maps a
fully built ``(url, options)`` pair onto an httpx request and returns the
:class:`httpx.Response` untouched -- decoding happens in
:mod:`specfetch.client.decoder`.

Network failures are raised as :class:`httpx.TransportError` and are never
retried here; pooling and retry policy belong to the injected
:class:`httpx.AsyncClient` and its own transport.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from specfetch.models import RequestOptions
from specfetch.request.body import MultipartForm, UrlEncodedForm

logger = logging.getLogger(__name__)


class HttpxTransport:
    """Perform exchanges through an :class:`httpx.AsyncClient`.

    Args:
        client: An existing client to send requests with. When ``None`` a
            client is created lazily on first use and owned by the
            transport, which then closes it in :meth:`aclose`.
        timeout: Default timeout for an owned client, in seconds.
        verify_ssl: Verify TLS certificates for an owned client.

    Example::

        transport = HttpxTransport()
        response = await transport("https://api.example.com/pets", options)
        await transport.aclose()
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        *,
        timeout: float = 30.0,
        verify_ssl: bool = True,
    ) -> None:
        self._client = client
        self._owns_client = client is None
        self._timeout = timeout
        self._verify_ssl = verify_ssl

    @property
    def client(self) -> httpx.AsyncClient:
        """The underlying client, created on first access when not injected."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout, verify=self._verify_ssl
            )
        return self._client

    async def __call__(
        self, url: str, options: RequestOptions, *, stream: bool = False
    ) -> httpx.Response:
        """Send one request.

        Args:
            url: Absolute request URL.
            options: Final exchange options (method, headers, body, ...).
            stream: When ``True`` the body is left unread and the caller
                owns the open response stream.

        Returns:
            The :class:`httpx.Response`; read unless *stream* is set.
        """
        method = options.method or "GET"
        headers = httpx.Headers(options.headers)
        kwargs = _body_kwargs(options.body, headers)

        request = self.client.build_request(
            method,
            url,
            headers=headers,
            timeout=(
                options.timeout if options.timeout is not None else httpx.USE_CLIENT_DEFAULT
            ),
            extensions=options.extensions or None,
            **kwargs,
        )
        logger.debug("Sending %s %s (stream=%s)", method, url, stream)

        return await self.client.send(
            request,
            stream=stream,
            follow_redirects=(
                options.follow_redirects
                if options.follow_redirects is not None
                else httpx.USE_CLIENT_DEFAULT
            ),
        )

    async def aclose(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> HttpxTransport:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()


def _body_kwargs(body: Any, headers: httpx.Headers) -> dict[str, Any]:
    """Translate an encoded wire body into ``build_request`` keyword arguments."""
    if body is None:
        return {}

    if isinstance(body, UrlEncodedForm):
        if "content-type" not in headers:
            headers["Content-Type"] = body.content_type
        return {"content": body.encode()}

    if isinstance(body, MultipartForm):
        # Every field goes through ``files`` so httpx always emits multipart,
        # even when no entry is binary; httpx adds the boundary header.
        return {"files": [(name, _multipart_part(value)) for name, value in body.fields]}

    return {"content": body}


def _multipart_part(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray, tuple)) or hasattr(value, "read"):
        return bytes(value) if isinstance(value, bytearray) else value
    if isinstance(value, bool):
        return (None, "true" if value else "false")
    return (None, str(value))
