"""Response decoding and the terminal dispatch step.

:func:`decode_response` turns an :class:`httpx.Response` into exactly one
representation of its body. :func:`fetch_response` is the last link of the
interceptor chain: it calls the transport, decodes the body, and raises
:class:`~specfetch.exceptions.OperationError` for non-2xx outcomes.
"""

from __future__ import annotations

from typing import Any

import httpx

from specfetch.exceptions import OperationError
from specfetch.models import ExchangeResult, Handler, RequestOptions, Transport
from specfetch.request.headers import is_json_content_type


async def decode_response(response: httpx.Response, raw: bool) -> Any:
    """Decode the body of *response* exactly once.

    Args:
        response: The transport response.
        raw: Return the unconsumed byte stream instead of reading the body.
            The caller must iterate it to completion or ``aclose()`` it.

    Returns:
        The byte stream when *raw* is set, parsed JSON when the
        ``content-type`` is JSON, and text otherwise.

    Raises:
        json.JSONDecodeError: If a JSON content type carries malformed JSON.
    """
    if raw:
        return response.stream

    await response.aread()
    if is_json_content_type(response.headers.get("content-type")):
        return response.json()
    return response.text


async def fetch_response(
    transport: Transport, url: str, options: RequestOptions, raw: bool
) -> ExchangeResult:
    """Perform the exchange, decode it, and classify the outcome.

    Raises:
        OperationError: When the response status is not 2xx.
        httpx.TransportError: Propagated unchanged from the transport.
    """
    response = await transport(url, options, stream=raw)
    data = await decode_response(response, raw)

    result = ExchangeResult(
        headers=response.headers,
        url=_response_url(response, url),
        ok=response.is_success,
        status=response.status_code,
        status_text=response.reason_phrase,
        data=data,
    )

    if result.ok:
        return result

    raise OperationError.from_result(result)


def _response_url(response: httpx.Response, requested: str) -> str:
    """Final URL of *response*, or *requested* when no request is attached."""
    try:
        return str(response.url)
    except RuntimeError:
        return requested


def terminal_handler(transport: Transport, raw: bool) -> Handler:
    """Bind :func:`fetch_response` to *transport* as a chain terminal."""

    async def _handler(url: str, options: RequestOptions) -> ExchangeResult:
        return await fetch_response(transport, url, options, raw)

    return _handler
