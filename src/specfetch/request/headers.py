"""Header defaults and exchange-option merging.

Header collections are handled as values: every function here returns a
fresh :class:`httpx.Headers` and never mutates its inputs, so options shared
between calls cannot leak state into each other.
"""

from __future__ import annotations

import re
from typing import Any, Mapping, Optional, Union

import httpx

from specfetch.models import HeadersInput, MediaType, RequestOptions

OptionsInput = Union[RequestOptions, Mapping[str, Any], None]

# application/json and structured-syntax variants such as application/problem+json
_JSON_CONTENT_TYPE = re.compile(r"application/([^+;]+\+)?json")


def is_json_content_type(content_type: Optional[str]) -> bool:
    """Whether *content_type* names JSON or a ``+json`` structured syntax."""
    return bool(content_type and _JSON_CONTENT_TYPE.search(content_type))


def compose_headers(
    initial: HeadersInput = None, media_type: Optional[str] = None
) -> httpx.Headers:
    """Build request headers with JSON defaults.

    When no content type is present, ``Content-Type`` is set to *media_type*
    if it is a JSON type such as ``application/vnd.api+json``, or to
    ``application/json`` when *media_type* is unset. Form encodings leave it
    to the transport, which knows the boundary. ``Accept: application/json`` is
    added when absent. Explicit headers are never overwritten.

    Args:
        initial: Caller or default headers to seed the collection with.
        media_type: Declared request media type.

    Returns:
        A new :class:`httpx.Headers` instance.
    """
    headers = httpx.Headers(initial)

    if "content-type" not in headers:
        if not media_type:
            headers["Content-Type"] = MediaType.JSON.value
        elif is_json_content_type(media_type):
            headers["Content-Type"] = media_type

    if "accept" not in headers:
        headers["Accept"] = MediaType.JSON.value

    return headers


def coerce_options(options: OptionsInput) -> RequestOptions:
    """Accept a :class:`RequestOptions`, a mapping of its fields, or ``None``."""
    if options is None:
        return RequestOptions()
    if isinstance(options, RequestOptions):
        return options
    return RequestOptions(**options)


def merge_options(base: OptionsInput, override: OptionsInput) -> RequestOptions:
    """Merge default options with a per-call override.

    Scalar fields from *override* win when set. Headers are merged key by
    key: an override header replaces the base value of the same name, other
    base headers are preserved. Extensions merge the same way.

    Returns:
        A new :class:`RequestOptions`; neither input is modified.
    """
    first = coerce_options(base)
    second = coerce_options(override)

    headers = httpx.Headers(first.headers)
    for key, value in second.headers.items():
        headers[key] = value

    return RequestOptions(
        method=second.method if second.method is not None else first.method,
        headers=headers,
        body=second.body if second.body is not None else first.body,
        timeout=second.timeout if second.timeout is not None else first.timeout,
        follow_redirects=(
            second.follow_redirects
            if second.follow_redirects is not None
            else first.follow_redirects
        ),
        extensions={**first.extensions, **second.extensions},
    )
