"""Request body encoding.

The encoding is chosen from the declared media type alone, never from the
payload's content:

* ``multipart/form-data`` -- :class:`MultipartForm`
* ``application/x-www-form-urlencoded`` -- :class:`UrlEncodedForm`
* anything else -- compact JSON text

Form bodies are returned as small value objects rather than bytes so the
transport can render them with the right ``Content-Type`` (including the
multipart boundary) when the caller did not set one.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping, Optional, Union
from urllib.parse import urlencode

from pydantic import BaseModel

from specfetch.models import BODY_METHODS, HTTPMethod, MediaType


@dataclass(frozen=True)
class UrlEncodedForm:
    """A URL-encoded form built from the top-level payload keys."""

    fields: tuple[tuple[str, str], ...]

    content_type = MediaType.FORM_URLENCODED.value

    def encode(self) -> bytes:
        return urlencode(self.fields).encode("ascii")


@dataclass(frozen=True)
class MultipartForm:
    """A multipart form with one entry per top-level payload key.

    Binary-capable values (``bytes``, file objects, ``(filename, content)``
    tuples) are kept as they are; everything else is kept as-is too and
    rendered as a plain form field by the transport.
    """

    fields: tuple[tuple[str, Any], ...]

    content_type = MediaType.MULTIPART.value


WireBody = Union[str, UrlEncodedForm, MultipartForm]


def encode_body(
    method: Union[HTTPMethod, str],
    payload: Any,
    media_type: Optional[str] = None,
) -> Optional[WireBody]:
    """Serialise *payload* for *method* according to *media_type*.

    Args:
        method: HTTP method; only post, put, patch and delete carry a body.
        payload: The body value. ``None`` means "no body".
        media_type: Declared request media type.

    Returns:
        The wire body, or ``None`` when the method carries no body or no
        payload was given.
    """
    if HTTPMethod(method.lower()) not in BODY_METHODS:
        return None
    if payload is None:
        return None

    if media_type == MediaType.MULTIPART.value:
        return MultipartForm(fields=tuple(_top_level(payload).items()))

    if media_type == MediaType.FORM_URLENCODED.value:
        return UrlEncodedForm(
            fields=tuple(
                (key, _form_value(value)) for key, value in _top_level(payload).items()
            )
        )

    return json.dumps(
        payload, separators=(",", ":"), allow_nan=False, default=_json_default
    )


def _top_level(payload: Any) -> Mapping[str, Any]:
    if isinstance(payload, BaseModel):
        return payload.model_dump(mode="json", exclude_none=True)
    if not isinstance(payload, Mapping):
        raise TypeError(
            f"Form bodies must be mappings, got {type(payload).__name__}"
        )
    return payload


def _form_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def _json_default(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (set, frozenset)):
        return list(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
