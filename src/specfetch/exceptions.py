"""Exception hierarchy for specfetch.

All library errors inherit from :class:`SpecfetchError`. Failures raised by
the transport itself (DNS, refused connections, timeouts) are *not* wrapped:
they surface as :class:`httpx.TransportError`, re-exported here as
:data:`TransportFailure` so callers can tell them apart from HTTP-level
failures.

Subclass hierarchy::

    SpecfetchError
    +-- MissingPathParameter   (path template key absent from the payload)
    +-- OperationError         (non-2xx HTTP response)
    +-- SpecParseError         (API description could not be loaded)
    +-- ConfigError            (bad configuration or credential source)
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Mapping, Optional

import httpx

if TYPE_CHECKING:
    from specfetch.models import ExchangeResult

TransportFailure = httpx.TransportError
"""Network-level failure raised by the transport, propagated unchanged."""


class SpecfetchError(Exception):
    """Base exception for all specfetch errors."""


class MissingPathParameter(SpecfetchError):
    """Raised when a ``{name}`` placeholder has no value in the payload.

    Raised synchronously while the URL is built, before any interceptor or
    network activity.

    Args:
        key: The placeholder name that could not be resolved.
        params: The full path-parameter mapping that was supplied.
    """

    def __init__(self, key: str, params: Mapping[str, Any]) -> None:
        self.key = key
        self.params = dict(params)
        super().__init__(
            f"Expected path key '{key}' doesn't exist in payload: "
            f"{json.dumps(self.params, default=str)}"
        )


class OperationError(SpecfetchError):
    """Raised when an operation completes with a non-2xx status.

    Carries everything from the :class:`~specfetch.models.ExchangeResult`
    except ``ok``. ``operation_id`` tags the error with the operation that
    produced it; it is ``None`` until the bound operation re-raises it.

    Attributes:
        headers: Response headers.
        url: Final response URL.
        status: HTTP status code.
        status_text: HTTP reason phrase.
        data: Decoded response body (or the raw stream for stream calls).
        operation_id: Tag of the operation that raised the error.
    """

    def __init__(
        self,
        *,
        headers: httpx.Headers,
        url: str,
        status: int,
        status_text: str,
        data: Any,
        operation_id: Optional[str] = None,
    ) -> None:
        self.headers = headers
        self.url = url
        self.status = status
        self.status_text = status_text
        self.data = data
        self.operation_id = operation_id
        super().__init__(_describe(status, status_text, data))

    @classmethod
    def from_result(
        cls, result: ExchangeResult, operation_id: Optional[str] = None
    ) -> OperationError:
        """Build an error from a failed :class:`~specfetch.models.ExchangeResult`."""
        return cls(
            headers=result.headers,
            url=result.url,
            status=result.status,
            status_text=result.status_text,
            data=result.data,
            operation_id=operation_id,
        )

    def tagged(self, operation_id: str) -> OperationError:
        """Return a copy of this error carrying *operation_id*."""
        return type(self)(
            headers=self.headers,
            url=self.url,
            status=self.status,
            status_text=self.status_text,
            data=self.data,
            operation_id=operation_id,
        )


class SpecParseError(SpecfetchError):
    """Raised when an API description cannot be loaded or is unsupported."""


class ConfigError(SpecfetchError):
    """Raised for configuration problems (invalid files, bad credential sources)."""


def _describe(status: int, status_text: str, data: Any) -> str:
    """Derive a human-readable message from a failed response body."""
    prefix = f"HTTP {status}"
    if status_text:
        prefix = f"{prefix} {status_text}"

    if isinstance(data, dict):
        msg = data.get("message") or data.get("error") or data.get("detail") or ""
        if not isinstance(msg, str):
            msg = json.dumps(msg, default=str)
    elif isinstance(data, str):
        msg = data[:200]
    elif isinstance(data, list):
        msg = json.dumps(data, default=str)[:200]
    else:
        msg = ""

    return f"{prefix}: {msg}" if msg else prefix
