"""Canonical models shared across all specfetch modules.

The models fall into three groups:

**Request-side values** -- created fresh per call and discarded afterwards:
    :class:`RequestOptions` and the :data:`Payload` mapping.

**Response-side values** -- :class:`ExchangeResult`, the envelope returned
by every operation and carried by :class:`~specfetch.exceptions.OperationError`.

**Operation descriptions** -- :class:`HTTPMethod`, :class:`MediaType`,
:class:`OperationDescriptor`, and the parser output models
:class:`APIOperation` and :class:`ParsedSpec`.

**Configuration** -- :class:`ClientConfig`, validated with Pydantic v2.

Header collections are always :class:`httpx.Headers` instances and are
treated as values: every merge or clone produces an independent copy.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from typing import Any, Awaitable, Callable, Mapping, Optional, Protocol, Union

import httpx
from pydantic import BaseModel, ConfigDict, Field


# --- Operation descriptions ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods recognised by OpenAPI path-item objects."""

    GET = "get"
    POST = "post"
    PUT = "put"
    PATCH = "patch"
    DELETE = "delete"
    HEAD = "head"
    OPTIONS = "options"
    TRACE = "trace"


BODY_METHODS = frozenset({HTTPMethod.POST, HTTPMethod.PUT, HTTPMethod.PATCH, HTTPMethod.DELETE})
"""Methods that carry a request body."""


class MediaType(str, enum.Enum):
    """Request media types with a dedicated body encoding."""

    JSON = "application/json"
    FORM_URLENCODED = "application/x-www-form-urlencoded"
    MULTIPART = "multipart/form-data"


@dataclass(frozen=True)
class OperationDescriptor:
    """Static coordinates of a reachable endpoint.

    Created once when an operation is bound and never mutated afterwards.

    Attributes:
        base_url: Prefix prepended verbatim to the rendered path.
        path: Path template with ``{name}`` placeholders.
        method: HTTP method.
        media_type: Declared request media type, if any.
        operation_id: Tag carried by errors raised from this operation.
    """

    base_url: str
    path: str
    method: HTTPMethod
    media_type: Optional[str] = None
    operation_id: str = ""

    def __post_init__(self) -> None:
        if not self.operation_id:
            object.__setattr__(
                self, "operation_id", f"{self.method.value.upper()} {self.path}"
            )


# --- Request-side values ---


Payload = Mapping[str, Any]
"""Per-call payload with optional ``path``, ``query`` and ``body`` keys."""


HeadersInput = Union[httpx.Headers, Mapping[str, str], None]


@dataclass
class RequestOptions:
    """Transport-level options of a single exchange.

    Two sources are merged per call -- the client's defaults and the
    per-call override -- see :func:`~specfetch.request.headers.merge_options`.
    ``extensions`` is forwarded to the transport unchanged and is where a
    caller-supplied cancellation or tracing handle travels.

    Attributes:
        method: Upper-cased HTTP method, filled in by the invoker.
        headers: Request headers.
        body: Encoded wire body, filled in by the invoker.
        timeout: Transport timeout in seconds.
        follow_redirects: Whether the transport follows redirects.
        extensions: Opaque transport extensions.
    """

    method: Optional[str] = None
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    body: Any = None
    timeout: Optional[float] = None
    follow_redirects: Optional[bool] = None
    extensions: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.headers, httpx.Headers):
            self.headers = httpx.Headers(self.headers)

    def clone(self) -> RequestOptions:
        """Return a copy whose headers and extensions are independent."""
        return replace(
            self,
            headers=httpx.Headers(self.headers),
            extensions=dict(self.extensions),
        )


# --- Response-side values ---


@dataclass(frozen=True)
class ExchangeResult:
    """Outcome of a single exchange.

    ``data`` holds exactly one decoded form of the body: parsed JSON, text,
    or (for stream calls) the unconsumed byte stream.
    """

    headers: httpx.Headers
    url: str
    ok: bool
    status: int
    status_text: str
    data: Any


# --- Callable shapes ---


Handler = Callable[[str, RequestOptions], Awaitable[ExchangeResult]]
"""A dispatch step: ``await handler(url, options)``."""


class Interceptor(Protocol):
    """Request/response interceptor.

    Receives the URL, a private copy of the options, and ``next``. It must
    ``await next(url, options)`` to continue the chain, or return a result
    of its own to short-circuit it.
    """

    def __call__(
        self, url: str, options: RequestOptions, next: Handler
    ) -> Awaitable[ExchangeResult]: ...


class Transport(Protocol):
    """Terminal exchange primitive."""

    def __call__(
        self, url: str, options: RequestOptions, *, stream: bool = False
    ) -> Awaitable[httpx.Response]: ...


# --- Parser output models ---


class APIOperation(BaseModel):
    """One path + method combination extracted from an API description."""

    model_config = ConfigDict(frozen=True)

    path: str
    method: HTTPMethod
    operation_id: Optional[str] = None
    summary: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    media_type: Optional[str] = Field(
        default=None, description="Preferred request body media type"
    )
    path_params: list[str] = Field(default_factory=list)
    query_params: list[str] = Field(default_factory=list)
    deprecated: bool = False


class ParsedSpec(BaseModel):
    """Operations and server information extracted from an API description."""

    title: str = "Untitled API"
    version: str = "0.0.0"
    spec_version: str
    base_url: str = ""
    operations: list[APIOperation] = Field(default_factory=list)


# --- Configuration ---


class ClientConfig(BaseModel):
    """Client settings resolved by :func:`~specfetch.config.resolve_config`.

    Loaded from ``./specfetch.json`` (or an explicit JSON/YAML file) and
    overridden by ``SPECFETCH_*`` environment variables and explicit
    arguments.
    """

    model_config = ConfigDict(extra="ignore")

    base_url: str = Field(default="", description="Prefix for every operation URL")
    headers: dict[str, str] = Field(
        default_factory=dict, description="Default request headers"
    )
    timeout: float = Field(default=30.0, description="Request timeout in seconds")
    follow_redirects: bool = Field(default=True, description="Follow HTTP redirects")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")
