"""Bound operation callables.

An :class:`Operation` binds an :class:`~specfetch.models.OperationDescriptor`
to a client's default options, interceptor snapshot, and transport. Calling
it builds the exchange (URL, headers, body), drives it through the
interceptor chain, and returns the :class:`~specfetch.models.ExchangeResult`.

Errors are tagged rather than subclassed per operation: every
:class:`~specfetch.exceptions.OperationError` raised by a bound operation
carries that operation's ``operation_id``, so callers discriminate with::

    try:
        await get_pet({"path": {"petId": "1"}})
    except get_pet.Error as exc:
        if get_pet.owns(exc) and exc.status == 404:
            ...
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from specfetch.client.chain import compose_chain
from specfetch.client.decoder import terminal_handler
from specfetch.exceptions import OperationError
from specfetch.models import (
    ExchangeResult,
    Interceptor,
    OperationDescriptor,
    Payload,
    RequestOptions,
    Transport,
)
from specfetch.request.body import encode_body
from specfetch.request.headers import OptionsInput, compose_headers, merge_options
from specfetch.request.path import placeholders, render_path
from specfetch.request.query import encode_query

logger = logging.getLogger(__name__)


class Operation:
    """A callable bound to one endpoint.

    Instances are created by :meth:`specfetch.client.builder.Endpoint.method`
    and are immutable; they perform no I/O until called.

    Args:
        descriptor: Static endpoint coordinates.
        defaults: Default exchange options of the owning client.
        interceptors: Interceptor snapshot of the owning client.
        transport: Terminal transport.
    """

    Error = OperationError
    """Exception type raised for non-2xx outcomes; see :meth:`owns`."""

    def __init__(
        self,
        descriptor: OperationDescriptor,
        defaults: RequestOptions,
        interceptors: Sequence[Interceptor],
        transport: Transport,
    ) -> None:
        self._descriptor = descriptor
        self._defaults = defaults.clone()
        self._typed = compose_chain(interceptors, terminal_handler(transport, raw=False))
        self._raw = compose_chain(interceptors, terminal_handler(transport, raw=True))

    @property
    def descriptor(self) -> OperationDescriptor:
        return self._descriptor

    @property
    def operation_id(self) -> str:
        return self._descriptor.operation_id

    def __repr__(self) -> str:
        return f"<Operation {self.operation_id!r}>"

    async def __call__(
        self, payload: Optional[Payload] = None, options: OptionsInput = None
    ) -> ExchangeResult:
        """Invoke the operation and decode the body as JSON or text.

        Args:
            payload: Mapping with optional ``path``, ``query`` and ``body``.
            options: Per-call option overrides, merged over the defaults.

        Returns:
            The successful :class:`~specfetch.models.ExchangeResult`.

        Raises:
            MissingPathParameter: Before any I/O, if the path cannot be rendered.
            OperationError: For non-2xx responses, tagged with :attr:`operation_id`.
        """
        return await self._invoke(payload, options, raw=False)

    async def stream(
        self, payload: Optional[Payload] = None, options: OptionsInput = None
    ) -> ExchangeResult:
        """Invoke the operation, leaving the body as an unconsumed byte stream.

        ``result.data`` is an async byte stream; iterate it to completion or
        ``await result.data.aclose()``.
        """
        return await self._invoke(payload, options, raw=True)

    def error(self, result: ExchangeResult) -> OperationError:
        """Build an error tagged with this operation from a failed result."""
        return OperationError.from_result(result, operation_id=self.operation_id)

    def owns(self, exc: BaseException) -> bool:
        """Return ``True`` if *exc* is an error raised by this operation."""
        return isinstance(exc, OperationError) and exc.operation_id == self.operation_id

    def build(
        self, payload: Optional[Payload] = None, options: OptionsInput = None
    ) -> tuple[str, RequestOptions]:
        """Build the final URL and exchange options without sending anything."""
        payload = payload or {}
        desc = self._descriptor
        merged = merge_options(self._defaults, options)

        path_params = payload.get("path")
        if path_params is None and placeholders(desc.path):
            # fail fast rather than send the raw template
            path_params = {}

        url = (
            desc.base_url
            + render_path(desc.path, path_params)
            + encode_query(payload.get("query"))
        )
        final = RequestOptions(
            method=desc.method.value.upper(),
            headers=compose_headers(merged.headers, desc.media_type),
            body=encode_body(desc.method, payload.get("body"), desc.media_type),
            timeout=merged.timeout,
            follow_redirects=merged.follow_redirects,
            extensions=merged.extensions,
        )
        return url, final

    async def _invoke(
        self, payload: Optional[Payload], options: OptionsInput, raw: bool
    ) -> ExchangeResult:
        url, final = self.build(payload, options)
        handler = self._raw if raw else self._typed
        logger.debug("Dispatching %s %s as %s", final.method, url, self.operation_id)

        try:
            return await handler(url, final)
        except OperationError as exc:
            raise exc.tagged(self.operation_id) from exc
