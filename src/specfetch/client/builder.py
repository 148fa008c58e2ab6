"""Immutable client values and endpoint selection.

A :class:`Client` is a value: ``with_base_url``, ``with_options``,
``with_interceptor`` and ``with_transport`` each return a new client and
leave the original untouched. Interceptors are stored as a tuple, so two
clients derived from the same parent never share a mutable interceptor list,
and operations bound from a client keep the interceptors it had at that
moment.

Clients share their transport with the clients derived from them. Use the
client as an async context manager (or call :meth:`Client.aclose`) to close
a transport it created.

Example::

    async with Client("https://petstore3.swagger.io/api/v3") as client:
        client = client.with_interceptor(logging_interceptor())
        get_pet = client.endpoint("/pet/{petId}").method("get")
        result = await get_pet({"path": {"petId": "10"}})
        print(result.data)
"""

from __future__ import annotations

from typing import Callable, Optional, Sequence, Union

from specfetch.client.operation import Operation
from specfetch.client.transport import HttpxTransport
from specfetch.models import (
    ClientConfig,
    HTTPMethod,
    Interceptor,
    OperationDescriptor,
    RequestOptions,
    Transport,
)
from specfetch.request.headers import OptionsInput, coerce_options


class Client:
    """Configuration surface that produces bound :class:`Operation` objects.

    Args:
        base_url: Prefix for every operation URL.
        options: Default exchange options merged under per-call options.
        interceptors: Interceptors in outermost-first order.
        transport: Terminal transport. Defaults to a lazily connected
            :class:`~specfetch.client.transport.HttpxTransport`.
    """

    def __init__(
        self,
        base_url: str = "",
        options: OptionsInput = None,
        interceptors: Sequence[Interceptor] = (),
        transport: Optional[Transport] = None,
    ) -> None:
        self._base_url = base_url
        self._options = coerce_options(options).clone()
        self._interceptors: tuple[Interceptor, ...] = tuple(interceptors)
        self._transport: Transport = transport if transport is not None else HttpxTransport()

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        interceptors: Sequence[Interceptor] = (),
        transport: Optional[Transport] = None,
    ) -> Client:
        """Create a client from a resolved :class:`~specfetch.models.ClientConfig`."""
        options = RequestOptions(
            headers=dict(config.headers),
            timeout=config.timeout,
            follow_redirects=config.follow_redirects,
        )
        if transport is None:
            transport = HttpxTransport(timeout=config.timeout, verify_ssl=config.verify_ssl)
        return cls(config.base_url, options, interceptors, transport)

    # ------------------------------------------------------------------ #
    # Read-only configuration
    # ------------------------------------------------------------------ #

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def options(self) -> RequestOptions:
        """A copy of the default exchange options."""
        return self._options.clone()

    @property
    def interceptors(self) -> tuple[Interceptor, ...]:
        return self._interceptors

    @property
    def transport(self) -> Transport:
        return self._transport

    # ------------------------------------------------------------------ #
    # Derivation
    # ------------------------------------------------------------------ #

    def with_base_url(self, base_url: str) -> Client:
        """Return a client with *base_url*."""
        return Client(base_url, self._options, self._interceptors, self._transport)

    def with_options(self, updater: Callable[[RequestOptions], RequestOptions]) -> Client:
        """Return a client whose defaults are ``updater(copy_of_current_defaults)``."""
        return Client(
            self._base_url, updater(self._options.clone()), self._interceptors, self._transport
        )

    def with_interceptor(self, interceptor: Interceptor) -> Client:
        """Return a client with *interceptor* appended as the innermost one."""
        return Client(
            self._base_url, self._options, self._interceptors + (interceptor,), self._transport
        )

    def with_transport(self, transport: Transport) -> Client:
        """Return a client that dispatches through *transport*."""
        return Client(self._base_url, self._options, self._interceptors, transport)

    # ------------------------------------------------------------------ #
    # Endpoint selection
    # ------------------------------------------------------------------ #

    def endpoint(self, path: str) -> Endpoint:
        """Select the path template of an operation."""
        return Endpoint(self, path)

    def bind(
        self,
        path: str,
        method: Union[HTTPMethod, str],
        media_type: Optional[str] = None,
        operation_id: str = "",
    ) -> Operation:
        """Bind one operation. Performs no I/O."""
        descriptor = OperationDescriptor(
            base_url=self._base_url,
            path=path,
            method=HTTPMethod(method.lower()),
            media_type=media_type,
            operation_id=operation_id,
        )
        return Operation(descriptor, self._options, self._interceptors, self._transport)

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #

    async def aclose(self) -> None:
        """Close the transport if it supports closing."""
        aclose = getattr(self._transport, "aclose", None)
        if aclose is not None:
            await aclose()

    async def __aenter__(self) -> Client:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return (
            f"Client(base_url={self._base_url!r}, "
            f"interceptors={len(self._interceptors)})"
        )


class Endpoint:
    """A path template selected on a :class:`Client`, awaiting its method."""

    def __init__(self, client: Client, path: str) -> None:
        self._client = client
        self._path = path

    @property
    def path(self) -> str:
        return self._path

    def method(
        self,
        method: Union[HTTPMethod, str],
        media_type: Optional[str] = None,
        operation_id: str = "",
    ) -> Operation:
        """Bind *method* (and optionally the request *media_type*) to this path."""
        return self._client.bind(self._path, method, media_type, operation_id)
