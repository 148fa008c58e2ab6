"""HTTP client module for specfetch.

Turns endpoint coordinates into awaitable operations:

* :class:`Client` -- immutable configuration value (base URL, default
  options, interceptors, transport) with ``endpoint(path).method(verb)``.
* :class:`Operation` -- the bound callable, with ``stream`` and tagged errors.
* :func:`compose_chain` -- the interceptor chain.
* :class:`HttpxTransport` -- the default terminal transport.

Example::

    from specfetch.client import Client

    async with Client("https://api.example.com") as client:
        list_users = client.endpoint("/users").method("get")
        result = await list_users({"query": {"page": 2}})
"""

from specfetch.client.builder import Client, Endpoint
from specfetch.client.chain import compose_chain
from specfetch.client.decoder import decode_response, fetch_response
from specfetch.client.operation import Operation
from specfetch.client.transport import HttpxTransport

__all__ = [
    "Client",
    "Endpoint",
    "HttpxTransport",
    "Operation",
    "compose_chain",
    "decode_response",
    "fetch_response",
]
