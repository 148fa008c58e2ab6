"""specfetch -- async HTTP clients for OpenAPI operations.

Given the coordinates of an API's operations (path template, method, request
media type) specfetch produces awaitable callables that render the URL,
encode the body, pass the exchange through an ordered interceptor chain, and
decode the response -- raising a tagged error for non-2xx outcomes.

Typical usage::

    from specfetch import Client

    async with Client("https://petstore3.swagger.io/api/v3") as client:
        find = client.endpoint("/pet/findByStatus").method("get")
        result = await find({"query": {"status": "available"}})

Or bind a whole description at once::

    ops = OperationSet.from_source(Client(), "openapi.json")
    await ops.getPetById({"path": {"petId": "10"}})

Modules:
    client: Client builder, bound operations, interceptor chain, transport.
    request: Path, query, header and body encoding.
    parser: Loading Swagger 2.0 / OpenAPI 3.x documents.
    catalog: Binding every operation of a document to a client.
    interceptors: Logging, static-header and auth interceptors.
    config: Configuration precedence and credential sources.
    models: Shared data models.
    exceptions: Error hierarchy.
"""

from specfetch.catalog import OperationSet
from specfetch.client import Client, Endpoint, HttpxTransport, Operation
from specfetch.exceptions import (
    ConfigError,
    MissingPathParameter,
    OperationError,
    SpecfetchError,
    SpecParseError,
    TransportFailure,
)
from specfetch.models import ExchangeResult, HTTPMethod, MediaType, RequestOptions

__version__ = "0.1.0"

__all__ = [
    "Client",
    "ConfigError",
    "Endpoint",
    "ExchangeResult",
    "HTTPMethod",
    "HttpxTransport",
    "MediaType",
    "MissingPathParameter",
    "Operation",
    "OperationError",
    "OperationSet",
    "RequestOptions",
    "SpecParseError",
    "SpecfetchError",
    "TransportFailure",
]
