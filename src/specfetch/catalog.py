"""Bind every operation of an API description to a client.

:class:`OperationSet` is the generated surface: one
:class:`~specfetch.client.operation.Operation` per operation in the
description, created once and addressed by ``operationId``::

    ops = OperationSet.from_source(Client(), "petstore.json")
    result = await ops.getPetById({"path": {"petId": "10"}})
    # equivalently: await ops["getPetById"](...)

Operations without an ``operationId`` are addressed as ``"GET /path"``.
When the client has no base URL, the description's default server is used.
"""

from __future__ import annotations

import logging
from typing import Any, Iterator, Mapping

from specfetch.client.builder import Client
from specfetch.client.operation import Operation
from specfetch.models import ParsedSpec
from specfetch.parser import extract_spec, load_spec

logger = logging.getLogger(__name__)


class OperationSet(Mapping[str, Operation]):
    """Read-only mapping of operation ids to bound operations."""

    def __init__(self, operations: Mapping[str, Operation], spec: ParsedSpec) -> None:
        self._operations = dict(operations)
        self._spec = spec

    @classmethod
    def from_spec(cls, client: Client, spec: ParsedSpec) -> OperationSet:
        """Bind every operation in *spec* to *client*."""
        if not client.base_url and spec.base_url:
            client = client.with_base_url(spec.base_url)

        operations: dict[str, Operation] = {}
        for op in spec.operations:
            operation = client.bind(
                op.path, op.method, op.media_type, operation_id=op.operation_id or ""
            )
            if operation.operation_id in operations:
                logger.warning(
                    "Duplicate operationId '%s' at %s %s, keeping the first",
                    operation.operation_id,
                    op.method.value.upper(),
                    op.path,
                )
                continue
            operations[operation.operation_id] = operation

        logger.debug("Bound %d operations from '%s'", len(operations), spec.title)
        return cls(operations, spec)

    @classmethod
    def from_source(cls, client: Client, source: str) -> OperationSet:
        """Load a description from a URL, file or ``'-'`` and bind it."""
        return cls.from_spec(client, extract_spec(load_spec(source)))

    @property
    def spec(self) -> ParsedSpec:
        return self._spec

    def __getitem__(self, operation_id: str) -> Operation:
        return self._operations[operation_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._operations)

    def __len__(self) -> int:
        return len(self._operations)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._operations[name]
        except KeyError:
            raise AttributeError(
                f"{type(self).__name__!r} has no operation {name!r}"
            ) from None
