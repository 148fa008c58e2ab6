"""Shared test fixtures for specfetch.

Provides the petstore description fixtures, a stub transport that records
every exchange, and an isolated working directory for config tests. These
fixtures are discovered by pytest and available to all test modules without
explicit imports.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Optional

import httpx
import pytest

from specfetch.models import RequestOptions


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Stub transport
# ---------------------------------------------------------------------------


class StubTransport:
    """Transport double returning canned responses and recording calls.

    ``respond`` receives ``(url, options)`` and returns ``(status, body,
    headers)``; ``body`` may be ``bytes``, ``str``, or a JSON-serialisable
    object (which also sets ``content-type: application/json``).
    """

    def __init__(
        self,
        respond: Optional[Callable[[str, RequestOptions], tuple[int, Any, dict[str, str]]]] = None,
    ) -> None:
        self._respond = respond or (lambda url, options: (200, {"ok": True}, {}))
        self.calls: list[tuple[str, RequestOptions, bool]] = []

    async def __call__(
        self, url: str, options: RequestOptions, *, stream: bool = False
    ) -> httpx.Response:
        self.calls.append((url, options, stream))
        status, body, headers = self._respond(url, options)
        request = httpx.Request(options.method or "GET", url)
        if isinstance(body, bytes):
            return httpx.Response(status, content=body, headers=headers, request=request)
        if isinstance(body, str):
            return httpx.Response(status, text=body, headers=headers, request=request)
        return httpx.Response(status, json=body, headers=headers, request=request)

    @property
    def last(self) -> tuple[str, RequestOptions, bool]:
        return self.calls[-1]


@pytest.fixture
def stub_transport() -> type[StubTransport]:
    """The :class:`StubTransport` class, for tests that build their own."""
    return StubTransport


@pytest.fixture
def ok_transport() -> StubTransport:
    """A stub transport that answers every call with ``200 {"ok": true}``."""
    return StubTransport()


# ---------------------------------------------------------------------------
# Description fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def petstore_raw() -> dict[str, Any]:
    """Load the raw OpenAPI 3.0 petstore description."""
    with open(FIXTURES_DIR / "petstore_3.0.json") as f:
        return json.load(f)


@pytest.fixture
def petstore_path() -> Path:
    """Path to the OpenAPI 3.0 petstore description."""
    return FIXTURES_DIR / "petstore_3.0.json"


@pytest.fixture
def swagger_raw() -> dict[str, Any]:
    """Load the raw Swagger 2.0 upload description."""
    with open(FIXTURES_DIR / "upload_2.0.json") as f:
        return json.load(f)


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run in an empty working directory with no SPECFETCH_* variables set."""
    for var in ["SPECFETCH_BASE_URL", "SPECFETCH_TIMEOUT"]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path
