"""Read API descriptions from a URL, a local file, or stdin.

:func:`load_spec` returns the document as a plain dictionary. JSON and YAML
are both accepted: a ``.json`` / ``.yaml`` suffix or a JSON / YAML response
content type pins the format, otherwise JSON is attempted before YAML.

:func:`validate_spec_version` gates what the extractor accepts: Swagger
2.0 and OpenAPI 3.x.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

import httpx
import yaml

from specfetch.exceptions import SpecParseError

logger = logging.getLogger(__name__)

_FORMAT_BY_SUFFIX = {".json": "json", ".yaml": "yaml", ".yml": "yaml"}

_FETCH_TIMEOUT = 30.0


def load_spec(source: str) -> dict[str, Any]:
    """Load an API description.

    Args:
        source: ``http(s)://`` URL, file path, or ``'-'`` for stdin.

    Returns:
        The parsed document.

    Raises:
        SpecParseError: If the source is unreachable, empty, or not a
            JSON/YAML object.
    """
    text, fmt = _read_source(source)
    if not text.strip():
        if source == "-":
            raise SpecParseError("No input received from stdin")
        raise SpecParseError(f"Spec source is empty: {source}")
    return _parse_content(text, hint=fmt)


def _read_source(source: str) -> tuple[str, Optional[str]]:
    """Return the raw text of *source* and its format, when known."""
    if source == "-":
        try:
            return sys.stdin.read(), None
        except OSError as exc:
            raise SpecParseError(f"Failed to read from stdin: {exc}") from exc

    if source.startswith(("http://", "https://")):
        return _fetch(source)

    path = Path(source)
    if not path.is_file():
        raise SpecParseError(f"Spec file not found: {source}")
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SpecParseError(f"Cannot read spec file {source}: {exc}") from exc
    return text, _FORMAT_BY_SUFFIX.get(path.suffix.lower())


def _fetch(url: str) -> tuple[str, Optional[str]]:
    logger.debug("Fetching API description from %s", url)
    try:
        response = httpx.get(url, timeout=_FETCH_TIMEOUT, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise SpecParseError(
            f"HTTP {exc.response.status_code} while downloading {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise SpecParseError(f"Failed to fetch {url}: {exc}") from exc

    content_type = response.headers.get("content-type", "").lower()
    fmt: Optional[str] = None
    if "json" in content_type:
        fmt = "json"
    elif "yaml" in content_type or "yml" in content_type:
        fmt = "yaml"
    return response.text, fmt


def _parse_content(content: str, hint: Optional[str] = None) -> dict[str, Any]:
    """Decode *content* as JSON and/or YAML according to *hint*.

    ``"json"`` accepts JSON only, ``"yaml"`` YAML only, and no hint tries
    JSON then YAML, reporting both errors when neither parses.
    """
    errors: list[str] = []

    if hint in (None, "json"):
        try:
            return _require_mapping(json.loads(content))
        except json.JSONDecodeError as exc:
            if hint == "json":
                raise SpecParseError(f"Invalid JSON: {exc}") from exc
            errors.append(f"JSON error: {exc}")

    try:
        document = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        errors.append(f"YAML error: {exc}")
        raise SpecParseError(
            "Could not parse the document as JSON or YAML\n  " + "\n  ".join(errors)
        ) from exc
    return _require_mapping(document)


def _require_mapping(document: Any) -> dict[str, Any]:
    if isinstance(document, dict):
        return document
    kind = "empty document" if document is None else type(document).__name__
    raise SpecParseError(f"Spec must be a JSON/YAML object (got {kind})")


def validate_spec_version(spec: dict[str, Any]) -> str:
    """Return the declared version, rejecting unsupported ones.

    Returns:
        ``"2.0"`` for Swagger documents, the ``openapi`` value otherwise.

    Raises:
        SpecParseError: If neither ``swagger`` nor ``openapi`` is present,
            or the version is not Swagger 2.0 / OpenAPI 3.x.
    """
    if "swagger" in spec:
        declared = str(spec["swagger"])
        if declared != "2.0":
            raise SpecParseError(f"Unsupported Swagger version: {declared}")
        return declared

    if "openapi" not in spec:
        raise SpecParseError(
            "Missing 'openapi' or 'swagger' field; not an API description"
        )
    declared = str(spec["openapi"])
    if declared.split(".", 1)[0] != "3":
        raise SpecParseError(
            f"Unsupported OpenAPI version: {declared} (Swagger 2.0 and OpenAPI 3.x are supported)"
        )
    return declared
