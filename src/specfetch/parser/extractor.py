"""Extract operation coordinates from Swagger 2.0 and OpenAPI 3.x documents.

Only what the runtime needs is extracted: path, method, ``operationId``,
the request media type, and parameter names. Payload and response shapes
stay a concern of the calling code.

Internal ``$ref`` pointers are followed for parameter and request-body
objects; schemas are never walked.

The request media type is chosen from the declared content types: the
first JSON type wins and is kept as declared (``+json`` subtypes included),
then ``multipart/form-data``, then ``application/x-www-form-urlencoded``,
then the first declared type.
"""

from __future__ import annotations

from typing import Any, Optional

from specfetch.exceptions import SpecParseError
from specfetch.models import APIOperation, HTTPMethod, MediaType, ParsedSpec
from specfetch.parser.loader import validate_spec_version
from specfetch.request.headers import is_json_content_type


def extract_spec(raw_spec: dict[str, Any]) -> ParsedSpec:
    """Build a :class:`~specfetch.models.ParsedSpec` from a loaded document.

    Args:
        raw_spec: The document as returned by
            :func:`~specfetch.parser.loader.load_spec`.

    Returns:
        The title, version, default base URL and every operation.

    Raises:
        SpecParseError: If the version is unsupported or a ``$ref`` is broken.
    """
    spec_version = validate_spec_version(raw_spec)
    info = raw_spec.get("info") or {}
    return ParsedSpec(
        title=info.get("title", "Untitled API"),
        version=str(info.get("version", "0.0.0")),
        spec_version=spec_version,
        base_url=_base_url(raw_spec, spec_version),
        operations=extract_operations(raw_spec),
    )


def extract_operations(spec: dict[str, Any]) -> list[APIOperation]:
    """Return one :class:`~specfetch.models.APIOperation` per path + method."""
    is_swagger = "swagger" in spec
    global_consumes = spec.get("consumes") or []
    operations: list[APIOperation] = []

    for path, path_item in (spec.get("paths") or {}).items():
        if not isinstance(path_item, dict):
            continue
        path_item = _deref(spec, path_item)
        shared_params = path_item.get("parameters") or []

        for method in HTTPMethod:
            operation = path_item.get(method.value)
            if not isinstance(operation, dict):
                continue

            params = _merge_parameters(
                spec, shared_params, operation.get("parameters") or []
            )
            if is_swagger:
                media_type = _swagger_media_type(
                    params, operation.get("consumes") or global_consumes
                )
            else:
                media_type = _openapi_media_type(spec, operation.get("requestBody"))

            operations.append(
                APIOperation(
                    path=path,
                    method=method,
                    operation_id=operation.get("operationId"),
                    summary=operation.get("summary"),
                    tags=operation.get("tags") or [],
                    media_type=media_type,
                    path_params=[p["name"] for p in params if p.get("in") == "path"],
                    query_params=[p["name"] for p in params if p.get("in") == "query"],
                    deprecated=bool(operation.get("deprecated", False)),
                )
            )

    return operations


def _merge_parameters(
    spec: dict[str, Any], shared: list[Any], own: list[Any]
) -> list[dict[str, Any]]:
    """Merge path-level and operation-level parameters.

    Operation-level entries replace path-level ones with the same
    ``name`` and ``in``.
    """
    merged: dict[tuple[str, str], dict[str, Any]] = {}
    for raw in list(shared) + list(own):
        param = _deref(spec, raw)
        if not isinstance(param, dict) or "name" not in param:
            continue
        merged[(param["name"], param.get("in", ""))] = param
    return list(merged.values())


def _openapi_media_type(spec: dict[str, Any], request_body: Any) -> Optional[str]:
    if not request_body:
        return None
    body = _deref(spec, request_body)
    return _preferred_media_type(list((body.get("content") or {}).keys()))


def _swagger_media_type(
    params: list[dict[str, Any]], consumes: list[str]
) -> Optional[str]:
    if any(p.get("in") == "formData" for p in params):
        if MediaType.MULTIPART.value in consumes or any(
            p.get("type") == "file" for p in params
        ):
            return MediaType.MULTIPART.value
        return MediaType.FORM_URLENCODED.value
    if any(p.get("in") == "body" for p in params):
        return _preferred_media_type(consumes) or MediaType.JSON.value
    return None


def _preferred_media_type(candidates: list[str]) -> Optional[str]:
    if not candidates:
        return None
    for candidate in candidates:
        if is_json_content_type(candidate):
            return candidate
    for preferred in (MediaType.MULTIPART.value, MediaType.FORM_URLENCODED.value):
        if preferred in candidates:
            return preferred
    return candidates[0]


def _base_url(spec: dict[str, Any], spec_version: str) -> str:
    if spec_version == "2.0":
        host = spec.get("host")
        base_path = spec.get("basePath", "")
        if not host:
            return base_path.rstrip("/")
        schemes = spec.get("schemes") or ["https"]
        return f"{schemes[0]}://{host}{base_path}".rstrip("/")

    servers = spec.get("servers") or []
    if not servers:
        return ""
    server = servers[0]
    url = server.get("url", "")
    # Substitute server variables with their declared defaults
    for name, variable in (server.get("variables") or {}).items():
        url = url.replace("{" + name + "}", str(variable.get("default", "")))
    return url.rstrip("/")


def _deref(spec: dict[str, Any], node: Any) -> Any:
    """Follow internal ``$ref`` pointers until a concrete object is reached."""
    seen: set[str] = set()
    while isinstance(node, dict) and "$ref" in node:
        ref = node["$ref"]
        if ref in seen:
            raise SpecParseError(f"Circular $ref: {ref}")
        seen.add(ref)
        node = _resolve_pointer(spec, ref)
    return node


def _resolve_pointer(spec: dict[str, Any], ref: str) -> Any:
    if not ref.startswith("#/"):
        raise SpecParseError(
            f"External $ref not supported: {ref}. Only internal references (#/...) are resolved."
        )

    current: Any = spec
    for segment in ref[2:].split("/"):
        # RFC 6901 escaping
        segment = segment.replace("~1", "/").replace("~0", "~")
        if isinstance(current, dict) and segment in current:
            current = current[segment]
        elif isinstance(current, list) and segment.isdigit() and int(segment) < len(current):
            current = current[int(segment)]
        else:
            raise SpecParseError(f"Unresolvable $ref: {ref}")
    return current
