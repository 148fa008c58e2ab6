"""Query-string flattening.

Nested mappings become dotted keys (``filter.owner=me``), sequences become
repeated keys (``tag=a&tag=b``), dates are rendered as ISO-8601 and ``None``
leaves are dropped. The resulting pairs are serialised with
``application/x-www-form-urlencoded`` rules.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Mapping, Optional
from urllib.parse import urlencode


def encode_query(params: Optional[Mapping[str, Any]] = None) -> str:
    """Encode *params* as a query string.

    Args:
        params: Possibly nested query parameters.

    Returns:
        ``"?a=1&b=2"`` when at least one pair is produced, otherwise ``""``.
    """
    if not params:
        return ""

    pairs: list[tuple[str, str]] = []
    _flatten(params, pairs, parent=None)
    if not pairs:
        return ""
    return "?" + urlencode(pairs)


def _flatten(
    obj: Mapping[str, Any], pairs: list[tuple[str, str]], parent: Optional[str]
) -> None:
    for key, leaf in obj.items():
        name = f"{parent}.{key}" if parent else str(key)

        if leaf is None:
            continue
        if isinstance(leaf, (list, tuple)):
            pairs.extend((name, _stringify(v)) for v in leaf if v is not None)
        elif isinstance(leaf, Mapping):
            _flatten(leaf, pairs, parent=name)
        else:
            _set(pairs, name, _stringify(leaf))


def _set(pairs: list[tuple[str, str]], name: str, value: str) -> None:
    """Replace the first *name* entry in place and drop any others."""
    for index, (existing, _) in enumerate(pairs):
        if existing == name:
            pairs[index] = (name, value)
            pairs[index + 1:] = [pair for pair in pairs[index + 1:] if pair[0] != name]
            return
    pairs.append((name, value))


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)
