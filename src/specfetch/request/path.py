"""Path template rendering."""

from __future__ import annotations

import re
from typing import Any, Mapping, Optional
from urllib.parse import quote

from specfetch.exceptions import MissingPathParameter

_PLACEHOLDER = re.compile(r"\{([^}]+)\}")

# Characters left unescaped in a single path segment (encodeURIComponent set)
_SEGMENT_SAFE = "-_.!~*'()"


def render_path(template: str, params: Optional[Mapping[str, Any]] = None) -> str:
    """Substitute ``{name}`` placeholders in *template* from *params*.

    Each value is stringified and percent-encoded as a single path segment,
    so ``/`` and ``?`` inside a value never change the URL structure.

    Args:
        template: Path template, e.g. ``/pets/{petId}``.
        params: Placeholder values. When ``None`` the template is returned
            unchanged.

    Returns:
        The rendered path.

    Raises:
        MissingPathParameter: If a placeholder has no entry in *params*.
    """
    if params is None:
        return template

    def _substitute(match: re.Match[str]) -> str:
        key = match.group(1)
        if key not in params:
            raise MissingPathParameter(key, params)
        return quote(str(params[key]), safe=_SEGMENT_SAFE)

    return _PLACEHOLDER.sub(_substitute, template)


def placeholders(template: str) -> list[str]:
    """Return the placeholder names of *template* in order of appearance."""
    return _PLACEHOLDER.findall(template)
