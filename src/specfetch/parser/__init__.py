"""API description parser -- load documents and extract operation coordinates.

Typical usage::

    from specfetch.parser import load_spec, extract_spec

    raw = load_spec("https://petstore3.swagger.io/api/v3/openapi.json")
    parsed = extract_spec(raw)
    for op in parsed.operations:
        print(op.method.value.upper(), op.path, op.media_type)

Sub-modules:

* :mod:`~specfetch.parser.loader` -- I/O layer (URL, file, stdin) plus
  format detection and version validation.
* :mod:`~specfetch.parser.extractor` -- walks ``paths`` and produces
  :class:`~specfetch.models.APIOperation` objects.
"""

from specfetch.parser.extractor import extract_operations, extract_spec
from specfetch.parser.loader import load_spec, validate_spec_version

__all__ = ["extract_operations", "extract_spec", "load_spec", "validate_spec_version"]
