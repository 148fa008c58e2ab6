"""Request building -- path rendering, query flattening, headers and bodies.

These are the pure, synchronous pieces of an exchange. They perform no I/O
and are composed per call by :class:`~specfetch.client.operation.Operation`.
"""

from specfetch.request.body import MultipartForm, UrlEncodedForm, encode_body
from specfetch.request.headers import compose_headers, merge_options
from specfetch.request.path import render_path
from specfetch.request.query import encode_query

__all__ = [
    "MultipartForm",
    "UrlEncodedForm",
    "compose_headers",
    "encode_body",
    "encode_query",
    "merge_options",
    "render_path",
]
