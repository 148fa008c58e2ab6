"""Ready-made interceptors.

Each factory returns an ``async (url, options, next)`` callable suitable
for :meth:`~specfetch.client.builder.Client.with_interceptor`:

* :func:`logging_interceptor` -- logs each exchange with its status and timing.
* :func:`header_interceptor` -- adds static headers the caller did not set.
* :func:`bearer_auth` -- ``Authorization: Bearer <token>``.
* :func:`api_key_auth` -- API key in a header, query parameter, or cookie.

Credentials are given as source descriptors (``env:VAR``, ``file:/path``,
``value:...``) and resolved through
:func:`~specfetch.config.resolve_credential` on first use.
"""

from specfetch.interceptors.auth import api_key_auth, bearer_auth
from specfetch.interceptors.headers import header_interceptor
from specfetch.interceptors.log import logging_interceptor

__all__ = ["api_key_auth", "bearer_auth", "header_interceptor", "logging_interceptor"]
