# cluster_client/core/errors.py
"""Errors raised by the cluster client's lifecycle layer.

Every error carries a short ``user_message`` safe to show outside the
process and a ``context`` dict with the offending input (state value,
module path, config file), so the owning client can log or surface it
without parsing the message text.
"""

from __future__ import annotations

from typing import Any


class ClusterClientError(Exception):
    """Root of the cluster_client error tree.

    Attributes:
        user_message: Short description without internal details.
        context: Offending input, keyed by field name.
    """

    def __init__(
        self,
        message: str,
        *,
        user_message: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.user_message = user_message or message
        self.context = context or {}


class InvalidStateError(ClusterClientError):
    """emit() got a value outside starting/started/shuttingDown/shutdown.

    Raised before the running flag or any listener is touched.
    ``context["state"]`` holds the ``repr`` of the rejected value.
    """


class LoaderError(ClusterClientError):
    """A configured listener could not be turned into a callable.

    ``context`` holds ``path`` and ``exported_name``; the import failure,
    if any, is chained as ``__cause__``.
    """


class ConfigError(ClusterClientError):
    """Listener configuration file or section is malformed."""
