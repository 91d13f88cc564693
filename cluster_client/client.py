# cluster_client/client.py
"""Owning client for the lifecycle broadcaster.

ClusterClient wires configuration, listener loading and logging into a
LifecycleBroadcaster and drives the four lifecycle transitions. Actual
cluster connection management is injected as plain callables.

Usage:
    from cluster_client.client import ClusterClient
    from cluster_client.common.client_config import load_client_config

    config = load_client_config("client.yaml", lifecycle_listeners=[print])
    client = ClusterClient(config, connector=connect_to_cluster)  # -> starting
    client.start()     # -> started
    client.shutdown()  # -> shuttingDown, shutdown
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from cluster_client.common.client_config import ClientConfig
from cluster_client.common.logging_sink import LoggingSink, StdlibLoggingSink
from cluster_client.core.lifecycle import LifecycleBroadcaster, LifecycleState
from cluster_client.core.listener_loader import ListenerLoader, load_listener, resolve_listeners


def _get_logger() -> logging.Logger:
    """Get module logger (lazy to avoid side effect at import time)."""
    return logging.getLogger(__name__)


class ClusterClient:
    """Client shell that owns the lifecycle broadcaster.

    Args:
        config: Listener configuration (default: no listeners)
        loader: Resolves configured listener descriptors
        logging_sink: Shared with the broadcaster (default: StdlibLoggingSink)
        connector: Called by start() to connect; errors propagate
        disconnector: Called by shutdown() between shuttingDown and shutdown

    Raises:
        LoaderError: If a configured listener cannot be resolved. The
            broadcaster is not created and no event is emitted.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        loader: ListenerLoader = load_listener,
        logging_sink: LoggingSink | None = None,
        connector: Callable[[], None] | None = None,
        disconnector: Callable[[], None] | None = None,
    ) -> None:
        self._config = config or ClientConfig()
        self._connector = connector
        self._disconnector = disconnector
        self._shut_down = False

        listeners = resolve_listeners(self._config, loader)
        self._lifecycle = LifecycleBroadcaster(
            listeners,
            logging_sink=logging_sink or StdlibLoggingSink(),
        )

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def lifecycle(self) -> LifecycleBroadcaster:
        """The lifecycle broadcaster (add_listener, is_running)."""
        return self._lifecycle

    def is_running(self) -> bool:
        return self._lifecycle.is_running()

    def start(self) -> None:
        """Connect, then emit STARTED.

        If the connector raises, STARTED is not emitted and the error propagates.
        """
        if self._connector is not None:
            self._connector()
        self._lifecycle.emit(LifecycleState.STARTED)

    def shutdown(self) -> None:
        """Emit SHUTTING_DOWN, disconnect, then emit SHUTDOWN.

        A second call after a completed shutdown is a no-op unless the client
        was started again in between. SHUTDOWN is emitted even when the
        disconnector raises; the disconnector's error is then re-raised.
        """
        if self._shut_down and not self._lifecycle.is_running():
            _get_logger().debug("shutdown() called on a client that is already shut down")
            return

        self._lifecycle.emit(LifecycleState.SHUTTING_DOWN)
        try:
            if self._disconnector is not None:
                self._disconnector()
        finally:
            self._shut_down = True
            self._lifecycle.emit(LifecycleState.SHUTDOWN)
