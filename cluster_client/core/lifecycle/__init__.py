# cluster_client/core/lifecycle/__init__.py
"""Lifecycle state broadcasting for the cluster client.

This package tracks the client's coarse connection phase and notifies
listeners synchronously whenever it changes.

Public API:
    - LifecycleState: Closed enum (STARTING, STARTED, SHUTTING_DOWN, SHUTDOWN)
    - LifecycleListener: Callable[[LifecycleState], None]
    - LifecycleBroadcaster: Listener registry, running flag and dispatch

Example:
    >>> from cluster_client.core.lifecycle import LifecycleBroadcaster, LifecycleState
    >>>
    >>> def on_lifecycle(state):
    ...     print(f"Client is {state.value}")
    >>>
    >>> broadcaster = LifecycleBroadcaster([on_lifecycle])
    Client is starting
    >>> broadcaster.emit(LifecycleState.STARTED)
    Client is started
"""
from cluster_client.core.lifecycle.broadcaster import LifecycleBroadcaster
from cluster_client.core.lifecycle.events import LifecycleListener, LifecycleState

__all__ = ["LifecycleState", "LifecycleListener", "LifecycleBroadcaster"]
