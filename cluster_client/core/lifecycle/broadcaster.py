# cluster_client/core/lifecycle/broadcaster.py
"""Lifecycle broadcaster (thread-safe, synchronous dispatch).

LifecycleBroadcaster tracks the client's coarse connection phase and fans
each transition out to registered listeners on the caller's thread.

Dispatch Rules:
- Listeners are called in registration order, one at a time
- Duplicates are allowed (a callable registered twice is called twice)
- Exception-safe (one listener failure doesn't affect others)
- A failing logging sink never interrupts dispatch
- No ordering is enforced between states; callers own the sequence

Snapshot Semantics:
- emit() copies the listener list under the lock, then releases it
- Listeners added during emit() are not called in that round
- A listener may call emit() or add_listener() re-entrantly

Running Flag:
- False at construction
- STARTED sets it, SHUTTING_DOWN clears it, other states leave it as is
"""

import sys
import threading
import traceback
from collections.abc import Iterable
from typing import Any

from cluster_client.common.logging_sink import LoggingSink, StdlibLoggingSink
from cluster_client.core.lifecycle.events import LifecycleListener, LifecycleState

COMPONENT = "LifecycleService"


class LifecycleBroadcaster:
    """Lifecycle state broadcaster owned by a single client.

    Example:
        >>> seen = []
        >>> broadcaster = LifecycleBroadcaster([seen.append])
        >>> seen
        [<LifecycleState.STARTING: 'starting'>]
        >>> broadcaster.emit("started")
        >>> broadcaster.is_running()
        True
    """

    def __init__(
        self,
        listeners: Iterable[LifecycleListener] = (),
        *,
        logging_sink: LoggingSink | None = None,
    ) -> None:
        """Register the initial listeners, then emit STARTING.

        Every listener passed here receives STARTING before the constructor
        returns.

        Args:
            listeners: Initial listeners, in dispatch order.
            logging_sink: Destination for transition and failure logs.
                Defaults to a StdlibLoggingSink.
        """
        self._listeners: list[LifecycleListener] = []
        self._running = False
        self._lock = threading.RLock()
        self._logging_sink: LoggingSink = logging_sink or StdlibLoggingSink()

        for listener in listeners:
            self.add_listener(listener)
        self.emit(LifecycleState.STARTING)

    def add_listener(self, listener: LifecycleListener) -> None:
        """Append a listener for all future transitions.

        Args:
            listener: Callable receiving the new LifecycleState
        """
        with self._lock:
            self._listeners.append(listener)

    def emit(self, state: LifecycleState | str) -> None:
        """Move to ``state`` and notify every registered listener.

        Validation happens before anything else: an unknown state leaves the
        running flag and the listener list untouched, logs nothing and calls
        nobody.

        Args:
            state: A LifecycleState member or its string value

        Raises:
            InvalidStateError: If state is not one of the four lifecycle states
        """
        new_state = LifecycleState.parse(state)

        with self._lock:
            if new_state is LifecycleState.STARTED:
                self._running = True
            elif new_state is LifecycleState.SHUTTING_DOWN:
                self._running = False
            listeners = tuple(self._listeners)

        self._log_transition(new_state)

        for listener in listeners:
            try:
                listener(new_state)
            except Exception as e:
                self._log_error(new_state, listener, e)

    def is_running(self) -> bool:
        """Return True while the client is considered usable."""
        with self._lock:
            return self._running

    @property
    def listener_count(self) -> int:
        """Number of registered listeners (introspection only)."""
        with self._lock:
            return len(self._listeners)

    def _log_transition(self, state: LifecycleState) -> None:
        """Log the transition through the sink, falling back to stderr."""
        message = f"Cluster client is {state.value}"
        try:
            self._logging_sink.info(COMPONENT, message)
        except Exception:
            print(f"[{COMPONENT}] {message}", file=sys.stderr)

    def _log_error(self, state: LifecycleState, listener: Any, e: Exception) -> None:
        """Report a failed listener through the sink, falling back to stderr.

        The sink receives one combined message (summary + traceback).
        """
        name = getattr(listener, "__name__", repr(listener))
        msg = f"{state.value}: listener {name} failed: {type(e).__name__}: {e!r}"
        full_msg = f"{msg}\n{traceback.format_exc()}"

        try:
            self._logging_sink.error(COMPONENT, full_msg)
        except Exception:
            print(f"[{COMPONENT}] {full_msg}", file=sys.stderr)
