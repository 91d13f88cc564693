# cluster_client/core/lifecycle/events.py
"""Lifecycle states for the cluster client.

The vocabulary is closed: these four members are the only values the
broadcaster accepts. Member values are the wire-compatible state names
(``"shuttingDown"`` keeps its camel case).
"""

from collections.abc import Callable
from enum import Enum
from typing import Any

from cluster_client.core.errors import InvalidStateError


class LifecycleState(Enum):
    """Coarse connection phase of the client."""

    STARTING = "starting"  # From creation of the client until connected
    STARTED = "started"  # Connected to the cluster, ready to use
    SHUTTING_DOWN = "shuttingDown"  # Disconnect initiated
    SHUTDOWN = "shutdown"  # Disconnect completed gracefully

    @classmethod
    def parse(cls, value: Any) -> "LifecycleState":
        """Coerce a member or its string value to a LifecycleState.

        Args:
            value: A LifecycleState member or one of the four state names

        Returns:
            The matching LifecycleState member

        Raises:
            InvalidStateError: If value is not a member and not a known name.
                Member names such as ``"STARTED"`` are not accepted.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for member in cls:
                if member.value == value:
                    return member
        raise InvalidStateError(
            f"{value!r} is not a valid lifecycle event",
            user_message="Unknown lifecycle state",
            context={"state": repr(value)},
        )


# Listener signature: called synchronously with the new state
LifecycleListener = Callable[[LifecycleState], None]
