"""
Pytest configuration and shared fixtures for cluster_client tests.

This module provides:
- RecordingSink: LoggingSink double that keeps every (component, message) pair
- Recorder: listener double that keeps every state it receives
"""

from collections.abc import Callable

import pytest

from cluster_client.core.lifecycle import LifecycleState


class RecordingSink:
    """LoggingSink that records calls instead of logging."""

    def __init__(self) -> None:
        self.infos: list[tuple[str, str]] = []
        self.errors: list[tuple[str, str]] = []

    def info(self, component: str, message: str) -> None:
        self.infos.append((component, message))

    def error(self, component: str, message: str) -> None:
        self.errors.append((component, message))


class Recorder:
    """Listener double. Optionally appends its name to a shared call log."""

    def __init__(self, name: str = "recorder", call_log: list[str] | None = None) -> None:
        self.__name__ = name
        self.states: list[LifecycleState] = []
        self._call_log = call_log

    def __call__(self, state: LifecycleState) -> None:
        self.states.append(state)
        if self._call_log is not None:
            self._call_log.append(self.__name__)


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def make_recorder() -> Callable[..., Recorder]:
    def _make(name: str = "recorder", call_log: list[str] | None = None) -> Recorder:
        return Recorder(name, call_log)

    return _make
