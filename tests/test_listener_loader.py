"""Tests for listener resolution from module paths and exported names."""

import textwrap
from pathlib import Path

import pytest

from cluster_client.common.client_config import ClientConfig, ImportConfig
from cluster_client.core.errors import LoaderError
from cluster_client.core.lifecycle import LifecycleState
from cluster_client.core.listener_loader import load_listener, resolve_listeners


def _write_module(tmp_path: Path, source: str, name: str = "hooks.py") -> Path:
    module_path = tmp_path / name
    module_path.write_text(textwrap.dedent(source), encoding="utf-8")
    return module_path


class TestLoadListener:
    def test_load_function_from_file(self, tmp_path: Path) -> None:
        module_path = _write_module(
            tmp_path,
            """
            SEEN = []

            def on_lifecycle(state):
                SEEN.append(state)
            """,
        )

        listener = load_listener(ImportConfig(str(module_path), "on_lifecycle"))
        listener(LifecycleState.STARTED)

        assert listener.__globals__["SEEN"] == [LifecycleState.STARTED]

    def test_load_dotted_export_from_file(self, tmp_path: Path) -> None:
        module_path = _write_module(
            tmp_path,
            """
            class Hooks:
                @staticmethod
                def record(state):
                    return state
            """,
        )

        listener = load_listener(ImportConfig(str(module_path), "Hooks.record"))

        assert listener(LifecycleState.SHUTDOWN) is LifecycleState.SHUTDOWN

    def test_load_from_dotted_module_name(self) -> None:
        listener = load_listener(ImportConfig("json", "dumps"))

        import json

        assert listener is json.dumps

    def test_module_with_postponed_annotations_dataclass(self, tmp_path: Path) -> None:
        """Modules that look themselves up in sys.modules at import time load fine."""
        module_path = _write_module(
            tmp_path,
            """
            from __future__ import annotations

            from dataclasses import dataclass

            @dataclass
            class Seen:
                state: object

            def hook(state):
                return Seen(state)
            """,
        )

        listener = load_listener(ImportConfig(str(module_path), "hook"))

        assert listener(LifecycleState.STARTED).state is LifecycleState.STARTED

    def test_same_file_shares_module_state(self, tmp_path: Path) -> None:
        module_path = _write_module(
            tmp_path,
            """
            SEEN = []

            def a(state):
                SEEN.append(("a", state))

            def b(state):
                SEEN.append(("b", state))
            """,
        )
        config = ClientConfig(
            listener_configs=(
                ImportConfig(str(module_path), "a"),
                ImportConfig(str(module_path), "b"),
            )
        )

        first, second = resolve_listeners(config)
        first(LifecycleState.STARTING)
        second(LifecycleState.STARTING)

        assert first.__globals__ is second.__globals__
        assert first.__globals__["SEEN"] == [
            ("a", LifecycleState.STARTING),
            ("b", LifecycleState.STARTING),
        ]

    def test_failed_import_is_retried(self, tmp_path: Path) -> None:
        """A module whose body raised is not left behind half-initialised."""
        module_path = _write_module(tmp_path, "raise RuntimeError('not yet')\n")
        with pytest.raises(LoaderError):
            load_listener(ImportConfig(str(module_path), "hook"))

        _write_module(tmp_path, "def hook(state):\n    return state\n")
        listener = load_listener(ImportConfig(str(module_path), "hook"))

        assert listener(LifecycleState.SHUTDOWN) is LifecycleState.SHUTDOWN

    def test_bare_py_suffix_is_a_module_name(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """``pkg.py`` with no such file on disk resolves as package ``pkg``, submodule ``py``."""
        package_dir = tmp_path / "lifecycle_hooks_pkg"
        package_dir.mkdir()
        (package_dir / "__init__.py").write_text("", encoding="utf-8")
        (package_dir / "py.py").write_text("def hook(state):\n    return 'from submodule'\n", encoding="utf-8")
        monkeypatch.syspath_prepend(str(tmp_path))

        listener = load_listener(ImportConfig("lifecycle_hooks_pkg.py", "hook"))

        assert listener(LifecycleState.STARTED) == "from submodule"

    def test_missing_file(self, tmp_path: Path) -> None:
        missing = tmp_path / "nope.py"

        with pytest.raises(LoaderError) as exc_info:
            load_listener(ImportConfig(str(missing), "on_lifecycle"))

        assert exc_info.value.context == {"path": str(missing), "exported_name": "on_lifecycle"}
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)

    def test_unknown_module(self) -> None:
        with pytest.raises(LoaderError) as exc_info:
            load_listener(ImportConfig("cluster_client_no_such_module", "listener"))

        assert isinstance(exc_info.value.__cause__, ModuleNotFoundError)

    def test_module_raising_on_import(self, tmp_path: Path) -> None:
        module_path = _write_module(tmp_path, "raise RuntimeError('broken at import')\n")

        with pytest.raises(LoaderError, match="broken at import"):
            load_listener(ImportConfig(str(module_path), "anything"))

    def test_missing_export(self, tmp_path: Path) -> None:
        module_path = _write_module(tmp_path, "def other(state):\n    pass\n")

        with pytest.raises(LoaderError, match="has no exported name 'on_lifecycle'"):
            load_listener(ImportConfig(str(module_path), "on_lifecycle"))

    def test_non_callable_export(self, tmp_path: Path) -> None:
        module_path = _write_module(tmp_path, "on_lifecycle = 42\n")

        with pytest.raises(LoaderError) as exc_info:
            load_listener(ImportConfig(str(module_path), "on_lifecycle"))

        assert exc_info.value.user_message == "Configured listener is not callable"


class TestResolveListeners:
    def test_in_process_first_then_loaded_in_order(self) -> None:
        def inline(state: LifecycleState) -> None:
            pass

        loaded: dict[str, object] = {}

        def fake_loader(import_config: ImportConfig):
            def listener(state: LifecycleState) -> None:
                pass

            loaded[import_config.exported_name] = listener
            return listener

        config = ClientConfig(
            lifecycle_listeners=(inline,),
            listener_configs=(ImportConfig("mod", "a"), ImportConfig("mod", "b")),
        )

        listeners = resolve_listeners(config, fake_loader)

        assert listeners == [inline, loaded["a"], loaded["b"]]

    def test_loader_error_propagates(self) -> None:
        def failing_loader(import_config: ImportConfig):
            raise LoaderError("cannot load", context={"path": import_config.path})

        config = ClientConfig(listener_configs=(ImportConfig("mod", "a"),))

        with pytest.raises(LoaderError, match="cannot load"):
            resolve_listeners(config, failing_loader)

    def test_empty_config(self) -> None:
        assert resolve_listeners(ClientConfig()) == []
