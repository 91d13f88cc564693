# cluster_client/common/client_config.py
#
# Frozen dataclasses for the listener-related parts of the client
# configuration, plus YAML file loading.
#
# Expected YAML layout:
#
#   listeners:
#     lifecycle:
#       - path: my_app.listeners
#         exportedName: on_lifecycle
#       - path: /opt/hooks/audit.py
#         exported_name: AuditHook.record

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from cluster_client.core.errors import ConfigError
from cluster_client.core.lifecycle.events import LifecycleListener


def _require_str(d: dict[str, Any], *keys: str) -> str:
    """Return the first non-blank string found under ``keys``.

    Raises:
        ConfigError: If none of the keys holds a non-blank string
    """
    for key in keys:
        value = d.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    raise ConfigError(
        f"Listener config requires a non-empty '{keys[0]}'",
        context={"entry": dict(d)},
    )


@dataclass(frozen=True)
class ImportConfig:
    """Descriptor of a listener exported by an external module.

    Thread-safety: Immutable (frozen=True)

    Attributes:
        path: Dotted module name or filesystem path to a ``.py`` file
        exported_name: Attribute to load from the module (may be dotted)
    """

    path: str
    exported_name: str

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "ImportConfig":
        """Build from a config entry. ``exportedName`` is accepted as an alias.

        Raises:
            ConfigError: If the entry is not a mapping or a field is missing
        """
        if not isinstance(d, dict):
            raise ConfigError(
                f"Listener config entry must be a mapping, got {type(d).__name__}",
                context={"entry": repr(d)},
            )
        return cls(
            path=_require_str(d, "path"),
            exported_name=_require_str(d, "exported_name", "exportedName"),
        )


@dataclass(frozen=True)
class ClientConfig:
    """Listener configuration consumed by the owning client.

    Thread-safety: Immutable (frozen=True)

    Attributes:
        lifecycle_listeners: In-process callbacks, registered first
        listener_configs: External listeners, resolved by a loader and
            registered after the in-process ones
    """

    lifecycle_listeners: tuple[LifecycleListener, ...] = ()
    listener_configs: tuple[ImportConfig, ...] = ()

    @classmethod
    def from_dict(
        cls,
        d: dict[str, Any],
        lifecycle_listeners: Iterable[LifecycleListener] = (),
    ) -> "ClientConfig":
        """Build from a parsed config mapping.

        Callbacks cannot be expressed in a config file, so in-process
        listeners are passed alongside the mapping.

        Args:
            d: Root config mapping (``listeners.lifecycle`` is read)
            lifecycle_listeners: In-process callbacks

        Returns:
            ClientConfig instance

        Raises:
            ConfigError: If ``listeners`` or ``listeners.lifecycle`` has the wrong shape
        """
        listeners_section = d.get("listeners") or {}
        if not isinstance(listeners_section, dict):
            raise ConfigError("'listeners' must be a mapping")

        raw_entries = listeners_section.get("lifecycle") or []
        if not isinstance(raw_entries, list):
            raise ConfigError("'listeners.lifecycle' must be a list")

        return cls(
            lifecycle_listeners=tuple(lifecycle_listeners),
            listener_configs=tuple(ImportConfig.from_dict(entry) for entry in raw_entries),
        )


def load_client_config(
    path: str | Path,
    lifecycle_listeners: Iterable[LifecycleListener] = (),
) -> ClientConfig:
    """Load a ClientConfig from a YAML file.

    Args:
        path: YAML file path
        lifecycle_listeners: In-process callbacks to attach

    Returns:
        ClientConfig instance

    Raises:
        ConfigError: Missing file, YAML syntax error (with 1-indexed
            line/column in context when available), empty file, non-mapping
            root, or invalid listener section
    """
    config_path = Path(path)
    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigError(
            f"Config file not found: {config_path}",
            context={"path": str(config_path)},
        ) from e
    except yaml.YAMLError as e:
        context: dict[str, Any] = {"path": str(config_path)}
        mark = getattr(e, "problem_mark", None)
        if mark is not None:
            context["line"] = mark.line + 1  # 0-indexed -> 1-indexed
            context["column"] = mark.column + 1
        raise ConfigError(f"YAML syntax error: {e}", context=context) from e

    if data is None:
        raise ConfigError("Config file is empty", context={"path": str(config_path)})
    if not isinstance(data, dict):
        raise ConfigError(
            "Config root must be a mapping",
            context={"path": str(config_path)},
        )
    return ClientConfig.from_dict(data, lifecycle_listeners)
