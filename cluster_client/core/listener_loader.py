# cluster_client/core/listener_loader.py
"""Resolve lifecycle listeners declared in configuration.

A listener descriptor names a module (dotted import name or ``.py`` file
path) and an exported attribute. The loader is injected into the owning
client so tests and embedders can swap it out; it must return a callable or
raise LoaderError.

All listeners are resolved before any of them is registered, so a bad
descriptor never leaves the client half-configured.
"""

from __future__ import annotations

import hashlib
import importlib
import importlib.util
import logging
import sys
from pathlib import Path
from types import ModuleType
from typing import Protocol, cast

from cluster_client.common.client_config import ClientConfig, ImportConfig
from cluster_client.core.errors import LoaderError
from cluster_client.core.lifecycle.events import LifecycleListener

logger = logging.getLogger(__name__)


class ListenerLoader(Protocol):
    """Turns an ImportConfig into a callable listener."""

    def __call__(self, import_config: ImportConfig) -> LifecycleListener: ...


def _is_file_path(path: str) -> bool:
    """Existing files and anything with a path separator are file paths.

    A bare ``pkg.py`` that is not an existing file is a dotted module name.
    """
    if Path(path).is_file():
        return True
    return "/" in path or "\\" in path


def _import_from_file(path: str) -> ModuleType:
    """Import a module from a file without touching sys.path.

    The module is registered in sys.modules under a name derived from the
    resolved path, so every descriptor pointing at the same file shares one
    module object. A module whose body raises is unregistered again.
    """
    file_path = Path(path).resolve()
    if not file_path.is_file():
        raise FileNotFoundError(f"No such listener module: {file_path}")

    digest = hashlib.sha1(str(file_path).encode("utf-8")).hexdigest()[:12]
    module_name = f"_cluster_client_listener_{file_path.stem}_{digest}"
    cached = sys.modules.get(module_name)
    if cached is not None:
        return cached

    spec = importlib.util.spec_from_file_location(module_name, file_path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot create import spec for {file_path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(module_name, None)
        raise
    return module


def load_listener(import_config: ImportConfig) -> LifecycleListener:
    """Default ListenerLoader.

    Args:
        import_config: Module path and exported name

    Returns:
        The resolved callable

    Raises:
        LoaderError: Import failure, missing attribute, or non-callable export
    """
    path = import_config.path
    exported_name = import_config.exported_name
    context = {"path": path, "exported_name": exported_name}

    try:
        if _is_file_path(path):
            module = _import_from_file(path)
        else:
            module = importlib.import_module(path)
    except Exception as e:
        raise LoaderError(
            f"Could not import listener module {path!r}: {type(e).__name__}: {e}",
            user_message="Listener module could not be loaded",
            context=context,
        ) from e

    target: object = module
    for part in exported_name.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as e:
            raise LoaderError(
                f"{path!r} has no exported name {exported_name!r}",
                user_message="Listener not found in module",
                context=context,
            ) from e

    if not callable(target):
        raise LoaderError(
            f"{path}:{exported_name} is not callable ({type(target).__name__})",
            user_message="Configured listener is not callable",
            context=context,
        )

    logger.debug("Loaded lifecycle listener %s:%s", path, exported_name)
    return cast(LifecycleListener, target)


def resolve_listeners(
    config: ClientConfig,
    loader: ListenerLoader = load_listener,
) -> list[LifecycleListener]:
    """Collect every configured listener in registration order.

    In-process callbacks come first, then loaded ones in configuration order.

    Args:
        config: Client configuration
        loader: Resolver for ImportConfig descriptors

    Returns:
        Listeners ready to hand to LifecycleBroadcaster

    Raises:
        LoaderError: Propagated from the loader; nothing has been registered yet
    """
    listeners: list[LifecycleListener] = list(config.lifecycle_listeners)
    for import_config in config.listener_configs:
        listeners.append(loader(import_config))
    return listeners
