"""Host-side plugin discovery from a directory of Python files.

Each ``*.py`` file in the directory must define ``create_plugin()``
returning an object that satisfies ``ShellPlugin``.
"""

from __future__ import annotations

import importlib.util
import logging
from pathlib import Path

from .errors import ShellIOError
from .logging import log_event
from .path_utils import map_path
from .plugins import ShellPlugin

FACTORY_NAME = "create_plugin"


def _load_module_plugin(path: Path) -> ShellPlugin:
    module_name = f"shellkit_plugin_{path.stem}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"cannot import {path.name}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    factory = getattr(module, FACTORY_NAME, None)
    if not callable(factory):
        raise AttributeError(f"{path.name} does not define {FACTORY_NAME}()")
    plugin = factory()
    if not isinstance(plugin, ShellPlugin):
        raise TypeError(f"{path.name}: {FACTORY_NAME}() did not return a shell plugin")
    return plugin


def load_plugins_from_directory(directory: str) -> list[ShellPlugin]:
    """Instantiate every plugin file in ``directory``, skipping broken ones."""
    plugin_dir = Path(map_path(directory))
    if not plugin_dir.is_dir():
        raise ShellIOError(f"Plugin directory not found: {plugin_dir}")

    plugins: list[ShellPlugin] = []
    for path in sorted(plugin_dir.glob("*.py")):
        if path.name.startswith("_"):
            continue
        try:
            plugins.append(_load_module_plugin(path))
        except Exception as e:
            print(f"Failed to load plugin {path.name}: {e}")
            log_event(
                "plugin_error",
                level=logging.ERROR,
                plugin_file=str(path),
                error_type=type(e).__name__,
                error=str(e),
            )
    return plugins
