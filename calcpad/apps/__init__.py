"""Available Textual applications."""

import importlib
import inspect
import logging
from pathlib import Path

from ..core.base import AppRegistry, BaseTextualApp

logger = logging.getLogger(__name__)


def discover_and_register_apps():
    """Import every module in the apps directory and register its apps."""
    apps_dir = Path(__file__).parent

    for py_file in apps_dir.glob("*.py"):
        if py_file.name.startswith("__"):
            continue

        module = importlib.import_module(f".{py_file.stem}", package=__name__)
        for _name, obj in inspect.getmembers(module, inspect.isclass):
            if (issubclass(obj, BaseTextualApp) and
                    obj is not BaseTextualApp and
                    hasattr(obj, 'APP_CONFIG')):
                AppRegistry.register(obj)
                logger.debug(f"Registered app {obj.APP_CONFIG.name}")


discover_and_register_apps()


def list_apps():
    """List all registered applications."""
    return {config.name: config for config in AppRegistry.list_apps()}


__all__ = ["list_apps"]
