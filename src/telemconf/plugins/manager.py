"""Plugin discovery and type registration.

Discovery: entry points in the ``telemconf.plugins`` group, loaded via
pluggy's setuptools entry-point support. Each plugin may contribute
configuration types through ``register_config_types``.
"""

from __future__ import annotations

import inspect
import logging

import pluggy

from telemconf.binding.registry import TypeRegistry
from telemconf.plugins.hookspecs import PROJECT_NAME, TelemconfHookSpec

ENTRY_POINT_GROUP = "telemconf.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Loads plugins and feeds their types into a :class:`TypeRegistry`."""

    def __init__(self, registry: TypeRegistry) -> None:
        self._registry = registry
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(TelemconfHookSpec)
        self._loaded: bool = False

    def discover_and_load(self) -> list[str]:
        """Load entry-point plugins and register the types they contribute.

        Returns a list of loaded plugin names.
        """
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._normalize_plugin_instances()
        for plugin in self._pm.get_plugins():
            self._register_plugin_types(plugin, self._plugin_name(plugin))
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly and collect its types."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        self._register_plugin_types(plugin, resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def unregister(self, plugin: object) -> None:
        """Unregister a plugin instance. Types it contributed stay registered."""
        self._pm.unregister(plugin)

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    @property
    def registry(self) -> TypeRegistry:
        return self._registry

    def get_plugins(self) -> list[object]:
        return list(self._pm.get_plugins())

    def list_plugin_names(self) -> list[str]:
        return [self._plugin_name(p) for p in self._pm.get_plugins()]

    def _plugin_name(self, plugin: object) -> str:
        return self._pm.get_name(plugin) or plugin.__class__.__name__

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry points may name a class; hook dispatch needs an instance.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue
            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)
            try:
                instance = plugin()
            except Exception:
                logger.warning("Failed to instantiate entry-point plugin %s", plugin_name, exc_info=True)
                continue
            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point plugin: %s", plugin_name)

    def _register_plugin_types(self, plugin: object, plugin_name: str) -> None:
        """Register the types exposed by a single plugin instance.

        Plugin failures are logged as warnings; they never abort startup.
        """
        hook = getattr(plugin, "register_config_types", None)
        if hook is None:
            return

        try:
            type_map = hook()
        except Exception:
            logger.warning("Failed to collect config types from plugin %s", plugin_name, exc_info=True)
            return

        if type_map is None:
            return
        if not isinstance(type_map, dict):
            logger.warning("Plugin %s returned non-dict config type registrations", plugin_name)
            return

        for alias, cls in type_map.items():
            try:
                self._registry.register(cls, aliases=(alias,))
            except (TypeError, ValueError):
                logger.warning(
                    "Skipping config type %r from plugin %s",
                    alias,
                    plugin_name,
                    exc_info=True,
                )
