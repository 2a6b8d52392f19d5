"""Plugin host and registry.

A plugin is created with the full configuration and gets one ``apply(host)``
call at startup, where it taps the extension points it cares about:

- ``before_parse(variables) -> variables``: once per declaration file,
  right after parsing and before exclusion filtering.
- ``before_output(text, env_data) -> text``: once, on the rendered report.

Handlers on one hook form a chain in registration order; each receives the
previous handler's result. A plugin holds at most one handler per hook.
"""

import importlib
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from importlib.metadata import entry_points
from typing import Any, Callable, Iterable

from env_doc.config import EnvDocConfig
from env_doc.core.models import DeclaredVariable, EnvData
from env_doc.errors import PluginLoadError

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "env_doc.plugins"

PluginFactory = Callable[[EnvDocConfig], Any]


class HookPoint:
    """A named extension point holding one handler per plugin."""

    def __init__(self, name: str):
        self.name = name
        self._taps: dict[str, Callable[..., Any]] = {}

    def tap(self, plugin_name: str, fn: Callable[..., Any]) -> None:
        """Register ``fn`` for ``plugin_name`` (re-tapping replaces it in place)."""
        self._taps[plugin_name] = fn

    @property
    def handlers(self) -> list[tuple[str, Callable[..., Any]]]:
        return list(self._taps.items())

    def call(self, value: Any, *args: Any) -> Any:
        """Run the handler chain, skipping handlers that fail or return None."""
        for plugin_name, fn in self._taps.items():
            try:
                result = fn(value, *args)
            except Exception as e:
                logger.error(f"Plugin {plugin_name} failed in {self.name}: {e}")
                continue
            if result is None:
                logger.warning(f"Plugin {plugin_name} returned nothing from {self.name}, ignoring")
                continue
            value = result
        return value


@dataclass
class Hooks:
    """Extension points exposed to plugins."""
    before_parse: HookPoint = field(default_factory=lambda: HookPoint("beforeParse"))
    before_output: HookPoint = field(default_factory=lambda: HookPoint("beforeOutput"))


class PluginHost:
    """Owns the hooks and runs them for the generator."""

    def __init__(self) -> None:
        self.hooks = Hooks()
        self.plugins: list[Any] = []

    def run_before_parse(
        self, variables: dict[str, DeclaredVariable]
    ) -> dict[str, DeclaredVariable]:
        return self.hooks.before_parse.call(variables)

    def run_before_output(self, text: str, env_data: EnvData) -> str:
        return self.hooks.before_output.call(text, env_data)


class Plugin(ABC):
    """Base class for env-doc plugins."""

    def __init__(self, config: EnvDocConfig):
        self.config = config

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    def apply(self, host: PluginHost) -> None:
        """Tap the host's hooks."""
        pass


class PluginRegistry:
    """Registry mapping plugin identifiers to factories.

    Built-in plugins register themselves when their module is imported.
    Identifiers that are not registered are looked up as entry points in
    the ``env_doc.plugins`` group, then as ``package.module:Attribute``.
    """

    _plugins: dict[str, PluginFactory] = {}
    _initialized: bool = False

    @classmethod
    def register(cls, name: str, factory: PluginFactory) -> None:
        """Register a plugin factory (later registrations replace earlier ones)."""
        cls._plugins[name] = factory

    @classmethod
    def unregister(cls, name: str) -> None:
        cls._plugins.pop(name, None)

    @classmethod
    def _ensure_initialized(cls) -> None:
        """Ensure all built-in plugins are loaded."""
        if cls._initialized:
            return
        cls._initialized = True

        plugin_modules = [
            "env_doc.plugins.validation_hints",
            "env_doc.plugins.summary_table",
        ]
        for module_name in plugin_modules:
            try:
                importlib.import_module(module_name)
            except ImportError as e:
                logger.warning(f"Failed to import built-in plugin module {module_name}: {e}")

    @classmethod
    def get_available_names(cls) -> list[str]:
        cls._ensure_initialized()
        return list(cls._plugins.keys())

    @classmethod
    def resolve(cls, name: str) -> PluginFactory:
        """
        Resolve an identifier to a factory.

        Raises:
            PluginLoadError: the identifier cannot be resolved.
        """
        cls._ensure_initialized()
        if name in cls._plugins:
            return cls._plugins[name]

        for ep in entry_points(group=ENTRY_POINT_GROUP):
            if ep.name == name:
                try:
                    return ep.load()
                except Exception as e:
                    raise PluginLoadError(f"Failed to load plugin entry point {name}: {e}") from e

        if ":" in name:
            module_name, _, attr = name.partition(":")
            try:
                module = importlib.import_module(module_name)
            except Exception as e:
                raise PluginLoadError(f"Failed to import plugin module {module_name}: {e}") from e
            try:
                return getattr(module, attr)
            except AttributeError as e:
                raise PluginLoadError(f"Plugin {attr} not found in {module_name}") from e

        raise PluginLoadError(f"Unknown plugin: {name}")


def load_plugins(
    names: Iterable[str],
    config: EnvDocConfig,
    host: PluginHost,
    registry: type[PluginRegistry] = PluginRegistry,
) -> list[Any]:
    """
    Instantiate and apply each plugin in order.

    A plugin that cannot be resolved, constructed or applied is logged and
    skipped; the remaining plugins still load.
    """
    loaded = []
    for name in names:
        try:
            factory = registry.resolve(name)
        except PluginLoadError as e:
            logger.error(f"Error loading plugin {name}: {e}")
            continue

        try:
            instance = factory(config)
            instance.apply(host)
        except Exception as e:
            logger.error(f"Error loading plugin {name}: {e}")
            continue

        logger.info(f"Loaded plugin {name}")
        host.plugins.append(instance)
        loaded.append(instance)
    return loaded
