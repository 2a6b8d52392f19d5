"""Plugin system for env-doc.

插件通过 PluginRegistry 注册，配置中按标识符引用。
"""

from env_doc.plugins.base import (
    ENTRY_POINT_GROUP,
    HookPoint,
    Hooks,
    Plugin,
    PluginHost,
    PluginRegistry,
    load_plugins,
)

__all__ = [
    "ENTRY_POINT_GROUP",
    "HookPoint",
    "Hooks",
    "Plugin",
    "PluginHost",
    "PluginRegistry",
    "load_plugins",
]
