"""Plugin registration engine for sitehooks.

Plugins are resolved from identifiers (entry points in the
``sitehooks.plugins`` group or import paths), factories, or literal
records. The :class:`PluginRegistry` validates what each one contributes
and collects it into four lifecycle :class:`Hook` objects and ten option
slots that the build pipeline reads once registration is done.

Key classes:

* :class:`PluginRegistry` -- Walks the plugin list and dispatches contributions.
* :class:`Hook` -- Ordered callback chain for one lifecycle stage.
* :class:`OptionSlot` -- Configuration point with a per-slot merge strategy.
* :class:`PluginContext` -- Layered context handed to plugin factories.
* :class:`PluginDescriptor` -- Normalized contribution record.

Example:
    Registering plugins from a site config::

        from sitehooks.plugins import PluginRegistry

        registry = PluginRegistry(context=config.context)
        result = registry.use_by_configs(config.plugins)
        result.raise_for_failure()
        chain_extenders = registry.option("chain_webpack").value
"""

from sitehooks.plugins.constants import HookName, OptionName
from sitehooks.plugins.context import ContextArena, PluginContext
from sitehooks.plugins.hook import Hook, HookItem
from sitehooks.plugins.models import PluginDescriptor, RegistrationResult
from sitehooks.plugins.options import OptionItem, OptionSlot, instantiate_option
from sitehooks.plugins.registry import PluginRegistry
from sitehooks.plugins.resolver import (
    ENTRY_POINT_GROUP,
    infer_plugin_name,
    load_plugin_reference,
    resolve_plugin,
)
from sitehooks.plugins.validation import Kind, TypeCheck, assert_types

__all__ = [
    "ENTRY_POINT_GROUP",
    "ContextArena",
    "Hook",
    "HookItem",
    "HookName",
    "Kind",
    "OptionItem",
    "OptionName",
    "OptionSlot",
    "PluginContext",
    "PluginDescriptor",
    "PluginRegistry",
    "RegistrationResult",
    "TypeCheck",
    "assert_types",
    "infer_plugin_name",
    "instantiate_option",
    "load_plugin_reference",
    "resolve_plugin",
]
