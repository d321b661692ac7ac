"""Plugin registry -- resolution, instantiation, and contribution dispatch.

:class:`PluginRegistry` owns one :class:`~sitehooks.plugins.hook.Hook` per
:class:`~sitehooks.plugins.constants.HookName` and one option slot per
:class:`~sitehooks.plugins.constants.OptionName`. Each plugin entry goes
through a fixed, linear sequence:

1. **Resolve** the raw reference (identifier, factory, or record).
2. **Instantiate** a factory with ``(plugin_options, derived_context)``.
3. **Normalize** into a :class:`~sitehooks.plugins.models.PluginDescriptor`
   with ``enabled=True`` and an inferred ``name`` as defaults.
4. **Gate** on ``enabled``.
5. **Dispatch** every hook field, then every option field, through the
   kind check and onto the matching hook or slot.

Bad contribution shapes are logged and dropped. A failing factory or an
unresolvable identifier propagates from :meth:`PluginRegistry.use` and is
captured in the :class:`~sitehooks.plugins.models.RegistrationResult` of
:meth:`PluginRegistry.use_by_configs`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Optional, Union

from pydantic import ValidationError

from sitehooks.exceptions import PluginError
from sitehooks.plugins.constants import HookName, OptionName
from sitehooks.plugins.context import PluginContext
from sitehooks.plugins.hook import Hook
from sitehooks.plugins.models import PluginDescriptor, RegistrationResult
from sitehooks.plugins.options import OptionSlot, instantiate_option
from sitehooks.plugins.resolver import (
    PluginLoader,
    infer_plugin_name,
    load_plugin_reference,
    resolve_plugin,
)

logger = logging.getLogger(__name__)


class PluginRegistry:
    """Collects plugin contributions into hooks and option slots.

    Args:
        context: Ambient values shared with every plugin factory. A mapping
            becomes a fresh root context; a
            :class:`~sitehooks.plugins.context.PluginContext` is used as-is,
            which lets a plugin host its own nested registry on top of the
            context it was given.
        loader: Module-resolution collaborator for identifier strings.

    Example::

        registry = PluginRegistry(context={"source_dir": "docs"})
        registry.use_by_configs([
            "sitehooks-plugin-search",
            [reading_time, {"words_per_minute": 200}],
        ]).raise_for_failure()
        registry.hook("generated").invoke(output_dir)
    """

    def __init__(
        self,
        context: Union[PluginContext, Mapping[str, Any], None] = None,
        loader: PluginLoader = load_plugin_reference,
    ) -> None:
        self.hooks: dict[HookName, Hook] = {}
        self.options: dict[OptionName, OptionSlot] = {}
        if isinstance(context, PluginContext):
            self._context = context
        else:
            self._context = PluginContext.root(context)
        self._loader = loader
        self._extend_hooks(HookName)
        self._extend_options(OptionName)

    def __repr__(self) -> str:
        tapped = sum(len(hook) for hook in self.hooks.values())
        filled = sum(len(slot) for slot in self.options.values())
        return f"PluginRegistry(hook_callbacks={tapped}, option_values={filled})"

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------

    def _extend_hooks(self, names: Iterable[HookName]) -> None:
        for name in names:
            self.hooks[name] = Hook(name)

    def _extend_options(self, names: Iterable[OptionName]) -> None:
        for name in names:
            self.options[name] = instantiate_option(name)

    @property
    def context(self) -> PluginContext:
        """The context every plugin factory's own context derives from."""
        return self._context

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def use(self, plugin_raw: Any, plugin_options: Any = None) -> PluginRegistry:
        """Register a single plugin.

        Args:
            plugin_raw: Identifier string, factory, or literal record.
            plugin_options: Passed as the first argument to a factory.
                Ignored for literal records.

        Returns:
            The registry, for chaining.

        Raises:
            PluginError: If the plugin yields something that is not a
                contribution record.
            PluginResolutionError: If an identifier cannot be resolved.
            Exception: Whatever a plugin factory raises, unmodified.
        """
        self._use(plugin_raw, plugin_options)
        return self

    def use_by_configs(self, plugin_configs: Any) -> RegistrationResult:
        """Register an ordered list of plugin entries.

        Each entry is either a bare reference or a ``[reference, options]``
        pair. Anything other than a list or tuple is treated as an empty
        list. The pass stops at the first entry that raises; the result
        records where and why, and the caller decides whether that aborts
        the build.

        Args:
            plugin_configs: The raw plugin list from the site config.

        Returns:
            A :class:`~sitehooks.plugins.models.RegistrationResult`.
        """
        result = RegistrationResult()
        if not isinstance(plugin_configs, (list, tuple)):
            plugin_configs = []

        for index, entry in enumerate(plugin_configs):
            plugin_raw, plugin_options = _split_config_entry(entry)
            try:
                descriptor = self._use(plugin_raw, plugin_options)
            except Exception as exc:
                result.failed_index = index
                result.failed_plugin = infer_plugin_name(plugin_raw, plugin_raw)
                result.error = exc
                logger.debug(
                    "Plugin registration stopped at entry %d (%s): %s",
                    index,
                    result.failed_plugin,
                    exc,
                )
                break
            if descriptor.enabled:
                result.applied.append(descriptor.name or "")
            else:
                result.disabled.append(descriptor.name or "")
        return result

    def _use(self, plugin_raw: Any, plugin_options: Any) -> PluginDescriptor:
        seed = resolve_plugin(plugin_raw, self._loader)
        record = seed
        if callable(seed) and not isinstance(seed, (Mapping, PluginDescriptor)):
            record = seed(plugin_options, self._context.derive())

        descriptor = self._normalize(plugin_raw, record)
        if descriptor.enabled:
            self.apply_plugin(descriptor)
        else:
            logger.debug("[%s] disabled.", descriptor.name)
        return descriptor

    def _normalize(self, plugin_raw: Any, record: Any) -> PluginDescriptor:
        name = infer_plugin_name(plugin_raw, record)
        if isinstance(record, PluginDescriptor):
            fields = record.declared_fields()
        elif isinstance(record, Mapping):
            fields = dict(record)
        else:
            raise PluginError(
                f"Plugin '{name}' must provide a mapping or PluginDescriptor, "
                f"got {type(record).__name__}"
            )

        # An explicit enabled value wins, including None; only truthiness gates.
        enabled = bool(fields.pop("enabled")) if "enabled" in fields else True
        declared_name = fields.pop("name", None)
        if declared_name is not None and not (isinstance(declared_name, str) and declared_name):
            logger.warning(
                "[%s] Ignoring invalid plugin name %r, expected non-empty text",
                name,
                declared_name,
            )

        try:
            return PluginDescriptor.model_validate({**fields, "name": name, "enabled": enabled})
        except ValidationError as exc:
            raise PluginError(f"Plugin '{name}' has an invalid descriptor: {exc}") from exc

    def apply_plugin(self, descriptor: PluginDescriptor) -> None:
        """Dispatch every contribution of an enabled *descriptor*."""
        name = descriptor.name or ""
        logger.debug("Apply plugin %s...", name)
        for hook_name, value in descriptor.hook_contributions():
            self.register_hook(hook_name, value, name)
        for option_name, value in descriptor.option_contributions():
            self.register_option(option_name, value, name)

    def register_hook(
        self, name: Union[HookName, str], value: Any, plugin_name: str
    ) -> PluginRegistry:
        """Tap *value* onto hook *name* if it is callable, otherwise warn."""
        hook = self.hook(name)
        if value is None:
            return self
        check = hook.accepts(value)
        if check.valid:
            hook.tap(plugin_name, value)
        else:
            logger.warning(
                "[%s] Invalid value for hook '%s': %s",
                plugin_name,
                hook.name.value,
                check.message,
            )
        return self

    def register_option(
        self, name: Union[OptionName, str], value: Any, plugin_name: str
    ) -> PluginRegistry:
        """Tap *value* onto option *name* if it fits the slot, otherwise warn."""
        slot = self.option(name)
        if value is None:
            return self
        check = slot.accepts(value)
        if check.valid:
            slot.tap(plugin_name, value)
        else:
            logger.warning(
                "[%s] Invalid value for option '%s': %s",
                plugin_name,
                slot.name.value,
                check.message,
            )
        return self

    # ------------------------------------------------------------------
    # Consumption
    # ------------------------------------------------------------------

    def hook(self, name: Union[HookName, str]) -> Hook:
        """Return the hook for *name*.

        Raises:
            KeyError: If *name* is not a known hook.
        """
        try:
            return self.hooks[HookName(name)]
        except ValueError:
            raise KeyError(f"Unknown hook '{name}'") from None

    def option(self, name: Union[OptionName, str]) -> OptionSlot:
        """Return the option slot for *name*.

        Raises:
            KeyError: If *name* is not a known option.
        """
        try:
            return self.options[OptionName(name)]
        except ValueError:
            raise KeyError(f"Unknown option '{name}'") from None

    def option_values(self) -> dict[OptionName, Any]:
        """Current accumulated value of every option slot."""
        return {name: slot.value for name, slot in self.options.items()}


def _split_config_entry(entry: Any) -> tuple[Any, Optional[Any]]:
    """Normalize a plugin config entry into ``(reference, options)``."""
    if isinstance(entry, (list, tuple)):
        plugin_raw = entry[0] if len(entry) > 0 else None
        plugin_options = entry[1] if len(entry) > 1 else None
        return plugin_raw, plugin_options
    return entry, None
