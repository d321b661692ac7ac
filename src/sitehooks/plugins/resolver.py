"""Turning raw plugin references into contribution seeds.

A plugin reference in a site config is one of:

* an identifier string -- an entry point in the ``sitehooks.plugins``
  group, a ``"package.module:attribute"`` path, or a module path whose
  module exposes a ``plugin`` attribute;
* a factory -- any callable taking ``(plugin_options, context)`` and
  returning a contribution record;
* a literal record -- a mapping or a
  :class:`~sitehooks.plugins.models.PluginDescriptor`.

Resolution never calls a factory. That happens in the registry, which
owns the per-plugin context.

Third-party packages publish plugins through the entry-point group::

    [project.entry-points."sitehooks.plugins"]
    reading-time = "sitehooks_plugin_reading_time:plugin"
"""

from __future__ import annotations

import importlib
import importlib.metadata
import logging
from collections.abc import Callable, Mapping
from typing import Any

from sitehooks.exceptions import PluginResolutionError
from sitehooks.plugins.constants import ANONYMOUS_PLUGIN, PLUGIN_NAME_PREFIXES
from sitehooks.plugins.models import PluginDescriptor

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "sitehooks.plugins"
"""The entry-point group searched first when resolving identifiers."""

MODULE_PLUGIN_ATTRIBUTE = "plugin"
"""Attribute looked up on a module referenced without ``:attribute``."""

PluginLoader = Callable[[str], Any]


def _find_entry_point(identifier: str) -> Any:
    entry_points = importlib.metadata.entry_points()
    if hasattr(entry_points, "select"):
        eps = entry_points.select(group=ENTRY_POINT_GROUP)
    else:
        eps = entry_points.get(ENTRY_POINT_GROUP, [])  # type: ignore[union-attr]
    for ep in eps:
        if ep.name == identifier:
            return ep
    return None


def _module_candidates(module_path: str) -> list[str]:
    """Module paths to try, including the ``sitehooks_plugin_`` shorthand."""
    candidates = [module_path]
    if "." not in module_path and not module_path.startswith(PLUGIN_NAME_PREFIXES):
        candidates.append(f"{PLUGIN_NAME_PREFIXES[0]}{module_path.replace('-', '_')}")
    return candidates


def _import_module(identifier: str, module_path: str) -> Any:
    for candidate in _module_candidates(module_path):
        try:
            return importlib.import_module(candidate)
        except ModuleNotFoundError as exc:
            # A missing dependency inside the plugin is not "plugin not found".
            if exc.name != candidate:
                raise PluginResolutionError(
                    f"Plugin '{identifier}' failed to import: {exc}"
                ) from exc
            logger.debug("Module '%s' not found for plugin '%s'", candidate, identifier)
        except ImportError as exc:
            raise PluginResolutionError(
                f"Plugin '{identifier}' failed to import: {exc}"
            ) from exc
    raise PluginResolutionError(f"Cannot resolve plugin '{identifier}'")


def load_plugin_reference(identifier: str) -> Any:
    """Load the factory or record an identifier points to.

    This is the default module-resolution collaborator used by
    :class:`~sitehooks.plugins.registry.PluginRegistry`. Entry points win
    over import paths.

    Args:
        identifier: Entry-point name, ``"module:attribute"``, or module path.

    Returns:
        Whatever the identifier resolves to (factory or literal record).

    Raises:
        PluginResolutionError: If nothing can be loaded for *identifier*.
    """
    ep = _find_entry_point(identifier)
    if ep is not None:
        try:
            return ep.load()
        except Exception as exc:
            raise PluginResolutionError(
                f"Failed to load entry point for plugin '{identifier}': {exc}"
            ) from exc

    module_path, _, attribute = identifier.partition(":")
    if not module_path:
        raise PluginResolutionError(f"Cannot resolve plugin '{identifier}'")
    module = _import_module(identifier, module_path)
    target: Any = module
    for part in (attribute or MODULE_PLUGIN_ATTRIBUTE).split("."):
        try:
            target = getattr(target, part)
        except AttributeError:
            raise PluginResolutionError(
                f"Plugin '{identifier}': module '{module.__name__}' has no attribute '{part}'"
            ) from None
    return target


def resolve_plugin(plugin_raw: Any, loader: PluginLoader = load_plugin_reference) -> Any:
    """Resolve *plugin_raw* into a seed: a factory or a literal record.

    Strings go through *loader*; everything else is returned unchanged.
    Factories are not called.
    """
    if isinstance(plugin_raw, str):
        return loader(plugin_raw)
    return plugin_raw


def _shorten_identifier(identifier: str) -> str:
    module_path, _, attribute = identifier.partition(":")
    short = attribute.rsplit(".", 1)[-1] if attribute else module_path.rsplit(".", 1)[-1]
    for prefix in PLUGIN_NAME_PREFIXES:
        if short.startswith(prefix) and len(short) > len(prefix):
            return short[len(prefix):]
    return short


def infer_plugin_name(plugin_raw: Any, seed: Any) -> str:
    """Return a display name for diagnostics.

    The seed's own ``name`` wins. Otherwise an identifier string is
    shortened (``"sitehooks_plugin_blog"`` -> ``"blog"``,
    ``"site.plugins:seo"`` -> ``"seo"``). Anything else is ``"anonymous"``.
    """
    if isinstance(seed, PluginDescriptor) and seed.name:
        return seed.name
    if isinstance(seed, Mapping) and isinstance(seed.get("name"), str) and seed["name"]:
        return seed["name"]
    if isinstance(plugin_raw, str) and plugin_raw:
        return _shorten_identifier(plugin_raw) or ANONYMOUS_PLUGIN
    return ANONYMOUS_PLUGIN
