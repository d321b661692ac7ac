"""Closed enumerations of lifecycle hooks and option slots.

The values double as the field names a plugin record uses to contribute
to each hook or slot. Adding a stage or slot here is a schema change:
the registry creates exactly one :class:`~sitehooks.plugins.hook.Hook`
per :class:`HookName` and one option slot per :class:`OptionName`.
"""

from __future__ import annotations

import enum


class HookName(str, enum.Enum):
    """Lifecycle stages the build pipeline fires."""

    READY = "ready"
    COMPILED = "compiled"
    UPDATED = "updated"
    GENERATED = "generated"


class OptionName(str, enum.Enum):
    """Configuration points the build pipeline consumes."""

    CHAIN_WEBPACK = "chain_webpack"
    ENHANCE_DEV_SERVER = "enhance_dev_server"
    EXTEND_MARKDOWN = "extend_markdown"
    EXTEND_PAGE_DATA = "extend_page_data"
    ENHANCE_APP_FILES = "enhance_app_files"
    OUT_FILES = "out_files"
    CLIENT_DYNAMIC_MODULES = "client_dynamic_modules"
    CLIENT_ROOT_MIXIN = "client_root_mixin"
    ADDITIONAL_PAGES = "additional_pages"
    GLOBAL_UI_COMPONENTS = "global_ui_components"


ANONYMOUS_PLUGIN = "anonymous"
"""Display name used when a plugin declares none and none can be inferred."""

PLUGIN_NAME_PREFIXES = ("sitehooks_plugin_", "sitehooks-plugin-")
"""Package-style prefixes stripped from identifiers when inferring a name."""
