"""Plugin descriptor and registration result types.

:class:`PluginDescriptor` is the normalized, transient form of one
plugin's contribution record. It exists only while the registry applies
it; nothing keeps a list of descriptors afterwards.

Contribution fields are typed ``Any`` on purpose. Kind checks are done per
field by :func:`~sitehooks.plugins.validation.assert_types` so one bad
field is dropped without rejecting the rest of the record.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

from sitehooks.exceptions import PluginError
from sitehooks.plugins.constants import HookName, OptionName


class PluginDescriptor(BaseModel):
    """Sparse record of what a plugin contributes.

    Unknown keys are ignored. ``None`` means "not contributed".

    Example::

        PluginDescriptor(
            name="reading-time",
            extend_page_data=add_reading_time,
            global_ui_components="ReadingTime",
        )
    """

    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    enabled: bool = True

    # Hooks
    ready: Any = None
    compiled: Any = None
    updated: Any = None
    generated: Any = None

    # Options
    chain_webpack: Any = None
    enhance_dev_server: Any = None
    extend_markdown: Any = None
    extend_page_data: Any = None
    enhance_app_files: Any = None
    out_files: Any = None
    client_dynamic_modules: Any = None
    client_root_mixin: Any = None
    additional_pages: Any = None
    global_ui_components: Any = None

    def declared_fields(self) -> dict[str, Any]:
        """Return the fields that were explicitly set on this record."""
        return {key: getattr(self, key) for key in self.model_fields_set}

    def hook_contributions(self) -> Iterator[tuple[HookName, Any]]:
        """Yield ``(hook, value)`` for every hook this record contributes to."""
        for hook in HookName:
            value = getattr(self, hook.value)
            if value is not None:
                yield hook, value

    def option_contributions(self) -> Iterator[tuple[OptionName, Any]]:
        """Yield ``(option, value)`` for every option this record contributes to."""
        for option in OptionName:
            value = getattr(self, option.value)
            if value is not None:
                yield option, value


@dataclass
class RegistrationResult:
    """Outcome of :meth:`~sitehooks.plugins.registry.PluginRegistry.use_by_configs`.

    Attributes:
        applied: Display names of plugins whose contributions were applied,
            in order.
        disabled: Display names of plugins skipped because ``enabled`` was
            false.
        failed_index: Position in the input list of the entry that failed,
            or ``None`` when every entry was processed.
        failed_plugin: Best-effort display name of the failing entry.
        error: The exception raised while processing that entry, unmodified.
    """

    applied: list[str] = field(default_factory=list)
    disabled: list[str] = field(default_factory=list)
    failed_index: Optional[int] = None
    failed_plugin: Optional[str] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        """``True`` when every plugin entry was processed."""
        return self.error is None

    def raise_for_failure(self) -> None:
        """Raise :class:`~sitehooks.exceptions.PluginError` if the pass failed.

        The original exception is chained as ``__cause__``.
        """
        if self.error is None:
            return
        raise PluginError(
            f"Plugin '{self.failed_plugin}' (entry {self.failed_index}) failed: {self.error}"
        ) from self.error
