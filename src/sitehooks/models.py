"""Pydantic configuration models for sitehooks.

:class:`SiteConfig` is the in-memory form of a ``sitehooks.json`` /
``sitehooks.yml`` file. Unknown top-level keys are preserved in
``model_extra`` so the build pipeline can keep its own settings in the
same file.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class OutputConfig(BaseModel):
    """Default output preferences for the ``sitehooks`` CLI."""

    format: str = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )


class SiteConfig(BaseModel):
    """A site's plugin list plus the ambient context shared with plugins.

    ``plugins`` is kept raw: each entry is a plugin identifier or an
    ``[identifier, options]`` pair, exactly as
    :meth:`~sitehooks.plugins.registry.PluginRegistry.use_by_configs`
    expects it. Anything that is not a list is treated as no plugins.

    Example::

        SiteConfig(
            source_dir="docs",
            plugins=["search", ["site.plugins:seo", {"lang": "en"}]],
            context={"base": "/guide/"},
        )
    """

    model_config = ConfigDict(extra="allow")

    source_dir: Optional[str] = Field(
        default=None, description="Site source directory, exposed to plugins"
    )
    plugins: list[Any] = Field(
        default_factory=list, description="Ordered plugin entries"
    )
    context: dict[str, Any] = Field(
        default_factory=dict, description="Extra values visible to every plugin factory"
    )
    output: OutputConfig = Field(default_factory=OutputConfig)

    @field_validator("plugins", mode="before")
    @classmethod
    def _coerce_plugins(cls, value: Any) -> Any:
        if isinstance(value, tuple):
            return list(value)
        if not isinstance(value, list):
            return []
        return value

    def root_context(self) -> dict[str, Any]:
        """Values for the registry's root :class:`~sitehooks.plugins.context.PluginContext`."""
        values: dict[str, Any] = {"source_dir": self.source_dir}
        values.update(self.context)
        return values
