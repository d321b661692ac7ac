"""sitehooks -- plugin registry for a static-site build pipeline.

Plugins contribute lifecycle callbacks ("hooks") and configuration
contributions ("options") to a site build. This package resolves each
plugin reference, validates what it contributes, and collects everything
into a fixed set of hooks and option slots that the build stages read
later.

Typical usage::

    from sitehooks.plugins import PluginRegistry

    registry = PluginRegistry(context={"source_dir": "docs"})
    result = registry.use_by_configs(["sitehooks-plugin-blog", [seo, {"lang": "en"}]])
    result.raise_for_failure()
    registry.hook("ready").invoke()

Modules:
    app: Typer CLI entry point (``inspect`` and ``validate``).
    models: Pydantic configuration models.
    config: Site config discovery and loading (JSON or YAML).
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting with Rich support.
    plugins: The registration engine itself.
"""

__version__ = "0.3.0"
