"""Typer application and CLI entry point for sitehooks.

Two read-only commands help site authors debug their plugin setup without
running a build:

* ``sitehooks inspect`` -- register the configured plugins and show which
  plugin contributed to each hook and option, in order.
* ``sitehooks validate`` -- register the configured plugins and exit
  non-zero if any plugin could not be resolved or its factory failed.

Rejected contributions and disabled plugins are reported on stderr through
:class:`~sitehooks.output.OutputHandler`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn, Optional

import typer

from sitehooks import __version__
from sitehooks.exceptions import SitehooksError
from sitehooks.exit_codes import EXIT_PLUGIN_ERROR

if TYPE_CHECKING:
    from sitehooks.plugins import PluginRegistry, RegistrationResult


app = typer.Typer(
    name="sitehooks",
    help="Inspect and validate static-site build plugins.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"sitehooks {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output format."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Plain text output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Installs the global :class:`~sitehooks.output.OutputManager` from the
    CLI flags and routes registry log records to it.
    """
    from sitehooks.output import OutputFormat, OutputManager, install_log_handler, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))
    install_log_handler(verbose=verbose)


def _fail(exc: SitehooksError) -> NoReturn:
    from sitehooks.output import error

    error(str(exc))
    raise typer.Exit(code=exc.exit_code)


def _register(config_path: Optional[str]) -> tuple[PluginRegistry, RegistrationResult]:
    """Load the site config and run one registration pass.

    Returns:
        A ``(registry, result)`` tuple.
    """
    from sitehooks.config import resolve_site_config
    from sitehooks.plugins import PluginRegistry

    try:
        config = resolve_site_config(config_path)
    except SitehooksError as exc:
        _fail(exc)

    registry = PluginRegistry(context=config.root_context())
    result = registry.use_by_configs(config.plugins)
    return registry, result


def _report_failure(result: RegistrationResult) -> NoReturn:
    from sitehooks.output import error

    error(
        f"Plugin '{result.failed_plugin}' (entry {result.failed_index}) failed: {result.error}"
    )
    raise typer.Exit(code=EXIT_PLUGIN_ERROR)


@app.command("inspect")
def inspect_registry(
    config_path: Optional[str] = typer.Option(
        None, "--config", "-c", help="Path to the site config file."
    ),
) -> None:
    """Show every hook and option with its contributors.

    Example::

        sitehooks inspect --config docs/sitehooks.yml
    """
    from sitehooks.output import OutputFormat, get_output, print_json, print_table

    registry, result = _register(config_path)
    if not result.ok:
        _report_failure(result)

    if get_output().format == OutputFormat.JSON:
        print_json(
            {
                "hooks": {
                    name.value: hook.contributors for name, hook in registry.hooks.items()
                },
                "options": {
                    name.value: {"contributors": slot.contributors, "value": slot.value}
                    for name, slot in registry.options.items()
                },
                "applied": result.applied,
                "disabled": result.disabled,
            }
        )
        return

    rows: list[list[str]] = []
    for name, hook in registry.hooks.items():
        rows.append(["hook", name.value, ", ".join(hook.contributors) or "-"])
    for name, slot in registry.options.items():
        rows.append(["option", name.value, ", ".join(slot.contributors) or "-"])
    print_table(["Kind", "Name", "Contributors"], rows, title="Plugin contributions")


@app.command("validate")
def validate_plugins(
    config_path: Optional[str] = typer.Option(
        None, "--config", "-c", help="Path to the site config file."
    ),
) -> None:
    """Register the configured plugins and report whether they all loaded."""
    from sitehooks.output import success

    _, result = _register(config_path)
    if not result.ok:
        _report_failure(result)

    message = f"{len(result.applied)} plugin(s) applied"
    if result.disabled:
        message += f", {len(result.disabled)} disabled ({', '.join(result.disabled)})"
    success(message)


def main() -> None:
    """Console-script entry point declared in ``pyproject.toml``."""
    app()


if __name__ == "__main__":
    main()
