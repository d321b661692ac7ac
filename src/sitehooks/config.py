"""Locating and loading the site configuration.

A site config lists the plugins to register and the ambient context they
share. It is read from JSON or YAML:

.. code-block:: yaml

    source_dir: docs
    plugins:
      - search
      - ["site.plugins:seo", {lang: en}]
    context:
      base: /guide/

Precedence when looking for the file (high to low):

1. An explicit path (the CLI ``--config`` flag).
2. The ``SITEHOOKS_CONFIG`` environment variable.
3. ``sitehooks.json``, ``sitehooks.yaml`` or ``sitehooks.yml`` in the
   working directory, in that order.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import ValidationError

from sitehooks.exceptions import ConfigError
from sitehooks.models import SiteConfig

CONFIG_ENV_VAR = "SITEHOOKS_CONFIG"
CONFIG_FILENAMES = ("sitehooks.json", "sitehooks.yaml", "sitehooks.yml")


def find_site_config(
    cli_path: Union[str, Path, None] = None,
    start: Optional[Path] = None,
) -> Path:
    """Return the path of the site config to use.

    Args:
        cli_path: Explicit path; highest precedence.
        start: Directory searched for the default file names. Defaults to
            the current working directory.

    Raises:
        ConfigError: If an explicit or env-provided path does not exist,
            or no default file is found.
    """
    if cli_path is not None:
        path = Path(cli_path)
        if not path.is_file():
            raise ConfigError(f"Site config not found at {path}")
        return path

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        path = Path(env_path)
        if not path.is_file():
            raise ConfigError(f"Site config from ${CONFIG_ENV_VAR} not found at {path}")
        return path

    directory = start or Path.cwd()
    for filename in CONFIG_FILENAMES:
        candidate = directory / filename
        if candidate.is_file():
            return candidate
    raise ConfigError(
        f"No site config found in {directory} (looked for {', '.join(CONFIG_FILENAMES)})"
    )


def _parse_content(content: str, hint: Optional[str] = None) -> dict[str, Any]:
    """Parse *content* as JSON or YAML.

    JSON is tried first unless *hint* is ``"yaml"``; every JSON document is
    also YAML, but the JSON parser gives sharper errors.

    Raises:
        ConfigError: If the content is neither, or is not a mapping.
    """
    json_error: Exception | None = None

    if hint != "yaml":
        try:
            result = json.loads(content)
        except json.JSONDecodeError as exc:
            json_error = exc
            if hint == "json":
                raise ConfigError(f"Invalid JSON: {exc}") from exc
        else:
            if not isinstance(result, dict):
                raise ConfigError(
                    f"Site config must be an object (got {type(result).__name__})"
                )
            return result

    try:
        result = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        msg = "Failed to parse site config as JSON or YAML"
        if json_error:
            msg += f"\n  JSON error: {json_error}"
        msg += f"\n  YAML error: {exc}"
        raise ConfigError(msg) from exc

    if result is None:
        return {}
    if not isinstance(result, dict):
        raise ConfigError(f"Site config must be a mapping (got {type(result).__name__})")
    return result


def _format_hint(path: Path) -> Optional[str]:
    suffix = path.suffix.lower()
    if suffix == ".json":
        return "json"
    if suffix in (".yaml", ".yml"):
        return "yaml"
    return None


def load_site_config(path: Union[str, Path]) -> SiteConfig:
    """Load and validate a site config file.

    A missing ``source_dir`` defaults to the directory holding the file; a
    relative one is resolved against it.

    Raises:
        ConfigError: If the file cannot be read, parsed, or validated.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read site config at {path}: {exc}") from exc

    data = _parse_content(text, _format_hint(path))
    try:
        config = SiteConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid site config at {path}: {exc}") from exc

    base = path.resolve().parent
    if config.source_dir is None:
        config.source_dir = str(base)
    elif not Path(config.source_dir).is_absolute():
        config.source_dir = str(base / config.source_dir)
    return config


def resolve_site_config(cli_path: Union[str, Path, None] = None) -> SiteConfig:
    """Find and load the active site config. See :func:`find_site_config`."""
    return load_site_config(find_site_config(cli_path))
