"""Exception hierarchy for sitehooks.

All exceptions inherit from :class:`SitehooksError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`sitehooks.exit_codes`.
The CLI catches ``SitehooksError`` and exits with the appropriate code.

Subclass hierarchy::

    SitehooksError (exit 1)
    +-- ConfigError                  (exit 3)
    +-- PluginError                  (exit 10)
        +-- PluginResolutionError    (exit 10)
        +-- InvalidContributionError (exit 10)
"""

from sitehooks.exit_codes import (
    EXIT_CONFIG_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_PLUGIN_ERROR,
)


class SitehooksError(Exception):
    """Base exception for all sitehooks errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ConfigError(SitehooksError):
    """Raised for configuration problems (missing file, invalid JSON/YAML, bad fields)."""

    exit_code = EXIT_CONFIG_ERROR


class PluginError(SitehooksError):
    """Raised when a plugin cannot be instantiated or returns a malformed record."""

    exit_code = EXIT_PLUGIN_ERROR


class PluginResolutionError(PluginError):
    """Raised when a plugin identifier cannot be resolved to a loadable value."""


class InvalidContributionError(PluginError):
    """Raised when a value of the wrong kind is tapped onto a hook or option.

    The registry validates contributions before tapping, so this only
    surfaces when :meth:`Hook.tap` or :meth:`OptionSlot.tap` are called
    directly with a bad value.
    """
