"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~sitehooks.exceptions.SitehooksError` subclass.
Build scripts wrapping ``sitehooks validate`` can inspect the exit code to
tell a broken plugin apart from a broken config file without parsing stderr.

Example::

    $ sitehooks validate --config sitehooks.yml
    $ echo $?
    10  # EXIT_PLUGIN_ERROR -- a plugin factory raised during registration
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_CONFIG_ERROR = 3
"""The site configuration could not be found, read, or validated."""

EXIT_PLUGIN_ERROR = 10
"""A plugin could not be resolved or its factory failed during registration."""
