"""Lifecycle hooks and their callback chains.

A :class:`Hook` is created once per :class:`~sitehooks.plugins.constants.HookName`
when a :class:`~sitehooks.plugins.registry.PluginRegistry` is built. Plugins
tap callbacks onto it during registration; the build pipeline invokes it
later when the matching stage fires.

Callbacks run in registration order. There is no de-duplication: a plugin
used twice taps twice, and both callbacks run.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Iterator
from typing import Any, NamedTuple

from sitehooks.exceptions import InvalidContributionError
from sitehooks.plugins.constants import HookName
from sitehooks.plugins.validation import Kind, TypeCheck, assert_types

HOOK_KINDS = (Kind.CALLABLE,)
"""Kinds a hook contribution may take."""


class HookItem(NamedTuple):
    """A callback tapped onto a hook, with the plugin that contributed it."""

    contributor: str
    callback: Callable[..., Any]


class Hook:
    """An ordered chain of callbacks for one lifecycle stage.

    Only callables are ever stored. The failure policy at invocation time
    belongs to the caller: :meth:`invoke` lets the first exception
    propagate and skips the remaining callbacks.
    """

    def __init__(self, name: HookName | str) -> None:
        self.name = HookName(name)
        self._items: list[HookItem] = []

    def __repr__(self) -> str:
        return f"Hook({self.name.value!r}, contributors={self.contributors!r})"

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[HookItem]:
        return iter(list(self._items))

    @property
    def items(self) -> list[HookItem]:
        """Snapshot of ``(contributor, callback)`` pairs in registration order."""
        return list(self._items)

    @property
    def callbacks(self) -> list[Callable[..., Any]]:
        return [item.callback for item in self._items]

    @property
    def contributors(self) -> list[str]:
        return [item.contributor for item in self._items]

    def accepts(self, value: Any) -> TypeCheck:
        """Check whether *value* may be tapped onto this hook."""
        return assert_types(value, HOOK_KINDS)

    def tap(self, contributor: str, callback: Callable[..., Any]) -> None:
        """Append *callback* to the chain under *contributor*.

        Raises:
            InvalidContributionError: If *callback* is not callable.
        """
        if not callable(callback):
            raise InvalidContributionError(
                f"Hook '{self.name.value}' only accepts callables "
                f"(got {type(callback).__name__} from '{contributor}')"
            )
        self._items.append(HookItem(contributor, callback))

    def invoke(self, *args: Any, **kwargs: Any) -> list[Any]:
        """Call every tapped callback in order, forwarding the arguments.

        Returns:
            The callbacks' return values, in the same order.
        """
        return [item.callback(*args, **kwargs) for item in list(self._items)]

    async def ainvoke(self, *args: Any, **kwargs: Any) -> list[Any]:
        """Like :meth:`invoke`, but awaits awaitable results one at a time.

        Each callback finishes before the next one is called, so coroutine
        callbacks still observe registration order.
        """
        results: list[Any] = []
        for item in list(self._items):
            result = item.callback(*args, **kwargs)
            if inspect.isawaitable(result):
                result = await result
            results.append(result)
        return results
