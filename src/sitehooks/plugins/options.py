"""Option slots and their per-slot merge strategies.

Every :class:`~sitehooks.plugins.constants.OptionName` maps to exactly one
slot class via :data:`OPTION_SLOTS`. The strategy decides how successive
contributions combine:

* :class:`SequenceOption` -- appends callables, applied in order later.
* :class:`ConcatOption` -- normalizes each contribution to a list and
  concatenates. Duplicates are kept.
* :class:`RecordOption` -- shallow-merges mappings, later keys win.
* :class:`SingleValueOption` -- last writer wins.

All slots remember every accepted ``(contributor, value)`` pair in
:attr:`OptionSlot.items` so diagnostics can show who contributed what.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, NamedTuple

from sitehooks.exceptions import InvalidContributionError
from sitehooks.plugins.constants import OptionName
from sitehooks.plugins.validation import Kind, TypeCheck, assert_types


class OptionItem(NamedTuple):
    """A value contributed to an option slot, with its contributor."""

    contributor: str
    value: Any


class OptionSlot:
    """Base class for a named configuration point.

    Subclasses set :attr:`kinds` and implement :meth:`_merge` and
    :attr:`value`. A rejected contribution never reaches :meth:`_merge`,
    so the accumulated value is unchanged by it.
    """

    kinds: tuple[Kind, ...] = ()

    def __init__(self, name: OptionName | str, kinds: tuple[Kind, ...] | None = None) -> None:
        self.name = OptionName(name)
        if kinds is not None:
            self.kinds = kinds
        self._items: list[OptionItem] = []

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name.value!r}, contributors={self.contributors!r})"

    def __len__(self) -> int:
        return len(self._items)

    @property
    def items(self) -> list[OptionItem]:
        return list(self._items)

    @property
    def contributors(self) -> list[str]:
        return [item.contributor for item in self._items]

    @property
    def value(self) -> Any:
        """The accumulated value as the build pipeline consumes it."""
        raise NotImplementedError

    def accepts(self, value: Any) -> TypeCheck:
        """Check *value* against this slot's accepted kinds."""
        return assert_types(value, self.kinds)

    def tap(self, contributor: str, value: Any) -> None:
        """Merge *value* into the slot on behalf of *contributor*.

        Raises:
            InvalidContributionError: If *value* is ``None`` or does not
                match the slot's accepted kinds.
        """
        check = self.accepts(value)
        if value is None or not check.valid:
            reason = check.message or "nothing to contribute"
            raise InvalidContributionError(
                f"Option '{self.name.value}' rejected value from '{contributor}': {reason}"
            )
        self._merge(value)
        self._items.append(OptionItem(contributor, value))

    def _merge(self, value: Any) -> None:
        raise NotImplementedError


class SequenceOption(OptionSlot):
    """Ordered list of callables, e.g. webpack-chain or markdown extenders."""

    kinds = (Kind.CALLABLE,)

    def __init__(self, name: OptionName | str, kinds: tuple[Kind, ...] | None = None) -> None:
        super().__init__(name, kinds)
        self._values: list[Callable[..., Any]] = []

    @property
    def value(self) -> list[Callable[..., Any]]:
        return list(self._values)

    def _merge(self, value: Any) -> None:
        self._values.append(value)

    def apply(self, *args: Any, **kwargs: Any) -> list[Any]:
        """Call each contributed callable in order with the given arguments."""
        return [fn(*args, **kwargs) for fn in list(self._values)]


class ConcatOption(OptionSlot):
    """List built by concatenating contributions; a single value counts as a one-item list."""

    kinds = (Kind.CALLABLE, Kind.SEQUENCE)

    def __init__(self, name: OptionName | str, kinds: tuple[Kind, ...] | None = None) -> None:
        super().__init__(name, kinds)
        self._values: list[Any] = []

    @property
    def value(self) -> list[Any]:
        return list(self._values)

    def _merge(self, value: Any) -> None:
        if isinstance(value, (list, tuple)):
            self._values.extend(value)
        else:
            self._values.append(value)


class RecordOption(OptionSlot):
    """Shallow-merged mapping; later contributions override earlier keys."""

    kinds = (Kind.RECORD,)

    def __init__(self, name: OptionName | str, kinds: tuple[Kind, ...] | None = None) -> None:
        super().__init__(name, kinds)
        self._values: dict[Any, Any] = {}

    @property
    def value(self) -> dict[Any, Any]:
        return dict(self._values)

    def _merge(self, value: Mapping[Any, Any]) -> None:
        self._values.update(value)


class SingleValueOption(OptionSlot):
    """Holds exactly one active value; the last contribution replaces the rest."""

    kinds = (Kind.TEXT,)

    def __init__(self, name: OptionName | str, kinds: tuple[Kind, ...] | None = None) -> None:
        super().__init__(name, kinds)
        self._value: Any = None

    @property
    def value(self) -> Any:
        return self._value

    def _merge(self, value: Any) -> None:
        self._value = value


OPTION_SLOTS: dict[OptionName, tuple[type[OptionSlot], tuple[Kind, ...]]] = {
    OptionName.CHAIN_WEBPACK: (SequenceOption, (Kind.CALLABLE,)),
    OptionName.ENHANCE_DEV_SERVER: (SequenceOption, (Kind.CALLABLE,)),
    OptionName.EXTEND_MARKDOWN: (SequenceOption, (Kind.CALLABLE,)),
    OptionName.EXTEND_PAGE_DATA: (SequenceOption, (Kind.CALLABLE,)),
    OptionName.ENHANCE_APP_FILES: (ConcatOption, (Kind.CALLABLE, Kind.CALLABLE_SEQUENCE)),
    OptionName.OUT_FILES: (RecordOption, (Kind.RECORD,)),
    OptionName.CLIENT_DYNAMIC_MODULES: (SequenceOption, (Kind.CALLABLE,)),
    OptionName.CLIENT_ROOT_MIXIN: (SingleValueOption, (Kind.TEXT,)),
    OptionName.ADDITIONAL_PAGES: (ConcatOption, (Kind.CALLABLE, Kind.SEQUENCE)),
    OptionName.GLOBAL_UI_COMPONENTS: (ConcatOption, (Kind.TEXT, Kind.TEXT_SEQUENCE)),
}
"""Slot class and accepted kinds for every option name."""


def instantiate_option(name: OptionName | str) -> OptionSlot:
    """Create the slot for *name* with its fixed strategy and accepted kinds.

    Raises:
        ValueError: If *name* is not a known :class:`OptionName`.
    """
    option = OptionName(name)
    slot_cls, kinds = OPTION_SLOTS[option]
    return slot_cls(option, kinds)
