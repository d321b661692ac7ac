"""Layered ambient context handed to plugin factories.

Every registry owns a context; every plugin factory it calls receives a
fresh child of that context. Reads fall back from the child to its
parents, writes stay in the child. Two plugins registered side by side
therefore share whatever the registry knows but never see each other's
writes.

The layers live in a :class:`ContextArena`: a flat list of dicts plus a
parallel list of parent indices. A :class:`PluginContext` is just a view
onto one layer of that arena.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any, Optional

_MISSING = object()


class ContextArena:
    """Storage for every context layer derived from one root."""

    def __init__(self) -> None:
        self._layers: list[dict[str, Any]] = []
        self._parents: list[Optional[int]] = []

    def __len__(self) -> int:
        return len(self._layers)

    def add_layer(self, values: Optional[Mapping[str, Any]] = None, parent: Optional[int] = None) -> int:
        """Append a layer and return its index."""
        if parent is not None and not 0 <= parent < len(self._layers):
            raise IndexError(f"No context layer at index {parent}")
        self._layers.append(dict(values or {}))
        self._parents.append(parent)
        return len(self._layers) - 1

    def chain(self, index: int) -> Iterator[int]:
        """Yield *index* followed by each of its ancestors, nearest first."""
        current: Optional[int] = index
        while current is not None:
            yield current
            current = self._parents[current]

    def lookup(self, index: int, key: str, default: Any = _MISSING) -> Any:
        for layer_index in self.chain(index):
            layer = self._layers[layer_index]
            if key in layer:
                return layer[key]
        if default is _MISSING:
            raise KeyError(key)
        return default

    def layer(self, index: int) -> dict[str, Any]:
        return self._layers[index]

    def parent_of(self, index: int) -> Optional[int]:
        return self._parents[index]


class PluginContext:
    """A view onto one layer of a :class:`ContextArena`.

    Supports both item access (``ctx["source_dir"]``) and attribute access
    (``ctx.source_dir``). Names starting with an underscore are reserved
    for the view itself.

    Example::

        root = PluginContext.root({"source_dir": "docs"})
        child = root.derive()
        child.source_dir          # "docs", read through to the root
        child.theme = "dark"      # stays in the child
        "theme" in root           # False
    """

    __slots__ = ("_arena", "_index")

    def __init__(self, arena: ContextArena, index: int) -> None:
        object.__setattr__(self, "_arena", arena)
        object.__setattr__(self, "_index", index)

    @classmethod
    def root(cls, values: Optional[Mapping[str, Any]] = None) -> PluginContext:
        """Create a new arena with a single root layer holding *values*."""
        arena = ContextArena()
        return cls(arena, arena.add_layer(values))

    @property
    def parent(self) -> Optional[PluginContext]:
        """The context this one reads through to, or ``None`` for a root."""
        parent_index = self._arena.parent_of(self._index)
        if parent_index is None:
            return None
        return PluginContext(self._arena, parent_index)

    def derive(self, values: Optional[Mapping[str, Any]] = None) -> PluginContext:
        """Create a child context whose reads fall back to this one."""
        return PluginContext(self._arena, self._arena.add_layer(values, parent=self._index))

    def get(self, key: str, default: Any = None) -> Any:
        return self._arena.lookup(self._index, key, default)

    def local(self) -> dict[str, Any]:
        """Copy of the values written directly to this context."""
        return dict(self._arena.layer(self._index))

    def to_dict(self) -> dict[str, Any]:
        """Flattened view of every visible key, nearest layer winning."""
        merged: dict[str, Any] = {}
        for layer_index in reversed(list(self._arena.chain(self._index))):
            merged.update(self._arena.layer(layer_index))
        return merged

    def __getitem__(self, key: str) -> Any:
        return self._arena.lookup(self._index, key)

    def __setitem__(self, key: str, value: Any) -> None:
        self._arena.layer(self._index)[key] = value

    def __delitem__(self, key: str) -> None:
        # Only local writes can be removed; inherited values stay visible.
        del self._arena.layer(self._index)[key]

    def __contains__(self, key: object) -> bool:
        return any(key in self._arena.layer(i) for i in self._arena.chain(self._index))

    def __iter__(self) -> Iterator[str]:
        return iter(self.to_dict())

    def __len__(self) -> int:
        return len(self.to_dict())

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._arena.lookup(self._index, name)
        except KeyError:
            raise AttributeError(
                f"{type(self).__name__} has no value for '{name}'"
            ) from None

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_"):
            raise AttributeError(f"Cannot set reserved context attribute '{name}'")
        self[name] = value

    def __delattr__(self, name: str) -> None:
        try:
            del self[name]
        except KeyError:
            raise AttributeError(name) from None

    def __repr__(self) -> str:
        return f"PluginContext(local={self.local()!r}, depth={len(list(self._arena.chain(self._index)))})"
