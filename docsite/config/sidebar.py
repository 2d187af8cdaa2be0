"""Map URL path prefixes to the sidebar shown beneath them."""

from __future__ import annotations

import collections.abc as cabc
import logging

from .errors import (
    ConflictingPrefixError,
    FrozenConfigError,
    MalformedLinkError,
    UnknownPrefixError,
)
from .models import NavEntry
from .navigation import NavigationTree

logger = logging.getLogger(__name__)


class SidebarRegistry:
    """Ordered prefix → :class:`NavigationTree` mapping.

    Lookups use the longest registered prefix of the visited path. Nested
    prefixes (``/guide/`` and ``/guide/advanced/``) are accepted unless the
    registry is created with ``allow_nested=False``, in which case every pair
    of prefixes must be disjoint.

    Examples
    --------
    >>> registry = SidebarRegistry()
    >>> guide, advanced = NavigationTree(), NavigationTree()
    >>> registry.register("/guide/", guide)
    >>> registry.register("/guide/advanced/", advanced)
    >>> registry.resolve("/guide/advanced/docker") is advanced
    True
    >>> registry.resolve("/guide/intro") is guide
    True
    >>> registry.resolve("/reference/cli") is None
    True
    """

    __slots__ = ("_allow_nested", "_frozen", "_trees")

    def __init__(self, *, allow_nested: bool = True) -> None:
        self._trees: dict[str, NavigationTree] = {}
        self._allow_nested = allow_nested
        self._frozen = False

    def register(self, prefix: str, tree: NavigationTree) -> None:
        """Register ``tree`` for every path starting with ``prefix``.

        Raises
        ------
        MalformedLinkError
            If ``prefix`` does not start with ``/``.
        ConflictingPrefixError
            If ``prefix`` is already registered, or overlaps an existing
            prefix while nesting is disallowed.
        FrozenConfigError
            If the registry belongs to a built configuration.
        """
        self._ensure_mutable()
        if not isinstance(tree, NavigationTree):
            msg = f"Expected a NavigationTree, got {type(tree).__name__}."
            raise TypeError(msg)
        if not prefix or not prefix.startswith("/"):
            raise MalformedLinkError(prefix, location="sidebar prefixes")
        if prefix in self._trees:
            raise ConflictingPrefixError(prefix, prefix)
        if not self._allow_nested:
            for existing in self._trees:
                if existing.startswith(prefix) or prefix.startswith(existing):
                    raise ConflictingPrefixError(prefix, existing)
        self._trees[prefix] = tree
        logger.debug("registered sidebar %s (%d entries)", prefix, len(tree))

    def extend(self, prefix: str, entry: NavEntry) -> None:
        """Append ``entry`` to the tree registered under ``prefix``."""
        self._ensure_mutable()
        try:
            tree = self._trees[prefix]
        except KeyError as exc:
            raise UnknownPrefixError(prefix) from exc
        tree.add(entry)

    def resolve_prefix(self, path: str) -> str | None:
        """Return the longest registered prefix of ``path``, if any.

        Equal-length matches go to the most recently registered prefix.
        """
        best: str | None = None
        for prefix in self._trees:
            if path.startswith(prefix) and (best is None or len(prefix) >= len(best)):
                best = prefix
        return best

    def resolve(self, path: str) -> NavigationTree | None:
        """Return the sidebar to render alongside ``path``, if any."""
        prefix = self.resolve_prefix(path)
        if prefix is None:
            return None
        return self._trees[prefix]

    def copy(self) -> SidebarRegistry:
        """Return an unfrozen deep copy with the same registration order."""
        clone = SidebarRegistry(allow_nested=self._allow_nested)
        for prefix, tree in self._trees.items():
            clone._trees[prefix] = tree.copy()
        return clone

    def freeze(self) -> None:
        """Freeze the registry and every tree it holds."""
        self._frozen = True
        for tree in self._trees.values():
            tree.freeze()

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def allow_nested(self) -> bool:
        return self._allow_nested

    @property
    def prefixes(self) -> tuple[str, ...]:
        return tuple(self._trees)

    def items(self) -> tuple[tuple[str, NavigationTree], ...]:
        return tuple(self._trees.items())

    def _ensure_mutable(self) -> None:
        if self._frozen:
            msg = "Sidebar registry is frozen; build a new configuration instead."
            raise FrozenConfigError(msg)

    def __getitem__(self, prefix: str) -> NavigationTree:
        return self._trees[prefix]

    def __contains__(self, prefix: object) -> bool:
        return prefix in self._trees

    def __iter__(self) -> cabc.Iterator[str]:
        return iter(tuple(self._trees))

    def __len__(self) -> int:
        return len(self._trees)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SidebarRegistry):
            return NotImplemented
        return list(self._trees.items()) == list(other._trees.items())

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"SidebarRegistry({self._trees!r})"


__all__ = ["SidebarRegistry"]
