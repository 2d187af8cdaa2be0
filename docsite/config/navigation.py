"""Ordered, validated navigation menus.

A :class:`NavigationTree` holds the entries of one menu, either the top
navigation bar or a single section sidebar. Entries keep their insertion order
(which is also their display order), every label must be non-blank, and no two
leaves may point at the same target. The checks run when an entry is appended,
so a tree never holds an invalid state.

Examples
--------
>>> from docsite.config import NavItem, NavigationGroup, NavigationTree
>>> tree = NavigationTree()
>>> tree.add_group(
...     NavigationGroup(
...         "Introduction",
...         (NavItem("Getting Started", "/guide/getting-started"),),
...     )
... )
>>> [link for _, link in tree.flatten_links()]
['/guide/getting-started']
"""

from __future__ import annotations

import collections.abc as cabc

from .errors import DuplicateLinkError, EmptyLabelError, FrozenConfigError
from .helpers import _is_blank, canonical_link
from .models import NavEntry, NavigationGroup, NavItem, NavLink


def _walk(entry: NavEntry) -> cabc.Iterator[NavLink]:
    """Yield the leaves below ``entry`` depth-first in declaration order."""
    match entry:
        case NavItem(text=text, link=link):
            yield NavLink(text, link)
        case NavigationGroup(items=items):
            for child in items:
                yield from _walk(child)
        case _:
            msg = f"Unsupported navigation entry: {entry!r}"
            raise TypeError(msg)


def _check_labels(entry: NavEntry) -> None:
    """Raise EmptyLabelError if ``entry`` or anything below it is unlabelled."""
    if _is_blank(entry.text):
        kind = "group" if isinstance(entry, NavigationGroup) else "item"
        target = f" linking to {entry.link!r}" if isinstance(entry, NavItem) else ""
        msg = f"Navigation {kind}{target} requires a non-empty label."
        raise EmptyLabelError(msg)
    if isinstance(entry, NavigationGroup):
        for child in entry.items:
            _check_labels(child)


class LinkListing:
    """Restartable view over the leaves of a menu.

    Each call to :func:`iter` starts a fresh depth-first walk over the entries
    captured when the listing was created.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: cabc.Iterable[NavEntry]) -> None:
        self._entries = tuple(entries)

    def __iter__(self) -> cabc.Iterator[NavLink]:
        for entry in self._entries:
            yield from _walk(entry)


class NavigationTree:
    """Ordered sequence of navigation entries for a single menu."""

    __slots__ = ("_entries", "_frozen", "_links")

    def __init__(self, entries: cabc.Iterable[NavEntry] = ()) -> None:
        self._entries: list[NavEntry] = []
        self._links: dict[str, str] = {}
        self._frozen = False
        for entry in entries:
            self.add(entry)

    def add_group(self, group: NavigationGroup) -> None:
        """Append ``group`` after validating its labels and links.

        Raises
        ------
        EmptyLabelError
            If the group, or anything nested inside it, has a blank label.
        DuplicateLinkError
            If a leaf link inside ``group`` collides with a link already in
            the tree or with another leaf of the same group.
        FrozenConfigError
            If the tree belongs to a built configuration.
        """
        if not isinstance(group, NavigationGroup):
            msg = f"Expected a NavigationGroup, got {type(group).__name__}."
            raise TypeError(msg)
        self._append(group)

    def add_item(self, item: NavItem) -> None:
        """Append a top-level leaf ``item`` with the same checks as groups."""
        if not isinstance(item, NavItem):
            msg = f"Expected a NavItem, got {type(item).__name__}."
            raise TypeError(msg)
        self._append(item)

    def add(self, entry: NavEntry) -> None:
        """Append either kind of entry."""
        match entry:
            case NavigationGroup():
                self.add_group(entry)
            case NavItem():
                self.add_item(entry)
            case _:
                msg = f"Unsupported navigation entry: {entry!r}"
                raise TypeError(msg)

    def flatten_links(self) -> LinkListing:
        """Return every leaf as ``(label, link)`` in display order."""
        return LinkListing(self._entries)

    def copy(self) -> NavigationTree:
        """Return an unfrozen copy sharing the (immutable) entries."""
        clone = NavigationTree()
        clone._entries = list(self._entries)
        clone._links = dict(self._links)
        return clone

    def freeze(self) -> None:
        """Reject any further additions."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def entries(self) -> tuple[NavEntry, ...]:
        return tuple(self._entries)

    def _append(self, entry: NavEntry) -> None:
        if self._frozen:
            msg = "Navigation tree is frozen; build a new configuration instead."
            raise FrozenConfigError(msg)
        _check_labels(entry)
        incoming: dict[str, str] = {}
        for label, link in _walk(entry):
            key = canonical_link(link)
            existing = self._links.get(key, incoming.get(key))
            if existing is not None:
                raise DuplicateLinkError(link, label, existing)
            incoming[key] = label
        self._entries.append(entry)
        self._links.update(incoming)

    def __iter__(self) -> cabc.Iterator[NavEntry]:
        return iter(tuple(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NavigationTree):
            return NotImplemented
        return self._entries == other._entries

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"NavigationTree({self._entries!r})"


__all__ = ["LinkListing", "NavigationTree"]
