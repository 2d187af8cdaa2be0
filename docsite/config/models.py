"""Typed dataclasses describing navigation entries."""

from __future__ import annotations

import dataclasses as dc
import typing as typ


@dc.dataclass(frozen=True, slots=True)
class NavItem:
    """A single labelled link."""

    text: str
    link: str


@dc.dataclass(frozen=True, slots=True)
class NavigationGroup:
    """A labelled, ordered collection of items and nested groups."""

    text: str
    items: tuple[NavEntry, ...] = ()
    collapsed: bool | None = None

    def __post_init__(self) -> None:
        # Accept any iterable so callers can pass lists.
        object.__setattr__(self, "items", tuple(self.items))


NavEntry: typ.TypeAlias = NavItem | NavigationGroup


class NavLink(typ.NamedTuple):
    """A ``(label, link)`` pair produced while flattening a menu."""

    label: str
    link: str


__all__ = ["NavEntry", "NavItem", "NavLink", "NavigationGroup"]
