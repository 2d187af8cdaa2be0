"""Utility helpers shared by the navigation model, loader, and composer."""

from __future__ import annotations

import collections.abc as cabc
import types
import typing as typ
from urllib.parse import urlsplit, urlunsplit

from .errors import ConflictingMetadataError

WEB_SCHEMES = frozenset({"http", "https"})
PAGE_SUFFIXES = (".html", ".md")


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _is_blank(text: str | None) -> bool:
    """Return True when ``text`` is missing or only whitespace."""
    return not text or not text.strip()


def _is_internal(link: str) -> bool:
    return link.startswith("/") and not link.startswith("//")


def is_well_formed_link(link: str) -> bool:
    """Return True for internal paths and absolute external URLs.

    Internal links start with a single ``/``. External links must be absolute
    ``http``/``https`` URLs with a host, or ``mailto:`` URLs with an address.

    Examples
    --------
    >>> is_well_formed_link("/guide/installation")
    True
    >>> is_well_formed_link("https://github.com/thadeu/gokku")
    True
    >>> is_well_formed_link("guide/installation")
    False
    """
    if not link or link != link.strip():
        return False
    if _is_internal(link):
        return True
    try:
        parts = urlsplit(link)
    except ValueError:
        return False
    if parts.scheme in WEB_SCHEMES:
        return bool(parts.netloc)
    if parts.scheme == "mailto":
        return bool(parts.path)
    return False


def canonical_link(link: str) -> str:
    """Return the key used to decide whether two links share a target.

    Internal links drop a trailing page suffix and ``index`` segment so that
    ``/examples/``, ``/examples/index`` and ``/examples/index.html`` collide.
    External links are compared verbatim.
    """
    if not _is_internal(link):
        return link
    parts = urlsplit(link)
    path = parts.path
    for suffix in PAGE_SUFFIXES:
        if path.endswith(suffix):
            path = path[: -len(suffix)]
            break
    if path.endswith("/index"):
        path = path[: -len("index")]
    return urlunsplit(parts._replace(path=path))


def merge_metadata(
    target: dict[str, typ.Any],
    incoming: cabc.Mapping[str, typ.Any],
    *,
    path: tuple[str, ...] = (),
) -> None:
    """Merge ``incoming`` into ``target`` without overwriting anything.

    Nested mappings merge recursively and lists are extended. A scalar that is
    already present may only be merged with an equal value.

    Raises
    ------
    ConflictingMetadataError
        If a key already holds a different, non-mergeable value.
    """
    for key, value in incoming.items():
        key_path = (*path, str(key))
        if key not in target:
            target[key] = _thaw(value)
            continue
        current = target[key]
        match current, value:
            case dict(), cabc.Mapping():
                merge_metadata(current, value, path=key_path)
            case list(), list() | tuple():
                current.extend(_thaw(item) for item in value)
            case _ if current == _thaw(value):
                continue
            case _:
                raise ConflictingMetadataError(key_path)


def _freeze(value: typ.Any) -> typ.Any:
    """Return a read-only deep copy of plain mapping/list data."""
    match value:
        case cabc.Mapping():
            return types.MappingProxyType({k: _freeze(v) for k, v in value.items()})
        case list() | tuple():
            return tuple(_freeze(item) for item in value)
        case _:
            return value


def _thaw(value: typ.Any) -> typ.Any:
    """Return a mutable deep copy made of dicts and lists."""
    match value:
        case cabc.Mapping():
            return {k: _thaw(v) for k, v in value.items()}
        case list() | tuple():
            return [_thaw(item) for item in value]
        case _:
            return value


__all__ = [
    "PAGE_SUFFIXES",
    "WEB_SCHEMES",
    "_freeze",
    "_is_blank",
    "_optional_str",
    "_thaw",
    "canonical_link",
    "is_well_formed_link",
    "merge_metadata",
]
