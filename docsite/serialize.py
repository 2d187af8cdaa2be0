"""Turn a composed configuration into the payload the renderer reads.

The payload is plain JSON with a stable key order, so composing the same
inputs twice yields byte-identical output.

Examples
--------
>>> from docsite.serialize import encode_site_config
>>> encode_site_config(site)  # doctest: +SKIP
b'{\\n  "title": "Gokku", ...'
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

import msgspec.json as msgspec_json

from .config.helpers import _thaw, canonical_link
from .config.models import NavEntry, NavigationGroup, NavItem, NavLink

if typ.TYPE_CHECKING:
    from .config.navigation import NavigationTree
    from .config.site import SiteConfig


def _entry_to_builtins(entry: NavEntry) -> dict[str, typ.Any]:
    match entry:
        case NavItem(text=text, link=link):
            return {"text": text, "link": link}
        case NavigationGroup(text=text, items=items, collapsed=collapsed):
            payload: dict[str, typ.Any] = {
                "text": text,
                "items": [_entry_to_builtins(child) for child in items],
            }
            if collapsed is not None:
                payload["collapsed"] = collapsed
            return payload
        case _:
            msg = f"Unsupported navigation entry: {entry!r}"
            raise TypeError(msg)


def tree_to_builtins(tree: NavigationTree) -> list[dict[str, typ.Any]]:
    """Return the entries of ``tree`` as nested dicts."""
    return [_entry_to_builtins(entry) for entry in tree]


def site_config_to_builtins(config: SiteConfig) -> dict[str, typ.Any]:
    """Return ``config`` as plain dicts and lists.

    The version label, when set, becomes the first top navigation entry and
    links to the base path.
    """
    nav = tree_to_builtins(config.nav)
    if config.version:
        nav.insert(0, {"text": config.version, "link": config.base_path})
    payload: dict[str, typ.Any] = {
        "title": config.title,
        "description": config.description,
        "basePath": config.base_path,
    }
    if config.version:
        payload["version"] = config.version
    payload["nav"] = nav
    payload["sidebars"] = {
        prefix: tree_to_builtins(tree) for prefix, tree in config.sidebars.items()
    }
    payload["metadata"] = _thaw(config.metadata)
    return payload


def encode_site_config(config: SiteConfig, *, indent: int = 2) -> bytes:
    """Encode ``config`` as JSON; ``indent=0`` gives the compact form."""
    encoded = msgspec_json.encode(site_config_to_builtins(config))
    if indent <= 0:
        return encoded
    return msgspec_json.format(encoded, indent=indent)


def iter_sitemap(config: SiteConfig) -> cabc.Iterator[NavLink]:
    """Yield each distinct link in the nav, then in each sidebar.

    Links that resolve to the same target are listed once, under the first
    label they appear with.
    """
    seen: set[str] = set()
    trees = [config.nav, *(tree for _, tree in config.sidebars.items())]
    for tree in trees:
        for label, link in tree.flatten_links():
            key = canonical_link(link)
            if key in seen:
                continue
            seen.add(key)
            yield NavLink(label, link)


__all__ = [
    "encode_site_config",
    "iter_sitemap",
    "site_config_to_builtins",
    "tree_to_builtins",
]
