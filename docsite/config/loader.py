"""Load site configuration YAML into a composed :class:`SiteConfig`."""

from __future__ import annotations

import collections.abc as cabc
import logging
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .errors import SiteConfigError
from .helpers import _optional_str
from .models import NavEntry, NavigationGroup, NavItem
from .navigation import NavigationTree
from .sidebar import SidebarRegistry
from .site import SiteConfig

if typ.TYPE_CHECKING:
    from ..composer import Plugin
    from ..plugins import PluginRegistry

logger = logging.getLogger(__name__)

PASSTHROUGH_KEYS = (
    "head",
    "logo",
    "social_links",
    "footer",
    "search",
    "theme",
    "ignore_dead_links",
)


def load_site_config(
    path: Path, *, registry: PluginRegistry | None = None
) -> SiteConfig:
    """Load the YAML site configuration and apply its plugins.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``config/site.yaml``).
    registry : PluginRegistry, optional
        Registry used to resolve plugin names; defaults to the built-in
        plugins.

    Returns
    -------
    SiteConfig
        The composed, frozen configuration.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If the configuration is invalid, including any plugin failure.

    Examples
    --------
    >>> from pathlib import Path
    >>> site = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
    >>> site.resolve_sidebar("/guide/installation")  # doctest: +SKIP
    NavigationTree([...])
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    logger.debug("loaded site configuration from %s", path)
    return build_site_config(loaded, registry=registry)


def build_site_config(
    payload: cabc.Mapping[str, typ.Any], *, registry: PluginRegistry | None = None
) -> SiteConfig:
    """Build the base configuration from ``payload`` and compose its plugins."""
    from ..composer import compose
    from ..plugins import default_registry

    base = build_base_config(payload)
    plugins = resolve_plugins(
        payload.get("plugins"), registry if registry is not None else default_registry()
    )
    return compose(base, plugins)


def build_base_config(payload: cabc.Mapping[str, typ.Any]) -> SiteConfig:
    """Build a :class:`SiteConfig` from ``payload`` without applying plugins."""
    title = _optional_str(payload.get("title"))
    if not title:
        msg = "Site configuration requires a 'title'."
        raise SiteConfigError(msg)

    nav = build_navigation_tree(payload.get("nav"), location="nav")
    sidebars = build_sidebar_registry(payload.get("sidebar"))

    metadata: dict[str, typ.Any] = {}
    for key in PASSTHROUGH_KEYS:
        if payload.get(key) is not None:
            metadata[key] = payload[key]
    if isinstance(metadata.get("search"), str):
        metadata["search"] = {"provider": metadata["search"]}

    return SiteConfig.build(
        nav,
        sidebars,
        metadata,
        title=title,
        description=str(payload.get("description") or ""),
        base_path=str(payload.get("base") or "/"),
        version=_optional_str(payload.get("version")),
    )


def build_navigation_tree(
    entries: list[typ.Any] | None, *, location: str
) -> NavigationTree:
    """Build a tree from a list of entry mappings."""
    tree = NavigationTree()
    for entry in _require_list(entries, location):
        tree.add(build_nav_entry(entry, location=location))
    return tree


def build_sidebar_registry(
    payload: cabc.Mapping[str, typ.Any] | None,
) -> SidebarRegistry:
    """Build a registry from a ``prefix: [entries]`` mapping."""
    registry = SidebarRegistry()
    match payload:
        case None:
            return registry
        case dict():
            pass
        case _:
            msg = "Sidebar configuration must map path prefixes to entry lists."
            raise SiteConfigError(msg)
    for prefix, entries in payload.items():
        tree = build_navigation_tree(entries, location=f"sidebar '{prefix}'")
        registry.register(str(prefix), tree)
    return registry


def build_nav_entry(payload: typ.Any, *, location: str) -> NavEntry:
    """Build a leaf or a group from a single entry mapping."""
    match payload:
        case {"items": items, **rest}:
            children = tuple(
                build_nav_entry(child, location=location)
                for child in _require_list(items, location)
            )
            collapsed = rest.get("collapsed")
            return NavigationGroup(
                text=str(rest.get("text") or ""),
                items=children,
                collapsed=None if collapsed is None else bool(collapsed),
            )
        case {"link": link, **rest}:
            return NavItem(text=str(rest.get("text") or ""), link=str(link or ""))
        case _:
            msg = (
                f"Navigation entries in {location} need either 'link' or 'items': "
                f"{payload!r}"
            )
            raise SiteConfigError(msg)


def _require_list(value: typ.Any, location: str) -> list[typ.Any]:
    match value:
        case None:
            return []
        case list():
            return value
        case _:
            msg = f"Entries in {location} must be a list."
            raise SiteConfigError(msg)


def resolve_plugins(
    entries: list[typ.Any] | None, registry: PluginRegistry
) -> list[Plugin]:
    """Turn the ``plugins`` list into plugin objects using ``registry``.

    Each entry is either a bare factory name or a mapping with ``name``
    (identity), optional ``use`` (factory, defaults to ``name``) and
    ``options``.
    """
    plugins: list[Plugin] = []
    for entry in _require_list(entries, "plugins"):
        match entry:
            case str() as name:
                plugins.append(registry.create(name, name, {}))
            case {"name": name, **rest}:
                options = rest.get("options") or {}
                if not isinstance(options, dict):
                    msg = f"Options for plugin '{name}' must be a mapping."
                    raise SiteConfigError(msg)
                factory = str(rest.get("use") or name)
                plugins.append(registry.create(factory, str(name), options))
            case _:
                msg = f"Plugin entries need a 'name': {entry!r}"
                raise SiteConfigError(msg)
    return plugins


__all__ = [
    "PASSTHROUGH_KEYS",
    "build_base_config",
    "build_nav_entry",
    "build_navigation_tree",
    "build_sidebar_registry",
    "build_site_config",
    "load_site_config",
    "resolve_plugins",
]
