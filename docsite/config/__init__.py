"""Build and validate the navigation model of a documentation site.

This subpackage holds the navigation entries (:class:`NavItem`,
:class:`NavigationGroup`), the menus built from them
(:class:`NavigationTree`), the prefix-keyed sidebars
(:class:`SidebarRegistry`) and the frozen aggregate handed to the renderer
(:class:`SiteConfig`). The primary entry point is :func:`load_site_config`,
which reads ``site.yaml``, validates it, applies the listed plugins, and
returns a :class:`SiteConfig`.

Examples
--------
>>> from pathlib import Path
>>> from docsite.config import load_site_config
>>> site = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
>>> site.sidebars.resolve_prefix("/guide/docker")  # doctest: +SKIP
'/guide/'
"""

from .errors import (
    ConflictingMetadataError,
    ConflictingPrefixError,
    DuplicateLinkError,
    EmptyLabelError,
    FrozenConfigError,
    MalformedLinkError,
    PluginCompositionError,
    SiteConfigError,
    UnknownPluginError,
    UnknownPrefixError,
)
from .loader import build_base_config, build_site_config, load_site_config
from .models import NavEntry, NavigationGroup, NavItem, NavLink
from .navigation import LinkListing, NavigationTree
from .sidebar import SidebarRegistry
from .site import SiteConfig

__all__ = [
    "ConflictingMetadataError",
    "ConflictingPrefixError",
    "DuplicateLinkError",
    "EmptyLabelError",
    "FrozenConfigError",
    "LinkListing",
    "MalformedLinkError",
    "NavEntry",
    "NavItem",
    "NavLink",
    "NavigationGroup",
    "NavigationTree",
    "PluginCompositionError",
    "SidebarRegistry",
    "SiteConfig",
    "SiteConfigError",
    "UnknownPluginError",
    "UnknownPrefixError",
    "build_base_config",
    "build_site_config",
    "load_site_config",
]
