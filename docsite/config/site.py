"""The root aggregate handed to the external renderer."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ

from .errors import MalformedLinkError, SiteConfigError
from .helpers import _freeze, _is_blank, is_well_formed_link
from .navigation import NavigationTree
from .sidebar import SidebarRegistry


def _check_links(tree: NavigationTree, location: str) -> None:
    """Raise MalformedLinkError for the first ill-formed link in ``tree``."""
    for label, link in tree.flatten_links():
        if not is_well_formed_link(link):
            raise MalformedLinkError(link, label=label, location=location)


def check_site_links(nav: NavigationTree, sidebars: SidebarRegistry) -> None:
    """Validate every link in the top nav and in each registered sidebar."""
    _check_links(nav, "the top navigation")
    for prefix, tree in sidebars.items():
        _check_links(tree, f"sidebar '{prefix}'")


@dc.dataclass(frozen=True, slots=True)
class SiteConfig:
    """Validated, frozen site configuration.

    Attributes
    ----------
    title : str
        Site title.
    description : str
        Site description used for meta tags.
    base_path : str
        Path the site is served under; always starts and ends with ``/``.
    nav : NavigationTree
        Top navigation bar.
    sidebars : SidebarRegistry
        Section sidebars keyed by path prefix.
    metadata : Mapping[str, Any]
        Read-only passthrough data (theme options, search, footer, social
        links, head tags, plugin options).
    version : str or None
        Optional version label shown as the first top navigation entry.

    Instances compare by value but are unhashable, like the trees they hold.
    """

    title: str
    description: str
    base_path: str
    nav: NavigationTree
    sidebars: SidebarRegistry
    metadata: cabc.Mapping[str, typ.Any]
    version: str | None = None

    __hash__ = None  # type: ignore[assignment]

    @classmethod
    def build(
        cls,
        nav: NavigationTree,
        sidebars: SidebarRegistry,
        metadata: cabc.Mapping[str, typ.Any] | None = None,
        *,
        title: str,
        description: str = "",
        base_path: str = "/",
        version: str | None = None,
    ) -> SiteConfig:
        """Validate the parts and freeze them into a :class:`SiteConfig`.

        Parameters
        ----------
        nav : NavigationTree
            Top navigation bar. The built configuration takes ownership and
            freezes it.
        sidebars : SidebarRegistry
            Section sidebars. Frozen along with every tree it holds.
        metadata : Mapping[str, Any], optional
            Passthrough values; deep-copied into read-only views.
        title : str
            Site title; must not be blank.
        description : str, optional
            Site description.
        base_path : str, optional
            Path the site is served under, ``/`` by default.
        version : str or None, optional
            Version label for the top navigation.

        Returns
        -------
        SiteConfig
            The frozen configuration.

        Raises
        ------
        MalformedLinkError
            If any nav or sidebar link is not an internal path or an absolute
            URL, or ``base_path`` is not a ``/``-delimited path.
        SiteConfigError
            If ``title`` is blank.
        """
        if _is_blank(title):
            msg = "Site configuration requires a 'title'."
            raise SiteConfigError(msg)
        if not (base_path.startswith("/") and base_path.endswith("/")):
            raise MalformedLinkError(base_path, location="the site base path")
        check_site_links(nav, sidebars)
        nav.freeze()
        sidebars.freeze()
        return cls(
            title=title,
            description=description,
            base_path=base_path,
            nav=nav,
            sidebars=sidebars,
            metadata=_freeze(dict(metadata or {})),
            version=version,
        )

    def resolve_sidebar(self, path: str) -> NavigationTree | None:
        """Return the sidebar registered for ``path``, if any."""
        return self.sidebars.resolve(path)


__all__ = ["SiteConfig", "check_site_links"]
