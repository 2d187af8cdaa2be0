"""Apply plugin transformations to a base site configuration.

Plugins are named mutation recipes. Each one receives a :class:`SiteDraft`, an
append-only working copy of the configuration: it can add top navigation
entries, register or extend sidebars, and merge metadata, but it cannot remove
or replace anything an earlier plugin (or the base) put there. Plugins run in
the order given. The first validation failure aborts the whole composition and
is reported with the name and position of the offending plugin; the base
configuration is never modified.

Examples
--------
>>> from docsite.composer import Plugin, compose
>>> from docsite.config import NavItem
>>> def add_examples(draft):
...     draft.add_nav_item(NavItem("Examples", "/examples/"))
>>> site = compose(base, [Plugin("examples", add_examples)])  # doctest: +SKIP
>>> [label for label, _ in site.nav.flatten_links()]  # doctest: +SKIP
['Home', 'Examples']
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging
import typing as typ

from .config.errors import PluginCompositionError, SiteConfigError
from .config.helpers import _thaw, merge_metadata
from .config.site import SiteConfig, check_site_links

if typ.TYPE_CHECKING:
    from .config.models import NavEntry, NavigationGroup, NavItem, NavLink
    from .config.navigation import NavigationTree

logger = logging.getLogger(__name__)


class SiteDraft:
    """Append-only working copy of a :class:`SiteConfig`."""

    __slots__ = ("_base", "_metadata", "_nav", "_sidebars")

    def __init__(self, base: SiteConfig) -> None:
        self._base = base
        self._nav = base.nav.copy()
        self._sidebars = base.sidebars.copy()
        self._metadata: dict[str, typ.Any] = _thaw(base.metadata)

    @property
    def title(self) -> str:
        return self._base.title

    @property
    def description(self) -> str:
        return self._base.description

    @property
    def base_path(self) -> str:
        return self._base.base_path

    @property
    def version(self) -> str | None:
        return self._base.version

    @property
    def metadata(self) -> dict[str, typ.Any]:
        """Return a copy of the metadata merged so far."""
        return _thaw(self._metadata)

    def nav_links(self) -> tuple[NavLink, ...]:
        return tuple(self._nav.flatten_links())

    def sidebar_prefixes(self) -> tuple[str, ...]:
        return self._sidebars.prefixes

    def add_nav_group(self, group: NavigationGroup) -> None:
        self._nav.add_group(group)

    def add_nav_item(self, item: NavItem) -> None:
        self._nav.add_item(item)

    def add_nav_entry(self, entry: NavEntry) -> None:
        self._nav.add(entry)

    def register_sidebar(self, prefix: str, tree: NavigationTree) -> None:
        # Register a private copy so the plugin cannot mutate it afterwards.
        self._sidebars.register(prefix, tree.copy())

    def extend_sidebar(self, prefix: str, entry: NavEntry) -> None:
        self._sidebars.extend(prefix, entry)

    def merge_metadata(self, values: cabc.Mapping[str, typ.Any]) -> None:
        """Add ``values`` to the metadata; existing values are never replaced."""
        merged = _thaw(self._metadata)
        merge_metadata(merged, values)
        self._metadata = merged

    def check_links(self) -> None:
        check_site_links(self._nav, self._sidebars)

    def build(self) -> SiteConfig:
        """Freeze the draft into a new :class:`SiteConfig`."""
        return SiteConfig.build(
            self._nav,
            self._sidebars,
            self._metadata,
            title=self._base.title,
            description=self._base.description,
            base_path=self._base.base_path,
            version=self._base.version,
        )


Transformation: typ.TypeAlias = cabc.Callable[[SiteDraft], None]


@dc.dataclass(frozen=True, slots=True)
class Plugin:
    """A named transformation applied during composition."""

    name: str
    transform: Transformation


class ConfigComposer:
    """Compose an ordered, uniquely named sequence of plugins over a base."""

    def __init__(self, plugins: cabc.Iterable[Plugin] = ()) -> None:
        self.plugins = tuple(plugins)
        seen: set[str] = set()
        for plugin in self.plugins:
            if plugin.name in seen:
                msg = f"Plugin '{plugin.name}' is listed more than once."
                raise SiteConfigError(msg)
            seen.add(plugin.name)

    def compose(self, base: SiteConfig) -> SiteConfig:
        """Apply every plugin to a copy of ``base`` and return the result.

        Parameters
        ----------
        base : SiteConfig
            Validated starting configuration. It is not modified.

        Returns
        -------
        SiteConfig
            ``base`` itself when there are no plugins, otherwise a new frozen
            configuration.

        Raises
        ------
        PluginCompositionError
            If a plugin raises a validation error or introduces a malformed
            link. Nothing composed so far is kept.
        """
        if not self.plugins:
            return base
        draft = SiteDraft(base)
        for index, plugin in enumerate(self.plugins):
            try:
                plugin.transform(draft)
                draft.check_links()
            except SiteConfigError as exc:
                raise PluginCompositionError(plugin.name, index, exc) from exc
            logger.debug("applied plugin %s (position %d)", plugin.name, index)
        return draft.build()


def compose(base: SiteConfig, plugins: cabc.Iterable[Plugin] = ()) -> SiteConfig:
    """Compose ``plugins`` over ``base``; see :meth:`ConfigComposer.compose`."""
    return ConfigComposer(plugins).compose(base)


__all__ = ["ConfigComposer", "Plugin", "SiteDraft", "Transformation", "compose"]
