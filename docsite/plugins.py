"""Plugin factories that can be named from the site configuration file.

A factory receives the plugin's identity and its ``options`` mapping and
returns a :class:`~docsite.composer.Plugin`. Two factories ship with the
package:

``mermaid``
    Diagram-rendering wrapper. Records the Mermaid options under the
    ``mermaid`` metadata key and enables the ``mermaid`` fence language.
``extend``
    Declarative extension: appends ``nav`` entries, registers ``sidebar``
    prefixes, appends groups to existing prefixes via ``append_sidebar``, and
    merges ``metadata``.
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from .composer import Plugin, SiteDraft
from .config.errors import SiteConfigError, UnknownPluginError
from .config.loader import build_nav_entry, build_navigation_tree

PluginFactory: typ.TypeAlias = cabc.Callable[[str, cabc.Mapping[str, typ.Any]], Plugin]


class PluginRegistry:
    """Name → factory lookup used when resolving the ``plugins`` list."""

    def __init__(self) -> None:
        self._factories: dict[str, PluginFactory] = {}

    def register(self, name: str, factory: PluginFactory) -> None:
        if name in self._factories:
            msg = f"Plugin factory '{name}' is already registered."
            raise SiteConfigError(msg)
        self._factories[name] = factory

    def create(
        self, factory: str, name: str, options: cabc.Mapping[str, typ.Any]
    ) -> Plugin:
        """Instantiate the plugin ``name`` using the ``factory`` entry."""
        try:
            build = self._factories[factory]
        except KeyError as exc:
            raise UnknownPluginError(factory, self._factories) from exc
        return build(name, options)

    def names(self) -> tuple[str, ...]:
        return tuple(self._factories)

    def __contains__(self, name: object) -> bool:
        return name in self._factories


def mermaid_plugin(name: str, options: cabc.Mapping[str, typ.Any]) -> Plugin:
    """Return the diagram-rendering wrapper plugin."""
    settings = dict(options)

    def transform(draft: SiteDraft) -> None:
        values: dict[str, typ.Any] = {"mermaid": settings}
        markdown = draft.metadata.get("markdown") or {}
        if "mermaid" not in (markdown.get("fence_languages") or []):
            values["markdown"] = {"fence_languages": ["mermaid"]}
        draft.merge_metadata(values)

    return Plugin(name, transform)


def extend_plugin(name: str, options: cabc.Mapping[str, typ.Any]) -> Plugin:
    """Return a plugin that appends the entries declared in ``options``."""
    settings = dict(options)
    location = f"plugin '{name}'"

    def transform(draft: SiteDraft) -> None:
        for entry in settings.get("nav") or []:
            draft.add_nav_entry(build_nav_entry(entry, location=location))
        for prefix, entries in _mapping(settings, "sidebar", location).items():
            tree = build_navigation_tree(entries, location=f"{location} '{prefix}'")
            draft.register_sidebar(str(prefix), tree)
        for prefix, entries in _mapping(settings, "append_sidebar", location).items():
            for entry in entries or []:
                draft.extend_sidebar(
                    str(prefix), build_nav_entry(entry, location=location)
                )
        metadata = _mapping(settings, "metadata", location)
        if metadata:
            draft.merge_metadata(metadata)

    return Plugin(name, transform)


def _mapping(
    options: cabc.Mapping[str, typ.Any], key: str, location: str
) -> cabc.Mapping[str, typ.Any]:
    value = options.get(key) or {}
    if not isinstance(value, cabc.Mapping):
        msg = f"'{key}' in {location} must be a mapping."
        raise SiteConfigError(msg)
    return value


def default_registry() -> PluginRegistry:
    """Return a registry holding the built-in plugin factories."""
    registry = PluginRegistry()
    registry.register("mermaid", mermaid_plugin)
    registry.register("extend", extend_plugin)
    return registry


__all__ = [
    "PluginFactory",
    "PluginRegistry",
    "default_registry",
    "extend_plugin",
    "mermaid_plugin",
]
