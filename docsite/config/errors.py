"""Exception types raised while building or composing a site configuration.

Every error is a :class:`SiteConfigError`, itself a :class:`ValueError`, so
callers that only care about "the configuration is invalid" can catch the base
class. All of them are raised at build time; none are transient.
"""

from __future__ import annotations

import collections.abc as cabc


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


class EmptyLabelError(SiteConfigError):
    """Raised when a navigation item or group has a blank label."""


class FrozenConfigError(SiteConfigError):
    """Raised when a built configuration is modified after composition."""


class DuplicateLinkError(SiteConfigError):
    """Raised when two leaves of one navigation tree point at the same target."""

    def __init__(self, link: str, label: str, existing_label: str) -> None:
        self.link = link
        self.label = label
        self.existing_label = existing_label
        msg = (
            f"Link '{link}' (label '{label}') duplicates the entry "
            f"'{existing_label}' already in this menu."
        )
        super().__init__(msg)


class ConflictingPrefixError(SiteConfigError):
    """Raised when a sidebar prefix collides with one already registered."""

    def __init__(self, prefix: str, existing: str) -> None:
        self.prefix = prefix
        self.existing = existing
        if prefix == existing:
            msg = f"Sidebar prefix '{prefix}' is already registered."
        else:
            msg = f"Sidebar prefix '{prefix}' overlaps registered prefix '{existing}'."
        super().__init__(msg)


class UnknownPrefixError(SiteConfigError):
    """Raised when extending a sidebar prefix that was never registered."""

    def __init__(self, prefix: str) -> None:
        self.prefix = prefix
        super().__init__(f"Sidebar prefix '{prefix}' is not registered.")


class MalformedLinkError(SiteConfigError):
    """Raised when a link is neither an internal path nor an absolute URL."""

    def __init__(
        self, link: str, *, label: str | None = None, location: str | None = None
    ) -> None:
        self.link = link
        self.label = label
        self.location = location
        msg = f"Malformed link {link!r}"
        if label:
            msg = f"{msg} for '{label}'"
        if location:
            msg = f"{msg} in {location}"
        super().__init__(f"{msg}.")


class ConflictingMetadataError(SiteConfigError):
    """Raised when merged metadata would overwrite an existing value."""

    def __init__(self, key_path: cabc.Sequence[str]) -> None:
        self.key_path = tuple(key_path)
        dotted = ".".join(self.key_path)
        super().__init__(f"Metadata key '{dotted}' is already set to another value.")


class UnknownPluginError(SiteConfigError):
    """Raised when a configuration names a plugin nobody registered."""

    def __init__(self, name: str, known: cabc.Iterable[str] = ()) -> None:
        self.name = name
        available = ", ".join(sorted(known)) or "none"
        super().__init__(f"Unknown plugin '{name}'. Known plugins: {available}")


class PluginCompositionError(SiteConfigError):
    """Raised when a plugin transformation leaves the configuration invalid.

    Attributes
    ----------
    plugin : str
        Name of the offending plugin.
    index : int
        Position of the plugin in the composed sequence.
    error : SiteConfigError
        The underlying validation failure.
    """

    def __init__(self, plugin: str, index: int, error: SiteConfigError) -> None:
        self.plugin = plugin
        self.index = index
        self.error = error
        super().__init__(f"Plugin '{plugin}' (position {index}) failed: {error}")


__all__ = [
    "ConflictingMetadataError",
    "ConflictingPrefixError",
    "DuplicateLinkError",
    "EmptyLabelError",
    "FrozenConfigError",
    "MalformedLinkError",
    "PluginCompositionError",
    "SiteConfigError",
    "UnknownPluginError",
    "UnknownPrefixError",
]
