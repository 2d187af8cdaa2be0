"""Unit tests for the SiteConfig aggregate and its final link check."""

from __future__ import annotations

import pytest

from docsite.config import (
    FrozenConfigError,
    MalformedLinkError,
    NavigationGroup,
    NavigationTree,
    NavItem,
    SidebarRegistry,
    SiteConfig,
    SiteConfigError,
)


def _build(
    nav_links: list[str], sidebar_links: dict[str, list[str]] | None = None, **kwargs
) -> SiteConfig:
    nav = NavigationTree(NavItem(f"Nav {i}", link) for i, link in enumerate(nav_links))
    sidebars = SidebarRegistry()
    for prefix, links in (sidebar_links or {}).items():
        items = tuple(NavItem(f"Page {i}", link) for i, link in enumerate(links))
        sidebars.register(prefix, NavigationTree([NavigationGroup("Section", items)]))
    metadata = kwargs.pop("metadata", None)
    kwargs.setdefault("title", "Gokku")
    return SiteConfig.build(nav, sidebars, metadata, **kwargs)


def test_empty_link_is_malformed() -> None:
    """A NavItem with an empty link must fail the final build check."""
    with pytest.raises(MalformedLinkError) as excinfo:
        _build(["/", ""])

    assert excinfo.value.link == ""
    assert excinfo.value.label == "Nav 1", (
        f"expected the offending label in the error, got {excinfo.value!s}"
    )


@pytest.mark.parametrize(
    "link",
    [
        "guide/installation",
        "//cdn.example.com/x",
        "ftp://example.com/x",
        "https://",
        " /guide",
        "https://[broken",
    ],
)
def test_sidebar_links_are_checked(link: str) -> None:
    with pytest.raises(MalformedLinkError) as excinfo:
        _build(["/"], {"/guide/": ["/guide/intro", link]})

    assert "sidebar '/guide/'" in str(excinfo.value), (
        f"expected the sidebar prefix in the message, got {excinfo.value!s}"
    )


def test_internal_and_external_links_are_accepted() -> None:
    site = _build(
        ["/", "https://github.com/thadeu/gokku", "mailto:team@example.com"],
        {"/guide/": ["/guide/installation#linux", "/guide/env-vars?lang=go"]},
        description="Deploys",
        version="1.0.53",
    )

    assert site.title == "Gokku"
    assert site.version == "1.0.53"
    assert site.base_path == "/"
    assert site.resolve_sidebar("/guide/docker") is site.sidebars["/guide/"]


@pytest.mark.parametrize("base_path", ["", "docs/", "/docs"])
def test_base_path_must_be_slash_delimited(base_path: str) -> None:
    with pytest.raises(MalformedLinkError):
        _build(["/"], base_path=base_path)


def test_blank_title_is_rejected() -> None:
    with pytest.raises(SiteConfigError):
        _build(["/"], title="  ")


def test_build_freezes_trees_and_metadata() -> None:
    """Built configurations are immutable for the rest of the process."""
    metadata = {"footer": {"message": "MIT"}, "social_links": [{"icon": "github"}]}
    site = _build(["/"], {"/guide/": ["/guide/intro"]}, metadata=metadata)
    metadata["footer"]["message"] = "changed"

    assert site.metadata["footer"]["message"] == "MIT", (
        "metadata should be copied at build time"
    )
    assert site.metadata["social_links"] == ({"icon": "github"},)
    with pytest.raises(TypeError):
        site.metadata["footer"]["message"] = "changed"  # type: ignore[index]
    with pytest.raises(FrozenConfigError):
        site.nav.add_item(NavItem("Late", "/late"))
    with pytest.raises(FrozenConfigError):
        site.sidebars["/guide/"].add_item(NavItem("Late", "/guide/late"))


def test_site_config_is_unhashable() -> None:
    """Configurations compare by value but cannot be used as dict keys."""
    site = _build(["/"], {"/guide/": ["/guide/intro"]})

    assert site == site
    with pytest.raises(TypeError):
        hash(site)
