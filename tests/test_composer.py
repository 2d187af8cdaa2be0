"""Unit tests for plugin composition.

These tests exercise :func:`docsite.composer.compose`: declared-order
application, all-or-nothing failure reporting, append-only metadata merging,
and determinism of the composed result.
"""

from __future__ import annotations

import typing as typ

import pytest

from docsite.composer import ConfigComposer, Plugin, SiteDraft, compose
from docsite.config import (
    ConflictingMetadataError,
    ConflictingPrefixError,
    DuplicateLinkError,
    MalformedLinkError,
    NavigationGroup,
    NavigationTree,
    NavItem,
    PluginCompositionError,
    SidebarRegistry,
    SiteConfig,
    SiteConfigError,
)
from docsite.serialize import encode_site_config

if typ.TYPE_CHECKING:
    from pytest_mock import MockerFixture


def _base() -> SiteConfig:
    nav = NavigationTree(
        [
            NavItem("Home", "/"),
            NavigationGroup(
                "Guide", (NavItem("Installation", "/guide/installation"),)
            ),
        ]
    )
    sidebars = SidebarRegistry()
    sidebars.register(
        "/guide/",
        NavigationTree(
            [NavigationGroup("Introduction", (NavItem("Installation", "/guide/installation"),))]
        ),
    )
    return SiteConfig.build(
        nav,
        sidebars,
        {"search": {"provider": "local"}, "head": [["link", {"rel": "icon"}]]},
        title="Gokku",
        version="1.0.53",
    )


def _nav_plugin(name: str, text: str, link: str) -> Plugin:
    def transform(draft: SiteDraft) -> None:
        draft.add_nav_group(NavigationGroup(text, (NavItem(text, link),)))

    return Plugin(name, transform)


def test_plugins_append_in_declared_order() -> None:
    """Plugin entries land after the base entries, in plugin order."""
    site = compose(
        _base(),
        [
            _nav_plugin("plugins", "Plugins", "/plugins/"),
            _nav_plugin("examples", "Examples", "/examples/"),
        ],
    )

    labels = [entry.text for entry in site.nav]
    assert labels == ["Home", "Guide", "Plugins", "Examples"], (
        f"unexpected nav order: {labels!r}"
    )
    assert site.nav.frozen, "composed configurations must be frozen"


def test_empty_plugin_list_returns_base_unchanged() -> None:
    base = _base()
    assert compose(base, []) is base


def test_duplicate_link_identifies_plugin() -> None:
    """A plugin reusing a base link fails with its name and position."""
    base = _base()
    plugins = [
        _nav_plugin("plugins", "Plugins", "/plugins/"),
        _nav_plugin("reinstall", "Setup", "/guide/installation"),
    ]

    with pytest.raises(PluginCompositionError) as excinfo:
        compose(base, plugins)

    error = excinfo.value
    assert error.plugin == "reinstall"
    assert error.index == 1
    assert isinstance(error.error, DuplicateLinkError), (
        f"expected a DuplicateLinkError cause, got {error.error!r}"
    )
    assert error.__cause__ is error.error
    assert "reinstall" in str(error)
    assert len(base.nav) == 2, "the base configuration must not be modified"


@pytest.mark.parametrize("link", ["plugins/broken", "https://[broken"])
def test_malformed_link_from_plugin_is_attributed(link: str) -> None:
    def transform(draft: SiteDraft) -> None:
        draft.add_nav_item(NavItem("Broken", link))

    with pytest.raises(PluginCompositionError) as excinfo:
        compose(_base(), [Plugin("broken", transform)])

    assert isinstance(excinfo.value.error, MalformedLinkError)
    assert excinfo.value.plugin == "broken"


def test_composition_is_deterministic() -> None:
    """The same inputs compose to equal configurations and identical bytes."""

    def sidebar_plugin(draft: SiteDraft) -> None:
        draft.register_sidebar(
            "/plugins/",
            NavigationTree([NavigationGroup("Official", (NavItem("Cron", "/plugins/cron"),))]),
        )
        draft.merge_metadata({"mermaid": {"theme": "dark"}})

    plugins = [
        _nav_plugin("plugins", "Plugins", "/plugins/"),
        Plugin("plugin-sidebar", sidebar_plugin),
    ]

    first = compose(_base(), plugins)
    second = compose(_base(), plugins)

    assert first == second
    assert encode_site_config(first) == encode_site_config(second), (
        "expected byte-identical payloads for identical inputs"
    )


def test_sidebar_conflict_is_wrapped() -> None:
    def transform(draft: SiteDraft) -> None:
        draft.register_sidebar("/guide/", NavigationTree())

    with pytest.raises(PluginCompositionError) as excinfo:
        compose(_base(), [Plugin("guide-again", transform)])

    assert isinstance(excinfo.value.error, ConflictingPrefixError)


def test_extend_sidebar_appends_after_existing_groups() -> None:
    def transform(draft: SiteDraft) -> None:
        draft.extend_sidebar(
            "/guide/", NavigationGroup("Plugins", (NavItem("Cron", "/guide/cron"),))
        )

    site = compose(_base(), [Plugin("guide-plugins", transform)])

    groups = [entry.text for entry in site.sidebars["/guide/"]]
    assert groups == ["Introduction", "Plugins"]


def test_metadata_merges_without_overwriting() -> None:
    """New keys merge in, lists grow, existing scalars stay put."""

    def add(draft: SiteDraft) -> None:
        draft.merge_metadata(
            {
                "search": {"provider": "local", "options": {"detailed": True}},
                "head": [["meta", {"name": "theme-color"}]],
            }
        )

    site = compose(_base(), [Plugin("extras", add)])

    assert site.metadata["search"]["options"]["detailed"] is True
    assert [tag[0] for tag in site.metadata["head"]] == ["link", "meta"]

    def overwrite(draft: SiteDraft) -> None:
        draft.merge_metadata({"search": {"provider": "algolia"}})

    with pytest.raises(PluginCompositionError) as excinfo:
        compose(_base(), [Plugin("algolia", overwrite)])

    assert isinstance(excinfo.value.error, ConflictingMetadataError)
    assert excinfo.value.error.key_path == ("search", "provider")


def test_conflicting_metadata_merge_leaves_draft_untouched() -> None:
    """A rejected merge adds none of its keys, even ones that did not conflict."""
    seen: list[dict[str, typ.Any]] = []

    def tolerant(draft: SiteDraft) -> None:
        with pytest.raises(ConflictingMetadataError):
            draft.merge_metadata(
                {
                    "footer": {"message": "MIT"},
                    "search": {"options": {"detailed": True}, "provider": "algolia"},
                }
            )
        seen.append(draft.metadata)

    site = compose(_base(), [Plugin("tolerant", tolerant)])

    assert seen == [
        {"search": {"provider": "local"}, "head": [["link", {"rel": "icon"}]]}
    ], f"draft metadata changed after a failed merge: {seen!r}"
    assert "footer" not in site.metadata
    assert "options" not in site.metadata["search"]


def test_draft_exposes_base_state_read_only() -> None:
    seen: dict[str, object] = {}

    def inspect(draft: SiteDraft) -> None:
        seen["title"] = draft.title
        seen["version"] = draft.version
        seen["links"] = [link for _, link in draft.nav_links()]
        seen["prefixes"] = draft.sidebar_prefixes()
        draft.metadata["search"] = "mutated"

    site = compose(_base(), [Plugin("inspect", inspect)])

    assert seen == {
        "title": "Gokku",
        "version": "1.0.53",
        "links": ["/", "/guide/installation"],
        "prefixes": ("/guide/",),
    }
    assert site.metadata["search"] == {"provider": "local"}, (
        "mutating the metadata copy must not leak into the result"
    )


def test_duplicate_plugin_names_are_rejected() -> None:
    with pytest.raises(SiteConfigError):
        ConfigComposer(
            [
                _nav_plugin("dup", "A", "/a"),
                _nav_plugin("dup", "B", "/b"),
            ]
        )


def test_programming_errors_propagate_unwrapped() -> None:
    def explode(draft: SiteDraft) -> None:
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        compose(_base(), [Plugin("explode", explode)])


def test_each_transform_runs_once_in_order(mocker: MockerFixture) -> None:
    """Every plugin receives the shared draft exactly once, in list order."""
    recorder = mocker.Mock()

    compose(_base(), [Plugin("first", recorder.first), Plugin("second", recorder.second)])

    assert [name for name, _, _ in recorder.mock_calls] == ["first", "second"]
    draft = recorder.first.call_args.args[0]
    assert isinstance(draft, SiteDraft), f"expected a SiteDraft, got {draft!r}"
    assert recorder.second.call_args.args[0] is draft
