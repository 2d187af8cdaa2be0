"""Cyclopts CLI entrypoint for checking and exporting site configurations.

The ``docsite`` console script defined here loads ``site.yaml``, applies its
plugins, and either reports on the result or writes the JSON payload that the
static-site renderer consumes. Any validation failure aborts with a message
naming the offending link, prefix, or plugin, and nothing is written.

Examples
--------
Validate the default configuration:

>>> from docsite.cli import main
>>> main(["check"])  # doctest: +SKIP

Write the renderer payload somewhere else:

>>> main(["build", "--output", "dist/site.json"])  # doctest: +SKIP
"""

from __future__ import annotations

import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter
from ruamel.yaml.error import YAMLError

from ._constants import DEFAULT_CONFIG, DEFAULT_OUTPUT
from .config import SiteConfigError, load_site_config
from .serialize import encode_site_config, iter_sitemap

app = App(name="docsite", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]

ConfigOption = typ.Annotated[
    Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


@app.command(help="Validate the site configuration and its plugins.")
def check(*, config: ConfigOption = DEFAULT_CONFIG) -> None:
    """Load and compose the configuration, then print a one-line summary."""
    site = load_site_config(config)
    nav_links = sum(1 for _ in site.nav.flatten_links())
    sidebar_links = sum(
        1 for _, tree in site.sidebars.items() for _ in tree.flatten_links()
    )
    print(
        f"{site.title}: {nav_links} nav links, {len(site.sidebars)} sidebars, "
        f"{sidebar_links} sidebar links"
    )


@app.command(help="Write the composed configuration as JSON for the renderer.")
def build(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    output: typ.Annotated[
        Path, Parameter(help="Where to write the JSON payload")
    ] = DEFAULT_OUTPUT,
    indent: typ.Annotated[
        int, Parameter(help="JSON indentation; 0 for compact output")
    ] = 2,
) -> None:
    """Compose the configuration and write the renderer payload.

    Parameters
    ----------
    config : Path, optional
        Path to the ``site.yaml`` configuration file (overridable via
        ``INPUT_CONFIG``).
    output : Path, optional
        Destination of the JSON payload; parent directories are created.
    indent : int, optional
        Indentation width of the JSON output.

    Returns
    -------
    None
        Writes the payload and prints its path.
    """
    site = load_site_config(config)
    payload = encode_site_config(site, indent=indent)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(payload + b"\n")
    print(f"wrote {_format_path(output)}")


@app.command(help="List every distinct link with its label.")
def sitemap(*, config: ConfigOption = DEFAULT_CONFIG) -> None:
    """Print ``link<TAB>label`` for each distinct nav and sidebar link."""
    site = load_site_config(config)
    for label, link in iter_sitemap(site):
        print(f"{link}\t{label}")


@app.command(help="Show which sidebar renders alongside a page path.")
def resolve(path: str, *, config: ConfigOption = DEFAULT_CONFIG) -> None:
    """Print the prefix matching ``path`` and the links of its sidebar."""
    site = load_site_config(config)
    prefix = site.sidebars.resolve_prefix(path)
    if prefix is None:
        print(f"no sidebar for {path}")
        return
    print(prefix)
    for label, link in site.sidebars[prefix].flatten_links():
        print(f"  {link}\t{label}")


def main(tokens: list[str] | None = None) -> None:
    """Invoke the Cyclopts application that powers the ``docsite`` command.

    Parameters
    ----------
    tokens : list of str, optional
        Arguments to parse instead of ``sys.argv``.

    Raises
    ------
    SystemExit
        With status 1 when the configuration is missing, unreadable, or
        invalid; the error message is written to stderr.
    """
    try:
        app(tokens)
    except (SiteConfigError, FileNotFoundError, TypeError, YAMLError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
