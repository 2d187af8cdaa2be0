"""Declarative navigation and sidebar configuration for documentation sites.

This package validates the navigation model of a documentation site, composes
plugin extensions over it, and hands the result to an external static-site
renderer. The ``docsite`` console script checks configurations and writes the
renderer payload.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from docsite import main
>>> main(["check"])  # doctest: +SKIP
>>> from docsite import app
>>> callable(app)
True
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
