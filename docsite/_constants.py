"""Common literal values used across docsite.

Keeps the default file locations in one place so the CLI, tests, and docs
agree on them.

Examples
--------
>>> from docsite import _constants
>>> str(_constants.DEFAULT_CONFIG)
'config/site.yaml'
"""

from pathlib import Path

DEFAULT_CONFIG = Path("config/site.yaml")
DEFAULT_OUTPUT = Path("public/site.json")
