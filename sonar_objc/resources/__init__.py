"""Bundled rule definitions and default profiles."""

from importlib import resources


def read_text(name: str) -> str:
    """Return the bundled resource *name* (e.g. ``"oclint/rules.txt"``)."""
    return resources.files(__name__).joinpath(name).read_text(encoding="utf-8")
