"""Build a two-locale static site from pages and reusable components.

This package exposes the CLI entry points used by ``uv run pages`` to build
the site tree, regenerate interview card components, and convert about-us
text into components.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from bilingual_pages import main
>>> main()  # doctest: +SKIP
>>> from bilingual_pages import app
>>> app(["build", "--config", "config/site.yaml"])  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
