"""Load and validate the site build configuration YAML.

This subpackage parses the project's ``site.yaml`` file, fills omitted values
with defaults, resolves directories against the project root, and produces
strongly typed dataclasses (:class:`SiteConfig`, :class:`CompoundSyntax`, etc.)
that the component loader, path resolver, and site builder consume. The
primary entry point is :func:`load_site_config`.

Examples
--------
>>> from pathlib import Path
>>> from bilingual_pages.config import load_site_config
>>> site = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
>>> site.compound.opening  # doctest: +SKIP
':^) '
"""

from .loader import load_site_config, project_root
from .models import (
    AboutConfig,
    CardsConfig,
    CompoundSyntax,
    PathsConfig,
    SiteConfig,
    SiteConfigError,
)

__all__ = [
    "AboutConfig",
    "CardsConfig",
    "CompoundSyntax",
    "PathsConfig",
    "SiteConfig",
    "SiteConfigError",
    "load_site_config",
    "project_root",
]
