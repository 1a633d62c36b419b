"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import (
    _build_about_config,
    _build_cards_config,
    _build_compound_syntax,
    _build_paths_config,
    _normalize_locales,
    _parse_max_passes,
    _section,
)
from .models import SiteConfig


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing the site build layout.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``config/site.yaml``). Relative directories inside the file resolve
        against the directory that contains the project, i.e. the parent of
        the ``config`` folder when the file lives in one, otherwise the file's
        own directory.

    Returns
    -------
    SiteConfig
        Parsed configuration with every omitted value filled from defaults.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If a section or value is invalid (for example, three locales).
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from bilingual_pages.config import load_site_config
    >>> config = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
    >>> config.locales  # doctest: +SKIP
    ('en', 'sk')
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):  # pragma: no cover - config error guard
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    return SiteConfig(
        paths=_build_paths_config(_section(raw, "paths"), project_root(path)),
        locales=_normalize_locales(raw.get("locales")),
        compound=_build_compound_syntax(_section(raw, "compound")),
        max_passes=_parse_max_passes(_section(raw, "expansion").get("max_passes")),
        cards=_build_cards_config(_section(raw, "cards")),
        about=_build_about_config(_section(raw, "about")),
    )


def project_root(config_path: Path) -> Path:
    """Return the directory that relative configuration paths resolve against."""
    parent = config_path.resolve().parent
    if parent.name == "config":
        return parent.parent
    return parent


__all__ = ["load_site_config", "project_root"]
