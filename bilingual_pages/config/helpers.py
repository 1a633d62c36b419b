"""Utility helpers shared by the site configuration loader."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from .models import (
    AboutConfig,
    CardsConfig,
    CompoundSyntax,
    PathsConfig,
    SiteConfigError,
)


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _require_str(payload: typ.Mapping[str, typ.Any], key: str, default: str) -> str:
    """Return ``payload[key]`` as a non-empty string, falling back to ``default``."""
    if key not in payload:
        return default
    text = _optional_str(payload[key])
    if text is None:
        msg = f"Configuration value '{key}' must not be empty."
        raise SiteConfigError(msg)
    return text


def _resolve_path(base_dir: Path, value: object | None, default: Path) -> Path:
    """Resolve a configured path relative to the config file directory."""
    text = _optional_str(value)
    path = Path(text) if text else default
    if path.is_absolute():
        return path
    return base_dir / path


def _normalize_locales(value: object | None) -> tuple[str, str]:
    """Validate the locale list and return it as an ordered pair."""
    if value is None:
        return ("en", "sk")
    if not isinstance(value, list):
        msg = "'locales' must be a list of two locale codes."
        raise SiteConfigError(msg)
    locales = [text for item in value if (text := _optional_str(item))]
    if len(locales) != 2 or locales[0] == locales[1]:
        msg = f"Exactly two distinct locales are required, got {locales!r}."
        raise SiteConfigError(msg)
    return (locales[0], locales[1])


def _parse_max_passes(value: object | None) -> int | None:
    """Return a positive pass budget, or None to derive it from the dictionary."""
    match value:
        case None:
            return None
        case bool():
            pass
        case int() if value > 0:
            return value
    msg = f"'expansion.max_passes' must be a positive integer, got {value!r}."
    raise SiteConfigError(msg)


def _build_paths_config(
    payload: typ.Mapping[str, typ.Any], base_dir: Path
) -> PathsConfig:
    """Build a PathsConfig, resolving directories against ``base_dir``."""
    base = PathsConfig()
    css_output = _optional_str(payload.get("css_output"))
    build_dir = _resolve_path(base_dir, payload.get("build_dir"), base.build_dir)
    build_root = _require_str(payload, "build_root", build_dir.name)
    if build_root != build_dir.name:
        msg = (
            f"'paths.build_root' ({build_root!r}) must match the name of "
            f"'paths.build_dir' ({build_dir.name!r})."
        )
        raise SiteConfigError(msg)
    return PathsConfig(
        source_dir=_resolve_path(base_dir, payload.get("source_dir"), base.source_dir),
        components_dir=_resolve_path(
            base_dir, payload.get("components_dir"), base.components_dir
        ),
        build_dir=build_dir,
        html_root=_require_str(payload, "html_root", base.html_root),
        build_root=build_root,
        css_output=Path(css_output) if css_output else base.css_output,
    )


def _build_compound_syntax(payload: typ.Mapping[str, typ.Any]) -> CompoundSyntax:
    """Build the compound delimiter grammar from the provided mapping."""
    base = CompoundSyntax()
    terminator = payload.get("line_terminator", base.line_terminator)
    if not isinstance(terminator, str) or not terminator:
        msg = "'compound.line_terminator' must be a non-empty string."
        raise SiteConfigError(msg)
    return CompoundSyntax(
        opening_token=_require_str(payload, "opening_token", base.opening_token),
        closing_token=_require_str(payload, "closing_token", base.closing_token),
        line_terminator=terminator,
    )


def _build_cards_config(payload: typ.Mapping[str, typ.Any]) -> CardsConfig:
    """Build the interview card settings from the provided mapping."""
    base = CardsConfig()
    per_deck = payload.get("cards_per_deck", base.cards_per_deck)
    if isinstance(per_deck, bool) or not isinstance(per_deck, int) or per_deck < 1:
        msg = f"'cards.cards_per_deck' must be a positive integer, got {per_deck!r}."
        raise SiteConfigError(msg)
    extensions = payload.get("photo_extensions")
    if extensions is None:
        normalized = base.photo_extensions
    else:
        normalized = tuple(
            text.lower().lstrip(".")
            for item in extensions
            if (text := _optional_str(item))
        )
    return CardsConfig(
        json_name=_require_str(payload, "json_name", base.json_name),
        navigation_component=_require_str(
            payload, "navigation_component", base.navigation_component
        ),
        cards_per_deck=per_deck,
        photo_extensions=normalized,
    )


def _build_about_config(payload: typ.Mapping[str, typ.Any]) -> AboutConfig:
    """Build the about-us parser settings from the provided mapping."""
    base = AboutConfig()
    return AboutConfig(
        separator=_require_str(payload, "separator", base.separator),
        component_name=_require_str(payload, "component_name", base.component_name),
        json_file=_require_str(payload, "json_file", base.json_file),
        image_folder=_require_str(payload, "image_folder", base.image_folder),
    )


def _section(raw: typ.Mapping[str, typ.Any], key: str) -> typ.Mapping[str, typ.Any]:
    """Return the mapping stored under ``key`` or an empty mapping."""
    value = raw.get(key) or {}
    if not isinstance(value, dict):
        msg = f"Configuration section '{key}' must be a mapping."
        raise SiteConfigError(msg)
    return value


__all__ = [
    "_build_about_config",
    "_build_cards_config",
    "_build_compound_syntax",
    "_build_paths_config",
    "_normalize_locales",
    "_optional_str",
    "_parse_max_passes",
    "_resolve_path",
    "_section",
]
