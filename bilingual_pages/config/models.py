"""Typed dataclasses describing the site build configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from .._constants import ABOUT_SEPARATOR, CLOSING_TOKEN, OPENING_TOKEN


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class PathsConfig:
    """Filesystem layout of the source, component, and output trees."""

    source_dir: Path = Path("source")
    components_dir: Path = Path("components")
    build_dir: Path = Path("build")
    html_root: str = "html"
    build_root: str = "build"
    css_output: Path = Path("css/style.css")


@dc.dataclass(slots=True)
class CompoundSyntax:
    """Delimiter grammar for compound component files.

    Attributes
    ----------
    opening_token : str
        Marker that opens a section header. The opening delimiter is the token
        followed by a single space.
    closing_token : str
        Marker that closes a section header. The closing delimiter is a single
        space followed by the token.
    line_terminator : str
        Line ending that separates a header from its body and one section from
        the next.
    """

    opening_token: str = OPENING_TOKEN
    closing_token: str = CLOSING_TOKEN
    line_terminator: str = "\r\n"

    @property
    def opening(self) -> str:
        """Return the opening delimiter (token plus trailing space)."""
        return f"{self.opening_token} "

    @property
    def closing(self) -> str:
        """Return the closing delimiter (leading space plus token)."""
        return f" {self.closing_token}"


@dc.dataclass(slots=True)
class CardsConfig:
    """Settings for the interview card component generator."""

    json_name: str = "interview_cards"
    navigation_component: str = "interview_navigation"
    cards_per_deck: int = 3
    photo_extensions: tuple[str, ...] = ("jpg", "png", "svg")


@dc.dataclass(slots=True)
class AboutConfig:
    """Settings for the about-us paragraph parser."""

    separator: str = ABOUT_SEPARATOR
    component_name: str = "about"
    json_file: str = "AboutUs.json"
    image_folder: str = "aboutus"


@dc.dataclass(slots=True)
class SiteConfig:
    """Fully resolved build configuration.

    ``locales`` always holds exactly two distinct values; the first one is the
    primary locale used for shared, locale-independent artefacts.
    """

    paths: PathsConfig = dc.field(default_factory=PathsConfig)
    locales: tuple[str, str] = ("en", "sk")
    compound: CompoundSyntax = dc.field(default_factory=CompoundSyntax)
    max_passes: int | None = None
    cards: CardsConfig = dc.field(default_factory=CardsConfig)
    about: AboutConfig = dc.field(default_factory=AboutConfig)


__all__ = [
    "AboutConfig",
    "CardsConfig",
    "CompoundSyntax",
    "PathsConfig",
    "SiteConfig",
    "SiteConfigError",
]
