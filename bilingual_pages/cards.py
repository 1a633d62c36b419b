"""Interview card component generator.

Each locale may ship an ``interview_cards.json`` file next to its components.
The file holds an array of interview entries::

    [
      {
        "Name": "Jana Novak",
        "Image": "images/interviews/jana.jpg",
        "Title": "From intern to lead",
        "ShortInfo": "...",
        "LongInfo": "...",
        "PhotosFolderPath": "images/interviews/jana/"
      }
    ]

``InterviewCardBuilder`` turns every locale's array into a card deck component
(``components/<locale>/interview_cards.html``) and writes a shared navigation
component listing the interviewees. The generated components contain
``{fill_parents}`` markers, so they must be written before the component
dictionaries are loaded.

Example
-------
>>> from pathlib import Path
>>> from bilingual_pages.cards import InterviewCardBuilder
>>> from bilingual_pages.config import load_site_config
>>> builder = InterviewCardBuilder(load_site_config(Path("config/site.yaml")))  # doctest: +SKIP
>>> builder.run()  # doctest: +SKIP
[PosixPath('components/en/interview_cards.html'), ...]
"""

from __future__ import annotations

import dataclasses as dc
import json
import logging
import posixpath
import re
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from ._constants import COMPONENT_SUFFIX

if typ.TYPE_CHECKING:
    from .config import SiteConfig

logger = logging.getLogger(__name__)

CARD_FIELDS = {
    "name": "Name",
    "image": "Image",
    "title": "Title",
    "short_info": "ShortInfo",
    "long_info": "LongInfo",
    "photos_path": "PhotosFolderPath",
}


class CardDataError(ValueError):
    """Raised when an interview card JSON file has an unexpected shape."""


@dc.dataclass(slots=True)
class Photo:
    """Gallery image shown inside an interview card."""

    name: str
    source: str


@dc.dataclass(slots=True)
class InterviewCard:
    """One interview entry along with the photos found for it."""

    name: str
    image: str
    title: str
    short_info: str
    long_info: str
    photos_path: str
    photos: list[Photo] = dc.field(default_factory=list)

    @property
    def anchor(self) -> str:
        """Return the element id used by the card and its navigation entry."""
        return re.sub(r"\s+", "_", self.name.strip())


def _chunk(cards: list[InterviewCard], size: int) -> list[list[InterviewCard]]:
    return [cards[start : start + size] for start in range(0, len(cards), size)]


def _write_component(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8", newline="")
    return path


class InterviewCardBuilder:
    """Render interview card decks and navigation as component files."""

    gallery_label = "Gallery"

    def __init__(self, config: SiteConfig, *, templates_dir: Path | None = None) -> None:
        """Initialize the builder and Jinja environment.

        Parameters
        ----------
        config : SiteConfig
            Site configuration supplying the component and source directories,
            the locales, and the card settings.
        templates_dir : Path, optional
            Directory containing the Jinja templates. Defaults to
            ``bilingual_pages/templates``.
        """
        self.config = config
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.cards_template = self.env.get_template("interview_cards.jinja")
        self.navigation_template = self.env.get_template("interview_navigation.jinja")

    def json_path(self, locale: str) -> Path:
        """Return where the card data for ``locale`` is expected."""
        components_dir = self.config.paths.components_dir
        return components_dir / locale / f"{self.config.cards.json_name}.json"

    def run(self) -> list[Path]:
        """Render every locale that has card data and return the written paths."""
        written: list[Path] = []
        navigation_cards: list[InterviewCard] | None = None
        for locale in self.config.locales:
            json_path = self.json_path(locale)
            if not json_path.is_file():
                logger.debug("No interview cards for %s at %s", locale, json_path)
                continue
            cards = self.load_cards(json_path)
            written.append(self.render_locale(locale, cards))
            if navigation_cards is None:
                navigation_cards = cards
        if navigation_cards is not None:
            written.append(self.write_navigation(navigation_cards))
        return written

    def render_locale(self, locale: str, cards: list[InterviewCard]) -> Path:
        """Write the card deck component for ``locale``."""
        name = f"{self.config.cards.json_name}{COMPONENT_SUFFIX}"
        output_path = self.config.paths.components_dir / locale / name
        return _write_component(output_path, self.render_cards(cards))

    def write_navigation(self, cards: list[InterviewCard]) -> Path:
        """Write the shared navigation component listing every interviewee."""
        name = f"{self.config.cards.navigation_component}{COMPONENT_SUFFIX}"
        output_path = self.config.paths.components_dir / name
        return _write_component(output_path, self.render_navigation(cards))

    def render_cards(self, cards: list[InterviewCard]) -> str:
        """Return card deck markup, grouping cards into decks."""
        decks = _chunk(cards, self.config.cards.cards_per_deck)
        return self.cards_template.render(decks=decks, gallery_label=self.gallery_label)

    def render_navigation(self, cards: list[InterviewCard]) -> str:
        """Return the navigation list items for ``cards``."""
        return self.navigation_template.render(cards=cards)

    def load_cards(self, json_path: Path) -> list[InterviewCard]:
        """Parse ``json_path`` into cards and attach their gallery photos.

        Raises
        ------
        CardDataError
            If the file is not an array of objects carrying every card field.
        """
        with json_path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
        if not isinstance(payload, list):
            msg = f"Interview cards in '{json_path}' must be a JSON array."
            raise CardDataError(msg)

        cards: list[InterviewCard] = []
        for index, item in enumerate(payload):
            if not isinstance(item, dict):
                msg = f"Interview card {index} in '{json_path}' must be an object."
                raise CardDataError(msg)
            missing = [key for key in CARD_FIELDS.values() if key not in item]
            if missing:
                msg = (
                    f"Interview card {index} in '{json_path}' is missing "
                    f"{', '.join(missing)}."
                )
                raise CardDataError(msg)
            card = InterviewCard(
                **{field: str(item[key]) for field, key in CARD_FIELDS.items()}
            )
            card.photos = self.collect_photos(card)
            cards.append(card)
        return cards

    def collect_photos(self, card: InterviewCard) -> list[Photo]:
        """Return the gallery images found in the card's photo folder."""
        folder = self.config.paths.source_dir / card.photos_path
        extensions = self.config.cards.photo_extensions
        photos: list[Photo] = []
        if folder.is_dir():
            for path in sorted(folder.iterdir()):
                suffix = path.suffix.lower().lstrip(".")
                if path.is_file() and suffix in extensions:
                    source = posixpath.join(card.photos_path, path.name)
                    photos.append(Photo(name=path.name.split(".")[0], source=source))
        if not photos:
            logger.warning(
                "Missing photos in folder %s for the %s interview card",
                folder,
                card.image.split("/")[-1],
            )
        return photos


__all__ = [
    "CardDataError",
    "InterviewCard",
    "InterviewCardBuilder",
    "Photo",
]
