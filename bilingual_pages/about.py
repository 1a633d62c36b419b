r"""Turn plain-text "about us" write-ups into locale components.

Authors keep one folder per topic and one sub-folder per locale::

    source/files/AboutUs/
        history/en/history.txt
        history/sk/history.txt
        team/en/team.txt
        team/sk/team.txt

A module with a single topic may drop the topic level and hold the locale
folders directly. Each text file is a series of sections separated by
``[Section]``. Within a section the first non-blank line is the title, the
second the short teaser, and every further line a paragraph of the long text.

:class:`AboutUsGenerator` parses those files, optionally persists them as
JSON, and writes ``components/<locale>/about.html`` for every locale. With more
than one topic the component is compound, one section per topic, so pages use
``{{about.history}}``; with one topic it is simple and pages use ``{{about}}``.

Example
-------
>>> from bilingual_pages.about import parse_paragraphs
>>> [p.title for p in parse_paragraphs("Who\nWe build.\nMore.\n[Section]\nWhy\nFun.")]
['Who', 'Why']
"""

from __future__ import annotations

import dataclasses as dc
import json
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader
from markdown import markdown

from ._constants import ABOUT_SEPARATOR, COMPONENT_SUFFIX

if typ.TYPE_CHECKING:
    from .config import SiteConfig


@dc.dataclass(slots=True)
class Paragraph:
    """A titled card of the about-us page.

    Attributes
    ----------
    title : str
        Card heading.
    short : str
        Teaser shown while the card is collapsed.
    long : list[str]
        Paragraphs revealed when the card is expanded.
    language : str
        Locale the text is written in.
    folder : str
        Topic the card belongs to.
    photo : str or None
        Image file name under ``images/<image_folder>/``.
    """

    title: str
    short: str
    long: list[str]
    language: str = ""
    folder: str = ""
    photo: str | None = None

    @property
    def long_html(self) -> list[str]:
        """Return the long paragraphs rendered from Markdown."""
        return [markdown(text) for text in self.long]


@dc.dataclass(slots=True)
class AboutGroup:
    """Paragraphs of one topic keyed by locale."""

    folder: str
    content: dict[str, list[Paragraph]] = dc.field(default_factory=dict)

    def to_json(self) -> dict[str, typ.Any]:
        """Return the JSON-ready mapping persisted by :meth:`AboutUsGenerator.save_json`."""
        return {
            "folder": self.folder,
            "content": [
                {"language": language, "data": [dc.asdict(p) for p in paragraphs]}
                for language, paragraphs in self.content.items()
            ],
        }

    @classmethod
    def from_json(cls, payload: typ.Mapping[str, typ.Any]) -> AboutGroup:
        """Rebuild a group from the mapping produced by :meth:`to_json`."""
        content: dict[str, list[Paragraph]] = {}
        for entry in payload.get("content", []):
            content[entry["language"]] = [
                Paragraph(
                    title=item["title"],
                    short=item.get("short") or "",
                    long=list(item.get("long") or []),
                    language=item.get("language", entry["language"]),
                    folder=item.get("folder", payload["folder"]),
                    photo=item.get("photo"),
                )
                for item in entry.get("data", [])
            ]
        return cls(folder=payload["folder"], content=content)


def parse_paragraphs(
    text: str, separator: str = ABOUT_SEPARATOR, *, language: str = "", folder: str = ""
) -> list[Paragraph]:
    """Split ``text`` into paragraphs at every ``separator``.

    Blank lines are ignored. Sections without any text are dropped and a
    section with only a title gets an empty teaser.
    """
    paragraphs: list[Paragraph] = []
    for section in text.split(separator):
        lines = [line.strip() for line in section.splitlines() if line.strip()]
        if not lines:
            continue
        paragraphs.append(
            Paragraph(
                title=lines[0],
                short=lines[1] if len(lines) > 1 else "",
                long=lines[2:],
                language=language,
                folder=folder,
            )
        )
    return paragraphs


class AboutUsGenerator:
    """Parse about-us text files and write them out as components."""

    see_more_label = "...see more"

    def __init__(
        self,
        config: SiteConfig,
        module_dir: Path,
        *,
        component_name: str | None = None,
        json_file: str | None = None,
        templates_dir: Path | None = None,
    ) -> None:
        """Initialize the generator.

        Parameters
        ----------
        config : SiteConfig
            Site configuration supplying locales, the compound grammar, and the
            components directory.
        module_dir : Path
            Folder holding the topic and locale sub-folders.
        component_name : str, optional
            Name of the generated component; defaults to ``about.component_name``
            from the configuration.
        json_file : str, optional
            File name, inside ``module_dir``, used by :meth:`save_json` and
            :meth:`load_json`; defaults to ``about.json_file``.
        templates_dir : Path, optional
            Directory containing ``about_card.jinja``.
        """
        self.config = config
        self.module_dir = module_dir
        self.component_name = component_name or config.about.component_name
        self.json_path = module_dir / (json_file or config.about.json_file)
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("about_card.jinja")

    def run(self, *, from_json: bool = False, save_json: bool = False) -> list[Path]:
        """Collect paragraphs and write the components, returning written paths.

        Parameters
        ----------
        from_json : bool, optional
            Read paragraphs from the JSON file instead of the text files when
            the JSON file exists.
        save_json : bool, optional
            Persist freshly parsed paragraphs to the JSON file. Ignored when
            the paragraphs were read from JSON.
        """
        written: list[Path] = []
        if from_json and self.json_path.is_file():
            groups = self.load_json()
        else:
            groups = self.collect()
            if save_json:
                written.append(self.save_json(groups))
        written.extend(self.write_components(groups))
        return written

    def topic_dirs(self) -> list[Path]:
        """Return the topic folders of the module, itself when it has none."""
        subdirs = sorted(path for path in self.module_dir.iterdir() if path.is_dir())
        locales = set(self.config.locales)
        if all(path.name.lower() in locales for path in subdirs):
            return [self.module_dir]
        return [path for path in subdirs if path.name.lower() not in locales]

    def collect(self) -> list[AboutGroup]:
        """Parse every text file of the module into topic groups."""
        groups: list[AboutGroup] = []
        for topic_dir in self.topic_dirs():
            group = AboutGroup(folder=topic_dir.name.lower())
            for locale in self.config.locales:
                paragraphs: list[Paragraph] = []
                locale_dir = topic_dir / locale
                if locale_dir.is_dir():
                    for path in sorted(locale_dir.iterdir()):
                        if not path.is_file():
                            continue
                        paragraphs.extend(
                            parse_paragraphs(
                                path.read_text(encoding="utf-8"),
                                self.config.about.separator,
                                language=locale,
                                folder=group.folder,
                            )
                        )
                group.content[locale] = paragraphs
            groups.append(group)
        return groups

    def save_json(self, groups: list[AboutGroup]) -> Path:
        """Write ``groups`` to the module's JSON file."""
        payload = [group.to_json() for group in groups]
        self.json_path.write_text(
            json.dumps(payload, indent=4, ensure_ascii=False) + "\n", encoding="utf-8"
        )
        return self.json_path

    def load_json(self) -> list[AboutGroup]:
        """Read topic groups from the module's JSON file."""
        with self.json_path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
        return [AboutGroup.from_json(item) for item in payload]

    def render(self, paragraphs: list[Paragraph]) -> str:
        """Return the card markup for ``paragraphs``."""
        html = self.template.render(
            paragraphs=paragraphs,
            image_folder=self.config.about.image_folder,
            see_more_label=self.see_more_label,
        )
        return html.strip()

    def component_text(self, groups: list[AboutGroup], locale: str) -> str:
        """Return the component file content for ``locale``.

        A single topic yields a simple component; several topics yield a
        compound component with one section per topic.
        """
        syntax = self.config.compound
        terminator = syntax.line_terminator
        if len(groups) == 1:
            return self.render(groups[0].content.get(locale, [])) + terminator
        chunks = [
            f"{syntax.opening}{group.folder}{syntax.closing}{terminator}"
            f"{self.render(group.content.get(locale, []))}{terminator}"
            for group in groups
        ]
        return "".join(chunks)

    def write_components(self, groups: list[AboutGroup]) -> list[Path]:
        """Write one component file per locale and return their paths."""
        written: list[Path] = []
        if not groups:
            return written
        components_dir = self.config.paths.components_dir
        for locale in self.config.locales:
            output_path = components_dir / locale / f"{self.component_name}{COMPONENT_SUFFIX}"
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(
                self.component_text(groups, locale), encoding="utf-8", newline=""
            )
            written.append(output_path)
        return written


__all__ = ["AboutGroup", "AboutUsGenerator", "Paragraph", "parse_paragraphs"]
