"""High-level orchestration of a full two-locale site build.

``SiteBuilder`` mirrors the source tree into the build tree:

* HTML pages below ``source/html`` are rendered once per locale into
  ``build/html/<locale>/``. Each render expands component markers with the
  locale's component dictionary and then resolves the path markers for the
  destination file.
* Stylesheets in ``source/css`` are concatenated into one file.
* Every other file is copied once, except files inside ``source/html`` which
  are copied into each locale subtree so relative links keep working.

Every page is rendered completely in memory before it is written, so a page
that fails to compose never leaves a partial file behind.

Example
-------
>>> from pathlib import Path
>>> from bilingual_pages.builder import SiteBuilder
>>> from bilingual_pages.config import load_site_config
>>> builder = SiteBuilder(load_site_config(Path("config/site.yaml")))  # doctest: +SKIP
>>> builder.run()  # doctest: +SKIP
[PosixPath('build/css/style.css'), PosixPath('build/html/en/index.html'), ...]
"""

from __future__ import annotations

import logging
import shutil
import typing as typ
from pathlib import Path, PurePath

from .cards import InterviewCardBuilder
from .composer import (
    ComponentLoader,
    Page,
    PathResolver,
    PlaceholderExpander,
    read_text_verbatim,
)

if typ.TYPE_CHECKING:
    from .composer import ComponentDictionary
    from .config import SiteConfig

logger = logging.getLogger(__name__)

HTML_SUFFIX = ".html"
CSS_SUFFIX = ".css"


class SiteBuilder:
    """Build the complete output tree for both locales."""

    def __init__(self, config: SiteConfig, *, generate_cards: bool = True) -> None:
        """Initialize the builder.

        Parameters
        ----------
        config : SiteConfig
            Resolved site configuration.
        generate_cards : bool, optional
            Regenerate the interview card components before loading the
            component dictionaries. Defaults to ``True``.
        """
        self.config = config
        self.paths = config.paths
        self.generate_cards = generate_cards
        self.loader = ComponentLoader(config.compound)
        self.resolver = PathResolver.from_config(config)

    @property
    def source_html_dir(self) -> Path:
        return self.paths.source_dir / self.paths.html_root

    @property
    def build_html_dir(self) -> Path:
        return self.paths.build_dir / self.paths.html_root

    @property
    def css_source_dir(self) -> Path:
        return self.paths.source_dir / self.paths.css_output.parent

    def run(self) -> list[Path]:
        """Build the site and return every written path in write order."""
        if not self.paths.source_dir.is_dir():
            msg = f"Source directory '{self.paths.source_dir}' not found."
            raise FileNotFoundError(msg)

        self.prepare_folders()
        written: list[Path] = []
        if self.generate_cards:
            written.extend(InterviewCardBuilder(self.config).run())
        expanders = {
            locale: PlaceholderExpander(components, max_passes=self.config.max_passes)
            for locale, components in self.load_components().items()
        }
        css_path = self.compose_css()
        if css_path is not None:
            written.append(css_path)

        css_sources = set(self.css_sources())
        for source in self.source_files():
            if source in css_sources:
                logger.debug("Skipped CSS file %s", source)
            elif source.suffix == HTML_SUFFIX:
                written.extend(self.build_page(source, expanders))
            else:
                written.extend(self.copy_asset(source))
        logger.info("Built %d files into %s", len(written), self.paths.build_dir)
        return written

    def prepare_folders(self) -> None:
        """Create the build root, locale roots, and a mirror of every source folder."""
        self.paths.build_dir.mkdir(parents=True, exist_ok=True)
        for locale in self.config.locales:
            (self.build_html_dir / locale).mkdir(parents=True, exist_ok=True)
        for folder in sorted(self.paths.source_dir.rglob("*")):
            if folder.is_dir():
                for target in self.destinations(folder).values():
                    target.mkdir(parents=True, exist_ok=True)

    def load_components(self) -> dict[str, ComponentDictionary]:
        """Return the component dictionary of every locale."""
        return {
            locale: self.loader.load_locale(self.paths.components_dir, locale)
            for locale in self.config.locales
        }

    def source_files(self) -> list[Path]:
        """Return every file of the source tree in sorted order."""
        return sorted(path for path in self.paths.source_dir.rglob("*") if path.is_file())

    def css_sources(self) -> list[Path]:
        """Return the stylesheets concatenated into the combined stylesheet."""
        if not self.css_source_dir.is_dir():
            return []
        return sorted(self.css_source_dir.glob(f"*{CSS_SUFFIX}"))

    def compose_css(self) -> Path | None:
        """Concatenate the source stylesheets, returning the written path."""
        sources = self.css_sources()
        if not sources:
            logger.info("No stylesheets found in %s", self.css_source_dir)
            return None
        logger.info("Beginning CSS composition into %s", self.paths.css_output)
        combined = "\n".join(read_text_verbatim(path) for path in sources)
        output_path = self.paths.build_dir / self.paths.css_output
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(combined, encoding="utf-8", newline="")
        logger.info("Composed %d CSS files into %s", len(sources), output_path)
        return output_path

    def destinations(self, source: Path) -> dict[str | None, Path]:
        """Return the build paths of ``source`` keyed by locale.

        Sources inside the HTML root map to one path per locale; everything
        else maps to a single shared path keyed by ``None``.
        """
        relative = source.relative_to(self.paths.source_dir)
        try:
            below_html = source.relative_to(self.source_html_dir)
        except ValueError:
            return {None: self.paths.build_dir / relative}
        return {
            locale: self.build_html_dir / locale / below_html
            for locale in self.config.locales
        }

    def render_page(
        self, page: Page, expander: PlaceholderExpander, *, source: Path | None = None
    ) -> str:
        """Expand components in ``page`` and resolve its path markers."""
        expanded = expander.expand(page.text, source=source)
        return self.resolver.resolve(expanded, self.relative_to_output(page.destination))

    def relative_to_output(self, destination: Path) -> PurePath:
        """Return ``destination`` relative to the folder that holds the build root."""
        try:
            return destination.relative_to(self.paths.build_dir.parent)
        except ValueError:
            return destination

    def build_page(
        self, source: Path, expanders: typ.Mapping[str, PlaceholderExpander]
    ) -> list[Path]:
        """Render ``source`` for every locale and write the results.

        HTML files outside the HTML root have a single destination and are
        rendered with the primary locale's components.
        """
        text = read_text_verbatim(source)
        primary = self.config.locales[0]
        rendered: list[tuple[Path, str]] = []
        for locale, destination in self.destinations(source).items():
            expander = expanders[locale or primary]
            page = Page(text=text, destination=destination)
            rendered.append((destination, self.render_page(page, expander, source=source)))

        written: list[Path] = []
        for destination, html in rendered:
            destination.parent.mkdir(parents=True, exist_ok=True)
            destination.write_text(html, encoding="utf-8", newline="")
            written.append(destination)
        return written

    def copy_asset(self, source: Path) -> list[Path]:
        """Copy a non-HTML file to its build location(s)."""
        written: list[Path] = []
        for destination in self.destinations(source).values():
            destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, destination)
            logger.debug("Copied file %s", destination)
            written.append(destination)
        return written


__all__ = ["SiteBuilder"]
