r"""Scan component files and build per-locale component dictionaries.

A component file is either *simple*, in which case its whole content becomes
one insertable fragment, or *compound*, in which case it starts with the
opening delimiter and holds several named sections::

    :^) title :::\r\n
    <h1>About us</h1>\r\n
    :^) body :::\r\n
    <p>...</p>

The sections above are addressed from pages as ``{{about.title}}`` and
``{{about.body}}``.

Example
-------
>>> from pathlib import Path
>>> from bilingual_pages.composer import ComponentLoader
>>> loader = ComponentLoader()
>>> components = loader.load_locale(Path("components"), "en")  # doctest: +SKIP
>>> sorted(components)  # doctest: +SKIP
['about', 'footer', 'header']
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

from bilingual_pages._constants import COMPONENT_SUFFIX
from bilingual_pages.config import CompoundSyntax

from .errors import MalformedCompoundError, UndecodableComponentError
from .models import ComponentDictionary, ComponentEntry, CompoundComponent

if typ.TYPE_CHECKING:
    import collections.abc as cabc

logger = logging.getLogger(__name__)


def read_text_verbatim(path: Path) -> str:
    """Return the UTF-8 content of ``path`` without newline translation."""
    with path.open("r", encoding="utf-8", newline="") as handle:
        return handle.read()


class ComponentLoader:
    """Parse component files according to a compound delimiter grammar."""

    def __init__(
        self, syntax: CompoundSyntax | None = None, *, suffix: str = COMPONENT_SUFFIX
    ) -> None:
        """Initialize the loader.

        Parameters
        ----------
        syntax : CompoundSyntax, optional
            Delimiter grammar for compound files. Defaults to ``:^) `` /
            `` :::`` with CRLF line endings.
        suffix : str, optional
            File suffix stripped from file names to form component names.
        """
        self.syntax = syntax or CompoundSyntax()
        self.suffix = suffix

    def is_compound(self, text: str) -> bool:
        """Return True when ``text`` opens with the compound delimiter."""
        return text.startswith(self.syntax.opening)

    def component_name(self, path: Path) -> str:
        """Return the dictionary key for the component stored at ``path``."""
        name = path.name
        if self.suffix and name.endswith(self.suffix):
            return name[: -len(self.suffix)]
        return name

    def parse(self, text: str, *, name: str, path: Path) -> ComponentEntry:
        """Parse component ``text`` into a leaf string or a compound component."""
        if self.is_compound(text):
            return self.parse_compound(text, name=name, path=path)
        return text

    def parse_compound(self, text: str, *, name: str, path: Path) -> CompoundComponent:
        """Split a compound component into its named sections.

        Raises
        ------
        MalformedCompoundError
            If a section header is missing its closing delimiter, has an empty
            name, or repeats a name used earlier in the same file.
        """
        syntax = self.syntax
        fragments = text.split(syntax.line_terminator + syntax.opening)
        fragments[0] = fragments[0].removeprefix(syntax.opening)
        header_end = syntax.closing + syntax.line_terminator

        sections: dict[str, str] = {}
        for index, fragment in enumerate(fragments):
            section_name, found, body = fragment.partition(header_end)
            if not found:
                reason = f"missing closing delimiter '{syntax.closing}'"
                raise MalformedCompoundError(path, index, reason)
            if not section_name:
                raise MalformedCompoundError(path, index, "empty section name")
            if section_name in sections:
                reason = f"duplicate section '{section_name}'"
                raise MalformedCompoundError(path, index, reason)
            sections[section_name] = body
        return CompoundComponent(name=name, sections=sections)

    def load_file(self, path: Path) -> tuple[str, ComponentEntry]:
        """Read and parse a single component file.

        Raises
        ------
        OSError
            If the file cannot be read.
        UndecodableComponentError
            If the file is not valid UTF-8.
        """
        name = self.component_name(path)
        try:
            text = read_text_verbatim(path)
        except UnicodeDecodeError as exc:
            raise UndecodableComponentError(path, str(exc)) from exc
        entry = self.parse(text, name=name, path=path)
        kind = "compound" if isinstance(entry, CompoundComponent) else "simple"
        logger.debug("Found %s component %s (%s)", kind, name, path)
        return name, entry

    def load_files(self, paths: cabc.Iterable[Path]) -> ComponentDictionary:
        """Build a dictionary from ``paths``; later files override earlier ones."""
        components: ComponentDictionary = {}
        for path in paths:
            name, entry = self.load_file(path)
            components[name] = entry
        return components

    def load_glob(self, root: Path, pattern: str) -> ComponentDictionary:
        """Build a dictionary from the files under ``root`` matching ``pattern``.

        Matches are visited in sorted order. A pattern matching nothing yields
        an empty dictionary.
        """
        matches = sorted(path for path in root.glob(pattern) if path.is_file())
        return self.load_files(matches)

    def load_locale(self, root: Path, locale: str) -> ComponentDictionary:
        """Build the dictionary used to render pages in ``locale``.

        Shared components (``root/*<suffix>``) are loaded first and the locale
        components (``root/<locale>/*<suffix>``) second, so a locale component
        replaces a shared component with the same name.
        """
        components = self.load_glob(root, f"*{self.suffix}")
        overrides = self.load_glob(root / locale, f"*{self.suffix}")
        for name in sorted(components.keys() & overrides.keys()):
            logger.debug("Locale %s overrides shared component %s", locale, name)
        components.update(overrides)
        return components


__all__ = ["ComponentLoader", "read_text_verbatim"]
