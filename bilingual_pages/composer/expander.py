"""Substitute ``{{name}}`` and ``{{name.section}}`` markers with components.

Components may embed other components by name, so substitution runs in passes
until the text holds no marker. Before the first pass the expander follows the
references reachable from the text through the component dictionary and
rejects any cycle such as ``a -> b -> a``. A self-referencing component can
double the text on every pass, so cycles are found on the reference graph
rather than by letting the text grow.

The pass budget stays as a second bound. It catches the rare marker that only
appears once neighbouring fragments are joined.
"""

from __future__ import annotations

import re
import typing as typ

from .errors import CyclicExpansionError, MissingComponentError
from .models import CompoundComponent, count_leaves

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .models import ComponentEntry

MARKER_PATTERN = re.compile(r"\{\{\s*([\w-]+)(?:\.([\w-]+))?\s*\}\}")


def _marker_key(match: re.Match[str]) -> str:
    name, section = match.group(1), match.group(2)
    return f"{name}.{section}" if section else name


class PlaceholderExpander:
    """Expand component markers against one component dictionary."""

    def __init__(
        self,
        components: typ.Mapping[str, ComponentEntry],
        *,
        max_passes: int | None = None,
    ) -> None:
        """Initialize the expander.

        Parameters
        ----------
        components : Mapping[str, ComponentEntry]
            Component dictionary for the locale being rendered.
        max_passes : int, optional
            Upper bound on substitution passes. Defaults to the number of
            insertable fragments in ``components`` plus one.
        """
        self.components = components
        self.max_passes = max_passes or count_leaves(components) + 1
        self._acyclic: set[str] = set()

    def expand(self, text: str, *, source: Path | None = None) -> str:
        """Return ``text`` with every component marker substituted.

        Parameters
        ----------
        text : str
            Raw page or component text.
        source : Path, optional
            File the text came from; only used in error messages.

        Raises
        ------
        MissingComponentError
            If a marker names an unknown component or section.
        CyclicExpansionError
            If the text reaches components that include each other, or
            markers remain after ``max_passes`` passes.
        """

        def _repl(match: re.Match[str]) -> str:
            return self.lookup(match.group(1), match.group(2), source=source)

        self.check_cycles(text, source=source)
        passes = 0
        while MARKER_PATTERN.search(text):
            if passes >= self.max_passes:
                remaining = {match.group(0) for match in MARKER_PATTERN.finditer(text)}
                raise CyclicExpansionError(remaining, passes, source)
            text = MARKER_PATTERN.sub(_repl, text)
            passes += 1
        return text

    def check_cycles(self, text: str, *, source: Path | None = None) -> None:
        """Raise ``CyclicExpansionError`` if ``text`` reaches a reference cycle.

        Unknown components are skipped here; :meth:`expand` reports them.
        Fragments proven acyclic are remembered across calls.
        """
        for match in MARKER_PATTERN.finditer(text):
            self._visit(_marker_key(match), [], source)

    def _visit(self, key: str, stack: list[str], source: Path | None) -> None:
        if key in self._acyclic:
            return
        if key in stack:
            cycle = stack[stack.index(key) :]
            raise CyclicExpansionError([f"{{{{{item}}}}}" for item in cycle], None, source)
        fragment = self.fragment(key)
        if fragment is None:
            return
        stack.append(key)
        for match in MARKER_PATTERN.finditer(fragment):
            self._visit(_marker_key(match), stack, source)
        stack.pop()
        self._acyclic.add(key)

    def fragment(self, key: str) -> str | None:
        """Return the fragment for a ``name`` or ``name.section`` key, if any."""
        name, _, section = key.partition(".")
        entry = self.components.get(name)
        if isinstance(entry, CompoundComponent):
            return entry.sections.get(section) if section else None
        if entry is None or section:
            return None
        return entry

    def lookup(
        self, name: str, section: str | None = None, *, source: Path | None = None
    ) -> str:
        """Return the fragment addressed by ``name`` and optional ``section``."""
        key = f"{name}.{section}" if section else name
        try:
            entry = self.components[name]
        except KeyError:
            reason = f"no component named '{name}'"
            raise MissingComponentError(key, reason=reason, source=source) from None

        if isinstance(entry, CompoundComponent):
            if section is None:
                reason = f"compound component '{name}' needs a section"
                raise MissingComponentError(key, reason=reason, source=source)
            try:
                return entry.sections[section]
            except KeyError:
                reason = f"compound component '{name}' has no section '{section}'"
                raise MissingComponentError(
                    key, reason=reason, source=source
                ) from None

        if section is not None:
            reason = f"'{name}' is a simple component without sections"
            raise MissingComponentError(key, reason=reason, source=source)
        return entry


def find_markers(text: str) -> list[str]:
    """Return the component markers in ``text`` in source order."""
    return [match.group(0) for match in MARKER_PATTERN.finditer(text)]


__all__ = ["MARKER_PATTERN", "PlaceholderExpander", "find_markers"]
