"""Shared dataclasses used by the composition pipeline."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path  # noqa: TC003 - used for runtime type metadata


@dc.dataclass(slots=True)
class CompoundComponent:
    """A component file holding several named sections.

    Attributes
    ----------
    name : str
        Component name, taken from the file's base name.
    sections : dict[str, str]
        Mapping of section name to pre-formatted markup, inserted verbatim.
    """

    name: str
    sections: dict[str, str] = dc.field(default_factory=dict)


ComponentEntry: typ.TypeAlias = str | CompoundComponent
ComponentDictionary: typ.TypeAlias = dict[str, ComponentEntry]


@dc.dataclass(slots=True)
class Page:
    """Source text of an HTML page and the file it renders into."""

    text: str
    destination: Path


def count_leaves(components: typ.Mapping[str, ComponentEntry]) -> int:
    """Return the number of insertable fragments in ``components``."""
    total = 0
    for entry in components.values():
        if isinstance(entry, CompoundComponent):
            total += len(entry.sections)
        else:
            total += 1
    return total


__all__ = [
    "ComponentDictionary",
    "ComponentEntry",
    "CompoundComponent",
    "Page",
    "count_leaves",
]
