"""Exceptions raised while composing pages from components."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path


class CompositionError(ValueError):
    """Base class for errors that abort the build of a single file."""


class MissingComponentError(CompositionError):
    """Raised when a marker names a component or subsection that is not defined."""

    def __init__(self, key: str, *, reason: str, source: Path | None = None) -> None:
        self.key = key
        self.reason = reason
        self.source = source
        location = f" in '{source}'" if source is not None else ""
        super().__init__(f"Cannot expand '{{{{{key}}}}}'{location}: {reason}")


class MalformedCompoundError(CompositionError):
    """Raised when a compound component section lacks its closing delimiter."""

    def __init__(self, path: Path, fragment_index: int, reason: str) -> None:
        self.path = path
        self.fragment_index = fragment_index
        super().__init__(
            f"Malformed compound component '{path}' (section {fragment_index}): "
            f"{reason}"
        )


class UndecodableComponentError(CompositionError):
    """Raised when a component file is not valid UTF-8."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot decode component '{path}' as UTF-8: {reason}")


class UnresolvedPathMarkerError(CompositionError):
    """Raised when a path marker cannot be resolved for the destination file."""

    def __init__(self, path: Path, marker: str, reason: str) -> None:
        self.path = path
        self.marker = marker
        super().__init__(f"Cannot resolve {marker} for '{path}': {reason}")


class CyclicExpansionError(CompositionError):
    """Raised when components reference each other in a cycle.

    ``passes`` is ``None`` when the cycle was found by walking component
    references, and the number of passes run when the pass budget ran out.
    """

    def __init__(
        self,
        markers: cabc.Iterable[str],
        passes: int | None = None,
        source: Path | None = None,
    ) -> None:
        self.markers = sorted(set(markers))
        self.passes = passes
        self.source = source
        location = f" in '{source}'" if source is not None else ""
        listed = ", ".join(self.markers)
        if passes is None:
            detail = "include each other"
        else:
            detail = f"still present after {passes} passes"
        super().__init__(f"Cyclic component reference{location}: {listed} {detail}")


__all__ = [
    "CompositionError",
    "CyclicExpansionError",
    "MalformedCompoundError",
    "MissingComponentError",
    "UndecodableComponentError",
    "UnresolvedPathMarkerError",
]
