"""Resolve relative-path markers once a page has been fully expanded.

Three markers depend on where the rendered file lands in the output tree:

``{fill_parents}``
    ``../`` once per folder between the build root and the file, so assets
    shared by both locales (``css/``, ``images/``) can be linked from any page.
``{fill_parents_html}``
    The same, counted from the ``html`` root instead.
``{language_src}``
    Relative link to the same page in the other locale's subtree.

Example
-------
>>> from pathlib import PurePosixPath
>>> from bilingual_pages.composer import PathResolver
>>> resolver = PathResolver()
>>> resolver.language_link(PurePosixPath("build/html/en/foo/bar.html"))
'../../sk/foo/bar.html'
>>> resolver.resolve("{fill_parents}css/style.css", PurePosixPath("build/html/en/a.html"))
'../../css/style.css'
"""

from __future__ import annotations

import typing as typ
from pathlib import PurePath

from bilingual_pages._constants import FILL_PARENTS, FILL_PARENTS_HTML, LANGUAGE_SRC

from .errors import UnresolvedPathMarkerError

if typ.TYPE_CHECKING:
    from bilingual_pages.config import SiteConfig

PARENT = "../"


class PathResolver:
    """Rewrite path markers relative to a destination file."""

    def __init__(
        self,
        *,
        locales: tuple[str, str] = ("en", "sk"),
        html_root: str = "html",
        build_root: str = "build",
    ) -> None:
        self.locales = locales
        self.html_root = html_root
        self.build_root = build_root

    @classmethod
    def from_config(cls, config: SiteConfig) -> PathResolver:
        """Create a resolver using the locales and root names of ``config``."""
        return cls(
            locales=config.locales,
            html_root=config.paths.html_root,
            build_root=config.paths.build_root,
        )

    @staticmethod
    def depth(path: PurePath, root: str) -> int:
        """Return how many path segments follow the first ``root`` segment.

        The file name counts as a segment, so ``build/css/a.html`` has depth 2
        below ``build``. Returns 0 when ``root`` is not part of ``path``.
        """
        parts = PurePath(path).parts
        try:
            index = parts.index(root)
        except ValueError:
            return 0
        return len(parts) - index - 1

    def parents(self, path: PurePath, root: str) -> str:
        """Return the ``../`` prefix that climbs from ``path``'s folder to ``root``."""
        return PARENT * max(self.depth(path, root) - 1, 0)

    def language_link(self, path: PurePath) -> str:
        """Return the relative link from ``path`` to its other-locale sibling.

        Raises
        ------
        UnresolvedPathMarkerError
            If ``path`` has no ``html`` root segment or no locale folder below
            it.
        """
        parts = PurePath(path).parts
        try:
            index = parts.index(self.html_root)
        except ValueError:
            reason = f"no '{self.html_root}' folder in path"
            raise UnresolvedPathMarkerError(path, LANGUAGE_SRC, reason) from None

        below = list(parts[index + 1 :])
        first, second = self.locales
        for position, segment in enumerate(below):
            if segment == first:
                below[position] = second
                break
            if segment == second:
                below[position] = first
                break
        else:
            reason = f"no locale folder ({first} or {second}) below '{self.html_root}'"
            raise UnresolvedPathMarkerError(path, LANGUAGE_SRC, reason)

        return PARENT * (len(below) - 1) + "/".join(below)

    def resolve(self, text: str, path: PurePath) -> str:
        """Return ``text`` with every path marker rewritten for ``path``."""
        if FILL_PARENTS in text:
            text = text.replace(FILL_PARENTS, self.parents(path, self.build_root))
        if FILL_PARENTS_HTML in text:
            text = text.replace(FILL_PARENTS_HTML, self.parents(path, self.html_root))
        if LANGUAGE_SRC in text:
            text = text.replace(LANGUAGE_SRC, self.language_link(path))
        return text


__all__ = ["PathResolver"]
