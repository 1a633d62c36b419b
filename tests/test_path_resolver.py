"""Unit tests for parent-folder and cross-locale path markers."""

from __future__ import annotations

from pathlib import PurePosixPath

import pytest

from bilingual_pages.composer import PathResolver, UnresolvedPathMarkerError
from bilingual_pages.config import SiteConfig


@pytest.fixture
def resolver() -> PathResolver:
    return PathResolver()


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("build/index.html", ""),
        ("build/css/page.html", "../"),
        ("build/a/b/page.html", "../../"),
        ("build/html/en/sub/page.html", "../../../"),
        ("elsewhere/page.html", ""),
    ],
)
def test_fill_parents_counts_folders_below_build(
    resolver: PathResolver, path: str, expected: str
) -> None:
    """``{fill_parents}`` climbs one level per folder below the build root."""
    resolved = resolver.resolve("{fill_parents}", PurePosixPath(path))
    assert resolved == expected, f"{path}: expected {expected!r}, got {resolved!r}"


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("build/html/page.html", ""),
        ("build/html/en/page.html", "../"),
        ("build/html/en/sub/page.html", "../../"),
    ],
)
def test_fill_parents_html_counts_folders_below_html(
    resolver: PathResolver, path: str, expected: str
) -> None:
    """``{fill_parents_html}`` uses the ``html`` folder as its root."""
    assert resolver.resolve("{fill_parents_html}", PurePosixPath(path)) == expected


def test_every_occurrence_is_replaced(resolver: PathResolver) -> None:
    """All occurrences of a marker resolve to the same prefix."""
    text = '<link href="{fill_parents}css/a.css"><img src="{fill_parents}i.png">'
    resolved = resolver.resolve(text, PurePosixPath("build/html/en/page.html"))
    assert resolved == '<link href="../../css/a.css"><img src="../../i.png">'


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("build/html/en/foo/bar.html", "../../sk/foo/bar.html"),
        ("build/html/sk/foo/bar.html", "../../en/foo/bar.html"),
        ("build/html/en/index.html", "../sk/index.html"),
        ("/srv/site/build/html/sk/a/b/c.html", "../../../en/a/b/c.html"),
    ],
)
def test_language_src_points_at_other_locale(
    resolver: PathResolver, path: str, expected: str
) -> None:
    """``{language_src}`` links to the same page in the other locale."""
    assert resolver.language_link(PurePosixPath(path)) == expected


def test_language_src_swaps_only_the_locale_folder(resolver: PathResolver) -> None:
    """Folder names that merely contain a locale code are left alone."""
    path = PurePosixPath("build/html/en/green/en-us.html")
    assert resolver.language_link(path) == "../../sk/green/en-us.html"


@pytest.mark.parametrize(
    "path",
    ["build/html/de/page.html", "build/css/page.html"],
)
def test_language_src_without_locale_is_an_error(
    resolver: PathResolver, path: str
) -> None:
    """A path outside both locale subtrees cannot produce a sibling link."""
    with pytest.raises(UnresolvedPathMarkerError) as excinfo:
        resolver.resolve('<a href="{language_src}">', PurePosixPath(path))
    assert excinfo.value.marker == "{language_src}"


def test_language_src_is_checked_only_when_present(resolver: PathResolver) -> None:
    """Files without the marker never need a locale folder."""
    text = "<p>{fill_parents}</p>"
    assert resolver.resolve(text, PurePosixPath("build/img/x.html")) == "<p>../</p>"


def test_resolver_uses_configured_names() -> None:
    """Locales and root names come from the site configuration."""
    config = SiteConfig(locales=("de", "fr"))
    config.paths.html_root = "pages"
    config.paths.build_root = "dist"
    resolver = PathResolver.from_config(config)

    text = "{fill_parents}|{fill_parents_html}|{language_src}"
    resolved = resolver.resolve(text, PurePosixPath("dist/pages/fr/x/y.html"))

    assert resolved == "../../../|../../|../../de/x/y.html", (
        f"unexpected resolution {resolved!r}"
    )
