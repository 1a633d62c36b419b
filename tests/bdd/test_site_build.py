"""Behaviour tests for building a bilingual site using pytest-bdd.

These scenarios assemble a small project on disk and run the whole build
through ``SiteBuilder``. They verify that every page is rendered once per
locale, that ``{language_src}`` links each copy to its counterpart, and that a
page naming an unknown component stops the build before anything is written
for it.

Usage
-----
Run ``pytest tests/bdd/test_site_build.py -v`` to execute only these
scenarios.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, scenarios, then, when

from bilingual_pages.builder import SiteBuilder
from bilingual_pages.composer import MARKER_PATTERN, MissingComponentError
from bilingual_pages.config import load_site_config

FEATURE_FILE = Path(__file__).resolve().parents[2] / "features" / "site_build.feature"
scenarios(FEATURE_FILE)

ScenarioState = dict[str, typ.Any]


def _write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(text.encode("utf-8"))


@pytest.fixture
def scenario_state() -> ScenarioState:
    """Share mutable scenario data across pytest-bdd steps.

    Returns
    -------
    ScenarioState
        Mutable dictionary used to exchange state between ``given``, ``when``,
        and ``then`` steps.
    """
    return {}


@given("a project with shared and locale components")
def given_project(tmp_path: Path, scenario_state: ScenarioState) -> None:
    """Write a configuration file and the component tree.

    Parameters
    ----------
    tmp_path : Path
        Pytest-provided temporary directory holding the project.
    scenario_state : ScenarioState
        Receives ``root`` and ``config_path``.
    """
    config_path = tmp_path / "config" / "site.yaml"
    _write(config_path, "locales: [en, sk]\n")
    components = tmp_path / "components"
    _write(
        components / "nav.html",
        '<nav><a class="switch" href="{language_src}">{{labels.other}}</a></nav>',
    )
    _write(
        components / "en" / "labels.html",
        ":^) other :::\r\nSlovensky\r\n:^) title :::\r\nWelcome",
    )
    _write(
        components / "sk" / "labels.html",
        ":^) other :::\r\nEnglish\r\n:^) title :::\r\nVitajte",
    )
    scenario_state["root"] = tmp_path
    scenario_state["config_path"] = config_path


@given("a page nested one folder below the html root")
def given_nested_page(scenario_state: ScenarioState) -> None:
    """Add ``html/news/today.html`` to the source tree."""
    root = typ.cast("Path", scenario_state["root"])
    _write(
        root / "source" / "html" / "news" / "today.html",
        '<link href="{fill_parents}css/style.css"><h1>{{labels.title}}</h1>{{nav}}',
    )


@given("a page that references an unknown component")
def given_broken_page(scenario_state: ScenarioState) -> None:
    """Add a page that names a component nobody defined."""
    root = typ.cast("Path", scenario_state["root"])
    _write(root / "source" / "html" / "broken.html", "<p>{{missing_widget}}</p>")


@when("I build the site")
def when_build(scenario_state: ScenarioState) -> None:
    """Run the build and record the written paths."""
    config = load_site_config(typ.cast("Path", scenario_state["config_path"]))
    scenario_state["written"] = SiteBuilder(config).run()


@when("I try to build the site")
def when_try_build(scenario_state: ScenarioState) -> None:
    """Run the build and record the error it raises."""
    config = load_site_config(typ.cast("Path", scenario_state["config_path"]))
    with pytest.raises(MissingComponentError) as excinfo:
        SiteBuilder(config).run()
    scenario_state["error"] = excinfo.value


@then("the page is written once per locale")
def then_written_per_locale(scenario_state: ScenarioState) -> None:
    """Both locale copies exist and carry their own titles."""
    root = typ.cast("Path", scenario_state["root"]).resolve()
    titles: dict[str, str] = {}
    for locale in ("en", "sk"):
        path = root / "build" / "html" / locale / "news" / "today.html"
        assert path in scenario_state["written"], f"{path} not reported as written"
        soup = BeautifulSoup(path.read_text(encoding="utf-8"), "html.parser")
        titles[locale] = soup.select_one("h1").get_text()
    assert titles == {"en": "Welcome", "sk": "Vitajte"}


@then("each copy links to its counterpart in the other locale")
def then_language_links(scenario_state: ScenarioState) -> None:
    """The switch link climbs out of the locale folder into the other one."""
    root = typ.cast("Path", scenario_state["root"]).resolve()
    expected = {"en": "../../sk/news/today.html", "sk": "../../en/news/today.html"}
    for locale, href in expected.items():
        path = root / "build" / "html" / locale / "news" / "today.html"
        soup = BeautifulSoup(path.read_text(encoding="utf-8"), "html.parser")
        assert soup.select_one("a.switch")["href"] == href
        assert soup.select_one("link")["href"] == "../../../css/style.css"


@then("no marker remains in the written pages")
def then_no_markers(scenario_state: ScenarioState) -> None:
    """Neither component nor path markers survive the build."""
    for path in typ.cast("list[Path]", scenario_state["written"]):
        html = path.read_text(encoding="utf-8")
        assert not MARKER_PATTERN.search(html), f"component marker left in {path}"
        assert "{fill_parents}" not in html
        assert "{language_src}" not in html


@then("the build fails naming the unknown component")
def then_fails(scenario_state: ScenarioState) -> None:
    """The error carries the missing key and the page that used it."""
    error = typ.cast("MissingComponentError", scenario_state["error"])
    assert error.key == "missing_widget"
    assert error.source is not None
    assert error.source.name == "broken.html"


@then("no page is written for the broken source")
def then_nothing_written(scenario_state: ScenarioState) -> None:
    """Neither locale copy of the broken page exists."""
    root = typ.cast("Path", scenario_state["root"])
    for locale in ("en", "sk"):
        assert not (root / "build" / "html" / locale / "broken.html").exists()
