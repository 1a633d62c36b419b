"""Tests for the ``pages`` command line interface."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
from pytest_mock import MockerFixture

from bilingual_pages import cli
from bilingual_pages.composer import MissingComponentError


def _write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(text.encode("utf-8"))


def _run(args: list[str]) -> None:
    """Invoke the app, tolerating a clean ``SystemExit`` after the command."""
    try:
        cli.app(args)
    except SystemExit as exc:
        assert exc.code in (None, 0), f"pages {' '.join(args)} exited with {exc.code}"


@pytest.fixture
def site(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a minimal project and make it the working directory."""
    _write(tmp_path / "config" / "site.yaml", "{}\n")
    _write(tmp_path / "components" / "en" / "hello.html", "Hello")
    _write(tmp_path / "components" / "sk" / "hello.html", "Ahoj")
    _write(tmp_path / "source" / "html" / "index.html", "<p>{{hello}}</p>")
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_build_reports_written_files(
    site: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """``pages build`` writes both locales and lists them relative to the cwd."""
    _run(["build"])

    out = capsys.readouterr().out.splitlines()
    assert out == ["wrote build/html/en/index.html", "wrote build/html/sk/index.html"]
    assert (site / "build" / "html" / "sk" / "index.html").read_text(
        encoding="utf-8"
    ) == "<p>Ahoj</p>"


def test_build_reads_config_from_environment(
    site: Path, tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> None:
    """``INPUT_CONFIG`` selects the configuration file."""
    elsewhere = tmp_path_factory.mktemp("elsewhere")
    monkeypatch.chdir(elsewhere)
    monkeypatch.setenv("INPUT_CONFIG", str(site / "config" / "site.yaml"))

    _run(["build"])

    assert (site / "build" / "html" / "en" / "index.html").is_file()


def test_build_can_skip_card_generation(site: Path) -> None:
    """``--no-cards`` leaves existing card JSON untouched."""
    _write(
        site / "components" / "en" / "interview_cards.json",
        json.dumps(
            [
                {
                    "Name": "Jana",
                    "Image": "images/jana.svg",
                    "Title": "T",
                    "ShortInfo": "S",
                    "LongInfo": "L",
                    "PhotosFolderPath": "",
                }
            ]
        ),
    )

    _run(["build", "--no-cards"])

    assert not (site / "components" / "en" / "interview_cards.html").exists()
    assert (site / "build" / "html" / "en" / "index.html").is_file()


def test_build_propagates_composition_errors(site: Path) -> None:
    """Unknown components abort the command."""
    _write(site / "source" / "html" / "broken.html", "{{nope}}")

    with pytest.raises(MissingComponentError):
        cli.build(config=site / "config" / "site.yaml")


def test_cards_without_data(site: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """``pages cards`` says so when no locale has card data."""
    _run(["cards"])

    assert capsys.readouterr().out.strip() == "no interview card data found"


def test_about_writes_components(
    site: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """``pages about`` converts a module into per-locale components."""
    module = site / "source" / "files" / "AboutUs"
    _write(module / "en" / "about.txt", "Who\nWe build things.")
    _write(module / "sk" / "about.txt", "Kto\nStavame veci.")

    _run(
        [
            "about",
            "--module-dir",
            "source/files/AboutUs",
            "--component-name",
            "who",
            "--save-json",
        ]
    )

    out = capsys.readouterr().out.splitlines()
    assert out == [
        "wrote source/files/AboutUs/AboutUs.json",
        "wrote components/en/who.html",
        "wrote components/sk/who.html",
    ], f"unexpected output {out}"
    assert "Kto" in (site / "components" / "sk" / "who.html").read_text(
        encoding="utf-8"
    )


def test_verbose_flag_enables_debug_logging(
    site: Path, mocker: MockerFixture
) -> None:
    """``--verbose`` configures debug logging before the build starts."""
    basic_config = mocker.patch("bilingual_pages.cli.logging.basicConfig")
    builder = mocker.patch("bilingual_pages.cli.SiteBuilder")
    builder.return_value.run.return_value = []

    _run(["build", "--verbose", "--no-cards"])

    assert basic_config.call_args.kwargs["level"] == logging.DEBUG
    _, kwargs = builder.call_args
    assert kwargs == {"generate_cards": False}
