"""Cyclopts CLI entrypoint for building the bilingual site and its components.

The ``pages`` console script defined here builds the whole output tree, can
regenerate the interview card components on their own, and converts about-us
text files into components. Typical usage is ``pages build`` locally or in CI
after editing pages or components.

Examples
--------
Build the site described by the default configuration:

>>> from bilingual_pages.cli import main
>>> main()  # doctest: +SKIP

Convert an about-us module and keep a JSON copy of the parsed paragraphs:

>>> from bilingual_pages.cli import app
>>> app(
...     ["about", "--module-dir", "source/files/AboutUs", "--save-json"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .about import AboutUsGenerator
from .builder import SiteBuilder
from .cards import InterviewCardBuilder
from .config import load_site_config

DEFAULT_CONFIG = Path("config/site.yaml")

app = App(name="pages", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _report(paths: list[Path]) -> None:
    for path in paths:
        print(f"wrote {_format_path(path)}")


@app.command(help="Build every page for both locales and copy the assets.")
def build(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    cards: typ.Annotated[
        bool, Parameter(help="Regenerate interview card components first")
    ] = True,
    verbose: typ.Annotated[
        bool, Parameter(help="Log every copied and composed file")
    ] = False,
) -> None:
    """Build the complete site described by ``config``.

    Parameters
    ----------
    config : Path, optional
        Path to the ``site.yaml`` configuration file (overridable via
        ``INPUT_CONFIG``).
    cards : bool, optional
        Regenerate the interview card components before loading components.
    verbose : bool, optional
        Enable debug logging.

    Returns
    -------
    None
        Writes the build tree and prints every written path.

    Raises
    ------
    CompositionError
        If a page references a missing component, a compound component is
        malformed, a path marker cannot be resolved, or components include
        each other in a cycle.
    """
    _configure_logging(verbose)
    site_config = load_site_config(config)
    _report(SiteBuilder(site_config, generate_cards=cards).run())


@app.command(name="cards", help="Regenerate interview card components from JSON.")
def cards_command(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
) -> None:
    """Write the card deck and navigation components for every locale."""
    site_config = load_site_config(config)
    written = InterviewCardBuilder(site_config).run()
    if not written:
        print("no interview card data found")
    _report(written)


@app.command(help="Convert about-us text files into locale components.")
def about(
    *,
    module_dir: typ.Annotated[
        Path, Parameter(help="Folder holding topic/locale text files")
    ],
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    component_name: typ.Annotated[
        str | None, Parameter(help="Name of the generated component")
    ] = None,
    json_file: typ.Annotated[
        str | None, Parameter(help="JSON file name inside the module folder")
    ] = None,
    from_json: typ.Annotated[
        bool, Parameter(help="Read paragraphs from the JSON file when present")
    ] = False,
    save_json: typ.Annotated[
        bool, Parameter(help="Persist parsed paragraphs to the JSON file")
    ] = False,
) -> None:
    """Parse an about-us module and write its components.

    Parameters
    ----------
    module_dir : Path
        Folder containing ``<topic>/<locale>/*.txt`` (or ``<locale>/*.txt``).
    config : Path, optional
        Path to the site configuration file.
    component_name : str or None, optional
        Override the configured component name.
    json_file : str or None, optional
        Override the configured JSON file name.
    from_json : bool, optional
        Use the JSON file instead of the text files when it exists.
    save_json : bool, optional
        Write the parsed paragraphs to the JSON file.
    """
    site_config = load_site_config(config)
    generator = AboutUsGenerator(
        site_config,
        module_dir,
        component_name=component_name,
        json_file=json_file,
    )
    _report(generator.run(from_json=from_json, save_json=save_json))


def main() -> None:
    """Invoke the Cyclopts application that powers the `pages` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
