"""Publish command for the powerdoc CLI."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel

from powerdoc.cli.config import configure_logging, load_project_config
from powerdoc.config.conf import DEFAULT_TEMPLATE_PATH, PublishOptions
from powerdoc.doclets.store import load_doclets
from powerdoc.publish import publish as publish_site
from powerdoc.tutorials import RECURSE_DEPTH, load_tutorials, render_markdown

console = Console()


def publish(
    doclets: Path = typer.Argument(
        ...,
        help="JSON doclet dump, as written by `jsdoc -X`.",
        exists=True,
        dir_okay=False,
        readable=True,
    ),
    destination: Path = typer.Option(
        Path("./out/"),
        "--destination",
        "-d",
        help="Output directory.",
    ),
    template: Path | None = typer.Option(
        None,
        "--template",
        "-t",
        help="Template directory. Defaults to the bundled template.",
    ),
    configure: Path | None = typer.Option(
        None,
        "--configure",
        "-c",
        help="Configuration file (JSON or YAML). Defaults to powerdoc.yml or conf.json.",
    ),
    readme: Path | None = typer.Option(
        None,
        "--readme",
        "-R",
        help="Markdown README shown on the home page.",
    ),
    tutorials: Path | None = typer.Option(
        None,
        "--tutorials",
        "-u",
        help="Directory holding tutorials.",
    ),
    recurse: bool = typer.Option(
        False,
        "--recurse",
        "-r",
        help="Also load tutorials from subdirectories of the tutorial directory.",
    ),
    encoding: str = typer.Option(
        "utf8",
        "--encoding",
        "-e",
        help="Encoding used to read source files, tutorials and the README.",
    ),
    private: bool = typer.Option(
        False,
        "--private",
        "-p",
        help="Document private symbols.",
    ),
    access: list[str] | None = typer.Option(
        None,
        "--access",
        "-a",
        help="Access levels to document (package, public, protected, private, undefined, all). Can be repeated.",
    ),
    main_page_title: str | None = typer.Option(
        None,
        "--main-page-title",
        help="Title of the home page.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging.",
    ),
) -> None:
    """Generate a documentation site from a doclet dump.

    Examples:

        jsdoc -X src > doclets.json && powerdoc publish doclets.json

        powerdoc publish doclets.json -d docs -u tutorials -R README.md

        powerdoc publish doclets.json -c powerdoc.yml --access public --access protected
    """
    configure_logging(verbose)

    try:
        conf = load_project_config(configure)
        opts = PublishOptions(
            destination=destination,
            template=template or DEFAULT_TEMPLATE_PATH,
            encoding=encoding,
            private=private,
            access=access or None,
            mainpagetitle=main_page_title,
        )
        codec = opts.normalized_encoding()

        if readme is not None:
            opts.readme = render_markdown(readme.read_text(encoding=codec))

        store = load_doclets(doclets, encoding=codec)
        tutorial_root = load_tutorials(
            tutorials,
            encoding=codec,
            max_depth=RECURSE_DEPTH if recurse else 1,
        )
        result = publish_site(store, opts, tutorial_root, conf)

    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from None

    console.print(
        Panel(
            f"Output: [blue]{result.outdir}[/blue]\nFiles written: [green]{len(result.files)}[/green]",
            title="Documentation published",
        )
    )
