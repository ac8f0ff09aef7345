"""Writers for the generated HTML pages."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import logfire
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.util import ClassNotFound

from powerdoc.links.registry import LinkRegistry
from powerdoc.rendering.paths import SourceFile
from powerdoc.templates.view import View
from powerdoc.tutorials.tutorial import Tutorial

CONTAINER_TEMPLATE = "container.html.j2"
TUTORIAL_TEMPLATE = "tutorial.html.j2"

# Source listings anchor each line as ``line-N``
LINE_ANCHOR_PREFIX = "line"


def highlight_source(code: str, filename: str) -> str:
    """Pretty-print source code as HTML with per-line anchors.

    The lexer is picked from the filename; unknown types fall back to plain text.
    """
    try:
        lexer = get_lexer_for_filename(filename, stripnl=False)
    except ClassNotFound:
        lexer = TextLexer(stripnl=False)

    formatter = HtmlFormatter(linenos="inline", lineanchors=LINE_ANCHOR_PREFIX)
    return highlight(code, lexer, formatter)


class PageWriter:
    """Renders pages through a view and writes them below the output directory."""

    def __init__(self, outdir: Path, view: View, links: LinkRegistry) -> None:
        self.outdir = outdir
        self.view = view
        self.links = links
        self.written: list[Path] = []

    def _write(self, filename: str, html: str) -> Path:
        path = self.outdir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(html, encoding="utf-8")
        self.written.append(path)
        logfire.debug("Wrote page", path=str(path))
        return path

    def generate(
        self,
        page_type: str,
        title: str,
        docs: Sequence[Any],
        filename: str,
        resolve_links: bool = True,
    ) -> Path:
        """Render a container page and write it.

        Args:
            page_type: Page type label ("Class", "Module", "Source" ...)
            title: Page title
            docs: Doclets (or plain mappings) shown on the page
            filename: Output filename relative to the output directory
            resolve_links: Replace inline ``{@link}`` tags in the output

        Returns:
            Path of the written file
        """
        data = {"type": page_type, "title": title, "docs": list(docs)}
        html = self.view.render(CONTAINER_TEMPLATE, data)

        if resolve_links:
            html = self.links.resolve_links(html)

        return self._write(filename, html)

    def generate_source_files(
        self,
        source_files: Mapping[str, SourceFile],
        encoding: str = "utf-8",
    ) -> None:
        """Write a pretty-printed listing for every source file.

        Listings are registered as links under their shortened path first, so
        other pages can link to them. A file that cannot be read is logged and
        skipped.
        """
        for key, source in source_files.items():
            shortened = source.shortened or source.resolved
            outfile = self.links.get_unique_filename(shortened)
            self.links.register_link(shortened, outfile)

            try:
                code = Path(source.resolved).read_text(encoding=encoding)
            except (OSError, UnicodeDecodeError) as e:
                logfire.error(
                    "Error while generating source file",
                    file=key,
                    error=str(e),
                )
                continue

            doc = {"kind": "source", "code": highlight_source(code, source.resolved)}
            self.generate("Source", shortened, [doc], outfile, resolve_links=False)

    def generate_tutorial(self, title: str, tutorial: Tutorial, filename: str) -> Path:
        """Render a tutorial page; inline links inside tutorials are resolved too."""
        data = {
            "title": title,
            "header": tutorial.title,
            "content": tutorial.parse(),
            "children": tutorial.children,
        }
        html = self.view.render(TUTORIAL_TEMPLATE, data)
        html = self.links.resolve_links(html)
        return self._write(filename, html)

    def save_children(self, node: Tutorial) -> None:
        """Write every tutorial below ``node``, depth first."""
        for child in node.children:
            filename = self.links.tutorial_to_url(child.name)
            if filename is None:
                continue
            self.generate_tutorial(f"Tutorial: {child.title}", child, filename)
            self.save_children(child)
