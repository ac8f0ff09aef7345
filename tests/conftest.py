"""Shared fixtures for powerdoc tests."""

from pathlib import Path
from typing import Any

import pytest

from powerdoc.config import DEFAULT_TEMPLATE_PATH
from powerdoc.doclets import DocletStore
from powerdoc.links import LinkRegistry, htmlsafe
from powerdoc.rendering import PowerTemplateHelper
from powerdoc.templates import View

WIDGET_SOURCE = """\
/**
 * @module widgets
 */

/** A widget. */
class Widget {
  /** Render the widget. */
  render() {
    return "<div>";
  }
}
"""


@pytest.fixture
def registry() -> LinkRegistry:
    """An empty link registry."""
    return LinkRegistry()


@pytest.fixture
def helper(registry: LinkRegistry) -> PowerTemplateHelper:
    """Template helper bound to the registry fixture."""
    return PowerTemplateHelper(registry)


@pytest.fixture
def bundled_view(registry: LinkRegistry, helper: PowerTemplateHelper) -> View:
    """The bundled template view, wired the way publish wires it."""
    view = View(DEFAULT_TEMPLATE_PATH / "tmpl")
    store = DocletStore()
    view.find = store.find
    view.linkto = registry.linkto
    view.resolve_author_links = registry.resolve_author_links
    view.tutoriallink = helper.tutoriallink
    view.htmlsafe = htmlsafe
    view.nav = "<h2>nav</h2>"
    return view


def _meta(directory: Path, lineno: int) -> dict[str, Any]:
    return {"path": str(directory), "filename": "widget.js", "lineno": lineno}


@pytest.fixture
def widget_project(tmp_path: Path) -> dict[str, Any]:
    """A small documented project: one source file, doclets and a tutorial."""
    source_dir = tmp_path / "src" / "lib"
    source_dir.mkdir(parents=True)
    (source_dir / "widget.js").write_text(WIDGET_SOURCE, encoding="utf-8")

    tutorials_dir = tmp_path / "tutorials"
    tutorials_dir.mkdir()
    (tutorials_dir / "intro.md").write_text(
        "# Getting started\n\nCall {@link createWidget} first.\n", encoding="utf-8"
    )
    (tutorials_dir / "intro.json").write_text('{"title": "Introduction"}', encoding="utf-8")

    doclets = [
        {
            "kind": "package",
            "name": "widgets",
            "longname": "package:widgets",
            "version": "1.2.0",
        },
        {
            "kind": "module",
            "name": "widgets",
            "longname": "module:widgets",
            "description": "Widget toolkit.",
            "meta": _meta(source_dir, 1),
        },
        {
            "kind": "class",
            "name": "Widget",
            "longname": "module:widgets~Widget",
            "memberof": "module:widgets",
            "scope": "inner",
            "description": "A widget. See {@link module:widgets~Widget#render}.",
            "params": [{"name": "name", "type": {"names": ["string"]}}],
            "meta": _meta(source_dir, 6),
        },
        {
            "kind": "function",
            "name": "render",
            "longname": "module:widgets~Widget#render",
            "memberof": "module:widgets~Widget",
            "scope": "instance",
            "description": "Render the widget.",
            "returns": [{"type": {"names": ["string"]}}],
            "examples": ["<caption>Rendering</caption>\nwidget.render();"],
            "meta": _meta(source_dir, 8),
        },
        {
            "kind": "member",
            "name": "count",
            "longname": "module:widgets~Widget.count",
            "memberof": "module:widgets~Widget",
            "scope": "static",
            "type": {"names": ["number"]},
            "meta": _meta(source_dir, 9),
        },
        {
            "kind": "function",
            "name": "createWidget",
            "longname": "createWidget",
            "scope": "global",
            "description": "Creates a widget.",
            "meta": _meta(source_dir, 10),
        },
        {
            "kind": "function",
            "name": "secretHelper",
            "longname": "secretHelper",
            "scope": "global",
            "access": "private",
            "meta": _meta(source_dir, 11),
        },
        {
            "kind": "member",
            "name": "leftover",
            "longname": "leftover",
            "undocumented": True,
        },
    ]

    return {
        "root": tmp_path,
        "source_dir": source_dir,
        "tutorials_dir": tutorials_dir,
        "doclets": doclets,
    }
