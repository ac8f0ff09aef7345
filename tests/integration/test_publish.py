"""End-to-end tests for publishing a documentation site."""

from pathlib import Path
from typing import Any

import pytest

from powerdoc.config import PublishOptions, parse_conf
from powerdoc.doclets import DocletStore
from powerdoc.publish import PublishResult, publish
from powerdoc.tutorials import load_tutorials


def _publish(project: dict[str, Any], conf_text: str = "", **options: Any) -> PublishResult:
    store = DocletStore(project["doclets"])
    opts = PublishOptions(destination=project["root"] / "dest", **options)
    tutorials = load_tutorials(project["tutorials_dir"])
    conf = parse_conf(conf_text, base_dir=project["root"])
    return publish(store, opts, tutorials, conf)


@pytest.fixture
def site(widget_project: dict[str, Any]) -> PublishResult:
    """The widget project published with default settings."""
    return _publish(widget_project)


def _read(result: PublishResult, name: str) -> str:
    return (result.outdir / name).read_text(encoding="utf-8")


class TestPublish:
    """Tests for a complete publish run."""

    def test_output_directory(self, site: PublishResult, widget_project: dict[str, Any]) -> None:
        """Test that output lands under the package name and version."""
        assert site.outdir == widget_project["root"] / "dest" / "widgets" / "1.2.0"

    def test_files(self, site: PublishResult) -> None:
        """Test that every page and asset is written."""
        names = {p.relative_to(site.outdir).as_posix() for p in site.files}

        assert names == {
            "index.html",
            "global.html",
            "module-widgets.html",
            "module-widgets-Widget.html",
            "widget.js.html",
            "tutorial-intro.html",
            "scripts/search.js",
            "styles/powerdoc.css",
            "styles/pygments.css",
        }
        assert all(p.is_file() for p in site.files)

    def test_index(self, site: PublishResult) -> None:
        """Test the home page."""
        html = _read(site, "index.html")

        assert "<title>Home</title>" in html
        assert "<h3>widgets 1.2.0</h3>" in html

    def test_class_page(self, site: PublishResult) -> None:
        """Test that the class page documents its methods with resolved links."""
        html = _read(site, "module-widgets-Widget.html")

        assert "<title>Widget</title>" in html
        assert 'id="render"' in html
        assert 'href="module-widgets-Widget.html#render"' in html
        assert "{@link" not in html
        assert '<p class="code-caption">Rendering</p>' in html
        assert 'href="widget.js.html#line-8"' in html

    def test_global_page(self, site: PublishResult) -> None:
        """Test that globals are listed and private symbols pruned."""
        html = _read(site, "global.html")

        assert 'id="createWidget"' in html
        assert "secretHelper" not in html
        assert "leftover" not in html

    def test_source_page(self, site: PublishResult) -> None:
        """Test the pretty-printed source listing."""
        html = _read(site, "widget.js.html")

        assert "<title>widget.js</title>" in html
        assert 'id="line-1"' in html
        assert "&lt;div&gt;" in html

    def test_tutorial_page(self, site: PublishResult) -> None:
        """Test that tutorials get their configured title and resolved links."""
        html = _read(site, "tutorial-intro.html")

        assert "<title>Tutorial: Introduction</title>" in html
        assert "<h1>Getting started</h1>" in html
        assert '<a href="global.html#createWidget">createWidget</a>' in html

    def test_navigation(self, site: PublishResult) -> None:
        """Test that every page carries the sidebar."""
        html = _read(site, "global.html")

        assert '<h2><a href="index.html">Home</a></h2>' in html
        assert '<a href="module-widgets-Widget.html">Widget</a>' in html
        assert '<a href="tutorial-intro.html">Introduction</a>' in html
        assert "<h3>Global</h3>" in html
        assert "data-type='member'" not in html


class TestPublishOptions:
    """Tests for configuration that changes the output."""

    def test_without_source_files(self, widget_project: dict[str, Any]) -> None:
        """Test that source listings can be turned off."""
        result = _publish(widget_project, "templates:\n  default:\n    outputSourceFiles: false\n")

        assert not (result.outdir / "widget.js.html").exists()
        html = _read(result, "module-widgets-Widget.html")
        assert "line-8" not in html

    def test_private(self, widget_project: dict[str, Any]) -> None:
        """Test that private symbols can be documented."""
        result = _publish(widget_project, private=True)

        assert 'id="secretHelper"' in _read(result, "global.html")

    def test_static_members_in_navigation(self, widget_project: dict[str, Any]) -> None:
        """Test that power mode can list static members in the sidebar."""
        result = _publish(widget_project, "powerMode:\n  displayStaticMembers: true\n")

        html = _read(result, "index.html")
        assert (
            "<li data-type='member'><a href=\"module-widgets-Widget.html#.count\">count</a></li>"
            in html
        )

    def test_sorted_by_default(self, widget_project: dict[str, Any]) -> None:
        """Test that doclets are sorted by longname before rendering."""
        store = DocletStore(widget_project["doclets"])

        publish(store, PublishOptions(destination=widget_project["root"] / "dest"))

        assert [d.longname for d in store] == [
            "createWidget",
            "module:widgets",
            "module:widgets~Widget",
            "module:widgets~Widget#render",
            "module:widgets~Widget.count",
            "package:widgets",
        ]

    def test_sort_disabled(self, widget_project: dict[str, Any]) -> None:
        """Test that power mode can keep the input order."""
        store = DocletStore(widget_project["doclets"])
        conf = parse_conf("powerMode:\n  sort: false\n")

        publish(store, PublishOptions(destination=widget_project["root"] / "dest"), conf=conf)

        assert [d.longname for d in store] == [
            "package:widgets",
            "module:widgets",
            "module:widgets~Widget",
            "module:widgets~Widget#render",
            "module:widgets~Widget.count",
            "createWidget",
        ]

    def test_user_static_files(self, widget_project: dict[str, Any]) -> None:
        """Test that configured static files are copied."""
        assets = widget_project["root"] / "assets"
        assets.mkdir()
        (assets / "logo.svg").write_text("<svg/>")

        result = _publish(
            widget_project,
            "templates:\n  default:\n    staticFiles:\n      include: [assets]\n",
        )

        assert (result.outdir / "logo.svg").read_text() == "<svg/>"

    def test_custom_layout(self, widget_project: dict[str, Any]) -> None:
        """Test that a layout file outside the template is used."""
        layout = widget_project["root"] / "layout.html.j2"
        layout.write_text("<main>{{ title }}|{{ content }}</main>")

        result = _publish(
            widget_project, "templates:\n  default:\n    layoutFile: layout.html.j2\n"
        )

        assert _read(result, "global.html").startswith("<main>Global|")

    def test_readme(self, widget_project: dict[str, Any]) -> None:
        """Test that the README lands on the home page."""
        result = _publish(widget_project, readme="<p>Read me</p>", mainpagetitle="Widgets")

        assert "<article><p>Read me</p></article>" in _read(result, "index.html")

    def test_without_package(self, widget_project: dict[str, Any]) -> None:
        """Test that output goes straight to the destination without a package doclet."""
        widget_project["doclets"] = [
            d for d in widget_project["doclets"] if d["kind"] != "package"
        ]

        result = _publish(widget_project)

        assert result.outdir == widget_project["root"] / "dest"
        assert (result.outdir / "index.html").is_file()

    def test_missing_template(self, widget_project: dict[str, Any]) -> None:
        """Test that an unknown template directory is rejected."""
        with pytest.raises(ValueError, match="Template directory does not exist"):
            _publish(widget_project, template=widget_project["root"] / "nope")
