"""Unit tests for the tutorial tree and loader."""

from pathlib import Path

import pytest

from powerdoc.tutorials import (
    RECURSE_DEPTH,
    Tutorial,
    TutorialRoot,
    TutorialType,
    load_tutorials,
)


class TestTutorial:
    """Tests for Tutorial and TutorialRoot."""

    def test_defaults(self) -> None:
        """Test that the title defaults to the name."""
        tutorial = Tutorial("intro", "<p>Hello</p>")

        assert tutorial.title == "intro"
        assert tutorial.parent is None
        assert tutorial.children == []
        assert tutorial.parse() == "<p>Hello</p>"

    def test_markdown_parse(self) -> None:
        """Test that markdown tutorials render to HTML."""
        tutorial = Tutorial("intro", "# Title\n\nSome *text*.", TutorialType.MARKDOWN)
        html = tutorial.parse()

        assert "<h1>Title</h1>" in html
        assert "<em>text</em>" in html

    def test_set_parent_moves_child(self) -> None:
        """Test that a tutorial has at most one parent."""
        first = Tutorial("first")
        second = Tutorial("second")
        child = Tutorial("child")

        child.set_parent(first)
        child.set_parent(second)

        assert child.parent is second
        assert first.children == []
        assert second.children == [child]

    def test_root_index(self) -> None:
        """Test looking tutorials up by name anywhere in the tree."""
        root = TutorialRoot()
        parent = Tutorial("parent")
        child = Tutorial("child")
        root.add_tutorial(parent)
        root.add_tutorial(child)
        child.set_parent(parent)

        assert root.get_by_name("child") is child
        assert root.get_by_name("missing") is None
        assert root.get_by_name(None) is None
        assert "parent" in root
        assert root.children == [parent]
        assert root.walk() == [parent, child]


class TestLoadTutorials:
    """Tests for load_tutorials()."""

    def test_no_directory(self) -> None:
        """Test that no directory gives an empty tree."""
        assert load_tutorials(None).children == []

    def test_not_a_directory(self, tmp_path: Path) -> None:
        """Test that a missing directory raises ValueError."""
        with pytest.raises(ValueError, match="not a directory"):
            load_tutorials(tmp_path / "missing")

    def test_file_types(self, tmp_path: Path) -> None:
        """Test that HTML and markdown files become tutorials."""
        (tmp_path / "one.html").write_text("<p>One</p>")
        (tmp_path / "two.md").write_text("# Two")
        (tmp_path / "three.xhtml").write_text("<p>Three</p>")
        (tmp_path / "notes.txt").write_text("ignored")

        root = load_tutorials(tmp_path)

        assert sorted(t.name for t in root.children) == ["one", "three", "two"]
        two = root.get_by_name("two")
        assert two is not None
        assert two.type == TutorialType.MARKDOWN
        assert "<h1>Two</h1>" in two.parse()

    def test_per_tutorial_configuration(self, tmp_path: Path) -> None:
        """Test a JSON file named after a tutorial."""
        (tmp_path / "guide.html").write_text("<p>Guide</p>")
        (tmp_path / "setup.html").write_text("<p>Setup</p>")
        (tmp_path / "guide.json").write_text('{"title": "The Guide", "children": ["setup"]}')

        root = load_tutorials(tmp_path)

        guide = root.get_by_name("guide")
        setup = root.get_by_name("setup")
        assert guide is not None and setup is not None
        assert guide.title == "The Guide"
        assert setup.parent is guide
        assert root.children == [guide]

    def test_hierarchy_map(self, tmp_path: Path) -> None:
        """Test a JSON map with nested children."""
        for name in ("a", "b", "c"):
            (tmp_path / f"{name}.md").write_text(f"# {name}")
        (tmp_path / "tutorials.json").write_text(
            '{"a": {"title": "A", "children": {"b": {"title": "B", "children": ["c"]}}}}'
        )

        root = load_tutorials(tmp_path)

        a, b, c = (root.get_by_name(n) for n in ("a", "b", "c"))
        assert a is not None and b is not None and c is not None
        assert (a.title, b.title, c.title) == ("A", "B", "c")
        assert b.parent is a
        assert c.parent is b
        assert root.children == [a]

    def test_missing_child_and_tutorial(self, tmp_path: Path) -> None:
        """Test that configuration for missing tutorials is skipped."""
        (tmp_path / "a.html").write_text("<p>A</p>")
        (tmp_path / "tutorials.json").write_text(
            '{"a": {"children": ["ghost"]}, "phantom": {"title": "Phantom"}}'
        )

        root = load_tutorials(tmp_path)

        a = root.get_by_name("a")
        assert a is not None
        assert a.children == []
        assert root.get_by_name("phantom") is None

    def test_loops_are_ignored(self, tmp_path: Path) -> None:
        """Test that a parent/child loop is not created."""
        (tmp_path / "a.html").write_text("<p>A</p>")
        (tmp_path / "b.html").write_text("<p>B</p>")
        (tmp_path / "a.json").write_text('{"children": ["b"]}')
        (tmp_path / "b.json").write_text('{"children": ["a"]}')

        root = load_tutorials(tmp_path)

        a, b = root.get_by_name("a"), root.get_by_name("b")
        assert a is not None and b is not None
        assert b.parent is a
        assert a.parent is root
        assert root.children == [a]

    def test_invalid_json(self, tmp_path: Path) -> None:
        """Test that malformed configuration raises ValueError."""
        (tmp_path / "a.html").write_text("<p>A</p>")
        (tmp_path / "a.json").write_text("{not json")

        with pytest.raises(ValueError, match="Invalid tutorial configuration"):
            load_tutorials(tmp_path)

    def test_top_level_only_by_default(self, tmp_path: Path) -> None:
        """Test that subdirectories are only searched when asked to."""
        nested = tmp_path / "deep" / "deeper"
        nested.mkdir(parents=True)
        (tmp_path / "top.html").write_text("<p>Top</p>")
        (nested / "bottom.html").write_text("<p>Bottom</p>")

        root = load_tutorials(tmp_path)
        assert root.get_by_name("top") is not None
        assert root.get_by_name("bottom") is None

        assert load_tutorials(tmp_path, max_depth=2).get_by_name("bottom") is None
        assert load_tutorials(tmp_path, max_depth=RECURSE_DEPTH).get_by_name("bottom") is not None

    def test_hidden_files_skipped(self, tmp_path: Path) -> None:
        """Test that dotfiles and dot-directories are not loaded."""
        (tmp_path / ".draft.md").write_text("# Draft")
        (tmp_path / ".cache").mkdir()
        (tmp_path / ".cache" / "old.html").write_text("<p>Old</p>")
        (tmp_path / "guide.md").write_text("# Guide")

        root = load_tutorials(tmp_path, max_depth=RECURSE_DEPTH)

        assert [t.name for t in root.walk()] == ["guide"]
