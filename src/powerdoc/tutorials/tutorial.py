"""Tutorial tree nodes."""

from __future__ import annotations

from enum import StrEnum

import markdown

# Markdown extensions used for tutorial and README rendering
MARKDOWN_EXTENSIONS = [
    "markdown.extensions.fenced_code",
    "markdown.extensions.tables",
    "markdown.extensions.attr_list",
    "markdown.extensions.def_list",
    "markdown.extensions.footnotes",
]


class TutorialType(StrEnum):
    """How a tutorial's content is turned into HTML."""

    HTML = "html"
    MARKDOWN = "markdown"


def render_markdown(content: str) -> str:
    """Render markdown text to an HTML fragment."""
    return markdown.markdown(content, extensions=MARKDOWN_EXTENSIONS)


class Tutorial:
    """A narrative documentation page.

    Each tutorial has at most one parent, so the tree cannot contain loops.
    """

    def __init__(
        self,
        name: str,
        content: str = "",
        type: TutorialType = TutorialType.HTML,
    ) -> None:
        self.name = name
        self.title = name
        self.content = content
        self.type = type
        self.parent: Tutorial | None = None
        self.children: list[Tutorial] = []

    def __repr__(self) -> str:
        return f"Tutorial(name={self.name!r}, title={self.title!r})"

    def set_parent(self, parent: Tutorial | None) -> None:
        """Move this tutorial under ``parent`` (detaching it from any current parent)."""
        if self.parent is not None:
            self.parent.remove_child(self)

        self.parent = parent
        if parent is not None:
            parent.add_child(self)

    def add_child(self, child: Tutorial) -> None:
        if child not in self.children:
            self.children.append(child)

    def remove_child(self, child: Tutorial) -> None:
        if child in self.children:
            self.children.remove(child)

    def parse(self) -> str:
        """Return the tutorial content as HTML."""
        if self.type == TutorialType.MARKDOWN:
            return render_markdown(self.content)
        return self.content


class TutorialRoot(Tutorial):
    """The invisible root of the tutorial tree, with a name index."""

    def __init__(self) -> None:
        super().__init__("", "", TutorialType.HTML)
        self._by_name: dict[str, Tutorial] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def get_by_name(self, name: str | None) -> Tutorial | None:
        """Look a tutorial up by name anywhere in the tree."""
        if not name:
            return None
        return self._by_name.get(name)

    def add_tutorial(self, tutorial: Tutorial) -> None:
        """Register a tutorial and attach it directly under the root."""
        self._by_name[tutorial.name] = tutorial
        tutorial.set_parent(self)

    def walk(self) -> list[Tutorial]:
        """All tutorials in depth-first order."""
        found: list[Tutorial] = []

        def _visit(node: Tutorial) -> None:
            for child in node.children:
                found.append(child)
                _visit(child)

        _visit(self)
        return found
