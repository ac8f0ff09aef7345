"""Jinja2 view used to render pages from a template directory."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, Undefined

DEFAULT_LAYOUT = "layout.html.j2"


class View:
    """Renders the templates in ``<template>/tmpl`` and wraps them in a layout.

    Helpers the templates call (``find``, ``linkto``, ``htmlsafe`` ...) and
    values computed once per run (``nav``, ``output_source_files``) are set as
    attributes before rendering and exposed to every template.
    """

    def __init__(self, template_dir: Path | str, strict: bool = False) -> None:
        """Initialize the view.

        Args:
            template_dir: Directory holding the ``.html.j2`` templates
            strict: Fail on undefined template variables instead of rendering them empty

        Raises:
            ValueError: If the template directory does not exist
        """
        template_dir = Path(template_dir)
        if not template_dir.is_dir():
            raise ValueError(f"Template directory does not exist: {template_dir}")

        self.path = template_dir
        self.layout: str | None = DEFAULT_LAYOUT
        self._layout_template: Template | None = None

        self._env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            autoescape=False,  # Pages are assembled from pre-escaped HTML fragments
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined if strict else Undefined,
        )

        # Helpers, set by the publisher
        self.find: Callable[..., Any] | None = None
        self.linkto: Callable[..., str] | None = None
        self.resolve_author_links: Callable[[str | None], str] | None = None
        self.tutoriallink: Callable[[str | None], str] | None = None
        self.htmlsafe: Callable[[object], str] | None = None
        self.output_source_files: bool = True
        self.nav: str = ""

    def set_layout_file(self, layout_file: Path | str | None) -> None:
        """Use a layout that may live outside the template directory.

        Args:
            layout_file: Path to a Jinja2 layout, or None for the bundled layout
        """
        if layout_file is None:
            self.layout = DEFAULT_LAYOUT
            self._layout_template = None
            return

        layout_path = Path(layout_file)
        self.layout = str(layout_path)
        self._layout_template = self._env.from_string(layout_path.read_text(encoding="utf-8"))

    def _helpers(self) -> dict[str, Any]:
        return {
            "find": self.find,
            "linkto": self.linkto,
            "resolve_author_links": self.resolve_author_links,
            "tutoriallink": self.tutoriallink,
            "htmlsafe": self.htmlsafe,
            "output_source_files": self.output_source_files,
            "nav": self.nav,
        }

    def _context(self, data: Mapping[str, Any] | None) -> dict[str, Any]:
        context = self._helpers()
        context.update(data or {})
        return context

    def partial(self, template_name: str, data: Mapping[str, Any] | None = None) -> str:
        """Render a template without the layout."""
        template = self._env.get_template(template_name)
        return template.render(self._context(data))

    def render(self, template_name: str, data: Mapping[str, Any] | None = None) -> str:
        """Render a template and wrap it in the layout.

        Args:
            template_name: Name of the template file (e.g., "container.html.j2")
            data: Variables to pass to the template

        Returns:
            Rendered page

        Raises:
            jinja2.TemplateNotFound: If the template (or bundled layout) doesn't exist
        """
        content = self.partial(template_name, data)

        if self._layout_template is not None:
            layout = self._layout_template
        elif self.layout:
            layout = self._env.get_template(self.layout)
        else:
            return content

        context = self._context(data)
        context["content"] = content
        return layout.render(context)

    def list_templates(self) -> list[str]:
        """List all available templates."""
        return self._env.list_templates(extensions=["j2"])
