"""Page templates and the view that renders them."""

from powerdoc.templates.view import DEFAULT_LAYOUT, View

__all__ = [
    "DEFAULT_LAYOUT",
    "View",
]
