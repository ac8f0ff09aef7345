"""Tutorial tree and loader."""

from powerdoc.tutorials.loader import RECURSE_DEPTH, load_tutorials
from powerdoc.tutorials.tutorial import (
    Tutorial,
    TutorialRoot,
    TutorialType,
    render_markdown,
)

__all__ = [
    "RECURSE_DEPTH",
    "Tutorial",
    "TutorialRoot",
    "TutorialType",
    "load_tutorials",
    "render_markdown",
]
