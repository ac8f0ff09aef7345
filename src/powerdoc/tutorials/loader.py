"""Load a tutorial tree from a directory of HTML/markdown files."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

import logfire

from powerdoc.core.files import list_files
from powerdoc.tutorials.tutorial import Tutorial, TutorialRoot, TutorialType

# Extensions that can hold tutorials or their configuration
TUTORIAL_FILE = re.compile(r"^(.*)\.(x(?:ht)?ml|html?|md|markdown|json)$", re.IGNORECASE)

_HTML_EXTENSIONS = {"xml", "xhtml", "html", "htm"}
_MARKDOWN_EXTENSIONS = {"md", "markdown"}

# Directory levels searched when recursing into subdirectories
RECURSE_DEPTH = 10


def _normalize_conf(raw: dict[str, Any]) -> dict[str, dict[str, Any]]:
    """Flatten a hierarchy map into ``name -> {title, children: [names]}``.

    Children may be given as a list of names or as a nested map of
    ``name -> config``; nested entries are flattened recursively.
    """
    flat: dict[str, dict[str, Any]] = {}

    for name, item in raw.items():
        item = dict(item or {})
        children = item.get("children")
        if isinstance(children, dict):
            flat.update(_normalize_conf(children))
            item["children"] = list(children)
        flat[name] = item

    return flat


def load_tutorials(
    directory: Path | str | None,
    encoding: str = "utf-8",
    max_depth: int = 1,
) -> TutorialRoot:
    """Build a tutorial tree from a directory.

    HTML files (``.html``, ``.htm``, ``.xml``, ``.xhtml``) are used as is,
    markdown files (``.md``, ``.markdown``) are rendered on demand and JSON
    files configure titles and the parent/child hierarchy. A JSON file named
    after a tutorial configures that tutorial; any other JSON file is a map of
    tutorial name to configuration.

    Args:
        directory: Tutorial directory, or None for an empty tree
        encoding: Encoding used to read the files
        max_depth: Directory levels searched; 1 reads only the files directly
            inside ``directory``. Dotfiles are skipped.

    Returns:
        TutorialRoot holding every tutorial found
    """
    root = TutorialRoot()
    if directory is None:
        return root

    directory = Path(directory)
    if not directory.is_dir():
        raise ValueError(f"Tutorial path is not a directory: {directory}")

    conf: dict[str, Any] = {}

    for path in list_files(directory, max_depth):
        match = TUTORIAL_FILE.match(path.name)
        if not match:
            continue

        name = match.group(1)
        extension = match.group(2).lower()
        content = path.read_text(encoding=encoding)

        if extension == "json":
            try:
                conf[name] = json.loads(content)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid tutorial configuration {path}: {e}") from e
            continue

        if extension in _HTML_EXTENSIONS:
            tutorial_type = TutorialType.HTML
        elif extension in _MARKDOWN_EXTENSIONS:
            tutorial_type = TutorialType.MARKDOWN
        else:
            continue

        root.add_tutorial(Tutorial(name, content, tutorial_type))

    _resolve(root, conf)

    logfire.info(
        "Loaded tutorials",
        path=str(directory),
        tutorials=len(root.walk()),
    )
    return root


def _resolve(root: TutorialRoot, conf: dict[str, Any]) -> None:
    """Apply titles and the parent/child hierarchy from JSON configuration."""
    flat: dict[str, dict[str, Any]] = {}

    for name, item in conf.items():
        if not isinstance(item, dict):
            raise ValueError(f"Tutorial configuration {name}.json must be an object")
        if name in root:
            flat.update(_normalize_conf({name: item}))
        else:
            # Not named after a tutorial: a map of tutorial name -> config
            flat.update(_normalize_conf(item))

    for name, item in flat.items():
        current = root.get_by_name(name)
        if current is None:
            logfire.warn("Found configuration for a missing tutorial", tutorial=name)
            continue

        current.title = item.get("title") or current.title

        for child_name in item.get("children") or []:
            child = root.get_by_name(child_name)
            if child is None:
                logfire.error("Missing child tutorial", tutorial=name, child=child_name)
                continue
            if _is_ancestor(child, current):
                logfire.error("Tutorial hierarchy loop ignored", tutorial=name, child=child_name)
                continue
            child.set_parent(current)


def _is_ancestor(candidate: Tutorial, node: Tutorial) -> bool:
    current: Tutorial | None = node
    while current is not None:
        if current is candidate:
            return True
        current = current.parent
    return False
