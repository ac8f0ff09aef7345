"""Queryable in-memory doclet collection."""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable, Iterator, Mapping
from pathlib import Path
from typing import Any

import logfire

from powerdoc.doclets.models import Doclet

# A query is either a key -> matcher mapping or a predicate
QuerySpec = Mapping[str, Any] | Callable[[Doclet], bool]


def _matches_value(actual: Any, expected: Any) -> bool:
    """Check a single doclet value against one matcher.

    Matchers:
    - list/tuple: any of the listed values
    - {"left": prefix}: string starting with prefix
    - {"isUndefined": bool}: value missing (or present)
    - anything else: equality
    """
    if isinstance(expected, (list, tuple)):
        return any(_matches_value(actual, option) for option in expected)

    if isinstance(expected, Mapping):
        if "isUndefined" in expected:
            return (actual is None) == bool(expected["isUndefined"])
        if "left" in expected:
            return isinstance(actual, str) and actual.startswith(expected["left"])
        return actual == expected

    return actual == expected


def matches(doclet: Doclet, spec: QuerySpec) -> bool:
    """Check whether a doclet satisfies every key of a query spec."""
    if callable(spec):
        return bool(spec(doclet))
    return all(_matches_value(getattr(doclet, key, None), value) for key, value in spec.items())


def _sort_key(value: Any) -> tuple[int, Any]:
    # Missing values first, then everything else compared as strings
    if value is None:
        return (0, "")
    return (1, str(value))


class DocletStore:
    """An ordered doclet collection with a small query language.

    Queries mirror the host tool's database: ``{"kind": "class"}``,
    ``{"kind": ["member", "constant"]}``, ``{"longname": {"left": "module:"}}``
    or ``{"memberof": {"isUndefined": True}}``. Keys are AND-ed.
    """

    def __init__(self, doclets: Iterable[Doclet | Mapping[str, Any]] = ()) -> None:
        self._doclets: list[Doclet] = [
            d if isinstance(d, Doclet) else Doclet.model_validate(d) for d in doclets
        ]

    def __iter__(self) -> Iterator[Doclet]:
        return iter(list(self._doclets))

    def __len__(self) -> int:
        return len(self._doclets)

    def find(self, spec: QuerySpec | None = None) -> list[Doclet]:
        """Return doclets matching ``spec`` in store order (all when spec is None)."""
        if spec is None:
            return list(self._doclets)
        return [d for d in self._doclets if matches(d, spec)]

    def first(self, spec: QuerySpec) -> Doclet | None:
        """Return the first doclet matching ``spec``, or None."""
        for doclet in self._doclets:
            if matches(doclet, spec):
                return doclet
        return None

    def remove(self, spec: QuerySpec) -> int:
        """Remove matching doclets.

        Returns:
            Number of doclets removed
        """
        before = len(self._doclets)
        self._doclets = [d for d in self._doclets if not matches(d, spec)]
        return before - len(self._doclets)

    def sort(self, keys: str | Iterable[str]) -> None:
        """Sort in place by a comma separated key list (stable, missing values first)."""
        if isinstance(keys, str):
            keys = [k.strip() for k in keys.split(",") if k.strip()]
        key_list = list(keys)
        self._doclets.sort(key=lambda d: tuple(_sort_key(getattr(d, k, None)) for k in key_list))

    def each(self, callback: Callable[[Doclet], Any]) -> None:
        """Call ``callback`` for every doclet, in order."""
        for doclet in list(self._doclets):
            callback(doclet)

    def add(self, doclet: Doclet | Mapping[str, Any]) -> Doclet:
        """Append a doclet and return it."""
        if not isinstance(doclet, Doclet):
            doclet = Doclet.model_validate(doclet)
        self._doclets.append(doclet)
        return doclet

    @classmethod
    def from_json(cls, content: str) -> DocletStore:
        """Build a store from a JSON array of doclet objects.

        Raises:
            ValueError: If the payload is not valid JSON or not an array.
        """
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid doclet JSON: {e}") from e

        if not isinstance(data, list):
            raise ValueError("Doclet JSON must be an array of doclet objects")

        return cls(data)


def load_doclets(path: Path | str, encoding: str = "utf-8") -> DocletStore:
    """Load doclets from a JSON dump on disk.

    Args:
        path: Path to the JSON file produced by the parser
        encoding: File encoding

    Returns:
        DocletStore with every doclet from the file
    """
    path = Path(path)
    store = DocletStore.from_json(path.read_text(encoding=encoding))
    logfire.info("Loaded doclets", path=str(path), doclets=len(store))
    return store
