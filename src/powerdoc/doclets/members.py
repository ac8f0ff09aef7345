"""Grouping, pruning and annotation helpers over a doclet store."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from powerdoc.doclets.models import Doclet
from powerdoc.doclets.store import DocletStore

GLOBAL_SCOPE = "global"
ACCESS_LEVELS = ("package", "public", "protected")

_QUOTES = re.compile(r'(^"|"$)')


@dataclass
class Members:
    """Doclets grouped by the page or sidebar section they belong to."""

    classes: list[Doclet] = field(default_factory=list)
    externals: list[Doclet] = field(default_factory=list)
    events: list[Doclet] = field(default_factory=list)
    globals: list[Doclet] = field(default_factory=list)
    mixins: list[Doclet] = field(default_factory=list)
    modules: list[Doclet] = field(default_factory=list)
    namespaces: list[Doclet] = field(default_factory=list)
    interfaces: list[Doclet] = field(default_factory=list)
    tutorials: list[Any] = field(default_factory=list)


def is_module_exports(doclet: Doclet) -> bool:
    """Whether a doclet is the value assigned to a module's exports."""
    return bool(
        doclet.longname
        and doclet.longname == doclet.name
        and doclet.longname.startswith("module:")
        and doclet.kind != "module"
    )


def get_members(store: DocletStore) -> Members:
    """Group doclets by kind for page and sidebar generation."""
    members = Members(
        classes=store.find({"kind": "class"}),
        externals=store.find({"kind": "external"}),
        events=store.find({"kind": "event"}),
        globals=store.find(
            {
                "kind": ["member", "function", "constant", "typedef"],
                "memberof": {"isUndefined": True},
            }
        ),
        mixins=store.find({"kind": "mixin"}),
        modules=store.find({"kind": "module"}),
        namespaces=store.find({"kind": "namespace"}),
        interfaces=store.find({"kind": "interface"}),
    )

    # Quoted external names (``@external "jquery.fn"``) are displayed without quotes
    for doclet in members.externals:
        doclet.name = _QUOTES.sub("", doclet.name or "")

    # module.exports = function () {} is not a global
    members.globals = [d for d in members.globals if not is_module_exports(d)]

    return members


def prune(
    store: DocletStore,
    private: bool = False,
    access: Iterable[str] | None = None,
) -> DocletStore:
    """Drop doclets that should not be documented.

    Args:
        store: Store to prune in place
        private: Keep private doclets
        access: Access levels to keep (``all`` keeps everything)

    Returns:
        The same store, for chaining
    """
    store.remove({"undocumented": True})
    store.remove({"ignore": True})
    store.remove({"memberof": "<anonymous>"})

    levels = list(access) if access is not None else None

    if levels is None or "all" not in levels:
        if levels is not None:
            for level in ACCESS_LEVELS:
                if level not in levels:
                    store.remove({"access": level})

        if not private and (levels is None or "private" not in levels):
            store.remove({"access": "private"})

        if levels is not None and "undefined" not in levels:
            store.remove({"access": {"isUndefined": True}})

    return store


def add_event_listeners(store: DocletStore) -> None:
    """Record on each event doclet which doclets listen to it."""
    events: dict[str, Doclet] = {}

    for listener in store.find(lambda d: bool(d.listens)):
        for event_longname in listener.listens or []:
            event = events.get(event_longname) or store.first(
                {"longname": event_longname, "kind": "event"}
            )
            if event is None:
                continue
            listeners = event.get("listeners")
            if listeners is None:
                event.listeners = [listener.longname]
            else:
                listeners.append(listener.longname)
            events.setdefault(event_longname, event)


def get_attribs(doclet: Doclet | Any) -> list[str]:
    """Attribute keywords shown next to a doclet's name."""
    attribs: list[str] = []

    if doclet is None:
        return attribs

    def _get(key: str) -> Any:
        if hasattr(doclet, "get"):
            return doclet.get(key)
        return getattr(doclet, key, None)

    kind = _get("kind")
    scope = _get("scope")
    access = _get("access")

    if _get("async"):
        attribs.append("async")
    if _get("generator"):
        attribs.append("generator")
    if _get("virtual"):
        attribs.append("abstract")
    if access and access != "public":
        attribs.append(access)
    if scope and scope not in ("instance", GLOBAL_SCOPE):
        if kind in ("function", "member", "constant"):
            attribs.append(scope)
    if _get("readonly") is True and kind == "member":
        attribs.append("readonly")
    if kind == "constant":
        attribs.append("constant")

    nullable = _get("nullable")
    if nullable is True:
        attribs.append("nullable")
    elif nullable is False:
        attribs.append("non-null")

    return attribs


def get_ancestors(store: DocletStore, doclet: Doclet) -> list[Doclet]:
    """The chain of ``memberof`` parents of a doclet, outermost first."""
    ancestors: list[Doclet] = []
    current: Doclet | None = doclet

    while current is not None and current.memberof is not None:
        previous = current
        current = store.first({"longname": current.memberof})
        # Duplicated module definitions can point a doclet at itself
        if (
            current is None
            or current is previous
            or current is doclet
            or any(current is a for a in ancestors)
        ):
            break
        ancestors.insert(0, current)

    return ancestors
