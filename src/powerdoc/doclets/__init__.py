"""Doclet records, the doclet store and helpers over it."""

from powerdoc.doclets.members import (
    Members,
    add_event_listeners,
    get_ancestors,
    get_attribs,
    get_members,
    is_module_exports,
    prune,
)
from powerdoc.doclets.models import Doclet, DocletMeta, DocletParam, TypeExpression
from powerdoc.doclets.store import DocletStore, load_doclets

__all__ = [
    "Doclet",
    "DocletMeta",
    "DocletParam",
    "DocletStore",
    "Members",
    "TypeExpression",
    "add_event_listeners",
    "get_ancestors",
    "get_attribs",
    "get_members",
    "is_module_exports",
    "load_doclets",
    "prune",
]
