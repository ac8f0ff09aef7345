"""Linking inside complex type expressions (unions, applications, records)."""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping

_RECORD = re.compile(r"^\{.+\}$", re.DOTALL)
_UNION = re.compile(r"^.+\|.+$", re.DOTALL)
_APPLICATION = re.compile(r"^.+<.+>$", re.DOTALL)

# A type name, optionally namespaced (module:foo/bar~Baz, external:jQuery)
_TYPE_NAME = re.compile(r"(?:module:|external:|event:)?[A-Za-z_$][\w$~#/.-]*")


def is_complex_type_expression(expr: str) -> bool:
    """Record types, type unions and type applications count as complex."""
    return bool(_RECORD.match(expr) or _UNION.match(expr) or _APPLICATION.match(expr))


def link_type_expression(
    expr: str,
    link_map: Mapping[str, str],
    htmlsafe: Callable[[str], str],
    encode: Callable[[str], str],
    css_class: str | None = None,
) -> str:
    """Render a type expression as HTML, linking every known type name.

    Args:
        expr: Type expression such as ``Array.<Foo>`` or ``(Foo|Bar)``
        link_map: Longname -> URL
        htmlsafe: Escaping function for literal text
        encode: URL encoding function
        css_class: Optional class attribute for the links

    Returns:
        HTML for the expression
    """
    class_string = f' class="{css_class}"' if css_class else ""
    parts: list[str] = []
    pos = 0

    for match in _TYPE_NAME.finditer(expr):
        parts.append(htmlsafe(expr[pos : match.start()]))

        name = match.group(0)
        stripped = name.rstrip(".")
        trailing = name[len(stripped) :]

        url = link_map.get(stripped)
        text = htmlsafe(stripped)
        if url:
            parts.append(f'<a href="{encode(url)}"{class_string}>{text}</a>')
        else:
            parts.append(text)
        parts.append(trailing)
        pos = match.end()

    parts.append(htmlsafe(expr[pos:]))
    return "".join(parts)
