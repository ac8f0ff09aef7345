"""Link registry, inline-tag resolution and type-expression linking."""

from powerdoc.links.inline import InlineTag, replace_inline_tags
from powerdoc.links.registry import (
    CONTAINERS,
    GLOBAL_NAME,
    SCOPE_TO_PUNC,
    LinkRegistry,
    encode_uri,
    htmlsafe,
)
from powerdoc.links.types import is_complex_type_expression, link_type_expression

__all__ = [
    "CONTAINERS",
    "GLOBAL_NAME",
    "SCOPE_TO_PUNC",
    "InlineTag",
    "LinkRegistry",
    "encode_uri",
    "htmlsafe",
    "is_complex_type_expression",
    "link_type_expression",
    "replace_inline_tags",
]
