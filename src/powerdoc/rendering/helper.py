"""Signature strings, attribute strings and link helpers used by the pages."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from pathlib import Path

from powerdoc.doclets.members import get_attribs
from powerdoc.doclets.models import Doclet, DocletParam
from powerdoc.doclets.store import DocletStore
from powerdoc.links.registry import LinkRegistry, htmlsafe
from powerdoc.rendering.paths import SourceFile

_QUOTES = re.compile(r'(^"|"$)')
_HASH = re.compile(r"^(#.+)")
_FRAGMENT_OR_END = re.compile(r"(#.+|$)")


class PowerTemplateHelper:
    """Formatting helpers bound to one publish run's link registry.

    Signature helpers annotate doclets in place: ``signature`` accumulates
    the call signature, return types and member types, ``attribs`` holds the
    attribute keywords shown before a name.
    """

    def __init__(self, links: LinkRegistry) -> None:
        self.links = links

    # Attributes

    @staticmethod
    def build_attribs_string(attribs: Iterable[str] | None) -> str:
        """``["static", "readonly"]`` -> ``"(static, readonly) "`` (escaped)."""
        attribs = list(attribs or [])
        if not attribs:
            return ""
        return htmlsafe(f"({', '.join(attribs)}) ")

    def add_attribs(self, doclet: Doclet) -> None:
        attribs_string = self.build_attribs_string(get_attribs(doclet))
        doclet.attribs = f'<span class="type-signature">{attribs_string}</span>'

    @staticmethod
    def get_signature_attributes(item: DocletParam) -> list[str]:
        """Attribute labels for a single parameter."""
        attributes: list[str] = []

        if item.optional:
            attributes.append("opt")

        if item.nullable is True:
            attributes.append("nullable")
        elif item.nullable is False:
            attributes.append("non-null")

        return attributes

    def update_item_name(self, item: DocletParam) -> str:
        """Parameter name as displayed in a signature."""
        attributes = self.get_signature_attributes(item)
        item_name = item.name or ""

        if item.variable:
            item_name = "&hellip;" + item_name

        if attributes:
            item_name = (
                f'{item_name}<span class="signature-attributes">{", ".join(attributes)}</span>'
            )

        return item_name

    def add_param_attributes(self, params: Iterable[DocletParam]) -> list[str]:
        """Display names of the top-level parameters (``options.foo`` is skipped)."""
        return [
            self.update_item_name(param) for param in params if param.name and "." not in param.name
        ]

    # Types

    def build_item_type_strings(self, item: Doclet | DocletParam | None) -> list[str]:
        """One link (or escaped name) per type name of ``item``."""
        if item is None or item.type is None or not item.type.names:
            return []
        return [self.links.linkto(name, htmlsafe(name)) for name in item.type.names]

    def add_non_param_attributes(self, items: Iterable[DocletParam] | None) -> list[str]:
        types: list[str] = []
        for item in items or []:
            types.extend(self.build_item_type_strings(item))
        return types

    # Signatures

    def add_signature_params(self, doclet: Doclet) -> None:
        params = self.add_param_attributes(doclet.params) if doclet.params else []
        doclet.signature = f"{doclet.get('signature', '')}({', '.join(params)})"

    def add_signature_returns(self, doclet: Doclet) -> None:
        attribs: list[str] = []
        attribs_string = ""
        return_types: list[str] = []
        return_types_string = ""

        # All return-type attributes go into one list. Mixing nullable and
        # non-null returns gives odd output, which is accepted.
        if doclet.returns:
            for item in doclet.returns:
                for attrib in get_attribs(item):
                    if attrib not in attribs:
                        attribs.append(attrib)
            attribs_string = self.build_attribs_string(attribs)
            return_types = self.add_non_param_attributes(doclet.returns)

        if return_types:
            return_types_string = f" &rarr; {attribs_string}{{{'|'.join(return_types)}}}"

        doclet.signature = (
            f'<span class="signature">{doclet.get("signature", "")}</span>'
            f'<span class="type-signature">{return_types_string}</span>'
        )

    def add_signature_types(self, doclet: Doclet) -> None:
        types = self.build_item_type_strings(doclet) if doclet.type else []
        type_string = f" :{'|'.join(types)}" if types else ""

        doclet.signature = (
            f'{doclet.get("signature", "")}<span class="type-signature">{type_string}</span>'
        )

    @staticmethod
    def needs_signature(doclet: Doclet) -> bool:
        """Functions, classes and typedefs of a function type get a signature."""
        if doclet.kind in ("function", "class"):
            return True

        if doclet.kind == "typedef" and doclet.type and doclet.type.names:
            return any(name.lower() == "function" for name in doclet.type.names)

        return False

    # Links

    def linkto(self, longname: str | None, name: str | None = None) -> str:
        return self.links.linkto(longname, name)

    def linkto_external(self, longname: str | None, name: str | None) -> str:
        """Link to an external; quotes around its name are dropped."""
        return self.links.linkto(longname, _QUOTES.sub("", name or ""))

    def linkto_tutorial(self, longname: str | None, name: str | None) -> str:
        return self.tutoriallink(name)

    def tutoriallink(self, tutorial: str | None) -> str:
        """Link to a tutorial; a missing one renders as disabled text."""
        return (
            self.links.to_tutorial(
                tutorial,
                None,
                missing_tag="em",
                missing_classname="disabled",
                missing_prefix="Tutorial: ",
            )
            or ""
        )

    def hash_to_link(self, doclet: Doclet, see_item: str) -> str:
        """Turn a ``#fragment`` reference into a link inside the doclet's own page."""
        if not _HASH.match(see_item):
            return see_item

        url = self.links.create_link(doclet)
        url = _FRAGMENT_OR_END.sub(lambda _m: see_item, url, count=1)
        return f'<a href="{url}">{see_item}</a>'

    def get_ancestor_links(self, store: DocletStore, doclet: Doclet) -> list[str]:
        return self.links.get_ancestor_links(store, doclet)

    # Paths

    @staticmethod
    def get_path_from_doclet(doclet: Doclet) -> str | None:
        """Full path of the file a doclet came from, or None without metadata."""
        meta = doclet.meta
        if meta is None:
            return None

        if meta.path and meta.path != "null":
            return str(Path(meta.path) / (meta.filename or ""))

        return meta.filename

    @staticmethod
    def shorten_paths(
        files: Mapping[str, SourceFile],
        common_prefix: str,
    ) -> Mapping[str, SourceFile]:
        """Strip ``common_prefix`` from every resolved path; always forward slashes."""
        for source in files.values():
            source.shortened = source.resolved.replace(common_prefix, "", 1).replace("\\", "/")
        return files
