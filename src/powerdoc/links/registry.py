"""Output filenames, link registration and link rendering."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING
from urllib.parse import quote

import logfire

from powerdoc.config.conf import TemplatesConfig
from powerdoc.doclets.members import get_ancestors, is_module_exports
from powerdoc.doclets.models import Doclet
from powerdoc.links.inline import InlineTag, replace_inline_tags
from powerdoc.links.types import is_complex_type_expression, link_type_expression

if TYPE_CHECKING:
    from powerdoc.doclets.store import DocletStore
    from powerdoc.tutorials.tutorial import TutorialRoot

GLOBAL_NAME = "global"
FILE_EXTENSION = ".html"

# Kinds whose longname implies a namespace prefix ("module:foo")
NAMESPACES = ("module", "external", "event")

# Kinds that get their own page
CONTAINERS = ("class", "module", "external", "namespace", "mixin", "interface")

SCOPE_TO_PUNC = {"inner": "~", "instance": "#", "static": "."}

_NAMESPACE_PREFIX = re.compile(rf"^({'|'.join(NAMESPACES)}):")
_UNSAFE_CHARS = re.compile(r"[\\/?*:|'\"<>]")
_VARIATION = re.compile(r"\([\s\S]*\)$")
_LEADING_DOT_OR_DASH = re.compile(r"^[.-]")
_URL_PREFIX = re.compile(r"^(http|ftp)s?://")
_ANGLE_BRACKETS = re.compile(r"^<|>$")
_CONTAINER_PREFIX = re.compile(r"(\S+):")
_AUTHOR = re.compile(r"^\s?([\s\S]+)\b\s+<(\S+@\S+)>\s?$")
_LEADING_TEXT = re.compile(r"\[(.+?)\]")
_SHORT_NAME = re.compile(r"[#.~]")

# Characters encodeURI leaves alone; "%" is kept so encoded URLs are not encoded twice
_URI_SAFE = ";,/?:@&=+$!*'()#%"


def htmlsafe(text: object) -> str:
    """Escape ``&`` and ``<`` for safe inclusion in HTML."""
    if not isinstance(text, str):
        text = str(text)
    return text.replace("&", "&amp;").replace("<", "&lt;")


def encode_uri(url: str) -> str:
    """Percent-encode a URL the way a browser's ``encodeURI`` does."""
    return quote(url, safe=_URI_SAFE)


def has_url_prefix(text: str) -> bool:
    return bool(_URL_PREFIX.match(text))


def fragment_hash(fragment_id: str | None) -> str:
    return f"#{fragment_id}" if fragment_id else ""


def get_short_name(longname: str) -> str:
    """The last segment of a longname (``module:foo~Bar#baz`` -> ``baz``)."""
    name = _NAMESPACE_PREFIX.sub("", longname)
    return _SHORT_NAME.split(name)[-1] or name


def get_namespace(kind: str | None) -> str:
    return f"{kind}:" if kind in NAMESPACES else ""


def format_name_for_link(doclet: Doclet) -> str:
    """Fragment text for a doclet that lives inside another page."""
    new_name = get_namespace(doclet.kind) + (doclet.name or "") + (doclet.variation or "")
    scope_punc = SCOPE_TO_PUNC.get(doclet.scope or "", "")

    # "#" already starts the fragment
    if scope_punc != "#":
        new_name = scope_punc + new_name

    return new_name


class LinkRegistry:
    """Maps longnames to output files and renders links between pages.

    One registry lives for one publish run: it hands out collision-free
    filenames and fragment ids, remembers where each longname was written,
    and resolves ``{@link}``/``{@tutorial}`` inline tags against that map.
    """

    def __init__(self, templates_conf: TemplatesConfig | None = None) -> None:
        """Initialize an empty registry.

        Args:
            templates_conf: ``templates`` configuration section (link style switches)
        """
        self.conf = templates_conf or TemplatesConfig()
        self.longname_to_url: dict[str, str] = {}
        self.longname_to_id: dict[str, str] = {}
        self.tutorials: TutorialRoot | None = None

        self._files: dict[str, str] = {}
        self._ids: dict[str, dict[str, str]] = {}
        self._tutorial_name_to_url: dict[str, str] = {}

    # Filenames and ids

    def _make_unique_filename(self, filename: str, original: str) -> str:
        # Filenames may not start with an underscore
        if not filename or filename[0] == "_":
            filename = f"-{filename}"

        while filename.lower() in self._files:
            filename += "_"

        self._files[filename.lower()] = original
        return filename

    def get_unique_filename(self, name: str | None) -> str:
        """Convert a longname into a unique, filesystem-safe ``.html`` filename.

        Args:
            name: Longname (or any string) the file is for

        Returns:
            Filename not handed out before in this run (case-insensitively)
        """
        basename = _NAMESPACE_PREFIX.sub(r"\1-", name or "")
        basename = _UNSAFE_CHARS.sub("_", basename)
        basename = basename.replace("~", "-").replace("#", "_").replace("/", "_")
        basename = _VARIATION.sub("", basename)
        basename = _LEADING_DOT_OR_DASH.sub("", basename)

        # Everything may have been stripped
        basename = basename or "_"
        return self._make_unique_filename(basename, name or "") + FILE_EXTENSION

    def _make_unique_id(self, filename: str, fragment: str) -> str:
        # HTML5 ids cannot contain whitespace
        fragment = re.sub(r"\s", "", fragment)
        ids = self._ids.setdefault(filename, {})

        while fragment.lower() in ids:
            fragment += "_"

        ids[fragment.lower()] = fragment
        return fragment

    def register_link(self, longname: str, file_url: str) -> None:
        """Remember that ``longname`` is documented at ``file_url``."""
        self.longname_to_url[longname] = file_url

    def register_id(self, longname: str, fragment: str) -> None:
        self.longname_to_id[longname] = fragment

    def _get_filename(self, longname: str) -> str:
        if longname in self.longname_to_url:
            return self.longname_to_url[longname]

        file_url = self.get_unique_filename(longname)
        self.register_link(longname, file_url)
        return file_url

    def _get_id(self, longname: str, fragment: str) -> str:
        if longname in self.longname_to_id:
            return self.longname_to_id[longname]
        if not fragment:
            return ""

        fragment = self._make_unique_id(longname, fragment)
        self.register_id(longname, fragment)
        return fragment

    def create_link(self, doclet: Doclet) -> str:
        """Work out the URL a doclet is documented at, registering its page if new.

        Container kinds and module exports get a page of their own; every
        other doclet becomes a fragment in its parent's page (or the global
        page).
        """
        longname = doclet.longname or ""
        fragment = ""
        fake_container: str | None = None

        # Mistagged doclets, e.g. a module whose kind ended up as "member"
        if doclet.kind not in CONTAINERS:
            match = _CONTAINER_PREFIX.search(longname)
            if match and match.group(1) in CONTAINERS:
                fake_container = match.group(1)

        if doclet.kind in CONTAINERS or is_module_exports(doclet):
            filename = self._get_filename(longname)
        elif fake_container:
            filename = self._get_filename(doclet.memberof or longname)
            if doclet.name != doclet.longname:
                fragment = self._get_id(longname, format_name_for_link(doclet))
        else:
            filename = self._get_filename(doclet.memberof or GLOBAL_NAME)
            if doclet.name != doclet.longname or doclet.scope == GLOBAL_NAME:
                fragment = self._get_id(longname, format_name_for_link(doclet))

        return encode_uri(filename + fragment_hash(fragment))

    # Links

    def _build_link(
        self,
        longname: str | None,
        link_text: str | None,
        css_class: str | None = None,
        fragment_id: str | None = None,
        monospace: bool = False,
        shorten_name: bool = False,
    ) -> str:
        class_string = f' class="{css_class}"' if css_class else ""

        # @see <http://example.org> and @see http://example.org
        stripped = _ANGLE_BRACKETS.sub("", longname) if longname else ""

        if has_url_prefix(stripped):
            file_url = stripped
            text = link_text or stripped
        elif (
            longname
            and is_complex_type_expression(longname)
            and not re.search(r"\{@.+\}", longname)
            and not re.match(r"^<[\s\S]+>", longname)
        ):
            return link_type_expression(
                longname,
                self.longname_to_url,
                htmlsafe=htmlsafe,
                encode=encode_uri,
                css_class=css_class,
            )
        else:
            file_url = self.longname_to_url.get(longname or "", "")
            if link_text:
                text = link_text
            elif shorten_name and longname:
                text = get_short_name(longname)
            else:
                text = longname or ""

        if monospace:
            text = f"<code>{text}</code>"

        if not file_url:
            return text

        return f'<a href="{encode_uri(file_url + fragment_hash(fragment_id))}"{class_string}>{text}</a>'

    def linkto(
        self,
        longname: str | None,
        link_text: str | None = None,
        css_class: str | None = None,
        fragment_id: str | None = None,
    ) -> str:
        """Link to the page documenting ``longname``; plain text when unknown."""
        return self._build_link(longname, link_text, css_class=css_class, fragment_id=fragment_id)

    def _use_monospace(self, tag: str, text: str) -> bool:
        if has_url_prefix(text):
            return False
        if tag == "linkplain":
            return False
        if tag == "linkcode":
            return True
        return self.conf.monospace_links or self.conf.clever_links

    # Tutorials

    def set_tutorials(self, root: TutorialRoot | None) -> None:
        self.tutorials = root

    def tutorial_to_url(self, name: str) -> str | None:
        """URL of a tutorial page, or None (logged) when there is no such tutorial."""
        node = self.tutorials.get_by_name(name) if self.tutorials is not None else None
        if node is None:
            logfire.error("No such tutorial", tutorial=name)
            return None

        if node.name not in self._tutorial_name_to_url:
            file_url = f"tutorial-{self.get_unique_filename(node.name)}"
            self._tutorial_name_to_url[node.name] = file_url

        return self._tutorial_name_to_url[node.name]

    def to_tutorial(
        self,
        name: str | None,
        content: str | None = None,
        missing_tag: str | None = None,
        missing_classname: str | None = None,
        missing_prefix: str | None = None,
    ) -> str | None:
        """Link to a tutorial.

        Args:
            name: Tutorial name
            content: Link text (defaults to the tutorial title)
            missing_tag: Tag wrapping the text when the tutorial does not exist
            missing_classname: Class for ``missing_tag``
            missing_prefix: Prefix for the text when the tutorial does not exist

        Returns:
            Link HTML, fallback text for a missing tutorial, or None without a name
        """
        if not name:
            logfire.error("Missing required parameter: tutorial")
            return None

        node = self.tutorials.get_by_name(name) if self.tutorials is not None else None
        if node is None:
            link = name
            if missing_prefix:
                link = missing_prefix + link
            if missing_tag:
                class_attr = f' class="{missing_classname}"' if missing_classname else ""
                link = f"<{missing_tag}{class_attr}>{link}</{missing_tag}>"
            return link

        return f'<a href="{self.tutorial_to_url(name)}">{content or node.title}</a>'

    # Inline tags

    @staticmethod
    def _extract_leading_text(string: str, complete_tag: str) -> tuple[str | None, str]:
        """Find ``[text]`` immediately before the tag, and drop it from the string."""
        tag_index = string.find(complete_tag)

        for match in _LEADING_TEXT.finditer(string):
            if match.end() == tag_index:
                return match.group(1), string.replace(match.group(0), "", 1)

        return None, string

    @staticmethod
    def _split_link_text(text: str) -> tuple[str | None, str]:
        """Split ``target|text`` or ``target text`` into (link text, target)."""
        split_index = text.find("|")
        if split_index == -1:
            match = re.search(r"\s", text)
            split_index = match.start() if match else -1

        if split_index == -1:
            return None, text

        link_text = re.sub(r"\n+", " ", text[split_index + 1 :], count=1)
        target = text[:split_index]
        return link_text, target or text

    def _process_link(self, string: str, tag: InlineTag) -> str:
        leading_text, string = self._extract_leading_text(string, tag.complete_tag)
        split_text, target = self._split_link_text(tag.text)

        link = self._build_link(
            target,
            leading_text or split_text,
            monospace=self._use_monospace(tag.tag, tag.text),
            shorten_name=self.conf.use_short_names_in_links,
        )
        return string.replace(tag.complete_tag, link, 1)

    def _process_tutorial(self, string: str, tag: InlineTag) -> str:
        leading_text, string = self._extract_leading_text(string, tag.complete_tag)
        link = self.to_tutorial(tag.text, leading_text) or ""
        return string.replace(tag.complete_tag, link, 1)

    def resolve_links(self, html: str) -> str:
        """Turn ``{@link foo}`` into ``<a href="foo.html">foo</a>`` (and friends)."""
        return replace_inline_tags(
            html,
            {
                "link": self._process_link,
                "linkcode": self._process_link,
                "linkplain": self._process_link,
                "tutorial": self._process_tutorial,
            },
        )

    def resolve_author_links(self, author: str | None) -> str:
        """Render ``Name <mail@host>`` as a mailto link; anything else escaped."""
        if not author:
            return ""

        match = _AUTHOR.match(author)
        if match:
            return f'<a href="mailto:{match.group(2)}">{htmlsafe(match.group(1))}</a>'
        return htmlsafe(author)

    def get_ancestor_links(
        self,
        store: DocletStore,
        doclet: Doclet,
        css_class: str | None = None,
    ) -> list[str]:
        """Links to each ancestor, the last one followed by the doclet's scope punctuation."""
        links = [
            self.linkto(
                ancestor.longname,
                SCOPE_TO_PUNC.get(ancestor.scope or "", "") + (ancestor.name or ""),
                css_class,
            )
            for ancestor in get_ancestors(store, doclet)
        ]

        if links:
            links[-1] += SCOPE_TO_PUNC.get(doclet.scope or "", "")

        return links
