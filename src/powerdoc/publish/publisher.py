"""The publish entry point: turns a doclet store into a documentation site."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import logfire

from powerdoc.config.conf import PublishConf, PublishOptions
from powerdoc.config.power_mode import load_from_conf
from powerdoc.doclets.members import add_event_listeners, get_members, prune
from powerdoc.doclets.models import Doclet
from powerdoc.doclets.store import DocletStore
from powerdoc.links.registry import GLOBAL_NAME, LinkRegistry, htmlsafe
from powerdoc.publish.navigation import NavBuilder
from powerdoc.publish.pages import PageWriter
from powerdoc.publish.static import (
    copy_template_static,
    copy_user_static,
    write_pygments_stylesheet,
)
from powerdoc.rendering.helper import PowerTemplateHelper
from powerdoc.rendering.paths import SourceFile, common_prefix
from powerdoc.templates.view import View
from powerdoc.tutorials.tutorial import TutorialRoot

EXAMPLE_CAPTION = re.compile(
    r"^\s*<caption>([\s\S]+?)</caption>(\s*[\n\r])([\s\S]+)$",
    re.IGNORECASE,
)

SORT_KEYS = "longname, version, since"
DEFAULT_MAINPAGE_TITLE = "Main Page"

# Page types, in the order their pages are generated for each longname
CONTAINER_PAGES = (
    ("modules", "Module"),
    ("classes", "Class"),
    ("namespaces", "Namespace"),
    ("mixins", "Mixin"),
    ("externals", "External"),
    ("interfaces", "Interface"),
)


@dataclass
class PublishResult:
    """What a publish run produced."""

    outdir: Path
    files: list[Path] = field(default_factory=list)


def split_example(example: Any) -> dict[str, str]:
    """Split an ``@example`` into its ``<caption>`` and code."""
    if isinstance(example, Mapping):
        return {"caption": example.get("caption") or "", "code": example.get("code") or ""}

    example = str(example)
    match = EXAMPLE_CAPTION.match(example)
    if match:
        return {"caption": match.group(1), "code": match.group(3)}
    return {"caption": "", "code": example}


def _module_symbol(symbol: Doclet) -> Doclet:
    symbol = symbol.copy_deep()
    if symbol.kind in ("class", "function"):
        symbol.name = (symbol.name or "").replace("module:", '(require("', 1) + '"))'
    return symbol


def attach_module_symbols(doclets: Iterable[Doclet], modules: Iterable[Doclet]) -> None:
    """Attach what a module exports to the module doclet itself.

    A class or function sharing its longname with a module is the module's
    export. Copies of those doclets are stored on ``module.modules`` and their
    names rewritten to ``(require("name"))`` for display. Only symbols with a
    description are kept, except classes, which always show their constructor.
    """
    symbols: dict[str, list[Doclet]] = {}
    for symbol in doclets:
        symbols.setdefault(symbol.longname or "", []).append(symbol)

    for module in modules:
        exported = symbols.get(module.longname or "")
        if not exported:
            continue
        module.modules = [
            _module_symbol(symbol)
            for symbol in exported
            if symbol.description or symbol.kind == "class"
        ]


def _resolve_outdir(store: DocletStore, destination: Path) -> Path:
    package = store.first({"kind": "package"})
    if package is not None and package.name:
        return destination / package.name / (package.get("version") or "")
    return destination


def publish(
    data: DocletStore,
    opts: PublishOptions,
    tutorials: TutorialRoot | None = None,
    conf: PublishConf | None = None,
) -> PublishResult:
    """Generate the documentation site.

    Args:
        data: Doclets to document; pruned and annotated in place
        opts: Destination, template, encoding, readme and access options
        tutorials: Tutorial tree (empty when None)
        conf: Publish configuration (defaults when None)

    Returns:
        PublishResult with the output directory and every file written

    Raises:
        ValueError: If the template directory or encoding is invalid
        jinja2.TemplateNotFound: If the template lacks a required page template
    """
    conf = conf or PublishConf()
    tutorials = tutorials or TutorialRoot()
    default_conf = conf.templates.default
    power_mode = load_from_conf(conf)
    encoding = opts.normalized_encoding()

    template_path = Path(opts.template)
    view = View(template_path / "tmpl")
    links = LinkRegistry(conf.templates)
    helper = PowerTemplateHelper(links)

    # Claim special filenames before anything else can take them. "index" is
    # not registered since it is also a valid longname.
    index_url = links.get_unique_filename("index")
    global_url = links.get_unique_filename(GLOBAL_NAME)
    links.register_link(GLOBAL_NAME, global_url)

    if default_conf.layout_file:
        view.set_layout_file(conf.resolve_path(default_conf.layout_file))

    links.set_tutorials(tutorials)
    prune(data, private=opts.private, access=opts.access)
    if power_mode.should_sort():
        data.sort(SORT_KEYS)
    add_event_listeners(data)

    source_files: dict[str, SourceFile] = {}
    for doclet in data:
        doclet.attribs = ""

        if doclet.examples:
            doclet.examples = [split_example(example) for example in doclet.examples]

        if doclet.see:
            doclet.see = [helper.hash_to_link(doclet, item) for item in doclet.see]

        if doclet.meta:
            source_path = helper.get_path_from_doclet(doclet)
            if source_path:
                source_files.setdefault(source_path, SourceFile(resolved=source_path))

    outdir = _resolve_outdir(data, Path(opts.destination))
    outdir.mkdir(parents=True, exist_ok=True)
    logfire.info("Publishing documentation", outdir=str(outdir), doclets=len(data))

    written: list[Path] = []
    written.extend(copy_template_static(template_path, outdir))
    written.extend(copy_user_static(conf, outdir))
    written.append(write_pygments_stylesheet(outdir))

    if source_files:
        helper.shorten_paths(source_files, common_prefix(list(source_files)))

    for doclet in data:
        links.register_link(doclet.longname or "", links.create_link(doclet))

        if doclet.meta:
            source_path = helper.get_path_from_doclet(doclet)
            source = source_files.get(source_path or "")
            if source is not None and source.shortened:
                doclet.meta.shortpath = source.shortened

    for doclet in data:
        url = links.longname_to_url.get(doclet.longname or "", "")
        doclet.id = url.split("#")[-1] if "#" in url else doclet.name

        if helper.needs_signature(doclet):
            helper.add_signature_params(doclet)
            helper.add_signature_returns(doclet)
            helper.add_attribs(doclet)

    # Ancestor links need every URL registered
    for doclet in data:
        doclet.ancestors = helper.get_ancestor_links(data, doclet)

        if doclet.kind in ("member", "constant"):
            helper.add_signature_types(doclet)
            helper.add_attribs(doclet)

        if doclet.kind == "constant":
            doclet.kind = "member"

    members = get_members(data)
    members.tutorials = list(tutorials.children)
    output_source_files = default_conf.output_source_files

    view.find = data.find
    view.linkto = links.linkto
    view.resolve_author_links = links.resolve_author_links
    view.tutoriallink = helper.tutoriallink
    view.htmlsafe = htmlsafe
    view.output_source_files = output_source_files
    view.nav = NavBuilder(data, helper, power_mode).build_nav(members)

    attach_module_symbols(data.find({"longname": {"left": "module:"}}), members.modules)

    pages = PageWriter(outdir, view, links)

    # Source listings first, so other pages can link to them
    if output_source_files:
        pages.generate_source_files(source_files, encoding)

    if members.globals:
        pages.generate("", "Global", [{"kind": "globalobj"}], global_url)

    mainpage = {
        "kind": "mainpage",
        "readme": opts.readme,
        "longname": opts.mainpagetitle or DEFAULT_MAINPAGE_TITLE,
    }
    home_docs: list[Any] = [*data.find({"kind": "package"}), mainpage, *data.find({"kind": "file"})]
    pages.generate("", "Home", home_docs, index_url)

    containers: dict[str, DocletStore] = {
        group: DocletStore(getattr(members, group)) for group, _ in CONTAINER_PAGES
    }
    for longname, url in list(links.longname_to_url.items()):
        for group, page_type in CONTAINER_PAGES:
            docs = containers[group].find({"longname": longname})
            if docs:
                pages.generate(page_type, docs[0].name or "", docs, url)

    pages.save_children(tutorials)

    written.extend(pages.written)
    logfire.info("Published documentation", outdir=str(outdir), files=len(written))
    return PublishResult(outdir=outdir, files=written)
