"""Navigation sidebar shared by every generated page."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from typing import Any

from powerdoc.config.power_mode import PowerModeConfig
from powerdoc.doclets.members import Members
from powerdoc.doclets.store import DocletStore
from powerdoc.links.registry import GLOBAL_NAME
from powerdoc.rendering.helper import PowerTemplateHelper

LinkFn = Callable[[str | None, str | None], str]

_MODULE_PREFIX = re.compile(r"^module:")


class NavBuilder:
    """Builds the sidebar HTML once per publish run.

    Each section lists its items with their methods and, when power mode asks
    for it, their static members. Items already listed under an earlier
    section are skipped, except that modules and tutorials keep their own
    ``seen`` sets.
    """

    def __init__(
        self,
        store: DocletStore,
        helper: PowerTemplateHelper,
        power_mode: PowerModeConfig | None = None,
    ) -> None:
        self.store = store
        self.helper = helper
        self.power_mode = power_mode or PowerModeConfig()

    def _static_members_nav(self, longname: str) -> str:
        members = self.store.find({"kind": "member", "memberof": longname})
        static_members = [m for m in members if m.scope == "static"]
        if not static_members:
            return ""

        items = "".join(
            f"<li data-type='member'>{self.helper.linkto(m.longname, m.name)}</li>"
            for m in static_members
        )
        return f"<ul class='members'>{items}</ul>"

    def _methods_nav(self, longname: str) -> str:
        methods = self.store.find({"kind": "function", "memberof": longname})
        if not methods:
            return ""

        items = "".join(
            f"<li data-type='method'>{self.helper.linkto(m.longname, m.name)}</li>"
            for m in methods
        )
        return f"<ul class='methods'>{items}</ul>"

    def build_member_nav(
        self,
        items: Iterable[Any] | None,
        heading: str,
        seen: set[str],
        linkto_fn: LinkFn,
    ) -> str:
        """One sidebar section: a heading and a list of links.

        Args:
            items: Doclets (or tutorials) to list
            heading: Section heading
            seen: Longnames already listed; updated in place
            linkto_fn: Renders the link for one item

        Returns:
            Section HTML, or an empty string when nothing was listed
        """
        items_nav = ""

        for item in items or []:
            longname = getattr(item, "longname", None)
            name = getattr(item, "name", None) or ""

            if longname is None:
                items_nav += f"<li>{linkto_fn('', name)}</li>"
                continue

            if longname in seen:
                continue

            items_nav += f"<li>{linkto_fn(longname, _MODULE_PREFIX.sub('', name))}"
            if self.power_mode.should_display_static_members():
                items_nav += self._static_members_nav(longname)
            items_nav += self._methods_nav(longname)
            items_nav += "</li>"

            seen.add(longname)

        if not items_nav:
            return ""

        return f"<h3>{heading}</h3><ul>{items_nav}</ul>"

    def build_nav(self, members: Members) -> str:
        """Build the full sidebar.

        Args:
            members: Doclets grouped by kind, tutorials included

        Returns:
            Sidebar HTML
        """
        helper = self.helper
        nav = '<h2><a href="index.html">Home</a></h2>'
        seen: set[str] = set()
        seen_tutorials: set[str] = set()

        nav += self.build_member_nav(members.classes, "Classes", seen, helper.linkto)
        nav += self.build_member_nav(members.modules, "Modules", set(), helper.linkto)
        nav += self.build_member_nav(members.externals, "Externals", seen, helper.linkto_external)
        nav += self.build_member_nav(members.events, "Events", seen, helper.linkto)
        nav += self.build_member_nav(members.namespaces, "Namespaces", seen, helper.linkto)
        nav += self.build_member_nav(members.mixins, "Mixins", seen, helper.linkto)
        nav += self.build_member_nav(
            members.tutorials, "Tutorials", seen_tutorials, helper.linkto_tutorial
        )
        nav += self.build_member_nav(members.interfaces, "Interfaces", seen, helper.linkto)

        if members.globals:
            global_nav = ""

            for doclet in members.globals:
                longname = doclet.longname or ""
                if doclet.kind != "typedef" and longname not in seen:
                    global_nav += f"<li>{helper.linkto(doclet.longname, doclet.name)}</li>"
                seen.add(longname)

            if global_nav:
                nav += f"<h3>Global</h3><ul>{global_nav}</ul>"
            else:
                # Make the heading a link so the global page stays reachable
                nav += f"<h3>{helper.linkto(GLOBAL_NAME, 'Global')}</h3>"

        return nav
