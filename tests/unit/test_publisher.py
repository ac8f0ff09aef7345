"""Unit tests for the publish helpers."""

from powerdoc.doclets import Doclet
from powerdoc.publish import attach_module_symbols, split_example


class TestSplitExample:
    """Tests for split_example()."""

    def test_caption(self) -> None:
        """Test that a leading caption is split off."""
        example = split_example("<caption>Basic use</caption>\nfoo();\nbar();")

        assert example == {"caption": "Basic use", "code": "foo();\nbar();"}

    def test_caption_is_case_insensitive(self) -> None:
        """Test that the caption tag may be upper case."""
        example = split_example("  <CAPTION>Hi</CAPTION>\r\nfoo();")

        assert example["caption"] == "Hi"
        assert example["code"] == "foo();"

    def test_no_caption(self) -> None:
        """Test that plain examples are kept as code."""
        assert split_example("foo();") == {"caption": "", "code": "foo();"}

    def test_caption_needs_newline(self) -> None:
        """Test that a caption on the same line as the code is not split."""
        example = split_example("<caption>Hi</caption> foo();")

        assert example["caption"] == ""
        assert example["code"] == "<caption>Hi</caption> foo();"

    def test_already_split(self) -> None:
        """Test that split examples pass through."""
        assert split_example({"caption": "A", "code": "b"}) == {"caption": "A", "code": "b"}


class TestAttachModuleSymbols:
    """Tests for attach_module_symbols()."""

    def test_exports_attached(self) -> None:
        """Test that a module's exported function is attached under its require name."""
        module = Doclet(kind="module", name="util", longname="module:util")
        export = Doclet(
            kind="function",
            name="module:util",
            longname="module:util",
            description="Utility entry point.",
        )

        attach_module_symbols([module, export], [module])

        assert [s.name for s in module.modules] == ['(require("util"))']
        # The original doclet keeps its name
        assert export.name == "module:util"

    def test_undescribed_symbols_skipped(self) -> None:
        """Test that only described symbols and classes are kept."""
        module = Doclet(kind="module", name="util", longname="module:util")
        bare = Doclet(kind="function", name="module:util", longname="module:util")
        cls = Doclet(kind="class", name="module:util", longname="module:util")

        attach_module_symbols([module, bare, cls], [module])

        assert [s.kind for s in module.modules] == ["class"]

    def test_member_names_unchanged(self) -> None:
        """Test that non-callable exports keep their names."""
        module = Doclet(kind="module", name="conf", longname="module:conf")
        member = Doclet(
            kind="member", name="module:conf", longname="module:conf", description="Settings."
        )

        attach_module_symbols([module, member], [module])

        assert [s.name for s in module.modules] == ["module:conf"]

    def test_modules_without_exports(self) -> None:
        """Test that modules exporting nothing are left alone."""
        module = Doclet(kind="module", name="util", longname="module:util")
        other = Doclet(kind="function", name="helper", longname="module:util.helper")

        attach_module_symbols([other], [module])

        assert module.get("modules") is None
