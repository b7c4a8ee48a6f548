"""Tests for the icons.js module container."""

from __future__ import annotations

import re

import pytest

from iconsmith.models.icon import IconAnimation, IconRecord, to_icon_name, to_identifier
from iconsmith.store import module_file
from iconsmith.store.module_file import IdentifierConflictError
from iconsmith.store.literal import MalformedContainerError
from tests.conftest import MODULE_CONTENT

EMPTY_MANIFEST_RE = re.compile(r"export const \w+ = \{\s*\};")

HOME_BLOCK = """export const home = {
  name: 'home',
  body: `<path d="M3 10l9-7 9 7"/>`,
  viewBox: '0 0 24 24'
};"""

ARROW_BLOCK = """export const arrowRight = {
  name: 'arrow-right',
  body: `<path d="M5 12h14"/><path d="m12 5 7 7-7 7"/>`,
  viewBox: '0 0 24 24'
};"""


def _manifest_keys(content: str) -> list[str]:
    return module_file.manifest_names(content)


# ---------------------------------------------------------------------------
# 1. Identifiers
# ---------------------------------------------------------------------------

class TestIdentifiers:
    @pytest.mark.parametrize("name,identifier", [
        ("home", "home"),
        ("arrow-right", "arrowRight"),
        ("mdi:home", "mdiHome"),
        ("mdi:arrow-left-bold", "mdiArrowLeftBold"),
    ])
    def test_to_identifier(self, name, identifier):
        assert to_identifier(name) == identifier

    def test_record_identifier(self):
        assert IconRecord(name="arrow-right").identifier == "arrowRight"

    def test_invalid_name_rejected(self):
        with pytest.raises(ValueError):
            IconRecord(name="9lives")
        with pytest.raises(ValueError):
            IconRecord(name="has space")

    @pytest.mark.parametrize("name", ["delete", "new", "default", "class", "switch"])
    def test_reserved_word_rejected(self, name):
        with pytest.raises(ValueError, match="reserved word"):
            IconRecord(name=name)

    def test_reserved_word_as_prefix_allowed(self):
        assert IconRecord(name="new-tab").identifier == "newTab"

    def test_to_icon_name(self):
        assert to_icon_name("arrowRight") == "arrow-right"
        assert to_icon_name(to_identifier("mdi-arrow-left")) == "mdi-arrow-left"

    @pytest.mark.parametrize("view_box", ["0 0 24 24", "0,0,16,16", "-1.5 -2 1e2 .5"])
    def test_view_box_accepted(self, view_box):
        assert IconRecord(name="x", view_box=view_box).view_box == view_box

    @pytest.mark.parametrize("view_box", ["banana", "0 0 24", '0 0 "24" 24', "0 0 24 24 24"])
    def test_view_box_rejected(self, view_box):
        with pytest.raises(ValueError):
            IconRecord(name="x", view_box=view_box)


# ---------------------------------------------------------------------------
# 2. Parsing and queries
# ---------------------------------------------------------------------------

class TestParse:
    def test_records_and_manifest(self, module_content):
        module = module_file.parse_module(module_content)
        assert module.manifest_found
        assert [r.name for r in module.records] == ["home", "arrow-right"]
        assert module.records[1].body == '<path d="M5 12h14"/><path d="m12 5 7 7-7 7"/>'
        assert _manifest_keys(module_content) == ["home", "arrow-right"]

    def test_spans_cover_declarations(self, module_content):
        module = module_file.parse_module(module_content)
        entry = module.find("home")
        assert module_content[entry.start:entry.end] == HOME_BLOCK

    def test_queries(self, module_content):
        assert module_file.count(module_content) == 2
        assert module_file.list_names(module_content) == ["home", "arrow-right"]
        assert module_file.exists(module_content, "arrow-right")
        assert not module_file.exists(module_content, "arrow")
        assert not module_file.exists(module_content, "hom")

    def test_non_icon_exports_ignored(self):
        content = "export const version = { major: 1 };\n" + MODULE_CONTENT
        assert module_file.list_names(content) == ["home", "arrow-right"]

    def test_braces_inside_body(self):
        record = IconRecord(name="styled", body="<style>.a{fill:red}</style><path class='a'/>")
        content = module_file.render_module([record])
        assert module_file.parse_module(content).records == [record]
        assert module_file.count(module_file.remove(content, "styled")) == 0

    def test_unbalanced_declaration_raises(self):
        content = "export const home = { name: 'home', body: `<path/>`\n\nexport const icons = {};\n"
        with pytest.raises(MalformedContainerError):
            module_file.parse_module(content)
        with pytest.raises(MalformedContainerError):
            module_file.upsert(content, "star", "<path/>")


# ---------------------------------------------------------------------------
# 3. Serializer
# ---------------------------------------------------------------------------

class TestRender:
    def test_icon_export(self):
        rendered = module_file.render_icon_export(IconRecord(name="mdi:home", body="<path/>"))
        assert rendered == (
            "export const mdiHome = {\n"
            "  name: 'mdi:home',\n"
            "  body: `<path/>`,\n"
            "  viewBox: '0 0 24 24'\n"
            "};"
        )

    def test_animation_line(self):
        record = IconRecord(name="spinner", body="<circle/>", animation=IconAnimation(type="spin", duration=2))
        rendered = module_file.render_icon_export(record)
        assert (
            "  animation: { type: 'spin', duration: 2, timing: 'ease', "
            "iteration: 'infinite', delay: 0, direction: 'normal' }"
        ) in rendered
        parsed = module_file.parse_module(module_file.render_module([record])).records[0]
        assert parsed.animation.type == "spin"
        assert parsed.animation.duration == 2

    def test_body_with_backticks(self):
        record = IconRecord(name="quote", body="<text>`${a}`</text>")
        content = module_file.render_module([record])
        assert module_file.parse_module(content).records[0].body == record.body

    def test_new_module_content(self):
        content = module_file.new_module_content("home", "<path/>")
        assert content.startswith(module_file.HEADER)
        assert module_file.list_names(content) == ["home"]
        assert _manifest_keys(content) == ["home"]

    def test_empty_module(self):
        content = module_file.render_module([])
        assert EMPTY_MANIFEST_RE.search(content)


# ---------------------------------------------------------------------------
# 4. Upsert
# ---------------------------------------------------------------------------

class TestUpsert:
    def test_add_inserts_before_manifest(self, module_content):
        result = module_file.upsert(module_content, "mdi:star", "<path d='M1 1'/>")
        assert module_file.list_names(result) == ["home", "arrow-right", "mdi:star"]
        assert _manifest_keys(result) == ["home", "arrow-right", "mdi:star"]
        assert "  'mdi:star': mdiStar\n};" in result
        assert result.index("export const mdiStar") < result.index("export const icons")

    def test_add_keeps_other_blocks_byte_identical(self, module_content):
        result = module_file.upsert(module_content, "star", "<path/>")
        assert HOME_BLOCK in result
        assert ARROW_BLOCK in result
        assert result.startswith(module_content[:module_content.index("export const icons")])

    def test_replace_in_place(self, module_content):
        result = module_file.upsert(module_content, "home", "<circle r='4'/>", "0 0 16 16")
        assert module_file.count(result) == 2
        assert result.index("export const home") == module_content.index("export const home")
        assert ARROW_BLOCK in result
        record = module_file.parse_module(result).records[0]
        assert record.body == "<circle r='4'/>"
        assert record.view_box == "0 0 16 16"
        # Manifest already registers home, so it is left as-is
        tail = module_content[module_content.index("export const icons"):]
        assert result.endswith(tail)

    def test_add_then_update(self):
        content = module_file.new_module_content("home", "<path d='A'/>")
        content = module_file.upsert(content, "home", "<path d='B'/>")
        assert content.count("export const home ") == 1
        assert _manifest_keys(content) == ["home"]
        assert module_file.parse_module(content).records[0].body == "<path d='B'/>"

    def test_registers_existing_unreferenced_definition(self):
        content = HOME_BLOCK + "\n\nexport const icons = {};\n"
        result = module_file.upsert(content, "home", "<path/>")
        assert _manifest_keys(result) == ["home"]
        assert module_file.count(result) == 1

    def test_missing_manifest_appends(self):
        content = "// hand written\n\n" + HOME_BLOCK + "\n"
        result = module_file.upsert(content, "star", "<path/>")
        module = module_file.parse_module(result)
        assert not module.manifest_found
        assert [r.name for r in module.records] == ["home", "star"]
        assert result.startswith(content.rstrip("\n"))
        assert result.endswith("};\n")

    def test_custom_manifest_name(self):
        content = module_file.new_module_content("home", "<path/>", manifest_name="allIcons")
        result = module_file.upsert(content, "star", "<path/>", manifest_name="allIcons")
        assert module_file.manifest_names(result, "allIcons") == ["home", "star"]

    def test_manifest_identifier_refused(self, module_content):
        with pytest.raises(IdentifierConflictError):
            module_file.upsert(module_content, "icons", "<path/>")
        with pytest.raises(IdentifierConflictError):
            module_file.upsert("// hand written\n", "icons", "<path/>")

    def test_other_export_identifier_refused(self):
        content = "export const theme = { dark: 1 };\n" + MODULE_CONTENT
        with pytest.raises(IdentifierConflictError):
            module_file.upsert(content, "theme", "<path/>")

    def test_render_refuses_colliding_identifiers(self):
        with pytest.raises(IdentifierConflictError):
            module_file.render_module([IconRecord(name="arrow-right"), IconRecord(name="arrow:right")])
        with pytest.raises(IdentifierConflictError):
            module_file.new_module_content("icons", "<path/>")


# ---------------------------------------------------------------------------
# 5. Remove
# ---------------------------------------------------------------------------

class TestRemove:
    def test_remove_block_and_reference(self, module_content):
        result = module_file.remove(module_content, "home")
        assert "export const home " not in result
        assert _manifest_keys(result) == ["arrow-right"]
        assert ARROW_BLOCK in result
        assert "'arrow-right': arrowRight\n};" in result
        assert "// Do not edit manually\n\nexport const arrowRight" in result

    def test_remove_last_entry_collapses_manifest(self, module_content):
        result = module_file.remove(module_file.remove(module_content, "home"), "arrow-right")
        assert module_file.count(result) == 0
        assert EMPTY_MANIFEST_RE.search(result)
        assert ",\n}" not in result

    def test_remove_absent_is_noop(self, module_content):
        assert module_file.remove(module_content, "arrow") is module_content

    def test_remove_dangling_manifest_reference(self):
        content = "export const icons = {\n  'ghost': ghost\n};\n"
        assert EMPTY_MANIFEST_RE.search(module_file.remove(content, "ghost"))

    def test_manifest_stays_unique(self, module_content):
        content = module_content
        for step, name in enumerate(["star", "home", "star", "moon", "home", "star", "moon"]):
            if step % 3 == 2:
                content = module_file.remove(content, name)
            else:
                content = module_file.upsert(content, name, f"<path d='{step}'/>")
            keys = _manifest_keys(content)
            assert len(keys) == len(set(keys))
            assert sorted(keys) == sorted(module_file.list_names(content))
