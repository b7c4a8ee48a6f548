"""Tests for the iconsmith command line."""

from __future__ import annotations

from iconsmith.cli import main
from iconsmith.store import module_file, sprite_file
from tests.conftest import CIRCLE_SVG, FILLED_RECT_SVG


def _src(tmp_path):
    src = tmp_path / "src"
    src.mkdir()
    (src / "Circle.svg").write_text(CIRCLE_SVG, encoding="utf-8")
    (src / "filled rect.svg").write_text(FILLED_RECT_SVG, encoding="utf-8")
    (src / "notes.txt").write_text("ignored", encoding="utf-8")
    return src


def test_build_module(tmp_path, capsys):
    out = tmp_path / "dist" / "icons.js"
    assert main(["build", str(_src(tmp_path)), "-o", str(out)]) == 0
    content = out.read_text(encoding="utf-8")
    assert module_file.list_names(content) == ["circle", "filled-rect"]
    assert module_file.manifest_names(content) == ["circle", "filled-rect"]
    assert "Done: 2 icons" in capsys.readouterr().out


def test_build_sprite(tmp_path):
    out = tmp_path / "sprite.svg"
    assert main(["build", str(_src(tmp_path)), "-o", str(out), "--sprite"]) == 0
    content = out.read_text(encoding="utf-8")
    assert sprite_file.list_ids(content) == ["circle", "filled-rect"]
    assert sprite_file.is_valid_sprite(content)


def test_build_empty_folder(tmp_path):
    (tmp_path / "empty").mkdir()
    assert main(["build", str(tmp_path / "empty"), "-o", str(tmp_path / "x.js")]) == 1


def test_add_list_remove(tmp_path, capsys):
    out_dir = tmp_path / "icons"
    svg = tmp_path / "home.svg"
    svg.write_text(CIRCLE_SVG, encoding="utf-8")

    assert main(["-d", str(out_dir), "add", str(svg)]) == 0
    assert main(["-d", str(out_dir), "add", str(svg), "--name", "mdi:home"]) == 0
    capsys.readouterr()

    assert main(["-d", str(out_dir), "list"]) == 0
    assert capsys.readouterr().out.split() == ["home", "mdi:home"]

    assert main(["-d", str(out_dir), "remove", "home"]) == 0
    assert main(["-d", str(out_dir), "remove", "home"]) == 1


def test_add_invalid_name(tmp_path):
    svg = tmp_path / "home.svg"
    svg.write_text(CIRCLE_SVG, encoding="utf-8")
    assert main(["-d", str(tmp_path / "icons"), "add", str(svg), "--name", "bad name"]) == 1


def test_list_missing_file(tmp_path):
    assert main(["-d", str(tmp_path / "icons"), "list"]) == 1


def test_add_manifest_name_refused(tmp_path):
    svg = tmp_path / "home.svg"
    svg.write_text(CIRCLE_SVG, encoding="utf-8")
    assert main(["-d", str(tmp_path / "icons"), "add", str(svg), "--name", "icons"]) == 1


def test_build_skips_identifier_duplicates(tmp_path):
    src = tmp_path / "src"
    src.mkdir()
    (src / "arrow-right.svg").write_text(CIRCLE_SVG, encoding="utf-8")
    (src / "arrow:right.svg").write_text(FILLED_RECT_SVG, encoding="utf-8")
    (src / "delete.svg").write_text(CIRCLE_SVG, encoding="utf-8")
    out = tmp_path / "icons.js"
    assert main(["build", str(src), "-o", str(out)]) == 0
    assert module_file.list_names(out.read_text(encoding="utf-8")) == ["arrow-right", "icon-delete"]
