"""Standalone ``<svg>`` documents <-> stored icon records."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from xml.sax.saxutils import quoteattr

from iconsmith.models.icon import DEFAULT_VIEW_BOX, JS_RESERVED_WORDS, VIEW_BOX_PATTERN, IconRecord, to_identifier

logger = logging.getLogger(__name__)

_XML_PROLOG_RE = re.compile(r"<\?xml[^>]*\?>|<!DOCTYPE[^>]*>|<!--.*?-->", re.IGNORECASE | re.DOTALL)
_ROOT_OPEN_RE = re.compile(r"<svg\b([^>]*?)(/?)>", re.IGNORECASE)
_ROOT_CLOSE_RE = re.compile(r"</svg\s*>", re.IGNORECASE)
_ATTR_RE = re.compile(r"""([\w:-]+)\s*=\s*(["'])(.*?)\2""", re.DOTALL)
_NAME_CLEAN_RE = re.compile(r"[^a-z0-9:]+")
_VIEW_BOX_RE = re.compile(VIEW_BOX_PATTERN)


def extract_svg_attributes(svg: str) -> dict[str, str]:
    """Attributes of the root ``<svg>`` tag."""
    m = _ROOT_OPEN_RE.search(svg)
    if not m:
        return {}
    return {a.group(1): a.group(3) for a in _ATTR_RE.finditer(m.group(1))}


def extract_view_box(svg: str) -> str | None:
    """Root viewBox, falling back to ``0 0 width height`` when it is missing or not four numbers."""
    attrs = extract_svg_attributes(svg)
    view_box = attrs.get("viewBox")
    if view_box:
        view_box = " ".join(view_box.replace(",", " ").split())
        if _VIEW_BOX_RE.match(view_box):
            return view_box
        logger.debug("Ignoring malformed viewBox %r", view_box)

    width, height = attrs.get("width"), attrs.get("height")
    if width and height:
        try:
            w = float(width.replace("px", ""))
            h = float(height.replace("px", ""))
        except ValueError:
            return None
        view_box = f"0 0 {w:g} {h:g}"
        return view_box if _VIEW_BOX_RE.match(view_box) else None
    return None


def extract_svg_body(svg: str) -> str:
    """Inner markup of the root ``<svg>``; text without a root tag is returned as-is."""
    text = _XML_PROLOG_RE.sub("", svg).strip()
    m = _ROOT_OPEN_RE.search(text)
    if not m:
        return text
    if m.group(2):
        return ""
    closes = list(_ROOT_CLOSE_RE.finditer(text, m.end()))
    if not closes:
        logger.warning("SVG root is never closed, keeping everything after the open tag")
        return text[m.end():].strip()
    return text[m.end():closes[-1].start()].strip()


def to_icon_record(name: str, svg: str, default_view_box: str = DEFAULT_VIEW_BOX) -> IconRecord:
    return IconRecord(
        name=name,
        body=extract_svg_body(svg),
        view_box=extract_view_box(svg) or default_view_box,
    )


def to_svg(record: IconRecord) -> str:
    """Standalone document for previews and exports."""
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox={quoteattr(record.view_box)}>'
        f"{record.body}</svg>"
    )


def icon_name_from_path(path: str | Path) -> str:
    """``Arrow Right.svg`` -> ``arrow-right``; unusable names get an ``icon-`` prefix."""
    stem = Path(path).stem.lower()
    name = _NAME_CLEAN_RE.sub("-", stem).strip("-:")
    if not name or name[0].isdigit() or to_identifier(name) in JS_RESERVED_WORDS:
        name = f"icon-{name}".rstrip("-")
    return name
