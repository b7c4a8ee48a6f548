"""Sprite-form output store — one ``<symbol>`` per icon inside a hidden ``<svg>``."""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from xml.sax.saxutils import quoteattr

from iconsmith.models.icon import DEFAULT_VIEW_BOX, IconRecord
from iconsmith.store.literal import MalformedContainerError

logger = logging.getLogger(__name__)

SPRITE_OPEN = '<svg xmlns="http://www.w3.org/2000/svg" style="display: none;">'
SPRITE_CLOSE = "</svg>"

_SYMBOL_OPEN_RE = re.compile(r"<symbol\b([^>]*?)(/?)>", re.IGNORECASE)
_SYMBOL_TAG_RE = re.compile(r"<!--|<symbol\b[^>]*?(/?)>|</symbol\s*>", re.IGNORECASE)
_ID_ATTR_RE = re.compile(r"""(?<![\w:-])id\s*=\s*(["'])(.*?)\1""")
_VIEWBOX_ATTR_RE = re.compile(r"""(?<![\w:-])viewBox\s*=\s*(["'])(.*?)\1""")
_ROOT_CLOSE_RE = re.compile(r"</svg\s*>", re.IGNORECASE)


@dataclass
class SpriteSymbol:
    """One ``<symbol>`` element and its span in the sprite."""

    name: str
    view_box: str
    body: str
    start: int
    end: int


def render_symbol(name: str, body: str, view_box: str = DEFAULT_VIEW_BOX) -> str:
    return f"  <symbol id={quoteattr(name)} viewBox={quoteattr(view_box)}>\n    {body}\n  </symbol>"


def render_sprite(records: list[IconRecord]) -> str:
    lines = [SPRITE_OPEN]
    lines.extend(render_symbol(r.name, r.body, r.view_box) for r in records)
    lines.append(SPRITE_CLOSE)
    return "\n".join(lines) + "\n"


def new_sprite_content(name: str, body: str, view_box: str = DEFAULT_VIEW_BOX) -> str:
    return render_sprite([IconRecord(name=name, body=body, view_box=view_box)])


# ---------------------------------------------------------------------------
# Scanning
# ---------------------------------------------------------------------------

def _element_end(content: str, open_end: int) -> int:
    """Index just past the ``</symbol>`` balancing an already-opened symbol."""
    depth = 1
    pos = open_end
    while True:
        m = _SYMBOL_TAG_RE.search(content, pos)
        if m is None:
            raise MalformedContainerError(f"Unclosed <symbol> opened before offset {open_end}")
        token = m.group(0)
        if token == "<!--":
            close = content.find("-->", m.end())
            if close < 0:
                raise MalformedContainerError(f"Unterminated comment at offset {m.start()}")
            pos = close + 3
            continue
        if token.startswith("</"):
            depth -= 1
            if depth == 0:
                return m.end()
        elif not m.group(1):
            depth += 1
        pos = m.end()


def _inner_body(content: str, open_end: int, end: int) -> str:
    close_start = content.rfind("<", open_end, end)
    return content[open_end:close_start].strip()


def parse_sprite(content: str) -> list[SpriteSymbol]:
    """Top-level symbols in document order; symbols without an id are skipped."""
    symbols: list[SpriteSymbol] = []
    pos = 0
    while True:
        m = _find_open(content, pos)
        if m is None:
            return symbols
        self_closing = bool(m.group(2))
        end = m.end() if self_closing else _element_end(content, m.end())
        pos = end

        attrs = m.group(1)
        id_match = _ID_ATTR_RE.search(attrs)
        if id_match is None:
            logger.debug("Symbol at offset %d has no id, skipping", m.start())
            continue
        vb_match = _VIEWBOX_ATTR_RE.search(attrs)
        symbols.append(SpriteSymbol(
            name=id_match.group(2),
            view_box=vb_match.group(2) if vb_match else DEFAULT_VIEW_BOX,
            body="" if self_closing else _inner_body(content, m.end(), end),
            start=m.start(),
            end=end,
        ))


def _find_open(content: str, pos: int) -> re.Match[str] | None:
    """Next ``<symbol`` opening tag outside comments."""
    while True:
        m = _SYMBOL_OPEN_RE.search(content, pos)
        if m is None:
            return None
        comment = content.rfind("<!--", pos, m.start())
        if comment >= 0 and content.find("-->", comment, m.start()) < 0:
            close = content.find("-->", m.start())
            if close < 0:
                return None
            pos = close + 3
            continue
        return m


def _find(content: str, name: str) -> SpriteSymbol | None:
    for symbol in parse_sprite(content):
        if symbol.name == name:
            return symbol
    return None


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------

def upsert(content: str, name: str, body: str, view_box: str = DEFAULT_VIEW_BOX) -> str:
    """Replace the symbol with id ``name`` or insert one before the root close tag."""
    record = IconRecord(name=name, body=body, view_box=view_box)
    symbol_markup = render_symbol(record.name, record.body, record.view_box)
    existing = _find(content, name)
    if existing is not None:
        # The rendered symbol carries its own indentation
        line_start = content.rfind("\n", 0, existing.start) + 1
        start = line_start if not content[line_start:existing.start].strip() else existing.start
        logger.info("Replaced symbol %s", name)
        return content[:start] + symbol_markup + content[existing.end:]

    closes = list(_ROOT_CLOSE_RE.finditer(content))
    if not closes:
        raise MalformedContainerError("Sprite has no closing </svg> tag")
    close = closes[-1]
    line_start = content.rfind("\n", 0, close.start()) + 1
    if content[line_start:close.start()].strip():
        # Root close tag shares a line with other markup
        insert_at, prefix = close.start(), "\n"
    else:
        insert_at, prefix = line_start, ""
    logger.info("Added symbol %s", name)
    return content[:insert_at] + prefix + symbol_markup + "\n" + content[insert_at:]


def remove(content: str, name: str) -> str:
    """Delete the symbol with id ``name`` with its indentation and line break."""
    existing = _find(content, name)
    if existing is None:
        logger.debug("Symbol %s not present, nothing to remove", name)
        return content

    start, end = existing.start, existing.end
    line_start = content.rfind("\n", 0, start) + 1
    if not content[line_start:start].strip():
        start = line_start
    if content.startswith("\r\n", end):
        end += 2
    elif content.startswith("\n", end):
        end += 1
    logger.info("Removed symbol %s", name)
    return content[:start] + content[end:]


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------

def exists(content: str, name: str) -> bool:
    return _find(content, name) is not None


def count(content: str) -> int:
    return len(parse_sprite(content))


def list_ids(content: str) -> list[str]:
    return [s.name for s in parse_sprite(content)]


def is_valid_sprite(content: str) -> bool:
    """True when the sprite is well-formed XML with an ``<svg>`` root."""
    try:
        root = ET.fromstring(content)
    except ET.ParseError:
        return False
    return root.tag.rsplit("}", 1)[-1] == "svg"


# ---------------------------------------------------------------------------
# References
# ---------------------------------------------------------------------------

def _use_markup(href: str, size: str, class_name: str | None) -> str:
    class_attr = f" class={quoteattr(class_name)}" if class_name else ""
    return (
        f"<svg width={quoteattr(size)} height={quoteattr(size)}{class_attr}>"
        f"<use href={quoteattr(href)}></use></svg>"
    )


def use_reference(sprite_url: str, symbol_id: str, size: str = "24", class_name: str | None = None) -> str:
    """Markup drawing ``symbol_id`` from an external sprite file."""
    return _use_markup(f"{sprite_url}#{symbol_id}", size, class_name)


def inline_use_reference(symbol_id: str, size: str = "24", class_name: str | None = None) -> str:
    """Same as :func:`use_reference` for a sprite inlined in the page."""
    return _use_markup(f"#{symbol_id}", size, class_name)
