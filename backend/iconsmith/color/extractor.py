"""Color extraction and targeted replacement inside one icon's markup.

Colors live in ``fill`` / ``stroke`` / ``stop-color`` attributes, in the same
properties of inline ``style="..."`` declarations and in the rules of
``<style>`` blocks. Every reference is located by its character span, so
replacements splice only the color value and leave the rest of the markup
byte-identical.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Mapping

from iconsmith.color.model import normalize_color
from iconsmith.models.color import ColorPalette, ColorSample

logger = logging.getLogger(__name__)

_ATTR_RE = re.compile(r"""(?<![\w:-])(fill|stroke|stop-color)\s*=\s*(["'])(.*?)\2""", re.IGNORECASE)
_STYLE_ATTR_RE = re.compile(r"""(?<![\w:-])style\s*=\s*(["'])(.*?)\1""", re.IGNORECASE | re.DOTALL)
_STYLE_DECL_RE = re.compile(r"""(?<![\w-])(fill|stroke|stop-color)\s*:\s*([^;"']+)""", re.IGNORECASE)
_STYLE_BLOCK_RE = re.compile(r"<style\b[^>]*>(.*?)</style\s*>", re.IGNORECASE | re.DOTALL)
_CSS_RULE_BODY_RE = re.compile(r"\{([^{}]*)\}")
_CSS_DECL_RE = re.compile(r"""(?<![\w-])(fill|stroke|stop-color)\s*:\s*([^;}"']+)""", re.IGNORECASE)
_SMIL_RE = re.compile(r"<animate(?:Transform|Motion|Color)?\b", re.IGNORECASE)
_NEAR_BLACK_RE = re.compile(r"^#0[0-2]0[0-2]0[0-2]$")

_SHAPE_TAG_RE = re.compile(r"<(path|circle|rect|ellipse|line|polygon|polyline)\b([^>]*)>", re.IGNORECASE)
_FILL_ATTR_RE = re.compile(r"(?<![\w:-])fill\s*=", re.IGNORECASE)
_STYLE_FILL_RE = re.compile(r"(?<![\w-])fill\s*:", re.IGNORECASE)
_PAINT_ATTR_RE = re.compile(r"""\s+(fill|stroke)\s*=\s*(["'])(.*?)\2""", re.IGNORECASE)

_IMPORTANT = "!important"
# Paint values that mean "no color" and are never replacement targets
_UNPAINTED = frozenset({"none", "transparent"})


@dataclass
class ColorRef:
    """One color-bearing value in the markup."""

    prop: str  # fill | stroke | stop-color (lower-case)
    value: str
    start: int
    end: int

    @property
    def is_stroke(self) -> bool:
        return self.prop == "stroke"


def _core_span(raw: str, offset: int) -> tuple[str, int, int]:
    """Strip whitespace and ``!important`` from a raw value, keeping its span."""
    lead = len(raw) - len(raw.lstrip())
    core = raw.strip()
    if core.lower().endswith(_IMPORTANT):
        core = core[: -len(_IMPORTANT)].rstrip()
    start = offset + lead
    return core, start, start + len(core)


def iter_color_refs(markup: str) -> Iterator[ColorRef]:
    """Yield every color reference in document order."""
    refs: list[ColorRef] = []

    for m in _ATTR_RE.finditer(markup):
        value, start, end = _core_span(m.group(3), m.start(3))
        refs.append(ColorRef(m.group(1).lower(), value, start, end))

    for style in _STYLE_ATTR_RE.finditer(markup):
        base = style.start(2)
        for decl in _STYLE_DECL_RE.finditer(style.group(2)):
            value, start, end = _core_span(decl.group(2), base + decl.start(2))
            refs.append(ColorRef(decl.group(1).lower(), value, start, end))

    for block in _STYLE_BLOCK_RE.finditer(markup):
        for rule in _CSS_RULE_BODY_RE.finditer(markup, block.start(1), block.end(1)):
            for decl in _CSS_DECL_RE.finditer(markup, rule.start(1), rule.end(1)):
                value, start, end = _core_span(decl.group(2), decl.start(2))
                refs.append(ColorRef(decl.group(1).lower(), value, start, end))

    refs.sort(key=lambda r: r.start)
    yield from refs


def extract_colors_from_svg(svg: str) -> list[ColorSample]:
    """Unique colors in first-occurrence order with fill/stroke usage counts.

    ``fill`` and ``stop-color`` count as fills. ``none``, ``transparent``,
    ``currentColor``, paint-server references and unparseable values are skipped.
    """
    samples: dict[str, ColorSample] = {}
    for ref in iter_color_refs(svg):
        normalized = normalize_color(ref.value)
        if normalized is None:
            continue
        sample = samples.get(normalized)
        if sample is None:
            sample = ColorSample(color=ref.value, normalized_color=normalized)
            samples[normalized] = sample
        if ref.is_stroke:
            sample.stroke_count += 1
        else:
            sample.fill_count += 1
    return list(samples.values())


def has_current_color(svg: str) -> bool:
    return any(ref.value.lower() == "currentcolor" for ref in iter_color_refs(svg))


def analyze_svg_colors(svg: str) -> ColorPalette:
    return ColorPalette(
        samples=extract_colors_from_svg(svg),
        has_current_color=has_current_color(svg),
        has_smil=bool(_SMIL_RE.search(svg)),
    )


def display_colors(palette: ColorPalette) -> list[str]:
    """Colors worth showing in a picker.

    SMIL-animated icons often carry near-black helper colors for the animation
    itself; those are hidden unless nothing else is left.
    """
    colors = palette.colors
    if not palette.has_smil or len(colors) <= 1:
        return colors
    primary = [c for c in colors if not _NEAR_BLACK_RE.match(c)]
    return primary or colors


# ---------------------------------------------------------------------------
# Replacement
# ---------------------------------------------------------------------------

def _color_matcher(old_color: str) -> Callable[[str], bool]:
    raw = old_color.strip().lower()
    normalized = normalize_color(old_color)
    if raw in _UNPAINTED:
        return lambda value: False

    def matches(value: str) -> bool:
        if value.lower() == raw:
            return True
        return normalized is not None and normalize_color(value) == normalized

    return matches


def _splice_refs(svg: str, pick: Callable[[ColorRef], str | None]) -> str:
    """Replace the value of every ref for which ``pick`` returns a string."""
    splices = []
    for ref in iter_color_refs(svg):
        replacement = pick(ref)
        if replacement is not None and replacement != ref.value:
            splices.append((ref.start, ref.end, replacement))

    if not splices:
        return svg

    # Descending so earlier splices don't shift later offsets
    result = svg
    for start, end, replacement in sorted(splices, reverse=True):
        result = result[:start] + replacement + result[end:]
    logger.debug("Replaced %d color reference(s)", len(splices))
    return result


def replace_color_in_svg(svg: str, old_color: str, new_color: str) -> str:
    """Replace every occurrence of ``old_color``; other colors stay untouched.

    Matching is case-insensitive and format-agnostic (``#F00`` matches
    ``red``). Returns ``svg`` itself when nothing matches.
    """
    matches = _color_matcher(old_color)
    return _splice_refs(svg, lambda ref: new_color if matches(ref.value) else None)


def apply_color_replacements(
    svg: str,
    replacements: Mapping[str, str] | Iterable[tuple[str, str]],
) -> str:
    """Apply several ``old -> new`` replacements in a single pass.

    All lookups run against the original markup, so swapping two colors works.
    """
    pairs = replacements.items() if isinstance(replacements, Mapping) else replacements
    table = [(_color_matcher(old), new) for old, new in pairs]

    def pick(ref: ColorRef) -> str | None:
        for matches, new in table:
            if matches(ref.value):
                return new
        return None

    return _splice_refs(svg, pick)


def replace_all_colors_in_svg(svg: str, new_color: str) -> str:
    """Flatten every extracted color to ``new_color``."""
    return apply_color_replacements(svg, [(s.color, new_color) for s in extract_colors_from_svg(svg)])


def add_fill_to_svg(svg: str, color: str) -> str:
    """Add ``fill`` to shape elements that have neither a fill attribute nor a style fill."""
    def add(m: re.Match[str]) -> str:
        attrs = m.group(2)
        if _FILL_ATTR_RE.search(attrs) or _STYLE_FILL_RE.search(attrs):
            return m.group(0)
        return f'<{m.group(1)} fill="{color}"{attrs}>'

    return _SHAPE_TAG_RE.sub(add, svg)


def remove_colors_from_svg(svg: str) -> str:
    """Strip fill and stroke attributes; an explicit ``none`` is kept."""
    def strip(m: re.Match[str]) -> str:
        return m.group(0) if m.group(3).strip().lower() == "none" else ""

    return _PAINT_ATTR_RE.sub(strip, svg)


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------

def get_unique_colors(svg: str) -> list[str]:
    return [s.normalized_color for s in extract_colors_from_svg(svg) if s.normalized_color]


def is_svg_monochrome(svg: str) -> bool:
    return len(extract_colors_from_svg(svg)) <= 1


def sort_colors_by_usage(samples: list[ColorSample]) -> list[ColorSample]:
    return sorted(samples, key=lambda s: s.total_count, reverse=True)


def get_primary_color(svg: str) -> str | None:
    """Most used color; ties go to the first one encountered."""
    samples = extract_colors_from_svg(svg)
    if not samples:
        return None
    return sort_colors_by_usage(samples)[0].normalized_color


def format_color_info(sample: ColorSample) -> str:
    details = []
    if sample.fill_count:
        details.append(f"{sample.fill_count} fill{'s' if sample.fill_count > 1 else ''}")
    if sample.stroke_count:
        details.append(f"{sample.stroke_count} stroke{'s' if sample.stroke_count > 1 else ''}")
    return ", ".join(details) or "no uses"
