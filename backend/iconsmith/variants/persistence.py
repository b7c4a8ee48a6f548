"""The per-project variants file: default pointers, color mappings and palettes."""

from __future__ import annotations

import logging
import re

from pydantic import BaseModel, Field

from iconsmith.models.variant import HIDDEN_PREFIX, Variant, VariantSet
from iconsmith.store.literal import MalformedContainerError, escape_single_quoted, find_matching_brace, parse_object

logger = logging.getLogger(__name__)

HEADER = (
    "// Auto-generated by iconsmith\n"
    "// Variants for icons - edit freely or use the Icon Editor"
)

ORIGINAL_KEY = "_original"

_DECL_RE = re.compile(r"export\s+const\s+(defaultVariants|colorMappings|Variants)\s*=\s*(?=\{)")


class VariantsDocument(BaseModel):
    default_variants: dict[str, str] = Field(default_factory=dict)
    color_mappings: dict[str, dict[str, str]] = Field(default_factory=dict)
    variants: dict[str, dict[str, list[str]]] = Field(default_factory=dict)

    def icon_names(self) -> list[str]:
        names = list(self.variants)
        names.extend(n for n in self.default_variants if n not in self.variants)
        return names

    def variant_set(self, icon: str) -> VariantSet:
        palettes = self.variants.get(icon, {})
        variants = [
            Variant(name=name, colors=list(colors))
            for name, colors in palettes.items()
            if not name.startswith(HIDDEN_PREFIX)
        ]
        default = self.default_variants.get(icon)
        if default is not None and default not in palettes:
            logger.warning("Default variant %r of %s does not exist, ignoring it", default, icon)
            default = None
        return VariantSet(variants=variants, default_variant_name=default)

    def store(
        self,
        icon: str,
        variant_set: VariantSet,
        color_mappings: dict[str, str] | None = None,
        original_colors: list[str] | None = None,
    ) -> None:
        """Replace everything recorded for ``icon``; hidden entries are kept.

        ``original_colors`` is remembered under ``_original`` the first time
        it is given and never overwritten afterwards.
        """
        hidden = {
            name: colors
            for name, colors in self.variants.get(icon, {}).items()
            if name.startswith(HIDDEN_PREFIX)
        }
        if original_colors and ORIGINAL_KEY not in hidden:
            hidden[ORIGINAL_KEY] = list(original_colors)
        palettes = {**hidden, **{v.name: list(v.colors) for v in variant_set.variants}}
        if palettes:
            self.variants[icon] = palettes
        else:
            self.variants.pop(icon, None)

        if variant_set.default_variant_name:
            self.default_variants[icon] = variant_set.default_variant_name
        else:
            self.default_variants.pop(icon, None)

        if color_mappings is not None:
            if color_mappings:
                self.color_mappings[icon] = dict(color_mappings)
            else:
                self.color_mappings.pop(icon, None)

    def original_colors(self, icon: str) -> list[str] | None:
        colors = self.variants.get(icon, {}).get(ORIGINAL_KEY)
        return list(colors) if colors is not None else None

    def remove_icon(self, icon: str) -> bool:
        found = False
        for table in (self.default_variants, self.color_mappings, self.variants):
            found = table.pop(icon, None) is not None or found
        return found


def _q(text: str) -> str:
    return f"'{escape_single_quoted(text)}'"


def _render_table(rows: list[str]) -> str:
    if not rows:
        return "{}"
    return "{\n" + ",\n".join(rows) + "\n}"


def render_variants_file(document: VariantsDocument) -> str:
    defaults = [f"  {_q(icon)}: {_q(name)}" for icon, name in document.default_variants.items()]

    mappings = []
    for icon, mapping in document.color_mappings.items():
        pairs = ",\n".join(f"    {_q(old)}: {_q(new)}" for old, new in mapping.items())
        mappings.append(f"  {_q(icon)}: {{\n{pairs}\n  }}" if pairs else f"  {_q(icon)}: {{}}")

    palettes = []
    for icon, variants in document.variants.items():
        rows = ",\n".join(
            f"    {_q(name)}: [{', '.join(_q(c) for c in colors)}]" for name, colors in variants.items()
        )
        palettes.append(f"  {_q(icon)}: {{\n{rows}\n  }}" if rows else f"  {_q(icon)}: {{}}")

    return (
        f"{HEADER}\n\n"
        "// Default Variant for each icon (used when no variant attribute is specified)\n"
        f"export const defaultVariants = {_render_table(defaults)};\n\n"
        "// Color mappings per icon: { originalColor: newColor }\n"
        f"export const colorMappings = {_render_table(mappings)};\n\n"
        f"export const Variants = {_render_table(palettes)};\n"
    )


def _strings(value: object) -> dict[str, str]:
    if not isinstance(value, dict):
        return {}
    return {str(k): str(v) for k, v in value.items() if isinstance(v, str)}


def parse_variants_file(content: str) -> VariantsDocument:
    """Read the three exports; a missing export is treated as empty.

    Raises :class:`MalformedContainerError` when an export's braces never balance.
    """
    tables: dict[str, dict] = {}
    pos = 0
    while True:
        m = _DECL_RE.search(content, pos)
        if m is None:
            break
        close = find_matching_brace(content, m.end())
        value, _ = parse_object(content, m.end())
        tables[m.group(1)] = value
        pos = close + 1

    document = VariantsDocument(default_variants=_strings(tables.get("defaultVariants")))
    for icon, mapping in tables.get("colorMappings", {}).items():
        document.color_mappings[icon] = _strings(mapping)
    for icon, variants in tables.get("Variants", {}).items():
        if not isinstance(variants, dict):
            raise MalformedContainerError(f"Variants entry for {icon!r} is not an object")
        document.variants[icon] = {
            name: [str(c) for c in colors]
            for name, colors in variants.items()
            if isinstance(colors, list)
        }
    return document
