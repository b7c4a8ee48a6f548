"""Per-icon variant ledger: selection state, named palettes and the default pointer.

Selection is an index into the named variants, or ``ORIGINAL_INDEX`` for the
read-only palette captured when the ledger was opened. Editing colors while
the original is selected forks into the ``custom`` variant first.
"""

from __future__ import annotations

import logging
import threading

from iconsmith.color.extractor import (
    apply_color_replacements,
    extract_colors_from_svg,
    replace_color_in_svg,
)
from iconsmith.color.model import PaletteTransform, auto_variant, normalize_color
from iconsmith.models.variant import CUSTOM_VARIANT, HIDDEN_PREFIX, ORIGINAL_INDEX, Variant, VariantSet

logger = logging.getLogger(__name__)


def current_colors(svg: str) -> list[str]:
    """Editable colors of ``svg`` in extraction order."""
    return [s.normalized_color for s in extract_colors_from_svg(svg) if s.normalized_color]


class VariantLedger:
    def __init__(
        self,
        icon_name: str,
        svg: str,
        variant_set: VariantSet | None = None,
        color_mappings: dict[str, str] | None = None,
    ):
        self.icon_name = icon_name
        self.original_svg = svg
        self.svg = svg
        self.original_colors: tuple[str, ...] = tuple(current_colors(svg))
        self.variant_set = variant_set.model_copy(deep=True) if variant_set else VariantSet()
        self.color_mappings: dict[str, str] = dict(color_mappings or {})
        self.selected_index = ORIGINAL_INDEX
        # Callers sharing a ledger between threads hold this around each operation
        self.lock = threading.RLock()

        default = self.variant_set.default_variant_name
        if default is not None and self.variant_set.index_of(default) < 0:
            logger.warning("Dropping dangling default variant %r for %s", default, icon_name)
            self.variant_set.default_variant_name = None

    # -- state ---------------------------------------------------------------

    @property
    def variants(self) -> list[Variant]:
        return self.variant_set.variants

    @property
    def default_variant_name(self) -> str | None:
        return self.variant_set.default_variant_name

    @property
    def colors(self) -> list[str]:
        return current_colors(self.svg)

    @property
    def selected(self) -> Variant | None:
        if self.selected_index == ORIGINAL_INDEX:
            return None
        return self.variants[self.selected_index]

    @property
    def selection(self) -> str:
        """``original``, ``custom`` or ``named``."""
        variant = self.selected
        if variant is None:
            return "original"
        return "custom" if variant.name == CUSTOM_VARIANT else "named"

    def _check_name(self, name: str) -> None:
        if name.startswith(HIDDEN_PREFIX):
            raise ValueError(f"Variant names may not start with {HIDDEN_PREFIX!r}")

    def _check_index(self, index: int) -> Variant:
        if not 0 <= index < len(self.variants):
            raise IndexError(f"No variant at index {index} for {self.icon_name}")
        return self.variants[index]

    # -- variants ------------------------------------------------------------

    def save(self, name: str) -> Variant:
        """Snapshot the current colors under a free name derived from ``name``.

        Raises ``ValueError`` for names reserved for bookkeeping entries.
        """
        base = name.strip() or "Variant"
        self._check_name(base)
        variant = Variant(name=self.variant_set.unique_name(base), colors=self.colors)
        self.variants.append(variant)
        logger.info("Saved variant %r for %s (%d colors)", variant.name, self.icon_name, len(variant.colors))
        return variant

    def apply(self, index: int) -> str:
        """Select the variant and map its colors onto the current ones by position."""
        variant = self._check_index(index)
        pairs = list(zip(self.colors, variant.colors))
        self.svg = apply_color_replacements(self.svg, pairs)
        self.selected_index = index
        logger.debug("Applied variant %r to %s (%d substitutions)", variant.name, self.icon_name, len(pairs))
        return self.svg

    def apply_original(self) -> str:
        """Restore the markup captured at load and select the original."""
        self.svg = self.original_svg
        self.selected_index = ORIGINAL_INDEX
        return self.svg

    def delete(self, index: int) -> Variant:
        variant = self._check_index(index)
        del self.variants[index]

        if self.selected_index == index:
            self.selected_index = ORIGINAL_INDEX
        elif self.selected_index > index:
            self.selected_index -= 1

        if self.variant_set.default_variant_name == variant.name:
            self.variant_set.default_variant_name = None

        logger.info("Deleted variant %r of %s", variant.name, self.icon_name)
        return variant

    def set_default(self, name: str | None) -> bool:
        """Point the default at an existing variant, or clear it with ``None``."""
        if name is not None and self.variant_set.index_of(name) < 0:
            return False
        self.variant_set.default_variant_name = name
        return True

    def rename(self, index: int, new_name: str) -> Variant:
        variant = self._check_index(index)
        new_name = new_name.strip()
        if not new_name:
            raise ValueError("Variant name must not be empty")
        self._check_name(new_name)
        if new_name != variant.name and self.variant_set.index_of(new_name) >= 0:
            raise ValueError(f"Variant {new_name!r} already exists")

        if self.variant_set.default_variant_name == variant.name:
            self.variant_set.default_variant_name = new_name
        variant.name = new_name
        return variant

    def ensure_custom(self) -> int:
        """Index of the ``custom`` variant, created from the original colors if absent."""
        index = self.variant_set.index_of(CUSTOM_VARIANT)
        if index >= 0:
            return index
        self.variants.append(Variant(name=CUSTOM_VARIANT, colors=list(self.original_colors)))
        return len(self.variants) - 1

    def generate_auto(self, kind: PaletteTransform) -> Variant:
        """Save a palette derived from the current colors by ``kind``."""
        colors, base = auto_variant(self.colors, kind)
        variant = Variant(name=self.variant_set.unique_name(base), colors=colors)
        self.variants.append(variant)
        logger.info("Generated %s variant %r for %s", kind, variant.name, self.icon_name)
        return variant

    # -- color edits ---------------------------------------------------------

    def _edit_target(self) -> Variant:
        if self.selected_index == ORIGINAL_INDEX:
            self.selected_index = self.ensure_custom()
        return self.variants[self.selected_index]

    def _original_of(self, color: str) -> str:
        """Original color at the position ``color`` currently occupies."""
        normalized = normalize_color(color)
        colors = self.colors
        if normalized in colors:
            position = colors.index(normalized)
            if position < len(self.original_colors):
                return self.original_colors[position]
        return normalized or color

    def change_color(self, old_color: str, new_color: str, original_color: str | None = None) -> str:
        """Replace ``old_color`` in the markup and record the edit on the selected variant.

        Returns the markup unchanged, without touching the selection, when
        ``old_color`` does not occur.
        """
        updated = replace_color_in_svg(self.svg, old_color, new_color)
        if updated is self.svg:
            return self.svg

        origin = original_color or self._original_of(old_color)
        self.color_mappings[origin] = normalize_color(new_color) or new_color
        return self._commit(updated)

    def replace_current_color(self, new_color: str) -> str:
        """Swap every ``currentColor`` for a concrete color."""
        updated = replace_color_in_svg(self.svg, "currentColor", new_color)
        if updated is self.svg:
            return self.svg
        return self._commit(updated)

    def _commit(self, svg: str) -> str:
        target = self._edit_target()
        self.svg = svg
        target.colors = self.colors
        return self.svg
