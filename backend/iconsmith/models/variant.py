"""Variant palette models."""

from __future__ import annotations

from pydantic import BaseModel, Field

ORIGINAL_INDEX = -1
CUSTOM_VARIANT = "custom"
# Names with this prefix are bookkeeping entries, never listed as variants
HIDDEN_PREFIX = "_"


class Variant(BaseModel):
    name: str = Field(..., min_length=1)
    colors: list[str] = Field(default_factory=list)


class VariantSet(BaseModel):
    """Named palettes of one icon plus the default-variant pointer."""

    variants: list[Variant] = Field(default_factory=list)
    default_variant_name: str | None = None

    def names(self) -> list[str]:
        return [v.name for v in self.variants]

    def index_of(self, name: str) -> int:
        for i, v in enumerate(self.variants):
            if v.name == name:
                return i
        return -1

    def get(self, name: str) -> Variant | None:
        i = self.index_of(name)
        return self.variants[i] if i >= 0 else None

    def unique_name(self, base: str) -> str:
        """Return ``base`` or the first free ``base 2``, ``base 3``, ..."""
        taken = set(self.names())
        candidate = base
        counter = 2
        while candidate in taken:
            candidate = f"{base} {counter}"
            counter += 1
        return candidate
