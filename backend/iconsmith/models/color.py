"""Color extraction models."""

from __future__ import annotations

from pydantic import BaseModel, Field, computed_field


class ColorSample(BaseModel):
    """Usage of one unique color inside a single icon's markup."""

    color: str  # Text as first encountered in the markup
    normalized_color: str | None = None  # Canonical #rrggbb
    fill_count: int = 0
    stroke_count: int = 0

    @computed_field
    @property
    def total_count(self) -> int:
        return self.fill_count + self.stroke_count


class ColorPalette(BaseModel):
    """Everything a color picker needs to know about one icon."""

    samples: list[ColorSample] = Field(default_factory=list)
    has_current_color: bool = False
    has_smil: bool = False

    @computed_field
    @property
    def colors(self) -> list[str]:
        return [s.normalized_color for s in self.samples if s.normalized_color]
