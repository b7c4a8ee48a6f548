"""API request models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from iconsmith.color.model import PaletteTransform
from iconsmith.models.icon import IconAnimation, IconName, ViewBox

Target = Literal["module", "sprite"]


class IconUpsertRequest(BaseModel):
    name: IconName = Field(..., description="Icon name, e.g. arrow-right")
    body: str | None = Field(default=None, description="Inner markup of the icon")
    svg: str | None = Field(default=None, description="Full SVG document; body and viewBox are extracted")
    view_box: ViewBox | None = Field(default=None, description="Overrides the extracted / default viewBox")
    animation: IconAnimation | None = None
    target: Target = "module"


class IconRenameRequest(BaseModel):
    new_name: IconName
    target: Target = "module"


class SvgRequest(BaseModel):
    svg: str = Field(..., description="Raw SVG code")


class ColorReplaceRequest(BaseModel):
    svg: str = Field(..., description="Raw SVG code")
    replacements: dict[str, str] = Field(..., description="old color -> new color, applied in one pass")


class ContrastRequest(BaseModel):
    color1: str
    color2: str


class TransformRequest(BaseModel):
    colors: list[str]
    kind: PaletteTransform
    amount: float | None = Field(default=None, ge=0.0, le=1.0)


class NormalizeRequest(BaseModel):
    colors: list[str]


class SessionOpenRequest(BaseModel):
    icon_name: str = Field(..., min_length=1)
    svg: str = Field(..., description="Icon markup as currently stored")
    load_saved: bool = Field(default=True, description="Seed the ledger from the variants file")


class VariantNameRequest(BaseModel):
    name: str = Field(..., min_length=1)


class VariantIndexRequest(BaseModel):
    index: int = Field(..., ge=0)


class VariantRenameRequest(BaseModel):
    index: int = Field(..., ge=0)
    new_name: str = Field(..., min_length=1)


class DefaultVariantRequest(BaseModel):
    name: str | None = None


class ColorChangeRequest(BaseModel):
    old_color: str
    new_color: str
    original_color: str | None = None


class CurrentColorRequest(BaseModel):
    new_color: str


class AutoVariantRequest(BaseModel):
    kind: PaletteTransform
