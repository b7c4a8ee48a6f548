"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from iconsmith.models.color import ColorSample
from iconsmith.models.variant import Variant


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    output_directory: str = ""


class IconListResponse(BaseModel):
    target: str
    names: list[str] = Field(default_factory=list)


class IconResponse(BaseModel):
    name: str
    exists: bool
    view_box: str | None = None
    body: str | None = None


class WriteResponse(BaseModel):
    name: str
    status: str
    path: str


class ExtractResponse(BaseModel):
    samples: list[ColorSample] = Field(default_factory=list)
    colors: list[str] = Field(default_factory=list)
    display_colors: list[str] = Field(default_factory=list)
    has_current_color: bool = False
    has_smil: bool = False
    primary_color: str | None = None
    monochrome: bool = True


class SvgResponse(BaseModel):
    svg: str
    changed: bool = False


class ContrastResponse(BaseModel):
    ratio: float
    color1_is_light: bool
    color2_is_light: bool


class ColorsResponse(BaseModel):
    colors: list[str | None] = Field(default_factory=list)


class SessionResponse(BaseModel):
    session_id: str
    icon_name: str
    svg: str
    colors: list[str] = Field(default_factory=list)
    original_colors: list[str] = Field(default_factory=list)
    variants: list[Variant] = Field(default_factory=list)
    selected_index: int = -1
    selection: str = "original"
    default_variant_name: str | None = None
    color_mappings: dict[str, str] = Field(default_factory=dict)
