"""POST /api/colors/* — stateless color analysis and transforms."""

from __future__ import annotations

from fastapi import APIRouter

from iconsmith.color.extractor import (
    analyze_svg_colors,
    apply_color_replacements,
    display_colors,
    get_primary_color,
)
from iconsmith.color.model import get_contrast_ratio, is_light_color, normalize_color, transform_palette
from iconsmith.models.requests import (
    ColorReplaceRequest,
    ContrastRequest,
    NormalizeRequest,
    SvgRequest,
    TransformRequest,
)
from iconsmith.models.responses import ColorsResponse, ContrastResponse, ExtractResponse, SvgResponse

router = APIRouter(prefix="/colors")


@router.post("/extract", response_model=ExtractResponse)
async def extract(req: SvgRequest) -> ExtractResponse:
    palette = analyze_svg_colors(req.svg)
    return ExtractResponse(
        samples=palette.samples,
        colors=palette.colors,
        display_colors=display_colors(palette),
        has_current_color=palette.has_current_color,
        has_smil=palette.has_smil,
        primary_color=get_primary_color(req.svg),
        monochrome=len(palette.samples) <= 1,
    )


@router.post("/replace", response_model=SvgResponse)
async def replace(req: ColorReplaceRequest) -> SvgResponse:
    svg = apply_color_replacements(req.svg, req.replacements)
    return SvgResponse(svg=svg, changed=svg != req.svg)


@router.post("/contrast", response_model=ContrastResponse)
async def contrast(req: ContrastRequest) -> ContrastResponse:
    return ContrastResponse(
        ratio=round(get_contrast_ratio(req.color1, req.color2), 2),
        color1_is_light=is_light_color(req.color1),
        color2_is_light=is_light_color(req.color2),
    )


@router.post("/transform", response_model=ColorsResponse)
async def transform(req: TransformRequest) -> ColorsResponse:
    return ColorsResponse(colors=transform_palette(req.colors, req.kind, req.amount))


@router.post("/normalize", response_model=ColorsResponse)
async def normalize(req: NormalizeRequest) -> ColorsResponse:
    return ColorsResponse(colors=[normalize_color(c) for c in req.colors])
