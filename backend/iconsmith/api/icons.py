"""/api/icons — register, list, rename and remove icons in the output files."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from iconsmith.dependencies import get_output_service
from iconsmith.models.requests import IconRenameRequest, IconUpsertRequest, Target
from iconsmith.models.responses import IconListResponse, IconResponse, WriteResponse
from iconsmith.store.files import IconOutputService
from iconsmith.store.literal import MalformedContainerError
from iconsmith.store.module_file import IdentifierConflictError
from iconsmith.svg.transformer import extract_svg_body, extract_view_box

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/icons")

FILE_NOT_FOUND = "file-not-found"


def _conflict(e: MalformedContainerError) -> HTTPException:
    logger.warning("Refusing to modify malformed container: %s", e)
    return HTTPException(status_code=409, detail=f"malformed-container: {e}")


@router.get("", response_model=IconListResponse)
def list_icons(
    target: Target = Query("module"),
    service: IconOutputService = Depends(get_output_service),
) -> IconListResponse:
    try:
        names = service.list_icons(target)
    except MalformedContainerError as e:
        raise _conflict(e)
    if names is None:
        raise HTTPException(status_code=404, detail=FILE_NOT_FOUND)
    return IconListResponse(target=target, names=names)


@router.get("/{name}", response_model=IconResponse)
def get_icon(
    name: str,
    target: Target = Query("module"),
    service: IconOutputService = Depends(get_output_service),
) -> IconResponse:
    if not service.path_for(target).exists():
        raise HTTPException(status_code=404, detail=FILE_NOT_FOUND)
    try:
        record = service.get_icon(name, target)
    except MalformedContainerError as e:
        raise _conflict(e)
    if record is None:
        return IconResponse(name=name, exists=False)
    return IconResponse(name=name, exists=True, view_box=record.view_box, body=record.body)


@router.post("", response_model=WriteResponse)
def upsert_icon(
    req: IconUpsertRequest,
    service: IconOutputService = Depends(get_output_service),
) -> WriteResponse:
    if req.body is None and req.svg is None:
        raise HTTPException(status_code=422, detail="Either body or svg is required")

    body = req.body if req.body is not None else extract_svg_body(req.svg)
    view_box = req.view_box or (extract_view_box(req.svg) if req.svg else None)

    try:
        status = service.add_icon(req.name, body, view_box, req.animation, req.target)
    except MalformedContainerError as e:
        raise _conflict(e)
    except IdentifierConflictError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return WriteResponse(name=req.name, status=status.value, path=str(service.path_for(req.target)))


@router.delete("/{name}")
def delete_icon(
    name: str,
    target: Target = Query("module"),
    service: IconOutputService = Depends(get_output_service),
) -> dict[str, bool]:
    if not service.path_for(target).exists():
        raise HTTPException(status_code=404, detail=FILE_NOT_FOUND)
    try:
        removed = service.remove_icon(name, target)
    except MalformedContainerError as e:
        raise _conflict(e)
    return {"removed": removed}


@router.post("/{name}/rename")
def rename_icon(
    name: str,
    req: IconRenameRequest,
    service: IconOutputService = Depends(get_output_service),
) -> dict[str, bool]:
    if not service.path_for(req.target).exists():
        raise HTTPException(status_code=404, detail=FILE_NOT_FOUND)
    try:
        renamed = service.rename_icon(name, req.new_name, req.target)
    except MalformedContainerError as e:
        raise _conflict(e)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if not renamed and name != req.new_name:
        raise HTTPException(status_code=404, detail=f"Icon {name!r} not found")
    return {"renamed": renamed}
