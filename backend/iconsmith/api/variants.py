"""/api/variants/sessions — interactive variant editing for one icon at a time."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import APIRouter, Depends, HTTPException

from iconsmith.dependencies import get_output_service, get_sessions
from iconsmith.models.requests import (
    AutoVariantRequest,
    ColorChangeRequest,
    CurrentColorRequest,
    DefaultVariantRequest,
    SessionOpenRequest,
    VariantIndexRequest,
    VariantNameRequest,
    VariantRenameRequest,
)
from iconsmith.models.responses import SessionResponse
from iconsmith.store.files import IconOutputService
from iconsmith.store.literal import MalformedContainerError
from iconsmith.variants.ledger import VariantLedger
from iconsmith.variants.persistence import VariantsDocument
from iconsmith.variants.sessions import EditorSessions

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/variants/sessions")


def _snapshot(session_id: str, ledger: VariantLedger) -> SessionResponse:
    return SessionResponse(
        session_id=session_id,
        icon_name=ledger.icon_name,
        svg=ledger.svg,
        colors=ledger.colors,
        original_colors=list(ledger.original_colors),
        variants=ledger.variants,
        selected_index=ledger.selected_index,
        selection=ledger.selection,
        default_variant_name=ledger.default_variant_name,
        color_mappings=ledger.color_mappings,
    )


def _ledger(session_id: str, sessions: EditorSessions) -> VariantLedger:
    ledger = sessions.get(session_id)
    if ledger is None:
        raise HTTPException(status_code=404, detail=f"Unknown session {session_id}")
    return ledger


@contextmanager
def _locked(session_id: str, sessions: EditorSessions) -> Iterator[VariantLedger]:
    """The session's ledger, held exclusively for one request."""
    ledger = _ledger(session_id, sessions)
    with ledger.lock:
        yield ledger


@router.post("", response_model=SessionResponse)
def open_session(
    req: SessionOpenRequest,
    sessions: EditorSessions = Depends(get_sessions),
    service: IconOutputService = Depends(get_output_service),
) -> SessionResponse:
    variant_set = None
    mappings = None
    if req.load_saved:
        try:
            document = service.read_variants()
        except MalformedContainerError as e:
            raise HTTPException(status_code=409, detail=f"malformed-container: {e}")
        variant_set = document.variant_set(req.icon_name)
        mappings = document.color_mappings.get(req.icon_name)

    ledger = VariantLedger(req.icon_name, req.svg, variant_set, mappings)
    return _snapshot(sessions.open(ledger), ledger)


@router.get("/{session_id}", response_model=SessionResponse)
def get_session(session_id: str, sessions: EditorSessions = Depends(get_sessions)) -> SessionResponse:
    with _locked(session_id, sessions) as ledger:
        return _snapshot(session_id, ledger)


@router.delete("/{session_id}")
def close_session(session_id: str, sessions: EditorSessions = Depends(get_sessions)) -> dict[str, bool]:
    if not sessions.close(session_id):
        raise HTTPException(status_code=404, detail=f"Unknown session {session_id}")
    return {"closed": True}


@router.post("/{session_id}/save", response_model=SessionResponse)
def save_variant(
    session_id: str, req: VariantNameRequest, sessions: EditorSessions = Depends(get_sessions)
) -> SessionResponse:
    with _locked(session_id, sessions) as ledger:
        try:
            ledger.save(req.name)
        except ValueError as e:
            raise HTTPException(status_code=422, detail=str(e))
        return _snapshot(session_id, ledger)


@router.post("/{session_id}/apply", response_model=SessionResponse)
def apply_variant(
    session_id: str, req: VariantIndexRequest, sessions: EditorSessions = Depends(get_sessions)
) -> SessionResponse:
    with _locked(session_id, sessions) as ledger:
        try:
            ledger.apply(req.index)
        except IndexError as e:
            raise HTTPException(status_code=404, detail=str(e))
        return _snapshot(session_id, ledger)


@router.post("/{session_id}/original", response_model=SessionResponse)
def apply_original(session_id: str, sessions: EditorSessions = Depends(get_sessions)) -> SessionResponse:
    with _locked(session_id, sessions) as ledger:
        ledger.apply_original()
        return _snapshot(session_id, ledger)


@router.post("/{session_id}/delete", response_model=SessionResponse)
def delete_variant(
    session_id: str, req: VariantIndexRequest, sessions: EditorSessions = Depends(get_sessions)
) -> SessionResponse:
    with _locked(session_id, sessions) as ledger:
        try:
            ledger.delete(req.index)
        except IndexError as e:
            raise HTTPException(status_code=404, detail=str(e))
        return _snapshot(session_id, ledger)


@router.post("/{session_id}/rename", response_model=SessionResponse)
def rename_variant(
    session_id: str, req: VariantRenameRequest, sessions: EditorSessions = Depends(get_sessions)
) -> SessionResponse:
    with _locked(session_id, sessions) as ledger:
        try:
            ledger.rename(req.index, req.new_name)
        except IndexError as e:
            raise HTTPException(status_code=404, detail=str(e))
        except ValueError as e:
            raise HTTPException(status_code=409, detail=str(e))
        return _snapshot(session_id, ledger)


@router.post("/{session_id}/default", response_model=SessionResponse)
def set_default(
    session_id: str, req: DefaultVariantRequest, sessions: EditorSessions = Depends(get_sessions)
) -> SessionResponse:
    with _locked(session_id, sessions) as ledger:
        if not ledger.set_default(req.name):
            raise HTTPException(status_code=404, detail=f"Unknown variant {req.name!r}")
        return _snapshot(session_id, ledger)


@router.post("/{session_id}/color", response_model=SessionResponse)
def change_color(
    session_id: str, req: ColorChangeRequest, sessions: EditorSessions = Depends(get_sessions)
) -> SessionResponse:
    with _locked(session_id, sessions) as ledger:
        ledger.change_color(req.old_color, req.new_color, req.original_color)
        return _snapshot(session_id, ledger)


@router.post("/{session_id}/current-color", response_model=SessionResponse)
def replace_current_color(
    session_id: str, req: CurrentColorRequest, sessions: EditorSessions = Depends(get_sessions)
) -> SessionResponse:
    with _locked(session_id, sessions) as ledger:
        ledger.replace_current_color(req.new_color)
        return _snapshot(session_id, ledger)


@router.post("/{session_id}/auto", response_model=SessionResponse)
def generate_auto(
    session_id: str, req: AutoVariantRequest, sessions: EditorSessions = Depends(get_sessions)
) -> SessionResponse:
    with _locked(session_id, sessions) as ledger:
        ledger.generate_auto(req.kind)
        return _snapshot(session_id, ledger)


@router.post("/{session_id}/persist", response_model=SessionResponse)
def persist(
    session_id: str,
    sessions: EditorSessions = Depends(get_sessions),
    service: IconOutputService = Depends(get_output_service),
) -> SessionResponse:
    with _locked(session_id, sessions) as ledger:
        def update(document: VariantsDocument) -> None:
            document.store(
                ledger.icon_name,
                ledger.variant_set,
                ledger.color_mappings,
                original_colors=list(ledger.original_colors),
            )

        try:
            service.update_variants(update)
        except MalformedContainerError as e:
            raise HTTPException(status_code=409, detail=f"malformed-container: {e}")
        logger.info("Persisted variants of %s", ledger.icon_name)
        return _snapshot(session_id, ledger)
