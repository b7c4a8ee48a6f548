"""FastAPI dependency injection."""

from __future__ import annotations

from fastapi import Request

from iconsmith.config import Settings
from iconsmith.store.files import IconOutputService
from iconsmith.variants.sessions import EditorSessions


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_output_service(request: Request) -> IconOutputService:
    return request.app.state.output_service


def get_sessions(request: Request) -> EditorSessions:
    return request.app.state.sessions
