"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from iconsmith import __version__
from iconsmith.config import Settings, settings
from iconsmith.store.files import IconOutputService
from iconsmith.variants.sessions import EditorSessions

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.iconsmith_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)


def create_app(app_settings: Settings | None = None) -> FastAPI:
    app_settings = app_settings or settings
    app = FastAPI(
        title="iconsmith",
        description="Icon library output files, color editing and palette variants",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = app_settings
    app.state.output_service = IconOutputService(app_settings.output_directory, app_settings)
    app.state.sessions = EditorSessions()

    from iconsmith.api.router import api_router

    app.include_router(api_router)

    return app


app = create_app()
