"""Storefront application factory."""

from datetime import timedelta
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from shared.config import get_settings
from shared.service import create_app
from storefront.domain import storefront
from storefront.session.store import SessionStore
from storefront.web import session_middleware, web_router

STATIC_DIR = Path(__file__).resolve().parent / "static"


def build_app() -> FastAPI:
    app = create_app(
        service="frontend-service",
        domain=storefront,
        routers=[web_router],
        metrics_name="frontend_service",
        title="ShopMate Storefront",
        middleware=[session_middleware],
    )
    app.state.sessions = SessionStore(ttl=timedelta(hours=get_settings().session_ttl_hours))
    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")
    return app
