"""Dependency injection for FastAPI — application settings."""

from __future__ import annotations

from fastapi import Request

from errorgen.settings import Settings


def get_settings(request: Request) -> Settings:
    """FastAPI ``Depends`` provider for the app's Settings."""
    settings: Settings | None = getattr(request.app.state, "settings", None)
    if settings is None:
        raise RuntimeError("Settings not initialised — build the app with create_app()")
    return settings
