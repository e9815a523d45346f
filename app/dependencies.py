"""
FastAPI dependencies shared by the route modules.
"""
from fastapi import Request

from app.config import Settings
from app.store import PasteStore


def get_store(request: Request) -> PasteStore:
    """Paste store owned by the running application."""
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
