"""FastAPI dependencies"""

from fastapi import Request

from explorer.config import Settings
from explorer.services.explorer_service import ExplorerService


def get_explorer_service(request: Request) -> ExplorerService:
    return request.app.state.explorer


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
