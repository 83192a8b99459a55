"""FastAPI dependencies."""
from __future__ import annotations

from typing import Optional

from fastapi import Header, Request

from ..access import DemoModeGuard
from ..config import Settings
from ..service import QuizService
from ..storage import create_repository


def get_settings_dep(request: Request) -> Settings:
    return request.app.state.settings


def get_service(request: Request) -> QuizService:
    """Shared QuizService, built on first use from settings."""
    state = request.app.state
    if getattr(state, "service", None) is None:
        settings: Settings = state.settings
        state.service = QuizService(create_repository(settings), share_base_url=settings.share_base_url)
    return state.service


def require_demo_pin(
    request: Request,
    x_demo_pin: Optional[str] = Header(default=None),
) -> None:
    """Gate admin writes behind the demo PIN when the guard is enabled."""
    settings: Settings = request.app.state.settings
    if not settings.demo_guard_enabled:
        return
    DemoModeGuard(settings.admin_pin).unlock(x_demo_pin)
