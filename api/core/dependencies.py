"""
Request-scoped access to the objects built once at startup.
"""

from __future__ import annotations

from fastapi import Request

from core.moderation import ModerationClient
from storage import Store


def get_store(request: Request) -> Store:
    return request.app.state.store


def get_moderation(request: Request) -> ModerationClient:
    return request.app.state.moderation
