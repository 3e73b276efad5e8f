"""
Answer API endpoints.
"""

from __future__ import annotations

import json
from typing import Any
from urllib.parse import parse_qsl

from fastapi import APIRouter, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from core.dependencies import get_moderation, get_store
from core.moderation import ModerationClient
from storage import Store

from . import service
from .schemas import NewAnswer

router = APIRouter()

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


async def _read_new_answer(request: Request) -> NewAnswer:
    """
    Accept either a JSON body or a url-encoded form
    (`content=...&questionId=...`).
    """
    body = await request.body()
    content_type = request.headers.get("content-type", "").split(";", 1)[0].strip().lower()

    data: Any
    if content_type == FORM_CONTENT_TYPE:
        try:
            # Raw bytes and %-escapes must both be valid UTF-8.
            data = dict(parse_qsl(body.decode("utf-8"), keep_blank_values=True, errors="strict"))
        except UnicodeDecodeError as exc:
            raise RequestValidationError(
                [{"type": "string_unicode", "loc": ("body",), "msg": "Form body is not valid UTF-8", "input": None}]
            ) from exc
    else:
        try:
            data = json.loads(body or b"null")
        except ValueError as exc:
            raise RequestValidationError(
                [{"type": "json_invalid", "loc": ("body",), "msg": "JSON decode error", "input": None}]
            ) from exc

    try:
        return NewAnswer.model_validate(data)
    except ValidationError as exc:
        raise RequestValidationError(
            [{**err, "loc": ("body", *err["loc"])} for err in exc.errors()]
        ) from exc


@router.post("/answers", response_class=PlainTextResponse)
async def add_answer(
    request: Request,
    store: Store = Depends(get_store),
    moderation: ModerationClient = Depends(get_moderation),
) -> PlainTextResponse:
    new_answer = await _read_new_answer(request)
    await service.add_answer(store, moderation, new_answer)
    return PlainTextResponse("Answer added", status_code=200)
