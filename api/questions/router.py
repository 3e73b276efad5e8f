"""
Question API endpoints.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request
from fastapi.responses import PlainTextResponse

from core.dependencies import get_moderation, get_store
from core.moderation import ModerationClient
from storage import Store

from . import service
from .schemas import MAX_QUESTION_ID, MIN_QUESTION_ID, NewQuestion, Question

router = APIRouter()

QuestionIdPath = Annotated[int, Path(ge=MIN_QUESTION_ID, le=MAX_QUESTION_ID)]


@router.get("/questions", response_model=list[Question])
async def get_questions(
    request: Request,
    store: Store = Depends(get_store),
) -> list[Question]:
    """
    All questions, or one page of them with `?limit=&offset=` or `?start=&end=`.
    """
    return await service.list_questions(store, dict(request.query_params))


@router.get("/questions/{question_id}", response_model=Question)
async def get_question(
    question_id: QuestionIdPath,
    store: Store = Depends(get_store),
) -> Question:
    return await service.get_question(store, question_id)


@router.post("/questions", response_class=PlainTextResponse)
async def add_question(
    new_question: NewQuestion,
    store: Store = Depends(get_store),
    moderation: ModerationClient = Depends(get_moderation),
) -> PlainTextResponse:
    await service.add_question(store, moderation, new_question)
    return PlainTextResponse("Question added", status_code=200)


@router.put("/questions/{question_id}", response_model=Question)
async def update_question(
    question_id: QuestionIdPath,
    question: Question,
    store: Store = Depends(get_store),
    moderation: ModerationClient = Depends(get_moderation),
) -> Question:
    return await service.update_question(store, moderation, question_id, question)


@router.delete("/questions/{question_id}", response_class=PlainTextResponse)
async def delete_question(
    question_id: QuestionIdPath,
    store: Store = Depends(get_store),
) -> PlainTextResponse:
    await service.delete_question(store, question_id)
    return PlainTextResponse(f"Question {question_id} deleted", status_code=200)
