"""
Question orchestration.

Flow for writes:
1) Censor title, then content (one moderation call each)
2) Persist the sanitized record

A moderation failure on either field aborts before the store is touched.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from core.moderation import ModerationClient
from core.pagination import pagination_from_query
from storage import Store

from .schemas import NewQuestion, Question, QuestionId

logger = logging.getLogger(__name__)


async def _censor_title_and_content(
    moderation: ModerationClient,
    *,
    title: str,
    content: str,
) -> tuple[str, str]:
    censored_title = await moderation.censor(title)
    censored_content = await moderation.censor(content)
    return censored_title, censored_content


async def list_questions(store: Store, params: Mapping[str, str]) -> list[Question]:
    pagination = pagination_from_query(params)
    logger.info(
        "querying_questions paginated=%s limit=%s offset=%s",
        bool(params),
        pagination.limit,
        pagination.offset,
    )
    return await store.get_questions(pagination)


async def get_question(store: Store, question_id: QuestionId) -> Question:
    return await store.get_question(question_id)


async def add_question(
    store: Store,
    moderation: ModerationClient,
    new_question: NewQuestion,
) -> Question:
    title, content = await _censor_title_and_content(
        moderation,
        title=new_question.title,
        content=new_question.content,
    )
    question = await store.add_question(
        NewQuestion(title=title, content=content, tags=new_question.tags)
    )
    logger.info("question_added question_id=%s", question.id)
    return question


async def update_question(
    store: Store,
    moderation: ModerationClient,
    question_id: QuestionId,
    question: Question,
) -> Question:
    title, content = await _censor_title_and_content(
        moderation,
        title=question.title,
        content=question.content,
    )
    sanitized = question.model_copy(update={"title": title, "content": content})
    updated = await store.update_question(sanitized, question_id)
    logger.info("question_updated question_id=%s", question_id)
    return updated


async def delete_question(store: Store, question_id: QuestionId) -> None:
    await store.delete_question(question_id)
    logger.info("question_deleted question_id=%s", question_id)
