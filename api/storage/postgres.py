"""
Postgres store (raw SQL through `core.db`).

Tables (see `schema.sql`):
- questions(id serial, title, content, tags text[], created_on)
- answers(id serial, content, created_on, corresponding_question)
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import asyncpg

from answers.schemas import Answer, AnswerId, NewAnswer
from core import db
from core.errors import DatabaseQueryError, QuestionNotFound
from core.pagination import Pagination
from questions.schemas import NewQuestion, Question, QuestionId

from .base import Store

logger = logging.getLogger(__name__)

# Everything the driver or the pool can throw at a single query.
DB_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError)


def _row_to_question(row: dict[str, Any]) -> Question:
    tags = row.get("tags")
    return Question(
        id=QuestionId(int(row["id"])),
        title=str(row["title"]),
        content=str(row["content"]),
        tags=list(tags) if tags is not None else None,
    )


def _row_to_answer(row: dict[str, Any]) -> Answer:
    return Answer(
        id=AnswerId(int(row["id"])),
        content=str(row["content"]),
        question_id=QuestionId(int(row["corresponding_question"])),
    )


def _query_failed(operation: str, exc: BaseException) -> DatabaseQueryError:
    logger.error("db_query_failed operation=%s error=%r", operation, exc)
    return DatabaseQueryError()


class PostgresStore(Store):
    @classmethod
    async def connect(cls) -> "PostgresStore":
        """
        Open the pool. Failure here is fatal for startup and is not wrapped.
        """
        await db.init_pool()
        logger.info("postgres_store_connected")
        return cls()

    async def close(self) -> None:
        await db.close_pool()

    async def get_questions(self, pagination: Pagination) -> list[Question]:
        try:
            # LIMIT NULL means no limit.
            rows = await db.fetch_all(
                """
                SELECT id, title, content, tags
                FROM questions
                ORDER BY id ASC
                LIMIT $1
                OFFSET $2
                """,
                pagination.limit,
                pagination.offset,
            )
        except DB_ERRORS as exc:
            raise _query_failed("get_questions", exc) from exc
        return [_row_to_question(row) for row in rows]

    async def get_question(self, question_id: QuestionId) -> Question:
        try:
            row = await db.fetch_one(
                """
                SELECT id, title, content, tags
                FROM questions
                WHERE id = $1
                """,
                question_id,
            )
        except DB_ERRORS as exc:
            raise _query_failed("get_question", exc) from exc
        if row is None:
            raise QuestionNotFound(question_id)
        return _row_to_question(row)

    async def add_question(self, new_question: NewQuestion) -> Question:
        try:
            row = await db.fetch_one(
                """
                INSERT INTO questions (title, content, tags)
                VALUES ($1, $2, $3)
                RETURNING id, title, content, tags
                """,
                new_question.title,
                new_question.content,
                new_question.tags,
            )
        except DB_ERRORS as exc:
            raise _query_failed("add_question", exc) from exc
        if row is None:
            raise DatabaseQueryError()
        return _row_to_question(row)

    async def update_question(self, question: Question, question_id: QuestionId) -> Question:
        try:
            row = await db.fetch_one(
                """
                UPDATE questions
                SET title = $1,
                    content = $2,
                    tags = $3
                WHERE id = $4
                RETURNING id, title, content, tags
                """,
                question.title,
                question.content,
                question.tags,
                question_id,
            )
        except DB_ERRORS as exc:
            raise _query_failed("update_question", exc) from exc
        if row is None:
            raise QuestionNotFound(question_id)
        return _row_to_question(row)

    async def delete_question(self, question_id: QuestionId) -> None:
        try:
            row = await db.fetch_one(
                """
                DELETE FROM questions
                WHERE id = $1
                RETURNING id
                """,
                question_id,
            )
        except DB_ERRORS as exc:
            raise _query_failed("delete_question", exc) from exc
        if row is None:
            raise QuestionNotFound(question_id)

    async def add_answer(self, new_answer: NewAnswer) -> Answer:
        try:
            # The existence check and the insert are one statement.
            row = await db.fetch_one(
                """
                INSERT INTO answers (content, corresponding_question)
                SELECT $1, q.id
                FROM questions q
                WHERE q.id = $2
                RETURNING id, content, corresponding_question
                """,
                new_answer.content,
                new_answer.question_id,
            )
        except DB_ERRORS as exc:
            raise _query_failed("add_answer", exc) from exc
        if row is None:
            raise QuestionNotFound(new_answer.question_id)
        return _row_to_answer(row)
