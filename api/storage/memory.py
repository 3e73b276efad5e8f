"""
In-memory store.

Questions and answers live in dicts shared by every request task. Access goes
through an asyncio readers-writer lock; each lock section covers exactly one
map operation and never spans an await on anything else.
"""

from __future__ import annotations

import asyncio
import itertools
import json
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from answers.schemas import Answer, AnswerId, NewAnswer
from core.errors import QuestionNotFound
from core.pagination import Pagination
from questions.schemas import NewQuestion, Question, QuestionId

from .base import Store

logger = logging.getLogger(__name__)


class ReadWriteLock:
    """
    Many concurrent readers or one writer. Waiting writers block new readers,
    so a steady stream of GETs cannot starve a POST.
    """

    def __init__(self) -> None:
        self._cond = asyncio.Condition()
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @asynccontextmanager
    async def read(self) -> AsyncIterator[None]:
        async with self._cond:
            await self._cond.wait_for(lambda: not self._writer and self._writers_waiting == 0)
            self._readers += 1
        try:
            yield
        finally:
            async with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @asynccontextmanager
    async def write(self) -> AsyncIterator[None]:
        async with self._cond:
            self._writers_waiting += 1
            try:
                await self._cond.wait_for(lambda: not self._writer and self._readers == 0)
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            async with self._cond:
                self._writer = False
                self._cond.notify_all()


def _window(items: list[Question], pagination: Pagination) -> list[Question]:
    start = pagination.offset
    if pagination.limit is None:
        return items[start:]
    return items[start : start + pagination.limit]


def load_seed_questions(path: str | Path) -> list[Question]:
    """
    Read a JSON seed file: either a list of questions or an object keyed by id
    (`{"1": {"id": 1, "title": ...}}`).
    """
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    records = raw.values() if isinstance(raw, dict) else raw
    return [Question.model_validate(record) for record in records]


class MemoryStore(Store):
    def __init__(self, questions: list[Question] | None = None) -> None:
        self._lock = ReadWriteLock()
        self._questions: dict[QuestionId, Question] = {q.id: q for q in questions or []}
        self._answers: dict[AnswerId, Answer] = {}
        first_id = max(self._questions, default=0) + 1
        self._question_ids = itertools.count(first_id)
        self._answer_ids = itertools.count(1)

    @classmethod
    def from_seed_file(cls, path: str | Path) -> "MemoryStore":
        questions = load_seed_questions(path)
        logger.info("memory_store_seeded path=%s questions=%s", path, len(questions))
        return cls(questions)

    async def get_questions(self, pagination: Pagination) -> list[Question]:
        async with self._lock.read():
            ordered = [self._questions[key] for key in sorted(self._questions)]
        return _window(ordered, pagination)

    async def get_question(self, question_id: QuestionId) -> Question:
        async with self._lock.read():
            question = self._questions.get(question_id)
        if question is None:
            raise QuestionNotFound(question_id)
        return question

    async def add_question(self, new_question: NewQuestion) -> Question:
        async with self._lock.write():
            question = Question(id=QuestionId(next(self._question_ids)), **new_question.model_dump())
            self._questions[question.id] = question
        return question

    async def update_question(self, question: Question, question_id: QuestionId) -> Question:
        updated = question.model_copy(update={"id": question_id})
        async with self._lock.write():
            if question_id not in self._questions:
                raise QuestionNotFound(question_id)
            self._questions[question_id] = updated
        return updated

    async def delete_question(self, question_id: QuestionId) -> None:
        async with self._lock.write():
            if self._questions.pop(question_id, None) is None:
                raise QuestionNotFound(question_id)

    async def add_answer(self, new_answer: NewAnswer) -> Answer:
        async with self._lock.write():
            if new_answer.question_id not in self._questions:
                raise QuestionNotFound(new_answer.question_id)
            answer = Answer(
                id=AnswerId(next(self._answer_ids)),
                content=new_answer.content,
                question_id=new_answer.question_id,
            )
            self._answers[answer.id] = answer
        return answer
