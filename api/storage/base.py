"""
Storage contract shared by the in-memory and postgres backends.

Handlers depend on `Store` only; the concrete backend is chosen once at
startup (see `storage.build_store`).
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from answers.schemas import Answer, NewAnswer
from core.pagination import Pagination
from questions.schemas import NewQuestion, Question, QuestionId


class Store(ABC):
    @abstractmethod
    async def get_questions(self, pagination: Pagination) -> list[Question]:
        """
        Questions in ascending id order, windowed by `pagination`.
        A window outside the collection yields a short or empty list.
        """

    @abstractmethod
    async def get_question(self, question_id: QuestionId) -> Question:
        """
        Raises QuestionNotFound.
        """

    @abstractmethod
    async def add_question(self, new_question: NewQuestion) -> Question:
        ...

    @abstractmethod
    async def update_question(self, question: Question, question_id: QuestionId) -> Question:
        """
        Overwrite every field of the record at `question_id`; the stored id
        stays `question_id` whatever `question.id` says. Raises QuestionNotFound.
        """

    @abstractmethod
    async def delete_question(self, question_id: QuestionId) -> None:
        """
        Raises QuestionNotFound. Answers to the question are left alone.
        """

    @abstractmethod
    async def add_answer(self, new_answer: NewAnswer) -> Answer:
        """
        Raises QuestionNotFound if `new_answer.question_id` does not exist.
        """

    async def close(self) -> None:
        return None
