"""
Question records and request bodies.
"""

from __future__ import annotations

from typing import NewType

from pydantic import BaseModel, Field

QuestionId = NewType("QuestionId", int)

# questions.id is a Postgres serial (int4); both stores reject ids outside it.
MIN_QUESTION_ID = 1
MAX_QUESTION_ID = 2**31 - 1


class NewQuestion(BaseModel):
    title: str
    content: str
    tags: list[str] | None = None


class Question(NewQuestion):
    id: QuestionId = Field(ge=MIN_QUESTION_ID, le=MAX_QUESTION_ID)
