"""
Answer records and request bodies.
"""

from __future__ import annotations

from typing import NewType

from pydantic import AliasChoices, BaseModel, Field

from questions.schemas import MAX_QUESTION_ID, MIN_QUESTION_ID, QuestionId

AnswerId = NewType("AnswerId", int)


class NewAnswer(BaseModel):
    content: str
    # Form posts from the old client send `questionId`.
    question_id: QuestionId = Field(
        ge=MIN_QUESTION_ID,
        le=MAX_QUESTION_ID,
        validation_alias=AliasChoices("question_id", "questionId"),
    )


class Answer(BaseModel):
    id: AnswerId
    content: str
    question_id: QuestionId
