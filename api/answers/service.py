"""
Answer orchestration: censor the content, then persist.
"""

from __future__ import annotations

import logging

from core.moderation import ModerationClient
from storage import Store

from .schemas import Answer, NewAnswer

logger = logging.getLogger(__name__)


async def add_answer(
    store: Store,
    moderation: ModerationClient,
    new_answer: NewAnswer,
) -> Answer:
    content = await moderation.censor(new_answer.content)
    answer = await store.add_answer(
        NewAnswer(content=content, question_id=new_answer.question_id)
    )
    logger.info("answer_added answer_id=%s question_id=%s", answer.id, answer.question_id)
    return answer
