"""
Tests for the postgres store with the `core.db` helpers mocked out.
No database is needed.
"""

import asyncio
from unittest.mock import AsyncMock, patch

import asyncpg
import pytest

from answers.schemas import NewAnswer
from core.errors import DatabaseQueryError, QuestionNotFound
from core.pagination import Pagination
from questions.schemas import NewQuestion, Question
from storage.postgres import PostgresStore

ROW = {"id": 1, "title": "t", "content": "c", "tags": ["a", "b"]}


@pytest.fixture
def store() -> PostgresStore:
    return PostgresStore()


class TestGetQuestions:
    @pytest.mark.asyncio
    async def test_binds_limit_and_offset(self, store: PostgresStore) -> None:
        with patch("storage.postgres.db.fetch_all", new=AsyncMock(return_value=[ROW])) as fetch_all:
            questions = await store.get_questions(Pagination(limit=2, offset=4))

        assert questions == [Question(id=1, title="t", content="c", tags=["a", "b"])]
        sql, limit, offset = fetch_all.call_args.args
        assert "LIMIT $1" in sql and "OFFSET $2" in sql
        assert (limit, offset) == (2, 4)

    @pytest.mark.asyncio
    async def test_no_limit_binds_null(self, store: PostgresStore) -> None:
        with patch("storage.postgres.db.fetch_all", new=AsyncMock(return_value=[])) as fetch_all:
            await store.get_questions(Pagination())
        assert fetch_all.call_args.args[1:] == (None, 0)

    @pytest.mark.asyncio
    async def test_null_tags_stay_none(self, store: PostgresStore) -> None:
        row = {**ROW, "tags": None}
        with patch("storage.postgres.db.fetch_all", new=AsyncMock(return_value=[row])):
            questions = await store.get_questions(Pagination())
        assert questions[0].tags is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            asyncpg.PostgresError("boom"),
            asyncpg.InterfaceError("pool closed"),
            ConnectionRefusedError(),
            asyncio.TimeoutError(),
        ],
    )
    async def test_driver_errors_become_database_query_error(
        self, store: PostgresStore, error: Exception
    ) -> None:
        with patch("storage.postgres.db.fetch_all", new=AsyncMock(side_effect=error)):
            with pytest.raises(DatabaseQueryError):
                await store.get_questions(Pagination())


class TestWrites:
    @pytest.mark.asyncio
    async def test_add_question_returns_stored_row(self, store: PostgresStore) -> None:
        with patch("storage.postgres.db.fetch_one", new=AsyncMock(return_value=ROW)) as fetch_one:
            question = await store.add_question(NewQuestion(title="t", content="c", tags=["a", "b"]))

        assert question.id == 1
        assert fetch_one.call_args.args[1:] == ("t", "c", ["a", "b"])

    @pytest.mark.asyncio
    async def test_update_uses_path_id(self, store: PostgresStore) -> None:
        row = {**ROW, "id": 3}
        with patch("storage.postgres.db.fetch_one", new=AsyncMock(return_value=row)) as fetch_one:
            updated = await store.update_question(Question(id=99, title="t", content="c"), 3)

        assert updated.id == 3
        assert fetch_one.call_args.args[-1] == 3

    @pytest.mark.asyncio
    async def test_update_missing_row(self, store: PostgresStore) -> None:
        with patch("storage.postgres.db.fetch_one", new=AsyncMock(return_value=None)):
            with pytest.raises(QuestionNotFound):
                await store.update_question(Question(id=3, title="t", content="c"), 3)

    @pytest.mark.asyncio
    async def test_delete_missing_row(self, store: PostgresStore) -> None:
        with patch("storage.postgres.db.fetch_one", new=AsyncMock(return_value=None)):
            with pytest.raises(QuestionNotFound):
                await store.delete_question(3)

    @pytest.mark.asyncio
    async def test_delete_existing_row(self, store: PostgresStore) -> None:
        with patch("storage.postgres.db.fetch_one", new=AsyncMock(return_value={"id": 3})) as fetch_one:
            await store.delete_question(3)
        assert "DELETE FROM questions" in fetch_one.call_args.args[0]

    @pytest.mark.asyncio
    async def test_get_question_missing(self, store: PostgresStore) -> None:
        with patch("storage.postgres.db.fetch_one", new=AsyncMock(return_value=None)):
            with pytest.raises(QuestionNotFound):
                await store.get_question(8)

    @pytest.mark.asyncio
    async def test_add_answer(self, store: PostgresStore) -> None:
        row = {"id": 5, "content": "a", "corresponding_question": 1}
        with patch("storage.postgres.db.fetch_one", new=AsyncMock(return_value=row)):
            answer = await store.add_answer(NewAnswer(content="a", question_id=1))
        assert (answer.id, answer.question_id) == (5, 1)

    @pytest.mark.asyncio
    async def test_add_answer_unknown_question(self, store: PostgresStore) -> None:
        with patch("storage.postgres.db.fetch_one", new=AsyncMock(return_value=None)):
            with pytest.raises(QuestionNotFound):
                await store.add_answer(NewAnswer(content="a", question_id=404))

    @pytest.mark.asyncio
    async def test_write_failure(self, store: PostgresStore) -> None:
        error = asyncpg.PostgresError("constraint")
        with patch("storage.postgres.db.fetch_one", new=AsyncMock(side_effect=error)):
            with pytest.raises(DatabaseQueryError):
                await store.add_question(NewQuestion(title="t", content="c"))


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_connect_and_close(self) -> None:
        with patch("storage.postgres.db.init_pool", new=AsyncMock()) as init_pool, patch(
            "storage.postgres.db.close_pool", new=AsyncMock()
        ) as close_pool:
            store = await PostgresStore.connect()
            await store.close()
        init_pool.assert_awaited_once()
        close_pool.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_connect_failure_is_not_wrapped(self) -> None:
        with patch("storage.postgres.db.init_pool", new=AsyncMock(side_effect=OSError("refused"))):
            with pytest.raises(OSError):
                await PostgresStore.connect()
