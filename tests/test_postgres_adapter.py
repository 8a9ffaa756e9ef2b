"""
Postgres adapter pieces that need no running database.
"""
from datetime import datetime, timezone
from uuid import uuid4

import pytest
from sqlalchemy import create_engine

from textlens.contracts.analysis import NewAnalysis, Sentiment
from textlens.core.errors import StoreError
from textlens.infrastructure.storage.postgres import (
    PostgresAnalysisStore, _escape_like, _row_to_analysis,
)


# nothing listens on port 1
UNREACHABLE_URL = "postgresql+psycopg2://u:p@127.0.0.1:1/x"


@pytest.fixture
def unreachable_store():
    engine = create_engine(UNREACHABLE_URL, connect_args={"connect_timeout": 2})
    yield PostgresAnalysisStore(engine=engine)
    engine.dispose()


class TestEscapeLike:

    def test_escapes_wildcards_and_backslash(self):
        assert _escape_like("100%_a\\b") == "100\\%\\_a\\\\b"

    def test_plain_text_unchanged(self):
        assert _escape_like("climate") == "climate"


class TestRowMapping:

    def test_row_to_analysis(self):
        row_id = uuid4()
        created_at = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

        analysis = _row_to_analysis({
            "id": row_id,
            "text": "source",
            "summary": "A summary.",
            "title": None,
            "topics": ("a", "b", "c"),
            "sentiment": "negative",
            "keywords": ["source", "text", "text"],
            "created_at": created_at,
        })

        assert analysis.id == row_id
        assert analysis.title is None
        assert analysis.topics == ["a", "b", "c"]
        assert analysis.sentiment == Sentiment.NEGATIVE
        assert analysis.created_at == created_at


class TestErrorWrapping:

    def test_list_recent_raises_store_error(self, unreachable_store):
        with pytest.raises(StoreError, match="Failed to list analyses"):
            unreachable_store.list_recent(1)

    def test_search_raises_store_error(self, unreachable_store):
        with pytest.raises(StoreError, match="Failed to search analyses"):
            unreachable_store.search("climate")

    def test_insert_raises_store_error(self, unreachable_store):
        record = NewAnalysis(
            text="t", summary="s", title=None, topics=["x"],
            sentiment=Sentiment.NEUTRAL, keywords=["text", "text", "text"],
        )

        with pytest.raises(StoreError, match="Failed to insert analysis"):
            unreachable_store.insert(record)

    def test_missing_url(self):
        with pytest.raises(ValueError, match="DATABASE_URL"):
            PostgresAnalysisStore(database_url=None)
