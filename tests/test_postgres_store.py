"""
Postgres store integration tests.
Run only when TEST_DATABASE_URL points at a disposable database.
"""
import os

import pytest

from textlens.contracts.analysis import NewAnalysis, Sentiment


DATABASE_URL = os.getenv("TEST_DATABASE_URL")

pytestmark = pytest.mark.skipif(not DATABASE_URL, reason="TEST_DATABASE_URL not set")


@pytest.fixture
def store():
    from sqlalchemy import text

    from textlens.infrastructure.storage.postgres import PostgresAnalysisStore

    store = PostgresAnalysisStore(database_url=DATABASE_URL)
    with store.engine.begin() as conn:
        conn.execute(text("TRUNCATE analyses"))
    yield store
    store.engine.dispose()


def make(summary="Nothing notable.", title=None, topics=None, keywords=None):
    return NewAnalysis(
        text="source text",
        summary=summary,
        title=title,
        topics=topics or ["misc", "general", "other"],
        sentiment=Sentiment.NEGATIVE,
        keywords=keywords or ["source", "text", "text"],
    )


class TestPostgresAnalysisStore:

    def test_insert_round_trip(self, store):
        created = store.insert(make(title="Deep Sea Mining"))

        assert created.id is not None
        assert created.created_at is not None
        assert created.sentiment == Sentiment.NEGATIVE
        assert store.list_recent(1)[0].id == created.id

    def test_search_semantics(self, store):
        by_topic = store.insert(make(topics=["oceans", "mining", "law"]))
        by_title = store.insert(make(title="Climate Policy Review"))
        store.insert(make(topics=["oceanography", "science", "data"]))

        assert [r.id for r in store.search("oceans")] == [by_topic.id]
        assert [r.id for r in store.search("climate")] == [by_title.id]

    def test_like_wildcards_are_literal(self, store):
        store.insert(make(summary="Plain summary"))
        hit = store.insert(make(summary="Growth of 100% year over year"))

        assert [r.id for r in store.search("%")] == [hit.id]
