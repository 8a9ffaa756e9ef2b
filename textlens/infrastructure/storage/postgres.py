import uuid
from typing import List, Optional

from sqlalchemy import (
    CheckConstraint, Column, DateTime, Index, Text, create_engine, func, text,
)
from sqlalchemy.dialects.postgresql import ARRAY, UUID
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base

from textlens.contracts.analysis import Analysis, NewAnalysis, Sentiment
from textlens.core.errors import StoreError
from textlens.core.storage.port import AnalysisStore, DEFAULT_LIMIT, SEARCH_LIMIT


Base = declarative_base()


class AnalysisRow(Base):
    __tablename__ = "analyses"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    text = Column(Text, nullable=False)
    summary = Column(Text, nullable=False)
    title = Column(Text)
    topics = Column(ARRAY(Text), nullable=False)
    sentiment = Column(Text, nullable=False)
    keywords = Column(ARRAY(Text), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        CheckConstraint(
            "sentiment IN ('positive', 'neutral', 'negative')",
            name="analyses_sentiment_check",
        ),
        Index("idx_analyses_topics", "topics", postgresql_using="gin"),
        Index("idx_analyses_keywords", "keywords", postgresql_using="gin"),
        Index("idx_analyses_created_at", created_at.desc()),
    )


def init_db(database_url: Optional[str]) -> Engine:
    """Create engine and schema (idempotent)."""
    if not database_url:
        raise ValueError("DATABASE_URL is not set")

    try:
        engine = create_engine(
            database_url,
            pool_size=5,
            max_overflow=10,
            pool_timeout=30,
            pool_recycle=1800,
            pool_pre_ping=True,
        )

        Base.metadata.create_all(engine)

        with engine.connect() as connection:
            version = connection.execute(text("SELECT version()")).scalar()
            print(f"✅ Postgres connected: {version}")

        return engine
    except SQLAlchemyError as e:
        print(f"❌ Database initialization failed: {e}")
        raise StoreError(f"Database initialization failed: {e}") from e


def _escape_like(value: str) -> str:
    return (
        value.replace("\\", "\\\\")
        .replace("%", "\\%")
        .replace("_", "\\_")
    )


def _row_to_analysis(row) -> Analysis:
    return Analysis(
        id=row["id"],
        text=row["text"],
        summary=row["summary"],
        title=row["title"],
        topics=list(row["topics"]),
        sentiment=Sentiment(row["sentiment"]),
        keywords=list(row["keywords"]),
        created_at=row["created_at"],
    )


class PostgresAnalysisStore(AnalysisStore):
    def __init__(self, engine: Optional[Engine] = None, database_url: Optional[str] = None):
        self.engine = engine if engine is not None else init_db(database_url)

    def insert(self, analysis: NewAnalysis) -> Analysis:
        try:
            with self.engine.begin() as conn:
                row = conn.execute(
                    text("""
                    INSERT INTO analyses (
                        id, text, summary, title,
                        topics, sentiment, keywords
                    )
                    VALUES (
                        :id, :text, :summary, :title,
                        :topics, :sentiment, :keywords
                    )
                    RETURNING *
                    """),
                    {
                        "id": uuid.uuid4(),
                        "text": analysis.text,
                        "summary": analysis.summary,
                        "title": analysis.title,
                        "topics": list(analysis.topics),
                        "sentiment": Sentiment(analysis.sentiment).value,
                        "keywords": list(analysis.keywords),
                    },
                ).mappings().one()
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to insert analysis: {e}") from e

        return _row_to_analysis(row)

    def list_recent(self, limit: int = DEFAULT_LIMIT) -> List[Analysis]:
        try:
            with self.engine.connect() as conn:
                rows = conn.execute(
                    text("""
                    SELECT *
                    FROM analyses
                    ORDER BY created_at DESC
                    LIMIT :limit
                    """),
                    {"limit": limit},
                ).mappings().all()
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to list analyses: {e}") from e

        return [_row_to_analysis(row) for row in rows]

    def search(self, query: str) -> List[Analysis]:
        # tags match exactly, title/summary match as literal substrings
        try:
            with self.engine.connect() as conn:
                rows = conn.execute(
                    text("""
                    SELECT *
                    FROM analyses
                    WHERE :query = ANY(topics)
                       OR :query = ANY(keywords)
                       OR title ILIKE :pattern ESCAPE '\\'
                       OR summary ILIKE :pattern ESCAPE '\\'
                    ORDER BY created_at DESC
                    LIMIT :limit
                    """),
                    {
                        "query": query,
                        "pattern": f"%{_escape_like(query)}%",
                        "limit": SEARCH_LIMIT,
                    },
                ).mappings().all()
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to search analyses: {e}") from e

        return [_row_to_analysis(row) for row in rows]
