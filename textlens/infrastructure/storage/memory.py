import threading
from datetime import datetime, timezone
from typing import List, Tuple
from uuid import uuid4

from textlens.contracts.analysis import Analysis, NewAnalysis
from textlens.core.storage.port import AnalysisStore, DEFAULT_LIMIT, SEARCH_LIMIT


class InMemoryAnalysisStore(AnalysisStore):
    """
    Process-local store with the same query semantics as Postgres.
    Used for local runs (STORE_BACKEND=memory) and tests.
    """

    def __init__(self):
        self._lock = threading.Lock()
        # (insertion sequence, record)
        self._rows: List[Tuple[int, Analysis]] = []

    def insert(self, analysis: NewAnalysis) -> Analysis:
        record = Analysis(
            id=uuid4(),
            text=analysis.text,
            summary=analysis.summary,
            title=analysis.title,
            topics=list(analysis.topics),
            sentiment=analysis.sentiment,
            keywords=list(analysis.keywords),
            created_at=datetime.now(timezone.utc),
        )

        with self._lock:
            self._rows.append((len(self._rows), record))

        return record

    def _newest_first(self) -> List[Analysis]:
        with self._lock:
            rows = list(self._rows)

        rows.sort(key=lambda row: (row[1].created_at, row[0]), reverse=True)
        return [record for _, record in rows]

    def list_recent(self, limit: int = DEFAULT_LIMIT) -> List[Analysis]:
        return self._newest_first()[:limit]

    def search(self, query: str) -> List[Analysis]:
        needle = query.lower()

        def matches(record: Analysis) -> bool:
            return (
                query in record.topics
                or query in record.keywords
                or (record.title is not None and needle in record.title.lower())
                or needle in record.summary.lower()
            )

        return [r for r in self._newest_first() if matches(r)][:SEARCH_LIMIT]
