from abc import ABC, abstractmethod
from typing import List

from textlens.contracts.analysis import Analysis, NewAnalysis


DEFAULT_LIMIT = 50
SEARCH_LIMIT = 50


class AnalysisStore(ABC):
    """
    Persistence port for analyses.

    Ordering for every read is created_at descending.
    Core does not know which engine sits behind it.
    """

    @abstractmethod
    def insert(self, analysis: NewAnalysis) -> Analysis:
        """
        Assign id and created_at, persist atomically, return the full record.
        """
        raise NotImplementedError

    @abstractmethod
    def list_recent(self, limit: int = DEFAULT_LIMIT) -> List[Analysis]:
        """
        Most recent records first. Range checks on `limit` belong to the caller.
        """
        raise NotImplementedError

    @abstractmethod
    def search(self, query: str) -> List[Analysis]:
        """
        Records where `query` is exactly one of the topics or keywords,
        or a case-insensitive substring of title or summary.
        At most SEARCH_LIMIT results.
        """
        raise NotImplementedError
