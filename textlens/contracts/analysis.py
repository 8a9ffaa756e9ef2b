from dataclasses import dataclass, asdict
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional
from uuid import UUID


class Sentiment(str, Enum):
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


@dataclass
class ExtractedMetadata:
    """
    Validated metadata derived from LLM output.
    Always complete: every field has a fallback.
    """

    summary: str
    title: Optional[str]
    topics: List[str]
    sentiment: Sentiment


@dataclass
class NewAnalysis:
    """
    Record handed to the store. id / created_at are assigned on insert.
    """

    text: str
    summary: str
    title: Optional[str]
    topics: List[str]
    sentiment: Sentiment
    keywords: List[str]


@dataclass
class Analysis:
    """
    Stable contract for a persisted analysis.
    Immutable once created.
    """

    id: UUID
    text: str
    summary: str
    title: Optional[str]
    topics: List[str]
    sentiment: Sentiment
    keywords: List[str]
    created_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["id"] = str(self.id)
        data["sentiment"] = Sentiment(self.sentiment).value
        data["created_at"] = self.created_at.isoformat()
        return data
