"""
Normalization of untrusted LLM output.

The language model is asked for a JSON object but nothing about the shape is
trusted. Each field goes through a total mapping function, so `normalize`
never raises and always yields a complete ExtractedMetadata.
"""
import json
from typing import Any, List, Optional

from textlens.contracts.analysis import ExtractedMetadata, Sentiment


FALLBACK_SUMMARY = "No summary available"
FALLBACK_TOPICS = ["unknown"]
FALLBACK_SENTIMENT = Sentiment.NEUTRAL
MAX_TOPICS = 3

_SENTIMENTS = {s.value: s for s in Sentiment}


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def normalize_summary(value: Any) -> str:
    if not value:
        return FALLBACK_SUMMARY
    return _as_text(value)


def normalize_title(value: Any) -> Optional[str]:
    if not value:
        return None
    return _as_text(value)


def normalize_topics(value: Any) -> List[str]:
    # fewer than MAX_TOPICS entries are kept as-is, not padded
    if not isinstance(value, list):
        return list(FALLBACK_TOPICS)
    return [_as_text(topic) for topic in value[:MAX_TOPICS]]


def normalize_sentiment(value: Any) -> Sentiment:
    if isinstance(value, str) and value in _SENTIMENTS:
        return _SENTIMENTS[value]
    return FALLBACK_SENTIMENT


def normalize(raw: Any) -> ExtractedMetadata:
    fields = raw if isinstance(raw, dict) else {}

    return ExtractedMetadata(
        summary=normalize_summary(fields.get("summary")),
        title=normalize_title(fields.get("title")),
        topics=normalize_topics(fields.get("topics")),
        sentiment=normalize_sentiment(fields.get("sentiment")),
    )
