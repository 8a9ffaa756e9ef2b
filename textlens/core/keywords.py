import re
from collections import Counter
from typing import FrozenSet, Iterable, List, Optional


# Common function words ignored as keyword candidates.
STOP_WORDS: FrozenSet[str] = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
    "of", "with", "by", "from", "as", "is", "was", "are", "were", "been",
    "be", "have", "has", "had", "do", "does", "did", "will", "would",
    "should", "could", "can", "may", "might", "must", "shall", "this",
    "that", "these", "those", "i", "you", "he", "she", "it", "we", "they",
    "what", "which", "who", "when", "where", "why", "how", "all", "each",
    "every", "both", "few", "more", "most", "other", "some", "such", "no",
    "not", "only", "own", "same", "so", "than", "too", "very", "just",
})

PADDING_TOKEN = "text"

_NON_WORD = re.compile(r"[^\w\s]")


class KeywordExtractor:
    """
    Frequency-based keyword extraction.

    Deterministic and side-effect free:
    - punctuation becomes whitespace (adjacent words never merge)
    - short tokens and stop words are dropped
    - ranking is by count, ties keep first-occurrence order
    - result is always exactly `count` entries, padded with PADDING_TOKEN
    """

    def __init__(
        self,
        stop_words: Optional[Iterable[str]] = None,
        count: int = 3,
        min_length: int = 4,
        padding: str = PADDING_TOKEN,
    ):
        self.stop_words = frozenset(STOP_WORDS if stop_words is None else stop_words)
        self.count = count
        self.min_length = min_length
        self.padding = padding

    def tokenize(self, text: str) -> List[str]:
        words = _NON_WORD.sub(" ", text.lower()).split()
        return [
            word for word in words
            if len(word) >= self.min_length and word not in self.stop_words
        ]

    def extract(self, text: str) -> List[str]:
        # Counter keeps insertion order, most_common() is stable on ties
        frequency = Counter(self.tokenize(text))
        keywords = [word for word, _ in frequency.most_common(self.count)]

        while len(keywords) < self.count:
            keywords.append(self.padding)

        return keywords


_default_extractor = KeywordExtractor()


def extract_keywords(text: str) -> List[str]:
    return _default_extractor.extract(text)
