from dataclasses import dataclass, field

from textlens.core.keywords import KeywordExtractor
from textlens.core.storage.port import AnalysisStore
from textlens.prompts.registry import PromptRegistry


@dataclass
class Services:
    """
    DI container for pipeline collaborators.

    `llm` is anything exposing generate(prompt) -> str and `meta`
    (LLMAdapter in production, a fake in tests).
    """

    llm: object
    store: AnalysisStore
    keywords: KeywordExtractor = field(default_factory=KeywordExtractor)
    prompts: PromptRegistry = field(default_factory=PromptRegistry)
