from typing import Optional

from textlens.config import Settings
from textlens.core.keywords import KeywordExtractor
from textlens.core.pipeline.services import Services
from textlens.core.storage.port import AnalysisStore
from textlens.infrastructure.llm.adapter import LLMAdapter
from textlens.infrastructure.storage.memory import InMemoryAnalysisStore
from textlens.prompts.registry import PromptRegistry


def build_store(settings: Settings) -> AnalysisStore:
    if settings.store_backend == "memory":
        return InMemoryAnalysisStore()

    from textlens.infrastructure.storage.postgres import PostgresAnalysisStore
    return PostgresAnalysisStore(database_url=settings.database_url)


def build_services(settings: Optional[Settings] = None) -> Services:
    settings = settings or Settings.from_env()

    # --- infrastructure ---
    store = build_store(settings)

    # LLM created once per process (lazy model load inside)
    llm_adapter = LLMAdapter(models_config_path=settings.models_config_path)

    # --- application services ---
    return Services(
        llm=llm_adapter,
        store=store,
        keywords=KeywordExtractor(),
        prompts=PromptRegistry(settings.prompts_dir),
    )
