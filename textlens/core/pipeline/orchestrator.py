from typing import List, Optional

from textlens.contracts.analysis import Analysis, NewAnalysis
from textlens.core.errors import CapabilityError, ValidationError
from textlens.core.pipeline.context import PipelineContext
from textlens.core.pipeline.services import Services
from textlens.core.pipeline.steps.base import Step
from textlens.core.pipeline.steps.keywords import KeywordStep
from textlens.core.pipeline.steps.metadata import MetadataStep


class AnalysisPipeline:
    """
    text -> metadata (LLM + normalizer) -> keywords -> one store insert.

    No retries. Nothing is persisted unless every step completed.
    Stateless between calls: safe to share across concurrent requests.
    """

    def __init__(self, services: Services, steps: Optional[List[Step]] = None):
        self.services = services

        # execution order
        self.steps = steps if steps is not None else [
            MetadataStep(),
            KeywordStep(),
        ]

    def analyze(self, text: str) -> Analysis:
        if not isinstance(text, str) or not text.strip():
            raise ValidationError("Text cannot be empty or contain only whitespace")

        ctx = PipelineContext(text=text, services=self.services)

        for step in self.steps:
            result = step.run(ctx)

            if result.status != "completed":
                raise CapabilityError(result.error or f"Step '{step.name}' failed")

            ctx.artifacts.update(result.artifacts or {})

        metadata = ctx.artifacts["metadata"]

        return self.services.store.insert(
            NewAnalysis(
                text=text,
                summary=metadata.summary,
                title=metadata.title,
                topics=metadata.topics,
                sentiment=metadata.sentiment,
                keywords=ctx.artifacts["keywords"],
            )
        )
