from textlens.core.pipeline.context import PipelineContext
from textlens.core.pipeline.steps.base import Step, StepResult


class KeywordStep(Step):
    """
    Local keyword extraction from the original input text.
    LLM output plays no part here.
    """

    name = "keywords"

    def run(self, ctx: PipelineContext) -> StepResult:
        return StepResult(
            status="completed",
            artifacts={"keywords": ctx.services.keywords.extract(ctx.text)},
        )
