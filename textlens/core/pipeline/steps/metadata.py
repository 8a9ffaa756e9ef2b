import json
import re

from textlens.core.normalizer import normalize
from textlens.core.pipeline.context import PipelineContext
from textlens.core.pipeline.steps.base import Step, StepResult


_CODE_FENCE_JSON = re.compile(r"```json\n?")
_CODE_FENCE = re.compile(r"```\n?")


def _reject_constant(name: str):
    # NaN / Infinity are not JSON
    raise ValueError(f"Non-JSON constant: {name}")


def strip_code_fences(text: str) -> str:
    """Drop markdown fence markers around (or inside) a model reply."""
    text = _CODE_FENCE_JSON.sub("", text)
    text = _CODE_FENCE.sub("", text)
    return text.strip()


class MetadataStep(Step):
    """
    Summary / title / topics / sentiment via the language model.

    A failed call or an unparseable reply fails the step.
    Individual fields of a parsed reply are never fatal (see normalizer).
    """

    name = "metadata"

    PROMPT_PATH = "analysis/v1.yaml"

    def run(self, ctx: PipelineContext) -> StepResult:
        # 1. Render prompt
        prompt = ctx.services.prompts.render(self.PROMPT_PATH, text=ctx.text)

        # 2. LLM inference (single attempt)
        try:
            llm_response = ctx.services.llm.generate(prompt)
        except Exception as e:
            return StepResult(
                status="failed",
                error=f"LLM inference failed: {e}",
            )

        # 3. Parse
        cleaned = strip_code_fences(llm_response or "")
        try:
            raw = json.loads(cleaned, parse_constant=_reject_constant)
        except ValueError as e:
            return StepResult(
                status="failed",
                error=f"LLM returned invalid JSON: {e}",
            )

        # 4. Normalize (total, cannot fail)
        return StepResult(
            status="completed",
            artifacts={"metadata": normalize(raw)},
        )
