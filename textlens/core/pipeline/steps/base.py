from dataclasses import dataclass
from typing import Optional, Dict, Any, Literal

from textlens.core.pipeline.context import PipelineContext


@dataclass
class StepResult:
    status: Literal["completed", "failed"]
    artifacts: Optional[Dict[str, Any]] = None
    error: Optional[str] = None


class Step:
    """
    Stateless pipeline step.
    MUST NOT store execution state between calls.
    """

    name: str

    def run(self, ctx: PipelineContext) -> StepResult:
        raise NotImplementedError
