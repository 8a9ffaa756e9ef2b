from dataclasses import dataclass, field
from typing import Dict, Any

from textlens.core.pipeline.services import Services


@dataclass
class PipelineContext:
    """
    Per-call pipeline context.
    Used ONLY to pass data between steps.
    """

    text: str                  # original input, never modified
    services: Services

    artifacts: Dict[str, Any] = field(default_factory=dict)
