from abc import ABC, abstractmethod
from typing import Any, Dict, Literal, TypedDict


class LLMMetadata(TypedDict):
    """
    What produced a reply: reported next to analysis results.
    """

    backend: Literal["gemini", "ollama", "llama_cpp"]
    model: str                  # model id / name
    profile: str                # profile key from models.yaml
    json_mode: bool             # backend constrains output to JSON


class LLMBackend(ABC):
    """
    Base contract for any LLM backend implementation.
    One prompt in, one JSON-shaped reply out; no retries, no streaming.
    """

    @abstractmethod
    def generate(self, prompt: str, params: Dict[str, Any] | None = None) -> str:
        raise NotImplementedError

    @property
    @abstractmethod
    def meta(self) -> LLMMetadata:
        raise NotImplementedError
