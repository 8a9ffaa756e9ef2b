from typing import Dict, Any, Optional

from textlens.infrastructure.llm.backends.base import LLMBackend, LLMMetadata
from textlens.infrastructure.llm.config import (
    load_models_config,
    get_active_model_profile,
)


def create_backend(profile: Dict[str, Any]) -> LLMBackend:
    """
    Backend modules are imported on demand so that only the selected
    backend's client library has to be installed.
    """
    backend_type = profile.get("backend")

    if backend_type == "gemini":
        from textlens.infrastructure.llm.backends.gemini import GeminiBackend
        return GeminiBackend(profile)
    if backend_type == "ollama":
        from textlens.infrastructure.llm.backends.ollama import OllamaBackend
        return OllamaBackend(profile)
    if backend_type == "llama_cpp":
        from textlens.infrastructure.llm.backends.llama_cpp import LlamaCppBackend
        return LlamaCppBackend(profile)

    raise ValueError(f"Unsupported backend: {backend_type}")


class LLMAdapter:
    """
    Infrastructure-level LLM adapter.

    Responsibilities:
    - load model config
    - select backend
    - lazy backend initialization
    - expose unified metadata
    """

    def __init__(self, models_config_path: str):
        self.models_config = load_models_config(models_config_path)
        self.profile = get_active_model_profile(self.models_config)

        self._backend: Optional[LLMBackend] = None  # lazy-loaded

        print(f"🧠 LLMAdapter created for profile '{self.profile['profile_name']}' (lazy init)")

    def _init_backend(self) -> LLMBackend:
        if self._backend is None:
            self._backend = create_backend(self.profile)
        return self._backend

    def generate(self, prompt: str) -> str:
        backend = self._init_backend()

        params: Dict[str, Any] = self.profile.get("params", {})
        return backend.generate(prompt, params)

    @property
    def meta(self) -> LLMMetadata:
        return self._init_backend().meta
