from typing import Any, Dict, Optional

import ollama

from textlens.infrastructure.llm.backends.base import LLMBackend, LLMMetadata


class OllamaBackend(LLMBackend):
    """
    Model served by a local Ollama daemon.
    Single-turn chat with `format=json` unless the profile sets `format: null`.
    """

    def __init__(self, profile: Dict[str, Any], client: Optional[Any] = None):
        self.profile_name: str = profile.get("profile_name", "unknown")

        self.model_name: str = profile.get("name")
        if not self.model_name:
            raise ValueError("Ollama backend requires 'name' in model profile")

        params = profile.get("params", {})
        self.context_size: Optional[int] = params.get("context_size")
        self.response_format = profile.get("format", "json")

        self.client = client if client is not None else ollama.Client(host=profile.get("host"))

        self.default_options: Dict[str, Any] = {
            "temperature": params.get("temperature", 0.1),
            "num_predict": params.get("num_predict", 1024),
        }

    def generate(self, prompt: str, params: Dict[str, Any] | None = None) -> str:
        params = params or {}

        options = {
            key: params.get(key, default)
            for key, default in self.default_options.items()
        }
        if self.context_size:
            options["num_ctx"] = self.context_size

        response = self.client.chat(
            model=self.model_name,
            messages=[{"role": "user", "content": prompt}],
            format=self.response_format,
            options=options,
            stream=False,
        )
        return response["message"]["content"].strip()

    @property
    def meta(self) -> LLMMetadata:
        return {
            "backend": "ollama",
            "model": self.model_name,
            "profile": self.profile_name,
            "json_mode": self.response_format == "json",
        }
