import os
from typing import Any, Dict, Optional

import google.generativeai as genai

from textlens.infrastructure.llm.backends.base import LLMBackend, LLMMetadata


class GeminiBackend(LLMBackend):
    """
    Hosted Gemini model.

    The API key is read from the env var named by the profile's
    `api_key_env` (GEMINI_API_KEY by default). Replies are requested as
    `application/json`.
    """

    def __init__(self, profile: Dict[str, Any], model: Optional[Any] = None):
        self.profile_name: str = profile.get("profile_name", "unknown")

        self.model_name: str = profile.get("name")
        if not self.model_name:
            raise ValueError("Gemini backend requires 'name' in model profile")

        params = profile.get("params", {})
        self.json_mode: bool = profile.get("json_mode", True)

        if model is None:
            api_key_env = profile.get("api_key_env", "GEMINI_API_KEY")
            api_key = os.getenv(api_key_env)
            if not api_key:
                raise ValueError(f"{api_key_env} environment variable is not set")

            genai.configure(api_key=api_key)
            model = genai.GenerativeModel(self.model_name)

        self.model = model

        self.default_generation_config: Dict[str, Any] = {
            "temperature": params.get("temperature", 0.2),
            "max_output_tokens": params.get("max_output_tokens", 1024),
        }

    def generate(self, prompt: str, params: Dict[str, Any] | None = None) -> str:
        params = params or {}

        generation_config = {
            key: params.get(key, default)
            for key, default in self.default_generation_config.items()
        }
        if self.json_mode:
            generation_config["response_mime_type"] = "application/json"

        response = self.model.generate_content(
            prompt,
            generation_config=generation_config,
        )
        return response.text.strip()

    @property
    def meta(self) -> LLMMetadata:
        return {
            "backend": "gemini",
            "model": self.model_name,
            "profile": self.profile_name,
            "json_mode": self.json_mode,
        }
