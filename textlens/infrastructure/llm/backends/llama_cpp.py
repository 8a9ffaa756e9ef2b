from typing import Any, Dict, Optional

from textlens.infrastructure.llm.backends.base import LLMBackend, LLMMetadata


JSON_RESPONSE_FORMAT = {"type": "json_object"}


class LlamaCppBackend(LLMBackend):
    """
    GGUF model loaded in-process through llama-cpp-python (optional extra).

    Uses the model's chat template and grammar-constrained JSON output, so
    replies parse without fence stripping in the common case.
    """

    def __init__(self, profile: Dict[str, Any], llm: Optional[Any] = None):
        self.profile_name: str = profile.get("profile_name", "unknown")

        self.model_path: str = profile.get("path")
        if not self.model_path:
            raise ValueError("llama_cpp backend requires 'path' in model profile")

        self.model_name: str = profile.get("model_id", self.model_path)
        params = profile.get("params", {})

        if llm is None:
            from llama_cpp import Llama

            print(f"⏳ Loading {self.model_name} (n_ctx={params.get('n_ctx', 4096)})...")
            llm = Llama(
                model_path=self.model_path,
                n_ctx=params.get("n_ctx", 4096),
                n_gpu_layers=params.get("n_gpu_layers", 0),
                verbose=params.get("verbose", False),
            )
        self.llm = llm

        self.default_generation_params: Dict[str, Any] = {
            "temperature": params.get("temperature", 0.1),
            "max_tokens": params.get("max_tokens", 1024),
        }

    def generate(self, prompt: str, params: Dict[str, Any] | None = None) -> str:
        params = params or {}

        generation_params = {
            key: params.get(key, default)
            for key, default in self.default_generation_params.items()
        }

        result = self.llm.create_chat_completion(
            messages=[{"role": "user", "content": prompt}],
            response_format=JSON_RESPONSE_FORMAT,
            **generation_params,
        )
        return result["choices"][0]["message"]["content"].strip()

    @property
    def meta(self) -> LLMMetadata:
        return {
            "backend": "llama_cpp",
            "model": self.model_name,
            "profile": self.profile_name,
            "json_mode": True,
        }
