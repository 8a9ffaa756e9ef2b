"""
Backend request shaping, with the vendor client replaced by a stub.
"""
import pytest

from textlens.infrastructure.llm.backends.gemini import GeminiBackend
from textlens.infrastructure.llm.backends.llama_cpp import JSON_RESPONSE_FORMAT, LlamaCppBackend
from textlens.infrastructure.llm.backends.ollama import OllamaBackend


class StubGeminiModel:
    class Response:
        text = '  {"summary": "ok"}\n'

    def __init__(self):
        self.calls = []

    def generate_content(self, prompt, generation_config=None):
        self.calls.append((prompt, generation_config))
        return self.Response()


class StubOllamaClient:
    def __init__(self):
        self.calls = []

    def chat(self, **kwargs):
        self.calls.append(kwargs)
        return {"message": {"content": ' {"summary": "ok"} '}}


class StubLlama:
    def __init__(self):
        self.calls = []

    def create_chat_completion(self, **kwargs):
        self.calls.append(kwargs)
        return {"choices": [{"message": {"content": '{"summary": "ok"}\n'}}]}


class TestGeminiBackend:

    def test_requests_json_and_strips_reply(self):
        model = StubGeminiModel()
        backend = GeminiBackend(
            {"profile_name": "hosted", "name": "gemini-2.0-flash-exp"},
            model=model,
        )

        assert backend.generate("PROMPT", {"temperature": 0.5}) == '{"summary": "ok"}'

        prompt, config = model.calls[0]
        assert prompt == "PROMPT"
        assert config["temperature"] == 0.5
        assert config["max_output_tokens"] == 1024
        assert config["response_mime_type"] == "application/json"

    def test_missing_api_key(self, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)

        with pytest.raises(ValueError, match="GEMINI_API_KEY"):
            GeminiBackend({"name": "gemini-2.0-flash-exp"})

    def test_requires_name(self):
        with pytest.raises(ValueError, match="name"):
            GeminiBackend({}, model=StubGeminiModel())

    def test_meta(self):
        backend = GeminiBackend(
            {"profile_name": "hosted", "name": "gemini-2.0-flash-exp"},
            model=StubGeminiModel(),
        )

        assert backend.meta == {
            "backend": "gemini",
            "model": "gemini-2.0-flash-exp",
            "profile": "hosted",
            "json_mode": True,
        }


class TestOllamaBackend:

    def test_single_turn_json_chat(self):
        client = StubOllamaClient()
        backend = OllamaBackend(
            {"profile_name": "local", "name": "llama3.1:8b", "params": {"context_size": 8192}},
            client=client,
        )

        assert backend.generate("PROMPT") == '{"summary": "ok"}'

        call = client.calls[0]
        assert call["model"] == "llama3.1:8b"
        assert call["messages"] == [{"role": "user", "content": "PROMPT"}]
        assert call["format"] == "json"
        assert call["stream"] is False
        assert call["options"]["num_ctx"] == 8192

    def test_format_can_be_disabled(self):
        backend = OllamaBackend(
            {"name": "llama3.1:8b", "format": None},
            client=StubOllamaClient(),
        )

        assert backend.meta["json_mode"] is False


class TestLlamaCppBackend:

    def test_json_object_chat_completion(self):
        llm = StubLlama()
        backend = LlamaCppBackend(
            {"profile_name": "gguf", "path": "models/m.gguf", "model_id": "mistral-7b"},
            llm=llm,
        )

        assert backend.generate("PROMPT", {"max_tokens": 256}) == '{"summary": "ok"}'

        call = llm.calls[0]
        assert call["messages"] == [{"role": "user", "content": "PROMPT"}]
        assert call["response_format"] == JSON_RESPONSE_FORMAT
        assert call["max_tokens"] == 256
        assert call["temperature"] == 0.1

    def test_requires_path(self):
        with pytest.raises(ValueError, match="path"):
            LlamaCppBackend({"model_id": "x"}, llm=StubLlama())

    def test_meta(self):
        backend = LlamaCppBackend({"profile_name": "gguf", "path": "m.gguf"}, llm=StubLlama())

        assert backend.meta["model"] == "m.gguf"
        assert backend.meta["json_mode"] is True
