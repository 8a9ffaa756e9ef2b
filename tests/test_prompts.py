import pytest

from textlens.prompts.registry import PromptNotFound, PromptRegistry


class TestPromptRegistry:

    def test_packaged_analysis_prompt(self):
        prompt = PromptRegistry().render("analysis/v1.yaml", text="Hello world")

        assert "Hello world" in prompt
        assert "{{ text }}" not in prompt
        for key in ('"summary"', '"title"', '"topics"', '"sentiment"'):
            assert key in prompt

    def test_missing_prompt(self):
        with pytest.raises(PromptNotFound):
            PromptRegistry().load("analysis/v999.yaml")

    def test_custom_dir(self, tmp_path):
        (tmp_path / "greet.yaml").write_text("template: 'Hi {{ name }}!'", encoding="utf-8")

        assert PromptRegistry(str(tmp_path)).render("greet.yaml", name="Ada") == "Hi Ada!"

    def test_missing_template(self, tmp_path):
        (tmp_path / "empty.yaml").write_text("id: empty", encoding="utf-8")

        with pytest.raises(ValueError):
            PromptRegistry(str(tmp_path)).render("empty.yaml")
