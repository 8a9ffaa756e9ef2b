from pathlib import Path
from typing import Optional

import yaml


PROMPTS_DIR = Path(__file__).resolve().parent


class PromptNotFound(Exception):
    pass


class PromptRegistry:
    """
    Loads and renders versioned prompts.
    """

    def __init__(self, base_dir: Optional[str] = None):
        self.base_dir = Path(base_dir) if base_dir else PROMPTS_DIR

    def load(self, relative_path: str) -> dict:
        """
        Example: analysis/v1.yaml
        """
        path = self.base_dir / relative_path

        if not path.exists():
            raise PromptNotFound(f"Prompt not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    def render(self, relative_path: str, **variables) -> str:
        prompt = self.load(relative_path)

        template = prompt.get("template")
        if not template:
            raise ValueError(f"Prompt template missing: {relative_path}")

        for key, value in variables.items():
            template = template.replace(f"{{{{ {key} }}}}", value)

        return template
