import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


STORE_BACKENDS = ("postgres", "memory")


@dataclass
class Settings:
    database_url: Optional[str] = None
    store_backend: str = "postgres"
    models_config_path: str = "models.yaml"
    prompts_dir: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Settings":
        store_backend = os.getenv("STORE_BACKEND", "postgres").strip().lower()
        if store_backend not in STORE_BACKENDS:
            raise ValueError(
                f"Unsupported STORE_BACKEND '{store_backend}' "
                f"(expected one of: {', '.join(STORE_BACKENDS)})"
            )

        return cls(
            database_url=os.getenv("DATABASE_URL"),
            store_backend=store_backend,
            models_config_path=os.getenv("MODELS_CONFIG_PATH", "models.yaml"),
            prompts_dir=os.getenv("PROMPTS_DIR") or None,
        )
