import os
from typing import Any, Dict

import yaml


class ModelConfigError(Exception):
    pass


def load_models_config(path: str) -> Dict[str, Any]:
    if not os.path.exists(path):
        raise ModelConfigError(f"Models config not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def get_active_model_profile(models_config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Profile named by ACTIVE_MODEL_PROFILE, else `default_model`.
    """
    active_profile = os.getenv("ACTIVE_MODEL_PROFILE")

    if not active_profile:
        active_profile = models_config.get("default_model")

    profiles = models_config.get("profiles") or {}

    if active_profile not in profiles:
        available = ", ".join(profiles) or "none"
        raise ModelConfigError(
            f"Model profile '{active_profile}' not found in models.yaml "
            f"(available: {available})"
        )

    profile = dict(profiles[active_profile])
    profile["profile_name"] = active_profile
    return profile
