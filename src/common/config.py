# ABOUTME: Loads YAML run configuration and builds call-scoped random generators.
# ABOUTME: Keeps seeds and template paths out of the pure engine modules.

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

import numpy as np
import yaml

SEED_ENV_VAR = "STUDENT_ENGINE_SEED"

DEFAULT_CONFIG: Dict[str, Any] = {
    "seed": None,
    "templates_path": None,
}


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Read a YAML config and merge it over the defaults.

    The seed can be overridden with the STUDENT_ENGINE_SEED environment variable.
    """

    cfg: Dict[str, Any] = dict(DEFAULT_CONFIG)
    if path is not None:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config not found: {path}")
        with open(path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
        if not isinstance(loaded, dict):
            raise ValueError(f"Config {path} must contain a mapping, got {type(loaded).__name__}.")
        cfg.update(loaded)

    env_seed = os.environ.get(SEED_ENV_VAR)
    if env_seed:
        try:
            cfg["seed"] = int(env_seed)
        except ValueError as exc:
            raise ValueError(f"{SEED_ENV_VAR} must be an integer, got '{env_seed}'.") from exc
    return cfg


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Create a fresh generator; every call owns its own random source."""
    return np.random.default_rng(seed)
