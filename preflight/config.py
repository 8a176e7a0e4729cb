from __future__ import annotations
import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional
from .report import DEFAULT_TOP_EXTENSIONS

@dataclass
class AdvisorConfig:
    top_extensions: int = DEFAULT_TOP_EXTENSIONS
    color: bool = True
    verbose: bool = False
    json_output: bool = False

DEFAULT_CONFIG = AdvisorConfig()

def config_from_env(environ: Optional[Mapping[str, str]] = None) -> AdvisorConfig:
    """Defaults, overridden by ``PREFLIGHT_TOP`` and ``NO_COLOR``."""
    env = os.environ if environ is None else environ
    config = DEFAULT_CONFIG
    top = env.get("PREFLIGHT_TOP", "").strip()
    if top:
        try:
            config = replace(config, top_extensions=max(0, int(top)))
        except ValueError:
            raise ValueError(f"PREFLIGHT_TOP must be an integer, got {top!r}") from None
    if env.get("NO_COLOR"):
        config = replace(config, color=False)
    return config
