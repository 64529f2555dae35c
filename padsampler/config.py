# padsampler/config.py
"""
Runtime configuration.

Plain dataclasses with defaults that match the browser sampler this core
drives; ``SamplerConfig.from_env()`` lets deployments override the handful of
values that differ between machines.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import os

logger = logging.getLogger(__name__)

NUM_SLOTS = 16

DEFAULT_API_BASE = "http://localhost:3000"


@dataclass
class AcquisitionConfig:
    api_base: str = DEFAULT_API_BASE
    catalog_path: str = "/api/presets"
    presets_path: str = "/presets"
    request_timeout: float = 30.0
    max_concurrency: int = 0            # 0 = every sample in flight at once
    progress_step: float = 0.0          # min percent between download events; 0 = every chunk
    unknown_total_scale: float = 100_000.0
    chunk_size: int = 64 * 1024


@dataclass
class TrimConfig:
    proximity_px: float = 10.0
    min_separation_px: float = 1.0


@dataclass
class RenderConfig:
    fps: float = 60.0
    canvas_width: float = 800.0
    canvas_height: float = 100.0


@dataclass
class SamplerConfig:
    acquisition: AcquisitionConfig = field(default_factory=AcquisitionConfig)
    trim: TrimConfig = field(default_factory=TrimConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    keymap: str = "qwerty"

    @classmethod
    def from_env(cls, environ=None) -> SamplerConfig:
        """Build a config, overriding defaults from ``PADSAMPLER_*`` variables."""
        env = os.environ if environ is None else environ
        config = cls()

        base = env.get("PADSAMPLER_API_BASE")
        if base:
            config.acquisition.api_base = base.rstrip("/")

        config.acquisition.request_timeout = _env_number(
            env, "PADSAMPLER_TIMEOUT", config.acquisition.request_timeout, float)
        config.acquisition.max_concurrency = _env_number(
            env, "PADSAMPLER_MAX_CONCURRENCY", config.acquisition.max_concurrency, int)
        config.render.fps = _env_number(env, "PADSAMPLER_FPS", config.render.fps, float)

        keymap = env.get("PADSAMPLER_KEYMAP")
        if keymap:
            config.keymap = keymap.lower()
        return config


def _env_number(env, name: str, default, cast):
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r (not a valid %s)", name, raw, cast.__name__)
        return default
