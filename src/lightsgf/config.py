"""
Configuration for the lightsgf command line.

Values come from the `lightsgf:` mapping of a YAML file; command line flags
override them.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import List, Optional

import yaml

from .actions import DEFAULT_MAX_SIZE
from .generate import GENERATION_TYPES


@dataclass
class EngineConfig:
    # Largest grid size accepted before building an action matrix
    max_size: int = DEFAULT_MAX_SIZE
    # Default grid size for generate/basis
    size: int = 5
    # "random" or "solvable"
    generation: str = "solvable"
    seed: Optional[int] = None
    log_level: str = "INFO"

    # Sweep
    sweep_sizes: List[int] = field(default_factory=lambda: [3, 4, 5])
    sweep_samples: int = 100
    workers: int = 1
    batch_size: int = 50
    output: str = "results/sweep.csv"

    def __post_init__(self):
        self._check_types()
        if self.max_size < 1:
            raise ValueError("max_size must be positive")
        if not 1 <= self.size <= self.max_size:
            raise ValueError(f"size must be in [1, {self.max_size}], got {self.size}")
        if self.generation not in GENERATION_TYPES:
            raise ValueError(
                f"generation must be one of {GENERATION_TYPES}, got {self.generation!r}"
            )
        if self.workers < 1 or self.batch_size < 1 or self.sweep_samples < 0:
            raise ValueError("workers, batch_size must be positive and sweep_samples >= 0")

    def _check_types(self):
        for name in ("max_size", "size", "sweep_samples", "workers", "batch_size"):
            if not _is_int(getattr(self, name)):
                raise ValueError(f"{name} must be an integer, got {getattr(self, name)!r}")
        if self.seed is not None and not _is_int(self.seed):
            raise ValueError(f"seed must be an integer or null, got {self.seed!r}")
        for name in ("generation", "log_level", "output"):
            if not isinstance(getattr(self, name), str):
                raise ValueError(f"{name} must be a string, got {getattr(self, name)!r}")
        if not isinstance(self.sweep_sizes, list) or not all(
            _is_int(n) for n in self.sweep_sizes
        ):
            raise ValueError(
                f"sweep_sizes must be a list of integers, got {self.sweep_sizes!r}"
            )

    @classmethod
    def from_dict(cls, data: dict | None) -> "EngineConfig":
        data = dict(data or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**data)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def load_config(path) -> EngineConfig:
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: expected a mapping at top level")
    section = raw.get("lightsgf", {})
    if not isinstance(section, dict):
        raise ValueError(f"{path}: 'lightsgf' must be a mapping")
    return EngineConfig.from_dict(section)
