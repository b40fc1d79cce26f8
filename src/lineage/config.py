"""Validation thresholds.

A ValidationConfig is an immutable value handed to every validation call,
so settings with long-lived species or unusual customs can relax the
biological rules without touching shared state.
"""

import os
from dataclasses import dataclass, fields, replace

from lineage.graph import MAX_GENERATIONS


def _f(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


def _i(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class ValidationConfig:
    # Parent/child timing
    min_parent_age: int = 12
    max_parent_age: int = 80
    posthumous_birth_grace_years: int = 1
    max_parents: int = 2
    max_children: int = 20
    min_sibling_spacing_months: int = 9

    # Marriage
    min_marriage_age: int = 14
    max_spouse_age_gap: int = 50

    # Lifespan
    max_lifespan: int = 200

    # Duplicate detection (rapidfuzz score, 0-100)
    duplicate_name_threshold: float = 90.0
    duplicate_birth_year_tolerance: int = 2

    max_ancestry_depth: int = MAX_GENERATIONS

    def __post_init__(self):
        for f in fields(self):
            if getattr(self, f.name) < 0:
                raise ValueError(f"{f.name} must not be negative")
        if self.min_parent_age > self.max_parent_age:
            raise ValueError("min_parent_age must not exceed max_parent_age")
        if self.duplicate_name_threshold > 100:
            raise ValueError("duplicate_name_threshold is a 0-100 score")
        if self.max_ancestry_depth < 1:
            raise ValueError("max_ancestry_depth must be at least 1")

    def with_overrides(self, **changes) -> "ValidationConfig":
        return replace(self, **changes)

    @classmethod
    def from_env(cls, prefix: str = "LINEAGE_") -> "ValidationConfig":
        """Read thresholds from environment variables such as LINEAGE_MAX_LIFESPAN."""
        values = {}
        for f in fields(cls):
            env_name = f"{prefix}{f.name.upper()}"
            if f.type in (float, "float"):
                values[f.name] = _f(env_name, f.default)
            else:
                values[f.name] = _i(env_name, f.default)
        return cls(**values)


DEFAULT_CONFIG = ValidationConfig()
