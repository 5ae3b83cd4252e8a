"""
Render options - the knobs a caller may set for layout and composition.

Options can be built directly or read from GRAPHSCENE_* environment
variables, in the same way the service layer reads its settings from the
environment.
"""

import os
from typing import Mapping, Optional
from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigError
from .geometry import RoutingPolicy
from .layout import DEFAULT_MAX_PER_RANK, DEFAULT_NODE_GAP, DEFAULT_RANK_GAP
from .models import normalize_direction


ENV_PREFIX = "GRAPHSCENE_"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


class RenderOptions(BaseModel):
    """Options accepted by build_scene()."""
    direction: Optional[str] = None  # None defers to the graph's layout hints
    node_gap: float = Field(default=DEFAULT_NODE_GAP, gt=0)
    rank_gap: float = Field(default=DEFAULT_RANK_GAP, gt=0)
    max_per_rank: int = Field(default=DEFAULT_MAX_PER_RANK, ge=1)
    allow_decorations: bool = False
    routing: RoutingPolicy = RoutingPolicy.ORTHOGONAL
    auto_layout: bool = True

    @field_validator("direction")
    @classmethod
    def normalize(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return normalize_direction(value)

    @classmethod
    def create(cls, **kwargs) -> "RenderOptions":
        """Build options, raising ConfigError instead of a pydantic error."""
        try:
            return cls(**kwargs)
        except ValidationError as e:
            raise ConfigError(f"Invalid render options: {e}") from e

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "RenderOptions":
        """
        Read options from GRAPHSCENE_* environment variables.

        Recognised: DIRECTION, NODE_GAP, RANK_GAP, MAX_PER_RANK,
        ALLOW_DECORATIONS, ROUTING, AUTO_LAYOUT. Unset variables keep
        their defaults.

        Args:
            environ: Mapping to read from (defaults to os.environ)
        """
        env = os.environ if environ is None else environ
        values: dict = {}

        for field in ("direction", "node_gap", "rank_gap", "max_per_rank", "routing"):
            raw = env.get(ENV_PREFIX + field.upper())
            if raw is not None:
                values[field] = raw.strip().lower() if field == "routing" else raw

        for field in ("allow_decorations", "auto_layout"):
            raw = env.get(ENV_PREFIX + field.upper())
            if raw is None:
                continue
            flag = raw.strip().lower()
            if flag in _TRUE_VALUES:
                values[field] = True
            elif flag in _FALSE_VALUES:
                values[field] = False
            else:
                raise ConfigError(f"{ENV_PREFIX}{field.upper()} must be a boolean, got {raw!r}")

        return cls.create(**values)
