"""
T-shirt sizing configuration schema

Pydantic models for ``tshirt_sizing.yaml``: size buckets with timeline and
team ranges, role day rates, an overhead multiplier and the rules that map
an impact/effort pair onto a size.

Rules are evaluated by descending priority and the first match wins, so two
rules sharing a priority must not cover a common point; otherwise the result
would depend on list order alone.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from core.exceptions import ConfigurationError
from core.logging import get_logger

from .constants import (
    DEFAULT_MAPPING_RULES,
    DEFAULT_OVERHEAD_MULTIPLIER,
    DEFAULT_ROLES,
    DEFAULT_SIZES,
)

_logger = get_logger("sizing.schema")

_SCORE_MIN = 1.0
_SCORE_MAX = 5.0
_HEX_COLOR = r"^#[0-9A-Fa-f]{6}$"


class TShirtSize(BaseModel):
    """A size bucket with its timeline and team ranges"""

    name: str = Field(..., min_length=1, max_length=10)
    min_weeks: float = Field(..., gt=0)
    max_weeks: float = Field(..., gt=0)
    min_team: int = Field(..., ge=1)
    max_team: int = Field(..., ge=1)
    color: str = Field("#6B7280", pattern=_HEX_COLOR)
    description: str = ""

    @model_validator(mode="after")
    def validate_ranges(self) -> TShirtSize:
        if self.min_weeks > self.max_weeks:
            raise ValueError(f"Size {self.name}: min_weeks ({self.min_weeks}) exceeds max_weeks ({self.max_weeks})")
        if self.min_team > self.max_team:
            raise ValueError(f"Size {self.name}: min_team ({self.min_team}) exceeds max_team ({self.max_team})")
        return self

    @property
    def team_size_estimate(self) -> str:
        if self.min_team == self.max_team:
            return str(self.min_team)
        return f"{self.min_team}-{self.max_team}"


class Role(BaseModel):
    type: str = Field(..., min_length=1)
    daily_rate: float = Field(..., gt=0, description="Day rate in GBP")


class SizingCondition(BaseModel):
    """Inclusive impact/effort bounds; a missing bound is open"""

    impact_min: Optional[float] = Field(None, ge=_SCORE_MIN, le=_SCORE_MAX)
    impact_max: Optional[float] = Field(None, ge=_SCORE_MIN, le=_SCORE_MAX)
    effort_min: Optional[float] = Field(None, ge=_SCORE_MIN, le=_SCORE_MAX)
    effort_max: Optional[float] = Field(None, ge=_SCORE_MIN, le=_SCORE_MAX)

    @model_validator(mode="after")
    def validate_bounds(self) -> SizingCondition:
        if self.impact_min is not None and self.impact_max is not None and self.impact_min > self.impact_max:
            raise ValueError("impact_min cannot exceed impact_max")
        if self.effort_min is not None and self.effort_max is not None and self.effort_min > self.effort_max:
            raise ValueError("effort_min cannot exceed effort_max")
        return self

    def impact_range(self) -> tuple[float, float]:
        return (
            _SCORE_MIN if self.impact_min is None else self.impact_min,
            _SCORE_MAX if self.impact_max is None else self.impact_max,
        )

    def effort_range(self) -> tuple[float, float]:
        return (
            _SCORE_MIN if self.effort_min is None else self.effort_min,
            _SCORE_MAX if self.effort_max is None else self.effort_max,
        )

    def matches(self, impact: float, effort: float) -> bool:
        impact_lo, impact_hi = self.impact_range()
        effort_lo, effort_hi = self.effort_range()
        return impact_lo <= impact <= impact_hi and effort_lo <= effort <= effort_hi

    def overlaps(self, other: SizingCondition) -> bool:
        """True when some score pair satisfies both conditions"""

        def _intersect(a: tuple[float, float], b: tuple[float, float]) -> bool:
            return not (a[1] < b[0] or b[1] < a[0])

        return _intersect(self.impact_range(), other.impact_range()) and _intersect(
            self.effort_range(), other.effort_range()
        )


class MappingRule(BaseModel):
    name: str = Field(..., min_length=1)
    condition: SizingCondition = Field(default_factory=SizingCondition)
    target_size: str = Field(..., min_length=1)
    priority: int = Field(0, description="Higher priority rules are evaluated first")


class TShirtSizingConfig(BaseModel):
    """Root schema for the T-shirt sizing document"""

    version: str = Field("1.0", pattern=r"^\d+\.\d+$")
    enabled: bool = True
    sizes: list[TShirtSize] = Field(default_factory=list)
    roles: list[Role] = Field(default_factory=list)
    overhead_multiplier: float = Field(DEFAULT_OVERHEAD_MULTIPLIER, gt=0)
    mapping_rules: list[MappingRule] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_config(self) -> TShirtSizingConfig:
        names = [size.name for size in self.sizes]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate size names: {', '.join(duplicates)}")

        for rule in self.mapping_rules:
            if rule.target_size not in names:
                raise ValueError(f"Rule '{rule.name}' targets unknown size '{rule.target_size}'")

        for i, rule in enumerate(self.mapping_rules):
            for other in self.mapping_rules[i + 1 :]:
                if rule.priority == other.priority and rule.condition.overlaps(other.condition):
                    raise ValueError(
                        f"Rules '{rule.name}' and '{other.name}' share priority {rule.priority} "
                        "and overlap; classification would be ambiguous"
                    )

        if self.enabled and self.sizes and not self.roles:
            _logger.warning("sizing_config_without_roles", extra={"sizes": len(self.sizes)})
        return self

    def size_by_name(self, name: str) -> Optional[TShirtSize]:
        for size in self.sizes:
            if size.name == name:
                return size
        return None

    def ordered_rules(self) -> list[MappingRule]:
        """Rules by descending priority; ties keep configured order"""
        return sorted(self.mapping_rules, key=lambda rule: -rule.priority)

    def average_daily_rate(self) -> Optional[float]:
        if not self.roles:
            return None
        return sum(role.daily_rate for role in self.roles) / len(self.roles)


def default_sizing_config() -> TShirtSizingConfig:
    """Five sizes XS..XL, three roles and the four standard mapping rules"""
    return TShirtSizingConfig(
        sizes=DEFAULT_SIZES,
        roles=DEFAULT_ROLES,
        overhead_multiplier=DEFAULT_OVERHEAD_MULTIPLIER,
        mapping_rules=DEFAULT_MAPPING_RULES,
    )


def parse_sizing_config(data: dict | None, source: str = "<inline>") -> TShirtSizingConfig:
    if not data:
        raise ConfigurationError(f"T-shirt sizing configuration missing in {source}", setting="tshirt_sizing")
    try:
        return TShirtSizingConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid T-shirt sizing config in {source}: {exc}", setting="tshirt_sizing") from exc


def load_sizing_config(path: os.PathLike | str) -> TShirtSizingConfig:
    """Load and validate a T-shirt sizing YAML file"""
    path_obj = Path(path)
    if not path_obj.exists():
        raise ConfigurationError(f"T-shirt sizing configuration missing: {path_obj}", setting="tshirt_sizing")

    with path_obj.open("r", encoding="utf-8") as fh:
        try:
            data = yaml.safe_load(fh)
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Malformed YAML in {path_obj}: {exc}", setting="tshirt_sizing") from exc
    return parse_sizing_config(data, source=str(path_obj))
