"""
Target Operating Model phase derivation

A use case's TOM phase is derived from its delivery status:

1. TOM disabled -> ``disabled``
2. A tom_phase_override naming a configured phase -> that phase (``manual``)
3. Phases (manual-only ones excluded) mapping the use case status:
   none -> ``unmapped``, one -> ``status``, several -> the first one also
   mapping the deployment status (``deployment``), otherwise the lowest
   priority value (``priority``)

Presets tune the phases: the active preset's profile overrides governance
gates and expected durations, and may bring its own phase list.
"""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from core.exceptions import ConfigurationError
from core.logging import get_logger
from core.metrics import metrics

from .constants import (
    DEFAULT_ACTIVE_PRESET,
    DEFAULT_GOVERNANCE_BODIES,
    DEFAULT_PHASES,
    DEFAULT_PRESET_PROFILES,
    DEFAULT_PRESETS,
    DISABLED_PHASE,
    NO_GOVERNANCE_GATE,
    UNMAPPED_PHASE,
)

logger = get_logger(__name__, domain="operating_model")

_HEX_COLOR = r"^#[0-9A-Fa-f]{6}$"


# ---------------------------------------------------------------------------
# Configuration models
# ---------------------------------------------------------------------------


class TomPhase(BaseModel):
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    description: str = ""
    order: int = Field(..., ge=1)
    priority: int = Field(..., ge=1, description="Lower value wins when several phases match")
    color: str = Field("#6B7280", pattern=_HEX_COLOR)
    mapped_statuses: List[str] = Field(default_factory=list)
    mapped_deployments: List[str] = Field(default_factory=list)
    manual_only: bool = False
    governance_gate: str = NO_GOVERNANCE_GATE
    expected_duration_weeks: Optional[float] = Field(None, gt=0)


class GovernanceBody(BaseModel):
    id: str = Field(..., min_length=1)
    name: str
    role: str = ""
    cadence: str = ""


class TomPreset(BaseModel):
    name: str
    description: str = ""


class PhaseOverride(BaseModel):
    """Only the fields present in the document are applied"""

    governance_gate: Optional[str] = None
    expected_duration_weeks: Optional[float] = Field(None, gt=0)


class StaffingRatio(BaseModel):
    vendor: float = Field(..., ge=0, le=1)
    client: float = Field(..., ge=0, le=1)

    @model_validator(mode="after")
    def validate_total(self) -> StaffingRatio:
        if abs(self.vendor + self.client - 1.0) > 0.01:
            raise ValueError(f"Staffing ratio must sum to 1, got {self.vendor + self.client:.2f}")
        return self


class DeliveryTrack(BaseModel):
    id: str
    name: str
    description: str = ""


class TomPresetProfile(BaseModel):
    phase_overrides: Dict[str, PhaseOverride] = Field(default_factory=dict)
    staffing_ratios: Dict[str, StaffingRatio] = Field(default_factory=dict)
    delivery_tracks: List[DeliveryTrack] = Field(default_factory=list)
    phases: Optional[List[TomPhase]] = None


class TomConfig(BaseModel):
    """Root schema for the TOM document"""

    version: str = Field("1.0", pattern=r"^\d+\.\d+$")
    enabled: bool = False
    active_preset: str = DEFAULT_ACTIVE_PRESET
    presets: Dict[str, TomPreset] = Field(default_factory=dict)
    preset_profiles: Dict[str, TomPresetProfile] = Field(default_factory=dict)
    phases: List[TomPhase] = Field(default_factory=list)
    governance_bodies: List[GovernanceBody] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_config(self) -> TomConfig:
        if self.presets and self.active_preset not in self.presets:
            raise ValueError(f"Active preset '{self.active_preset}' is not a defined preset")
        unknown_profiles = set(self.preset_profiles) - set(self.presets)
        if unknown_profiles:
            raise ValueError(f"Profiles for undefined presets: {', '.join(sorted(unknown_profiles))}")

        # Profile phase lists replace the base list once merged, so they obey the same rules
        self._check_phases(self.phases, "phases")
        for preset, profile in self.preset_profiles.items():
            if profile.phases is not None:
                self._check_phases(profile.phases, f"preset '{preset}' phases")
            for phase_id, override in profile.phase_overrides.items():
                if override.governance_gate is not None:
                    self._check_gate(override.governance_gate, f"Override of '{phase_id}' in preset '{preset}'")
        return self

    def _check_phases(self, phases: List[TomPhase], where: str) -> None:
        ids = [phase.id for phase in phases]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Phase ids must be unique in {where}")
        reserved = {DISABLED_PHASE["id"], UNMAPPED_PHASE["id"]} & set(ids)
        if reserved:
            raise ValueError(f"Reserved phase ids used in {where}: {', '.join(sorted(reserved))}")
        for phase in phases:
            self._check_gate(phase.governance_gate, f"Phase '{phase.id}'")

    def _check_gate(self, gate: str, owner: str) -> None:
        if not self.governance_bodies:
            return
        known_gates = {body.id for body in self.governance_bodies} | {NO_GOVERNANCE_GATE}
        if gate not in known_gates:
            raise ValueError(f"{owner} uses unknown governance gate '{gate}'")

    def phase_by_id(self, phase_id: str) -> Optional[TomPhase]:
        for phase in self.phases:
            if phase.id == phase_id:
                return phase
        return None

    def active_profile(self) -> Optional[TomPresetProfile]:
        return self.preset_profiles.get(self.active_preset)


def default_tom_config() -> TomConfig:
    """Four-phase model with the standard presets; disabled until switched on"""
    return TomConfig(
        enabled=False,
        active_preset=DEFAULT_ACTIVE_PRESET,
        presets=DEFAULT_PRESETS,
        preset_profiles=DEFAULT_PRESET_PROFILES,
        phases=DEFAULT_PHASES,
        governance_bodies=DEFAULT_GOVERNANCE_BODIES,
    )


def parse_tom_config(data: dict | None, source: str = "<inline>") -> TomConfig:
    if not data:
        raise ConfigurationError(f"TOM configuration missing in {source}", setting="tom")
    try:
        return TomConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid TOM config in {source}: {exc}", setting="tom") from exc


def load_tom_config(path: os.PathLike | str) -> TomConfig:
    path_obj = Path(path)
    if not path_obj.exists():
        raise ConfigurationError(f"TOM configuration missing: {path_obj}", setting="tom")

    with path_obj.open("r", encoding="utf-8") as fh:
        try:
            data = yaml.safe_load(fh)
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Malformed YAML in {path_obj}: {exc}", setting="tom") from exc
    return parse_tom_config(data, source=str(path_obj))


# ---------------------------------------------------------------------------
# Preset merging
# ---------------------------------------------------------------------------


def merge_preset_profile(config: TomConfig) -> TomConfig:
    """
    Return a copy of ``config`` with the active preset applied

    The profile's own phase list, when present, replaces the base phases.
    Governance gate and expected duration overrides are applied per phase;
    an explicit null duration clears it.
    """
    profile = config.active_profile()
    if profile is None:
        return config

    base_phases = profile.phases if profile.phases is not None else config.phases
    merged = []
    for phase in base_phases:
        override = profile.phase_overrides.get(phase.id)
        if override is None:
            merged.append(phase)
            continue
        updates: Dict[str, Any] = {}
        if override.governance_gate is not None:
            updates["governance_gate"] = override.governance_gate
        if "expected_duration_weeks" in override.model_fields_set:
            updates["expected_duration_weeks"] = override.expected_duration_weeks
        merged.append(phase.model_copy(update=updates))

    return config.model_copy(update={"phases": merged})


# ---------------------------------------------------------------------------
# Derivation
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DerivedPhase:
    id: str
    name: str
    color: str
    is_override: bool
    matched_by: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _from_phase(phase: TomPhase, matched_by: str, is_override: bool = False) -> DerivedPhase:
    return DerivedPhase(id=phase.id, name=phase.name, color=phase.color, is_override=is_override, matched_by=matched_by)


def _derive(
    use_case_status: Optional[str],
    deployment_status: Optional[str],
    tom_phase_override: Optional[str],
    config: TomConfig,
) -> DerivedPhase:
    if not config.enabled:
        return DerivedPhase(**DISABLED_PHASE, is_override=False, matched_by="disabled")

    if tom_phase_override:
        override_phase = config.phase_by_id(tom_phase_override)
        if override_phase is not None:
            return _from_phase(override_phase, "manual", is_override=True)
        logger.warning("Ignoring unknown TOM phase override", extra={"tom_phase_override": tom_phase_override})

    matching = [
        phase
        for phase in config.phases
        if not phase.manual_only and use_case_status and use_case_status in phase.mapped_statuses
    ]

    if not matching:
        return DerivedPhase(**UNMAPPED_PHASE, is_override=False, matched_by="unmapped")
    if len(matching) == 1:
        return _from_phase(matching[0], "status")

    if deployment_status:
        for phase in matching:
            if deployment_status in phase.mapped_deployments:
                return _from_phase(phase, "deployment")

    # sorted() is stable, so equal priorities keep configured order
    return _from_phase(sorted(matching, key=lambda p: p.priority)[0], "priority")


def derive_phase(
    use_case_status: Optional[str],
    deployment_status: Optional[str],
    tom_phase_override: Optional[str],
    config: TomConfig,
) -> DerivedPhase:
    """Derive the TOM phase of a use case from its delivery status"""
    result = _derive(use_case_status, deployment_status, tom_phase_override, config)
    metrics.track_phase_derivation(result.matched_by)
    return result


def phase_summary(use_cases: Iterable[Any], config: TomConfig) -> Dict[str, int]:
    """
    Count use cases per phase id

    Every configured phase plus ``unmapped`` and ``disabled`` is present.
    Use cases may be mappings or objects exposing ``use_case_status``,
    ``deployment_status`` and ``tom_phase_override``.
    """
    summary = {phase.id: 0 for phase in config.phases}
    summary[UNMAPPED_PHASE["id"]] = 0
    summary[DISABLED_PHASE["id"]] = 0

    for use_case in use_cases:
        if isinstance(use_case, dict):
            fields = (use_case.get("use_case_status"), use_case.get("deployment_status"), use_case.get("tom_phase_override"))
        else:
            fields = (
                getattr(use_case, "use_case_status", None),
                getattr(use_case, "deployment_status", None),
                getattr(use_case, "tom_phase_override", None),
            )
        derived = derive_phase(*fields, config)
        summary[derived.id] = summary.get(derived.id, 0) + 1

    return summary
