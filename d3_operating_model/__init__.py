"""
D3 Operating Model Module

Target Operating Model phase derivation and preset handling.
"""

from .phases import (
    DerivedPhase,
    TomConfig,
    default_tom_config,
    derive_phase,
    load_tom_config,
    merge_preset_profile,
    phase_summary,
)

__all__ = [
    "DerivedPhase",
    "TomConfig",
    "default_tom_config",
    "derive_phase",
    "load_tom_config",
    "merge_preset_profile",
    "phase_summary",
]
