"""Default Target Operating Model configuration."""

DEFAULT_ACTIVE_PRESET = "coe_led"
NO_GOVERNANCE_GATE = "none"

# Pseudo-phases reported when no configured phase applies
DISABLED_PHASE = {"id": "disabled", "name": "TOM Disabled", "color": "#6B7280"}
UNMAPPED_PHASE = {"id": "unmapped", "name": "Unmapped", "color": "#9CA3AF"}

DEFAULT_PHASES = [
    {
        "id": "foundation",
        "name": "Foundation",
        "description": "Initial setup, governance alignment, and backlog grooming",
        "order": 1,
        "priority": 1,
        "color": "#3C2CDA",
        "mapped_statuses": ["Discovery", "Backlog", "On Hold"],
        "mapped_deployments": [],
        "manual_only": False,
        "governance_gate": "ai_steerco",
        "expected_duration_weeks": 8,
    },
    {
        "id": "strategic",
        "name": "Strategic",
        "description": "Active development, pilots, and value validation",
        "order": 2,
        "priority": 2,
        "color": "#1D86FF",
        "mapped_statuses": ["In-flight"],
        "mapped_deployments": ["PoC", "Pilot"],
        "manual_only": False,
        "governance_gate": "working_group",
        "expected_duration_weeks": 16,
    },
    {
        "id": "transition",
        "name": "Transition",
        "description": "Production deployment and capability transfer in progress",
        "order": 3,
        "priority": 3,
        "color": "#14CBDE",
        "mapped_statuses": ["Implemented"],
        "mapped_deployments": ["Production"],
        "manual_only": False,
        "governance_gate": "business_owner",
        "expected_duration_weeks": 12,
    },
    {
        "id": "steady_state",
        "name": "Steady State",
        "description": "Full client ownership, optimization mode",
        "order": 4,
        "priority": 4,
        "color": "#07125E",
        "mapped_statuses": [],
        "mapped_deployments": [],
        "manual_only": True,
        "governance_gate": "none",
        "expected_duration_weeks": None,
    },
]

DEFAULT_GOVERNANCE_BODIES = [
    {
        "id": "innovation_board",
        "name": "Innovation Board",
        "role": "Early-stage opportunity assessment and ideation approval",
        "cadence": "Weekly",
    },
    {
        "id": "ai_steerco",
        "name": "AI Steering Committee",
        "role": "Strategic oversight and investment decisions",
        "cadence": "Monthly",
    },
    {
        "id": "working_group",
        "name": "AI Working Group",
        "role": "Tactical execution and prioritization",
        "cadence": "Bi-weekly",
    },
    {
        "id": "business_owner",
        "name": "Business Owner Review",
        "role": "Value validation and adoption sign-off",
        "cadence": "Weekly",
    },
]

DEFAULT_PRESETS = {
    "centralized": {"name": "Centralized CoE", "description": "Single AI team owns all delivery"},
    "federated": {"name": "Federated Model", "description": "Business units own AI with central standards"},
    "hybrid": {"name": "Hybrid Model", "description": "Central platform, distributed execution"},
    "coe_led": {"name": "CoE-Led with Business Pods", "description": "CoE leads with embedded business pods"},
}


def _profile(durations, gates, ratios, tracks):
    phase_ids = ("foundation", "strategic", "transition", "steady_state")
    return {
        "phase_overrides": {
            phase: {"governance_gate": gate, "expected_duration_weeks": weeks}
            for phase, gate, weeks in zip(phase_ids, gates, durations)
        },
        "staffing_ratios": {
            phase: {"vendor": vendor, "client": client} for phase, (vendor, client) in zip(phase_ids, ratios)
        },
        "delivery_tracks": [{"id": i, "name": n, "description": d} for i, n, d in tracks],
    }


DEFAULT_PRESET_PROFILES = {
    "centralized": _profile(
        (12, 20, 16, None),
        ("ai_steerco", "ai_steerco", "ai_steerco", "ai_steerco"),
        ((0.9, 0.1), (0.8, 0.2), (0.6, 0.4), (0.2, 0.8)),
        [("single_track", "Unified Delivery", "All initiatives through central CoE pipeline")],
    ),
    "federated": _profile(
        (6, 12, 8, None),
        ("working_group", "business_owner", "business_owner", "none"),
        ((0.4, 0.6), (0.3, 0.7), (0.2, 0.8), (0.1, 0.9)),
        [("bu_owned", "Business Unit Owned", "Each business unit manages own AI initiatives")],
    ),
    "hybrid": _profile(
        (6, 14, 10, None),
        ("working_group", "working_group", "business_owner", "none"),
        ((0.6, 0.4), (0.5, 0.5), (0.35, 0.65), (0.15, 0.85)),
        [
            ("quick_wins", "Quick Wins", "Fast-track high-impact, low-effort initiatives"),
            ("strategic", "Strategic Initiatives", "Long-term capability building and complex projects"),
        ],
    ),
    "coe_led": _profile(
        (8, 16, 12, None),
        ("ai_steerco", "working_group", "business_owner", "none"),
        ((0.7, 0.3), (0.55, 0.45), (0.4, 0.6), (0.2, 0.8)),
        [
            ("coe_track", "CoE Pipeline", "Primary delivery through CoE with business pod support"),
            ("pod_track", "Business Pods", "Embedded teams handling domain-specific initiatives"),
        ],
    ),
}
