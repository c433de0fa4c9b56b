"""
Test D3 Operating Model phase derivation

Every derivation branch, preset merging and phase summaries.
"""
import pytest
from pydantic import ValidationError

from core.exceptions import ConfigurationError
from d3_operating_model.phases import (
    TomConfig,
    default_tom_config,
    derive_phase,
    load_tom_config,
    merge_preset_profile,
    phase_summary,
)
from d1_scoring.types import UseCase

# Mark entire module as unit test
pytestmark = pytest.mark.unit


@pytest.fixture
def overlapping_config(tom_config):
    """Two phases both mapping 'In-flight'"""
    phases = [phase.model_dump() for phase in tom_config.phases]
    phases[2]["mapped_statuses"] = ["Implemented", "In-flight"]
    return tom_config.model_copy(update={"phases": TomConfig(phases=phases).phases})


class TestDerivePhase:
    """Test each derivation branch"""

    def test_disabled(self):
        result = derive_phase("In-flight", "Pilot", None, default_tom_config())

        assert result.id == "disabled"
        assert result.name == "TOM Disabled"
        assert result.matched_by == "disabled"
        assert result.is_override is False

    def test_manual_override(self, tom_config):
        result = derive_phase("Discovery", None, "steady_state", tom_config)

        assert result.id == "steady_state"
        assert result.matched_by == "manual"
        assert result.is_override is True

    def test_unknown_override_falls_through(self, tom_config):
        result = derive_phase("Discovery", None, "nonexistent", tom_config)

        assert result.id == "foundation"
        assert result.matched_by == "status"

    def test_single_status_match(self, tom_config):
        result = derive_phase("In-flight", None, None, tom_config)

        assert result.id == "strategic"
        assert result.color == "#1D86FF"
        assert result.matched_by == "status"

    def test_unmapped_status(self, tom_config):
        result = derive_phase("Cancelled", None, None, tom_config)

        assert result.id == "unmapped"
        assert result.color == "#9CA3AF"
        assert result.matched_by == "unmapped"

    def test_missing_status_is_unmapped(self, tom_config):
        assert derive_phase(None, "Production", None, tom_config).matched_by == "unmapped"

    def test_manual_only_phase_never_matched(self, tom_config):
        phases = [phase.model_dump() for phase in tom_config.phases]
        phases[3]["mapped_statuses"] = ["Live"]
        config = tom_config.model_copy(update={"phases": TomConfig(phases=phases).phases})

        assert derive_phase("Live", None, None, config).id == "unmapped"

    def test_deployment_disambiguates(self, overlapping_config):
        result = derive_phase("In-flight", "Production", None, overlapping_config)

        assert result.id == "transition"
        assert result.matched_by == "deployment"

    def test_priority_breaks_remaining_tie(self, overlapping_config):
        result = derive_phase("In-flight", "Retired", None, overlapping_config)

        assert result.id == "strategic"
        assert result.matched_by == "priority"

    def test_priority_used_without_deployment(self, overlapping_config):
        assert derive_phase("In-flight", None, None, overlapping_config).matched_by == "priority"

    def test_to_dict(self, tom_config):
        data = derive_phase("Backlog", None, None, tom_config).to_dict()

        assert data == {
            "id": "foundation",
            "name": "Foundation",
            "color": "#3C2CDA",
            "is_override": False,
            "matched_by": "status",
        }


class TestMergePresetProfile:
    """Test preset application"""

    def test_coe_led_overrides(self, tom_config):
        merged = merge_preset_profile(tom_config)
        phases = {phase.id: phase for phase in merged.phases}

        assert phases["foundation"].governance_gate == "ai_steerco"
        assert phases["strategic"].expected_duration_weeks == 16
        assert phases["steady_state"].expected_duration_weeks is None

    def test_centralized_overrides(self, tom_config):
        merged = merge_preset_profile(tom_config.model_copy(update={"active_preset": "centralized"}))
        phases = {phase.id: phase for phase in merged.phases}

        assert phases["foundation"].expected_duration_weeks == 12
        assert phases["transition"].governance_gate == "ai_steerco"
        assert phases["steady_state"].governance_gate == "ai_steerco"

    def test_original_config_untouched(self, tom_config):
        config = tom_config.model_copy(update={"active_preset": "federated"})
        merge_preset_profile(config)

        assert config.phase_by_id("foundation").expected_duration_weeks == 8

    def test_missing_profile_returns_config(self, tom_config):
        config = tom_config.model_copy(update={"preset_profiles": {}})

        assert merge_preset_profile(config) is config

    def test_override_without_duration_keeps_it(self):
        config = TomConfig(
            enabled=True,
            active_preset="p",
            presets={"p": {"name": "P"}},
            preset_profiles={"p": {"phase_overrides": {"one": {"governance_gate": "board"}}}},
            phases=[{"id": "one", "name": "One", "order": 1, "priority": 1, "expected_duration_weeks": 5}],
        )
        phase = merge_preset_profile(config).phases[0]

        assert phase.governance_gate == "board"
        assert phase.expected_duration_weeks == 5

    def test_profile_phases_replace_base(self):
        config = TomConfig(
            enabled=True,
            active_preset="p",
            presets={"p": {"name": "P"}},
            preset_profiles={
                "p": {"phases": [{"id": "ideation", "name": "Ideation", "order": 1, "priority": 1, "mapped_statuses": ["Discovery"]}]}
            },
            phases=[{"id": "one", "name": "One", "order": 1, "priority": 1, "mapped_statuses": ["Discovery"]}],
        )

        assert derive_phase("Discovery", None, None, merge_preset_profile(config)).id == "ideation"


class TestTomConfigValidation:
    """Test document validation"""

    def test_default_config(self):
        config = default_tom_config()

        assert config.enabled is False
        assert config.active_preset == "coe_led"
        assert [p.id for p in config.phases] == ["foundation", "strategic", "transition", "steady_state"]
        assert len(config.governance_bodies) == 4

    def test_unknown_active_preset(self, tom_config):
        data = tom_config.model_dump()
        data["active_preset"] = "matrix"

        with pytest.raises(ValidationError, match="Active preset"):
            TomConfig.model_validate(data)

    def test_duplicate_phase_ids(self, tom_config):
        data = tom_config.model_dump()
        data["phases"].append(data["phases"][0])

        with pytest.raises(ValidationError, match="unique"):
            TomConfig.model_validate(data)

    def test_reserved_phase_id(self):
        with pytest.raises(ValidationError, match="Reserved"):
            TomConfig(phases=[{"id": "unmapped", "name": "X", "order": 1, "priority": 1}])

    def test_unknown_governance_gate(self, tom_config):
        data = tom_config.model_dump()
        data["phases"][0]["governance_gate"] = "board_of_directors"

        with pytest.raises(ValidationError, match="governance gate"):
            TomConfig.model_validate(data)

    def test_profile_phase_reserved_id(self, tom_config):
        data = tom_config.model_dump()
        data["preset_profiles"]["coe_led"]["phases"] = [
            {"id": "unmapped", "name": "Sneaky", "order": 1, "priority": 1, "mapped_statuses": ["Discovery"]}
        ]

        with pytest.raises(ValidationError, match="Reserved phase ids used in preset 'coe_led'"):
            TomConfig.model_validate(data)

    def test_profile_phase_duplicate_ids(self, tom_config):
        data = tom_config.model_dump()
        phase = {"id": "ideation", "name": "Ideation", "order": 1, "priority": 1}
        data["preset_profiles"]["hybrid"]["phases"] = [phase, dict(phase, order=2)]

        with pytest.raises(ValidationError, match="unique in preset 'hybrid'"):
            TomConfig.model_validate(data)

    def test_profile_phase_unknown_gate(self, tom_config):
        data = tom_config.model_dump()
        data["preset_profiles"]["coe_led"]["phases"] = [
            {"id": "ideation", "name": "Ideation", "order": 1, "priority": 1, "governance_gate": "ghost"}
        ]

        with pytest.raises(ValidationError, match="unknown governance gate 'ghost'"):
            TomConfig.model_validate(data)

    def test_phase_override_unknown_gate(self, tom_config):
        data = tom_config.model_dump()
        data["preset_profiles"]["federated"]["phase_overrides"]["foundation"]["governance_gate"] = "ghost"

        with pytest.raises(ValidationError, match="Override of 'foundation' in preset 'federated'"):
            TomConfig.model_validate(data)

    def test_valid_profile_phases_accepted(self, tom_config):
        data = tom_config.model_dump()
        data["preset_profiles"]["coe_led"]["phases"] = [
            {"id": "ideation", "name": "Ideation", "order": 1, "priority": 1, "governance_gate": "innovation_board"}
        ]

        config = TomConfig.model_validate(data)

        assert config.preset_profiles["coe_led"].phases[0].id == "ideation"

    def test_staffing_ratio_must_sum_to_one(self, tom_config):
        data = tom_config.model_dump()
        data["preset_profiles"]["coe_led"]["staffing_ratios"]["foundation"] = {"vendor": 0.7, "client": 0.7}

        with pytest.raises(ValidationError, match="Staffing ratio"):
            TomConfig.model_validate(data)

    def test_load_shipped_config(self, config_dir):
        config = load_tom_config(config_dir / "tom.yaml")

        assert config.enabled is True
        assert set(config.presets) == {"centralized", "federated", "hybrid", "coe_led"}

    def test_load_missing(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_tom_config(tmp_path / "tom.yaml")

    def test_load_malformed(self, tmp_path):
        path = tmp_path / "tom.yaml"
        path.write_text("phases: [unclosed\n")

        with pytest.raises(ConfigurationError, match="Malformed YAML") as exc_info:
            load_tom_config(path)

        assert exc_info.value.details == {"setting": "tom"}


class TestPhaseSummary:
    """Test per-phase counts"""

    def test_counts_every_phase(self, tom_config):
        use_cases = [
            {"use_case_status": "Discovery"},
            {"use_case_status": "Backlog"},
            UseCase(use_case_status="In-flight", deployment_status="Pilot"),
            {"use_case_status": "Implemented", "tom_phase_override": "steady_state"},
            {"use_case_status": "Unknown"},
        ]
        summary = phase_summary(use_cases, tom_config)

        assert summary == {
            "foundation": 2,
            "strategic": 1,
            "transition": 0,
            "steady_state": 1,
            "unmapped": 1,
            "disabled": 0,
        }

    def test_disabled_counts(self):
        summary = phase_summary([{"use_case_status": "Discovery"}], default_tom_config())

        assert summary["disabled"] == 1
        assert summary["foundation"] == 0
