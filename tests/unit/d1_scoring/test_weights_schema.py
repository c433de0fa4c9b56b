"""
Test D1 Scoring weights schema

Pydantic models, weight-sum tolerance rules and the YAML loader.
"""
import logging
import sys
from unittest.mock import patch

import pytest
import yaml
from pydantic import ValidationError

from core.config import settings
from core.exceptions import ConfigurationError
from d1_scoring.weights_schema import (
    BusinessValueWeights,
    FeasibilityWeights,
    ScoringWeights,
    __main__ as weights_cli,
    default_weights,
    load_weights,
    parse_weights,
)

# Mark entire module as unit test
pytestmark = pytest.mark.unit


def _business_value(**overrides):
    values = {
        "revenue_impact": 20,
        "cost_savings": 20,
        "risk_reduction": 20,
        "broker_partner_experience": 20,
        "strategic_fit": 20,
    }
    values.update(overrides)
    return values


class TestGroupWeights:
    """Test lever group models"""

    def test_defaults_sum_to_100(self):
        assert sum(BusinessValueWeights().as_dict().values()) == 100
        assert sum(FeasibilityWeights().as_dict().values()) == 100

    def test_as_dict_lists_levers_in_order(self):
        assert list(FeasibilityWeights().as_dict()) == [
            "data_readiness",
            "technical_complexity",
            "change_impact",
            "model_risk",
            "adoption_readiness",
        ]

    def test_weight_above_100_rejected(self):
        with pytest.raises(ValidationError):
            BusinessValueWeights(**_business_value(revenue_impact=120))

    def test_negative_weight_rejected(self):
        with pytest.raises(ValidationError):
            FeasibilityWeights(model_risk=-5)

    def test_hard_tolerance_rejected(self):
        """Totals more than 5 points away from 100 are errors"""
        with pytest.raises(ValidationError, match="must sum to 100"):
            BusinessValueWeights(**_business_value(revenue_impact=26))

    def test_within_hard_tolerance_accepted(self):
        weights = BusinessValueWeights(**_business_value(revenue_impact=25))

        assert weights.revenue_impact == 25

    def test_soft_tolerance_logs_warning(self, caplog):
        with caplog.at_level(logging.WARNING):
            BusinessValueWeights(**_business_value(revenue_impact=22))

        assert any("weights_outside_soft_tolerance" in r.getMessage() for r in caplog.records)

    def test_small_drift_is_silent(self, caplog):
        with caplog.at_level(logging.WARNING):
            BusinessValueWeights(**_business_value(revenue_impact=20.4))

        assert not any("weights_outside_soft_tolerance" in r.getMessage() for r in caplog.records)


class TestScoringWeights:
    """Test the root weights document"""

    def test_default_weights(self):
        weights = default_weights()

        assert weights.quadrant_threshold == 3.0
        assert set(weights.impact_weights().values()) == {20}
        assert weights.governance is None

    def test_threshold_bounds(self):
        with pytest.raises(ValidationError):
            ScoringWeights(quadrant_threshold=0.5)
        with pytest.raises(ValidationError):
            ScoringWeights(quadrant_threshold=6)

    def test_governance_group_validated(self):
        weights = ScoringWeights(governance={"explainability": 50, "compliance": 50})

        assert weights.governance == {"explainability": 50, "compliance": 50}

    def test_governance_group_out_of_tolerance(self):
        with pytest.raises(ValidationError):
            ScoringWeights(governance={"explainability": 50, "compliance": 20})

    def test_governance_empty_rejected(self):
        with pytest.raises(ValidationError):
            ScoringWeights(governance={})

    def test_version_format(self):
        with pytest.raises(ValidationError):
            ScoringWeights(version="one")


class TestLoadWeights:
    """Test the YAML loader"""

    def test_load_shipped_config(self, config_dir):
        weights = load_weights(config_dir / "scoring_weights.yaml")

        assert weights.quadrant_threshold == 3.0
        assert sum(weights.effort_weights().values()) == 100

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="missing"):
            load_weights(tmp_path / "nope.yaml")

    def test_empty_file(self, tmp_path):
        path = tmp_path / "weights.yaml"
        path.write_text("")

        with pytest.raises(ConfigurationError, match="missing"):
            load_weights(path)

    def test_invalid_totals(self, tmp_path):
        path = tmp_path / "weights.yaml"
        path.write_text(yaml.safe_dump({"business_value": _business_value(revenue_impact=60)}))

        with pytest.raises(ConfigurationError) as exc_info:
            load_weights(path)

        assert exc_info.value.details == {"setting": "scoring_weights"}

    def test_parse_weights_none(self):
        with pytest.raises(ConfigurationError):
            parse_weights(None)

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "weights.yaml"
        path.write_text("business_value: [unclosed\n")

        with pytest.raises(ConfigurationError, match="Malformed YAML") as exc_info:
            load_weights(path)

        assert exc_info.value.details == {"setting": "scoring_weights"}

    def test_threshold_defaults_to_setting(self, monkeypatch):
        monkeypatch.setattr(settings, "default_quadrant_threshold", 3.5)

        assert parse_weights({"version": "1.0"}).quadrant_threshold == 3.5
        assert default_weights().quadrant_threshold == 3.5

    def test_explicit_threshold_wins_over_setting(self, monkeypatch):
        monkeypatch.setattr(settings, "default_quadrant_threshold", 3.5)

        assert parse_weights({"quadrant_threshold": 2.5}).quadrant_threshold == 2.5


class TestValidateCli:
    """Test ``python -m d1_scoring.weights_schema validate``"""

    def test_valid_file(self, config_dir, capsys):
        with patch.object(sys, "argv", ["weights_schema", "validate", str(config_dir / "scoring_weights.yaml")]):
            weights_cli()

        assert "Validation successful" in capsys.readouterr().out

    def test_invalid_file_exits(self, tmp_path, capsys):
        with patch.object(sys, "argv", ["weights_schema", "validate", str(tmp_path / "missing.yaml")]):
            with pytest.raises(SystemExit) as exc_info:
                weights_cli()

        assert exc_info.value.code == 1
        assert "Validation failed" in capsys.readouterr().out

    def test_usage(self, capsys):
        with patch.object(sys, "argv", ["weights_schema"]):
            with pytest.raises(SystemExit):
                weights_cli()

        assert "Usage" in capsys.readouterr().out
