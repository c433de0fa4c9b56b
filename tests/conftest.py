"""
Shared fixtures for all tests
"""
import os
import shutil
from pathlib import Path

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest

from d0_metadata.store import ConfigStore
from d1_scoring.weights_schema import default_weights
from d2_sizing.schema import default_sizing_config
from d3_operating_model.phases import default_tom_config
from tests.helpers import make_use_case

REPO_CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"


@pytest.fixture
def config_dir(tmp_path):
    """Copy of the shipped configuration documents in a temp directory"""
    target = tmp_path / "config"
    shutil.copytree(REPO_CONFIG_DIR, target)
    return target


@pytest.fixture
def config_store(config_dir):
    return ConfigStore(config_dir)


@pytest.fixture
def equal_weights():
    """20% per lever, threshold 3.0"""
    return default_weights()


@pytest.fixture
def sizing_config():
    return default_sizing_config()


@pytest.fixture
def tom_config():
    """Default TOM configuration switched on"""
    return default_tom_config().model_copy(update={"enabled": True})


@pytest.fixture
def use_case_factory():
    return make_use_case
