"""
Root conftest.py for pytest configuration

Registers the domain markers and tags each test with the marker of the
domain directory it lives in.
"""
import pytest

DOMAIN_MARKERS = {
    "core": "Core infrastructure tests",
    "d0_metadata": "Admin configuration store tests",
    "d1_scoring": "Impact/effort scoring tests",
    "d2_sizing": "T-shirt sizing tests",
    "d3_operating_model": "TOM phase derivation tests",
    "d4_portfolio": "Portfolio analytics tests",
    "api": "HTTP surface tests",
}


def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line("markers", "unit: Unit tests")
    for marker, description in DOMAIN_MARKERS.items():
        config.addinivalue_line("markers", f"{marker}: {description}")


def pytest_collection_modifyitems(config, items):
    """Apply the domain marker matching the test's directory"""
    for item in items:
        parts = item.path.parts
        for marker in DOMAIN_MARKERS:
            if marker in parts:
                item.add_marker(getattr(pytest.mark, marker))
                break
