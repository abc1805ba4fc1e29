"""Shared pytest setup.

Layout:
    tests/medportal/            records, queries, commands, live lists, CLI
    tests/medportal_identity/   actors, overrides, session resolver, adapters
    tests/medportal_config/     settings

Tests marked ``integration`` need a real hosted backend and only run with
``--run-integration`` or ``RUN_INTEGRATION=1``.
"""

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv

from medportal_config import clear_settings_cache

CONFIG_DIR = Path(__file__).resolve().parents[1] / "config"

for env_name in (".env.dev", ".env"):
    if (CONFIG_DIR / env_name).exists():
        load_dotenv(CONFIG_DIR / env_name)
        break


def _integration_enabled(config) -> bool:
    if config.getoption("--run-integration"):
        return True
    return os.environ.get("RUN_INTEGRATION", "").lower() in ("1", "true", "yes")


def pytest_addoption(parser):
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="Also run tests that need a hosted backend",
    )


def pytest_configure(config):
    config.addinivalue_line(
        "markers",
        "integration: talks to a real hosted backend (skipped by default)",
    )


def pytest_collection_modifyitems(config, items):
    if _integration_enabled(config):
        return

    skip = pytest.mark.skip(reason="needs --run-integration or RUN_INTEGRATION=1")
    for item in items:
        if item.get_closest_marker("integration") is not None:
            item.add_marker(skip)


@pytest.fixture(autouse=True)
def fresh_settings():
    """Make every test read settings afresh."""
    clear_settings_cache()
    yield
    clear_settings_cache()
