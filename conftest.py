"""
Global pytest configuration and fixtures.
"""
import datetime as dt
from typing import Dict, List

import pytest

import timebudget.config.settings
from timebudget.config import TimeBudgetConfig, reload_config
from timebudget.config.logging_config import reset_logging
from timebudget.models import PhaseCatalog, Project, TimeEntry

CONFIG_ENV_VARS = [
    "API_BASE_URL",
    "API_TOKEN",
    "REQUEST_TIMEOUT",
    "CALENDAR_PHASE_CODE",
    "BUDGET_UNDER_THRESHOLD",
    "BUDGET_ON_TRACK_THRESHOLD",
    "BUDGET_OVER_THRESHOLD",
    "ENVIRONMENT",
    "DEBUG",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_FILE",
]


@pytest.fixture(scope="session")
def test_env_vars() -> Dict[str, str]:
    """Test environment variables for configuration."""
    return {
        "API_BASE_URL": "https://timebudget.test",
        "API_TOKEN": "test-token",
        "REQUEST_TIMEOUT": "5",
        "ENVIRONMENT": "testing",
        "DEBUG": "false",
        "LOG_LEVEL": "DEBUG",
    }


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Environment without any timebudget settings and no .env file."""
    for key in CONFIG_ENV_VARS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    timebudget.config.settings._config = None
    yield
    timebudget.config.settings._config = None


@pytest.fixture
def mock_env(test_env_vars, clean_env, monkeypatch):
    """Mock environment variables for testing."""
    for key, value in test_env_vars.items():
        monkeypatch.setenv(key, value)
    yield test_env_vars


@pytest.fixture
def test_config(mock_env) -> TimeBudgetConfig:
    """Test configuration instance."""
    return reload_config()


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo any logging configuration a test installed."""
    yield
    reset_logging()


@pytest.fixture
def catalog() -> PhaseCatalog:
    return PhaseCatalog.fallback()


@pytest.fixture
def sample_projects() -> List[Project]:
    """An hourly, a fixed-price and an archived project."""
    return [
        Project(
            id="p-villa",
            name="Villa Amsterdam",
            city="Amsterdam",
            client_name="Fam. de Vries",
            billing_type="hourly",
            default_rate_cents=7500,
        ),
        Project(
            id="p-kantoor",
            name="Kantoor Rotterdam",
            city="Rotterdam",
            billing_type="fixed",
            default_rate_cents=10000,
            phase_budgets={"schetsontwerp": 100000, "voorlopig-ontwerp": 200000},
        ),
        Project(
            id="p-woning",
            name="Woning Utrecht",
            billing_type="hourly",
            default_rate_cents=6000,
            archived=True,
            archived_at=dt.datetime(2024, 6, 1, 12, 0),
        ),
    ]


@pytest.fixture
def sample_entries() -> List[TimeEntry]:
    return [
        TimeEntry(
            id="e-1",
            project_id="p-kantoor",
            phase_code="schetsontwerp",
            occurred_on=dt.date(2024, 9, 20),
            minutes=60,
            notes="Eerste schetsen",
        ),
        TimeEntry(
            id="e-2",
            project_id="p-kantoor",
            phase_code="schetsontwerp",
            occurred_on=dt.date(2024, 9, 21),
            minutes=90,
        ),
        TimeEntry(
            id="e-3",
            project_id="p-villa",
            phase_code="uitvoering",
            occurred_on=dt.date(2024, 9, 10),
            minutes=240,
            notes="Bouwplaatsbezoek",
        ),
    ]


# Pytest configuration for different test types
def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "cli: mark test as exercising the CLI")


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on location."""
    for item in items:
        path = str(item.fspath).replace("\\", "/")
        if "tests/unit/" in path:
            item.add_marker(pytest.mark.unit)
        elif "tests/integration/" in path:
            item.add_marker(pytest.mark.integration)

        if "/cli/" in path:
            item.add_marker(pytest.mark.cli)
