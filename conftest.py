"""
Shared fixtures. Living at the repository root also puts run_simulation and
webapp on the import path of the test session.
"""

from datetime import date

import pytest


@pytest.fixture
def start_date():
    return date(2024, 1, 1)


@pytest.fixture(autouse=True)
def config_file(tmp_path, monkeypatch):
    """Default config location inside the test's temporary directory."""
    path = tmp_path / "salesim-config.yaml"
    monkeypatch.setenv("SALESIM_CONFIG", str(path))
    monkeypatch.delenv("SALESIM_OUTPUT_DIR", raising=False)
    monkeypatch.delenv("SALESIM_LOG_DIR", raising=False)
    return path
