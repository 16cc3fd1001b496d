"""
Tests for salesim.runner.session
"""

import pytest

from salesim.exceptions import InvalidParametersError
from salesim.runner import SimulationSession
from salesim.simulation import SimulationParameters, run_simulation


class TestSimulationSession:
    def test_initial_run(self, start_date):
        session = SimulationSession(SimulationParameters(duration_days=30), start_date)
        assert session.simulation == run_simulation(SimulationParameters(duration_days=30), start_date)

    def test_update_replaces_simulation(self, start_date):
        session = SimulationSession(SimulationParameters(duration_days=30), start_date)
        previous = session.simulation

        current = session.update(batch_size=10)

        assert current is session.simulation
        assert current is not previous
        assert previous.parameters.batch_size == 20
        assert current == run_simulation(SimulationParameters(duration_days=30, batch_size=10), start_date)

    def test_rejected_update_keeps_previous(self, start_date):
        session = SimulationSession(SimulationParameters(duration_days=30), start_date)
        previous = session.simulation
        with pytest.raises(InvalidParametersError):
            session.update(duration_days=0)
        assert session.simulation is previous

    def test_reset(self, start_date):
        session = SimulationSession(SimulationParameters(duration_days=30), start_date)
        params = SimulationParameters(weekly_sales=14.0, duration_days=10)
        assert session.reset(params).parameters == params
        assert len(session.simulation.records) == 10
