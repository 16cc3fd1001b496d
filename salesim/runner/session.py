"""
Current simulation of an interactive front end.
"""

from dataclasses import replace
from datetime import date
from typing import Optional

from ..simulation import SalesSimulator, Simulation, SimulationParameters


class SimulationSession:
    """
    Holds the simulation shown to the user.

    Every edit builds new parameters and runs a full simulation; the result
    replaces the current one. A rejected edit leaves the current simulation
    untouched.
    """

    def __init__(self, parameters: SimulationParameters, start_date: date,
                 simulator: Optional[SalesSimulator] = None):
        self.start_date = start_date
        self.simulator = simulator or SalesSimulator()
        self.simulation = self.simulator.run(parameters, start_date)

    @property
    def parameters(self) -> SimulationParameters:
        return self.simulation.parameters

    def update(self, **changes) -> Simulation:
        """
        Apply parameter changes and recompute.

        Args:
            **changes: New values keyed by parameter field name

        Returns:
            The new current simulation

        Raises:
            InvalidParametersError: If the edited parameters are rejected
        """
        parameters = replace(self.parameters, **changes)
        self.simulation = self.simulator.run(parameters, self.start_date)
        return self.simulation

    def reset(self, parameters: SimulationParameters) -> Simulation:
        """Replace the parameters wholesale and recompute."""
        self.simulation = self.simulator.run(parameters, self.start_date)
        return self.simulation
