"""
Sales simulation engine.

Runs the daily cash and stock simulation for one set of parameters.
"""

import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass
from datetime import date, timedelta
from pathlib import Path
from typing import Dict, Any, List, Optional, Tuple, Union
import multiprocessing as mp

import numpy as np
import pandas as pd

from .ledger import DailyLedger, DailyRecord
from .order_policies import OrderPolicy, OrderPolicyFactory
from .parameters import SimulationParameters
from .shipments import Shipment
from ..utils.logger import get_logger


@dataclass(frozen=True)
class Simulation:
    """
    Complete result of one run.

    Attributes:
        parameters: Parameters the run was built from
        start_date: Date of day 0
        records: One snapshot per day, taken before the day's changes
        orders: Every shipment ordered, in the order they were placed
        units_received: Units of the shipments that arrived during the run
        closing_stock: Stock after the last day's changes
        closing_cash: Cash after the last day's changes
    """

    parameters: SimulationParameters
    start_date: date
    records: Tuple[DailyRecord, ...]
    orders: Tuple[Shipment, ...]
    units_received: int
    closing_stock: float
    closing_cash: float

    @property
    def dates(self) -> List[date]:
        return [record.date for record in self.records]

    @property
    def stock(self) -> List[float]:
        return [record.stock for record in self.records]

    @property
    def cash(self) -> List[float]:
        return [record.cash for record in self.records]

    @property
    def units_ordered(self) -> int:
        return sum(shipment.quantity for shipment in self.orders)

    def to_frame(self) -> pd.DataFrame:
        """Trajectory as a DataFrame with date, stock and cash columns."""
        return pd.DataFrame({
            'date': pd.to_datetime(self.dates),
            'stock': self.stock,
            'cash': self.cash
        })

    def summary(self) -> Dict[str, Any]:
        """
        Headline figures of the run.

        Returns:
            Dictionary of metrics
        """
        stock = np.array(self.stock, dtype=float)
        cash = np.array(self.cash, dtype=float)

        units_ordered = self.units_ordered
        units_received = self.units_received
        # Shipments due after the last day are dropped with the run

        return {
            'days': len(self.records),
            'final_cash': float(cash[-1]),
            'min_cash': float(np.min(cash)),
            'max_cash': float(np.max(cash)),
            'closing_cash': self.closing_cash,
            'closing_stock': self.closing_stock,
            'avg_stock': float(np.mean(stock)),
            'stockout_days': int(np.sum(stock == 0)),
            'orders_placed': len(self.orders),
            'units_ordered': units_ordered,
            'units_received': units_received,
            'units_undelivered': units_ordered - units_received
        }


class SalesSimulator:
    """
    Main sales simulation engine.

    Runs are pure: the result only depends on the parameters, the start date
    and the order policy. Every run builds its own ledger and queue.
    """

    def __init__(self, order_policy: Optional[OrderPolicy] = None,
                 log_level: str = "INFO"):
        """
        Initialize the simulator.

        Args:
            order_policy: Policy deciding the daily orders (runway policy if None)
            log_level: Logging level for the simulator
        """
        self.order_policy = order_policy or OrderPolicyFactory.create_policy('runway')
        self.log_level = log_level

    def run(self, parameters: SimulationParameters, start_date: date) -> Simulation:
        """
        Simulate every day of the horizon.

        Args:
            parameters: Parameters of the run
            start_date: Date label of day 0

        Returns:
            Simulation with one record per day

        Raises:
            InvalidParametersError: If the parameters are rejected
        """
        logger = get_logger(__name__, level=self.log_level)
        parameters.validate()

        ledger = DailyLedger(parameters, self.order_policy)
        records = []

        for day in range(parameters.duration_days):
            orders_before = len(ledger.orders)
            records.append(ledger.close_day(day, start_date + timedelta(days=day)))

            placed = len(ledger.orders) - orders_before
            if placed:
                logger.debug(f"Day {day}: ordered {placed} batch(es), cash left {ledger.cash:.2f}")

        dropped = len(ledger.shipments)
        if dropped:
            logger.debug(f"{dropped} shipment(s) still in transit at the end of the run")

        simulation = Simulation(
            parameters=parameters,
            start_date=start_date,
            records=tuple(records),
            orders=tuple(ledger.orders),
            units_received=ledger.units_received,
            closing_stock=ledger.stock,
            closing_cash=ledger.cash
        )

        logger.info(f"Simulated {parameters.duration_days} days: {len(ledger.orders)} orders, "
                    f"closing cash {ledger.cash:.2f}, closing stock {ledger.stock:.0f}")
        return simulation

    def run_batch(self, scenarios: Dict[str, SimulationParameters], start_date: date,
                  max_workers: Optional[int] = None) -> Dict[str, Simulation]:
        """
        Run several independent scenarios.

        Args:
            scenarios: Mapping of scenario name to parameters
            start_date: Date label of day 0 for every scenario
            max_workers: Maximum number of parallel workers (uses CPU count if None)

        Returns:
            Mapping of scenario name to Simulation, in the order of the scenarios

        Raises:
            InvalidParametersError: If any scenario is rejected
        """
        logger = get_logger(__name__, level=self.log_level)

        # Reject bad input before any work is scheduled
        for parameters in scenarios.values():
            parameters.validate()

        logger.info(f"Starting batch simulation for {len(scenarios)} scenarios")
        started = time.time()

        if max_workers is None:
            max_workers = min(mp.cpu_count(), max(len(scenarios), 1))

        results = {}

        # For small batches, run sequentially to avoid overhead
        if len(scenarios) <= 4 or max_workers <= 1:
            for name, parameters in scenarios.items():
                results[name] = self.run(parameters, start_date)
        else:
            with ProcessPoolExecutor(max_workers=max_workers) as executor:
                future_to_name = {
                    executor.submit(self.run, parameters, start_date): name
                    for name, parameters in scenarios.items()
                }
                for future in as_completed(future_to_name):
                    results[future_to_name[future]] = future.result()

        logger.log_step_completion("Batch simulation", time.time() - started,
                                   {'scenarios': len(results)})
        return {name: results[name] for name in scenarios}

    def save_results(self, simulation: Simulation, output_dir: Union[str, Path],
                     filename: str = "simulation.csv") -> Path:
        """
        Write the daily trajectory to CSV.

        Args:
            simulation: Simulation to save
            output_dir: Directory for the file, created if missing
            filename: Name of the CSV file

        Returns:
            Path of the written file
        """
        logger = get_logger(__name__, level=self.log_level)

        output_path = Path(output_dir)
        output_path.mkdir(parents=True, exist_ok=True)
        target = output_path / filename

        frame = simulation.to_frame()
        frame['date'] = frame['date'].dt.strftime('%Y-%m-%d')
        frame.to_csv(target, index=False)

        logger.info(f"💾 Saved {len(frame)} days to {target}")
        return target


def run_simulation(parameters: SimulationParameters, start_date: date,
                   order_policy: Optional[OrderPolicy] = None) -> Simulation:
    """
    Run one simulation with the given policy (runway policy if None).

    Args:
        parameters: Parameters of the run
        start_date: Date label of day 0

    Returns:
        Simulation
    """
    return SalesSimulator(order_policy=order_policy).run(parameters, start_date)
