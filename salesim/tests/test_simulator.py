"""
Tests for salesim.simulation.simulator
"""

from collections import defaultdict
from datetime import date, timedelta

import pandas as pd
import pytest

from salesim.exceptions import InvalidParametersError
from salesim.simulation import (
    DailyRecord,
    OrderPolicy,
    SalesSimulator,
    Shipment,
    SimulationParameters,
    run_simulation,
)

# (day, stock, cash) at the start of each day for the default parameters
GOLDEN_DAYS = (
    [(0, 0.0, 1000.0)]
    + [(day, 0.0, 0.0) for day in range(1, 15)]
    + [
        (15, 39.0, 35.0),
        (16, 38.0, 70.0),
        (17, 37.0, 105.0),
        (18, 36.0, 140.0),
        (19, 35.0, 175.0),
        (20, 34.0, 210.0),
    ]
)

PROPERTY_CASES = [
    SimulationParameters(duration_days=365),
    SimulationParameters(initial_cash=20000.0, batch_size=7, weekly_sales=23.0, duration_days=200),
    SimulationParameters(initial_stock=15, unit_monthly_storage=2.5, weekly_sales=10.0, shipment_delay=9),
    SimulationParameters(initial_cash=300.0, unit_cost=4.0, unit_benefit=-1.0, weekly_sales=3.5),
    SimulationParameters(shipment_delay=0, initial_stock=30),
    SimulationParameters(weekly_sales=0.0, initial_stock=12),
]


class OrderOnFirstDay(OrderPolicy):
    def calculate_orders(self, day, cash, stock, pending_quantity, parameters):
        if day == 0:
            return [Shipment(day + parameters.shipment_delay, parameters.batch_size)]
        return []


class TestGoldenTrajectory:
    @pytest.fixture
    def simulation(self, start_date):
        return run_simulation(SimulationParameters(duration_days=365), start_date)

    def test_first_twenty_days(self, simulation):
        for day, stock, cash in GOLDEN_DAYS:
            record = simulation.records[day]
            assert (record.day, record.stock, record.cash) == (day, stock, cash), f"day {day}"

    def test_two_orders_on_first_day(self, simulation):
        assert simulation.orders[:2] == (Shipment(14, 20), Shipment(14, 20))

    def test_reorder_when_cash_recovers(self, simulation):
        day_29, day_30 = simulation.records[29], simulation.records[30]
        assert (day_29.stock, day_29.cash) == (25.0, 525.0)
        assert simulation.orders[2] == Shipment(43, 20)
        assert (day_30.stock, day_30.cash) == (24.0, 60.0)

    def test_dates_follow_start_date(self, simulation, start_date):
        assert simulation.records[0].date == start_date
        assert simulation.records[20].date == date(2024, 1, 21)
        assert simulation.dates[-1] == start_date + timedelta(days=364)

    def test_one_record_per_day(self, simulation):
        assert len(simulation.records) == 365
        assert [record.day for record in simulation.records] == list(range(365))

    def test_summary(self, start_date):
        summary = run_simulation(SimulationParameters(duration_days=30), start_date).summary()
        assert summary['days'] == 30
        assert summary['final_cash'] == 525.0
        assert summary['min_cash'] == 0.0
        assert summary['max_cash'] == 1000.0
        assert summary['closing_cash'] == 60.0
        assert summary['closing_stock'] == 24.0
        assert summary['stockout_days'] == 15
        assert summary['orders_placed'] == 3
        assert summary['units_ordered'] == 60
        assert summary['units_received'] == 40
        assert summary['units_undelivered'] == 20


class TestBoundaries:
    def test_single_day(self, start_date):
        simulation = run_simulation(SimulationParameters(duration_days=1), start_date)
        assert simulation.records == (DailyRecord(day=0, date=start_date, stock=0.0, cash=1000.0),)
        assert simulation.closing_cash == 0.0
        assert simulation.closing_stock == 0.0
        assert simulation.units_received == 0

    def test_zero_lead_time_sells_same_day(self, start_date):
        params = SimulationParameters(shipment_delay=0, duration_days=2)
        simulation = run_simulation(params, start_date, order_policy=OrderOnFirstDay())
        assert simulation.records[1].stock == 19.0
        assert simulation.records[1].cash == 535.0

    def test_shipments_due_at_horizon_are_dropped(self, start_date):
        simulation = run_simulation(SimulationParameters(duration_days=14), start_date)
        assert simulation.units_ordered == 40
        assert simulation.units_received == 0
        assert all(record.stock == 0.0 for record in simulation.records)

    def test_shipments_due_on_last_day_arrive(self, start_date):
        simulation = run_simulation(SimulationParameters(duration_days=15), start_date)
        assert simulation.units_received == 40
        assert simulation.closing_stock == 39.0

    @pytest.mark.parametrize("changes", [
        dict(duration_days=0),
        dict(batch_size=0),
        dict(shipment_delay=-1),
        dict(unit_cost=0.0),
    ])
    def test_invalid_parameters_rejected(self, start_date, changes):
        with pytest.raises(InvalidParametersError):
            run_simulation(SimulationParameters(**changes), start_date)


class TestProperties:
    @pytest.mark.parametrize("params", PROPERTY_CASES)
    def test_stock_never_negative(self, start_date, params):
        simulation = run_simulation(params, start_date)
        assert min(simulation.stock) >= 0
        assert simulation.closing_stock >= 0

    @pytest.mark.parametrize("params", PROPERTY_CASES)
    def test_received_never_exceeds_ordered(self, start_date, params):
        simulation = run_simulation(params, start_date)
        all_arrived = all(order.arrival_day < params.duration_days for order in simulation.orders)
        assert simulation.units_received <= simulation.units_ordered
        assert (simulation.units_received == simulation.units_ordered) == all_arrived

    @pytest.mark.parametrize("params", [p for p in PROPERTY_CASES if not p.unit_monthly_storage])
    def test_orders_never_exceed_cash(self, start_date, params):
        simulation = run_simulation(params, start_date)
        spent = defaultdict(float)
        for order in simulation.orders:
            spent[order.arrival_day - params.shipment_delay] += params.batch_cost
        for day, amount in spent.items():
            assert amount <= simulation.records[day].cash

    @pytest.mark.parametrize("params", PROPERTY_CASES)
    def test_deterministic(self, start_date, params):
        first = run_simulation(params, start_date)
        second = run_simulation(params, start_date)
        assert first.stock == second.stock
        assert first.cash == second.cash
        assert first == second

    def test_rebuild_from_own_parameters(self, start_date):
        simulation = run_simulation(PROPERTY_CASES[1], start_date)
        assert run_simulation(simulation.parameters, simulation.start_date) == simulation

    def test_start_date_only_changes_labels(self, start_date):
        params = PROPERTY_CASES[2]
        first = run_simulation(params, start_date)
        second = run_simulation(params, date(2030, 6, 1))
        assert first.stock == second.stock
        assert first.cash == second.cash
        assert first.dates != second.dates


class TestSalesSimulator:
    def test_run_batch_matches_single_runs(self, start_date):
        simulator = SalesSimulator()
        scenarios = {
            "small": SimulationParameters(batch_size=10, duration_days=90),
            "large": SimulationParameters(batch_size=40, initial_cash=2000.0, duration_days=90),
        }
        results = simulator.run_batch(scenarios, start_date)
        assert list(results) == ["small", "large"]
        for name, params in scenarios.items():
            assert results[name] == simulator.run(params, start_date)

    def test_run_batch_in_worker_processes(self, start_date):
        simulator = SalesSimulator()
        scenarios = {
            f"batch_{size}": SimulationParameters(batch_size=size, duration_days=60)
            for size in (5, 10, 15, 20, 25)
        }
        results = simulator.run_batch(scenarios, start_date, max_workers=2)
        assert list(results) == list(scenarios)
        assert results["batch_5"] == simulator.run(scenarios["batch_5"], start_date)

    def test_run_batch_rejects_invalid_scenario(self, start_date):
        scenarios = {"ok": SimulationParameters(), "bad": SimulationParameters(batch_size=0)}
        with pytest.raises(InvalidParametersError):
            SalesSimulator().run_batch(scenarios, start_date)

    def test_to_frame(self, start_date):
        frame = run_simulation(SimulationParameters(duration_days=21), start_date).to_frame()
        assert list(frame.columns) == ["date", "stock", "cash"]
        assert len(frame) == 21
        assert frame["date"].iloc[0] == pd.Timestamp(start_date)
        assert frame["cash"].iloc[20] == 210.0

    def test_save_results(self, start_date, tmp_path):
        simulator = SalesSimulator()
        simulation = simulator.run(SimulationParameters(duration_days=21), start_date)
        path = simulator.save_results(simulation, tmp_path / "out")
        assert path == tmp_path / "out" / "simulation.csv"

        saved = pd.read_csv(path)
        assert len(saved) == 21
        assert saved["date"].iloc[0] == "2024-01-01"
        assert saved["stock"].iloc[15] == 39.0
