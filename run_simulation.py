#!/usr/bin/env python3
"""
Sales Simulation Runner

Simulates the daily stock and cash of a reseller and prints, plots or saves the result.
"""

import argparse
import sys
from dataclasses import replace
from datetime import date
from pathlib import Path
from typing import List, Optional

from salesim.exceptions import ConfigIOError, InvalidParametersError
from salesim.reporting import print_report, render_chart
from salesim.runner import RunnerConfig, create_config_from_env
from salesim.simulation import (
    DAYS_PER_MONTH,
    OrderPolicyFactory,
    SalesSimulator,
    SimulationParameters
)
from salesim.utils.logger import get_logger, setup_logging, configure_workflow_logging

# Command line flag -> parameter field
PARAMETER_FLAGS = {
    'cash': 'initial_cash',
    'sales': 'weekly_sales',
    'cost': 'unit_cost',
    'margin': 'unit_benefit',
    'storage': 'unit_monthly_storage',
    'stock': 'initial_stock',
    'batch': 'batch_size',
    'delay': 'shipment_delay',
    'days': 'duration_days',
}


def apply_overrides(parameters: SimulationParameters,
                    args: argparse.Namespace) -> SimulationParameters:
    """Replace the parameters given on the command line."""
    changes = {}
    for flag, field_name in PARAMETER_FLAGS.items():
        value = getattr(args, flag)
        if value is not None:
            changes[field_name] = value

    if args.months is not None:
        changes['duration_days'] = args.months * DAYS_PER_MONTH

    return replace(parameters, **changes)


def compare_batch_sizes(simulator: SalesSimulator, parameters: SimulationParameters,
                        batch_sizes: List[int], start_date: date):
    """Run one scenario per batch size and print a comparison table."""
    scenarios = {
        f"batch_{size}": replace(parameters, batch_size=size)
        for size in batch_sizes
    }
    results = simulator.run_batch(scenarios, start_date)

    print("batch\tfinal_cash\tclosing_stock\torders\tstockout_days")
    for simulation in results.values():
        summary = simulation.summary()
        print(f"{simulation.parameters.batch_size}\t{summary['final_cash']:.2f}\t{int(summary['closing_stock'])}"
              f"\t{summary['orders_placed']}\t{summary['stockout_days']}")


def run_simulation(config: RunnerConfig, args: argparse.Namespace) -> int:
    """
    Run the simulation selected by the command line.

    Args:
        config: Runner configuration
        args: Parsed command line

    Returns:
        Process exit code
    """
    logger = get_logger("run_simulation")

    try:
        parameters = apply_overrides(config.load_parameters(), args)
        policy = OrderPolicyFactory.create_policy(args.order_policy)
        simulator = SalesSimulator(order_policy=policy, log_level=config.log_level)
        start_date = config.resolve_start_date()

        logger.info(f"📋 Order Policy: {args.order_policy}")
        logger.info(f"📅 Start date: {start_date.isoformat()}")

        if args.compare_batch_sizes:
            compare_batch_sizes(simulator, parameters, args.compare_batch_sizes, start_date)
            return 0

        logger.info("🚀 Running simulation...")
        simulation = simulator.run(parameters, start_date)

        if args.print:
            print_report(simulation)

        if args.plot:
            render_chart(simulation, currency=config.currency, output_path=args.plot)
            logger.info(f"📊 Chart saved to {args.plot}")

        if config.output_dir:
            simulator.save_results(simulation, config.output_dir)

        if args.summary or not (args.print or args.plot or config.output_dir):
            logger.log_performance_metrics("Simulation summary", simulation.summary())

        if args.save_config:
            saved = config.save_parameters(parameters)
            logger.info(f"💾 Parameters saved to {saved}")

    except InvalidParametersError as e:
        logger.log_error_with_context(e, "Invalid parameters")
        return 1
    except ConfigIOError as e:
        logger.log_error_with_context(e, "Configuration error")
        return 1

    logger.info("✅ Simulation completed successfully!")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Simulate the stock and cash of a reseller")

    params = parser.add_argument_group("simulation parameters")
    params.add_argument("--cash", type=float, help="initial investment")
    params.add_argument("--sales", type=float, help="average sales per week (quantity)")
    params.add_argument("--cost", type=float, help="cost of each unit")
    params.add_argument("--margin", type=float, help="margin for each unit")
    params.add_argument("--storage", type=float, help="monthly storage cost per unit")
    params.add_argument("--stock", type=int, help="initial stock (quantity)")
    params.add_argument("--batch", type=int, help="size of each shipment (quantity)")
    params.add_argument("--delay", type=int, help="time to ship a batch (days)")
    duration = params.add_mutually_exclusive_group()
    duration.add_argument("--days", type=int, help="simulation duration (days)")
    duration.add_argument("--months", type=int, help="simulation duration (30-day months)")

    parser.add_argument("--start-date", type=date.fromisoformat,
                        help="date of the first simulated day, YYYY-MM-DD (default: today)")
    parser.add_argument("--config", type=Path,
                        help="parameter file (default: ~/salesim-config.yaml)")
    parser.add_argument("--save-config", action="store_true",
                        help="write the parameters used back to the config file")
    parser.add_argument("--order-policy", default="runway",
                        choices=OrderPolicyFactory.list_policies(),
                        help="Order policy to use")

    output = parser.add_argument_group("output")
    output.add_argument("--print", action="store_true", help="print the daily report")
    output.add_argument("--plot", type=Path, help="write the chart to this PNG file")
    output.add_argument("--output-dir", type=Path,
                        help="save the trajectory as CSV in this directory (default: $SALESIM_OUTPUT_DIR)")
    output.add_argument("--summary", action="store_true", help="log summary metrics")
    output.add_argument("--compare-batch-sizes", type=int, nargs="+", metavar="N",
                        help="compare the outcome of several batch sizes")

    parser.add_argument("--currency", help="label of the cash axis")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level (default: INFO, WARNING with --print)")
    parser.add_argument("--log-dir", type=Path,
                        help="also write a timestamped log file here (default: $SALESIM_LOG_DIR)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main function."""
    args = build_parser().parse_args(argv)

    config = create_config_from_env()
    config.config_path = args.config
    if args.start_date:
        config.start_date = args.start_date
    if args.currency:
        config.currency = args.currency
    if args.log_level:
        config.log_level = args.log_level
    elif args.print:
        # Keep the report on stdout readable
        config.log_level = "WARNING"

    if args.output_dir:
        config.output_dir = args.output_dir
    if args.log_dir:
        config.log_dir = args.log_dir

    if config.log_dir:
        configure_workflow_logging("sales_simulation", log_level=config.log_level,
                                   log_dir=str(config.log_dir))
    else:
        setup_logging(level=config.log_level, console_output=True, file_output=False)

    return run_simulation(config, args)


if __name__ == "__main__":
    sys.exit(main())
