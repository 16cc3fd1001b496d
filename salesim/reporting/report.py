"""
Tab separated text report of a simulation.
"""

from typing import IO, List, Optional
import sys

from ..simulation import Simulation

DATE_FORMAT = "%m-%d-%Y"

# (label, parameter field, format, description)
PARAMETER_ROWS = [
    ("cash", "initial_cash", "{:.2f}", "initial investment"),
    ("sales", "weekly_sales", "{:.2f}", "weekly sales"),
    ("storage", "unit_monthly_storage", "{:.2f}", "storage cost per unit per month"),
    ("cost", "unit_cost", "{:.2f}", "price of each unit"),
    ("margin", "unit_benefit", "{:.2f}", "margin for each unit"),
    ("batch", "batch_size", "{:d}", "size of each shipment"),
    ("stock", "initial_stock", "{:d}", "initial stock"),
    ("delay", "shipment_delay", "{:d}", "days to ship"),
    ("days", "duration_days", "{:d}", "simulation duration in days"),
]


def report_lines(simulation: Simulation) -> List[str]:
    """
    Build the report, one string per line.

    The header lists every parameter as name, value and description. The body
    has one line per day: date, cash with two decimals and whole units of stock.
    """
    lines = []
    parameters = simulation.parameters
    for label, field_name, fmt, description in PARAMETER_ROWS:
        value = fmt.format(getattr(parameters, field_name))
        lines.append(f"{label}\t{value}\t{description}")

    lines.append("")
    lines.append("day\tcash\tstock")

    for record in simulation.records:
        lines.append(f"{record.date.strftime(DATE_FORMAT)}\t{record.cash:.2f}\t{int(record.stock)}")

    return lines


def format_report(simulation: Simulation) -> str:
    return "\n".join(report_lines(simulation)) + "\n"


def print_report(simulation: Simulation, stream: Optional[IO[str]] = None):
    """Write the report to stream (stdout by default)."""
    stream = stream or sys.stdout
    stream.write(format_report(simulation))
