#!/usr/bin/env python3
"""
Flask web application for editing simulation parameters.
Every edit reruns the simulation and redraws the chart.
"""

from flask import Flask, current_app, render_template, request, jsonify, send_file, redirect, url_for
from datetime import date
from pathlib import Path
from typing import Optional, Union
import io
import sys

# Add the salesim package to the path
sys.path.append(str(Path(__file__).parent.parent))

from salesim.exceptions import ConfigIOError, InvalidParametersError
from salesim.reporting import format_report, render_chart
from salesim.runner import RunnerConfig, SimulationSession
from salesim.simulation import SimulationParameters
from salesim.utils.logger import get_logger

logger = get_logger(__name__)

# (field, label, input step)
FORM_FIELDS = [
    ("initial_cash", "Initial investment ({currency})", "10"),
    ("weekly_sales", "Average sales per week", "0.2"),
    ("unit_cost", "Cost of each unit ({currency})", "0.2"),
    ("unit_benefit", "Margin for each unit ({currency})", "0.2"),
    ("batch_size", "Size of each shipment", "1"),
    ("shipment_delay", "Shipment duration (days)", "1"),
    ("duration_days", "Simulation duration (days)", "1"),
    ("unit_monthly_storage", "Monthly storage per unit ({currency})", "0.2"),
    ("initial_stock", "Initial stock", "1"),
]


def _session() -> SimulationSession:
    return current_app.config["SIMULATION_SESSION"]


def _runner_config() -> RunnerConfig:
    return current_app.config["RUNNER_CONFIG"]


def _render_index(error: Optional[str] = None, message: Optional[str] = None,
                  status: int = 200):
    runner_config = _runner_config()
    parameters = _session().parameters
    fields = [
        {
            "name": name,
            "label": label.format(currency=runner_config.currency),
            "step": step,
            "value": getattr(parameters, name),
        }
        for name, label, step in FORM_FIELDS
    ]
    return render_template(
        "index.html",
        fields=fields,
        summary=_session().simulation.summary(),
        currency=runner_config.currency,
        error=error,
        message=message,
    ), status


def create_app(config_path: Optional[Union[str, Path]] = None,
               start_date: Optional[date] = None,
               currency: str = "Euro") -> Flask:
    """
    Create the editor application.

    Args:
        config_path: Parameter file (default location if None)
        start_date: Date of day 0 (today if None)
        currency: Label of the cash values

    Returns:
        Flask application holding its own simulation session
    """
    app = Flask(__name__)

    runner_config = RunnerConfig(
        config_path=Path(config_path) if config_path else None,
        start_date=start_date,
        currency=currency,
    )
    app.config["RUNNER_CONFIG"] = runner_config
    app.config["SIMULATION_SESSION"] = SimulationSession(
        runner_config.load_parameters(), runner_config.resolve_start_date()
    )

    @app.route("/")
    def index():
        """Parameter form with the current chart"""
        return _render_index(message=request.args.get("message"))

    @app.route("/update", methods=["POST"])
    def update():
        """Apply the edited parameters and recompute"""
        values = _session().parameters.to_dict()
        for name in SimulationParameters.field_names():
            raw = request.form.get(name, "").strip()
            if raw:
                values[name] = raw

        try:
            _session().reset(SimulationParameters.from_dict(values))
        except (InvalidParametersError, TypeError, ValueError) as e:
            logger.warning(f"⚠️ Rejected parameters: {e}")
            return _render_index(error=str(e), status=400)

        return redirect(url_for("index"))

    @app.route("/plot.png")
    def plot():
        image = render_chart(_session().simulation, currency=_runner_config().currency)
        return send_file(io.BytesIO(image), mimetype="image/png")

    @app.route("/report.txt")
    def report():
        return format_report(_session().simulation), 200, {"Content-Type": "text/plain; charset=utf-8"}

    @app.route("/api/simulation")
    def simulation_data():
        """Current simulation as JSON"""
        simulation = _session().simulation
        return jsonify({
            "parameters": simulation.parameters.to_dict(),
            "start_date": simulation.start_date.isoformat(),
            "summary": simulation.summary(),
            "dates": [d.isoformat() for d in simulation.dates],
            "stock": simulation.stock,
            "cash": simulation.cash,
        })

    @app.route("/save", methods=["POST"])
    def save():
        """Persist the current parameters to the config file"""
        try:
            saved = _runner_config().save_parameters(_session().parameters)
        except ConfigIOError as e:
            logger.log_error_with_context(e, "Saving parameters failed")
            return _render_index(error=str(e), status=500)
        return redirect(url_for("index", message=f"Parameters saved to {saved}"))

    return app
