"""
Chart rendering for simulations.
Draws stock and cash on two y-axes and returns the image as PNG bytes.
"""

import io
from pathlib import Path
from typing import Optional, Union
import warnings

import matplotlib

matplotlib.use("Agg")  # Use non-interactive backend
import matplotlib.dates as mdates
import matplotlib.pyplot as plt
import seaborn as sns

from ..simulation import Simulation

# Suppress matplotlib warnings
warnings.filterwarnings("ignore", category=UserWarning, module="matplotlib")

DEFAULT_CURRENCY = "Euro"


def render_chart(simulation: Simulation, currency: str = DEFAULT_CURRENCY,
                 width: int = 1200, height: int = 600, dpi: int = 100,
                 output_path: Optional[Union[str, Path]] = None) -> bytes:
    """
    Render the stock and cash trajectories as a PNG line chart.

    Cash is drawn against the left axis, labelled with the currency, and
    stock against the right axis.

    Args:
        simulation: Simulation to draw
        currency: Label of the cash axis
        width: Image width in pixels
        height: Image height in pixels
        dpi: Resolution used to convert pixels to inches
        output_path: Optional file to write the PNG to

    Returns:
        PNG image bytes
    """
    stock_color, cash_color = sns.color_palette("husl", 2)

    with plt.style.context("seaborn-v0_8"):
        fig, cash_ax = plt.subplots(figsize=(width / dpi, height / dpi), dpi=dpi)
        stock_ax = cash_ax.twinx()

        dates = simulation.dates
        stock_line, = stock_ax.plot(dates, simulation.stock, color=stock_color,
                                    linewidth=2, label="Stock available")
        cash_line, = cash_ax.plot(dates, simulation.cash, color=cash_color,
                                  linewidth=2, label="Cash available")

        cash_ax.set_title("Stock vs Cash")
        cash_ax.set_ylabel(currency)
        stock_ax.set_ylabel("Stock")
        stock_ax.set_ylim(bottom=0)
        stock_ax.grid(False)

        cash_ax.xaxis.set_major_formatter(mdates.DateFormatter("%Y-%m-%d"))
        plt.setp(cash_ax.xaxis.get_majorticklabels(), rotation=45, ha="right")

        cash_ax.legend(handles=[stock_line, cash_line], loc="upper left")
        fig.tight_layout()

        buffer = io.BytesIO()
        fig.savefig(buffer, format="png")
        plt.close(fig)

    image = buffer.getvalue()
    if output_path is not None:
        Path(output_path).write_bytes(image)
    return image
