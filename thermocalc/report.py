"""Generate HTML reports of load and sizing results with charts."""

from __future__ import annotations

import base64
from io import BytesIO
from typing import List, Optional, Sequence

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from .dataclasses import CoolingResult, HeatingResult, SolarSizingResult


def _encode_fig(fig) -> str:
    buf = BytesIO()
    fig.savefig(buf, format="png", bbox_inches="tight")
    plt.close(fig)
    return base64.b64encode(buf.getvalue()).decode("ascii")


def _plot_breakdown(labels: Sequence[str], values: Sequence[float], title: str, color: str) -> str:
    fig, ax = plt.subplots()
    ax.bar(list(labels), list(values), color=color)
    ax.axhline(0.0, color="black", linewidth=0.8)
    ax.set_ylabel("Φ [W]")
    ax.set_title(title)
    return _encode_fig(fig)


def _heating_items(heating: HeatingResult) -> List[str]:
    return [
        f"<li>Transmission loss: {round(heating.transmission_loss)} W</li>",
        f"<li>Ventilation loss: {round(heating.ventilation_loss)} W</li>",
        f"<li>Internal gains: {round(heating.internal_gains)} W</li>",
        f"<li>Heating power: {round(heating.total_heating_power)} W</li>",
    ]


def _cooling_items(cooling: CoolingResult) -> List[str]:
    return [
        f"<li>Transmission gain: {round(cooling.transmission_gain)} W</li>",
        f"<li>Ventilation gain: {round(cooling.ventilation_gain)} W</li>",
        f"<li>Internal gains: {round(cooling.internal_gains)} W</li>",
        f"<li>Solar gains: {round(cooling.solar_gains)} W</li>",
        f"<li>Cooling power: {round(cooling.total_cooling_power)} W</li>",
    ]


def _solar_items(solar: SolarSizingResult) -> List[str]:
    return [
        f"<li>Required peak power: {round(solar.required_peak_power)} Wc</li>",
        f"<li>Panels: {solar.panel_count}</li>",
        f"<li>Required area: {solar.required_area:.1f} m²</li>",
        f"<li>Annual yield: {round(solar.annual_yield)} kWh/yr</li>",
        f"<li>Payback period: {solar.payback_period:.1f} years</li>",
    ]


def report(
    u_value: Optional[float] = None,
    heating: Optional[HeatingResult] = None,
    cooling: Optional[CoolingResult] = None,
    solar: Optional[SolarSizingResult] = None,
) -> str:
    """Generate an HTML report from whichever results are given."""

    parts = ["<h2>Thermal & Solar Report</h2>"]
    if u_value is not None:
        parts += ["<h3>Assembly</h3>", "<ul>", f"<li>U-value: {u_value:.3f} W/m²K</li>", "</ul>"]
    if heating is not None:
        chart = _plot_breakdown(
            ["Transmission", "Ventilation", "Internal gains", "Total"],
            [heating.transmission_loss, heating.ventilation_loss,
             -heating.internal_gains, heating.total_heating_power],
            "Heating load", "tab:orange",
        )
        parts += ["<h3>Heating</h3>", "<ul>", *_heating_items(heating), "</ul>",
                  f"<img src='data:image/png;base64,{chart}' alt='Heating chart' />"]
    if cooling is not None:
        chart = _plot_breakdown(
            ["Transmission", "Ventilation", "Internal gains", "Solar gains", "Total"],
            [cooling.transmission_gain, cooling.ventilation_gain, cooling.internal_gains,
             cooling.solar_gains, cooling.total_cooling_power],
            "Cooling load", "tab:blue",
        )
        parts += ["<h3>Cooling</h3>", "<ul>", *_cooling_items(cooling), "</ul>",
                  f"<img src='data:image/png;base64,{chart}' alt='Cooling chart' />"]
    if solar is not None:
        parts += ["<h3>Photovoltaics</h3>", "<ul>", *_solar_items(solar), "</ul>"]
    return "\n".join(parts)
