"""Photovoltaic array sizing and simple payback estimate.

The annual yield of one installed watt-peak is

    yield_per_watt = H · f_orient · f_tilt · (1 − shading/100) · (η/100)

with H the site irradiation in kWh/m²/yr and f_tilt = cos(|tilt − 33°|).
The peak power needed to cover the annual consumption follows from it, and
is rounded up to a whole number of panels.
"""
from .dataclasses import SolarPanelSpec, SolarSizingResult
from .constants import (
    ORIENTATION_FACTORS, OPTIMAL_TILT_DEG, BASE_IRRADIATION, INSTALLATION_MARKUP,
)
from .errors import InvalidOrientation, InvalidPanel, InfeasibleSizing, InfeasiblePayback
from typing import Mapping
import logging
import math

logger = logging.getLogger(__name__)


def orientation_factor(orientation: str, factors: Mapping[str, float] = ORIENTATION_FACTORS) -> float:
    """Yield correction for ``orientation`` (e.g. 'south', 'south-east')."""
    key = orientation.strip().lower()
    try:
        return factors[key]
    except KeyError:
        logger.warning("Unknown orientation %r", orientation)
        raise InvalidOrientation(
            f"Unknown orientation {orientation!r}, expected one of {sorted(factors)}"
        ) from None


def tilt_factor(tilt: float, optimal_tilt: float = OPTIMAL_TILT_DEG) -> float:
    """cos of the deviation from the optimal tilt. Not clamped; may be negative."""
    return math.cos(math.radians(abs(tilt - optimal_tilt)))


def check_panel(panel: SolarPanelSpec) -> None:
    """Raise ``InvalidPanel`` when ``panel`` cannot be used for sizing."""
    problem = None
    if not 0 < panel.rated_power < math.inf:
        problem = f"Rated power must be positive and finite, got {panel.rated_power} Wc"
    elif not 0 < panel.area < math.inf:
        problem = f"Panel area must be positive and finite, got {panel.area} m²"
    elif not 0 <= panel.price < math.inf:
        problem = f"Panel price must be finite and not negative, got {panel.price}"
    elif not 0 <= panel.efficiency <= 100:
        problem = f"Panel efficiency must lie within 0-100 %, got {panel.efficiency}"
    if problem is not None:
        logger.warning("Unusable panel %s %s: %s", panel.brand, panel.model, problem)
        raise InvalidPanel(problem)


def yield_per_watt(
    orientation: str,
    tilt: float,
    shading: float,
    efficiency: float,
    base_irradiation: float = BASE_IRRADIATION,
    factors: Mapping[str, float] = ORIENTATION_FACTORS,
    optimal_tilt: float = OPTIMAL_TILT_DEG,
) -> float:
    """Annual energy per installed watt-peak in Wh/Wc."""
    return (
        base_irradiation
        * orientation_factor(orientation, factors)
        * tilt_factor(tilt, optimal_tilt)
        * (1 - shading / 100)
        * (efficiency / 100)
    )


def size_solar_array(
    consumption: float,
    orientation: str,
    tilt: float,
    shading: float,
    panel: SolarPanelSpec,
    electricity_rate: float,
    base_irradiation: float = BASE_IRRADIATION,
    factors: Mapping[str, float] = ORIENTATION_FACTORS,
    optimal_tilt: float = OPTIMAL_TILT_DEG,
    installation_markup: float = INSTALLATION_MARKUP,
) -> SolarSizingResult:
    """Size a PV array that covers ``consumption`` kWh/yr.

    Parameters
    ----------
    consumption:
        Annual electricity consumption in kWh/yr.
    orientation:
        Key of ``factors``.
    tilt:
        Panel tilt in degrees.
    shading:
        Shading loss in %.
    panel:
        Catalog or custom panel.
    electricity_rate:
        Price of one kWh, in the currency of ``panel.price``.

    Raises
    ------
    InvalidOrientation, InvalidPanel, InfeasibleSizing, InfeasiblePayback
    """
    check_panel(panel)
    ypw = yield_per_watt(
        orientation, tilt, shading, panel.efficiency,
        base_irradiation, factors, optimal_tilt,
    )
    if not math.isfinite(ypw) or ypw <= 0:
        logger.warning("Yield per watt %s for orientation=%r tilt=%s shading=%s", ypw, orientation, tilt, shading)
        raise InfeasibleSizing(f"Yield per installed watt must be positive, got {ypw}")
    if not 0 <= consumption < math.inf:
        logger.warning("Annual consumption %s kWh cannot be sized", consumption)
        raise InfeasibleSizing(f"Annual consumption must be finite and not negative, got {consumption} kWh")

    required_peak_power = consumption * 1000.0 / ypw
    panel_count = math.ceil(required_peak_power / panel.rated_power)
    required_area = panel_count * panel.area
    annual_yield = panel_count * panel.rated_power * ypw / 1000.0
    install_cost = panel_count * panel.price * installation_markup
    annual_savings = annual_yield * electricity_rate
    if not 0 < annual_savings < math.inf:
        logger.warning("Annual savings %s with %d panels at rate %s", annual_savings, panel_count, electricity_rate)
        raise InfeasiblePayback(f"Annual savings must be positive to pay back, got {annual_savings}")

    result = SolarSizingResult(
        required_peak_power=required_peak_power,
        panel_count=panel_count,
        required_area=required_area,
        annual_yield=annual_yield,
        payback_period=install_cost / annual_savings,
        yield_per_watt=ypw,
        install_cost=install_cost,
        annual_savings=annual_savings,
    )
    logger.debug("Solar sizing for %s kWh/yr with %s %s: %s", consumption, panel.brand, panel.model, result)
    return result
