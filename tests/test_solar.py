import math
import os
import sys

import pytest

# Ensure package root on path for pytest execution
sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from thermocalc.dataclasses import SolarPanelSpec
from thermocalc.constants import ORIENTATION_FACTORS
from thermocalc.solar import orientation_factor, tilt_factor, yield_per_watt, size_solar_array
from thermocalc.errors import (
    InvalidOrientation, InvalidPanel, InfeasibleSizing, InfeasiblePayback,
)


def meyer_burger_white():
    return SolarPanelSpec(rated_power=400, efficiency=21.8, area=1.87, price=450,
                          brand="Meyer Burger", model="White")


def test_south_is_the_best_orientation():
    assert orientation_factor("south") == 1.0
    assert all(orientation_factor(key) <= 1.0 for key in ORIENTATION_FACTORS)


def test_orientation_lookup_normalises_case():
    assert orientation_factor(" South-East ") == 0.95


def test_unknown_orientation_raises():
    with pytest.raises(InvalidOrientation):
        orientation_factor("sud")
    with pytest.raises(InvalidOrientation):
        size_solar_array(4500, "up", 33, 0, meyer_burger_white(), 0.25)


def test_tilt_factor_peaks_at_optimum():
    assert tilt_factor(33) == 1.0
    assert tilt_factor(13) == pytest.approx(math.cos(math.radians(20)))
    assert tilt_factor(53) == pytest.approx(tilt_factor(13))
    assert tilt_factor(150) < 0


def test_reference_sizing():
    res = size_solar_array(4500, "south", 33, 0, meyer_burger_white(), 0.25)
    assert res.yield_per_watt == pytest.approx(239.8)
    assert res.required_peak_power == pytest.approx(4500 * 1000 / 239.8)
    assert res.panel_count == 47
    assert res.required_area == 47 * 1.87
    assert res.annual_yield == pytest.approx(47 * 400 * 239.8 / 1000)
    assert res.install_cost == pytest.approx(47 * 450 * 1.5)
    assert res.payback_period == pytest.approx(res.install_cost / (res.annual_yield * 0.25))


@pytest.mark.parametrize(
    "consumption, orientation, tilt, shading",
    [(1200, "east", 20, 5), (3000, "south-west", 45, 10), (9800, "north", 10, 30), (350, "west", 0, 0)],
)
def test_panel_count_is_smallest_integer_covering_peak_power(consumption, orientation, tilt, shading):
    panel = meyer_burger_white()
    res = size_solar_array(consumption, orientation, tilt, shading, panel, 0.25)
    assert res.panel_count >= res.required_peak_power / panel.rated_power
    assert res.panel_count - 1 < res.required_peak_power / panel.rated_power
    assert res.required_area == res.panel_count * panel.area
    assert res.annual_yield >= consumption * (1 - 1e-12)


def test_base_irradiation_override_changes_yield():
    panel = meyer_burger_white()
    sunny = size_solar_array(4500, "south", 33, 0, panel, 0.25, base_irradiation=1500)
    default = size_solar_array(4500, "south", 33, 0, panel, 0.25)
    assert sunny.yield_per_watt > default.yield_per_watt
    assert sunny.panel_count <= default.panel_count


@pytest.mark.parametrize("tilt, shading", [(150, 0), (33, 100), (-90, 0)])
def test_non_positive_yield_is_infeasible(tilt, shading):
    with pytest.raises(InfeasibleSizing):
        size_solar_array(4500, "south", tilt, shading, meyer_burger_white(), 0.25)


def test_zero_efficiency_is_infeasible():
    panel = SolarPanelSpec(rated_power=400, efficiency=0, area=1.9, price=400)
    with pytest.raises(InfeasibleSizing):
        size_solar_array(4500, "south", 33, 0, panel, 0.25)
    assert yield_per_watt("south", 33, 0, 0) == 0


def test_no_savings_means_no_payback():
    with pytest.raises(InfeasiblePayback):
        size_solar_array(4500, "south", 33, 0, meyer_burger_white(), 0.0)
    with pytest.raises(InfeasiblePayback):
        size_solar_array(0, "south", 33, 0, meyer_burger_white(), 0.25)


@pytest.mark.parametrize(
    "panel",
    [
        SolarPanelSpec(rated_power=0, efficiency=20, area=1.8, price=300),
        SolarPanelSpec(rated_power=400, efficiency=20, area=0, price=300),
        SolarPanelSpec(rated_power=400, efficiency=120, area=1.8, price=300),
        SolarPanelSpec(rated_power=400, efficiency=20, area=1.8, price=-1),
    ],
)
def test_unusable_panel_raises(panel):
    with pytest.raises(InvalidPanel):
        size_solar_array(4500, "south", 33, 0, panel, 0.25)


def test_sizing_is_idempotent():
    args = (5321.5, "south-east", 27.5, 3.5, meyer_burger_white(), 0.31)
    assert size_solar_array(*args) == size_solar_array(*args)


@pytest.mark.parametrize("consumption", [math.nan, math.inf, -1.0])
def test_unusable_consumption_is_infeasible(consumption):
    with pytest.raises(InfeasibleSizing):
        size_solar_array(consumption, "south", 33, 0, meyer_burger_white(), 0.25)


@pytest.mark.parametrize(
    "panel",
    [
        SolarPanelSpec(rated_power=math.nan, efficiency=20, area=1.8, price=300),
        SolarPanelSpec(rated_power=400, efficiency=20, area=math.nan, price=300),
        SolarPanelSpec(rated_power=400, efficiency=20, area=1.8, price=math.nan),
        SolarPanelSpec(rated_power=400, efficiency=math.nan, area=1.8, price=300),
        SolarPanelSpec(rated_power=math.inf, efficiency=20, area=1.8, price=300),
        SolarPanelSpec(rated_power=400, efficiency=20, area=1.8, price=math.inf),
    ],
)
def test_non_finite_panel_raises(panel):
    with pytest.raises(InvalidPanel):
        size_solar_array(4500, "south", 33, 0, panel, 0.25)


@pytest.mark.parametrize("rate", [math.nan, math.inf])
def test_non_finite_rate_has_no_payback(rate):
    with pytest.raises(InfeasiblePayback):
        size_solar_array(4500, "south", 33, 0, meyer_burger_white(), rate)


def test_rejected_panel_is_logged(caplog):
    panel = SolarPanelSpec(rated_power=0, efficiency=20, area=1.8, price=300, brand="Acme", model="Z")
    with caplog.at_level("WARNING", logger="thermocalc.solar"):
        with pytest.raises(InvalidPanel):
            size_solar_array(4500, "south", 33, 0, panel, 0.25)
    assert "Acme Z" in caplog.text
