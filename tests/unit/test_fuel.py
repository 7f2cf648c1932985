"""Unit tests for the fuel consumption model."""

import pytest

from plant_sim.physics.fuel import (
    FuelConsumptionModel,
    blend_components,
    fuel_consumption,
    fuel_title,
)
from plant_sim.types import FuelMode, Resource


class TestFuelConsumption:
    def test_formula(self):
        assert fuel_consumption(2250.0, 58.5) == pytest.approx(2250.0 / 0.585 / 100.0)

    def test_zero_efficiency(self):
        assert fuel_consumption(2250.0, 0.0) == 0.0


class TestBlend:
    def test_ng_h2_title(self):
        assert fuel_title(FuelMode.FLEX_NG_H2, h2_pct=20) == "NG(80%)/H2(20%)"

    def test_ethanol_biodiesel_title(self):
        title = fuel_title(FuelMode.FLEX_ETHANOL_BIODIESEL, biodiesel_pct=30)
        assert title == "Ethanol(70%)/Biodiesel(30%)"

    def test_single_fuel_title(self):
        assert fuel_title(FuelMode.NATURAL_GAS) == "Natural Gas"
        assert fuel_title(FuelMode.BIODIESEL) == "Biodiesel"

    def test_shares_sum_to_100(self):
        for mode in FuelMode:
            components = blend_components(mode, 35.0, 60.0)
            assert sum(share for _, _, share in components) == pytest.approx(100.0)


class TestFuelConsumptionModel:
    def test_blend_does_not_change_aggregate(self):
        low = FuelConsumptionModel(FuelMode.FLEX_NG_H2, h2_pct=20)
        high = FuelConsumptionModel(FuelMode.FLEX_NG_H2, h2_pct=60)
        low.step(2.0, 2000.0, 58.0)
        high.step(2.0, 2000.0, 58.0)
        assert low.consumption == high.consumption

    def test_component_flows(self):
        model = FuelConsumptionModel(FuelMode.FLEX_NG_H2, h2_pct=20)
        model.step(2.0, 2000.0, 50.0)
        flows = model.component_flows()
        assert flows[Resource.GAS] == pytest.approx(model.consumption * 0.8)
        assert flows[Resource.H2] == pytest.approx(model.consumption * 0.2)

    def test_state(self):
        model = FuelConsumptionModel(FuelMode.FLEX_NG_H2, h2_pct=20)
        state = model.step(2.0, 2000.0, 50.0)
        assert state["title"] == "NG(80%)/H2(20%)"
        assert state["consumption"] == 40.0
        assert [c["fuel"] for c in state["blend"]] == ["NG", "H2"]
