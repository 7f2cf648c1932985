"""Unit tests for the plant financials model."""

import numpy as np
import pytest

from plant_sim.physics.financials import (
    CAPEX_BRL,
    FinancialsModel,
    co2_factor,
    co2_reduced_tons,
)
from plant_sim.types import FuelMode


class TestCarbonFactors:
    def test_single_fuels(self):
        assert co2_factor(FuelMode.NATURAL_GAS) == 0.2
        assert co2_factor(FuelMode.ETHANOL) == 0.1
        assert co2_factor(FuelMode.BIODIESEL) == 0.12

    def test_flex_blends(self):
        assert co2_factor(FuelMode.FLEX_NG_H2, h2_pct=20) == pytest.approx(0.16)
        assert co2_factor(FuelMode.FLEX_NG_H2, h2_pct=100) == 0.0
        assert co2_factor(FuelMode.FLEX_ETHANOL_BIODIESEL, biodiesel_pct=30) == pytest.approx(0.106)

    def test_reduction_against_baseline(self):
        # 1000 MWh on ethanol: (0.4 - 0.1) t/MWh
        assert co2_reduced_tons(1000.0, FuelMode.ETHANOL) == pytest.approx(300.0)

    def test_natural_gas_earns_nothing(self):
        assert co2_reduced_tons(1000.0, FuelMode.NATURAL_GAS) == 0.0


class TestFinancialsModel:
    def test_initialization(self):
        state = FinancialsModel().get_state()
        assert state["carbon_price_usd"] == 32.5
        assert state["roi_pct"] == 28.5
        assert state["capex_brl"] == CAPEX_BRL

    def test_online_figures(self):
        model = FinancialsModel(rng=np.random.default_rng(3))
        state = model.step(0.0, 100.0, 10, FuelMode.ETHANOL)
        monthly_mwh = 100.0 * 24 * 30
        assert state["energy_revenue_brl"] == pytest.approx(monthly_mwh * 550.0)
        assert state["cloud_revenue_brl"] == 60_000.0
        assert state["co2_reduced_tons"] == pytest.approx(monthly_mwh * 0.3)
        assert state["carbon_revenue_brl"] == pytest.approx(monthly_mwh * 0.3 * 32.5 * 5.0)
        assert state["total_cost_brl"] == pytest.approx(CAPEX_BRL + 1_800_000.0)
        assert state["net_profit_brl"] == pytest.approx(
            state["total_revenue_brl"] - state["total_cost_brl"]
        )

    def test_offline_only_capex_remains(self):
        model = FinancialsModel(rng=np.random.default_rng(3))
        model.step(3.0, 100.0, 10, FuelMode.ETHANOL)
        state = model.step(3.0, 0.0, 0, FuelMode.ETHANOL, online=False)
        assert state["total_revenue_brl"] == 0.0
        assert state["co2_reduced_tons"] == 0.0
        assert all(v == 0.0 for v in state["opex_brl"].values())
        assert state["net_profit_brl"] == -CAPEX_BRL
        assert all(m["revenue_millions"] == 0.0 for m in state["monthly_revenue"])

    def test_walks_stay_in_band(self):
        model = FinancialsModel(rng=np.random.default_rng(7))
        for _ in range(2000):
            model.step(3.0, 100.0, 10, FuelMode.NATURAL_GAS)
            assert 25.0 <= model.carbon_price <= 45.0
            assert 20.0 <= model.roi <= 40.0

    def test_walks_frozen_offline(self):
        model = FinancialsModel(rng=np.random.default_rng(7))
        model.step(3.0, 100.0, 10, FuelMode.NATURAL_GAS)
        price, roi = model.carbon_price, model.roi
        for _ in range(10):
            model.step(3.0, 0.0, 0, FuelMode.NATURAL_GAS, online=False)
        assert (model.carbon_price, model.roi) == (price, roi)

    def test_monthly_revenue_history(self):
        model = FinancialsModel(rng=np.random.default_rng(3))
        state = model.step(0.0, 100.0, 10, FuelMode.NATURAL_GAS)
        history = state["monthly_revenue"]
        assert [m["month"] for m in history] == list(range(1, 13))
        revenue_millions = model.total_revenue / 1e6
        for m in history:
            assert 0.95 * revenue_millions - 0.01 <= m["revenue_millions"] <= 1.05 * revenue_millions + 0.01
