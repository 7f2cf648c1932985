"""Plant financials model.

Monthly economics of the running plant: energy sales, data-center rack
rental and carbon credits against fixed OPEX. Carbon price and ROI follow
bounded random walks; everything else is derived from the committed power
output, rack count and fuel mode on each tick.
"""

import numpy as np

from plant_sim.types import FuelMode

CAPEX_BRL = 12_500_000.0
OPEX_BRL = {
    "fuel": 950_000.0,
    "maintenance": 550_000.0,
    "personnel": 300_000.0,
}

ENERGY_PRICE_BRL_MWH = 550.0
RACK_RENT_BRL = 6_000.0            # per active rack per month
BRL_PER_USD = 5.0
HOURS_PER_MONTH = 24 * 30

# kg CO2 per kWh
BASELINE_CO2_FACTOR = 0.4
CO2_FACTORS = {
    FuelMode.NATURAL_GAS: 0.2,
    FuelMode.ETHANOL: 0.1,
    FuelMode.BIODIESEL: 0.12,
}


def co2_factor(fuel_mode: FuelMode, h2_pct: float = 0.0, biodiesel_pct: float = 0.0) -> float:
    """Emission factor of the fuel mode; flex modes blend by their mix."""
    fuel_mode = FuelMode(fuel_mode)
    if fuel_mode == FuelMode.FLEX_NG_H2:
        return CO2_FACTORS[FuelMode.NATURAL_GAS] * (1.0 - h2_pct / 100.0)
    if fuel_mode == FuelMode.FLEX_ETHANOL_BIODIESEL:
        bio = biodiesel_pct / 100.0
        return CO2_FACTORS[FuelMode.ETHANOL] * (1.0 - bio) + CO2_FACTORS[FuelMode.BIODIESEL] * bio
    return CO2_FACTORS[fuel_mode]


def co2_reduced_tons(monthly_mwh: float, fuel_mode: FuelMode,
                     h2_pct: float = 0.0, biodiesel_pct: float = 0.0) -> float:
    """Monthly tonnes avoided against the grid baseline.

    Plain natural gas earns no credits.
    """
    if FuelMode(fuel_mode) == FuelMode.NATURAL_GAS:
        return 0.0
    factor = co2_factor(fuel_mode, h2_pct, biodiesel_pct)
    tons = monthly_mwh * 1000.0 * (BASELINE_CO2_FACTOR - factor) / 1000.0
    return max(tons, 0.0)


class FinancialsModel:
    """Revenue, cost and carbon-credit figures for the live plant."""

    DEFAULT_PARAMS = {
        "carbon_price0": 32.5,       # USD/t
        "carbon_price_step": 0.75,
        "carbon_price_min": 25.0,
        "carbon_price_max": 45.0,
        "roi0": 28.5,                # %
        "roi_step": 0.1,
        "roi_min": 20.0,
        "roi_max": 40.0,
        "history_months": 12,
        "history_jitter": 0.05,
    }

    def __init__(self, params: dict | None = None, rng: np.random.Generator | None = None):
        p = {**self.DEFAULT_PARAMS, **(params or {})}
        self.p = p
        self.rng = rng if rng is not None else np.random.default_rng()
        self.carbon_price = p["carbon_price0"]
        self.roi = p["roi0"]

        self.online = True
        self.energy_revenue = 0.0
        self.cloud_revenue = 0.0
        self.carbon_revenue = 0.0
        self.co2_reduced = 0.0
        self.opex = {k: 0.0 for k in OPEX_BRL}
        self.monthly_revenue: list[dict] = []

    def step(self, dt: float, power_output_mw: float, active_racks: int,
             fuel_mode: FuelMode, h2_pct: float = 0.0, biodiesel_pct: float = 0.0,
             online: bool = True) -> dict:
        """Advance the price walks and recompute the monthly figures.

        ``dt == 0`` recomputes without moving the walks. The walks are
        frozen while the plant is down.
        """
        p = self.p
        self.online = online
        if online and dt > 0:
            price = self.carbon_price + self.rng.uniform(-p["carbon_price_step"], p["carbon_price_step"])
            self.carbon_price = float(np.clip(price, p["carbon_price_min"], p["carbon_price_max"]))
            roi = self.roi + self.rng.uniform(-p["roi_step"], p["roi_step"])
            self.roi = float(np.clip(roi, p["roi_min"], p["roi_max"]))

        if online:
            monthly_mwh = power_output_mw * HOURS_PER_MONTH
            self.energy_revenue = monthly_mwh * ENERGY_PRICE_BRL_MWH
            self.cloud_revenue = active_racks * RACK_RENT_BRL
            self.co2_reduced = co2_reduced_tons(monthly_mwh, fuel_mode, h2_pct, biodiesel_pct)
            self.carbon_revenue = self.co2_reduced * self.carbon_price * BRL_PER_USD
            self.opex = dict(OPEX_BRL)
        else:
            self.energy_revenue = 0.0
            self.cloud_revenue = 0.0
            self.co2_reduced = 0.0
            self.carbon_revenue = 0.0
            self.opex = {k: 0.0 for k in OPEX_BRL}

        self.monthly_revenue = self._revenue_history()
        return self.get_state()

    def _revenue_history(self) -> list[dict]:
        revenue_millions = self.total_revenue / 1e6
        if revenue_millions == 0:
            return [{"month": m, "revenue_millions": 0.0} for m in range(1, self.p["history_months"] + 1)]
        jitter = self.p["history_jitter"]
        factors = self.rng.uniform(1.0 - jitter, 1.0 + jitter, size=self.p["history_months"])
        return [
            {"month": m, "revenue_millions": round(float(revenue_millions * f), 2)}
            for m, f in enumerate(factors, start=1)
        ]

    @property
    def total_revenue(self) -> float:
        return self.energy_revenue + self.cloud_revenue + self.carbon_revenue

    @property
    def total_cost(self) -> float:
        return CAPEX_BRL + sum(self.opex.values())

    @property
    def net_profit(self) -> float:
        return self.total_revenue - self.total_cost

    def get_state(self) -> dict:
        return {
            "capex_brl": CAPEX_BRL,
            "opex_brl": {k: round(v, 2) for k, v in self.opex.items()},
            "total_cost_brl": round(self.total_cost, 2),
            "energy_revenue_brl": round(self.energy_revenue, 2),
            "cloud_revenue_brl": round(self.cloud_revenue, 2),
            "carbon_revenue_brl": round(self.carbon_revenue, 2),
            "total_revenue_brl": round(self.total_revenue, 2),
            "net_profit_brl": round(self.net_profit, 2),
            "co2_reduced_tons": round(self.co2_reduced, 2),
            "carbon_price_usd": round(self.carbon_price, 2),
            "roi_pct": round(self.roi, 2),
            "monthly_revenue": list(self.monthly_revenue),
        }
