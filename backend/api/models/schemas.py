"""Pydantic schemas for API request/response models."""

from typing import Literal

from pydantic import BaseModel, Field

from plant_sim.types import AlertLevel, FuelMode, PlantStatus, TurbineStatus


class PlantStatusUpdate(BaseModel):
    """Switch the live plant on or off."""
    status: PlantStatus


class PlantSelect(BaseModel):
    plant: str = Field(description="Plant name from the catalog")


class FlexMixUpdate(BaseModel):
    h2: float | None = Field(default=None, description="H2 share of the NG/H2 blend (%)")
    biodiesel: float | None = Field(
        default=None, description="Biodiesel share of the ethanol/biodiesel blend (%)"
    )


class ConfigUpdate(BaseModel):
    """Partial plant configuration; omitted fields are left unchanged."""
    fuel_mode: FuelMode | None = None
    flex_mix: FlexMixUpdate | None = None
    turbine_status: dict[int, TurbineStatus] | None = Field(
        default=None, description="Status per turbine id; unlisted turbines keep theirs"
    )
    water_enabled: bool | None = None


class LanguageSetting(BaseModel):
    language: str = Field(min_length=2, max_length=8, description="UI language code")


class MaintenanceScoreUpdate(BaseModel):
    score: float = Field(description="Maintenance score, clamped to 0-100")


class CoolingRebalance(BaseModel):
    """Set one inlet system's share; the data center takes the remainder."""
    system: Literal["tiac", "fog"]
    pct: float = Field(description="Share of chiller output (%), clamped to 0-100")


class CoolingSplitState(BaseModel):
    tiac: float
    fog: float
    data_center: float


class TurbineState(BaseModel):
    id: int
    status: TurbineStatus
    rpm: float = Field(description="Shaft speed (RPM)")
    temp: float = Field(description="Turbine inlet temperature (C)")
    pressure: float = Field(description="Compressor discharge pressure (bar)")
    type: str
    manufacturer: str
    model: str
    iso_capacity_mw: float
    maintenance_score: float
    needs_maintenance: bool
    faulted: bool
    power_share_mw: float | None = None


class AlertState(BaseModel):
    id: int
    level: AlertLevel
    message: str
    timestamp: str


class ForecastPoint(BaseModel):
    time: str = Field(description="Day offset, D+1 .. D+n")
    nox: float
    sox: float
    co: float
    particulates: float


class PlantState(BaseModel):
    """Full plant snapshot."""
    status: PlantStatus
    plant: str
    sim_time: float = Field(description="Elapsed simulation time (s)")
    power_output_mw: float
    efficiency_pct: float
    efficiency_gain: float
    display_efficiency: float
    power_loss_mw: float
    ideal_power_mw: float
    loss_pct: float = Field(description="ISO deration as a fraction of ideal output")
    fuel_consumption: float = Field(description="Fuel flow (kg/s)")
    fuel: dict
    emissions: dict
    emissions_forecast: list[ForecastPoint]
    financials: dict
    data_center: dict
    cascade: dict
    resources: dict
    ambient: dict
    turbines: list[TurbineState]
    alerts: list[AlertState]
    ticks: dict[str, int]
