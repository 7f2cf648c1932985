"""SimPy-based plant orchestrator.

Runs one SimPy process per periodic task, each on its own period:

    ambient    2.0 s   weather random walk
    plant      2.0 s   turbines, power/efficiency, fuel, resources
    cooling    2.5 s   waste heat cascade
    emissions  3.0 s   pollutant walk and long history
    financials 3.0 s   carbon price and ROI walks, monthly economics
    dc_power   2.5 s   data-center IT load and PUE
    dc_cooling 3.0 s   data-center cooling load

There is no master clock, so a snapshot can combine values from different
tick generations. Every task commits its sub-state and then swaps in a new
frozen ``PlantSnapshot``; readers never see a half-updated snapshot.
"""

import logging
from dataclasses import asdict, dataclass, field

import numpy as np
import simpy

from plant_sim.config_store import ConfigurationStore
from plant_sim.core.recorder import HistoryRecorder
from plant_sim.detection.alerts import AlertLog, ThresholdMonitor
from plant_sim.physics.ambient import AmbientConditionsModel
from plant_sim.physics.data_center import DataCenterCoolingModel, DataCenterPowerModel
from plant_sim.physics.emissions import EmissionsModel
from plant_sim.physics.financials import FinancialsModel
from plant_sim.physics.fuel import FuelConsumptionModel
from plant_sim.physics.resources import ResourceConsumptionModel, enabled_resources
from plant_sim.physics.thermal_power import ThermalPowerModel, inlet_cooling_gain
from plant_sim.physics.turbines import TurbineFleetModel
from plant_sim.physics.waste_heat import CascadeState, WasteHeatCascade
from plant_sim.plants import plant_capacity
from plant_sim.types import AlertLevel, PlantStatus, TurbineStatus

logger = logging.getLogger(__name__)

DEFAULT_PERIODS = {
    "ambient": 2.0,
    "plant": 2.0,
    "cooling": 2.5,
    "emissions": 3.0,
    "financials": 3.0,
    "dc_power": 2.5,
    "dc_cooling": 3.0,
}

_TRANSITION_ALERTS = {
    TurbineStatus.ACTIVE: (AlertLevel.INFO, "Turbine #{} is online"),
    TurbineStatus.INACTIVE: (AlertLevel.WARNING, "Turbine #{} is offline"),
    TurbineStatus.ERROR: (AlertLevel.CRITICAL, "Turbine #{} reported an error"),
}


@dataclass(frozen=True)
class PlantSnapshot:
    """Read-only view of the whole plant at one instant."""
    status: PlantStatus
    plant: str
    sim_time: float
    power_output_mw: float
    efficiency_pct: float
    efficiency_gain: float
    display_efficiency: float
    power_loss_mw: float
    ideal_power_mw: float
    loss_pct: float
    fuel_consumption: float
    fuel: dict
    emissions: dict
    emissions_forecast: tuple
    financials: dict
    data_center: dict
    cascade: dict
    resources: dict
    ambient: dict
    turbines: tuple
    alerts: tuple
    ticks: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["status"] = self.status.value
        data["emissions_forecast"] = list(self.emissions_forecast)
        data["turbines"] = list(self.turbines)
        data["alerts"] = list(self.alerts)
        return data


class PlantSimulation:
    """Owns the live plant models and the committed snapshot."""

    def __init__(
        self,
        config_store: ConfigurationStore | None = None,
        seed: int | None = None,
        periods: dict | None = None,
        max_alerts: int = 5,
        history_window: int = 60,
        autostart: bool = True,
    ):
        self.config_store = config_store if config_store is not None else ConfigurationStore()
        self.periods = {**DEFAULT_PERIODS, **(periods or {})}
        self.rng = np.random.default_rng(seed)
        self.env = simpy.Environment()

        self.ambient = AmbientConditionsModel(rng=self.rng)
        self.fleet = TurbineFleetModel(rng=self.rng)
        self.power = ThermalPowerModel(rng=self.rng)
        self.fuel = FuelConsumptionModel()
        self.emissions = EmissionsModel(rng=self.rng)
        self.cascade = WasteHeatCascade()
        self.resources = ResourceConsumptionModel()
        self.financials = FinancialsModel(rng=self.rng)
        self.dc_power = DataCenterPowerModel(rng=self.rng)
        self.dc_cooling = DataCenterCoolingModel(rng=self.rng)

        self.alerts = AlertLog(max_alerts=max_alerts)
        self.maintenance_monitor = ThresholdMonitor("maintenance", AlertLevel.WARNING)
        self.emissions_monitor = ThresholdMonitor("emissions", AlertLevel.WARNING)
        self.storage_monitor = ThresholdMonitor("storage", AlertLevel.WARNING)
        self.history = HistoryRecorder(window=history_window)

        self.status = PlantStatus.ONLINE
        self.tick_counts = {name: 0 for name in self.periods}
        self._processes: dict[str, simpy.Process] = {}
        self._generation = 0

        self._apply_config(initial=True)
        self.power.go_online(plant_capacity(self.plant_name))
        self._refresh_derived()
        self._commit()

        if autostart:
            self.start()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    @property
    def plant_name(self) -> str:
        return self.config_store.selected_plant

    @property
    def online(self) -> bool:
        return self.status == PlantStatus.ONLINE

    @property
    def running(self) -> bool:
        return bool(self._processes)

    def start(self):
        """Register the periodic processes; a no-op if they already run."""
        if self._processes or not self.online:
            return
        tasks = {
            "ambient": self._tick_ambient,
            "plant": self._tick_plant,
            "cooling": self._tick_cooling,
            "emissions": self._tick_emissions,
            "financials": self._tick_financials,
            "dc_power": self._tick_dc_power,
            "dc_cooling": self._tick_dc_cooling,
        }
        generation = self._generation
        for name, tick in tasks.items():
            self._processes[name] = self.env.process(
                self._periodic(name, self.periods[name], tick, generation)
            )
        logger.info("Plant %r processes started at t=%.1f", self.plant_name, self.env.now)

    def stop(self):
        """Retire every pending process; none of them fires again."""
        if not self._processes:
            return
        self._generation += 1
        self._processes = {}
        logger.info("Plant %r processes stopped at t=%.1f", self.plant_name, self.env.now)

    def run(self, duration: float):
        """Advance the simulation clock by ``duration`` seconds."""
        self.env.run(until=self.env.now + duration)

    def _periodic(self, name: str, period: float, tick, generation: int):
        while True:
            yield self.env.timeout(period)
            if generation != self._generation:
                return
            tick(period)
            self.tick_counts[name] += 1
            self._commit()

    # ------------------------------------------------------------------
    # Periodic tasks
    # ------------------------------------------------------------------
    def _tick_ambient(self, dt: float):
        self.ambient.step(dt)

    def _tick_plant(self, dt: float):
        config = self._apply_config()
        gain = inlet_cooling_gain(
            self.cascade.state.tiac_mw,
            self.cascade.state.fog_mw,
            self.ambient.state.dry_bulb_c,
            self.online,
        )
        self.power.set_efficiency_gain(gain)
        self.power.step(dt, self.fleet.active_count, self.ambient.state.dry_bulb_c)
        self.fuel.step(dt, self.power.power_output, self.power.efficiency)
        self.resources.step(
            dt,
            self.fuel.component_flows(),
            self.power.power_output,
            config.fuel_mode,
            config.water_enabled,
        )
        self._check_storage()
        self.history.record(self.env.now, {
            "power_output": self.power.power_output,
            "efficiency": self.power.efficiency,
            "display_efficiency": self.power.display_efficiency,
            "power_loss": self.power.power_loss,
            "fuel_consumption": self.fuel.consumption,
            "dry_bulb_c": self.ambient.state.dry_bulb_c,
        })

    def _tick_cooling(self, dt: float):
        self.cascade.step(dt, self.power.power_output, self.power.efficiency, self.online)

    def _tick_emissions(self, dt: float):
        self.emissions.step(dt, self.env.now)
        fired = self.emissions_monitor.check(set(self.emissions.over_limit()))
        for name in sorted(fired):
            self.alerts.add(AlertLevel.WARNING, f"{name.upper()} emissions above limit")

    def _tick_financials(self, dt: float):
        self._update_financials(dt)

    def _tick_dc_power(self, dt: float):
        self.dc_power.step(dt)

    def _tick_dc_cooling(self, dt: float):
        self.dc_cooling.step(dt, self.env.now)

    def _update_financials(self, dt: float):
        config = self.config_store.current
        self.financials.step(
            dt,
            self.power.power_output,
            self.cascade.state.potential_active_racks,
            config.fuel_mode,
            config.flex_mix.h2,
            config.flex_mix.biodiesel,
            online=self.online,
        )

    def _apply_config(self, initial: bool = False):
        """Push the selected plant's configuration into the models."""
        config = self.config_store.current
        self.fuel.configure(config.fuel_mode, config.flex_mix.h2, config.flex_mix.biodiesel)
        transitions = self.fleet.step(
            self.periods["plant"], config.turbine_status, self.env.now, running=self.online
        )
        if not initial:
            for tid, _old, new in transitions:
                level, template = _TRANSITION_ALERTS[new]
                self.alerts.add(level, template.format(tid))
        self._check_maintenance()
        return config

    def _refresh_derived(self):
        """Recompute values that depend only on the committed power state."""
        config = self.config_store.current
        self.fuel.step(0.0, self.power.power_output, self.power.efficiency)
        self.cascade.step(0.0, self.power.power_output, self.power.efficiency, self.online)
        self.resources.enabled = enabled_resources(config.fuel_mode, config.water_enabled)
        if not self.online:
            self.resources.idle()
        self._update_financials(0.0)

    # ------------------------------------------------------------------
    # Threshold checks
    # ------------------------------------------------------------------
    def _check_maintenance(self):
        due = {tid for tid, t in self.fleet.turbines.items() if t.needs_maintenance}
        for tid in sorted(self.maintenance_monitor.check(due)):
            self.alerts.add(AlertLevel.WARNING, f"Turbine #{tid} requires maintenance")

    def _check_storage(self):
        low = {res.value for res in self.resources.low_levels()}
        for name in sorted(self.storage_monitor.check(low)):
            self.alerts.add(AlertLevel.WARNING, f"{name.capitalize()} storage below 10%")

    # ------------------------------------------------------------------
    # Operator actions
    # ------------------------------------------------------------------
    def set_plant_status(self, status: PlantStatus) -> PlantSnapshot:
        """Switch the plant on or off.

        Offline and maintenance zero power, efficiency, gain, turbine
        telemetry, emissions readings and the cooling cascade at once and
        stop every periodic task. Going back online reseeds output to
        85-95 % of the plant capacity and restarts the tasks.
        """
        status = PlantStatus(status)
        if status == PlantStatus.ONLINE:
            if not self.online:
                self.status = status
                self.power.go_online(plant_capacity(self.plant_name))
                self.emissions.online = True
                self._apply_config(initial=True)
                self._refresh_derived()
                self.start()
                logger.info("Plant %r online at %.1f MW", self.plant_name, self.power.power_output)
        else:
            self.status = status
            self.stop()
            self.power.go_offline()
            self.fleet.shutdown()
            self.emissions.online = False
            self.cascade.state = CascadeState()
            self.resources.idle()
            self.fuel.step(0.0, 0.0, 0.0)
            self._update_financials(0.0)
            logger.info("Plant %r set to %s", self.plant_name, status.value)
        self._commit()
        return self._snapshot

    def select_plant(self, plant_name: str) -> PlantSnapshot:
        """Make ``plant_name`` the live plant; raises KeyError if unknown."""
        self.config_store.select_plant(plant_name)
        self._apply_config(initial=True)
        if self.online:
            self.power.go_online(plant_capacity(plant_name))
        self._refresh_derived()
        logger.info("Selected plant %r", plant_name)
        self._commit()
        return self._snapshot

    def update_config(self, plant_name: str, partial: dict):
        """Merge a configuration change; applied at once for the live plant."""
        config = self.config_store.set(plant_name, partial)
        if plant_name == self.plant_name:
            self._apply_config()
            self._commit()
        return config

    def set_maintenance_score(self, turbine_id: int, score: float):
        turbine = self.fleet.get(turbine_id)
        turbine.set_maintenance_score(score)
        self._check_maintenance()
        self._commit()
        return turbine

    def perform_maintenance(self, turbine_id: int):
        turbine = self.fleet.get(turbine_id)
        turbine.perform_maintenance()
        self.alerts.add(AlertLevel.INFO, f"Maintenance performed on turbine #{turbine_id}")
        self._check_maintenance()
        self._commit()
        return turbine

    def rebalance_cooling(self, system: str, pct: float):
        """Set TIAC or Fog share in percent; raises ValueError for other systems."""
        self.cascade.split = self.cascade.split.rebalance(system, pct)
        self.cascade.step(0.0, self.power.power_output, self.power.efficiency, self.online)
        self._commit()
        return self.cascade.split

    def dismiss_alert(self, alert_id: int) -> bool:
        removed = self.alerts.dismiss(alert_id)
        if removed:
            self._commit()
        return removed

    def clear_alerts(self):
        self.alerts.clear()
        self._commit()

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------
    def _commit(self):
        shares = self.fleet.power_shares(self.power.power_output)
        turbines = tuple(
            {**t, "power_share_mw": round(shares[t["id"]], 1)}
            for t in self.fleet.get_state()
        )
        self._snapshot = PlantSnapshot(
            status=self.status,
            plant=self.plant_name,
            sim_time=float(self.env.now),
            power_output_mw=self.power.power_output,
            efficiency_pct=self.power.efficiency,
            efficiency_gain=self.power.efficiency_gain,
            display_efficiency=self.power.display_efficiency,
            power_loss_mw=self.power.power_loss,
            ideal_power_mw=self.power.ideal_power,
            loss_pct=self.power.loss_pct,
            fuel_consumption=self.fuel.consumption,
            fuel=self.fuel.get_state(),
            emissions=self.emissions.get_state(),
            emissions_forecast=tuple(self.emissions.forecast()),
            financials=self.financials.get_state(),
            data_center={**self.dc_power.get_state(), **self.dc_cooling.get_state()},
            cascade=self.cascade.get_state(),
            resources=self.resources.get_state(),
            ambient=self.ambient.get_state(),
            turbines=turbines,
            alerts=tuple(a.get_state() for a in self.alerts.alerts),
            ticks=dict(self.tick_counts),
        )

    @property
    def snapshot(self) -> PlantSnapshot:
        return self._snapshot
