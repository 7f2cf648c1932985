"""Tests for the SimPy plant orchestrator."""

import dataclasses

import pytest

from plant_sim.config_store import ConfigurationStore, MemoryBackend
from plant_sim.core.orchestrator import PlantSimulation
from plant_sim.physics.ambient import AmbientState
from plant_sim.physics.financials import co2_reduced_tons
from plant_sim.plants import DEFAULT_PLANT
from plant_sim.types import FuelMode, PlantStatus, TurbineStatus

CAPACITY = 2500.0


@pytest.fixture
def sim():
    return PlantSimulation(ConfigurationStore(MemoryBackend()), seed=42)


class TestLifecycle:
    def test_initial_snapshot(self, sim):
        snap = sim.snapshot
        assert snap.status == PlantStatus.ONLINE
        assert snap.plant == DEFAULT_PLANT
        assert 0.85 * CAPACITY <= snap.power_output_mw <= 0.95 * CAPACITY
        assert snap.efficiency_pct == 58.5
        assert len(snap.turbines) == 5
        assert len(snap.emissions_forecast) == 7
        assert sim.running

    def test_independent_periods(self, sim):
        sim.run(11.0)
        assert sim.snapshot.ticks == {
            "ambient": 5,
            "plant": 5,
            "cooling": 4,
            "emissions": 3,
            "financials": 3,
            "dc_power": 4,
            "dc_cooling": 3,
        }
        assert sim.snapshot.sim_time == pytest.approx(10.0)

    def test_processes_do_not_fire_after_stop(self, sim):
        sim.run(5.0)
        sim.stop()
        ticks = dict(sim.tick_counts)
        ambient = sim.ambient.state
        sim.run(60.0)
        assert sim.tick_counts == ticks
        assert sim.ambient.state == ambient
        assert not sim.running

    def test_restart_after_stop(self, sim):
        sim.stop()
        sim.start()
        sim.run(2.5)
        assert sim.tick_counts["plant"] == 1

    def test_invariants_over_long_run(self, sim):
        for _ in range(120):
            sim.run(5.0)
            snap = sim.snapshot
            assert snap.power_output_mw >= 0.0
            assert 0.0 <= snap.display_efficiency <= 100.0
            ambient = sim.ambient.state
            assert ambient.wet_bulb_c <= ambient.dry_bulb_c - 1.0
            assert 20.0 <= ambient.humidity_pct <= 99.0
            for st in sim.resources.storage.values():
                assert 0.0 <= st.level <= st.capacity

    def test_snapshot_is_frozen(self, sim):
        with pytest.raises(dataclasses.FrozenInstanceError):
            sim.snapshot.power_output_mw = 0.0

    def test_snapshot_replaced_on_commit(self, sim):
        before = sim.snapshot
        sim.run(2.5)
        assert sim.snapshot is not before
        assert before.ticks["plant"] == 0

    def test_history_recorded_per_plant_tick(self, sim):
        sim.run(11.0)
        records = sim.history.records()
        assert len(records) == 5
        assert "power_output" in records[-1]


class TestPlantStatus:
    def test_offline_zeroes_outputs(self, sim):
        sim.run(6.0)
        snap = sim.set_plant_status(PlantStatus.OFFLINE)
        assert snap.power_output_mw == 0.0
        assert snap.efficiency_pct == 0.0
        assert snap.efficiency_gain == 0.0
        assert snap.fuel_consumption == 0.0
        assert snap.cascade["waste_heat"] == 0.0
        assert all(v == 0.0 for v in snap.emissions.values())
        assert all(t["rpm"] == 0.0 for t in snap.turbines)

    def test_offline_is_idempotent(self, sim):
        first = sim.set_plant_status(PlantStatus.OFFLINE)
        sim.run(30.0)
        second = sim.set_plant_status(PlantStatus.OFFLINE)
        assert second.power_output_mw == first.power_output_mw == 0.0
        assert second.efficiency_gain == 0.0
        assert second.ticks == first.ticks
        assert second.ambient == first.ambient

    def test_maintenance_stops_the_plant(self, sim):
        snap = sim.set_plant_status(PlantStatus.MAINTENANCE)
        assert snap.status == PlantStatus.MAINTENANCE
        assert snap.power_output_mw == 0.0
        assert not sim.running

    def test_config_change_while_offline_keeps_turbines_idle(self, sim):
        sim.run(4.5)
        sim.set_plant_status(PlantStatus.OFFLINE)
        lengths = {tid: len(t.history) for tid, t in sim.fleet.turbines.items()}
        sim.update_config(DEFAULT_PLANT, {"fuel_mode": "ETHANOL"})
        sim.update_config(DEFAULT_PLANT, {"turbine_status": {3: TurbineStatus.INACTIVE}})
        assert {tid: len(t.history) for tid, t in sim.fleet.turbines.items()} == lengths
        assert all(t["rpm"] == 0.0 for t in sim.snapshot.turbines)

    def test_offline_zeroes_forecast_and_financials(self, sim):
        sim.run(7.0)
        snap = sim.set_plant_status(PlantStatus.OFFLINE)
        for point in snap.emissions_forecast:
            assert all(point[k] == 0.0 for k in ("nox", "sox", "co", "particulates"))
        assert snap.financials["total_revenue_brl"] == 0.0
        assert snap.financials["net_profit_brl"] == -snap.financials["capex_brl"]
        assert snap.financials["co2_reduced_tons"] == 0.0

    def test_offline_then_online_resumes(self, sim):
        sim.set_plant_status(PlantStatus.OFFLINE)
        sim.run(10.0)
        ticks = dict(sim.tick_counts)
        snap = sim.set_plant_status(PlantStatus.ONLINE)
        assert 0.85 * CAPACITY <= snap.power_output_mw <= 0.95 * CAPACITY
        assert snap.efficiency_pct == 58.5
        sim.run(2.5)
        assert sim.tick_counts["ambient"] == ticks["ambient"] + 1
        assert sim.tick_counts["plant"] == ticks["plant"] + 1
        assert any(t["rpm"] > 0 for t in sim.snapshot.turbines)


class TestPlantCoupling:
    def test_iso_loss_with_three_turbines_at_25c(self):
        sim = PlantSimulation(
            ConfigurationStore(MemoryBackend()), seed=1, periods={"ambient": 1e9}
        )
        sim.ambient.state = AmbientState(dry_bulb_c=25.0, wet_bulb_c=20.0, humidity_pct=60.0)
        sim.update_config(DEFAULT_PLANT, {"turbine_status": {4: "inactive", 5: "inactive"}})
        sim.run(2.5)
        snap = sim.snapshot
        assert sim.fleet.active_count == 3
        assert snap.loss_pct == pytest.approx(0.07)
        assert snap.ideal_power_mw == pytest.approx(snap.power_output_mw / 0.93)
        assert snap.power_loss_mw == pytest.approx(snap.ideal_power_mw - snap.power_output_mw)
        assert snap.efficiency_gain == 0.0

    def test_efficiency_gain_uses_previous_cooling(self, sim):
        # cooling commits at 2.5 s, the plant tick at 4 s reads it
        sim.run(5.0)
        state = sim.cascade.state
        assert sim.ambient.state.dry_bulb_c > 25.0
        expected = state.tiac_mw / 300.0 + state.fog_mw / 400.0
        assert sim.snapshot.efficiency_gain == pytest.approx(expected)
        assert sim.snapshot.display_efficiency == pytest.approx(
            sim.snapshot.efficiency_pct + expected
        )

    def test_flex_mix_is_display_only(self, sim):
        sim.update_config(DEFAULT_PLANT, {"flex_mix": {"h2": 20}})
        assert sim.snapshot.fuel["title"] == "NG(80%)/H2(20%)"
        consumption = sim.fuel.consumption
        sim.update_config(DEFAULT_PLANT, {"flex_mix": {"h2": 60}})
        assert sim.snapshot.fuel["title"] == "NG(40%)/H2(60%)"
        assert sim.fuel.consumption == consumption

    def test_enabled_resources_follow_fuel_mode(self, sim):
        sim.run(2.5)
        assert sim.snapshot.resources["enabled"] == ["gas", "h2", "water"]
        sim.update_config(DEFAULT_PLANT, {"fuel_mode": "ETHANOL", "water_enabled": False})
        sim.run(2.0)
        assert sim.snapshot.resources["enabled"] == ["biodiesel", "ethanol"]

    def test_turbine_error_raises_critical_alert(self, sim):
        sim.update_config(DEFAULT_PLANT, {"turbine_status": {2: TurbineStatus.ERROR}})
        alerts = sim.snapshot.alerts
        assert alerts[0]["level"] == "critical"
        assert alerts[0]["message"] == "Turbine #2 reported an error"
        turbine = next(t for t in sim.snapshot.turbines if t["id"] == 2)
        assert turbine["rpm"] == 0.0
        assert turbine["faulted"]

    def test_config_for_dormant_plant_not_applied(self, sim):
        sim.update_config("UTE Norte Fluminense", {"turbine_status": {1: "error"}})
        assert sim.fleet.get(1).status == TurbineStatus.ACTIVE

    def test_select_plant(self, sim):
        snap = sim.select_plant("UTE Juiz de Fora")
        assert snap.plant == "UTE Juiz de Fora"
        assert 0.85 * 87.0 <= snap.power_output_mw <= 0.95 * 87.0
        assert snap.fuel["fuel_mode"] == "NATURAL_GAS"

    def test_select_unknown_plant(self, sim):
        with pytest.raises(KeyError):
            sim.select_plant("Atlantis")


class TestOperatorActions:
    def test_initial_maintenance_alert(self, sim):
        messages = [a["message"] for a in sim.snapshot.alerts]
        assert "Turbine #3 requires maintenance" in messages

    def test_maintenance_resets_score(self, sim):
        sim.set_maintenance_score(1, 80.0)
        assert sim.fleet.get(1).needs_maintenance
        sim.perform_maintenance(1)
        turbine = next(t for t in sim.snapshot.turbines if t["id"] == 1)
        assert turbine["maintenance_score"] <= 10.0
        assert not turbine["needs_maintenance"]

    def test_unknown_turbine(self, sim):
        with pytest.raises(KeyError):
            sim.perform_maintenance(42)

    def test_rebalance_cooling(self, sim):
        split = sim.rebalance_cooling("tiac", 50)
        assert split.data_center == pytest.approx(0.25)
        assert sim.snapshot.cascade["split"]["tiac"] == pytest.approx(0.5)

    def test_dismiss_and_clear_alerts(self, sim):
        alert_id = sim.snapshot.alerts[0]["id"]
        assert sim.dismiss_alert(alert_id)
        assert not sim.dismiss_alert(alert_id)
        sim.perform_maintenance(4)
        sim.clear_alerts()
        assert sim.snapshot.alerts == ()


class TestEconomicsAndDataCenter:
    def test_initial_financials_follow_power(self, sim):
        fin = sim.snapshot.financials
        monthly_mwh = sim.power.power_output * 24 * 30
        assert fin["energy_revenue_brl"] == pytest.approx(monthly_mwh * 550.0, rel=1e-6)
        assert fin["cloud_revenue_brl"] == sim.cascade.state.potential_active_racks * 6000.0
        assert fin["co2_reduced_tons"] == pytest.approx(
            co2_reduced_tons(monthly_mwh, FuelMode.FLEX_NG_H2, h2_pct=20.0), abs=0.01
        )
        assert len(fin["monthly_revenue"]) == 12

    def test_natural_gas_earns_no_carbon_credits(self, sim):
        sim.update_config(DEFAULT_PLANT, {"fuel_mode": "NATURAL_GAS"})
        sim.run(3.5)
        fin = sim.snapshot.financials
        assert fin["co2_reduced_tons"] == 0.0
        assert fin["carbon_revenue_brl"] == 0.0
        assert fin["energy_revenue_brl"] > 0.0

    def test_data_center_loads_in_snapshot(self, sim):
        sim.run(10.0)
        dc = sim.snapshot.data_center
        assert 450.0 <= dc["it_load_kw"] <= 500.0
        assert dc["pue"] == pytest.approx(dc["total_load_kw"] / dc["it_load_kw"], abs=1e-3)
        assert 20.0 <= dc["cooling_load_kw"] <= 35.0
        assert len(dc["history"]) == 3

    def test_data_center_walks_stop_with_plant(self, sim):
        sim.run(4.0)
        sim.set_plant_status(PlantStatus.OFFLINE)
        dc = sim.snapshot.data_center
        sim.run(30.0)
        assert sim.snapshot.data_center == dc
