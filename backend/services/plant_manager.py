"""Plant simulation lifecycle manager.

Owns the single live ``PlantSimulation`` and advances its SimPy clock from
an asyncio background task at the configured real-time factor.
"""

import asyncio
import logging

from backend.core.config import settings
from database.crud import SqlAlchemyBackend
from plant_sim.config_store import ConfigurationStore, MemoryBackend, PersistenceError
from plant_sim.core.orchestrator import PlantSimulation

logger = logging.getLogger(__name__)

# Simulated seconds advanced per loop iteration
PHYSICS_DT = 1.0


class PlantManager:
    """Singleton owner of the live plant simulation."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._simulation: PlantSimulation | None = None
            cls._instance._task: asyncio.Task | None = None
        return cls._instance

    @property
    def simulation(self) -> PlantSimulation:
        if self._simulation is None:
            self._simulation = self._build_simulation()
        return self._simulation

    def attach(self, simulation: PlantSimulation):
        """Replace the live simulation (the run loop picks it up next tick)."""
        self._simulation = simulation

    @staticmethod
    def _build_backend():
        if not settings.DATABASE_URL:
            return MemoryBackend()
        try:
            return SqlAlchemyBackend(settings.DATABASE_URL)
        except PersistenceError as e:
            logger.warning("Settings database unavailable, using memory: %s", e)
            return MemoryBackend()

    def _build_simulation(self) -> PlantSimulation:
        store = ConfigurationStore(
            self._build_backend(),
            default_plant=settings.DEFAULT_PLANT,
            default_language=settings.DEFAULT_LANGUAGE,
        )
        return PlantSimulation(
            store,
            seed=settings.RANDOM_SEED,
            periods={
                "ambient": settings.AMBIENT_PERIOD_S,
                "plant": settings.PLANT_PERIOD_S,
                "cooling": settings.COOLING_PERIOD_S,
                "emissions": settings.EMISSIONS_PERIOD_S,
                "financials": settings.FINANCIALS_PERIOD_S,
                "dc_power": settings.DC_POWER_PERIOD_S,
                "dc_cooling": settings.DC_COOLING_PERIOD_S,
            },
            max_alerts=settings.MAX_ALERTS,
            history_window=settings.HISTORY_WINDOW,
        )

    @property
    def realtime_factor(self) -> float:
        return min(max(settings.REALTIME_FACTOR, 0.1), settings.MAX_REALTIME_FACTOR)

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run_loop(self):
        """Main clock loop - runs as an asyncio background task."""
        logger.info("Plant clock started (rt_factor=%.1f)", self.realtime_factor)
        try:
            while True:
                self.simulation.run(PHYSICS_DT)
                await asyncio.sleep(PHYSICS_DT / self.realtime_factor)
        except asyncio.CancelledError:
            logger.info("Plant clock cancelled at t=%.1f", self.simulation.env.now)
        except Exception as e:
            logger.exception("Plant clock failed: %s", e)

    async def start(self):
        if self.running:
            return
        self.simulation.start()
        self._task = asyncio.create_task(self.run_loop())

    async def stop(self):
        """Cancel the clock task and retire the simulation processes."""
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        if self._simulation is not None:
            self._simulation.stop()
