"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Project
    PROJECT_NAME: str = "Thermal Plant Simulation Engine"
    VERSION: str = "0.1.0"
    API_V1_STR: str = "/api/v1"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    RELOAD: bool = True

    # Simulation
    REALTIME_FACTOR: float = 1.0
    MAX_REALTIME_FACTOR: float = 100.0
    RANDOM_SEED: int | None = None
    AMBIENT_PERIOD_S: float = 2.0
    PLANT_PERIOD_S: float = 2.0
    COOLING_PERIOD_S: float = 2.5
    EMISSIONS_PERIOD_S: float = 3.0
    FINANCIALS_PERIOD_S: float = 3.0
    DC_POWER_PERIOD_S: float = 2.5
    DC_COOLING_PERIOD_S: float = 3.0
    HISTORY_WINDOW: int = 60
    MAX_ALERTS: int = 5
    DEFAULT_PLANT: str = "MAUAX Bio PowerPlant (standard)"
    DEFAULT_LANGUAGE: str = "PT"

    # WebSocket
    WS_PUSH_INTERVAL: float = 1.0

    # Database (empty string keeps settings in memory only)
    DATABASE_URL: str = "sqlite:///./plant_sim.db"

    # CORS
    BACKEND_CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://localhost:8000",
    ]

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
