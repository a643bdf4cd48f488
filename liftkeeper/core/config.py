from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # API Settings
    PROJECT_NAME: str = "LiftKeeper API"
    API_V1_STR: str = "/api/v1"
    PROJECT_VERSION: str = "0.1.0"
    DESCRIPTION: str = "Elevator maintenance bookkeeping: buildings, parts, debts and payments"

    # MongoDB
    MONGODB_URI: str = "mongodb://localhost:27017"
    MONGODB_DB: str = "liftkeeper"

    # Snapshot persistence
    PERSISTENCE_ENABLED: bool = True
    SNAPSHOT_COLLECTION: str = "snapshots"
    SNAPSHOT_KEY: str = "elevator-maintenance-app-state"

    # Store limits
    UPDATES_LIMIT: int = 50
    NOTIFICATIONS_LIMIT: int = 10

    # Receipts
    CURRENCY_SYMBOL: str = "₺"
    UNKNOWN_USER_NAME: str = "Unknown"

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env"
    )

settings = Settings()
