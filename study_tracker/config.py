from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Persistence
    storage_key: str = "courses"
    store_backend: str = "sqlite"  # sqlite | json | memory
    db_path: str = "study_tracker.db"
    json_path: str = "study_tracker.json"
    serialize_saves: bool = True

    # Logging
    log_level: str = "INFO"

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    model_config = {"env_file": ".env", "env_prefix": "STUDY_TRACKER_", "extra": "ignore"}


settings = Settings()
