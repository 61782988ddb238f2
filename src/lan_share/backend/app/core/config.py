from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file='.env', case_sensitive=True)
    FILE_STORAGE_DIR: str = 'uploads'
    HOST: str = '0.0.0.0'
    PORT: int = 3000
    ENVIRONMENT: str = 'development'
    LOG_LEVEL: str = 'INFO'

    MAX_UPLOAD_BYTES: int = 4 * 1024 * 1024 * 1024
    UPLOAD_CHUNK_BYTES: int = 1024 * 1024

    FILE_LIFETIME_SECONDS: float = 60 * 60
    SWEEP_INTERVAL_SECONDS: float = 10 * 60
    SWEEP_PUBLISHES_EVENTS: bool = True

    # per-connection outbound buffer; events beyond it are dropped for that client
    EVENT_QUEUE_SIZE: int = 100


settings = Settings()
