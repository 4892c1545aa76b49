from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "PharmaBrands"
    debug: bool = False
    log_level: str = "INFO"

    database_url: str = "sqlite:///./pharmabrands.db"

    celery_broker_url: str = "redis://localhost:6379/0"
    celery_result_backend: str = "redis://localhost:6379/1"

    brand_connections_path: str = "data/brandConnections.json"
    pharmacy_items_path: str = "data/pharmacyItems.json"
    pharmacy_items_must_exist: bool = False

    default_country_code: str = "ee"
    default_source: str = "MDE"

    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_reload: bool = False


settings = Settings()
