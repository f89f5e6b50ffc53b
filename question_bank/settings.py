from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

from question_bank.query.translator import RewriteMode


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Question Bank API"
    env: str = "development"  # development|production
    cors_origins: str = "http://localhost:3000"
    log_level: str = "INFO"
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    storage_backend: str = "inmemory"  # inmemory|mongo
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "question_bank"

    # JWT Authentication
    jwt_secret_key: str = "question-bank-secret-change-in-production"
    jwt_algorithm: str = "HS256"
    jwt_expire_days: int = 30
    jwt_cookie_expire_days: int = 30
    bcrypt_rounds: int = 12

    # Question listing
    operator_rewrite: RewriteMode = RewriteMode.TEXT
    default_page_limit: int = 25

    # Outgoing mail (forgot password)
    mail_backend: str = "log"  # log|smtp
    smtp_host: str = "localhost"
    smtp_port: int = 587
    smtp_username: str | None = None
    smtp_password: str | None = None
    smtp_from: str = "noreply@questionbank.com"
    smtp_use_tls: bool = True

    # Observability (OpenTelemetry)
    observability_enabled: bool = False
    otel_service_name: str = "question-bank"
    otel_exporter_otlp_endpoint: str | None = None
    otel_exporter_console: bool = False
    otel_sample_rate: float = 0.1

    @property
    def is_production(self) -> bool:
        return self.env.lower() == "production"


settings = Settings()
