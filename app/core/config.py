"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables or .env file."""
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Application
    app_name: str = "Onboarding Portal"
    debug: bool = False
    secret_key: str = "change-me-in-production"
    log_dir: str = "~/.logs/onboarding"

    # Server
    host: str = "0.0.0.0"  # Bind to all interfaces for external access
    port: int = 8000
    allowed_origins: str = "*"  # Comma-separated origins, or "*" for all
    public_base_url: str = "http://localhost:8000"

    # Database
    database_url: str = "sqlite:///./onboarding.db"

    # Sessions
    access_token_expire_minutes: int = 60 * 24 * 7
    session_cookie_name: str = "onboarding_session"

    # Account tokens
    password_reset_expire_minutes: int = 60
    email_verification_expire_hours: int = 24

    # Outgoing mail; an empty mail_server means emails are only logged
    mail_server: str = ""
    mail_port: int = 587
    mail_use_tls: bool = True
    mail_username: str = ""
    mail_password: str = ""
    mail_default_sender: str = "onboarding@example.com"

    # Contact form inboxes, picked by subject and department keywords
    contact_email: str = "info@example.com"
    contact_hr_email: str = "hr@example.com"
    contact_it_email: str = "it@example.com"
    contact_training_email: str = "training@example.com"


settings = Settings()
