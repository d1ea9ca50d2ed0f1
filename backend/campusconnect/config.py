from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    data_path: Path = Path.home() / "CampusConnect"
    session_ttl_seconds: int = 86400  # 24 hours
    # Emails granted admin access. Override with CAMPUS_ADMIN_EMAILS='["a@uni.edu"]'.
    admin_emails: set[str] = {"admin@campusconnect.com"}
    default_rejection_reason: str = "No reason provided"
    # When enabled only PENDING jobs can be approved or rejected.
    strict_job_transitions: bool = False
    min_password_length: int = 8

    # Billing (Stripe REST API)
    stripe_secret_key: str = ""
    stripe_api_base: str = "https://api.stripe.com"
    app_url: str = "http://localhost:3000"

    # Transactional email (Resend)
    resend_api_key: str = ""
    sender_email: str = "onboarding@campusconnect.com"
    support_email: str = "support@campusconnect.com"

    api_prefix: str = "/api"
    cors_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000

    @field_validator("admin_emails")
    @classmethod
    def _normalize_admin_emails(cls, value: set[str]) -> set[str]:
        return {email.strip().lower() for email in value if email.strip()}

    @property
    def db_path(self) -> Path:
        return self.data_path / "campus.sqlite"

    @property
    def email_enabled(self) -> bool:
        return bool(self.resend_api_key)

    model_config = {"env_prefix": "CAMPUS_"}


settings = Settings()
