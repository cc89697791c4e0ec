# backend/vaccination/config.py

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parents[2]  # repository root


@dataclass(frozen=True)
class BookingProperties:
    """
    Values the booking service needs at runtime.

    Attributes:
        schedule_report_template: Template identifier passed to the report renderer
        email_subject: Subject line of the confirmation email
        email_content: Body of the confirmation email, "{schedule_code}" is substituted
    """
    schedule_report_template: str
    email_subject: str
    email_content: str

    def __post_init__(self):
        marker = "\x00"
        try:
            rendered = self.email_content.format(schedule_code=marker)
        except (KeyError, IndexError, ValueError) as e:
            raise ValueError(
                f"email_content may only use the {{schedule_code}} placeholder: {e!r}"
            ) from e
        if marker not in rendered:
            raise ValueError("email_content must contain a {schedule_code} placeholder")

    def format_email_body(self, schedule_code: str) -> str:
        return self.email_content.format(schedule_code=schedule_code)


class Settings(BaseSettings):
    database_url: str = "sqlite:///./vaccination.db"
    log_level: str = "INFO"

    schedule_report_template: str = "schedule_report.txt"
    email_subject: str = "Vaccination appointment"
    email_content: str = (
        "Your vaccination appointment has been booked. "
        "Schedule code: {schedule_code}"
    )

    smtp_host: str = "localhost"
    smtp_port: int = 25
    smtp_username: str | None = None
    smtp_password: str | None = None
    smtp_use_tls: bool = False
    smtp_timeout: float = 10.0
    mail_from: str = "no-reply@vaccination.local"

    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        extra="ignore",
    )

    @property
    def resolved_database_url(self) -> str:
        url = self.database_url
        if url.startswith("sqlite:///./"):
            # Relative sqlite paths are anchored at the repository root
            relative_path = url.replace("sqlite:///./", "")
            absolute_path = BASE_DIR / relative_path
            return f"sqlite:///{absolute_path}"
        return url

    def booking_properties(self) -> BookingProperties:
        return BookingProperties(
            schedule_report_template=self.schedule_report_template,
            email_subject=self.email_subject,
            email_content=self.email_content,
        )


@lru_cache
def get_settings() -> Settings:
    """Settings singleton, read once from the environment and .env."""
    return Settings()
