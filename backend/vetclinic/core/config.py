"""Module: config."""

from datetime import date, time

from pydantic_settings import BaseSettings

from vetclinic.scheduling.rules import ClinicRules


# Centralized runtime configuration loaded from environment variables.
class Settings(BaseSettings):
    # Primary SQLAlchemy connection string for the backend database.
    database_url: str
    # Root log level applied by configure_logging() at startup.
    log_level: str = "INFO"

    # Clinic operating window; the last bookable start is one hour before closing.
    clinic_opening_time: time = time(8, 0)
    clinic_closing_time: time = time(16, 0)
    # No visit may be booked after this date.
    last_operating_date: date = date(2026, 3, 12)
    # Admission ceiling: visits per calendar date across the whole clinic.
    daily_visit_capacity: int = 8

    # Frontend origins allowed through CORS in local development.
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:5174",
        "http://127.0.0.1:5174",
    ]

    # Configure pydantic-settings to also load values from local .env file.
    class Config:
        env_file = ".env"

    def clinic_rules(self) -> ClinicRules:
        return ClinicRules(
            opening_time=self.clinic_opening_time,
            closing_time=self.clinic_closing_time,
            last_operating_date=self.last_operating_date,
            daily_capacity=self.daily_visit_capacity,
        )


# Global settings instance imported by app modules at runtime.
settings = Settings()
