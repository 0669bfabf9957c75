"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from datetime import date
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings

from achforge.core.exceptions import CalendarError
from achforge.models.payment import OriginatorProfile
from achforge.settlement.business_days import check_weekend


class OriginatorConfig(BaseSettings):
    """ACH originator settings (the company and banks named in every file)."""

    model_config = {"env_prefix": "ACHFORGE_ORIGINATOR_"}

    immediate_destination: str = ""  # receiving bank routing number
    immediate_origin: str = ""  # originating bank routing number
    company_name: str = ""
    company_id: str = ""
    discretionary_data: str = ""
    originating_dfi: str = ""
    destination_name: str | None = None
    origin_name: str | None = None

    def to_profile(self) -> OriginatorProfile:
        """Validate the settings into an immutable OriginatorProfile."""
        return OriginatorProfile(
            immediate_destination=self.immediate_destination,
            immediate_origin=self.immediate_origin,
            company_name=self.company_name,
            company_id=self.company_id,
            discretionary_data=self.discretionary_data,
            originating_dfi=self.originating_dfi,
            destination_name=self.destination_name,
            origin_name=self.origin_name,
        )


class CalendarConfig(BaseSettings):
    """Business-day calendar overrides."""

    model_config = {"env_prefix": "ACHFORGE_CALENDAR_"}

    weekend_days: list[int] = [5, 6]  # date.weekday(): Saturday, Sunday
    extra_holidays: list[date] = []
    excluded_holidays: list[date] = []

    @field_validator("weekend_days")
    @classmethod
    def check_weekend_days(cls, value: list[int]) -> list[int]:
        try:
            check_weekend(value)
        except CalendarError as exc:
            raise ValueError(str(exc)) from exc
        return value


class SequenceConfig(BaseSettings):
    """File ID modifier counter backend."""

    model_config = {"env_prefix": "ACHFORGE_SEQUENCE_"}

    backend: Literal["memory", "redis"] = "memory"
    key: str = "achforge:file-sequence"
    initial: int = 1


class RedisConfig(BaseSettings):
    """Redis connection used by the shared sequence counter."""

    model_config = {"env_prefix": "ACHFORGE_REDIS_"}

    host: str = "localhost"
    port: int = 6379
    db: int = 0


class S3Config(BaseSettings):
    """S3 storage for generated NACHA files."""

    model_config = {"env_prefix": "ACHFORGE_S3_"}

    enabled: bool = False
    bucket: str = "achforge-nacha-files"
    region: str = "us-east-1"
    endpoint_url: str | None = None  # LocalStack override
    prefix: str = "nacha/"


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "ACHFORGE_"}

    environment: Literal["dev", "uat", "prod"] = "dev"
    log_level: str = "INFO"

    originator: OriginatorConfig = OriginatorConfig()
    calendar: CalendarConfig = CalendarConfig()
    sequence: SequenceConfig = SequenceConfig()
    redis: RedisConfig = RedisConfig()
    s3: S3Config = S3Config()
