import logging

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_title: str = "Payment Instruction Processor"
    log_level: str = "INFO"
    log_format: str = "standard"
    instruction_strict_anchor: bool = False

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in logging.getLevelNamesMapping():
            raise ValueError(f"LOG_LEVEL must be a logging level name, got {value!r}")
        return normalized

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in {"standard", "json"}:
            raise ValueError("LOG_FORMAT must be 'standard' or 'json'")
        return normalized

    @field_validator("app_title")
    @classmethod
    def validate_app_title(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("APP_TITLE must be non-empty")
        return value


settings = Settings()
