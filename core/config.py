"""
Configuration management using Pydantic Settings
Handles environment variables and validation
"""
from functools import lru_cache
from pathlib import Path

from pydantic import ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    # Environment
    environment: str = Field(default="development")
    debug: bool = Field(default=False)
    testing: bool = Field(default=False)

    # Application
    app_name: str = "RSA AI Framework"
    app_version: str = "0.1.0"
    base_url: str = Field(default="http://localhost:8000")

    # Admin configuration store (scoring weights, T-shirt sizing, TOM)
    config_dir: Path = Field(default=Path("config"))
    scoring_weights_file: str = Field(default="scoring_weights.yaml")
    tshirt_sizing_file: str = Field(default="tshirt_sizing.yaml")
    tom_file: str = Field(default="tom.yaml")

    # Scoring
    default_quadrant_threshold: float = Field(default=3.0, ge=1.0, le=5.0)

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json")  # json or text

    # Monitoring
    prometheus_enabled: bool = Field(default=True)

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        allowed = ["development", "test", "staging", "production"]
        if v not in allowed:
            raise ValueError(f"Environment must be one of: {allowed}")
        return v

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v):
        if v not in ("json", "text"):
            raise ValueError("Log format must be 'json' or 'text'")
        return v

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def scoring_weights_path(self) -> Path:
        return self.config_dir / self.scoring_weights_file

    @property
    def tshirt_sizing_path(self) -> Path:
        return self.config_dir / self.tshirt_sizing_file

    @property
    def tom_path(self) -> Path:
        return self.config_dir / self.tom_file

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Global settings instance
settings = get_settings()
