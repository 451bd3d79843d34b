"""
Application configuration module.
"""

import json
from pathlib import Path
from typing import List, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigError(Exception):
    """Raised when the profile configuration cannot be loaded."""

    def __init__(self, message: str, path: Union[str, Path, None] = None):
        self.message = message
        self.path = str(path) if path is not None else None
        super().__init__(self.message)


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application Configuration
    APP_NAME: str = Field(default="Profile README Generator")
    APP_VERSION: str = Field(default="1.0.0")

    # GitHub API Configuration
    GITHUB_TOKEN: str = Field(default="")
    GITHUB_API_URL: str = Field(default="https://api.github.com")
    USER_AGENT: str = Field(
        default=(
            "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/94.0.4606.61 Safari/537.36"
        )
    )
    TIMEOUT_SECONDS: float = Field(default=4.0)
    MAX_RETRIES: int = Field(default=5)
    RETRY_DELAY_SECONDS: float = Field(default=4.0)

    # Logging Configuration
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: str = Field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    # Input / output paths
    PROFILE_CONFIG_PATH: str = Field(default="profile.json")
    TEMPLATE_PATH: str = Field(default="readme.template.md")
    README_PATH: str = Field(default="readme.md")
    HTML_PATH: str = Field(default="index.html")

    # Scheduling
    REFRESH_INTERVAL_HOURS: int = Field(default=24)


class GitHubAccount(BaseModel):
    name: str


class ToysConfig(BaseModel):
    """Side projects shown in the toys table."""

    repos: List[str] = Field(default_factory=list)
    limit: int = Field(default=5, ge=0)
    random: bool = False


class OpenSourceConfig(BaseModel):
    active: List[str] = Field(default_factory=list)
    toys: ToysConfig = Field(default_factory=ToysConfig)


class ProfileConfig(BaseModel):
    """Profile content loaded from profile.json."""

    model_config = ConfigDict(populate_by_name=True)

    github: GitHubAccount
    motto: str = ""
    time_zone: str = Field(default="UTC", alias="timeZone")
    opensource: OpenSourceConfig = Field(default_factory=OpenSourceConfig)

    @field_validator("time_zone")
    @classmethod
    def check_time_zone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"unknown time zone: {value}") from None
        return value

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.time_zone)


def load_profile_config(path: Union[str, Path]) -> ProfileConfig:
    """Load and validate the profile configuration from a JSON file."""
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigError(f"Profile config not found: {config_path}", path=config_path)

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {config_path}: {e}", path=config_path)

    try:
        return ProfileConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid profile config in {config_path}: {e}", path=config_path)


# Create settings instance
settings = Settings()
