from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


# ----------------------------
# General / App settings
# ----------------------------
class AppSettings(BaseSettings):
    app_name: str = "LiteSpring"
    debug: bool = False

    # Logger
    log_level: str = "INFO"
    log_file: Optional[str] = None

    class Config:
        env_prefix = "LITESPRING_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


# ----------------------------
# Container settings
# ----------------------------
class ContainerSettings(BaseSettings):
    warn_on_wiring_gaps: bool = True
    warn_on_duplicate_routes: bool = True

    class Config:
        env_prefix = "LITESPRING_CONTAINER_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


# ----------------------------
# Top-level settings
# ----------------------------
class Settings(BaseSettings):
    # Built per Settings() so environment and .env are read at construction time.
    app: AppSettings = Field(default_factory=AppSettings)
    container: ContainerSettings = Field(default_factory=ContainerSettings)

    class Config:
        env_prefix = "LITESPRING_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"
