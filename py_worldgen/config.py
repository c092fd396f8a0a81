"""Configuration management."""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(default="console", description="Log output format: json or console")

    # Generation defaults
    default_world_width: int = Field(default=1600, description="World width when none is given")
    default_world_height: int = Field(default=450, description="World height when none is given")
    default_seed: int = Field(default=69, description="Seed when none is given")
    max_world_width: int = Field(default=8192, description="Maximum world width")
    max_world_height: int = Field(default=4096, description="Maximum world height")

    # Output
    output_dir: str = Field(default="output", description="Directory rendered maps are written to")

    class Config:
        env_file = ".env"
        env_prefix = "WORLDGEN_"


settings = Settings()
