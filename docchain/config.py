"""
Configuration management for DocChain

Loads settings from:
1. config/config.yaml
2. Environment variables (DOCCHAIN_*, .env)
3. Default values
"""

from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Load environment variables
load_dotenv()

_DEFAULT_YAML = Path(__file__).parent.parent / "config" / "config.yaml"


class Config(BaseSettings):
    """DocChain configuration settings"""

    model_config = SettingsConfigDict(
        env_prefix="DOCCHAIN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- API Settings ---
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_url: str = Field(default="http://localhost:8000", description="Base URL used by the CLI client")
    public_base_url: str = Field(
        default="http://localhost:5000",
        description="Base URL embedded in certificate verification links",
    )
    cors_origins: str = "http://localhost:5000"  # Comma-separated string

    # --- Limits ---
    rate_limit_per_minute: int = Field(default=120, ge=0, description="0 disables rate limiting")
    max_upload_bytes: int = Field(default=25 * 1024 * 1024, gt=0)

    # --- Data ---
    seed_sample_data: bool = True

    # --- Logging ---
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse comma-separated CORS origins."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @classmethod
    def from_yaml(cls, yaml_path: str | Path = _DEFAULT_YAML) -> "Config":
        """Load configuration from YAML file. Keys in the file take precedence over the environment."""
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            return cls()

        with open(yaml_path) as f:
            config_data = yaml.safe_load(f) or {}

        return cls(**config_data)


# Global configuration instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create global configuration instance"""
    global _config
    if _config is None:
        _config = Config.from_yaml()
    return _config


def reload_config(yaml_path: Optional[str | Path] = None) -> Config:
    """Reload configuration from file"""
    global _config
    _config = Config.from_yaml(yaml_path) if yaml_path else Config.from_yaml()
    return _config
