"""Application configuration using pydantic-settings."""

import json
from functools import lru_cache
from pathlib import Path
from typing import Annotated, Literal

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

# Load .env file and override existing env vars
load_dotenv(override=True)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_env: Literal["development", "staging", "production"] = "development"
    app_debug: bool = True

    # API Server
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Target network (Creditcoin testnet)
    chain_id: int = 102031
    network_name: str = "Creditcoin Testnet"
    rpc_url: str = "https://rpc.cc3-testnet.creditcoin.network"
    explorer_url: str = "https://explorer.cc3-testnet.creditcoin.network"
    rpc_timeout: float = 30.0
    confirmation_timeout: float = 120.0

    # Custodial signing key (optional, requests may supply their own)
    private_key: str = Field(default="", repr=False)

    # Gas
    gas_limit: int = 3_000_000
    gas_price_gwei: int = 20

    # Compilers, tried in order
    compiler_backends: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["solc", "hardhat"]
    )
    solc_version: str = "0.8.24"
    solc_auto_install: bool = True
    optimizer_runs: int = 200

    # Hardhat
    hardhat_project_dir: Path = Path("hardhat")
    hardhat_command: str = "npx hardhat compile"
    hardhat_timeout: float = 30.0
    # Parent of the per-request build workspaces; system temp dir when unset
    hardhat_workspace_dir: Path | None = None

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["console", "json"] = "console"
    log_directory: str | None = "logs"
    log_file_name: str = "contract-studio.log"

    @field_validator("compiler_backends", mode="before")
    @classmethod
    def split_backends(cls, value: object) -> object:
        """Accept `solc,hardhat` as well as a JSON list."""
        if not isinstance(value, str):
            return value
        value = value.strip()
        if value.startswith("["):
            return json.loads(value)
        return [name.strip() for name in value.split(",") if name.strip()]

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
