from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="WALLETFETCH_",
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    log_level: str = Field(default="WARNING", description="Logging level")

    # RPC
    request_timeout_seconds: float = Field(default=10.0, gt=0, description="Per-request RPC timeout")
    max_concurrent_requests: int = Field(default=16, ge=1, description="Max in-flight RPC requests")

    # Name resolution
    ens_rpc_url: str = Field(
        default="",
        description="Mainnet RPC endpoint used for ENS lookups (defaults to the chain 1 network)",
    )

    # Config file
    config_path: Optional[Path] = Field(
        default=None,
        description="Override for ~/.config/walletfetch/config.toml",
    )

    @property
    def has_ens_rpc_url(self) -> bool:
        return bool(self.ens_rpc_url)


# Global settings instance
settings = Settings()
