from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..services.address import is_valid_evm_address


def _check_address(value: str) -> str:
    if not is_valid_evm_address(value):
        raise ValueError(f"invalid address {value!r} (expected 0x followed by 40 hex characters)")
    return value.strip().lower()


class TokenConfig(BaseModel):
    address: str = Field(description="ERC-20 contract address")
    decimals: int = Field(ge=0, le=255, description="Token decimal places")

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("address")
    @classmethod
    def _normalize_address(cls, value: str) -> str:
        return _check_address(value)


class NetworkConfig(BaseModel):
    chain_id: int = Field(gt=0, description="EIP-155 chain id")
    name: str = Field(min_length=1, description="Display name")
    rpc_url: str = Field(description="JSON-RPC endpoint")
    native_symbol: str = Field(default="ETH", min_length=1)
    native_decimals: int = Field(default=18, ge=0, le=255)
    default_address: Optional[str] = Field(default=None, description="Per-network default wallet")
    tokens: Dict[str, TokenConfig] = Field(default_factory=dict, description="Symbol -> token")

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("rpc_url")
    @classmethod
    def _check_rpc_url(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"rpc_url must be an http(s) URL, got {value!r}")
        return value

    @field_validator("default_address")
    @classmethod
    def _normalize_default_address(cls, value: Optional[str]) -> Optional[str]:
        return _check_address(value) if value else None


class NetworkRegistry(BaseModel):
    """Configured networks keyed by chain id, in configuration order."""

    networks: Dict[int, NetworkConfig] = Field(default_factory=dict)
    default_address: Optional[str] = Field(
        default=None,
        description="Identifier used when none is given on the command line",
    )

    model_config = ConfigDict(frozen=True, extra="forbid")

    def all(self) -> List[NetworkConfig]:
        return list(self.networks.values())

    def get(self, chain_id: int) -> Optional[NetworkConfig]:
        return self.networks.get(chain_id)
