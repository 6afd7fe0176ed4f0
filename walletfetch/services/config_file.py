"""
Config file loading.

The file lives at ``~/.config/walletfetch/config.toml``::

    address = "vitalik.eth"

    [networks.1]
    name = "Ethereum"
    rpc_url = "https://eth.llamarpc.com"

    [networks.1.tokens.USDC]
    address = "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"
    decimals = 6
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from pydantic import ValidationError

from ..config import settings
from ..core.errors import ConfigurationError
from ..types.network import NetworkConfig, NetworkRegistry

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = """\
# walletfetch configuration
# Default wallet (address or ENS name) used when none is passed on the command line.
address = ""

[networks.1]
name = "Ethereum"
rpc_url = "https://eth.llamarpc.com"
native_symbol = "ETH"

[networks.1.tokens.USDC]
address = "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"
decimals = 6

[networks.8453]
name = "Base"
rpc_url = "https://mainnet.base.org"
native_symbol = "ETH"

[networks.8453.tokens.USDC]
address = "0x833589fcd6edb6e08f4c7c32d4f71b54bda02913"
decimals = 6
"""


def default_config_path() -> Path:
    if settings.config_path is not None:
        return settings.config_path
    return Path.home() / ".config" / "walletfetch" / "config.toml"


def _describe(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in item['loc']) or 'value'}: {item['msg']}"
        for item in error.errors()
    )


def _parse_network(key: str, table: Any) -> NetworkConfig:
    try:
        chain_id = int(key)
    except ValueError:
        raise ConfigurationError(
            f"networks.{key}: chain id must be an integer",
            details={"chain_id": key},
        ) from None

    if not isinstance(table, Mapping):
        raise ConfigurationError(f"networks.{key}: expected a table")

    fields: Dict[str, Any] = {
        "chain_id": chain_id,
        "name": table.get("name"),
        "rpc_url": table.get("rpc_url"),
        "tokens": table.get("tokens", {}),
    }
    for option in ("native_symbol", "native_decimals"):
        if option in table:
            fields[option] = table[option]
    if table.get("address"):
        fields["default_address"] = table["address"]

    try:
        return NetworkConfig.model_validate(fields)
    except ValidationError as e:
        raise ConfigurationError(
            f"networks.{key}: {_describe(e)}",
            details={"chain_id": chain_id},
        ) from e


def parse_registry(data: Mapping[str, Any]) -> NetworkRegistry:
    """Build a NetworkRegistry from a parsed config document."""

    networks_table = data.get("networks", {})
    if not isinstance(networks_table, Mapping):
        raise ConfigurationError("networks: expected a table keyed by chain id")

    networks: Dict[int, NetworkConfig] = {}
    for key, table in networks_table.items():
        network = _parse_network(str(key), table)
        if network.chain_id in networks:
            raise ConfigurationError(f"networks.{key}: duplicate chain id {network.chain_id}")
        networks[network.chain_id] = network

    address = data.get("address") or None
    if address is not None and not isinstance(address, str):
        raise ConfigurationError("address: expected a string")

    if not networks:
        logger.warning("no networks configured")

    return NetworkRegistry(networks=networks, default_address=address)


def load_registry(path: Optional[Path] = None) -> NetworkRegistry:
    path = path or default_config_path()
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except FileNotFoundError:
        raise ConfigurationError(
            f"Config file not found at {path}",
            details={"path": str(path)},
        ) from None
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in {path}: {e}", details={"path": str(path)}) from e

    logger.debug("loaded config from %s", path)
    return parse_registry(data)


def create_default_config(path: Optional[Path] = None) -> Path:
    """Write the starter config unless a file already exists."""

    path = path or default_config_path()
    if path.exists():
        return path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(DEFAULT_CONFIG, encoding="utf-8")
    logger.info("created default config at %s", path)
    return path


__all__ = [
    "DEFAULT_CONFIG",
    "default_config_path",
    "parse_registry",
    "load_registry",
    "create_default_config",
]
