"""
ENS name resolution.

Turns an identifier into a canonical address. Raw addresses are returned
without touching the network; dotted names go through the ENS registry and
the resolver it points to.
"""

from __future__ import annotations

import logging
from typing import Optional

from eth_utils import keccak

from ..config import settings
from ..core.abi import ZERO_ADDRESS, decode_address, encode_bytes32, encode_call
from ..core.errors import ResolutionFailed, ResolutionFailure, RpcError
from ..providers.base import ChainProvider
from ..types.network import NetworkRegistry
from .address import is_valid_evm_address, looks_like_address, looks_like_name

logger = logging.getLogger(__name__)

# ENS registry, same address on mainnet and testnets
ENS_REGISTRY = "0x00000000000c2e074ec69a0dfb2997ba6c7d2e1e"
ENS_CHAIN_ID = 1


def namehash(name: str) -> bytes:
    """EIP-137 namehash. The empty name hashes to 32 zero bytes."""

    node = b"\x00" * 32
    if name:
        for label in reversed(name.lower().split(".")):
            node = keccak(node + keccak(text=label))
    return node


class NameResolver:
    """Resolves identifiers to addresses via ENS.

    Makes a single attempt; callers decide whether to retry the whole command.
    """

    def __init__(
        self,
        rpc: ChainProvider,
        endpoint: Optional[str] = None,
        registry_address: str = ENS_REGISTRY,
    ) -> None:
        self.rpc = rpc
        self.endpoint = endpoint
        self.registry_address = registry_address

    @classmethod
    def from_registry(cls, rpc: ChainProvider, registry: NetworkRegistry) -> "NameResolver":
        """Use the configured ENS endpoint, else the chain 1 network's."""

        endpoint = settings.ens_rpc_url if settings.has_ens_rpc_url else None
        if endpoint is None:
            mainnet = registry.get(ENS_CHAIN_ID)
            endpoint = mainnet.rpc_url if mainnet else None
        return cls(rpc, endpoint=endpoint)

    async def resolve(self, identifier: str) -> str:
        candidate = identifier.strip()

        if is_valid_evm_address(candidate):
            return candidate.lower()

        if looks_like_address(candidate):
            raise ResolutionFailed(identifier, ResolutionFailure.INVALID, "malformed hex address")

        if not looks_like_name(candidate):
            raise ResolutionFailed(identifier, ResolutionFailure.INVALID, "expected an address or a dotted name")

        if not self.endpoint:
            raise ResolutionFailed(identifier, ResolutionFailure.UNAVAILABLE)

        node = encode_bytes32(namehash(candidate))

        try:
            resolver_data = await self.rpc.call(
                self.endpoint,
                self.registry_address,
                encode_call("resolver(bytes32)", node),
            )
        except RpcError as e:
            raise ResolutionFailed(identifier, ResolutionFailure.NETWORK, str(e)) from e
        try:
            resolver = decode_address(resolver_data)
        except ValueError as e:
            raise ResolutionFailed(
                identifier, ResolutionFailure.UNAVAILABLE, f"no ENS registry at endpoint: {e}"
            ) from e

        if resolver == ZERO_ADDRESS:
            raise ResolutionFailed(identifier, ResolutionFailure.NO_RESOLVER)

        try:
            address_data = await self.rpc.call(
                self.endpoint,
                resolver,
                encode_call("addr(bytes32)", node),
            )
        except RpcError as e:
            raise ResolutionFailed(identifier, ResolutionFailure.NETWORK, str(e)) from e
        try:
            address = decode_address(address_data)
        except ValueError as e:
            # Resolver without addr() or without code
            raise ResolutionFailed(identifier, ResolutionFailure.BAD_RESOLVER, str(e)) from e

        if address == ZERO_ADDRESS:
            raise ResolutionFailed(identifier, ResolutionFailure.NO_ADDRESS)

        logger.info("resolved %s to %s", candidate, address)
        return address


__all__ = ["ENS_REGISTRY", "namehash", "NameResolver"]
