"""
Tests for NameResolver.

Covers:
- Raw addresses bypass the network entirely
- Registry/resolver lookups and their failure reasons
- Endpoint selection from the network registry
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from walletfetch.core.abi import encode_bytes32, encode_call
from walletfetch.core.errors import ResolutionFailed, ResolutionFailure, RpcError
from walletfetch.services.name_resolver import ENS_REGISTRY, NameResolver, namehash
from walletfetch.types import NetworkConfig, NetworkRegistry

ENDPOINT = "https://mainnet.example"
RESOLVER = "0x4976fb03c32e5b8cfe2b6ccb31c09ba78ebaba41"
WALLET = "0xd8da6bf26964af9d7eed9e03e53415d37aa96045"


def word(address: str) -> bytes:
    return bytes(12) + bytes.fromhex(address[2:])


@pytest.fixture
def failing_rpc():
    """An RPC provider that blows up if it is ever used."""
    rpc = MagicMock()
    rpc.call = AsyncMock(side_effect=AssertionError("rpc must not be called"))
    return rpc


def routed_rpc(resolver_word: bytes, addr_word: bytes = b""):
    async def call(endpoint, to_address, call_data):
        if to_address == ENS_REGISTRY:
            return resolver_word
        return addr_word

    rpc = MagicMock()
    rpc.call = AsyncMock(side_effect=call)
    return rpc


class TestAddressPassthrough:

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "identifier",
        [
            "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045",
            "0xd8da6bf26964af9d7eed9e03e53415d37aa96045",
            "  0xD8DA6BF26964AF9D7EED9E03E53415D37AA96045 ",
        ],
    )
    async def test_addresses_return_without_rpc(self, failing_rpc, identifier):
        resolver = NameResolver(failing_rpc, endpoint=ENDPOINT)

        assert await resolver.resolve(identifier) == WALLET
        failing_rpc.call.assert_not_called()

    @pytest.mark.asyncio
    async def test_address_works_without_endpoint(self, failing_rpc):
        resolver = NameResolver(failing_rpc, endpoint=None)

        assert await resolver.resolve(WALLET) == WALLET

    @pytest.mark.asyncio
    @pytest.mark.parametrize("identifier", ["0x1234", "vitalik", "", "0xd8da6bf26964af9d7eed9e03e53415d37aa9604g"])
    async def test_invalid_identifiers(self, failing_rpc, identifier):
        resolver = NameResolver(failing_rpc, endpoint=ENDPOINT)

        with pytest.raises(ResolutionFailed) as excinfo:
            await resolver.resolve(identifier)

        assert excinfo.value.reason is ResolutionFailure.INVALID
        failing_rpc.call.assert_not_called()


class TestNameLookup:

    @pytest.mark.asyncio
    async def test_resolves_name_through_registry_and_resolver(self):
        rpc = routed_rpc(word(RESOLVER), word(WALLET))
        resolver = NameResolver(rpc, endpoint=ENDPOINT)

        assert await resolver.resolve("vitalik.eth") == WALLET

        node = encode_bytes32(namehash("vitalik.eth"))
        first, second = rpc.call.await_args_list
        assert first.args == (ENDPOINT, ENS_REGISTRY, encode_call("resolver(bytes32)", node))
        assert second.args == (ENDPOINT, RESOLVER, encode_call("addr(bytes32)", node))

    @pytest.mark.asyncio
    async def test_no_resolver_is_reported_as_such(self):
        rpc = routed_rpc(bytes(32))
        resolver = NameResolver(rpc, endpoint=ENDPOINT)

        with pytest.raises(ResolutionFailed) as excinfo:
            await resolver.resolve("stevedylandev.eth")

        assert excinfo.value.reason is ResolutionFailure.NO_RESOLVER
        assert "no resolver" in str(excinfo.value)
        assert rpc.call.await_count == 1

    @pytest.mark.asyncio
    async def test_zero_address_record(self):
        rpc = routed_rpc(word(RESOLVER), bytes(32))
        resolver = NameResolver(rpc, endpoint=ENDPOINT)

        with pytest.raises(ResolutionFailed) as excinfo:
            await resolver.resolve("empty.eth")

        assert excinfo.value.reason is ResolutionFailure.NO_ADDRESS

    @pytest.mark.asyncio
    async def test_resolver_without_addr_is_a_name_problem(self):
        rpc = routed_rpc(word(RESOLVER), b"")
        resolver = NameResolver(rpc, endpoint=ENDPOINT)

        with pytest.raises(ResolutionFailed) as excinfo:
            await resolver.resolve("foo.eth")

        assert excinfo.value.reason is ResolutionFailure.BAD_RESOLVER
        assert "network unreachable" not in str(excinfo.value)

    @pytest.mark.asyncio
    async def test_endpoint_without_registry(self):
        rpc = routed_rpc(b"")
        resolver = NameResolver(rpc, endpoint=ENDPOINT)

        with pytest.raises(ResolutionFailed) as excinfo:
            await resolver.resolve("foo.eth")

        assert excinfo.value.reason is ResolutionFailure.UNAVAILABLE
        assert rpc.call.await_count == 1

    @pytest.mark.asyncio
    async def test_rpc_failure_is_network_reason(self):
        rpc = MagicMock()
        rpc.call = AsyncMock(side_effect=RpcError("timed out", ENDPOINT, "eth_call"))
        resolver = NameResolver(rpc, endpoint=ENDPOINT)

        with pytest.raises(ResolutionFailed) as excinfo:
            await resolver.resolve("vitalik.eth")

        assert excinfo.value.reason is ResolutionFailure.NETWORK
        assert isinstance(excinfo.value.__cause__, RpcError)

    @pytest.mark.asyncio
    async def test_name_without_endpoint(self, failing_rpc):
        resolver = NameResolver(failing_rpc, endpoint=None)

        with pytest.raises(ResolutionFailed) as excinfo:
            await resolver.resolve("vitalik.eth")

        assert excinfo.value.reason is ResolutionFailure.UNAVAILABLE


class TestEndpointSelection:

    def test_uses_mainnet_network(self, monkeypatch, failing_rpc):
        monkeypatch.setattr("walletfetch.services.name_resolver.settings.ens_rpc_url", "")
        registry = NetworkRegistry(
            networks={
                8453: NetworkConfig(chain_id=8453, name="Base", rpc_url="https://base.example"),
                1: NetworkConfig(chain_id=1, name="Ethereum", rpc_url=ENDPOINT),
            }
        )

        assert NameResolver.from_registry(failing_rpc, registry).endpoint == ENDPOINT

    def test_settings_override(self, monkeypatch, failing_rpc):
        monkeypatch.setattr("walletfetch.services.name_resolver.settings.ens_rpc_url", "https://ens.example")

        resolver = NameResolver.from_registry(failing_rpc, NetworkRegistry())

        assert resolver.endpoint == "https://ens.example"

    def test_no_mainnet_configured(self, monkeypatch, failing_rpc):
        monkeypatch.setattr("walletfetch.services.name_resolver.settings.ens_rpc_url", "")
        registry = NetworkRegistry(
            networks={8453: NetworkConfig(chain_id=8453, name="Base", rpc_url="https://base.example")}
        )

        assert NameResolver.from_registry(failing_rpc, registry).endpoint is None
