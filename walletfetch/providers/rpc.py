"""
JSON-RPC 2.0 client for EVM endpoints.

Every failure talking to an endpoint is raised as ``RpcError`` carrying the
endpoint and method so callers can attribute it to a single network.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
from typing import Any, List, Optional

import httpx

from ..config import settings
from ..core.abi import WORD_SIZE, decode_uint256, encode_balance_of, hex_to_bytes
from ..core.errors import ErrorCategory, RpcError
from .base import ChainProvider

logger = logging.getLogger(__name__)


class JsonRpcClient(ChainProvider):
    """Stateless JSON-RPC caller sharing one pooled ``httpx.AsyncClient``.

    Usage:
        async with JsonRpcClient() as rpc:
            wei = await rpc.native_balance("https://eth.llamarpc.com", "0x...")
    """

    name = "jsonrpc"

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        timeout_s: Optional[float] = None,
        max_concurrent_requests: Optional[int] = None,
    ) -> None:
        self.timeout_s = timeout_s or settings.request_timeout_seconds
        self._client = client
        self._owns_client = client is None
        self._semaphore = asyncio.Semaphore(
            max_concurrent_requests or settings.max_concurrent_requests
        )
        self._ids = itertools.count(1)

    async def __aenter__(self) -> "JsonRpcClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout_s)
        return self._client

    async def request(self, endpoint: str, method: str, params: List[Any]) -> Any:
        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params,
            "id": next(self._ids),
        }

        try:
            async with self._semaphore:
                response = await self._get_client().post(
                    endpoint,
                    json=payload,
                    headers={"Content-Type": "application/json"},
                    timeout=self.timeout_s,
                )
        except httpx.TimeoutException as e:
            raise RpcError(
                f"timed out after {self.timeout_s}s",
                endpoint,
                method,
                category=ErrorCategory.TIMEOUT,
            ) from e
        except httpx.HTTPError as e:
            raise RpcError(
                f"transport error: {e.__class__.__name__}: {e}",
                endpoint,
                method,
                category=ErrorCategory.NETWORK,
            ) from e

        if not response.is_success:
            raise RpcError(
                f"HTTP {response.status_code}: {response.text[:200]}",
                endpoint,
                method,
                details={"status_code": response.status_code},
            )

        try:
            data = response.json()
        except ValueError as e:
            raise RpcError("response is not valid JSON", endpoint, method) from e

        if not isinstance(data, dict):
            raise RpcError(f"unexpected response shape: {type(data).__name__}", endpoint, method)

        if data.get("error") is not None:
            error = data["error"]
            if isinstance(error, dict):
                message = f"JSON-RPC error {error.get('code')}: {error.get('message')}"
            else:
                message = f"JSON-RPC error: {error}"
            raise RpcError(message, endpoint, method, details={"error": error})

        if "result" not in data:
            raise RpcError("response has neither result nor error", endpoint, method)

        logger.debug("rpc %s @ %s ok", method, endpoint)
        return data["result"]

    async def _request_bytes(self, endpoint: str, method: str, params: List[Any]) -> bytes:
        result = await self.request(endpoint, method, params)
        try:
            return hex_to_bytes(result)
        except ValueError as e:
            raise RpcError(f"malformed result: {e}", endpoint, method) from e

    async def call(self, endpoint: str, to_address: str, call_data: str) -> bytes:
        return await self._request_bytes(
            endpoint,
            "eth_call",
            [{"to": to_address, "data": call_data}, "latest"],
        )

    async def call_uint256(self, endpoint: str, to_address: str, call_data: str) -> int:
        data = await self.call(endpoint, to_address, call_data)
        if len(data) < WORD_SIZE:
            raise RpcError(
                f"result too short ({len(data)} bytes) from {to_address}",
                endpoint,
                "eth_call",
            )
        return decode_uint256(data)

    async def native_balance(self, endpoint: str, address: str) -> int:
        data = await self._request_bytes(endpoint, "eth_getBalance", [address, "latest"])
        if not data:
            raise RpcError("empty balance result", endpoint, "eth_getBalance")
        if len(data) > WORD_SIZE:
            raise RpcError(f"balance wider than 256 bits ({len(data)} bytes)", endpoint, "eth_getBalance")
        return int.from_bytes(data, "big")

    async def erc20_balance(self, endpoint: str, token: str, owner: str) -> int:
        return await self.call_uint256(endpoint, token, encode_balance_of(owner))


__all__ = ["JsonRpcClient"]
