from abc import ABC, abstractmethod
from typing import Any, List


class Provider(ABC):
    """Base provider interface"""

    name: str
    timeout_s: float = 10


class ChainProvider(Provider):
    """Provider for on-chain reads against a JSON-RPC endpoint"""

    @abstractmethod
    async def request(self, endpoint: str, method: str, params: List[Any]) -> Any:
        """Issue a raw JSON-RPC request and return its ``result``"""
        pass

    @abstractmethod
    async def call(self, endpoint: str, to_address: str, call_data: str) -> bytes:
        """Execute a read-only contract call"""
        pass

    @abstractmethod
    async def native_balance(self, endpoint: str, address: str) -> int:
        """Get native currency balance in the smallest unit"""
        pass

    @abstractmethod
    async def erc20_balance(self, endpoint: str, token: str, owner: str) -> int:
        """Get an ERC-20 ``balanceOf`` result in the smallest unit"""
        pass
