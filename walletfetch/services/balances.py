"""
Multi-network balance aggregation.

Fans out one task per configured network and, within each network, one task
per balance query (native plus every token). Failures are recorded in the
report instead of aborting the run:

- native query fails  -> network marked unreachable, every token failed
- one token fails     -> only that token is failed

Usage:
    async with JsonRpcClient() as rpc:
        report = await BalanceAggregator(rpc).aggregate(address, registry)
"""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Sequence, Union

from ..core.errors import RpcError
from ..providers.base import ChainProvider
from ..types.network import NetworkConfig, NetworkRegistry
from ..types.report import BalanceResult, NetworkReport, NetworkStatus, WalletReport
from .address import normalize_address

logger = logging.getLogger(__name__)

NETWORK_UNREACHABLE = "network unreachable"


def _contain(outcome: Union[int, BaseException]) -> Union[int, RpcError]:
    """Keep RPC failures as values; anything else is a bug and propagates."""
    if isinstance(outcome, RpcError):
        return outcome
    if isinstance(outcome, BaseException):
        raise outcome
    return outcome


class BalanceAggregator:
    def __init__(self, rpc: ChainProvider) -> None:
        self.rpc = rpc

    async def aggregate(
        self,
        address: str,
        registry: NetworkRegistry,
        identifier: Optional[str] = None,
    ) -> WalletReport:
        address = normalize_address(address)

        tasks = [
            asyncio.ensure_future(self.network_report(address, network))
            for network in registry.all()
        ]
        try:
            reports = await asyncio.gather(*tasks)
        except BaseException:
            # Do not leave sibling networks running behind a propagating error
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        report = WalletReport(
            resolved_address=address,
            per_network=list(reports),
            identifier=identifier,
        )
        logger.info(
            "aggregated %d networks for %s (%d unreachable)",
            len(report.per_network),
            address,
            len(report.unreachable_networks),
        )
        return report

    async def network_report(self, address: str, network: NetworkConfig) -> NetworkReport:
        tokens = list(network.tokens.items())

        outcomes: Sequence[Union[int, BaseException]] = await asyncio.gather(
            self.rpc.native_balance(network.rpc_url, address),
            *(
                self.rpc.erc20_balance(network.rpc_url, token.address, address)
                for _, token in tokens
            ),
            return_exceptions=True,
        )
        native_outcome, *token_outcomes = [_contain(outcome) for outcome in outcomes]

        if isinstance(native_outcome, RpcError):
            logger.warning(
                "network %s (%d) unreachable: %s",
                network.name,
                network.chain_id,
                native_outcome,
            )
            return NetworkReport(
                network=network,
                native=BalanceResult.failed(
                    network.native_symbol,
                    network.native_decimals,
                    str(native_outcome),
                ),
                tokens=[
                    BalanceResult.failed(symbol, token.decimals, NETWORK_UNREACHABLE, token.address)
                    for symbol, token in tokens
                ],
                status=NetworkStatus.UNREACHABLE,
                reason=str(native_outcome),
            )

        token_results: List[BalanceResult] = []
        for (symbol, token), outcome in zip(tokens, token_outcomes):
            if isinstance(outcome, RpcError):
                logger.warning(
                    "balanceOf %s on %s failed: %s",
                    symbol,
                    network.name,
                    outcome,
                )
                token_results.append(
                    BalanceResult.failed(symbol, token.decimals, str(outcome), token.address)
                )
            else:
                token_results.append(
                    BalanceResult(
                        label=symbol,
                        raw_value=outcome,
                        decimals=token.decimals,
                        contract_address=token.address,
                    )
                )

        return NetworkReport(
            network=network,
            native=BalanceResult(
                label=network.native_symbol,
                raw_value=native_outcome,
                decimals=network.native_decimals,
            ),
            tokens=token_results,
        )


__all__ = ["BalanceAggregator", "NETWORK_UNREACHABLE"]
