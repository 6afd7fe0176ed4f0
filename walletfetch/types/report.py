"""Report model handed to the renderer."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from .network import NetworkConfig


class BalanceStatus(str, Enum):
    OK = "ok"
    FAILED = "failed"


class NetworkStatus(str, Enum):
    OK = "ok"
    UNREACHABLE = "unreachable"


@dataclass(frozen=True)
class BalanceResult:
    """A single balance slot. ``raw_value`` is always the unscaled integer."""
    label: str
    raw_value: int
    decimals: int
    status: BalanceStatus = BalanceStatus.OK
    reason: Optional[str] = None
    contract_address: Optional[str] = None

    @classmethod
    def failed(
        cls,
        label: str,
        decimals: int,
        reason: str,
        contract_address: Optional[str] = None,
    ) -> "BalanceResult":
        return cls(
            label=label,
            raw_value=0,
            decimals=decimals,
            status=BalanceStatus.FAILED,
            reason=reason,
            contract_address=contract_address,
        )

    @property
    def ok(self) -> bool:
        return self.status is BalanceStatus.OK

    @property
    def human_value(self) -> Optional[Decimal]:
        """raw_value / 10**decimals, or None when the balance is unknown."""
        if not self.ok:
            return None
        # Built from a string so no context precision applies
        return Decimal(f"{self.raw_value}e-{self.decimals}")


@dataclass(frozen=True)
class NetworkReport:
    network: NetworkConfig
    native: BalanceResult
    tokens: List[BalanceResult] = field(default_factory=list)
    status: NetworkStatus = NetworkStatus.OK
    reason: Optional[str] = None

    @property
    def chain_id(self) -> int:
        return self.network.chain_id

    @property
    def reachable(self) -> bool:
        return self.status is NetworkStatus.OK

    @property
    def failed_tokens(self) -> List[BalanceResult]:
        return [token for token in self.tokens if not token.ok]


@dataclass(frozen=True)
class WalletReport:
    resolved_address: str
    per_network: List[NetworkReport] = field(default_factory=list)
    identifier: Optional[str] = None

    @property
    def ok_networks(self) -> List[NetworkReport]:
        return [report for report in self.per_network if report.reachable]

    @property
    def unreachable_networks(self) -> List[NetworkReport]:
        return [report for report in self.per_network if not report.reachable]

    def network(self, chain_id: int) -> Optional[NetworkReport]:
        for report in self.per_network:
            if report.chain_id == chain_id:
                return report
        return None
