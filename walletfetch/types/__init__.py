from .network import NetworkConfig, NetworkRegistry, TokenConfig
from .report import BalanceResult, BalanceStatus, NetworkReport, NetworkStatus, WalletReport

__all__ = [
    "TokenConfig",
    "NetworkConfig",
    "NetworkRegistry",
    "BalanceStatus",
    "NetworkStatus",
    "BalanceResult",
    "NetworkReport",
    "WalletReport",
]
