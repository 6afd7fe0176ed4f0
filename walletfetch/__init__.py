"""walletfetch: multi-network wallet balance reports for EVM chains."""

__version__ = "0.1.0"
