from decimal import Decimal

from walletfetch.core.abi import MAX_UINT256
from walletfetch.types import (
    BalanceResult,
    BalanceStatus,
    NetworkConfig,
    NetworkReport,
    NetworkStatus,
    WalletReport,
)

NETWORK = NetworkConfig(chain_id=1, name="Ethereum", rpc_url="https://eth.example")


def test_human_value_is_computed_from_raw():
    result = BalanceResult(label="USDC", raw_value=1_000_000, decimals=6)

    assert result.raw_value == 1_000_000
    assert result.human_value == Decimal("1.0")


def test_human_value_keeps_full_precision():
    result = BalanceResult(label="ETH", raw_value=MAX_UINT256, decimals=18)

    assert str(result.human_value).replace(".", "").lstrip("0") == str(MAX_UINT256)


def test_zero_and_failed_are_distinct():
    zero = BalanceResult(label="ETH", raw_value=0, decimals=18)
    failed = BalanceResult.failed("ETH", 18, "timed out")

    assert zero.ok and zero.human_value == 0
    assert failed.status is BalanceStatus.FAILED
    assert failed.human_value is None
    assert failed.reason == "timed out"


def test_wallet_report_accessors():
    ok = NetworkReport(network=NETWORK, native=BalanceResult("ETH", 1, 18))
    down = NetworkReport(
        network=NETWORK.model_copy(update={"chain_id": 8453, "name": "Base"}),
        native=BalanceResult.failed("ETH", 18, "HTTP 503"),
        status=NetworkStatus.UNREACHABLE,
    )
    report = WalletReport(resolved_address="0x" + "11" * 20, per_network=[ok, down])

    assert report.ok_networks == [ok]
    assert report.unreachable_networks == [down]
    assert report.network(8453) is down
    assert report.network(10) is None
