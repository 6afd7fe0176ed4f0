"""Plain-text rendering of a WalletReport."""

from __future__ import annotations

from typing import List

from .types.report import BalanceResult, WalletReport


def format_balance(result: BalanceResult, places: int = 4) -> str:
    value = result.human_value
    if value is None:
        return f"unavailable ({result.reason})"
    return f"{value:,.{places}f}"


def render_report(report: WalletReport, places: int = 4) -> str:
    header = f"Balances for {report.resolved_address}"
    if report.identifier and report.identifier.lower() != report.resolved_address:
        header = f"Balances for {report.identifier} ({report.resolved_address})"

    lines: List[str] = [header, "-" * len(header)]
    if not report.per_network:
        lines.append("No networks configured")
        return "\n".join(lines)

    for network_report in report.per_network:
        network = network_report.network
        if network_report.reachable:
            lines.append(f"{network.name} ({network.chain_id})")
        else:
            lines.append(f"{network.name} ({network.chain_id}) - unreachable")

        balances = [network_report.native, *network_report.tokens]
        width = max(len(balance.label) for balance in balances)
        for balance in balances:
            lines.append(f"  {balance.label:<{width}}  {format_balance(balance, places)}")

    return "\n".join(lines)


__all__ = ["format_balance", "render_report"]
