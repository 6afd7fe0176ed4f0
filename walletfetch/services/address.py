"""Helpers for validating and normalizing EVM addresses and identifiers."""

from __future__ import annotations

import re

from ..core.errors import ConfigurationError

_EVM_ADDRESS_RE = re.compile(r"^0x[a-fA-F0-9]{40}$")


def is_valid_evm_address(value: str | None) -> bool:
    if not value:
        return False
    return bool(_EVM_ADDRESS_RE.fullmatch(value.strip()))


def normalize_address(value: str) -> str:
    """Return the canonical lowercase form of an address.

    Raises ``ConfigurationError`` when the value is not a 20-byte hex address.
    """

    if not isinstance(value, str) or not is_valid_evm_address(value):
        raise ConfigurationError(
            f"Invalid address: {value!r} (expected 0x followed by 40 hex characters)",
            details={"value": value},
        )
    return value.strip().lower()


def looks_like_address(identifier: str) -> bool:
    """True for anything that claims to be a hex address, well-formed or not."""

    return identifier.strip()[:2] in ("0x", "0X")


def looks_like_name(identifier: str) -> bool:
    """Dotted names such as ``vitalik.eth`` are candidates for resolution."""

    name = identifier.strip()
    if not name or looks_like_address(name):
        return False
    labels = name.split(".")
    return len(labels) >= 2 and all(labels)


__all__ = [
    "is_valid_evm_address",
    "normalize_address",
    "looks_like_address",
    "looks_like_name",
]
