"""
Minimal ABI encoding for the static calls we issue (balanceOf, resolver, addr).
"""

from __future__ import annotations

from eth_utils import keccak

WORD_SIZE = 32
MAX_UINT256 = 2**256 - 1
ZERO_ADDRESS = "0x" + "00" * 20


def _strip_0x(value: str) -> str:
    return value[2:] if value[:2] in ("0x", "0X") else value


def encode_uint(value: int) -> str:
    if value < 0:
        raise ValueError("Value must be non-negative")
    if value > MAX_UINT256:
        raise ValueError("Value does not fit in 256 bits")
    return hex(value)[2:].rjust(64, "0")


def encode_address(address: str) -> str:
    addr = _strip_0x(address).lower()
    if len(addr) != 40:
        raise ValueError(f"Invalid address length: {address}")
    return addr.rjust(64, "0")


def encode_bytes32(value: bytes) -> str:
    if len(value) != WORD_SIZE:
        raise ValueError("bytes32 value must be exactly 32 bytes")
    return value.hex()


def selector(signature: str) -> str:
    """Return the 4-byte function selector for a canonical signature."""
    return f"0x{keccak(text=signature)[:4].hex()}"


def encode_call(signature: str, *words: str) -> str:
    """Build calldata from a signature and already-encoded 32-byte words."""
    return selector(signature) + "".join(words)


def encode_balance_of(owner: str) -> str:
    return encode_call("balanceOf(address)", encode_address(owner))


def hex_to_bytes(value: str) -> bytes:
    """Decode a 0x-prefixed hex string. Raises ValueError on malformed input."""
    if not isinstance(value, str) or value[:2] not in ("0x", "0X"):
        raise ValueError(f"Expected 0x-prefixed hex string, got {value!r}")
    digits = value[2:]
    if len(digits) % 2:
        digits = "0" + digits
    return bytes.fromhex(digits)


def decode_uint256(data: bytes) -> int:
    """Decode the last 32-byte word of a return payload as an unsigned int."""
    if len(data) < WORD_SIZE:
        raise ValueError(f"Return data too short: {len(data)} bytes")
    return int.from_bytes(data[-WORD_SIZE:], "big")


def decode_address(data: bytes) -> str:
    """Decode an address returned in the last 32-byte word."""
    if len(data) < WORD_SIZE:
        raise ValueError(f"Return data too short: {len(data)} bytes")
    return "0x" + data[-20:].hex()


__all__ = [
    "WORD_SIZE",
    "MAX_UINT256",
    "ZERO_ADDRESS",
    "encode_uint",
    "encode_address",
    "encode_bytes32",
    "selector",
    "encode_call",
    "encode_balance_of",
    "hex_to_bytes",
    "decode_uint256",
    "decode_address",
]
