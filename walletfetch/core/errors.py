"""
Error Classification

Defines the error types raised while resolving identities and querying
networks. Resolution errors are fatal to a run; RPC errors are contained by
the balance aggregator and recorded in the report.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class ErrorCategory(str, Enum):
    """Categories of errors, used for logging and reporting."""

    NETWORK = "network"           # Transport/connectivity issues
    TIMEOUT = "timeout"           # Request timed out
    PROTOCOL = "protocol"         # HTTP status, JSON-RPC error, bad payload
    NOT_FOUND = "not_found"       # Name has no record
    VALIDATION = "validation"     # Input validation error
    UNKNOWN = "unknown"


@dataclass
class ErrorContext:
    """Additional context about an error."""

    category: ErrorCategory = ErrorCategory.UNKNOWN
    endpoint: Optional[str] = None
    method: Optional[str] = None
    chain_id: Optional[int] = None
    details: Dict[str, Any] = field(default_factory=dict)


class WalletfetchError(Exception):
    """Base class for all walletfetch errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        context: Optional[ErrorContext] = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category
        self.context = context or ErrorContext(category=category)


class ConfigurationError(WalletfetchError):
    """Malformed network, token or address configuration."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message,
            category=ErrorCategory.VALIDATION,
            context=ErrorContext(
                category=ErrorCategory.VALIDATION,
                details=details or {},
            ),
        )


class RpcError(WalletfetchError):
    """Transport, protocol or decoding failure talking to one endpoint."""

    def __init__(
        self,
        message: str,
        endpoint: str,
        method: str,
        category: ErrorCategory = ErrorCategory.PROTOCOL,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message,
            category=category,
            context=ErrorContext(
                category=category,
                endpoint=endpoint,
                method=method,
                details=details or {},
            ),
        )
        self.endpoint = endpoint
        self.method = method

    def __str__(self) -> str:
        return f"{self.method} @ {self.endpoint}: {self.message}"


class ResolutionFailure(str, Enum):
    """Why an identifier could not be turned into an address."""

    INVALID = "invalid identifier"
    NO_RESOLVER = "no resolver"
    NO_ADDRESS = "no address record"
    BAD_RESOLVER = "resolver returned no data"
    NETWORK = "network unreachable"
    UNAVAILABLE = "no endpoint for name lookups"


class ResolutionFailed(WalletfetchError):
    """The identifier could not be resolved to an address."""

    def __init__(
        self,
        identifier: str,
        reason: ResolutionFailure,
        detail: Optional[str] = None,
    ):
        message = f"could not resolve '{identifier}': {reason.value}"
        if detail:
            message = f"{message} ({detail})"
        category = {
            ResolutionFailure.INVALID: ErrorCategory.VALIDATION,
            ResolutionFailure.NO_RESOLVER: ErrorCategory.NOT_FOUND,
            ResolutionFailure.NO_ADDRESS: ErrorCategory.NOT_FOUND,
            ResolutionFailure.BAD_RESOLVER: ErrorCategory.NOT_FOUND,
            ResolutionFailure.NETWORK: ErrorCategory.NETWORK,
        }.get(reason, ErrorCategory.UNKNOWN)
        super().__init__(
            message,
            category=category,
            context=ErrorContext(category=category, details={"identifier": identifier}),
        )
        self.identifier = identifier
        self.reason = reason


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "WalletfetchError",
    "ConfigurationError",
    "RpcError",
    "ResolutionFailure",
    "ResolutionFailed",
]
