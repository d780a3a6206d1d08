"""
Exception definitions for Bridge Adapter
"""

from enum import Enum
from typing import Optional


class ErrorCode(Enum):
    """
    Stable string codes carried by every BridgeAdapterError

    The leading digit groups them: 1 chain reads, 2 routing, 3 fees,
    4 pool registry, 5 pre-flight, 7 caller control, 9 settings.
    """
    # Chain reads
    RPC_CONNECTION_FAILED = "1001"
    RPC_TIMEOUT = "1002"
    RPC_RATE_LIMITED = "1003"
    RPC_INVALID_RESPONSE = "1004"
    RPC_CALL_REVERTED = "1005"

    # Route errors
    ROUTE_UNSUPPORTED = "2001"
    EMPTY_DESTINATION_ADDRESS = "2002"

    # Fee errors
    FEE_QUERY_FAILED = "3001"

    # Pool/registry errors
    POOL_INDEX_NOT_FOUND = "4001"

    # Pre-flight errors
    INSUFFICIENT_BALANCE = "5001"
    INSUFFICIENT_ALLOWANCE = "5002"

    # Caller control
    OPERATION_CANCELLED = "7001"

    # Settings and static tables
    CONFIG_INVALID = "9001"
    CONFIG_MISSING = "9002"


class BridgeAdapterError(Exception):
    """
    Root of every error raised by bridge_adapter

    `recoverable` tells call_with_retry whether repeating the same read can
    help. `details` holds machine-readable context such as token, chain and
    stage; `original_error` keeps the exception that was wrapped, if any.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        recoverable: bool = False,
        original_error: Optional[Exception] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.recoverable = recoverable
        self.original_error = original_error
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"

    @property
    def should_retry(self) -> bool:
        return self.recoverable


class RpcError(BridgeAdapterError):
    """
    A JSON-RPC read failed

    Transport failures (refused connections, timeouts, throttling) are
    recoverable. A reverted eth_call is not.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.RPC_CONNECTION_FAILED,
        original_error: Optional[Exception] = None,
        endpoint: Optional[str] = None,
        recoverable: bool = True,
    ):
        super().__init__(
            message,
            code,
            recoverable=recoverable,
            original_error=original_error,
            details={"endpoint": endpoint} if endpoint else None,
        )
        self.endpoint = endpoint

    @classmethod
    def connection_failed(cls, endpoint: str, error: Exception = None) -> "RpcError":
        return cls(
            f"Cannot reach {endpoint}",
            ErrorCode.RPC_CONNECTION_FAILED,
            original_error=error,
            endpoint=endpoint,
        )

    @classmethod
    def timeout(cls, endpoint: str, timeout_seconds: float) -> "RpcError":
        return cls(
            f"No response from {endpoint} within {timeout_seconds}s",
            ErrorCode.RPC_TIMEOUT,
            endpoint=endpoint,
        )

    @classmethod
    def reverted(cls, call: str, error: Exception = None) -> "RpcError":
        # Reverts are deterministic; retrying the same call cannot succeed
        return cls(
            f"Contract call reverted: {call}",
            ErrorCode.RPC_CALL_REVERTED,
            original_error=error,
            recoverable=False,
        )


class RouteUnsupported(BridgeAdapterError):
    """
    Route not supported - user-facing, recoverable by choosing another route

    Raised when:
    - The token/chain combination has no bridge route
    - Either token is unknown on its chain
    """

    def __init__(
        self,
        message: str,
        token_from: Optional[str] = None,
        token_to: Optional[str] = None,
        chain_from: Optional[int] = None,
        chain_to: Optional[int] = None,
        reason: Optional[str] = None,
    ):
        super().__init__(
            message,
            ErrorCode.ROUTE_UNSUPPORTED,
            recoverable=False,
            details={
                "token_from": token_from,
                "token_to": token_to,
                "chain_from": chain_from,
                "chain_to": chain_to,
                "reason": reason,
            },
        )
        self.token_from = token_from
        self.token_to = token_to
        self.chain_from = chain_from
        self.chain_to = chain_to
        self.reason = reason

    @classmethod
    def for_route(
        cls,
        reason: str,
        token_from: str,
        token_to: str,
        chain_from: int,
        chain_to: int,
    ) -> "RouteUnsupported":
        return cls(
            f"Route {token_from}@{chain_from} -> {token_to}@{chain_to} not supported: {reason}",
            token_from=token_from,
            token_to=token_to,
            chain_from=chain_from,
            chain_to=chain_to,
            reason=reason,
        )


class EmptyDestinationAddress(BridgeAdapterError):
    """Destination address missing when building a transaction (caller error)"""

    def __init__(self, message: str = "BridgeRouteRequest.address_to cannot be empty or None"):
        super().__init__(
            message,
            ErrorCode.EMPTY_DESTINATION_ADDRESS,
            recoverable=False,
            details={"stage": "build"},
        )


class FeeQueryFailed(BridgeAdapterError):
    """
    Bridge fee oracle query failed - transient, should be retried

    Raised instead of returning an empty estimate when the fee oracle
    cannot be reached or returns no value.
    """

    def __init__(
        self,
        message: str,
        token_address: Optional[str] = None,
        chain_to: Optional[int] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(
            message,
            ErrorCode.FEE_QUERY_FAILED,
            recoverable=True,
            original_error=original_error,
            details={"token_address": token_address, "chain_to": chain_to, "stage": "estimate"},
        )
        self.token_address = token_address
        self.chain_to = chain_to

    @classmethod
    def from_error(cls, token_address: str, chain_to: int, error: Exception) -> "FeeQueryFailed":
        return cls(
            f"Bridge fee query failed for {token_address} to chain {chain_to}: {error}",
            token_address=token_address,
            chain_to=chain_to,
            original_error=error,
        )


class PoolIndexNotFound(BridgeAdapterError):
    """
    Token missing from its pool token list - registry inconsistency (fatal)

    Never presented as an unsupported route: it means the token and pool
    registries disagree.
    """

    def __init__(
        self,
        message: str,
        chain_id: Optional[int] = None,
        swap_type: Optional[str] = None,
        token: Optional[str] = None,
    ):
        super().__init__(
            message,
            ErrorCode.POOL_INDEX_NOT_FOUND,
            recoverable=False,
            details={"chain_id": chain_id, "swap_type": swap_type, "token": token},
        )
        self.chain_id = chain_id
        self.swap_type = swap_type
        self.token = token

    @classmethod
    def no_pool(cls, chain_id: int, swap_type: str, token: str) -> "PoolIndexNotFound":
        return cls(
            f"No {swap_type} pool registered on chain {chain_id} (resolving {token})",
            chain_id=chain_id,
            swap_type=swap_type,
            token=token,
        )

    @classmethod
    def not_in_pool(cls, chain_id: int, swap_type: str, token: str) -> "PoolIndexNotFound":
        return cls(
            f"Token {token} not found in {swap_type} pool on chain {chain_id}",
            chain_id=chain_id,
            swap_type=swap_type,
            token=token,
        )


class InsufficientBalance(BridgeAdapterError):
    """Pre-flight: wallet balance below the bridged amount"""

    def __init__(
        self,
        message: str,
        token: Optional[str] = None,
        required: Optional[int] = None,
        available: Optional[int] = None,
    ):
        super().__init__(
            message,
            ErrorCode.INSUFFICIENT_BALANCE,
            recoverable=False,
            details={"token": token, "required": required, "available": available},
        )
        self.token = token
        self.required = required
        self.available = available

    @classmethod
    def token_balance(cls, token: str, required: int, available: int, formatted: str) -> "InsufficientBalance":
        return cls(
            f"Balance of token {token} is too low; current balance is {formatted}",
            token=token,
            required=required,
            available=available,
        )


class InsufficientAllowance(BridgeAdapterError):
    """Pre-flight: bridge spend allowance below the bridged amount"""

    def __init__(
        self,
        message: str,
        token: Optional[str] = None,
        spender: Optional[str] = None,
        required: Optional[int] = None,
        available: Optional[int] = None,
    ):
        super().__init__(
            message,
            ErrorCode.INSUFFICIENT_ALLOWANCE,
            recoverable=False,
            details={"token": token, "spender": spender, "required": required, "available": available},
        )
        self.token = token
        self.spender = spender
        self.required = required
        self.available = available

    @classmethod
    def bridge_allowance(
        cls, token: str, spender: str, required: int, available: int, formatted: str
    ) -> "InsufficientAllowance":
        return cls(
            f"Spend allowance of Bridge too low for token {token}; current allowance for Bridge is {formatted}",
            token=token,
            spender=spender,
            required=required,
            available=available,
        )


class OperationCancelled(BridgeAdapterError):
    """Caller abandoned the estimate/build via its cancellation signal"""

    def __init__(self, operation: str):
        super().__init__(
            f"Operation cancelled: {operation}",
            ErrorCode.OPERATION_CANCELLED,
            recoverable=False,
            details={"operation": operation},
        )
        self.operation = operation


class ConfigurationError(BridgeAdapterError):
    """
    A setting, address or static table entry is absent or unusable

    Never recoverable: retrying cannot supply a missing contract address.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFIG_INVALID,
    ):
        super().__init__(message, code, recoverable=False)

    @classmethod
    def missing(cls, param: str) -> "ConfigurationError":
        return cls(f"{param} is not configured", ErrorCode.CONFIG_MISSING)

    @classmethod
    def invalid(cls, param: str, reason: str) -> "ConfigurationError":
        return cls(f"{param} is invalid: {reason}", ErrorCode.CONFIG_INVALID)
