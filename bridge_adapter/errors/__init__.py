"""
Error definitions for Bridge Adapter
"""

from .exceptions import (
    ErrorCode,
    BridgeAdapterError,
    RpcError,
    RouteUnsupported,
    EmptyDestinationAddress,
    FeeQueryFailed,
    PoolIndexNotFound,
    InsufficientBalance,
    InsufficientAllowance,
    OperationCancelled,
    ConfigurationError,
)

__all__ = [
    "ErrorCode",
    "BridgeAdapterError",
    "RpcError",
    "RouteUnsupported",
    "EmptyDestinationAddress",
    "FeeQueryFailed",
    "PoolIndexNotFound",
    "InsufficientBalance",
    "InsufficientAllowance",
    "OperationCancelled",
    "ConfigurationError",
]
