"""
Bridge Adapter - Route resolution and transaction building for the Synapse bridge

Provides:
- Route eligibility checks between supported chains
- Output estimation (bridge fee plus origin/destination pool math)
- Transaction shape selection and calldata encoding for zap/bridge contracts
- Pre-flight balance and allowance checks

Chains:
- Ethereum: canonical chain holding the nUSD stable pool
- Optimism, BSC, Polygon, Fantom, Boba, Moonbeam, Moonriver, Arbitrum,
  Avalanche, Harmony: peripheral chains with swap pools
"""

__version__ = "0.1.0"

from .client import BridgeClient, BridgeContext
from .types import (
    Chain,
    ChainId,
    ChainRole,
    NETWORKS,
    SwapType,
    Token,
    Tokens,
    TokenRegistry,
    BridgeRouteRequest,
    BridgeOutputEstimate,
    RouteSupport,
    ShapeTag,
    TransactionShape,
    UnsignedCall,
    get_required_confirmations,
)
from .errors import (
    BridgeAdapterError,
    ErrorCode,
    RouteUnsupported,
    EmptyDestinationAddress,
    FeeQueryFailed,
    PoolIndexNotFound,
    InsufficientBalance,
    InsufficientAllowance,
    OperationCancelled,
    ConfigurationError,
    RpcError,
)
from .config import config, get_config, reload_config, setup_logging, enable_file_logging

__all__ = [
    "__version__",
    # Client
    "BridgeClient",
    "BridgeContext",
    # Types
    "Chain",
    "ChainId",
    "ChainRole",
    "NETWORKS",
    "SwapType",
    "Token",
    "Tokens",
    "TokenRegistry",
    "BridgeRouteRequest",
    "BridgeOutputEstimate",
    "RouteSupport",
    "ShapeTag",
    "TransactionShape",
    "UnsignedCall",
    "get_required_confirmations",
    # Errors
    "BridgeAdapterError",
    "ErrorCode",
    "RouteUnsupported",
    "EmptyDestinationAddress",
    "FeeQueryFailed",
    "PoolIndexNotFound",
    "InsufficientBalance",
    "InsufficientAllowance",
    "OperationCancelled",
    "ConfigurationError",
    "RpcError",
    # Config
    "config",
    "get_config",
    "reload_config",
    "setup_logging",
    "enable_file_logging",
]
