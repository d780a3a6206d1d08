"""
Type definitions for Bridge Adapter
"""

from .chains import (
    Chain,
    ChainId,
    ChainRole,
    NETWORKS,
    CANONICAL_CHAIN_ID,
    L2_ETH_CHAINS,
    ETH_NATIVE_CHAINS,
    REQUIRED_CONFIRMATIONS,
    UNKNOWN_CONFIRMATIONS,
    chain_id_of,
    get_required_confirmations,
    is_canonical,
    supported_chain_ids,
)

# Token registry
from .tokens import (
    SwapType,
    Token,
    Tokens,
    TokenRegistry,
    NATIVE_TOKEN_ADDRESS,
    ETH_LIKE_TOKENS,
)

# Pool registry
from .pools import (
    PoolTokenList,
    PoolTokenListProvider,
    DEFAULT_POOLS,
    intermediate_token,
    fee_token,
)

from .routes import (
    BridgeRouteRequest,
    RouteSupport,
    DirectRouteSets,
    DirectRouteTable,
    DirectRouteKind,
    DepositIfChain,
    DEPOSIT_IF_CHAIN_TOKENS,
    build_direct_routes,
)

from .result import (
    BridgeOutputEstimate,
    ContractKind,
    ShapeTag,
    ShapeParam,
    TransactionShape,
    UnsignedCall,
)

__all__ = [
    # Chains
    "Chain",
    "ChainId",
    "ChainRole",
    "NETWORKS",
    "CANONICAL_CHAIN_ID",
    "L2_ETH_CHAINS",
    "ETH_NATIVE_CHAINS",
    "REQUIRED_CONFIRMATIONS",
    "UNKNOWN_CONFIRMATIONS",
    "chain_id_of",
    "get_required_confirmations",
    "is_canonical",
    "supported_chain_ids",
    # Tokens
    "SwapType",
    "Token",
    "Tokens",
    "TokenRegistry",
    "NATIVE_TOKEN_ADDRESS",
    "ETH_LIKE_TOKENS",
    # Pools
    "PoolTokenList",
    "PoolTokenListProvider",
    "DEFAULT_POOLS",
    "intermediate_token",
    "fee_token",
    # Routes
    "BridgeRouteRequest",
    "RouteSupport",
    "DirectRouteSets",
    "DirectRouteTable",
    "DirectRouteKind",
    "DepositIfChain",
    "DEPOSIT_IF_CHAIN_TOKENS",
    "build_direct_routes",
    # Results
    "BridgeOutputEstimate",
    "ContractKind",
    "ShapeTag",
    "ShapeParam",
    "TransactionShape",
    "UnsignedCall",
]
