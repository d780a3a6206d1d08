"""
Collaborator interfaces and their Synapse implementations

The route engine depends only on the abstract interfaces in base.py;
protocols/synapse provides the web3.py implementations.
"""

from .base import (
    FeeOracleClient,
    LiquidityMathClient,
    SwapMathClient,
    ContractCallEncoder,
    TokenBalanceReader,
)

__all__ = [
    "FeeOracleClient",
    "LiquidityMathClient",
    "SwapMathClient",
    "ContractCallEncoder",
    "TokenBalanceReader",
]
