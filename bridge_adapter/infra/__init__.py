"""
Infrastructure layer for Bridge Adapter

Provides:
- create_web3 / Web3Pool: read-only web3.py connections per chain
- call_with_retry: retry with linear backoff and cancellation for reads
- CorrelationContext: correlation IDs for log tracing
"""

from .evm import create_web3, Web3Pool, POA_CHAINS
from .retry import (
    call_with_retry,
    classify_error,
    check_cancelled,
    CorrelationContext,
    generate_correlation_id,
    get_correlation_id,
    set_correlation_id,
)

__all__ = [
    # EVM infrastructure
    "create_web3",
    "Web3Pool",
    "POA_CHAINS",
    # Retry
    "call_with_retry",
    "classify_error",
    "check_cancelled",
    "CorrelationContext",
    "generate_correlation_id",
    "get_correlation_id",
    "set_correlation_id",
]
