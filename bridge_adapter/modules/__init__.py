"""
Route engine modules used by BridgeClient

- classifier: token categories and normalization
- pool_index: pool positions and route resolution
- eligibility: supported-route checks
- slippage: minimum outputs and deadlines
- estimator: fee and output estimation
- shapes: bridge call selection
- preflight: balance and allowance checks
"""

from .classifier import TokenCategory, classify, normalize, normalize_pair, resolve_to_underlying, is_eth_like
from .pool_index import PoolIndexResolver, PoolIndices, PoolPosition, ResolvedRoute
from .eligibility import RouteEligibilityChecker
from .slippage import SlippageCalculator, SlippageQuote, SlippageTier, TierThresholds
from .estimator import OutputEstimator
from .shapes import TransactionShapeSelector, SHAPE_RULES, ShapeRule
from .preflight import PreflightChecker

__all__ = [
    # Classification
    "TokenCategory",
    "classify",
    "normalize",
    "normalize_pair",
    "resolve_to_underlying",
    "is_eth_like",
    # Pool indices
    "PoolIndexResolver",
    "PoolIndices",
    "PoolPosition",
    "ResolvedRoute",
    # Eligibility
    "RouteEligibilityChecker",
    # Slippage
    "SlippageCalculator",
    "SlippageQuote",
    "SlippageTier",
    "TierThresholds",
    # Estimation and selection
    "OutputEstimator",
    "TransactionShapeSelector",
    "SHAPE_RULES",
    "ShapeRule",
    # Pre-flight
    "PreflightChecker",
]
