"""
Transaction shape selection

Picks the single bridge call variant for a resolved route and lays out its
parameters in contract signature order.

Decision order (first match wins):
    1. destination address gate
    2. direct routes (per-chain deposit / redeem / native deposit sets)
    3. special assets with their own per-chain rules (GMX)
    4. composite routes by origin role, destination role and token category

Selection is pure: the same request, route and slippage quote always give
the same shape. Deadlines are computed by the caller.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from ..errors import ConfigurationError, EmptyDestinationAddress, RouteUnsupported
from ..types import (
    BridgeRouteRequest,
    Chain,
    ChainId,
    ContractKind,
    DirectRouteKind,
    DirectRouteTable,
    ShapeParam,
    ShapeTag,
    SwapType,
    Token,
    Tokens,
    TransactionShape,
)
from .classifier import is_eth_like, is_native_gas, resolve_to_underlying
from .pool_index import ResolvedRoute
from .slippage import SlippageQuote, SlippageTier

logger = logging.getLogger(__name__)


# =============================================================================
# Shape rules
# =============================================================================

@dataclass(frozen=True)
class ShapeRule:
    """
    Static facts about one call variant

    Attributes:
        contract: Contract the method lives on
        swap_legs: Pool swaps / liquidity operations the call performs
        origin_tier: Tier for the origin-leg minimum (None if no origin leg)
        dest_tier: Tier for the destination-leg minimum (None if none)
        dest_after_origin: Destination minimum compounds the origin slippage
        dest_bridge_deadline: Destination leg uses the long bridge deadline
        native_value: Call carries amount_from as native value
    """
    contract: ContractKind
    swap_legs: int
    origin_tier: Optional[SlippageTier] = None
    dest_tier: Optional[SlippageTier] = None
    dest_after_origin: bool = False
    dest_bridge_deadline: bool = False
    native_value: bool = False


_LOW = SlippageTier.LOW
_MEDIUM = SlippageTier.MEDIUM
_HIGH = SlippageTier.HIGH

# Tiers follow the Synapse SDK's bridge.ts rather than a per-leg-count rule:
# a canonical liquidity deposit (zapAndDeposit) takes LOW, and
# zapAndDepositAndSwap takes MEDIUM on both legs, not HIGH. HIGH is kept
# for shapes that swap on a peripheral origin chain.
SHAPE_RULES: Dict[ShapeTag, ShapeRule] = {
    # Direct
    ShapeTag.DEPOSIT: ShapeRule(ContractKind.ZAP, 0),
    ShapeTag.REDEEM: ShapeRule(ContractKind.ZAP, 0),
    ShapeTag.DEPOSIT_ETH: ShapeRule(ContractKind.ZAP, 0, native_value=True),
    ShapeTag.BRIDGE_REDEEM: ShapeRule(ContractKind.BRIDGE, 0),
    # Canonical origin
    ShapeTag.ZAP_AND_DEPOSIT: ShapeRule(ContractKind.ZAP, 1, dest_tier=_LOW),
    ShapeTag.ZAP_AND_DEPOSIT_AND_SWAP: ShapeRule(
        ContractKind.ZAP, 2, _MEDIUM, _MEDIUM, dest_after_origin=True, dest_bridge_deadline=True,
    ),
    ShapeTag.DEPOSIT_AND_SWAP: ShapeRule(ContractKind.ZAP, 1, dest_tier=_LOW, dest_bridge_deadline=True),
    ShapeTag.DEPOSIT_ETH_AND_SWAP: ShapeRule(
        ContractKind.ZAP, 1, dest_tier=_LOW, dest_after_origin=True, dest_bridge_deadline=True,
        native_value=True,
    ),
    # Peripheral origin
    ShapeTag.SWAP_AND_REDEEM: ShapeRule(ContractKind.ZAP, 1, origin_tier=_HIGH),
    ShapeTag.SWAP_ETH_AND_REDEEM: ShapeRule(ContractKind.ZAP, 1, origin_tier=_HIGH, native_value=True),
    ShapeTag.SWAP_AND_REDEEM_AND_SWAP: ShapeRule(
        ContractKind.ZAP, 2, _HIGH, _HIGH, dest_after_origin=True, dest_bridge_deadline=True,
    ),
    ShapeTag.SWAP_ETH_AND_REDEEM_AND_SWAP: ShapeRule(
        ContractKind.ZAP, 2, _HIGH, _HIGH, dest_after_origin=True, dest_bridge_deadline=True,
        native_value=True,
    ),
    ShapeTag.REDEEM_AND_SWAP: ShapeRule(ContractKind.ZAP, 1, dest_tier=_LOW),
    ShapeTag.REDEEM_AND_REMOVE: ShapeRule(ContractKind.ZAP, 1, dest_tier=_LOW),
    ShapeTag.SWAP_AND_REDEEM_AND_REMOVE: ShapeRule(
        ContractKind.ZAP, 2, _HIGH, _HIGH, dest_after_origin=True, dest_bridge_deadline=True,
    ),
}


# =============================================================================
# Parameter layouts (contract signature order)
# =============================================================================

# (param name, ABI type, input key)
_TO = ("to", "address", "address_to")
_CHAIN = ("chainId", "uint256", "chain_to")
_TOKEN = ("token", "address", "token")
_AMOUNT = ("amount", "uint256", "amount")

_SWAP_ORIGIN = (
    ("tokenIndexFrom", "uint8", "index_from"),
    ("tokenIndexTo", "uint8", "bridge_index"),
    ("dx", "uint256", "amount"),
    ("minDy", "uint256", "min_origin"),
    ("deadline", "uint256", "origin_deadline"),
)

_SWAP_DEST = (
    ("swapTokenIndexFrom", "uint8", "bridge_index"),
    ("swapTokenIndexTo", "uint8", "index_to"),
    ("swapMinDy", "uint256", "min_dest"),
    ("swapDeadline", "uint256", "dest_deadline"),
)

_DEST_SWAP = (
    ("tokenIndexFrom", "uint8", "bridge_index"),
    ("tokenIndexTo", "uint8", "index_to"),
    ("minDy", "uint256", "min_dest"),
    ("deadline", "uint256", "dest_deadline"),
)

_REMOVE = (
    ("liqTokenIndex", "uint8", "index_to"),
    ("liqMinAmount", "uint256", "min_dest"),
    ("liqDeadline", "uint256", "dest_deadline"),
)

PARAM_LAYOUTS: Dict[ShapeTag, Tuple[Tuple[str, str, str], ...]] = {
    ShapeTag.DEPOSIT: (_TO, _CHAIN, _TOKEN, _AMOUNT),
    ShapeTag.REDEEM: (_TO, _CHAIN, _TOKEN, _AMOUNT),
    ShapeTag.BRIDGE_REDEEM: (_TO, _CHAIN, _TOKEN, _AMOUNT),
    ShapeTag.DEPOSIT_ETH: (_TO, _CHAIN, _AMOUNT),
    ShapeTag.ZAP_AND_DEPOSIT: (
        _TO, _CHAIN, _TOKEN,
        ("liquidityAmounts", "uint256[]", "liquidity_amounts"),
        ("minToMint", "uint256", "min_dest"),
        ("deadline", "uint256", "dest_deadline"),
    ),
    ShapeTag.ZAP_AND_DEPOSIT_AND_SWAP: (
        _TO, _CHAIN, _TOKEN,
        ("liquidityAmounts", "uint256[]", "liquidity_amounts"),
        ("minToMint", "uint256", "min_origin"),
        ("liqDeadline", "uint256", "origin_deadline"),
    ) + _DEST_SWAP[:2] + (
        ("minDy", "uint256", "min_dest"),
        ("swapDeadline", "uint256", "dest_deadline"),
    ),
    ShapeTag.DEPOSIT_AND_SWAP: (_TO, _CHAIN, _TOKEN, _AMOUNT) + _DEST_SWAP,
    ShapeTag.DEPOSIT_ETH_AND_SWAP: (_TO, _CHAIN, _AMOUNT) + _DEST_SWAP,
    ShapeTag.SWAP_AND_REDEEM: (_TO, _CHAIN, _TOKEN) + _SWAP_ORIGIN,
    ShapeTag.SWAP_ETH_AND_REDEEM: (_TO, _CHAIN, _TOKEN) + _SWAP_ORIGIN,
    ShapeTag.SWAP_AND_REDEEM_AND_SWAP: (_TO, _CHAIN, _TOKEN) + _SWAP_ORIGIN + _SWAP_DEST,
    ShapeTag.SWAP_ETH_AND_REDEEM_AND_SWAP: (_TO, _CHAIN, _TOKEN) + _SWAP_ORIGIN + _SWAP_DEST,
    ShapeTag.REDEEM_AND_SWAP: (_TO, _CHAIN, _TOKEN, _AMOUNT) + _DEST_SWAP,
    ShapeTag.REDEEM_AND_REMOVE: (_TO, _CHAIN, _TOKEN, _AMOUNT) + _REMOVE,
    ShapeTag.SWAP_AND_REDEEM_AND_REMOVE: (_TO, _CHAIN, _TOKEN) + _SWAP_ORIGIN + _REMOVE,
}


# =============================================================================
# Special assets
# =============================================================================

@dataclass(frozen=True)
class SpecialAssetRule:
    """
    Asset bridged 1:1 with its own per-chain call

    From home_chain_id the zap deposits the token; from anywhere else the
    bridge contract redeems the chain's wrapper token.
    """
    token: Token
    home_chain_id: int


SPECIAL_ASSETS: Dict[str, SpecialAssetRule] = {
    Tokens.GMX.id: SpecialAssetRule(Tokens.GMX, ChainId.ARBITRUM),
}


# =============================================================================
# Inputs
# =============================================================================

class _ShapeInputs:
    """
    Values a layout can reference, computed on first access

    Pool indices are only read when a layout needs them, so a missing index
    never fails a shape that does not use it.
    """

    bridge_index = 0

    def __init__(
        self,
        request: BridgeRouteRequest,
        route: ResolvedRoute,
        slippage: Optional[SlippageQuote],
        rule: ShapeRule,
        token: Optional[str],
    ):
        self._request = request
        self._route = route
        self._slippage = slippage
        self._rule = rule
        self.token = token

    def __getitem__(self, key: str) -> Any:
        return getattr(self, key)

    @property
    def address_to(self) -> str:
        return self._request.address_to

    @property
    def chain_to(self) -> int:
        return self._request.chain_to

    @property
    def amount(self) -> int:
        return self._request.amount_from

    @property
    def index_from(self) -> int:
        return self._route.indices.index_from

    @property
    def index_to(self) -> int:
        return self._route.indices.index_to

    @property
    def liquidity_amounts(self):
        return self._route.indices.origin.liquidity_amounts(self._request.amount_from)

    def _quote(self) -> SlippageQuote:
        if self._slippage is None:
            raise ConfigurationError.missing("slippage quote for a composite route")
        return self._slippage

    @property
    def min_origin(self) -> int:
        return self._quote().tier(self._rule.origin_tier).min_origin

    @property
    def min_dest(self) -> int:
        thresholds = self._quote().tier(self._rule.dest_tier)
        if self._rule.dest_after_origin:
            return thresholds.min_dest_from_origin
        return thresholds.min_dest

    @property
    def origin_deadline(self) -> int:
        return self._quote().origin_deadline

    @property
    def dest_deadline(self) -> int:
        quote = self._quote()
        return quote.bridge_deadline if self._rule.dest_bridge_deadline else quote.origin_deadline


# =============================================================================
# Selector
# =============================================================================

class TransactionShapeSelector:
    """
    Select the bridge call for a route from one origin chain

    Usage:
        selector = TransactionShapeSelector(chain, DirectRouteTable(chain.chain_id, chain.role))
        shape = selector.select(request, route, slippage)
    """

    def __init__(self, chain: Chain, direct_routes: DirectRouteTable):
        self.chain = chain
        self.direct_routes = direct_routes

    def select(
        self,
        request: BridgeRouteRequest,
        route: ResolvedRoute,
        slippage: Optional[SlippageQuote],
    ) -> TransactionShape:
        """
        Select the shape and its ordered parameters

        Raises:
            EmptyDestinationAddress: address_to missing or blank
            RouteUnsupported: No shape exists for the route
            PoolIndexNotFound: A needed pool index is missing from the registry
        """
        if not request.address_to or not request.address_to.strip():
            raise EmptyDestinationAddress()

        shape = (
            self._select_direct(request, route)
            or self._select_special(request, route)
            or self._select_composite(request, route, slippage)
        )
        logger.debug(f"Selected {shape.tag.name} for {request}")
        return shape

    # -------------------------------------------------------------------------

    def _origin_address(self, token: Token) -> str:
        address = token.address(self.chain)
        if address is None:
            raise ConfigurationError.invalid(
                "token", f"{token.symbol} has no address on chain {self.chain.chain_id}"
            )
        return address

    def _make(
        self,
        tag: ShapeTag,
        request: BridgeRouteRequest,
        route: ResolvedRoute,
        slippage: Optional[SlippageQuote] = None,
        token: Optional[str] = None,
    ) -> TransactionShape:
        rule = SHAPE_RULES[tag]
        inputs = _ShapeInputs(request, route, slippage, rule, token)
        params = tuple(
            ShapeParam(name, abi_type, inputs[key])
            for name, abi_type, key in PARAM_LAYOUTS[tag]
        )
        return TransactionShape(
            tag=tag,
            contract=rule.contract,
            params=params,
            native_value=request.amount_from if rule.native_value else None,
        )

    def _select_direct(self, request: BridgeRouteRequest, route: ResolvedRoute) -> Optional[TransactionShape]:
        kind = self.direct_routes.lookup(route.token_from, route.token_to)
        if kind is None:
            return None

        if kind == DirectRouteKind.DEPOSIT_NATIVE:
            return self._make(ShapeTag.DEPOSIT_ETH, request, route)

        tag = ShapeTag.REDEEM if kind == DirectRouteKind.REDEEM else ShapeTag.DEPOSIT
        return self._make(tag, request, route, token=self._origin_address(route.token_to))

    def _select_special(self, request: BridgeRouteRequest, route: ResolvedRoute) -> Optional[TransactionShape]:
        rule = SPECIAL_ASSETS.get(route.token_to.id)
        if rule is None:
            return None

        if self.chain.chain_id == rule.home_chain_id:
            return self._make(ShapeTag.DEPOSIT, request, route, token=self._origin_address(rule.token))

        wrapper = rule.token.wrapper_address(self.chain)
        if wrapper is None:
            raise ConfigurationError.invalid(
                "wrapper", f"{rule.token.symbol} has no wrapper on chain {self.chain.chain_id}"
            )
        return self._make(ShapeTag.BRIDGE_REDEEM, request, route, token=wrapper)

    def _select_composite(
        self,
        request: BridgeRouteRequest,
        route: ResolvedRoute,
        slippage: Optional[SlippageQuote],
    ) -> TransactionShape:
        if route.token_from.is_mint_burn or route.token_to.is_mint_burn:
            raise RouteUnsupported.for_route(
                "no direct route for mint/burn token from this chain",
                request.token_from.symbol,
                request.token_to.symbol,
                self.chain.chain_id,
                request.chain_to,
            )

        if route.origin_canonical:
            tag, bridge_token = self._canonical_origin(route)
        else:
            tag, bridge_token = self._peripheral_origin(route)

        token = self._origin_address(bridge_token) if bridge_token is not None else None
        return self._make(tag, request, route, slippage, token)

    @staticmethod
    def _canonical_origin(route: ResolvedRoute) -> Tuple[ShapeTag, Optional[Token]]:
        token_from, token_to = route.token_from, route.token_to

        if token_to == Tokens.NUSD:
            return ShapeTag.ZAP_AND_DEPOSIT, Tokens.NUSD
        if is_eth_like(token_to) or token_to == Tokens.WETH:
            return ShapeTag.DEPOSIT_ETH_AND_SWAP, None
        if token_from == Tokens.NUSD:
            return ShapeTag.DEPOSIT_AND_SWAP, Tokens.NUSD
        return ShapeTag.ZAP_AND_DEPOSIT_AND_SWAP, Tokens.NUSD

    @staticmethod
    def _peripheral_origin(route: ResolvedRoute) -> Tuple[ShapeTag, Optional[Token]]:
        token_from, token_to = route.token_from, route.token_to
        eth_family = token_from.swap_type == SwapType.ETH and is_native_gas(token_from)
        eth_like = is_eth_like(resolve_to_underlying(token_from))

        if token_to == Tokens.NUSD:
            return ShapeTag.SWAP_AND_REDEEM, Tokens.NUSD

        if route.destination_canonical:
            if eth_family:
                if token_from == Tokens.NETH:
                    return ShapeTag.REDEEM, Tokens.NETH
                if eth_like:
                    return ShapeTag.SWAP_AND_REDEEM, Tokens.NETH
                return ShapeTag.SWAP_ETH_AND_REDEEM, Tokens.NETH
            if token_from == Tokens.NUSD:
                return ShapeTag.REDEEM_AND_REMOVE, Tokens.NUSD
            return ShapeTag.SWAP_AND_REDEEM_AND_REMOVE, Tokens.NUSD

        if token_from == Tokens.NUSD:
            return ShapeTag.REDEEM_AND_SWAP, Tokens.NUSD
        if token_from == Tokens.NETH:
            return ShapeTag.REDEEM_AND_SWAP, Tokens.NETH
        if eth_family:
            if eth_like:
                return ShapeTag.SWAP_AND_REDEEM_AND_SWAP, Tokens.NETH
            return ShapeTag.SWAP_ETH_AND_REDEEM_AND_SWAP, Tokens.NETH
        return ShapeTag.SWAP_AND_REDEEM_AND_SWAP, Tokens.NUSD
