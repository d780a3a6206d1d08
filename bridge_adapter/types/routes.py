"""
Route request and direct-route type definitions
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Iterator, Optional, Tuple

from .chains import Chain, ChainId, ChainRole, chain_id_of
from .tokens import ChainLike, Token, Tokens


@dataclass(frozen=True)
class BridgeRouteRequest:
    """
    A single bridge request from the bound source chain

    Attributes:
        token_from: Token sent on the source chain
        token_to: Token received on the destination chain
        chain_to: Destination chain ID
        amount_from: Raw amount of token_from (smallest units)
        amount_to: Expected raw amount of token_to (from estimate_output)
        address_to: Recipient on the destination chain (required to build)
    """
    token_from: Token
    token_to: Token
    chain_to: int
    amount_from: int = 0
    amount_to: Optional[int] = None
    address_to: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.chain_to, Chain):
            object.__setattr__(self, "chain_to", self.chain_to.chain_id)
        if self.amount_from < 0:
            raise ValueError(f"amount_from must be >= 0, got {self.amount_from}")
        if self.amount_to is not None and self.amount_to < 0:
            raise ValueError(f"amount_to must be >= 0, got {self.amount_to}")

    def with_amount_to(self, amount_to: int) -> "BridgeRouteRequest":
        return BridgeRouteRequest(
            token_from=self.token_from,
            token_to=self.token_to,
            chain_to=self.chain_to,
            amount_from=self.amount_from,
            amount_to=amount_to,
            address_to=self.address_to,
        )

    def __str__(self) -> str:
        return f"{self.amount_from} {self.token_from} -> {self.token_to}@{self.chain_to}"


@dataclass(frozen=True)
class RouteSupport:
    """
    Route eligibility verdict

    Unpacks as a (supported, reason) tuple:
        supported, reason = checker.check(...)
    """
    supported: bool
    reason: str = ""

    def __iter__(self) -> Iterator:
        return iter((self.supported, self.reason))

    def __bool__(self) -> bool:
        return self.supported

    @classmethod
    def ok(cls) -> "RouteSupport":
        return cls(True, "")

    @classmethod
    def rejected(cls, reason: str) -> "RouteSupport":
        return cls(False, reason)


# =============================================================================
# Direct ("easy") routes
# =============================================================================

@dataclass(frozen=True)
class DirectRouteSets:
    """
    Destination tokens reachable without any pool swap, for one origin chain

    Attributes:
        deposit: Token ids bridged with a plain deposit
        redeem: Token ids bridged with a plain redeem
        deposit_native: Token ids bridged with a native-value deposit
    """
    deposit: FrozenSet[str] = field(default_factory=frozenset)
    redeem: FrozenSet[str] = field(default_factory=frozenset)
    deposit_native: FrozenSet[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class DepositIfChain:
    """
    Mint/burn tokens deposited on their home chain and redeemed elsewhere

    With alt_chain_id set, redeem is only available from that chain.
    """
    chain_id: int
    tokens: Tuple[Token, ...]
    deposit_native: bool = False
    alt_chain_id: Optional[int] = None


DEPOSIT_IF_CHAIN_TOKENS: Tuple[DepositIfChain, ...] = (
    DepositIfChain(ChainId.FANTOM, (Tokens.JUMP,)),
    DepositIfChain(ChainId.POLYGON, (Tokens.NFD,)),
    DepositIfChain(ChainId.MOONRIVER, (Tokens.SOLAR,)),
    DepositIfChain(ChainId.AVALANCHE, (Tokens.WAVAX,), deposit_native=True, alt_chain_id=ChainId.MOONBEAM),
    DepositIfChain(ChainId.MOONRIVER, (Tokens.WMOVR,), deposit_native=True, alt_chain_id=ChainId.MOONBEAM),
)

CANONICAL_DIRECT_ROUTES = DirectRouteSets(
    deposit=frozenset({Tokens.HIGH.id, Tokens.DOG.id, Tokens.FRAX.id}),
    redeem=frozenset({Tokens.SYN.id}),
    deposit_native=frozenset({Tokens.NETH.id}),
)

PERIPHERAL_DIRECT_ROUTES = DirectRouteSets(
    redeem=frozenset({Tokens.SYN.id, Tokens.HIGH.id, Tokens.DOG.id, Tokens.FRAX.id}),
)


def build_direct_routes(
    chain: ChainLike,
    role: ChainRole,
    overrides: Tuple[DepositIfChain, ...] = DEPOSIT_IF_CHAIN_TOKENS,
) -> DirectRouteSets:
    """Merge the role's base sets with the per-chain override table"""
    chain_id = chain_id_of(chain)
    if role == ChainRole.CANONICAL:
        return CANONICAL_DIRECT_ROUTES

    deposit = set(PERIPHERAL_DIRECT_ROUTES.deposit)
    redeem = set(PERIPHERAL_DIRECT_ROUTES.redeem)
    deposit_native = set(PERIPHERAL_DIRECT_ROUTES.deposit_native)

    for entry in overrides:
        ids = {t.id for t in entry.tokens}
        if entry.chain_id == chain_id:
            if entry.deposit_native:
                deposit_native |= ids
            else:
                deposit |= ids
        elif entry.alt_chain_id is None or entry.alt_chain_id == chain_id:
            redeem |= ids

    return DirectRouteSets(
        deposit=frozenset(deposit),
        redeem=frozenset(redeem),
        deposit_native=frozenset(deposit_native),
    )


# Bridge assets routed directly when sent as themselves
SELF_ROUTE_TOKENS: FrozenSet[str] = frozenset({Tokens.NUSD.id, Tokens.NETH.id})


class DirectRouteKind:
    DEPOSIT = "deposit"
    REDEEM = "redeem"
    DEPOSIT_NATIVE = "deposit_native"


class DirectRouteTable:
    """
    Direct-route membership for one origin chain, computed once

    Lookup order matches the zap contract preference: redeem, deposit,
    then native deposit.
    """

    def __init__(self, chain: ChainLike, role: ChainRole, sets: Optional[DirectRouteSets] = None):
        self.chain_id = chain_id_of(chain)
        self.role = role
        self.sets = sets if sets is not None else build_direct_routes(chain, role)

    def lookup(self, token_from: Token, token_to: Token) -> Optional[str]:
        """Return the DirectRouteKind for a pair, None for composite routes"""
        if token_to.id in self.sets.redeem:
            return DirectRouteKind.REDEEM
        if token_to.id in self.sets.deposit:
            return DirectRouteKind.DEPOSIT
        if token_to.id in self.sets.deposit_native:
            return DirectRouteKind.DEPOSIT_NATIVE

        # nUSD -> nUSD and nETH -> nETH need no swap on either side
        if token_from == token_to and token_to.id in SELF_ROUTE_TOKENS:
            if self.role == ChainRole.CANONICAL:
                return DirectRouteKind.DEPOSIT
            return DirectRouteKind.REDEEM
        return None
