"""
Pool index resolution

Finds a token's position in its chain's pool for a swap family, and
resolves a request into the normalized route the estimator and shape
selector work from.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from ..errors import PoolIndexNotFound
from ..types.chains import Chain, ChainRole, chain_id_of
from ..types.pools import PoolTokenList, PoolTokenListProvider, intermediate_token
from ..types.routes import BridgeRouteRequest
from ..types.tokens import ChainLike, SwapType, Token
from .classifier import TokenCategory, classify, normalize_pair, resolve_to_underlying

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PoolPosition:
    """A token's pool and its index within it"""
    pool_tokens: PoolTokenList
    index: int

    def liquidity_amounts(self, amount: int) -> List[int]:
        """Single-sided amounts: amount at this index, zero elsewhere"""
        return [amount if i == self.index else 0 for i in range(len(self.pool_tokens))]


class PoolIndexResolver:
    """
    Resolve pool token indices, matching on underlying identity

    Both the pool entries and the target are peeled with
    resolve_to_underlying, so AVWETH and WETH.e land on the same index.
    """

    def __init__(self, pools: Optional[PoolTokenListProvider] = None):
        self.pools = pools or PoolTokenListProvider()

    def lookup(self, chain: ChainLike, swap_type: SwapType, token: Token) -> PoolPosition:
        """Same as index_of without logging; used for speculative lookups"""
        chain_id = chain_id_of(chain)
        pool = self.pools.list_for(chain_id, swap_type)
        if pool is None:
            raise PoolIndexNotFound.no_pool(chain_id, swap_type.value, token.symbol)

        target = resolve_to_underlying(token)
        for index, entry in enumerate(pool.tokens):
            if resolve_to_underlying(entry) == target:
                return PoolPosition(pool, index)

        raise PoolIndexNotFound.not_in_pool(chain_id, swap_type.value, token.symbol)

    def index_of(self, chain: ChainLike, swap_type: SwapType, token: Token) -> PoolPosition:
        """
        Get the pool token list and the token's index in it

        Raises:
            PoolIndexNotFound: No pool for (chain, swap_type) or token not in it
        """
        try:
            return self.lookup(chain, swap_type, token)
        except PoolIndexNotFound as e:
            logger.error(f"Pool registry inconsistency: {e.message}")
            raise

    def contains(self, chain: ChainLike, swap_type: SwapType, token: Token) -> bool:
        try:
            self.lookup(chain, swap_type, token)
        except PoolIndexNotFound:
            return False
        return True

    def resolve_route(
        self,
        request: BridgeRouteRequest,
        chain_from: Chain,
        chain_to: Chain,
    ) -> "ResolvedRoute":
        """Normalize a request's tokens and look up both pool positions"""
        token_from, token_to = normalize_pair(request.token_from, request.token_to)

        origin = _capture(self, chain_from, token_from)
        destination = _capture(self, chain_to, token_to)

        return ResolvedRoute(
            chain_from=chain_from,
            chain_to=chain_to,
            token_from=token_from,
            token_to=token_to,
            category_from=classify(token_from),
            category_to=classify(token_to),
            intermediate=intermediate_token(chain_to, token_from),
            indices=PoolIndices(origin, destination),
        )


_Lookup = Union[PoolPosition, PoolIndexNotFound]


def _capture(resolver: PoolIndexResolver, chain: Chain, token: Token) -> _Lookup:
    try:
        return resolver.lookup(chain, token.swap_type, token)
    except PoolIndexNotFound as e:
        return e


class PoolIndices:
    """
    Origin and destination pool positions for one route

    Lookups run up front; a failed side keeps its PoolIndexNotFound and
    raises it only when accessed, so routes that never touch a pool (direct
    deposit/redeem) never fail on a missing index.
    """

    def __init__(self, origin: _Lookup, destination: _Lookup):
        self._origin = origin
        self._destination = destination

    @staticmethod
    def _get(side: str, value: _Lookup) -> PoolPosition:
        if isinstance(value, PoolIndexNotFound):
            logger.error(f"Pool registry inconsistency ({side}): {value.message}")
            raise value
        return value

    @property
    def origin(self) -> PoolPosition:
        return self._get("origin", self._origin)

    @property
    def destination(self) -> PoolPosition:
        return self._get("destination", self._destination)

    @property
    def index_from(self) -> int:
        return self.origin.index

    @property
    def index_to(self) -> int:
        return self.destination.index

    @property
    def has_origin(self) -> bool:
        return isinstance(self._origin, PoolPosition)

    @property
    def has_destination(self) -> bool:
        return isinstance(self._destination, PoolPosition)

    def __eq__(self, other) -> bool:
        if not isinstance(other, PoolIndices):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def _key(self) -> Tuple:
        def k(v: _Lookup):
            return ("err", v.message) if isinstance(v, PoolIndexNotFound) else ("ok", v)
        return k(self._origin), k(self._destination)


@dataclass(frozen=True)
class ResolvedRoute:
    """
    A request after normalization, classification and index lookup

    Attributes:
        chain_from: Origin chain
        chain_to: Destination chain
        token_from: Normalized origin token (naked gas token -> wrapped)
        token_to: Normalized destination token
        category_from: Category of token_from
        category_to: Category of token_to
        intermediate: Token carrying value across the bridge
        indices: Lazily checked pool positions
    """
    chain_from: Chain
    chain_to: Chain
    token_from: Token
    token_to: Token
    category_from: TokenCategory
    category_to: TokenCategory
    intermediate: Token
    indices: PoolIndices

    @property
    def origin_canonical(self) -> bool:
        return self.chain_from.role == ChainRole.CANONICAL

    @property
    def destination_canonical(self) -> bool:
        return self.chain_to.role == ChainRole.CANONICAL
