"""
Route eligibility checks

Decides whether a (token_from, token_to, chain_from, chain_to) combination
is a supported bridge route. Never touches the network, so it always runs
before the estimator or the shape selector issue any call.
"""

import logging
from typing import Iterable, Optional, Union

from ..protocols.synapse.api import SYNAPSE_SUPPORTED_CHAINS
from ..types.chains import Chain, NETWORKS, chain_id_of
from ..types.pools import intermediate_token
from ..types.routes import RouteSupport
from ..types.tokens import Token, TokenRegistry
from .classifier import TokenCategory, classify, normalize_pair
from .pool_index import PoolIndexResolver

logger = logging.getLogger(__name__)


class RouteEligibilityChecker:
    """
    Ordered eligibility rules; the first failing rule gives the reason

    Usage:
        checker = RouteEligibilityChecker()
        supported, reason = checker.check(Tokens.USDC, Tokens.USDT, 1, 56)
    """

    def __init__(
        self,
        registry: Optional[TokenRegistry] = None,
        resolver: Optional[PoolIndexResolver] = None,
        deployed_chains: Optional[Iterable[int]] = None,
    ):
        self.registry = registry or TokenRegistry()
        self.resolver = resolver or PoolIndexResolver()
        self.deployed_chains = frozenset(
            deployed_chains if deployed_chains is not None else SYNAPSE_SUPPORTED_CHAINS
        )

    def check(
        self,
        token_from: Token,
        token_to: Token,
        chain_from: Union[Chain, int],
        chain_to: Union[Chain, int],
    ) -> RouteSupport:
        chain_from_id = chain_id_of(chain_from)
        chain_to_id = chain_id_of(chain_to)

        if chain_from_id == chain_to_id:
            return RouteSupport.rejected("Source and destination chains must differ")

        for chain_id in (chain_from_id, chain_to_id):
            if chain_id not in NETWORKS:
                return RouteSupport.rejected(f"Chain {chain_id} is not supported")
            if chain_id not in self.deployed_chains:
                return RouteSupport.rejected(f"No bridge deployment on chain {chain_id}")

        if not self.registry.supports(chain_from_id, token_from):
            return RouteSupport.rejected(
                f"Token {token_from.symbol} not supported on source chain {chain_from_id}"
            )
        if not self.registry.supports(chain_to_id, token_to):
            return RouteSupport.rejected(
                f"Token {token_to.symbol} not supported on destination chain {chain_to_id}"
            )

        norm_from, norm_to = normalize_pair(token_from, token_to)

        for token in (norm_from, norm_to):
            if classify(token) == TokenCategory.UNKNOWN:
                return RouteSupport.rejected(f"Token {token.symbol} cannot be bridged")

        if norm_from.swap_type != norm_to.swap_type:
            return RouteSupport.rejected(
                f"Swap type mismatch: {token_from.symbol} ({norm_from.swap_type.value}) "
                f"cannot bridge to {token_to.symbol} ({norm_to.swap_type.value})"
            )

        bridge_asset = intermediate_token(chain_to_id, norm_from)
        for token, chain_id in ((norm_from, chain_from_id), (norm_to, chain_to_id)):
            if token.is_mint_burn or token == bridge_asset:
                continue
            if not self.resolver.contains(chain_id, token.swap_type, token):
                return RouteSupport.rejected(
                    f"Token {token.symbol} has no {token.swap_type.value} pool on chain {chain_id}"
                )

        return RouteSupport.ok()
