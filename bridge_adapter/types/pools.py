"""
Bridge pool token lists

Ordered pool token lists keyed by (chain, swap type). Positions in these
lists are the token indices passed to the zap contracts, so the order must
match the deployed pools and never change at runtime. On peripheral chains
the bridge asset (nUSD / nETH) sits at index 0.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple

from .chains import ChainId, chain_id_of
from .tokens import ChainLike, SwapType, Token, Tokens


@dataclass(frozen=True)
class PoolTokenList:
    """
    Ordered tokens of one pool

    Attributes:
        chain_id: Chain the pool lives on
        swap_type: Pool family
        tokens: Pool tokens in on-chain index order
    """
    chain_id: int
    swap_type: SwapType
    tokens: Tuple[Token, ...]

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self):
        return iter(self.tokens)

    def __getitem__(self, index: int) -> Token:
        return self.tokens[index]

    def __str__(self) -> str:
        symbols = ", ".join(t.symbol for t in self.tokens)
        return f"{self.swap_type.value}@{self.chain_id}[{symbols}]"


def _pool(chain_id: int, swap_type: SwapType, *tokens: Token) -> PoolTokenList:
    return PoolTokenList(chain_id, swap_type, tuple(tokens))


# =============================================================================
# Pool registry
# =============================================================================

_STABLE_POOLS = [
    # Canonical chain: the nUSD liquidity pool (nUSD is its LP token)
    _pool(ChainId.ETH, SwapType.USD, Tokens.DAI, Tokens.USDC, Tokens.USDT),
    _pool(ChainId.BSC, SwapType.USD, Tokens.NUSD, Tokens.BUSD, Tokens.USDC, Tokens.USDT),
    _pool(ChainId.POLYGON, SwapType.USD, Tokens.NUSD, Tokens.DAI, Tokens.USDC, Tokens.USDT),
    _pool(ChainId.AVALANCHE, SwapType.USD, Tokens.NUSD, Tokens.DAI, Tokens.USDC, Tokens.USDT),
    _pool(ChainId.ARBITRUM, SwapType.USD, Tokens.NUSD, Tokens.USDC, Tokens.USDT),
    _pool(ChainId.FANTOM, SwapType.USD, Tokens.NUSD, Tokens.USDC),
    _pool(ChainId.HARMONY, SwapType.USD, Tokens.NUSD, Tokens.DAI, Tokens.USDC, Tokens.USDT),
    _pool(ChainId.BOBA, SwapType.USD, Tokens.NUSD, Tokens.DAI, Tokens.USDC, Tokens.USDT),
    _pool(ChainId.OPTIMISM, SwapType.USD, Tokens.NUSD, Tokens.USDC),
]

_ETH_POOLS = [
    _pool(ChainId.ETH, SwapType.ETH, Tokens.WETH),
    _pool(ChainId.AVALANCHE, SwapType.ETH, Tokens.NETH, Tokens.AVWETH),
    _pool(ChainId.ARBITRUM, SwapType.ETH, Tokens.NETH, Tokens.WETH),
    _pool(ChainId.FANTOM, SwapType.ETH, Tokens.NETH, Tokens.FTM_ETH),
    _pool(ChainId.HARMONY, SwapType.ETH, Tokens.NETH, Tokens.ONE_ETH),
    _pool(ChainId.BOBA, SwapType.ETH, Tokens.NETH, Tokens.WETH),
    _pool(ChainId.OPTIMISM, SwapType.ETH, Tokens.NETH, Tokens.WETH),
]

_GAS_POOLS = [
    _pool(ChainId.AVALANCHE, SwapType.AVAX, Tokens.WAVAX),
    _pool(ChainId.MOONBEAM, SwapType.AVAX, Tokens.WAVAX),
    _pool(ChainId.MOONRIVER, SwapType.MOVR, Tokens.WMOVR),
    _pool(ChainId.MOONBEAM, SwapType.MOVR, Tokens.WMOVR),
]

_MINT_BURN_TOKENS = (
    Tokens.SYN, Tokens.HIGH, Tokens.DOG, Tokens.FRAX,
    Tokens.GMX, Tokens.NFD, Tokens.JUMP, Tokens.SOLAR,
)


def _single_token_pools() -> list:
    pools = []
    for token in _MINT_BURN_TOKENS:
        for chain_id in sorted(token.addresses):
            pools.append(_pool(chain_id, token.swap_type, token))
    return pools


DEFAULT_POOLS: Tuple[PoolTokenList, ...] = tuple(
    _STABLE_POOLS + _ETH_POOLS + _GAS_POOLS + _single_token_pools()
)


class PoolTokenListProvider:
    """Pool token lists indexed by (chain ID, swap type)"""

    def __init__(self, pools: Optional[Iterable[PoolTokenList]] = None):
        self._pools: Dict[Tuple[int, SwapType], PoolTokenList] = {}
        for pool in pools if pools is not None else DEFAULT_POOLS:
            self._pools[(pool.chain_id, pool.swap_type)] = pool

    def list_for(self, chain: ChainLike, swap_type: SwapType) -> Optional[PoolTokenList]:
        return self._pools.get((chain_id_of(chain), swap_type))


# =============================================================================
# Bridge assets
# =============================================================================

def _family_of(token: Token) -> Token:
    # Wrapped tokens bridge through their underlying asset's family
    while token.is_wrapped_token and token.underlying_token is not None:
        token = token.underlying_token
    return token


def intermediate_token(chain_to: ChainLike, token_from: Token) -> Token:
    """
    Token that carries value across the bridge for token_from's family

    Mint/burn tokens carry themselves; stables go through nUSD, the ETH
    family through nETH, AVAX and MOVR through their wrapped forms.
    """
    if token_from.is_mint_burn:
        return token_from

    token = _family_of(token_from)
    if token.is_mint_burn:
        return token

    if token.swap_type == SwapType.ETH:
        return Tokens.NETH
    if token.swap_type == SwapType.AVAX:
        return Tokens.WAVAX
    if token.swap_type == SwapType.MOVR:
        return Tokens.WMOVR
    return Tokens.NUSD


def fee_token(chain_to: ChainLike, token_from: Token) -> Token:
    """
    Token whose destination-chain address is passed to the fee oracle

    nETH is not deployed on the canonical chain; WETH stands in for it there.
    """
    token = intermediate_token(chain_to, token_from)
    if token == Tokens.NETH and chain_id_of(chain_to) == ChainId.ETH:
        return Tokens.WETH
    return token
