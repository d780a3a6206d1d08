"""
Token category classification

Maps tokens to the category that decides how they cross the bridge, and
normalizes naked gas tokens to the wrapped form the pools hold. Pure
functions; nothing here raises for unknown tokens.
"""

from enum import Enum
from typing import Dict, Tuple

from ..types.tokens import ETH_LIKE_TOKENS, SwapType, Token, Tokens


class TokenCategory(Enum):
    """How a token crosses the bridge"""
    NATIVE_GAS = "native_gas"   # gas token or an ERC20 representation of one
    MINT_BURN = "mint_burn"     # minted/burned 1:1, no pool math
    WRAPPED = "wrapped"         # 1:1 wrapper around an underlying token
    POOL = "pool"               # plain pool token (stables)
    UNKNOWN = "unknown"


GAS_FAMILIES = frozenset({SwapType.ETH, SwapType.AVAX, SwapType.MOVR})

# Naked gas token -> wrapped pool representation
NATIVE_WRAPPERS: Dict[str, Token] = {
    Tokens.ETH.id: Tokens.WETH,
    Tokens.AVAX.id: Tokens.WAVAX,
    Tokens.MOVR.id: Tokens.WMOVR,
}

_FAMILY_NATIVE: Dict[SwapType, Token] = {
    SwapType.ETH: Tokens.ETH,
    SwapType.AVAX: Tokens.AVAX,
    SwapType.MOVR: Tokens.MOVR,
}

# Chain-specific representations that share one pool identity
ALIASES: Dict[str, Token] = {
    Tokens.AVWETH.id: Tokens.WETH_E,
}

_ETH_LIKE_IDS = frozenset(t.id for t in ETH_LIKE_TOKENS)


def classify(token: Token) -> TokenCategory:
    if token.is_mint_burn:
        return TokenCategory.MINT_BURN
    if token.is_wrapped_token:
        return TokenCategory.WRAPPED
    if token.is_native or token.swap_type in GAS_FAMILIES:
        return TokenCategory.NATIVE_GAS
    if token.swap_type == SwapType.USD:
        return TokenCategory.POOL
    return TokenCategory.UNKNOWN


def normalize(token: Token) -> Token:
    """Rewrite a naked gas token (ETH, AVAX, MOVR) to its wrapped form"""
    return NATIVE_WRAPPERS.get(token.id, token)


def normalize_pair(token_from: Token, token_to: Token) -> Tuple[Token, Token]:
    """
    Normalize both tokens according to token_from's family

    Only the naked gas token of token_from's family is rewritten, on both
    sides; ETH -> AVAX family mismatches are left for eligibility to reject.
    """
    native = _FAMILY_NATIVE.get(token_from.swap_type)
    if native is None:
        return token_from, token_to

    wrapped = NATIVE_WRAPPERS[native.id]

    def swap(t: Token) -> Token:
        return wrapped if t == native else t

    return swap(token_from), swap(token_to)


def resolve_to_underlying(token: Token) -> Token:
    """
    Identity used for pool index matching

    Peels wrappers down to the underlying token and maps chain-specific
    aliases (AVWETH, WETH.e) onto one shared identity.
    """
    seen = set()
    while token.id not in seen:
        seen.add(token.id)
        if token.id in ALIASES:
            token = ALIASES[token.id]
        elif token.is_wrapped_token and token.underlying_token is not None:
            token = token.underlying_token
        else:
            break
    return token


def is_eth_like(token: Token) -> bool:
    """ERC20 ETH on a chain whose gas token is not ETH (WETH.e, FTM ETH, 1ETH)"""
    return token.id in _ETH_LIKE_IDS


def is_native_gas(token: Token) -> bool:
    """Gas-token family member, including wrapped representations of one"""
    return classify(resolve_to_underlying(token)) == TokenCategory.NATIVE_GAS
