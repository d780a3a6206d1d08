"""
Chain definitions for the bridge network

One canonical settlement chain (Ethereum mainnet) holds the stable liquidity
pool whose LP token is nUSD; every other chain is peripheral and holds swap
pools around the bridge assets.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Tuple, Union

from ..errors import ConfigurationError


class ChainId:
    """Numeric chain identifiers of supported networks"""
    ETH = 1
    OPTIMISM = 10
    BSC = 56
    POLYGON = 137
    FANTOM = 250
    BOBA = 288
    MOONBEAM = 1284
    MOONRIVER = 1285
    ARBITRUM = 42161
    AVALANCHE = 43114
    HARMONY = 1666600000


class ChainRole(Enum):
    """Role of a chain in the bridge topology"""
    CANONICAL = "canonical"
    PERIPHERAL = "peripheral"


@dataclass(frozen=True)
class Chain:
    """
    Bridge network information

    Attributes:
        chain_id: EVM chain ID
        name: Display name
        chain_currency: Symbol of the gas token
        role: Canonical or peripheral
        names: Lowercase aliases accepted by Chain.from_value()
    """
    chain_id: int
    name: str
    chain_currency: str
    role: ChainRole = ChainRole.PERIPHERAL
    names: Tuple[str, ...] = field(default_factory=tuple)

    def __str__(self) -> str:
        return self.name

    def __int__(self) -> int:
        return self.chain_id

    @property
    def is_canonical(self) -> bool:
        return self.role == ChainRole.CANONICAL

    @property
    def uses_eth_for_gas(self) -> bool:
        return self.chain_id in ETH_NATIVE_CHAINS

    @classmethod
    def from_value(cls, value: Union["Chain", int, str]) -> "Chain":
        """
        Resolve a chain from a Chain, a chain ID or a name alias

        Raises:
            ConfigurationError: If the chain is not supported
        """
        if isinstance(value, Chain):
            return value

        if isinstance(value, int):
            chain = NETWORKS.get(value)
            if chain is None:
                raise ConfigurationError.invalid("chain", f"unsupported chain ID {value}")
            return chain

        key = str(value).strip().lower()
        if key.isdigit():
            return cls.from_value(int(key))

        for chain in NETWORKS.values():
            if key == chain.name.lower() or key in chain.names:
                return chain

        raise ConfigurationError.invalid("chain", f"unknown chain name '{value}'")


# =============================================================================
# Network registry
# =============================================================================

NETWORKS: Dict[int, Chain] = {
    ChainId.ETH: Chain(ChainId.ETH, "Ethereum Mainnet", "ETH", ChainRole.CANONICAL, ("eth", "mainnet")),
    ChainId.OPTIMISM: Chain(ChainId.OPTIMISM, "Optimism", "ETH", names=("optimism", "op")),
    ChainId.BSC: Chain(ChainId.BSC, "Binance Smart Chain", "BNB", names=("smart chain", "bsc")),
    ChainId.POLYGON: Chain(ChainId.POLYGON, "Polygon", "MATIC", names=("poly", "matic")),
    ChainId.FANTOM: Chain(ChainId.FANTOM, "Fantom", "FTM", names=("ftm",)),
    ChainId.BOBA: Chain(ChainId.BOBA, "Boba Network", "ETH", names=("boba",)),
    ChainId.MOONBEAM: Chain(ChainId.MOONBEAM, "Moonbeam", "GLMR", names=("moonbeam", "glmr")),
    ChainId.MOONRIVER: Chain(ChainId.MOONRIVER, "Moonriver", "MOVR", names=("moonriver", "movr")),
    ChainId.ARBITRUM: Chain(ChainId.ARBITRUM, "Arbitrum", "ETH", names=("arbi", "arb")),
    ChainId.AVALANCHE: Chain(ChainId.AVALANCHE, "Avalanche C-Chain", "AVAX", names=("avalanche", "avax")),
    ChainId.HARMONY: Chain(ChainId.HARMONY, "Harmony", "ONE", names=("harmony", "one")),
}

CANONICAL_CHAIN_ID = ChainId.ETH

# Peripheral chains whose gas token is ETH
L2_ETH_CHAINS: FrozenSet[int] = frozenset({
    ChainId.OPTIMISM,
    ChainId.BOBA,
    ChainId.ARBITRUM,
})

ETH_NATIVE_CHAINS: FrozenSet[int] = frozenset({ChainId.ETH}) | L2_ETH_CHAINS


# =============================================================================
# Finality
# =============================================================================

UNKNOWN_CONFIRMATIONS = -1

REQUIRED_CONFIRMATIONS: Dict[int, int] = {
    ChainId.ETH: 7,
    ChainId.OPTIMISM: 1,
    ChainId.BSC: 14,
    ChainId.POLYGON: 128,
    ChainId.FANTOM: 5,
    ChainId.BOBA: 1,
    ChainId.MOONBEAM: 21,
    ChainId.MOONRIVER: 21,
    ChainId.ARBITRUM: 40,
    ChainId.AVALANCHE: 5,
    ChainId.HARMONY: 1,
}


def chain_id_of(chain: Union[Chain, int]) -> int:
    """Get the numeric chain ID of a Chain or int"""
    if isinstance(chain, Chain):
        return chain.chain_id
    return int(chain)


def get_required_confirmations(chain: Union[Chain, int]) -> int:
    """
    Number of block confirmations the bridge waits for on a chain

    Returns UNKNOWN_CONFIRMATIONS for chains not in the table.
    """
    return REQUIRED_CONFIRMATIONS.get(chain_id_of(chain), UNKNOWN_CONFIRMATIONS)


def is_canonical(chain: Union[Chain, int]) -> bool:
    return chain_id_of(chain) == CANONICAL_CHAIN_ID


def supported_chain_ids() -> Tuple[int, ...]:
    return tuple(NETWORKS.keys())
