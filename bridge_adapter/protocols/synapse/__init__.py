"""
Synapse bridge contracts

- api: contract addresses per chain
- adapter: fee oracle, pool math and balance reads via web3.py
- encoder: zap/bridge calldata via eth_abi
"""

from .adapter import SynapseFeeOracle, L1LiquidityMath, L2SwapMath, Erc20BalanceReader
from .encoder import SynapseCallEncoder, function_selector
from .api import (
    SYNAPSE_BRIDGE_ADDRESSES,
    BRIDGE_ZAP_ADDRESSES,
    BRIDGE_CONFIG_ADDRESS,
    SYNAPSE_SUPPORTED_CHAINS,
    bridge_address,
    zap_address,
)

__all__ = [
    # Adapters
    "SynapseFeeOracle",
    "L1LiquidityMath",
    "L2SwapMath",
    "Erc20BalanceReader",
    # Encoder
    "SynapseCallEncoder",
    "function_selector",
    # Addresses
    "SYNAPSE_BRIDGE_ADDRESSES",
    "BRIDGE_ZAP_ADDRESSES",
    "BRIDGE_CONFIG_ADDRESS",
    "SYNAPSE_SUPPORTED_CHAINS",
    "bridge_address",
    "zap_address",
]
