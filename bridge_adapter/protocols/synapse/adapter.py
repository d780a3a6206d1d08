"""
Synapse contract read adapters

web3.py implementations of the collaborator interfaces:
- SynapseFeeOracle: BridgeConfigV3.calculateSwapFee on Ethereum
- L1LiquidityMath: L1BridgeZap liquidity math for the canonical nUSD pool
- L2SwapMath: L2BridgeZap.calculateSwap on peripheral chains
- Erc20BalanceReader: ERC20 balanceOf / allowance and native balances

All methods are plain reads; retries happen in the caller.
"""

import logging
from typing import Optional, Sequence

from web3 import Web3

from ...config import ContractsConfig, config as global_config
from ...errors import ConfigurationError
from ...infra.evm import Web3Pool
from ...types import CANONICAL_CHAIN_ID, NATIVE_TOKEN_ADDRESS
from ..base import FeeOracleClient, LiquidityMathClient, SwapMathClient, TokenBalanceReader
from .api import BRIDGE_CONFIG_ADDRESS, BRIDGE_CONFIG_CHAIN_ID, L1_BRIDGE_ZAP_ADDRESS, zap_address

logger = logging.getLogger(__name__)


# Standard ERC20 ABI (read subset)
ERC20_ABI = [
    {
        "constant": True,
        "inputs": [
            {"name": "_owner", "type": "address"},
            {"name": "_spender", "type": "address"}
        ],
        "name": "allowance",
        "outputs": [{"name": "", "type": "uint256"}],
        "type": "function"
    },
    {
        "constant": True,
        "inputs": [{"name": "_owner", "type": "address"}],
        "name": "balanceOf",
        "outputs": [{"name": "balance", "type": "uint256"}],
        "type": "function"
    }
]

# BridgeConfigV3 ABI (subset)
BRIDGE_CONFIG_ABI = [
    {
        "inputs": [
            {"name": "tokenAddress", "type": "address"},
            {"name": "chainID", "type": "uint256"},
            {"name": "amount", "type": "uint256"}
        ],
        "name": "calculateSwapFee",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function"
    }
]

# L1BridgeZap ABI (subset)
L1_BRIDGE_ZAP_ABI = [
    {
        "inputs": [
            {"name": "amounts", "type": "uint256[]"},
            {"name": "deposit", "type": "bool"}
        ],
        "name": "calculateTokenAmount",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function"
    },
    {
        "inputs": [
            {"name": "tokenAmount", "type": "uint256"},
            {"name": "tokenIndex", "type": "uint8"}
        ],
        "name": "calculateRemoveLiquidityOneToken",
        "outputs": [{"name": "availableTokenAmount", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function"
    }
]

# L2BridgeZap ABI (subset)
L2_BRIDGE_ZAP_ABI = [
    {
        "inputs": [
            {"name": "token", "type": "address"},
            {"name": "tokenIndexFrom", "type": "uint8"},
            {"name": "tokenIndexTo", "type": "uint8"},
            {"name": "dx", "type": "uint256"}
        ],
        "name": "calculateSwap",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function"
    }
]


class SynapseFeeOracle(FeeOracleClient):
    """Bridge fee from BridgeConfigV3 on Ethereum"""

    def __init__(self, web3_pool: Web3Pool, contracts: Optional[ContractsConfig] = None):
        contracts = contracts or global_config.contracts
        self._pool = web3_pool
        self.address = contracts.bridge_config_address or BRIDGE_CONFIG_ADDRESS
        self.chain_id = contracts.bridge_config_chain_id or BRIDGE_CONFIG_CHAIN_ID

    def _contract(self):
        web3 = self._pool.get(self.chain_id)
        return web3.eth.contract(
            address=Web3.to_checksum_address(self.address),
            abi=BRIDGE_CONFIG_ABI,
        )

    def bridge_fee(self, token_address: str, chain_to: int, amount: int) -> int:
        fee = self._contract().functions.calculateSwapFee(
            Web3.to_checksum_address(token_address),
            chain_to,
            amount,
        ).call()
        logger.debug(f"calculateSwapFee({token_address}, {chain_to}, {amount}) = {fee}")
        return fee


class L1LiquidityMath(LiquidityMathClient):
    """nUSD pool liquidity math through the Ethereum L1BridgeZap"""

    def __init__(self, web3_pool: Web3Pool, zap: str = L1_BRIDGE_ZAP_ADDRESS):
        self._pool = web3_pool
        self.address = zap

    def _contract(self):
        web3 = self._pool.get(CANONICAL_CHAIN_ID)
        return web3.eth.contract(
            address=Web3.to_checksum_address(self.address),
            abi=L1_BRIDGE_ZAP_ABI,
        )

    def deposit_amount(self, amounts: Sequence[int]) -> int:
        return self._contract().functions.calculateTokenAmount(list(amounts), True).call()

    def withdraw_one_token(self, lp_amount: int, index: int) -> int:
        return self._contract().functions.calculateRemoveLiquidityOneToken(lp_amount, index).call()


class L2SwapMath(SwapMathClient):
    """Pool swap quotes through each peripheral chain's L2BridgeZap"""

    def __init__(self, web3_pool: Web3Pool):
        self._pool = web3_pool

    def _contract(self, chain_id: int):
        address = zap_address(chain_id)
        if address is None:
            raise ConfigurationError.missing(f"bridge zap address for chain {chain_id}")
        return self._pool.get(chain_id).eth.contract(
            address=Web3.to_checksum_address(address),
            abi=L2_BRIDGE_ZAP_ABI,
        )

    def swap_output(
        self,
        chain_id: int,
        pool_token_address: str,
        index_from: int,
        index_to: int,
        amount_in: int,
    ) -> int:
        return self._contract(chain_id).functions.calculateSwap(
            Web3.to_checksum_address(pool_token_address),
            index_from,
            index_to,
            amount_in,
        ).call()


class Erc20BalanceReader(TokenBalanceReader):
    """ERC20 balance and allowance; the placeholder address reads native balance"""

    def __init__(self, web3_pool: Web3Pool):
        self._pool = web3_pool

    def _token(self, chain_id: int, token_address: str):
        return self._pool.get(chain_id).eth.contract(
            address=Web3.to_checksum_address(token_address),
            abi=ERC20_ABI,
        )

    def balance_of(self, chain_id: int, token_address: str, owner: str) -> int:
        owner = Web3.to_checksum_address(owner)
        if token_address.lower() == NATIVE_TOKEN_ADDRESS.lower():
            return self._pool.get(chain_id).eth.get_balance(owner)
        return self._token(chain_id, token_address).functions.balanceOf(owner).call()

    def allowance(self, chain_id: int, token_address: str, owner: str, spender: str) -> int:
        return self._token(chain_id, token_address).functions.allowance(
            Web3.to_checksum_address(owner),
            Web3.to_checksum_address(spender),
        ).call()
