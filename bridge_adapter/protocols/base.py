"""
Base collaborator interfaces

The route engine talks to the chain only through these interfaces. The
Synapse web3 implementations live in protocols/synapse; tests substitute
in-memory fakes.
"""

from abc import ABC, abstractmethod
from typing import Sequence

from ..types import TransactionShape, UnsignedCall


class FeeOracleClient(ABC):
    """Bridge fee oracle"""

    @abstractmethod
    def bridge_fee(self, token_address: str, chain_to: int, amount: int) -> int:
        """
        Fee charged for bridging amount of a bridge asset to chain_to

        Args:
            token_address: Bridge asset address on the destination chain
            chain_to: Destination chain ID
            amount: Amount scaled to 18 decimals

        Returns:
            Fee in 18-decimal units
        """
        ...


class LiquidityMathClient(ABC):
    """Liquidity math of the canonical chain's stable pool"""

    @abstractmethod
    def deposit_amount(self, amounts: Sequence[int]) -> int:
        """LP tokens minted for depositing amounts (one entry per pool token)"""
        ...

    @abstractmethod
    def withdraw_one_token(self, lp_amount: int, index: int) -> int:
        """Tokens at index received for burning lp_amount"""
        ...


class SwapMathClient(ABC):
    """Swap pool math on any peripheral chain"""

    @abstractmethod
    def swap_output(
        self,
        chain_id: int,
        pool_token_address: str,
        index_from: int,
        index_to: int,
        amount_in: int,
    ) -> int:
        """
        Output of swapping amount_in through a chain's bridge pool

        Args:
            chain_id: Chain the pool lives on
            pool_token_address: Bridge asset address identifying the pool
            index_from: Pool index of the input token
            index_to: Pool index of the output token
            amount_in: Raw input amount
        """
        ...


class ContractCallEncoder(ABC):
    """Turns a TransactionShape into an unsigned call"""

    @abstractmethod
    def encode(self, shape: TransactionShape, chain_id: int) -> UnsignedCall:
        ...


class TokenBalanceReader(ABC):
    """ERC20 / native balance and allowance reads"""

    @abstractmethod
    def balance_of(self, chain_id: int, token_address: str, owner: str) -> int:
        ...

    @abstractmethod
    def allowance(self, chain_id: int, token_address: str, owner: str, spender: str) -> int:
        ...
