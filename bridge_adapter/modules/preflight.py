"""
Pre-flight wallet checks

Balance and bridge allowance checks run before a caller signs a bridge
transaction. Shortfalls are user errors and are never retried.
"""

import logging
import threading
from typing import Optional

from ..config import RetryConfig, config as global_config
from ..errors import ConfigurationError, InsufficientAllowance, InsufficientBalance
from ..infra.retry import call_with_retry
from ..protocols.base import TokenBalanceReader
from ..types import Chain, NATIVE_TOKEN_ADDRESS, Token

logger = logging.getLogger(__name__)


class PreflightChecker:
    """
    Check that an owner can bridge an amount of a token from one chain

    Native gas tokens need no allowance; their balance is read with the
    placeholder address.
    """

    def __init__(
        self,
        reader: TokenBalanceReader,
        chain: Chain,
        retry_config: Optional[RetryConfig] = None,
    ):
        self.reader = reader
        self.chain = chain
        self.retry = retry_config or global_config.retry

    def _read(self, fn, name: str, cancel: Optional[threading.Event]) -> int:
        return call_with_retry(
            fn,
            name,
            max_retries=self.retry.max_retries,
            retry_delay=self.retry.retry_delay,
            cancel=cancel,
        )

    def _token_address(self, token: Token) -> str:
        if token.is_native:
            return NATIVE_TOKEN_ADDRESS
        address = token.address(self.chain)
        if address is None:
            raise ConfigurationError.invalid(
                "token", f"{token.symbol} has no address on chain {self.chain.chain_id}"
            )
        return address

    def check(
        self,
        owner: str,
        token: Token,
        amount: int,
        spender: str,
        cancel: Optional[threading.Event] = None,
    ) -> bool:
        """
        Verify allowance (ERC20 only) and balance

        Returns:
            True when the owner can bridge amount

        Raises:
            InsufficientAllowance: spender allowance below amount
            InsufficientBalance: owner balance below amount
        """
        chain_id = self.chain.chain_id
        token_address = self._token_address(token)

        if not token.is_native:
            allowance = self._read(
                lambda: self.reader.allowance(chain_id, token_address, owner, spender),
                "allowance",
                cancel,
            )
            if allowance < amount:
                formatted = f"{token.ui_amount(allowance, chain_id)} {token.symbol}"
                logger.info(f"Allowance check failed for {owner}: {formatted} < {amount}")
                raise InsufficientAllowance.bridge_allowance(
                    token.symbol, spender, amount, allowance, formatted
                )

        balance = self._read(
            lambda: self.reader.balance_of(chain_id, token_address, owner),
            "balance_of",
            cancel,
        )
        if balance < amount:
            formatted = f"{token.ui_amount(balance, chain_id)} {token.symbol}"
            logger.info(f"Balance check failed for {owner}: {formatted} < {amount}")
            raise InsufficientBalance.token_balance(token.symbol, amount, balance, formatted)

        return True
