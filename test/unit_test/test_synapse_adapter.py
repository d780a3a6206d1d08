"""
Unit tests for the Synapse web3 adapters

Contracts are mocked at the web3 boundary; no RPC is contacted.
"""

import sys
from pathlib import Path
from unittest.mock import Mock

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import pytest
from web3 import Web3

from bridge_adapter.config import ContractsConfig
from bridge_adapter.errors import ConfigurationError
from bridge_adapter.protocols.synapse import (
    BRIDGE_CONFIG_ADDRESS,
    Erc20BalanceReader,
    L1LiquidityMath,
    L2SwapMath,
    SynapseFeeOracle,
)
from bridge_adapter.protocols.synapse.api import L1_BRIDGE_ZAP_ADDRESS
from bridge_adapter.types import ChainId, NATIVE_TOKEN_ADDRESS, Tokens

OWNER = "0x1111111111111111111111111111111111111111"
SPENDER = "0x2222222222222222222222222222222222222222"


@pytest.fixture
def web3():
    """Mock Web3 instance whose contract() returns one shared mock contract"""
    w3 = Mock()
    w3.eth.contract.return_value = Mock()
    return w3


@pytest.fixture
def pool(web3):
    p = Mock()
    p.get.return_value = web3
    return p


def _contract(web3):
    return web3.eth.contract.return_value


class TestSynapseFeeOracle:
    """Tests for SynapseFeeOracle"""

    def test_bridge_fee(self, pool, web3):
        _contract(web3).functions.calculateSwapFee.return_value.call.return_value = 123
        oracle = SynapseFeeOracle(pool, ContractsConfig(bridge_config_address="", bridge_config_chain_id=1))

        fee = oracle.bridge_fee(Tokens.NUSD.address(ChainId.BSC), ChainId.BSC, 10 ** 18)

        assert fee == 123
        pool.get.assert_called_once_with(1)
        assert web3.eth.contract.call_args.kwargs["address"] == Web3.to_checksum_address(BRIDGE_CONFIG_ADDRESS)
        _contract(web3).functions.calculateSwapFee.assert_called_once_with(
            Web3.to_checksum_address(Tokens.NUSD.address(ChainId.BSC)), ChainId.BSC, 10 ** 18
        )

    def test_address_override(self, pool, web3):
        contracts = ContractsConfig(
            bridge_config_address="0x3333333333333333333333333333333333333333",
            bridge_config_chain_id=5,
        )
        _contract(web3).functions.calculateSwapFee.return_value.call.return_value = 0

        SynapseFeeOracle(pool, contracts).bridge_fee(OWNER, ChainId.BSC, 1)

        pool.get.assert_called_once_with(5)
        assert web3.eth.contract.call_args.kwargs["address"] == "0x3333333333333333333333333333333333333333"

    def test_errors_propagate(self, pool, web3):
        _contract(web3).functions.calculateSwapFee.return_value.call.side_effect = ConnectionError("refused")
        oracle = SynapseFeeOracle(pool, ContractsConfig(bridge_config_address="", bridge_config_chain_id=1))

        with pytest.raises(ConnectionError):
            oracle.bridge_fee(OWNER, ChainId.BSC, 1)


class TestL1LiquidityMath:
    """Tests for L1LiquidityMath"""

    def test_deposit_amount(self, pool, web3):
        _contract(web3).functions.calculateTokenAmount.return_value.call.return_value = 999

        assert L1LiquidityMath(pool).deposit_amount((0, 1_000, 0)) == 999

        pool.get.assert_called_once_with(ChainId.ETH)
        assert web3.eth.contract.call_args.kwargs["address"] == Web3.to_checksum_address(L1_BRIDGE_ZAP_ADDRESS)
        _contract(web3).functions.calculateTokenAmount.assert_called_once_with([0, 1_000, 0], True)

    def test_withdraw_one_token(self, pool, web3):
        _contract(web3).functions.calculateRemoveLiquidityOneToken.return_value.call.return_value = 42

        assert L1LiquidityMath(pool).withdraw_one_token(50, 2) == 42
        _contract(web3).functions.calculateRemoveLiquidityOneToken.assert_called_once_with(50, 2)


class TestL2SwapMath:
    """Tests for L2SwapMath"""

    def test_swap_output(self, pool, web3):
        _contract(web3).functions.calculateSwap.return_value.call.return_value = 77
        nusd = Web3.to_checksum_address(Tokens.NUSD.address(ChainId.BSC))

        assert L2SwapMath(pool).swap_output(ChainId.BSC, nusd, 0, 3, 80) == 77

        pool.get.assert_called_once_with(ChainId.BSC)
        _contract(web3).functions.calculateSwap.assert_called_once_with(nusd, 0, 3, 80)

    def test_chain_without_zap(self, pool):
        with pytest.raises(ConfigurationError):
            L2SwapMath(pool).swap_output(31337, OWNER, 0, 1, 1)


class TestErc20BalanceReader:
    """Tests for Erc20BalanceReader"""

    def test_token_balance(self, pool, web3):
        _contract(web3).functions.balanceOf.return_value.call.return_value = 500

        balance = Erc20BalanceReader(pool).balance_of(ChainId.ETH, Tokens.USDC.address(ChainId.ETH), OWNER)

        assert balance == 500
        _contract(web3).functions.balanceOf.assert_called_once_with(OWNER)
        web3.eth.get_balance.assert_not_called()

    def test_native_balance(self, pool, web3):
        web3.eth.get_balance.return_value = 10 ** 18

        balance = Erc20BalanceReader(pool).balance_of(ChainId.ETH, NATIVE_TOKEN_ADDRESS, OWNER)

        assert balance == 10 ** 18
        web3.eth.get_balance.assert_called_once_with(OWNER)
        web3.eth.contract.assert_not_called()

    def test_allowance(self, pool, web3):
        _contract(web3).functions.allowance.return_value.call.return_value = 7

        allowance = Erc20BalanceReader(pool).allowance(
            ChainId.BSC, Tokens.USDC.address(ChainId.BSC), OWNER, SPENDER
        )

        assert allowance == 7
        pool.get.assert_called_once_with(ChainId.BSC)
        _contract(web3).functions.allowance.assert_called_once_with(OWNER, SPENDER)


if __name__ == "__main__":
    exit_code = pytest.main([__file__, "-v", "--tb=short"])
    sys.exit(exit_code)
