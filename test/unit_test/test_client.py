"""
Unit tests for BridgeClient
"""

import dataclasses
import sys
import threading
import unittest
from pathlib import Path
from unittest.mock import patch

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from web3 import Web3

from fakes import (
    FIXED_NOW,
    FakeBalanceReader,
    FakeFeeOracle,
    FakeLiquidityMath,
    FakeSwapMath,
    RECIPIENT,
    fast_config,
    fixed_clock,
)

from bridge_adapter import BridgeClient, BridgeContext
from bridge_adapter.errors import (
    ConfigurationError,
    EmptyDestinationAddress,
    InsufficientAllowance,
    OperationCancelled,
    RouteUnsupported,
)
from bridge_adapter.protocols.synapse import function_selector
from bridge_adapter.types import BridgeRouteRequest, ChainId, ShapeTag, Tokens, UnsignedCall


class ClientTestCase(unittest.TestCase):

    chain = ChainId.ETH

    def setUp(self):
        self.fee_oracle = FakeFeeOracle(fee=10)
        self.liquidity = FakeLiquidityMath()
        self.swap = FakeSwapMath()
        self.reader = FakeBalanceReader(balance=10 ** 9, allowance=10 ** 9)
        self.client = BridgeClient.for_chain(
            self.chain,
            fee_oracle=self.fee_oracle,
            liquidity_math=self.liquidity,
            swap_math=self.swap,
            balance_reader=self.reader,
            clock=fixed_clock,
            config=fast_config(),
        )

    def assertNoCollaboratorCalls(self):
        self.assertEqual(self.fee_oracle.calls, [])
        self.assertEqual(self.swap.calls, [])
        self.assertEqual(self.liquidity.deposit_calls, [])
        self.assertEqual(self.liquidity.withdraw_calls, [])
        self.assertEqual(self.reader.calls, [])


class TestBridgeContext(unittest.TestCase):

    @patch("bridge_adapter.client.Web3Pool")
    def test_injected_collaborators_skip_web3(self, mock_pool):
        context = BridgeContext.create(
            ChainId.BSC,
            fee_oracle=FakeFeeOracle(),
            liquidity_math=FakeLiquidityMath(),
            swap_math=FakeSwapMath(),
            balance_reader=FakeBalanceReader(),
            config=fast_config(),
        )

        mock_pool.assert_not_called()
        self.assertEqual(context.chain.chain_id, ChainId.BSC)
        self.assertEqual(context.zap_address, "0x749F37Df06A99D6A8E065dd065f8cF947ca23697")

    @patch("bridge_adapter.client.Web3Pool")
    def test_missing_collaborators_share_one_pool(self, mock_pool):
        context = BridgeContext.create(ChainId.ETH, config=fast_config())

        mock_pool.assert_called_once()
        self.assertIs(context.estimator.fee_oracle._pool, mock_pool.return_value)
        self.assertIs(context.estimator.swap_math._pool, mock_pool.return_value)

    def test_unknown_chain(self):
        with self.assertRaises(ConfigurationError):
            BridgeContext.create(31337, config=fast_config())

    def test_chain_by_name(self):
        context = BridgeContext.create(
            "56",
            fee_oracle=FakeFeeOracle(),
            liquidity_math=FakeLiquidityMath(),
            swap_math=FakeSwapMath(),
            balance_reader=FakeBalanceReader(),
            config=fast_config(),
        )
        self.assertEqual(context.chain.chain_id, ChainId.BSC)


class TestRouteSupport(ClientTestCase):

    def test_supported(self):
        request = BridgeRouteRequest(Tokens.USDC, Tokens.USDT, ChainId.BSC, amount_from=1)
        supported, reason = self.client.is_route_supported(request)

        self.assertTrue(supported)
        self.assertEqual(reason, "")

    def test_unsupported(self):
        request = BridgeRouteRequest(Tokens.USDC, Tokens.NETH, ChainId.ARBITRUM, amount_from=1)
        supported, reason = self.client.is_route_supported(request)

        self.assertFalse(supported)
        self.assertIn("Swap type mismatch", reason)
        self.assertNoCollaboratorCalls()


class TestEstimateOutput(ClientTestCase):

    def test_estimate(self):
        request = BridgeRouteRequest(Tokens.USDC, Tokens.USDT, ChainId.BSC, amount_from=1_000)
        estimate = self.client.estimate_output(request)

        self.assertEqual(estimate.amount_to_receive, 990)
        self.assertEqual(estimate.bridge_fee, 10)

    def test_unsupported_route_makes_no_calls(self):
        request = BridgeRouteRequest(Tokens.BUSD, Tokens.USDC, ChainId.BSC, amount_from=1_000)

        with self.assertRaises(RouteUnsupported) as ctx:
            self.client.estimate_output(request)

        self.assertEqual(ctx.exception.chain_from, ChainId.ETH)
        self.assertEqual(ctx.exception.chain_to, ChainId.BSC)
        self.assertNoCollaboratorCalls()

    def test_cancelled(self):
        cancel = threading.Event()
        cancel.set()
        request = BridgeRouteRequest(Tokens.USDC, Tokens.USDT, ChainId.BSC, amount_from=1_000)

        with self.assertRaises(OperationCancelled):
            self.client.estimate_output(request, cancel)


class TestBuildTransaction(ClientTestCase):

    def test_empty_address_checked_first(self):
        request = BridgeRouteRequest(Tokens.BUSD, Tokens.USDC, ChainId.BSC, amount_from=1_000)

        with self.assertRaises(EmptyDestinationAddress):
            self.client.build_transaction(request)

        self.assertNoCollaboratorCalls()

    def test_unsupported_route(self):
        request = BridgeRouteRequest(
            Tokens.BUSD, Tokens.USDC, ChainId.BSC, amount_from=1_000, address_to=RECIPIENT
        )
        with self.assertRaises(RouteUnsupported):
            self.client.build_transaction(request)
        self.assertNoCollaboratorCalls()

    def test_estimates_missing_amount_to(self):
        request = BridgeRouteRequest(
            Tokens.USDC, Tokens.USDT, ChainId.BSC, amount_from=1_000, address_to=RECIPIENT
        )
        shape = self.client.build_transaction(request)
        quote = self.client.context.slippage.compute(1_000, 990)

        self.assertEqual(len(self.fee_oracle.calls), 1)
        self.assertEqual(shape.tag, ShapeTag.ZAP_AND_DEPOSIT_AND_SWAP)
        self.assertEqual(shape.param("minToMint"), quote.medium.min_origin)
        self.assertEqual(shape.param("minDy"), quote.medium.min_dest_from_origin)
        self.assertEqual(shape.param("swapDeadline"), FIXED_NOW + 604_800)

    def test_given_amount_to_skips_estimate(self):
        request = BridgeRouteRequest(
            Tokens.SYN, Tokens.SYN, ChainId.BSC, amount_from=1_000, amount_to=990, address_to=RECIPIENT
        )
        shape = self.client.build_transaction(request)

        self.assertEqual(shape.tag, ShapeTag.REDEEM)
        self.assertEqual(self.fee_oracle.calls, [])

    def test_same_request_same_shape(self):
        request = BridgeRouteRequest(
            Tokens.USDC, Tokens.DAI, ChainId.POLYGON, amount_from=5_000, amount_to=4_900, address_to=RECIPIENT
        )
        self.assertEqual(self.client.build_transaction(request), self.client.build_transaction(request))


class TestEncodeTransaction(ClientTestCase):

    def test_unsigned_call(self):
        request = BridgeRouteRequest(
            Tokens.ETH, Tokens.NETH, ChainId.ARBITRUM, amount_from=10 ** 18, amount_to=10 ** 18,
            address_to=RECIPIENT,
        )
        call = self.client.encode_transaction(request)

        self.assertIsInstance(call, UnsignedCall)
        self.assertEqual(call.chain_id, ChainId.ETH)
        self.assertEqual(call.to, Web3.to_checksum_address(self.client.context.zap_address))
        self.assertEqual(call.value, 10 ** 18)
        selector = function_selector("depositETH(address,uint256,uint256)").hex()
        self.assertTrue(call.data.startswith("0x" + selector))

    def test_with_amount_to_from_estimate(self):
        request = BridgeRouteRequest(Tokens.USDC, Tokens.NUSD, ChainId.BSC, amount_from=1_000)
        estimate = self.client.estimate_output(request)
        request = dataclasses.replace(
            request.with_amount_to(estimate.amount_to_receive), address_to=RECIPIENT
        )

        call = self.client.encode_transaction(request)
        self.assertEqual(call.value, 0)


class TestPeripheralClient(ClientTestCase):

    chain = ChainId.BSC

    def test_required_confirmations(self):
        self.assertEqual(self.client.required_confirmations(), 14)

    def test_swap_and_redeem(self):
        request = BridgeRouteRequest(
            Tokens.USDC, Tokens.DAI, ChainId.ETH, amount_from=10 ** 18, amount_to=10 ** 18,
            address_to=RECIPIENT,
        )
        shape = self.client.build_transaction(request)
        self.assertEqual(shape.tag, ShapeTag.SWAP_AND_REDEEM_AND_REMOVE)


class TestChainFacts(ClientTestCase):

    def test_required_confirmations(self):
        self.assertEqual(self.client.required_confirmations(), 7)

    def test_repr(self):
        self.assertIn("BridgeClient(chain=", repr(self.client))


class TestCheckCanBridge(ClientTestCase):

    def test_passes(self):
        self.assertTrue(self.client.check_can_bridge(RECIPIENT, Tokens.USDC, 1_000))

    def test_spender_is_zap(self):
        self.client.check_can_bridge(RECIPIENT, Tokens.USDC, 1_000)

        allowance_call = self.reader.calls[0]
        self.assertEqual(allowance_call[0], "allowance")
        self.assertEqual(allowance_call[-1], self.client.context.zap_address)

    def test_allowance_too_low(self):
        self.reader.allowance_value = 0
        with self.assertRaises(InsufficientAllowance):
            self.client.check_can_bridge(RECIPIENT, Tokens.USDC, 1_000)


if __name__ == "__main__":
    unittest.main()
