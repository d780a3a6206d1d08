"""
Unit tests for Synapse calldata encoding
"""

import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from eth_abi import decode
from web3 import Web3

from fakes import RECIPIENT

from bridge_adapter.errors import ConfigurationError
from bridge_adapter.protocols.synapse import SYNAPSE_BRIDGE_ADDRESSES, SynapseCallEncoder, function_selector
from bridge_adapter.protocols.synapse.api import L1_BRIDGE_ZAP_ADDRESS
from bridge_adapter.types import ChainId, ContractKind, ShapeParam, ShapeTag, TransactionShape

TOKEN = "0x0f2d719407fdbeff09d87557abb7232601fd9f29"


def _redeem(contract=ContractKind.ZAP, native_value=None):
    return TransactionShape(
        tag=ShapeTag.REDEEM if contract == ContractKind.ZAP else ShapeTag.BRIDGE_REDEEM,
        contract=contract,
        params=(
            ShapeParam("to", "address", RECIPIENT),
            ShapeParam("chainId", "uint256", ChainId.BSC),
            ShapeParam("token", "address", TOKEN),
            ShapeParam("amount", "uint256", 12345),
        ),
        native_value=native_value,
    )


class TestFunctionSelector(unittest.TestCase):

    def test_known_selectors(self):
        self.assertEqual(function_selector("transfer(address,uint256)").hex(), "a9059cbb")
        self.assertEqual(function_selector("approve(address,uint256)").hex(), "095ea7b3")

    def test_length(self):
        self.assertEqual(len(function_selector("redeem(address,uint256,address,uint256)")), 4)


class TestSynapseCallEncoder(unittest.TestCase):

    def setUp(self):
        self.encoder = SynapseCallEncoder()

    def test_zap_call(self):
        shape = _redeem()
        call = self.encoder.encode(shape, ChainId.ETH)

        self.assertEqual(call.chain_id, ChainId.ETH)
        self.assertEqual(call.to, Web3.to_checksum_address(L1_BRIDGE_ZAP_ADDRESS))
        self.assertEqual(call.value, 0)
        self.assertTrue(call.data.startswith("0x" + function_selector(shape.signature).hex()))
        # selector + four 32-byte words
        self.assertEqual(len(bytes.fromhex(call.data[2:])), 4 + 4 * 32)

    def test_arguments_round_trip(self):
        call = self.encoder.encode(_redeem(), ChainId.ETH)
        to, chain_id, token, amount = decode(
            ["address", "uint256", "address", "uint256"], bytes.fromhex(call.data[10:])
        )

        self.assertEqual(to.lower(), RECIPIENT.lower())
        self.assertEqual(chain_id, ChainId.BSC)
        self.assertEqual(token.lower(), TOKEN)
        self.assertEqual(amount, 12345)

    def test_bridge_contract(self):
        call = self.encoder.encode(_redeem(ContractKind.BRIDGE), ChainId.AVALANCHE)
        self.assertEqual(
            call.to, Web3.to_checksum_address(SYNAPSE_BRIDGE_ADDRESSES[ChainId.AVALANCHE])
        )

    def test_native_value(self):
        call = self.encoder.encode(_redeem(native_value=10 ** 18), ChainId.ETH)
        self.assertEqual(call.value, 10 ** 18)
        self.assertEqual(call.as_tx_params()["value"], 10 ** 18)

    def test_dynamic_array(self):
        shape = TransactionShape(
            tag=ShapeTag.ZAP_AND_DEPOSIT,
            contract=ContractKind.ZAP,
            params=(
                ShapeParam("to", "address", RECIPIENT),
                ShapeParam("chainId", "uint256", ChainId.BSC),
                ShapeParam("token", "address", TOKEN),
                ShapeParam("liquidityAmounts", "uint256[]", [0, 500, 0]),
                ShapeParam("minToMint", "uint256", 499),
                ShapeParam("deadline", "uint256", 1_700_000_600),
            ),
        )
        call = self.encoder.encode(shape, ChainId.ETH)
        decoded = decode(list(shape.abi_types), bytes.fromhex(call.data[10:]))

        self.assertEqual(list(decoded[3]), [0, 500, 0])
        self.assertEqual(decoded[5], 1_700_000_600)

    def test_unknown_chain(self):
        with self.assertRaises(ConfigurationError):
            self.encoder.encode(_redeem(), 31337)


if __name__ == "__main__":
    unittest.main()
