"""
Synapse call encoder

Turns a TransactionShape into calldata for the zap or bridge contract on the
origin chain: 4-byte selector of the shape's signature followed by the
ABI-encoded parameters.
"""

import logging
from typing import Any

from eth_abi import encode
from web3 import Web3

from ...errors import ConfigurationError
from ...types import ContractKind, TransactionShape, UnsignedCall
from ..base import ContractCallEncoder
from .api import bridge_address, zap_address

logger = logging.getLogger(__name__)


def _normalize_arg(abi_type: str, value: Any) -> Any:
    if abi_type == "address":
        return Web3.to_checksum_address(value)
    if abi_type.endswith("[]"):
        return list(value)
    return value


def function_selector(signature: str) -> bytes:
    """First four bytes of keccak256(signature)"""
    return bytes(Web3.keccak(text=signature)[:4])


class SynapseCallEncoder(ContractCallEncoder):
    """ABI-encode shapes against the Synapse zap and bridge deployments"""

    def contract_address(self, shape: TransactionShape, chain_id: int) -> str:
        if shape.contract == ContractKind.BRIDGE:
            address = bridge_address(chain_id)
        else:
            address = zap_address(chain_id)
        if address is None:
            raise ConfigurationError.missing(f"{shape.contract.value} contract address for chain {chain_id}")
        return Web3.to_checksum_address(address)

    def encode(self, shape: TransactionShape, chain_id: int) -> UnsignedCall:
        args = [_normalize_arg(p.abi_type, p.value) for p in shape.params]
        data = function_selector(shape.signature) + encode(list(shape.abi_types), args)

        call = UnsignedCall(
            chain_id=chain_id,
            to=self.contract_address(shape, chain_id),
            data="0x" + data.hex(),
            value=shape.native_value or 0,
        )
        logger.debug(f"Encoded {shape} for chain {chain_id} ({len(data)} bytes)")
        return call
