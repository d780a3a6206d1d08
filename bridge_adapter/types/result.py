"""
Result type definitions for estimates and transaction shapes
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple


@dataclass(frozen=True)
class BridgeOutputEstimate:
    """
    Projected bridge output

    Attributes:
        amount_to_receive: Raw amount of token_to on the destination chain,
            already net of the bridge fee
        bridge_fee: Fee taken by the bridge, in 18-decimal bridge units
            (informational only, do not subtract again)
    """
    amount_to_receive: int
    bridge_fee: int

    def __str__(self) -> str:
        return f"BridgeOutputEstimate(receive={self.amount_to_receive}, fee={self.bridge_fee})"


class ContractKind(Enum):
    """Contract a shape is sent to on the origin chain"""
    ZAP = "zap"
    BRIDGE = "bridge"


class ShapeTag(Enum):
    """Bridge call variants"""
    DEPOSIT = "deposit"
    REDEEM = "redeem"
    DEPOSIT_ETH = "deposit_eth"
    BRIDGE_REDEEM = "bridge_redeem"
    ZAP_AND_DEPOSIT = "zap_and_deposit"
    ZAP_AND_DEPOSIT_AND_SWAP = "zap_and_deposit_and_swap"
    DEPOSIT_AND_SWAP = "deposit_and_swap"
    DEPOSIT_ETH_AND_SWAP = "deposit_eth_and_swap"
    SWAP_AND_REDEEM = "swap_and_redeem"
    SWAP_ETH_AND_REDEEM = "swap_eth_and_redeem"
    SWAP_AND_REDEEM_AND_SWAP = "swap_and_redeem_and_swap"
    SWAP_ETH_AND_REDEEM_AND_SWAP = "swap_eth_and_redeem_and_swap"
    REDEEM_AND_SWAP = "redeem_and_swap"
    REDEEM_AND_REMOVE = "redeem_and_remove"
    SWAP_AND_REDEEM_AND_REMOVE = "swap_and_redeem_and_remove"

    @property
    def method(self) -> str:
        """Contract method name"""
        return SHAPE_METHODS[self]


SHAPE_METHODS = {
    ShapeTag.DEPOSIT: "deposit",
    ShapeTag.REDEEM: "redeem",
    ShapeTag.DEPOSIT_ETH: "depositETH",
    ShapeTag.BRIDGE_REDEEM: "redeem",
    ShapeTag.ZAP_AND_DEPOSIT: "zapAndDeposit",
    ShapeTag.ZAP_AND_DEPOSIT_AND_SWAP: "zapAndDepositAndSwap",
    ShapeTag.DEPOSIT_AND_SWAP: "depositAndSwap",
    ShapeTag.DEPOSIT_ETH_AND_SWAP: "depositETHAndSwap",
    ShapeTag.SWAP_AND_REDEEM: "swapAndRedeem",
    ShapeTag.SWAP_ETH_AND_REDEEM: "swapETHAndRedeem",
    ShapeTag.SWAP_AND_REDEEM_AND_SWAP: "swapAndRedeemAndSwap",
    ShapeTag.SWAP_ETH_AND_REDEEM_AND_SWAP: "swapETHAndRedeemAndSwap",
    ShapeTag.REDEEM_AND_SWAP: "redeemAndSwap",
    ShapeTag.REDEEM_AND_REMOVE: "redeemAndRemove",
    ShapeTag.SWAP_AND_REDEEM_AND_REMOVE: "swapAndRedeemAndRemove",
}


@dataclass(frozen=True)
class ShapeParam:
    """One ABI-typed call parameter"""
    name: str
    abi_type: str
    value: Any


@dataclass(frozen=True)
class TransactionShape:
    """
    A contract call variant with its fully ordered parameters

    Attributes:
        tag: Call variant
        contract: Contract the call targets on the origin chain
        params: Parameters in contract signature order
        native_value: Native gas token value sent along, if any
    """
    tag: ShapeTag
    contract: ContractKind
    params: Tuple[ShapeParam, ...]
    native_value: Optional[int] = None

    @property
    def method(self) -> str:
        return self.tag.method

    @property
    def signature(self) -> str:
        """Canonical function signature, e.g. redeem(address,uint256,address,uint256)"""
        return f"{self.method}({','.join(p.abi_type for p in self.params)})"

    @property
    def abi_types(self) -> Tuple[str, ...]:
        return tuple(p.abi_type for p in self.params)

    @property
    def args(self) -> Tuple[Any, ...]:
        return tuple(p.value for p in self.params)

    def param(self, name: str) -> Any:
        for p in self.params:
            if p.name == name:
                return p.value
        raise KeyError(name)

    def __str__(self) -> str:
        value = f", value={self.native_value}" if self.native_value is not None else ""
        return f"{self.contract.value}.{self.signature}{value}"


@dataclass(frozen=True)
class UnsignedCall:
    """
    Encoded call ready for gas population and signing

    Attributes:
        chain_id: Origin chain ID
        to: Contract address
        data: 0x-prefixed calldata
        value: Native value in wei
    """
    chain_id: int
    to: str
    data: str
    value: int = 0

    def as_tx_params(self) -> dict:
        """Dict accepted by web3 transaction builders"""
        return {
            "chainId": self.chain_id,
            "to": self.to,
            "data": self.data,
            "value": self.value,
        }
