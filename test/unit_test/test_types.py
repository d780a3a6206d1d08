"""
Test Types Module

Tests for bridge_adapter.types package.
"""

import sys
from decimal import Decimal
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))


def test_chain():
    """Test Chain resolution and roles"""
    from bridge_adapter.types import Chain, ChainId, ChainRole, NETWORKS
    from bridge_adapter.errors import ConfigurationError

    print("Testing Chain...")

    eth = Chain.from_value(1)
    assert eth.chain_id == ChainId.ETH
    assert eth.role == ChainRole.CANONICAL
    assert eth.is_canonical
    assert int(eth) == 1

    assert Chain.from_value("arb").chain_id == ChainId.ARBITRUM
    assert Chain.from_value("43114").chain_id == ChainId.AVALANCHE
    assert Chain.from_value(eth) is eth

    # Exactly one canonical chain
    canonical = [c for c in NETWORKS.values() if c.is_canonical]
    assert len(canonical) == 1

    try:
        Chain.from_value(999999)
        assert False, "Unknown chain should raise"
    except ConfigurationError:
        pass

    print("  Chain: PASSED")


def test_required_confirmations():
    """Test confirmation table"""
    from bridge_adapter.types import (
        ChainId,
        get_required_confirmations,
        UNKNOWN_CONFIRMATIONS,
    )

    print("Testing required confirmations...")

    assert get_required_confirmations(ChainId.ETH) == 7
    assert get_required_confirmations(ChainId.POLYGON) == 128
    assert get_required_confirmations(ChainId.ARBITRUM) == 40
    assert get_required_confirmations(12345) == UNKNOWN_CONFIRMATIONS

    print("  Required confirmations: PASSED")


def test_token():
    """Test Token dataclass"""
    from bridge_adapter.types import Tokens, ChainId, SwapType

    print("Testing Token...")

    usdc = Tokens.USDC
    assert usdc.swap_type == SwapType.USD
    assert usdc.decimals_on(ChainId.ETH) == 6
    assert usdc.decimals_on(ChainId.BSC) == 18
    assert usdc.is_on(ChainId.ARBITRUM)
    assert usdc.address(ChainId.MOONBEAM) is None

    assert usdc.ui_amount(1_500_000, ChainId.ETH) == Decimal("1.5")
    assert usdc.raw_amount("1.5", ChainId.ETH) == 1_500_000

    # Equality by id only
    assert Tokens.USDC == Tokens.USDC
    assert Tokens.USDC != Tokens.USDT
    assert len({Tokens.USDC, Tokens.USDC, Tokens.DAI}) == 2

    # Token is frozen (immutable)
    try:
        usdc.symbol = "XXX"
        assert False, "Should not be able to modify frozen dataclass"
    except Exception:
        pass  # Expected

    assert Tokens.AVWETH.underlying_token == Tokens.WETH_E
    assert Tokens.GMX.wrapper_address(ChainId.AVALANCHE) is not None

    print("  Token: PASSED")


def test_token_registry():
    """Test TokenRegistry lookups"""
    from bridge_adapter.types import TokenRegistry, Tokens, ChainId

    print("Testing TokenRegistry...")

    registry = TokenRegistry()
    assert Tokens.NUSD in registry
    assert registry.by_id("neth") == Tokens.NETH
    assert registry.by_symbol("nUSD") == Tokens.NUSD

    address = Tokens.USDT.address(ChainId.BSC)
    assert registry.by_address(address.lower(), ChainId.BSC) == Tokens.USDT

    assert registry.supports(ChainId.ETH, Tokens.ETH)
    assert not registry.supports(ChainId.BSC, Tokens.ETH)
    assert Tokens.WAVAX in registry.tokens_on(ChainId.MOONBEAM)

    print("  TokenRegistry: PASSED")


def test_pools_and_bridge_assets():
    """Test pool token lists and intermediate/fee tokens"""
    from bridge_adapter.types import (
        PoolTokenListProvider,
        Tokens,
        ChainId,
        SwapType,
        intermediate_token,
        fee_token,
    )

    print("Testing pools...")

    pools = PoolTokenListProvider()
    bsc = pools.list_for(ChainId.BSC, SwapType.USD)
    assert bsc[0] == Tokens.NUSD
    assert list(bsc).index(Tokens.USDT) == 3
    assert pools.list_for(ChainId.MOONBEAM, SwapType.USD) is None

    assert intermediate_token(ChainId.BSC, Tokens.USDC) == Tokens.NUSD
    assert intermediate_token(ChainId.ETH, Tokens.WETH_E) == Tokens.NETH
    assert intermediate_token(ChainId.ETH, Tokens.AVWETH) == Tokens.NETH
    assert intermediate_token(ChainId.AVALANCHE, Tokens.SYN) == Tokens.SYN

    # nETH has no canonical deployment; WETH is priced instead
    assert fee_token(ChainId.ETH, Tokens.NETH) == Tokens.WETH
    assert fee_token(ChainId.ARBITRUM, Tokens.WETH) == Tokens.NETH

    print("  Pools: PASSED")


def test_route_request():
    """Test BridgeRouteRequest validation"""
    from bridge_adapter.types import BridgeRouteRequest, Tokens, NETWORKS, ChainId

    print("Testing BridgeRouteRequest...")

    request = BridgeRouteRequest(Tokens.USDC, Tokens.USDT, NETWORKS[ChainId.BSC], amount_from=10)
    assert request.chain_to == ChainId.BSC
    assert request.amount_to is None

    updated = request.with_amount_to(9)
    assert updated.amount_to == 9
    assert updated.amount_from == 10

    try:
        BridgeRouteRequest(Tokens.USDC, Tokens.USDT, ChainId.BSC, amount_from=-1)
        assert False, "Negative amount should raise"
    except ValueError:
        pass

    print("  BridgeRouteRequest: PASSED")


def test_direct_route_table():
    """Test per-chain direct route sets"""
    from bridge_adapter.types import DirectRouteTable, DirectRouteKind, ChainId, ChainRole, Tokens

    print("Testing DirectRouteTable...")

    eth = DirectRouteTable(ChainId.ETH, ChainRole.CANONICAL)
    assert eth.lookup(Tokens.USDC, Tokens.HIGH) == DirectRouteKind.DEPOSIT
    assert eth.lookup(Tokens.SYN, Tokens.SYN) == DirectRouteKind.REDEEM
    assert eth.lookup(Tokens.WETH, Tokens.NETH) == DirectRouteKind.DEPOSIT_NATIVE
    assert eth.lookup(Tokens.NUSD, Tokens.NUSD) == DirectRouteKind.DEPOSIT
    assert eth.lookup(Tokens.USDC, Tokens.USDT) is None

    avalanche = DirectRouteTable(ChainId.AVALANCHE, ChainRole.PERIPHERAL)
    assert avalanche.lookup(Tokens.WAVAX, Tokens.WAVAX) == DirectRouteKind.DEPOSIT_NATIVE
    assert avalanche.lookup(Tokens.NFD, Tokens.NFD) == DirectRouteKind.REDEEM
    assert avalanche.lookup(Tokens.NETH, Tokens.NETH) == DirectRouteKind.REDEEM

    # WAVAX redeems only from its alternate chain
    moonbeam = DirectRouteTable(ChainId.MOONBEAM, ChainRole.PERIPHERAL)
    assert moonbeam.lookup(Tokens.WAVAX, Tokens.WAVAX) == DirectRouteKind.REDEEM
    bsc = DirectRouteTable(ChainId.BSC, ChainRole.PERIPHERAL)
    assert bsc.lookup(Tokens.WAVAX, Tokens.WAVAX) is None

    fantom = DirectRouteTable(ChainId.FANTOM, ChainRole.PERIPHERAL)
    assert fantom.lookup(Tokens.JUMP, Tokens.JUMP) == DirectRouteKind.DEPOSIT
    assert bsc.lookup(Tokens.JUMP, Tokens.JUMP) == DirectRouteKind.REDEEM

    print("  DirectRouteTable: PASSED")


def test_transaction_shape():
    """Test TransactionShape helpers"""
    from bridge_adapter.types import TransactionShape, ShapeParam, ShapeTag, ContractKind

    print("Testing TransactionShape...")

    shape = TransactionShape(
        tag=ShapeTag.REDEEM,
        contract=ContractKind.ZAP,
        params=(
            ShapeParam("to", "address", "0x01"),
            ShapeParam("chainId", "uint256", 1),
            ShapeParam("token", "address", "0x02"),
            ShapeParam("amount", "uint256", 5),
        ),
    )
    assert shape.method == "redeem"
    assert shape.signature == "redeem(address,uint256,address,uint256)"
    assert shape.args == ("0x01", 1, "0x02", 5)
    assert shape.param("amount") == 5

    try:
        shape.param("deadline")
        assert False, "Unknown param should raise"
    except KeyError:
        pass

    # Every tag maps to a distinct enum member
    assert ShapeTag.BRIDGE_REDEEM is not ShapeTag.REDEEM
    assert ShapeTag.BRIDGE_REDEEM.method == "redeem"
    assert len(list(ShapeTag)) == 15

    print("  TransactionShape: PASSED")


def main():
    """Run all type tests"""
    print("=" * 60)
    print("Bridge Adapter Types Tests")
    print("=" * 60)

    tests = [
        test_chain,
        test_required_confirmations,
        test_token,
        test_token_registry,
        test_pools_and_bridge_assets,
        test_route_request,
        test_direct_route_table,
        test_transaction_shape,
    ]

    passed = 0
    failed = 0

    for test in tests:
        try:
            test()
            passed += 1
        except Exception as e:
            print(f"  FAILED: {e}")
            failed += 1

    print("=" * 60)
    print(f"Results: {passed} passed, {failed} failed")
    print("=" * 60)

    return failed == 0


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
