"""
BridgeClient - Entry point for bridge route operations

Binds the route engine to one source chain: eligibility, output estimation,
transaction shape selection, calldata encoding and pre-flight checks.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Optional, Union

from .config import Config, config as global_config
from .errors import ConfigurationError, EmptyDestinationAddress, RouteUnsupported
from .infra.evm import Web3Pool
from .infra.retry import CorrelationContext
from .modules.eligibility import RouteEligibilityChecker
from .modules.estimator import OutputEstimator
from .modules.pool_index import PoolIndexResolver, ResolvedRoute
from .modules.preflight import PreflightChecker
from .modules.shapes import TransactionShapeSelector
from .modules.slippage import SlippageCalculator
from .protocols.base import (
    ContractCallEncoder,
    FeeOracleClient,
    LiquidityMathClient,
    SwapMathClient,
    TokenBalanceReader,
)
from .protocols.synapse import (
    Erc20BalanceReader,
    L1LiquidityMath,
    L2SwapMath,
    SynapseCallEncoder,
    SynapseFeeOracle,
)
from .protocols.synapse.api import SYNAPSE_SUPPORTED_CHAINS, bridge_address, zap_address
from .types import (
    BridgeOutputEstimate,
    BridgeRouteRequest,
    Chain,
    DirectRouteTable,
    PoolTokenListProvider,
    RouteSupport,
    Token,
    TokenRegistry,
    TransactionShape,
    UnsignedCall,
    get_required_confirmations,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BridgeContext:
    """
    Everything a BridgeClient needs for one source chain

    Built once by create(); immutable afterwards, so a client can be shared
    across threads.
    """
    chain: Chain
    bridge_address: str
    zap_address: str
    direct_routes: DirectRouteTable
    registry: TokenRegistry
    resolver: PoolIndexResolver
    eligibility: RouteEligibilityChecker
    estimator: OutputEstimator
    slippage: SlippageCalculator
    selector: TransactionShapeSelector
    encoder: ContractCallEncoder
    preflight: PreflightChecker

    @classmethod
    def create(
        cls,
        chain: Union[Chain, int, str],
        fee_oracle: Optional[FeeOracleClient] = None,
        liquidity_math: Optional[LiquidityMathClient] = None,
        swap_math: Optional[SwapMathClient] = None,
        encoder: Optional[ContractCallEncoder] = None,
        balance_reader: Optional[TokenBalanceReader] = None,
        registry: Optional[TokenRegistry] = None,
        pools: Optional[PoolTokenListProvider] = None,
        web3_pool: Optional[Web3Pool] = None,
        clock: Optional[Callable[[], float]] = None,
        config: Optional[Config] = None,
    ) -> "BridgeContext":
        """
        Build a context for a source chain

        Collaborators not given are backed by the Synapse web3 adapters,
        sharing one Web3Pool configured from config.rpc.

        Raises:
            ConfigurationError: Unknown chain or no bridge deployment on it
        """
        cfg = config or global_config
        chain = Chain.from_value(chain)

        if chain.chain_id not in SYNAPSE_SUPPORTED_CHAINS:
            raise ConfigurationError.invalid("chain", f"no bridge deployment on {chain.name}")

        bridge = bridge_address(chain.chain_id)
        zap = zap_address(chain.chain_id)
        if bridge is None or zap is None:
            raise ConfigurationError.missing(f"bridge contract addresses for {chain.name}")

        if None in (fee_oracle, liquidity_math, swap_math, balance_reader):
            web3_pool = web3_pool or Web3Pool(cfg.rpc.urls, cfg.rpc.timeout_seconds)
        fee_oracle = fee_oracle or SynapseFeeOracle(web3_pool, cfg.contracts)
        liquidity_math = liquidity_math or L1LiquidityMath(web3_pool)
        swap_math = swap_math or L2SwapMath(web3_pool)
        balance_reader = balance_reader or Erc20BalanceReader(web3_pool)

        registry = registry or TokenRegistry()
        resolver = PoolIndexResolver(pools)
        direct_routes = DirectRouteTable(chain, chain.role)

        context = cls(
            chain=chain,
            bridge_address=bridge,
            zap_address=zap,
            direct_routes=direct_routes,
            registry=registry,
            resolver=resolver,
            eligibility=RouteEligibilityChecker(registry, resolver),
            estimator=OutputEstimator(
                fee_oracle,
                liquidity_math,
                swap_math,
                estimator_config=cfg.estimator,
                retry_config=cfg.retry,
            ),
            slippage=SlippageCalculator(cfg.slippage, clock),
            selector=TransactionShapeSelector(chain, direct_routes),
            encoder=encoder or SynapseCallEncoder(),
            preflight=PreflightChecker(balance_reader, chain, cfg.retry),
        )
        logger.info(f"Bridge context ready for {chain.name} ({chain.role.value})")
        return context


class BridgeClient:
    """
    Bridge route engine for one source chain

    Stateless across calls; every public call runs in its own correlation
    context for log tracing.

    Usage:
        client = BridgeClient(BridgeContext.create(ChainId.ETH))

        request = BridgeRouteRequest(
            token_from=Tokens.USDC,
            token_to=Tokens.USDT,
            chain_to=ChainId.BSC,
            amount_from=1_000_000,
        )
        estimate = client.estimate_output(request)

        request = request.with_amount_to(estimate.amount_to_receive)
        call = client.encode_transaction(dataclasses.replace(request, address_to=recipient))
    """

    def __init__(self, context: BridgeContext):
        self._ctx = context

    @classmethod
    def for_chain(cls, chain: Union[Chain, int, str], **kwargs) -> "BridgeClient":
        """Shortcut for BridgeClient(BridgeContext.create(chain, **kwargs))"""
        return cls(BridgeContext.create(chain, **kwargs))

    @property
    def context(self) -> BridgeContext:
        return self._ctx

    @property
    def chain(self) -> Chain:
        return self._ctx.chain

    # =========================================================================
    # Routes
    # =========================================================================

    def is_route_supported(self, request: BridgeRouteRequest) -> RouteSupport:
        """
        Check a route without touching the network

        Returns:
            RouteSupport, unpackable as (supported, reason)
        """
        with CorrelationContext("route"):
            return self._check(request)

    def _check(self, request: BridgeRouteRequest) -> RouteSupport:
        return self._ctx.eligibility.check(
            request.token_from,
            request.token_to,
            self.chain,
            request.chain_to,
        )

    def _require_supported(self, request: BridgeRouteRequest) -> ResolvedRoute:
        support = self._check(request)
        if not support:
            logger.info(f"Route rejected for {request}: {support.reason}")
            raise RouteUnsupported.for_route(
                support.reason,
                request.token_from.symbol,
                request.token_to.symbol,
                self.chain.chain_id,
                request.chain_to,
            )
        chain_to = Chain.from_value(request.chain_to)
        return self._ctx.resolver.resolve_route(request, self.chain, chain_to)

    # =========================================================================
    # Estimation
    # =========================================================================

    def estimate_output(
        self,
        request: BridgeRouteRequest,
        cancel: Optional[threading.Event] = None,
    ) -> BridgeOutputEstimate:
        """
        Estimate amount received on the destination chain and the bridge fee

        Raises:
            RouteUnsupported: Route not eligible (no collaborator calls made)
            FeeQueryFailed: Fee oracle failure
            OperationCancelled: cancel was set
        """
        with CorrelationContext("estimate") as cid:
            route = self._require_supported(request)
            estimate = self._ctx.estimator.estimate(request, route, cancel)
            logger.info(f"[{cid}] {request}: {estimate}")
            return estimate

    # =========================================================================
    # Transactions
    # =========================================================================

    def build_transaction(
        self,
        request: BridgeRouteRequest,
        cancel: Optional[threading.Event] = None,
    ) -> TransactionShape:
        """
        Select the bridge call and its parameters for a request

        When amount_to is not set it is estimated first.

        Raises:
            EmptyDestinationAddress: address_to missing
            RouteUnsupported: Route not eligible
        """
        with CorrelationContext("build") as cid:
            if not request.address_to or not request.address_to.strip():
                logger.info(f"[{cid}] Rejected {request}: empty destination address")
                raise EmptyDestinationAddress()

            route = self._require_supported(request)

            if request.amount_to is None:
                estimate = self._ctx.estimator.estimate(request, route, cancel)
                request = request.with_amount_to(estimate.amount_to_receive)

            quote = self._ctx.slippage.compute(request.amount_from, request.amount_to)
            shape = self._ctx.selector.select(request, route, quote)
            logger.info(f"[{cid}] {request}: {shape}")
            return shape

    def encode_transaction(
        self,
        request: BridgeRouteRequest,
        cancel: Optional[threading.Event] = None,
    ) -> UnsignedCall:
        """Build the transaction shape and encode it into an unsigned call"""
        shape = self.build_transaction(request, cancel)
        return self._ctx.encoder.encode(shape, self.chain.chain_id)

    # =========================================================================
    # Chain facts and pre-flight
    # =========================================================================

    def required_confirmations(self) -> int:
        """Block confirmations the bridge waits for on this chain"""
        return get_required_confirmations(self.chain)

    def check_can_bridge(
        self,
        address: str,
        token: Token,
        amount: int,
        cancel: Optional[threading.Event] = None,
    ) -> bool:
        """
        Verify the zap may spend amount of token and the wallet holds it

        Raises:
            InsufficientAllowance: Zap allowance below amount
            InsufficientBalance: Wallet balance below amount
        """
        with CorrelationContext("preflight"):
            return self._ctx.preflight.check(address, token, amount, self._ctx.zap_address, cancel)

    def __repr__(self) -> str:
        return f"BridgeClient(chain={self.chain.name})"
