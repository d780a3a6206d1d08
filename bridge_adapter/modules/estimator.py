"""
Bridge output estimation

Projects the amount received on the destination chain and the bridge fee.

Pipeline per request:
    fee query ----------.
                         >-- origin amount - fee --> destination amount
    origin amount ------'

The fee query and the origin-side amount are independent reads and run
side by side on a thread pool; the destination-side amount depends on both
and runs after them. Pool positions for every leg that needs one are
checked before the first read, and a failure in either concurrent read
aborts the other.
"""

import contextvars
import logging
import threading
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from typing import Callable, Optional, TypeVar

from ..config import EstimatorConfig, RetryConfig, config as global_config
from ..errors import ConfigurationError, FeeQueryFailed, OperationCancelled
from ..infra.retry import call_with_retry, check_cancelled
from ..protocols.base import FeeOracleClient, LiquidityMathClient, SwapMathClient
from ..protocols.synapse.api import FEE_ORACLE_DECIMALS
from ..types import BridgeOutputEstimate, BridgeRouteRequest, L2_ETH_CHAINS, SwapType, Token, fee_token
from .pool_index import ResolvedRoute

logger = logging.getLogger(__name__)

T = TypeVar("T")

# How often the estimate checks the caller's cancel event while reads run
CANCEL_POLL_SECONDS = 0.05

# Family of the canonical chain's liquidity pool; only it has add/remove math
CANONICAL_POOL_FAMILY = SwapType.USD


def scale_to_fee_units(amount: int, decimals: int) -> int:
    """Scale a raw amount to the fee oracle's 18-decimal units"""
    if decimals <= FEE_ORACLE_DECIMALS:
        return amount * 10 ** (FEE_ORACLE_DECIMALS - decimals)
    return amount // 10 ** (decimals - FEE_ORACLE_DECIMALS)


def _submit(executor: ThreadPoolExecutor, fn: Callable[[], T]):
    # Carry the caller's correlation ID into the worker thread
    ctx = contextvars.copy_context()
    return executor.submit(ctx.run, fn)


class OutputEstimator:
    """
    Estimate destination amount and bridge fee for a resolved route

    Collaborator reads go through call_with_retry, so transient RPC errors
    are retried and contract reverts fail fast.
    """

    def __init__(
        self,
        fee_oracle: FeeOracleClient,
        liquidity_math: LiquidityMathClient,
        swap_math: SwapMathClient,
        estimator_config: Optional[EstimatorConfig] = None,
        retry_config: Optional[RetryConfig] = None,
    ):
        self.fee_oracle = fee_oracle
        self.liquidity_math = liquidity_math
        self.swap_math = swap_math
        self.config = estimator_config or global_config.estimator
        self.retry = retry_config or global_config.retry

    def _call(self, fn: Callable[[], T], name: str, cancel: Optional[threading.Event]) -> T:
        return call_with_retry(
            fn,
            name,
            max_retries=self.retry.max_retries,
            retry_delay=self.retry.retry_delay,
            cancel=cancel,
        )

    # =========================================================================
    # Fee
    # =========================================================================

    def query_fee(
        self,
        request: BridgeRouteRequest,
        route: ResolvedRoute,
        cancel: Optional[threading.Event] = None,
    ) -> int:
        """
        Query the bridge fee for a route

        Raises:
            FeeQueryFailed: Oracle unreachable, reverted, or returned nothing
        """
        token = fee_token(route.chain_to, route.token_from)
        token_address = token.address(route.chain_to)
        if token_address is None:
            raise ConfigurationError.invalid(
                "fee token", f"{token.symbol} has no address on chain {route.chain_to.chain_id}"
            )

        amount = scale_to_fee_units(request.amount_from, route.token_from.decimals_on(route.chain_from))
        chain_to = route.chain_to.chain_id

        try:
            fee = self._call(
                lambda: self.fee_oracle.bridge_fee(token_address, chain_to, amount),
                "bridge_fee",
                cancel,
            )
        except OperationCancelled:
            raise
        except FeeQueryFailed:
            raise
        except Exception as e:
            logger.warning(f"Bridge fee query failed for {token.symbol} to chain {chain_to}: {e}")
            raise FeeQueryFailed.from_error(token_address, chain_to, e) from e

        if fee is None:
            raise FeeQueryFailed(
                f"Bridge fee oracle returned no value for {token_address} to chain {chain_to}",
                token_address=token_address,
                chain_to=chain_to,
            )
        return int(fee)

    # =========================================================================
    # Origin / destination legs
    # =========================================================================

    @staticmethod
    def origin_is_pass_through(route: ResolvedRoute) -> bool:
        token_from = route.token_from
        eth_to_eth = (
            route.origin_canonical
            and route.chain_to.chain_id in L2_ETH_CHAINS
            and route.token_to.swap_type == SwapType.ETH
        )
        return (
            eth_to_eth
            or token_from.is_mint_burn
            or token_from.is_wrapped_token
            or token_from == route.intermediate
            or (route.origin_canonical and token_from.swap_type != CANONICAL_POOL_FAMILY)
        )

    @staticmethod
    def destination_is_pass_through(route: ResolvedRoute) -> bool:
        token_to = route.token_to
        eth_from_eth = (
            route.destination_canonical
            and route.chain_from.chain_id in L2_ETH_CHAINS
            and route.token_from.swap_type == SwapType.ETH
        )
        return (
            eth_from_eth
            or token_to.is_mint_burn
            or token_to.is_wrapped_token
            or token_to == route.intermediate
            or (route.destination_canonical and token_to.swap_type != CANONICAL_POOL_FAMILY)
        )

    def require_indices(self, route: ResolvedRoute) -> None:
        """Raise PoolIndexNotFound for any pool leg this route will read"""
        if not self.origin_is_pass_through(route):
            route.indices.origin
        if not self.destination_is_pass_through(route):
            route.indices.destination

    def origin_amount(
        self,
        request: BridgeRouteRequest,
        route: ResolvedRoute,
        cancel: Optional[threading.Event] = None,
    ) -> int:
        """Amount of the bridge asset produced on the origin chain"""
        amount = request.amount_from
        if self.origin_is_pass_through(route):
            return amount

        position = route.indices.origin

        if route.origin_canonical:
            amounts = position.liquidity_amounts(amount)
            return self._call(
                lambda: self.liquidity_math.deposit_amount(amounts),
                "calculate_token_amount",
                cancel,
            )

        chain_id = route.chain_from.chain_id
        pool_token = _address_or_fail(route.intermediate, chain_id)
        return self._call(
            lambda: self.swap_math.swap_output(chain_id, pool_token, position.index, 0, amount),
            "calculate_swap_origin",
            cancel,
        )

    def destination_amount(
        self,
        amount: int,
        route: ResolvedRoute,
        cancel: Optional[threading.Event] = None,
    ) -> int:
        """Amount of token_to received for amount of the bridge asset"""
        if amount == 0:
            return 0
        if self.destination_is_pass_through(route):
            return amount

        position = route.indices.destination

        if route.destination_canonical:
            return self._call(
                lambda: self.liquidity_math.withdraw_one_token(amount, position.index),
                "calculate_remove_liquidity_one_token",
                cancel,
            )

        chain_id = route.chain_to.chain_id
        pool_token = _address_or_fail(route.intermediate, chain_id)
        return self._call(
            lambda: self.swap_math.swap_output(chain_id, pool_token, 0, position.index, amount),
            "calculate_swap_destination",
            cancel,
        )

    # =========================================================================
    # Estimate
    # =========================================================================

    def estimate(
        self,
        request: BridgeRouteRequest,
        route: ResolvedRoute,
        cancel: Optional[threading.Event] = None,
    ) -> BridgeOutputEstimate:
        """
        Estimate output for an eligible, resolved route

        Raises:
            FeeQueryFailed: Fee oracle failure (recoverable)
            PoolIndexNotFound: Registry inconsistency (fatal)
            OperationCancelled: cancel was set
        """
        check_cancelled(cancel, "estimate")

        if request.amount_from == 0:
            fee = self.query_fee(request, route, cancel)
            logger.debug(f"Zero amount estimate for {request}: fee={fee}")
            return BridgeOutputEstimate(amount_to_receive=0, bridge_fee=fee)

        # Registry errors surface before any read is issued
        self.require_indices(route)

        # Set when either read fails or the caller cancels; stops the other
        # read at its next attempt or backoff
        abort = threading.Event()
        workers = max(1, self.config.max_workers)
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="estimate") as executor:
            fee_future = _submit(executor, lambda: self.query_fee(request, route, abort))
            origin_future = _submit(executor, lambda: self.origin_amount(request, route, abort))

            pending = {fee_future, origin_future}
            try:
                while pending:
                    done, pending = wait(pending, timeout=CANCEL_POLL_SECONDS, return_when=FIRST_EXCEPTION)
                    for future in done:
                        if future.exception() is not None:
                            abort.set()
                            future.result()
                    check_cancelled(cancel, "estimate")
            except BaseException:
                abort.set()
                raise

            origin = origin_future.result()
            fee = fee_future.result()

        bridged = max(origin - fee, 0)
        received = self.destination_amount(bridged, route, cancel)

        logger.debug(
            f"Estimate {request}: origin={origin}, fee={fee}, bridged={bridged}, received={received}"
        )
        return BridgeOutputEstimate(amount_to_receive=received, bridge_fee=fee)


def _address_or_fail(token: Token, chain_id: int) -> str:
    address = token.address(chain_id)
    if address is None:
        raise ConfigurationError.invalid(
            "bridge asset", f"{token.symbol} has no address on chain {chain_id}"
        )
    return address
