"""
Retries, cancellation and correlation ids for read-only calls

Every read the adapter makes against a chain (fee oracle, pool math, balances
and allowances) goes through `call_with_retry`. Log lines emitted while a
`CorrelationContext` is active are prefixed with its id, so one estimate or
build can be followed across the fee, origin and destination reads.
"""

import logging
import threading
import time
import uuid
import contextvars
from typing import Callable, Optional, Tuple, TypeVar

from web3.exceptions import ContractLogicError

from ..errors import BridgeAdapterError, ErrorCode, OperationCancelled, RpcError
from ..config import config as global_config

logger = logging.getLogger(__name__)

T = TypeVar("T")

_correlation_id: "contextvars.ContextVar[Optional[str]]" = contextvars.ContextVar(
    "bridge_adapter_correlation_id", default=None
)


def generate_correlation_id() -> str:
    return uuid.uuid4().hex[:12]


def get_correlation_id() -> Optional[str]:
    return _correlation_id.get()


def set_correlation_id(correlation_id: Optional[str]) -> contextvars.Token:
    """Bind `correlation_id` to the current context; reset with the returned token"""
    return _correlation_id.set(correlation_id)


class CorrelationContext:
    """
    Scope a fresh correlation id to a `with` block.

        with CorrelationContext("estimate") as cid:
            fee = call_with_retry(read_fee, "bridge_fee")

    Ids look like `estimate_3f9c0a1b2d4e`. Nested contexts restore the outer
    id on exit.
    """

    def __init__(self, prefix: Optional[str] = None):
        suffix = generate_correlation_id()
        self.correlation_id = f"{prefix}_{suffix}" if prefix else suffix
        self._token: Optional[contextvars.Token] = None

    def __enter__(self) -> str:
        self._token = set_correlation_id(self.correlation_id)
        return self.correlation_id

    def __exit__(self, exc_type, exc_val, exc_tb):
        token, self._token = self._token, None
        if token is not None:
            _correlation_id.reset(token)


def _log_attempt(level: int, operation_name: str, attempt: int, attempts: int, text: str, **fields):
    cid = get_correlation_id()
    prefix = f"[{cid}] " if cid else ""
    logger.log(
        level,
        f"{prefix}[{operation_name}] [{attempt}/{attempts}] {text}",
        extra={"correlation_id": cid, "operation": operation_name, "attempt": attempt, **fields},
    )


REVERT_MARKERS = ("execution reverted", "revert", "invalid opcode", "out of gas")

# First matching row wins, so "connection timeout" is a timeout
TRANSIENT_MARKERS: Tuple[Tuple[ErrorCode, Tuple[str, ...]], ...] = (
    (ErrorCode.RPC_TIMEOUT, ("timeout", "timed out", "etimedout")),
    (ErrorCode.RPC_RATE_LIMITED, ("rate limit", "too many requests", "429")),
    (ErrorCode.RPC_CONNECTION_FAILED, ("connection", "network", "socket", "econnreset", "enotfound")),
    (ErrorCode.RPC_INVALID_RESPONSE, (
        "502", "503", "504", "service unavailable", "temporarily unavailable",
        "request failed", "header not found",
    )),
)


def classify_error(error: Exception) -> Tuple[bool, Optional[ErrorCode]]:
    """
    Decide whether a failed read is worth repeating.

    Adapter errors report their own `recoverable` flag. Reverts, whether raised
    as ContractLogicError or only visible in the message, never are. Anything
    else is matched against TRANSIENT_MARKERS by message text.

    Returns:
        (recoverable, error_code); error_code is None for unrecognised errors
    """
    if isinstance(error, BridgeAdapterError):
        return error.recoverable, error.code
    if isinstance(error, ContractLogicError):
        return False, ErrorCode.RPC_CALL_REVERTED

    text = str(error).lower()
    if any(marker in text for marker in REVERT_MARKERS):
        return False, ErrorCode.RPC_CALL_REVERTED

    if isinstance(error, TimeoutError):
        return True, ErrorCode.RPC_TIMEOUT
    if isinstance(error, ConnectionError):
        return True, ErrorCode.RPC_CONNECTION_FAILED

    for code, markers in TRANSIENT_MARKERS:
        if any(marker in text for marker in markers):
            return True, code
    return False, None


def check_cancelled(cancel: Optional[threading.Event], operation_name: str):
    if cancel is not None and cancel.is_set():
        raise OperationCancelled(operation_name)


def _backoff(delay: float, cancel: Optional[threading.Event], operation_name: str):
    if cancel is None:
        time.sleep(delay)
    elif cancel.wait(delay):
        raise OperationCancelled(operation_name)


def _final_error(operation_name: str, error: Exception, code: Optional[ErrorCode], recoverable: bool, attempts: int):
    if code == ErrorCode.RPC_CALL_REVERTED:
        return RpcError.reverted(operation_name, error)
    if recoverable:
        return RpcError(
            f"{operation_name} still failing after {attempts} attempts: {error}",
            code or ErrorCode.RPC_CONNECTION_FAILED,
            original_error=error,
        )
    return None


def call_with_retry(
    operation: Callable[[], T],
    operation_name: str,
    max_retries: Optional[int] = None,
    retry_delay: Optional[float] = None,
    cancel: Optional[threading.Event] = None,
) -> T:
    """
    Run `operation` until it succeeds, fails terminally or runs out of attempts.

    Attempt n sleeps `retry_delay * n` before attempt n + 1. Setting `cancel`
    aborts before the next attempt or during a backoff sleep with
    OperationCancelled.

    Failures surface as:
      - adapter errors: re-raised as is
      - reverts: RpcError with RPC_CALL_REVERTED, after the first attempt
      - transient errors on the last attempt: RpcError with the classified code
      - anything unrecognised: re-raised as is, without retrying

    Args:
        operation: Zero-argument callable doing the read
        operation_name: Label used in logs and errors
        max_retries: Attempt limit, `config.retry.max_retries` when None
        retry_delay: Backoff unit in seconds, `config.retry.retry_delay` when None
        cancel: Event checked before each attempt
    """
    attempts = max(1, global_config.retry.max_retries if max_retries is None else max_retries)
    delay = global_config.retry.retry_delay if retry_delay is None else retry_delay

    attempt = 0
    while True:
        attempt += 1
        check_cancelled(cancel, operation_name)
        try:
            result = operation()
        except OperationCancelled:
            raise
        except Exception as e:
            recoverable, code = classify_error(e)
            code_value = code.value if code else None

            if recoverable and attempt < attempts:
                _log_attempt(logging.WARNING, operation_name, attempt, attempts,
                             f"retrying after: {e}", error_code=code_value)
                _backoff(delay * attempt, cancel, operation_name)
                continue

            _log_attempt(logging.WARNING if recoverable else logging.ERROR, operation_name,
                         attempt, attempts, f"giving up: {e}", error_code=code_value)
            if isinstance(e, BridgeAdapterError):
                raise
            wrapped = _final_error(operation_name, e, code, recoverable, attempts)
            if wrapped is None:
                raise
            raise wrapped from e

        if attempt > 1:
            _log_attempt(logging.INFO, operation_name, attempt, attempts, "recovered")
        return result
