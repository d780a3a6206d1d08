"""
Unit tests for retry logic module
"""

import sys
import threading
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from bridge_adapter.infra.retry import (
    call_with_retry,
    check_cancelled,
    classify_error,
    CorrelationContext,
    generate_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from bridge_adapter.errors import (
    ErrorCode,
    FeeQueryFailed,
    OperationCancelled,
    RouteUnsupported,
    RpcError,
)


class TestClassifyError(unittest.TestCase):
    """Tests for error classification"""

    def test_timeout_error_is_recoverable(self):
        """Timeout errors should be classified as recoverable"""
        is_recoverable, error_code = classify_error(Exception("Connection timeout after 30 seconds"))

        self.assertTrue(is_recoverable)
        self.assertEqual(error_code, ErrorCode.RPC_TIMEOUT)

    def test_rate_limit_error_is_recoverable(self):
        """Rate limit errors should be classified as recoverable"""
        is_recoverable, error_code = classify_error(Exception("Too many requests, rate limit exceeded"))

        self.assertTrue(is_recoverable)
        self.assertEqual(error_code, ErrorCode.RPC_RATE_LIMITED)

    def test_builtin_connection_error(self):
        is_recoverable, error_code = classify_error(ConnectionError("reset by peer"))

        self.assertTrue(is_recoverable)
        self.assertEqual(error_code, ErrorCode.RPC_CONNECTION_FAILED)

    def test_revert_is_terminal(self):
        """Reverts are deterministic and never retried"""
        is_recoverable, error_code = classify_error(Exception("execution reverted: bad index"))

        self.assertFalse(is_recoverable)
        self.assertEqual(error_code, ErrorCode.RPC_CALL_REVERTED)

    def test_adapter_error_keeps_own_flag(self):
        is_recoverable, error_code = classify_error(FeeQueryFailed("oracle down"))
        self.assertTrue(is_recoverable)
        self.assertEqual(error_code, ErrorCode.FEE_QUERY_FAILED)

        is_recoverable, _ = classify_error(RouteUnsupported("nope"))
        self.assertFalse(is_recoverable)

    def test_unknown_error_not_recoverable(self):
        is_recoverable, error_code = classify_error(Exception("Unexpected error"))

        self.assertFalse(is_recoverable)
        self.assertIsNone(error_code)


class TestCallWithRetry(unittest.TestCase):
    """Tests for call_with_retry"""

    def test_success_on_first_attempt(self):
        operation = MagicMock(return_value=42)

        result = call_with_retry(operation, "read", max_retries=3, retry_delay=0)

        self.assertEqual(result, 42)
        self.assertEqual(operation.call_count, 1)

    @patch("bridge_adapter.infra.retry.time.sleep")
    def test_success_after_retries(self, mock_sleep):
        operation = MagicMock(side_effect=[
            Exception("connection reset"),
            Exception("503 service unavailable"),
            7,
        ])

        result = call_with_retry(operation, "read", max_retries=3, retry_delay=1.0)

        self.assertEqual(result, 7)
        self.assertEqual(operation.call_count, 3)
        # Linear backoff: 1s, then 2s
        self.assertEqual([c.args[0] for c in mock_sleep.call_args_list], [1.0, 2.0])

    @patch("bridge_adapter.infra.retry.time.sleep")
    def test_exhausted_recoverable_raises_rpc_error(self, mock_sleep):
        operation = MagicMock(side_effect=Exception("request timed out"))

        with self.assertRaises(RpcError) as ctx:
            call_with_retry(operation, "read", max_retries=2, retry_delay=0.1)

        self.assertEqual(ctx.exception.code, ErrorCode.RPC_TIMEOUT)
        self.assertEqual(operation.call_count, 2)

    def test_revert_fails_fast(self):
        operation = MagicMock(side_effect=Exception("execution reverted"))

        with self.assertRaises(RpcError) as ctx:
            call_with_retry(operation, "calculateSwap", max_retries=5, retry_delay=0)

        self.assertEqual(ctx.exception.code, ErrorCode.RPC_CALL_REVERTED)
        self.assertFalse(ctx.exception.recoverable)
        self.assertEqual(operation.call_count, 1)

    def test_terminal_adapter_error_propagates(self):
        operation = MagicMock(side_effect=RouteUnsupported("no route"))

        with self.assertRaises(RouteUnsupported):
            call_with_retry(operation, "read", max_retries=5, retry_delay=0)

        self.assertEqual(operation.call_count, 1)

    def test_unknown_error_reraised_unchanged(self):
        operation = MagicMock(side_effect=KeyError("missing"))

        with self.assertRaises(KeyError):
            call_with_retry(operation, "read", max_retries=3, retry_delay=0)

        self.assertEqual(operation.call_count, 1)

    def test_cancel_before_first_attempt(self):
        cancel = threading.Event()
        cancel.set()
        operation = MagicMock(return_value=1)

        with self.assertRaises(OperationCancelled):
            call_with_retry(operation, "read", max_retries=3, retry_delay=0, cancel=cancel)

        operation.assert_not_called()

    def test_cancel_during_backoff(self):
        cancel = threading.Event()

        def failing():
            cancel.set()
            raise Exception("connection refused")

        with self.assertRaises(OperationCancelled):
            call_with_retry(failing, "read", max_retries=3, retry_delay=5.0, cancel=cancel)

    def test_check_cancelled(self):
        check_cancelled(None, "noop")
        check_cancelled(threading.Event(), "noop")

        cancel = threading.Event()
        cancel.set()
        with self.assertRaises(OperationCancelled) as ctx:
            check_cancelled(cancel, "estimate")
        self.assertEqual(ctx.exception.operation, "estimate")


class TestCorrelationContext(unittest.TestCase):
    """Tests for correlation ID handling"""

    def test_generate_correlation_id(self):
        cid = generate_correlation_id()
        self.assertEqual(len(cid), 12)
        self.assertNotEqual(cid, generate_correlation_id())

    def test_context_sets_and_resets(self):
        self.assertIsNone(get_correlation_id())

        with CorrelationContext("estimate") as cid:
            self.assertTrue(cid.startswith("estimate_"))
            self.assertEqual(get_correlation_id(), cid)

        self.assertIsNone(get_correlation_id())

    def test_nested_contexts(self):
        with CorrelationContext("outer") as outer:
            with CorrelationContext("inner") as inner:
                self.assertEqual(get_correlation_id(), inner)
            self.assertEqual(get_correlation_id(), outer)

    def test_set_correlation_id(self):
        token = set_correlation_id("manual")
        try:
            self.assertEqual(get_correlation_id(), "manual")
        finally:
            from bridge_adapter.infra.retry import _correlation_id
            _correlation_id.reset(token)


if __name__ == "__main__":
    unittest.main()
