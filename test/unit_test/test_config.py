"""
Unit tests for configuration loading
"""

import logging
import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from bridge_adapter.config import (
    Config,
    LoggingConfig,
    RetryConfig,
    RpcConfig,
    SlippageConfig,
    setup_logging,
)


class TestEnvConfig(unittest.TestCase):
    """Environment variable parsing"""

    @patch.dict(os.environ, {"SLIPPAGE_HIGH_BPS": "500", "ORIGIN_DEADLINE_SECONDS": "120"})
    def test_slippage_from_env(self):
        slippage = SlippageConfig()
        self.assertEqual(slippage.high_bps, 500)
        self.assertEqual(slippage.origin_deadline_seconds, 120)
        self.assertEqual(slippage.low_bps, 10)

    @patch.dict(os.environ, {"RETRY_MAX_ATTEMPTS": "not-a-number"})
    def test_malformed_int_falls_back(self):
        retry = RetryConfig()
        self.assertEqual(retry.max_retries, 3)

    @patch.dict(os.environ, {
        "BRIDGE_RPC_URL_ETH": "https://eth.example.com",
        "BRIDGE_RPC_URL_ARBITRUM": "https://arb.example.com",
    })
    def test_rpc_urls_per_chain(self):
        rpc = RpcConfig()
        self.assertEqual(rpc.url_for(1), "https://eth.example.com")
        self.assertEqual(rpc.url_for(42161), "https://arb.example.com")

    def test_explicit_values_override_env(self):
        cfg = Config(retry=RetryConfig(max_retries=7, retry_delay=0.5))
        self.assertEqual(cfg.retry.max_retries, 7)
        self.assertEqual(cfg.retry.retry_delay, 0.5)


class TestSetupLogging(unittest.TestCase):
    """Logging handler installation"""

    def test_file_and_console_handlers(self):
        with tempfile.TemporaryDirectory() as tmp:
            log_file = os.path.join(tmp, "logs", "bridge.log")
            log_config = LoggingConfig(
                log_file=log_file,
                log_level="DEBUG",
                console_output=True,
            )

            logger = setup_logging(log_config, logger_name="bridge_adapter_test")
            try:
                self.assertEqual(logger.level, logging.DEBUG)
                self.assertEqual(len(logger.handlers), 2)
                self.assertTrue(Path(log_file).exists())
            finally:
                for handler in logger.handlers[:]:
                    handler.close()
                    logger.removeHandler(handler)

    def test_console_only(self):
        log_config = LoggingConfig(log_file="", log_level="WARNING", console_output=True)
        logger = setup_logging(log_config, logger_name="bridge_adapter_console_test")
        try:
            self.assertEqual(len(logger.handlers), 1)
            self.assertEqual(logger.level, logging.WARNING)
        finally:
            for handler in logger.handlers[:]:
                logger.removeHandler(handler)


if __name__ == "__main__":
    unittest.main()
