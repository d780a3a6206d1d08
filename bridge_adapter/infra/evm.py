"""
EVM connection helpers using web3.py

Creates read-only Web3 instances per chain for the bridge contract
collaborators. No signing happens here.
"""

import logging
import threading
from typing import Dict, Optional

from web3 import Web3, HTTPProvider

# web3 v7 renamed geth_poa_middleware to ExtraDataToPOAMiddleware
try:
    from web3.middleware import ExtraDataToPOAMiddleware as geth_poa_middleware
except ImportError:
    from web3.middleware import geth_poa_middleware

from ..config import config as global_config
from ..errors import ConfigurationError
from ..types.chains import ChainId, NETWORKS

logger = logging.getLogger(__name__)

# Chains whose block headers carry oversized extraData
POA_CHAINS = frozenset({
    ChainId.BSC,
    ChainId.POLYGON,
    ChainId.FANTOM,
    ChainId.AVALANCHE,
    ChainId.HARMONY,
})


def create_web3(
    rpc_url: str,
    chain_id: int,
    timeout: int = 30,
) -> Web3:
    """
    Create Web3 instance for a chain

    Args:
        rpc_url: RPC endpoint URL
        chain_id: Chain ID the endpoint serves
        timeout: Request timeout in seconds

    Returns:
        Configured Web3 instance
    """
    provider = HTTPProvider(
        rpc_url,
        request_kwargs={"timeout": timeout},
    )

    web3 = Web3(provider)

    if chain_id in POA_CHAINS:
        web3.middleware_onion.inject(geth_poa_middleware, layer=0)
        logger.debug(f"Injected PoA middleware for chain {chain_id}")

    return web3


class Web3Pool:
    """
    Lazily created Web3 instances keyed by chain ID

    Endpoints come from config.rpc (BRIDGE_RPC_URL_<CHAIN>) unless given
    explicitly. Instances are created on first use and reused afterwards;
    concurrent first use of one chain still creates a single instance.
    """

    def __init__(self, rpc_urls: Optional[Dict[int, str]] = None, timeout: Optional[int] = None):
        self._rpc_urls = dict(rpc_urls) if rpc_urls is not None else dict(global_config.rpc.urls)
        self._timeout = timeout if timeout is not None else global_config.rpc.timeout_seconds
        self._instances: Dict[int, Web3] = {}
        self._lock = threading.Lock()

    def has(self, chain_id: int) -> bool:
        return chain_id in self._instances or chain_id in self._rpc_urls

    def get(self, chain_id: int) -> Web3:
        """
        Get the Web3 instance for a chain

        Raises:
            ConfigurationError: If no RPC URL is configured for the chain
        """
        with self._lock:
            web3 = self._instances.get(chain_id)
            if web3 is not None:
                return web3

            url = self._rpc_urls.get(chain_id)
            if not url:
                network = NETWORKS.get(chain_id)
                name = network.name if network else str(chain_id)
                raise ConfigurationError.missing(f"RPC URL for {name} (chain {chain_id})")

            web3 = create_web3(url, chain_id, timeout=self._timeout)
            self._instances[chain_id] = web3
        logger.info(f"Connected Web3 for chain {chain_id}")
        return web3

    def register(self, chain_id: int, web3: Web3):
        """Use an existing Web3 instance for a chain"""
        with self._lock:
            self._instances[chain_id] = web3
