"""
Bridge adapter settings

Every section reads its defaults from the process environment at construction
time, after `.env` next to the package has been merged in. Pass explicit values
to override the environment, e.g. `SlippageConfig(low_bps=5)`.
"""

import os
import logging
from dataclasses import dataclass, field
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Callable, Dict, Optional, TypeVar

from dotenv import load_dotenv

N = TypeVar("N", int, float)

DOTENV_PATH = Path(__file__).resolve().parent.parent / ".env"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
TRUTHY = frozenset({"1", "true", "yes", "on"})


def _merge_dotenv() -> None:
    if DOTENV_PATH.is_file():
        load_dotenv(DOTENV_PATH)


_merge_dotenv()


def _env_str(name: str, fallback: str = "") -> str:
    return os.environ.get(name, fallback)


def _env_number(name: str, fallback: N, cast: Callable[[str], N]) -> N:
    raw = os.environ.get(name)
    if raw is None:
        return fallback
    try:
        return cast(raw)
    except ValueError:
        logging.getLogger(__name__).warning(
            f"{name}={raw!r} is not a valid {cast.__name__}, keeping {fallback}"
        )
        return fallback


def _env_flag(name: str, fallback: bool) -> bool:
    raw = os.environ.get(name)
    return fallback if raw is None else raw.strip().lower() in TRUTHY


def _int_setting(name: str, fallback: int):
    return field(default_factory=lambda: _env_number(name, fallback, int))


# Per-chain RPC endpoints are read from BRIDGE_RPC_URL_<SUFFIX>
RPC_ENV_SUFFIXES: Dict[int, str] = {
    1: "ETH",
    10: "OPTIMISM",
    56: "BSC",
    137: "POLYGON",
    250: "FANTOM",
    288: "BOBA",
    1284: "MOONBEAM",
    1285: "MOONRIVER",
    42161: "ARBITRUM",
    43114: "AVALANCHE",
    1666600000: "HARMONY",
}


def _rpc_urls_from_env() -> Dict[int, str]:
    found = {
        chain_id: _env_str(f"BRIDGE_RPC_URL_{suffix}")
        for chain_id, suffix in RPC_ENV_SUFFIXES.items()
    }
    return {chain_id: url for chain_id, url in found.items() if url}


@dataclass
class RpcConfig:
    """JSON-RPC endpoints keyed by chain id; chains without a URL cannot be read"""
    urls: Dict[int, str] = field(default_factory=_rpc_urls_from_env)
    timeout_seconds: int = _int_setting("RPC_TIMEOUT_SECONDS", 30)

    def url_for(self, chain_id: int) -> Optional[str]:
        return self.urls.get(chain_id)


@dataclass
class SlippageConfig:
    """
    Tolerance tiers in basis points and the two deadline windows

    `origin_deadline_seconds` limits the swap on the sending chain.
    `bridge_deadline_seconds` limits the swap executed on arrival.
    """
    low_bps: int = _int_setting("SLIPPAGE_LOW_BPS", 10)
    medium_bps: int = _int_setting("SLIPPAGE_MEDIUM_BPS", 100)
    high_bps: int = _int_setting("SLIPPAGE_HIGH_BPS", 1000)
    origin_deadline_seconds: int = _int_setting("ORIGIN_DEADLINE_SECONDS", 600)
    bridge_deadline_seconds: int = _int_setting("BRIDGE_DEADLINE_SECONDS", 7 * 24 * 3600)


@dataclass
class RetryConfig:
    max_retries: int = _int_setting("RETRY_MAX_ATTEMPTS", 3)
    retry_delay: float = field(default_factory=lambda: _env_number("RETRY_DELAY", 1.0, float))


@dataclass
class EstimatorConfig:
    # fee lookup + origin leg
    max_workers: int = _int_setting("ESTIMATOR_MAX_WORKERS", 2)


@dataclass
class ContractsConfig:
    """Where to reach BridgeConfigV3; an empty address means the built-in one"""
    bridge_config_address: str = field(default_factory=lambda: _env_str("BRIDGE_CONFIG_ADDRESS"))
    bridge_config_chain_id: int = _int_setting("BRIDGE_CONFIG_CHAIN_ID", 1)


def _timestamped_log_file() -> str:
    from datetime import datetime, timezone
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    return str(Path(__file__).parent / "log" / f"bridge_adapter_{stamp}.log")


@dataclass
class LoggingConfig:
    """
    Log destination and verbosity

    LOG_FILE        target file; set it empty to log to the console only
    LOG_LEVEL       level name, INFO when unset or unknown
    LOG_FORMAT      logging.Formatter pattern
    LOG_CONSOLE     also write to stderr (true/false)
    LOG_MAX_BYTES   rotate once the file reaches this size
    LOG_BACKUP_COUNT  rotated files kept
    """
    log_file: str = field(default_factory=lambda: _env_str("LOG_FILE", _timestamped_log_file()))
    log_level: str = field(default_factory=lambda: _env_str("LOG_LEVEL", "INFO"))
    log_format: str = field(default_factory=lambda: _env_str("LOG_FORMAT", DEFAULT_LOG_FORMAT))
    console_output: bool = field(default_factory=lambda: _env_flag("LOG_CONSOLE", True))
    max_bytes: int = _int_setting("LOG_MAX_BYTES", 10 * 1024 * 1024)
    backup_count: int = _int_setting("LOG_BACKUP_COUNT", 5)

    @property
    def level(self) -> int:
        resolved = logging.getLevelName(self.log_level.upper())
        return resolved if isinstance(resolved, int) else logging.INFO


@dataclass
class Config:
    """
    All adapter settings in one place

        from bridge_adapter.config import config
        config.slippage.high_bps
        config.rpc.url_for(42161)
    """
    rpc: RpcConfig = field(default_factory=RpcConfig)
    slippage: SlippageConfig = field(default_factory=SlippageConfig)
    retry: RetryConfig = field(default_factory=RetryConfig)
    estimator: EstimatorConfig = field(default_factory=EstimatorConfig)
    contracts: ContractsConfig = field(default_factory=ContractsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def reload(cls) -> "Config":
        """Re-read .env and the environment into a fresh instance"""
        _merge_dotenv()
        return cls()


config = Config()


def get_config() -> Config:
    return config


def reload_config() -> Config:
    """Replace the module-level `config`; objects holding the old one keep it"""
    global config
    config = Config.reload()
    return config


def _build_handlers(log_config: LoggingConfig):
    # formatter and level are applied by the caller
    if log_config.log_file:
        target = Path(log_config.log_file)
        target.parent.mkdir(parents=True, exist_ok=True)
        yield RotatingFileHandler(
            target,
            maxBytes=log_config.max_bytes,
            backupCount=log_config.backup_count,
            encoding="utf-8",
        )
    if log_config.console_output:
        yield logging.StreamHandler()


def setup_logging(
    log_config: Optional[LoggingConfig] = None,
    logger_name: str = "bridge_adapter",
) -> logging.Logger:
    """
    Attach file and/or console handlers to `logger_name`.

    Existing handlers on that logger are closed and replaced, so calling this
    again after `reload_config()` does not duplicate output. Missing parent
    directories of the log file are created.

    Args:
        log_config: Settings to apply; the global `config.logging` when None
        logger_name: Root of the logger tree to configure

    Returns:
        The configured logger
    """
    log_config = log_config or config.logging
    formatter = logging.Formatter(log_config.log_format)

    logger = logging.getLogger(logger_name)
    logger.setLevel(log_config.level)
    for stale in list(logger.handlers):
        stale.close()
        logger.removeHandler(stale)

    for handler in _build_handlers(log_config):
        handler.setLevel(log_config.level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    for child in ("infra", "modules", "protocols"):
        logging.getLogger(f"{logger_name}.{child}").setLevel(log_config.level)

    if log_config.log_file:
        logger.info(f"Writing {log_config.log_level} logs to {log_config.log_file}")
    return logger


def enable_file_logging(
    log_file: Optional[str] = None,
    level: str = "INFO",
    console: bool = True,
) -> logging.Logger:
    """Shortcut for setup_logging with a file target and level name"""
    return setup_logging(LoggingConfig(
        log_file=log_file if log_file is not None else config.logging.log_file,
        log_level=level,
        console_output=console,
    ))
