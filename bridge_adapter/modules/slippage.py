"""
Slippage thresholds and deadlines

Minimum-output amounts per tolerance tier, plus the two deadlines every
composite route carries: a short one for the origin-chain leg and a long
one for settlement on the destination chain.
"""

import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional

from ..config import SlippageConfig, config as global_config

BPS_DENOMINATOR = 10_000


class SlippageTier(Enum):
    """Tolerance bands; more chained swap legs use a looser band"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class TierThresholds:
    """
    Minimum acceptable outputs for one tier

    Attributes:
        min_origin: amount_from less tolerance (origin-chain swap output)
        min_dest: amount_to less tolerance (destination-chain swap output)
        min_dest_from_origin: amount_to less tolerance applied twice
            (destination swap fed by a slipped origin swap)
    """
    min_origin: int
    min_dest: int
    min_dest_from_origin: int


@dataclass(frozen=True)
class SlippageQuote:
    """Deadlines (unix seconds) and per-tier thresholds for one request"""
    origin_deadline: int
    bridge_deadline: int
    tiers: Dict[SlippageTier, TierThresholds]

    def tier(self, tier: SlippageTier) -> TierThresholds:
        return self.tiers[tier]

    @property
    def low(self) -> TierThresholds:
        return self.tiers[SlippageTier.LOW]

    @property
    def medium(self) -> TierThresholds:
        return self.tiers[SlippageTier.MEDIUM]

    @property
    def high(self) -> TierThresholds:
        return self.tiers[SlippageTier.HIGH]


def apply_tolerance(amount: int, bps: int) -> int:
    """amount * (1 - bps / 10000), rounded down"""
    return amount * (BPS_DENOMINATOR - bps) // BPS_DENOMINATOR


class SlippageCalculator:
    """
    Derive deadlines and minimum outputs from requested amounts

    Tolerances and deadline windows come from SlippageConfig; the clock is
    injectable so quotes are reproducible in tests.
    """

    def __init__(
        self,
        slippage_config: Optional[SlippageConfig] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        self.config = slippage_config or global_config.slippage
        self.clock = clock or time.time

    def tolerance_bps(self, tier: SlippageTier) -> int:
        if tier == SlippageTier.LOW:
            return self.config.low_bps
        if tier == SlippageTier.MEDIUM:
            return self.config.medium_bps
        return self.config.high_bps

    def compute(self, amount_from: int, amount_to: int) -> SlippageQuote:
        now = int(self.clock())

        tiers = {}
        for tier in SlippageTier:
            bps = self.tolerance_bps(tier)
            tiers[tier] = TierThresholds(
                min_origin=apply_tolerance(amount_from, bps),
                min_dest=apply_tolerance(amount_to, bps),
                min_dest_from_origin=apply_tolerance(apply_tolerance(amount_to, bps), bps),
            )

        return SlippageQuote(
            origin_deadline=now + self.config.origin_deadline_seconds,
            bridge_deadline=now + self.config.bridge_deadline_seconds,
            tiers=tiers,
        )
