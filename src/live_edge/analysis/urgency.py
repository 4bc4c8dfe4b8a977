"""Map how far a game has progressed to a staking tier."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class UrgencyTier(Enum):
    DEVELOPING = "DEVELOPING"
    PRIME = "PRIME"
    ACT_NOW = "ACT_NOW"
    CLOSING = "CLOSING"


@dataclass(frozen=True)
class Urgency:
    tier: UrgencyTier
    multiplier: float


# (upper bound on elapsed fraction, tier, stake multiplier)
_TIERS: tuple[tuple[float, UrgencyTier, float], ...] = (
    (0.30, UrgencyTier.DEVELOPING, 0.70),
    (0.60, UrgencyTier.PRIME, 1.00),
    (0.85, UrgencyTier.ACT_NOW, 0.85),
)
_CLOSING = Urgency(UrgencyTier.CLOSING, 0.50)


def classify_urgency(elapsed_fraction: float) -> Urgency:
    """Mid-game is PRIME; very early and very late signals are staked down."""
    for bound, tier, multiplier in _TIERS:
        if elapsed_fraction < bound:
            return Urgency(tier, multiplier)
    return _CLOSING
