"""American-odds helpers and half-Kelly stake sizing."""

from __future__ import annotations

from dataclasses import dataclass

BASE_EDGE = 0.035
EDGE_PER_EXTRA_SIGNAL = 0.01
MAX_EDGE = 0.08
MIN_EDGE = 0.03
MAX_WIN_PROB = 0.90
KELLY_FRACTION = 0.5
MAX_STAKE_FRACTION = 0.05


@dataclass
class StakeSizing:
    """Result of sizing one signal.

    Attributes:
        edge: Assumed edge over the market-implied probability
        win_prob: Implied probability plus edge, capped at 90%
        fraction: Bankroll fraction after half-Kelly, urgency and the 5% cap
        stake: Dollar stake on the nominal bankroll
    """

    edge: float
    win_prob: float
    fraction: float
    stake: float


def implied_probability(price: int) -> float:
    """Market-implied win probability of an American price (vig included)."""
    if price < 0:
        return -price / (-price + 100)
    return 100 / (price + 100)


def decimal_payout(price: int) -> float:
    """Net profit per unit staked at an American price."""
    if price > 0:
        return price / 100
    return 100 / abs(price)


def settle_payout(stake: float, price: int, won: bool) -> float:
    """Realized profit/loss of a moneyline stake."""
    if not won:
        return -stake
    return stake * decimal_payout(price)


def assumed_edge(signal_count: int) -> float:
    """3.5% for one signal, +1% per additional independent signal, capped at 8%."""
    extra = max(0, signal_count - 1)
    return min(MAX_EDGE, BASE_EDGE + EDGE_PER_EXTRA_SIGNAL * extra)


def kelly_stake(
    implied_prob: float,
    price: int,
    signal_count: int,
    urgency_multiplier: float = 1.0,
    bankroll: float = 20000.0,
) -> StakeSizing:
    """Size a stake with half-Kelly on the edge-adjusted probability.

    f* = (b * p - q) / b with b the net payout per unit, then halved, scaled
    by the urgency multiplier and capped at 5% of bankroll. An assumed edge
    under 3% is treated as noise and stakes nothing.
    """
    edge = assumed_edge(signal_count)
    p = min(MAX_WIN_PROB, implied_prob + edge)

    if edge < MIN_EDGE:
        return StakeSizing(edge=edge, win_prob=p, fraction=0.0, stake=0.0)

    q = 1.0 - p
    b = decimal_payout(price)
    full_kelly = (b * p - q) / b
    if full_kelly <= 0:
        return StakeSizing(edge=edge, win_prob=p, fraction=0.0, stake=0.0)

    fraction = min(full_kelly * KELLY_FRACTION * urgency_multiplier, MAX_STAKE_FRACTION)
    fraction = max(0.0, fraction)
    return StakeSizing(edge=edge, win_prob=p, fraction=fraction, stake=round(bankroll * fraction))
