"""Combine per-team evidence into one directional pick per game.

Two categories of evidence are gathered for both teams:

- three-point fragile: a lead built on hot outside shooting inside a
  margin band
- star coil: a tracked scorer well below their expected pace inside a
  margin band and time window, tiered by how the rest of the roster is
  holding up (elite / standard / weak) or by a damage-locked deficit

Each category is looked for with the strict profile first; the soft profile
only fills in a category the strict pass left empty.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from live_edge.analysis.cast import analyze_supporting_cast
from live_edge.analysis.clock import expected_by_time
from live_edge.analysis.durability import analyze_scoring_durability
from live_edge.analysis.momentum import MomentumTracker
from live_edge.common.types import Side, other_side
from live_edge.games.models import GameSnapshot
from live_edge.leagues import CoilProfile, FragileProfile, LeagueConfig
from live_edge.roster.stars import StarTable
from live_edge.signals.models import CoilTier, Evidence, Pick, SignalType

logger = logging.getLogger(__name__)

SIDES: tuple[Side, Side] = ("away", "home")

ELITE_FADE = 1.5
STANDARD_FADE = 1.0
LOCKED_FADE = 1.0
FRAGILE_FADE = 1.0
CONFLICT_MARGIN = 0.5
ENGINE_MIN_MINUTES = 10


@dataclass
class _FragileHit:
    side: Side
    evidence: Evidence


@dataclass
class _CoilScan:
    tiers: dict[str, CoilTier] = field(default_factory=dict)
    evidence: list[Evidence] = field(default_factory=list)
    found: bool = False


def _check_fragile(
    league: LeagueConfig,
    profile: FragileProfile,
    snapshot: GameSnapshot,
    side: Side,
    elapsed: float,
    soft: bool,
) -> _FragileHit | None:
    team = snapshot.team(side)
    opp = snapshot.opponent(side)
    shooting = team.shooting

    if not profile.is_hot(shooting.three_pct, shooting.three_attempted):
        return None
    lead = snapshot.lead(side)
    if lead < profile.min_lead or lead > profile.max_lead or team.score < profile.min_score:
        return None
    durability = analyze_scoring_durability(league, team.score, shooting.three_made, opp.score)
    if durability.pct3 < profile.fragile_pct:
        return None

    minutes = elapsed or 1.0
    opp_non_three_ppm = (opp.score - opp.shooting.three_made * 3) / minutes
    no_engine = opp_non_three_ppm < league.engine_threshold and minutes >= ENGINE_MIN_MINUTES

    prefix = "soft " if soft else ""
    text = (
        f"{team.abbr} {prefix}3PT FRAGILE: {shooting.three_pct:.0f}% on "
        f"{shooting.three_attempted} att, {durability.pct3:.0f}% 3PT-dependent, "
        f"lead {lead}pts. {'Weak opp engine.' if no_engine else 'Opp has engine.'}"
    )
    evidence = Evidence(
        signal_type=SignalType.THREE_PT_FRAGILE,
        team=team.abbr,
        text=text,
        strong=not soft and not no_engine,
        soft=soft,
    )
    return _FragileHit(side=side, evidence=evidence)


def _coil_tier(locked: bool, cast_strong: bool, cast_moderate: bool) -> CoilTier:
    if locked:
        return CoilTier.LOCKED
    if cast_strong:
        return CoilTier.ELITE
    if cast_moderate:
        return CoilTier.STANDARD
    return CoilTier.WEAK


def _scan_coil(
    league: LeagueConfig,
    profile: CoilProfile,
    snapshot: GameSnapshot,
    stars: StarTable,
    momentum: MomentumTracker,
    elapsed: float,
    soft: bool,
) -> _CoilScan:
    scan = _CoilScan()
    if not profile.window.contains(elapsed, snapshot.period):
        return scan
    if snapshot.margin > profile.max_margin:
        return scan

    for leader in snapshot.away.leaders + snapshot.home.leaders:
        star = stars.match(league, leader.name, leader.team)
        if star is None:
            continue
        side = snapshot.side_of(leader.team)
        if side is None:
            continue
        expected = expected_by_time(league, star.ppg, elapsed)
        pace = leader.points / expected if expected > 0 else 1.0
        if pace >= profile.max_pace:
            continue

        team = snapshot.team(side)
        opp = snapshot.opponent(side)
        cast = analyze_supporting_cast(
            league, leader.points, team.score, opp.score, star.ppg, elapsed,
        )
        trailing = snapshot.lead(side) < 0
        locked = trailing and momentum.damage_lock(snapshot.event_id, side, elapsed).locked
        tier = _coil_tier(locked, cast.strong, cast.moderate)

        if soft:
            accepted = tier is not CoilTier.LOCKED and (
                profile.accept_weak or tier is not CoilTier.WEAK
            )
            if not accepted:
                continue
            scan.found = True
            scan.tiers.setdefault(leader.team, tier)
            scan.evidence.append(Evidence(
                signal_type=SignalType.STAR_COIL,
                team=leader.team,
                text=(
                    f"{leader.name} soft coil {leader.points:.0f}pts "
                    f"({pace * 100:.0f}% pace). Cast gap: {cast.cast_gap:.0f}. {tier.value.upper()}."
                ),
                strong=False,
                soft=True,
            ))
            continue

        if tier in (CoilTier.ELITE, CoilTier.STANDARD):
            scan.found = True
            scan.tiers[leader.team] = tier
            flips = " Regression flips!" if cast.regression_flips else ""
            scan.evidence.append(Evidence(
                signal_type=SignalType.STAR_COIL,
                team=leader.team,
                text=(
                    f"{leader.name} {leader.points:.0f}pts (exp ~{expected:.0f}, "
                    f"{pace * 100:.0f}% pace). Cast gap: {cast.cast_gap:.0f}. "
                    f"{tier.value.upper()}.{flips}"
                ),
            ))
        elif tier is CoilTier.LOCKED:
            scan.tiers[leader.team] = tier
            scan.evidence.append(Evidence(
                signal_type=SignalType.STAR_COIL,
                team=leader.team,
                text=f"{leader.name} LOCKED: deficit baked in",
                strong=False,
            ))
    return scan


def _fade_scores(
    snapshot: GameSnapshot,
    fragile_hits: list[_FragileHit],
    coil_tiers: dict[str, CoilTier],
) -> dict[Side, float]:
    fade: dict[Side, float] = {"away": 0.0, "home": 0.0}

    # A fragile leader is only worth fading when the opponent can score inside
    for hit in fragile_hits:
        if hit.evidence.strong:
            fade[hit.side] += FRAGILE_FADE

    # An elite/standard coil backs the star's team; a locked one fades it
    for abbr, tier in coil_tiers.items():
        side = snapshot.side_of(abbr)
        if side is None:
            continue
        if tier is CoilTier.ELITE:
            fade[other_side(side)] += ELITE_FADE
        elif tier is CoilTier.STANDARD:
            fade[other_side(side)] += STANDARD_FADE
        elif tier is CoilTier.LOCKED:
            fade[side] += LOCKED_FADE
    return fade


def aggregate(
    league: LeagueConfig,
    snapshot: GameSnapshot,
    stars: StarTable,
    momentum: MomentumTracker,
    elapsed: float,
) -> Pick | None:
    """Run every heuristic for both teams and pick a side, or None if nothing fired."""
    evidence: list[Evidence] = []

    strict_fragile = [
        hit for side in SIDES
        if (hit := _check_fragile(league, league.strict_fragile, snapshot, side, elapsed, soft=False))
    ]
    evidence.extend(hit.evidence for hit in strict_fragile)
    has_fragile = bool(strict_fragile)
    if not has_fragile:
        soft_fragile = [
            hit for side in SIDES
            if (hit := _check_fragile(league, league.soft_fragile, snapshot, side, elapsed, soft=True))
        ]
        evidence.extend(hit.evidence for hit in soft_fragile)
        has_fragile = bool(soft_fragile)

    coil = _scan_coil(league, league.strict_coil, snapshot, stars, momentum, elapsed, soft=False)
    evidence.extend(coil.evidence)
    coil_tiers = dict(coil.tiers)
    has_coil = coil.found
    if not has_coil:
        soft_coil = _scan_coil(league, league.soft_coil, snapshot, stars, momentum, elapsed, soft=True)
        evidence.extend(soft_coil.evidence)
        for abbr, tier in soft_coil.tiers.items():
            coil_tiers.setdefault(abbr, tier)
        has_coil = soft_coil.found

    signal_types = [
        t for t, present in (
            (SignalType.THREE_PT_FRAGILE, has_fragile),
            (SignalType.STAR_COIL, has_coil),
        ) if present
    ]
    if not signal_types:
        return None

    signal_count = len(signal_types)
    is_combined = signal_count == 2

    fade = _fade_scores(snapshot, strict_fragile, coil_tiers)

    conflicted = False
    if fade["away"] > 0 and fade["home"] > 0 and abs(fade["away"] - fade["home"]) < CONFLICT_MARGIN:
        conflicted = True
        is_combined = False
        signal_count = 1
        logger.debug("%s: fade scores cancel (%.1f vs %.1f)", snapshot.label, fade["away"], fade["home"])

    # Home court always pushes toward the home side: a tailwind for a home
    # pick, a headwind against a road pick
    home_court_edge = False
    if league.home_court_enabled and (fade["away"] > 0 or fade["home"] > 0):
        fade["away"] += league.home_court_boost
        home_court_edge = True

    if fade["away"] > fade["home"]:
        bet_side: Side = "home"
    elif fade["home"] > fade["away"]:
        bet_side = "away"
    elif fade["away"] > 0:
        bet_side = "home"
    else:
        bet_side = snapshot.trailing_side

    return Pick(
        bet_side=bet_side,
        bet_team=snapshot.team(bet_side).abbr,
        fade_team=snapshot.opponent(bet_side).abbr,
        signal_types=signal_types,
        evidence=evidence,
        is_combined=is_combined,
        signal_count=signal_count,
        home_court_edge=home_court_edge,
        away_fade=fade["away"],
        home_fade=fade["home"],
        conflicted=conflicted,
    )
