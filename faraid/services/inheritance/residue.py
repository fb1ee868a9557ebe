from __future__ import annotations

import logging
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Callable, Iterable, Optional

from .categories import COLLATERAL_AGNATES, RelativeCategory, is_female
from .models import ZERO, LegalBasis
from .shares import HouseholdContext, Portion, is_spouse

logger = logging.getLogger(__name__)

C = RelativeCategory


@dataclass(frozen=True, slots=True)
class ResidueTier:
    """One rung of the residuary ladder.

    The tier is reached when any of ``leaders`` is present and unblocked.
    ``partners`` then join the leaders in the same pool, males taking two
    parts per head and females one.
    """

    leaders: tuple[RelativeCategory, ...]
    partners: tuple[RelativeCategory, ...] = ()
    condition: Optional[Callable[[HouseholdContext], bool]] = None
    equal_heads: bool = False

    @property
    def members(self) -> tuple[RelativeCategory, ...]:
        return self.leaders + self.partners

    def reached(self, ctx: HouseholdContext) -> bool:
        if not any(ctx.active(category) for category in self.leaders):
            return False
        return self.condition is None or self.condition(ctx)

    def weight(self, category: RelativeCategory) -> int:
        if self.equal_heads:
            return 1
        return 1 if is_female(category) else 2

    def divide(self, ctx: HouseholdContext, residue: Fraction, basis: LegalBasis) -> list[Portion]:
        heads = [(category, ctx.active(category)) for category in self.members]
        heads = [(category, count) for category, count in heads if count]
        parts = sum(self.weight(category) * count for category, count in heads)
        if parts <= 0:
            raise ValueError("residue tier reached without members")
        return [
            Portion(category, basis, residue * self.weight(category) * count / parts, count)
            for category, count in heads
        ]


def _with_daughters(ctx: HouseholdContext) -> bool:
    return ctx.has_female_descendant


RESIDUE_TIERS: tuple[ResidueTier, ...] = (
    ResidueTier((C.SON,), (C.DAUGHTER,)),
    ResidueTier((C.GRANDSON,), (C.GRANDDAUGHTER,)),
    ResidueTier((C.FATHER,)),
    ResidueTier((C.PATERNAL_GRANDFATHER,)),
    ResidueTier((C.FULL_BROTHER,), (C.FULL_SISTER,)),
    ResidueTier((C.FULL_SISTER,), condition=_with_daughters),
    ResidueTier((C.PATERNAL_BROTHER,), (C.PATERNAL_SISTER,)),
    ResidueTier((C.PATERNAL_SISTER,), condition=_with_daughters),
    *(ResidueTier((category,)) for category in COLLATERAL_AGNATES),
)

DISTANT_KIN_TIERS: tuple[ResidueTier, ...] = (
    ResidueTier((C.DAUGHTERS_SON, C.DAUGHTERS_DAUGHTER)),
    ResidueTier((C.SISTERS_SON,)),
    ResidueTier((C.MATERNAL_UNCLE, C.MATERNAL_AUNT, C.PATERNAL_AUNT), equal_heads=True),
)

_RESIDUARY_CAPABLE = frozenset(category for tier in RESIDUE_TIERS for category in tier.members)
_DISTANT_KIN_CAPABLE = frozenset(category for tier in DISTANT_KIN_TIERS for category in tier.members)


@dataclass(frozen=True, slots=True)
class ResidueOutcome:
    portions: tuple[Portion, ...] = ()
    winner: Optional[ResidueTier] = None
    # Present, unblocked claimants that lost the precedence race.
    outranked: tuple[RelativeCategory, ...] = ()

    @property
    def claimed(self) -> bool:
        return self.winner is not None


def _first_reached(tiers: Iterable[ResidueTier], ctx: HouseholdContext) -> Optional[ResidueTier]:
    for tier in tiers:
        if tier.reached(ctx):
            return tier
    return None


def _losers(
    ctx: HouseholdContext,
    capable: frozenset[RelativeCategory],
    winner: ResidueTier,
) -> tuple[RelativeCategory, ...]:
    return tuple(
        category
        for category in RelativeCategory
        if category in capable and category not in winner.members and ctx.active(category)
    )


def distribute_residue(ctx: HouseholdContext, residue: Fraction) -> ResidueOutcome:
    """Give the residue to the nearest residuary tier, winner takes all."""
    winner = _first_reached(RESIDUE_TIERS, ctx)
    if winner is None:
        return ResidueOutcome()
    outranked = _losers(ctx, _RESIDUARY_CAPABLE, winner)
    if residue <= 0:
        return ResidueOutcome(winner=winner, outranked=outranked)
    logger.debug("Residue %s goes to %s", residue, [item.value for item in winner.leaders])
    return ResidueOutcome(
        portions=tuple(winner.divide(ctx, residue, LegalBasis.RESIDUARY)),
        winner=winner,
        outranked=outranked,
    )


def distribute_to_distant_kin(ctx: HouseholdContext, residue: Fraction) -> ResidueOutcome:
    winner = _first_reached(DISTANT_KIN_TIERS, ctx)
    if winner is None or residue <= 0:
        return ResidueOutcome()
    return ResidueOutcome(
        portions=tuple(winner.divide(ctx, residue, LegalBasis.RESIDUARY)),
        winner=winner,
        outranked=_losers(ctx, _DISTANT_KIN_CAPABLE, winner),
    )


@dataclass(frozen=True, slots=True)
class RaddOutcome:
    portions: tuple[Portion, ...]
    applied: bool = False
    returned: Fraction = field(default=ZERO)


def apply_radd(portions: Iterable[Portion], residue: Fraction) -> RaddOutcome:
    """Return the residue to the fixed sharers pro rata, spouses excluded."""
    items = tuple(portions)
    base = sum((item.fraction for item in items if not is_spouse(item.category)), ZERO)
    if residue <= 0 or base <= 0:
        return RaddOutcome(portions=items)
    adjusted = []
    for item in items:
        if is_spouse(item.category):
            adjusted.append(item)
            continue
        increased = item.fraction + item.fraction / base * residue
        adjusted.append(Portion(item.category, item.basis, increased, item.count))
    logger.debug("Radd: %s returned over base %s", residue, base)
    return RaddOutcome(portions=tuple(adjusted), applied=True, returned=residue)
