from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from fractions import Fraction
from typing import Callable, Optional

from .categories import (
    DESCENDANTS,
    FEMALE_DESCENDANTS,
    GRANDMOTHERS,
    MATERNAL_SIBLINGS,
    MALE_DESCENDANTS,
    SIBLINGS,
    SPOUSES,
    RelativeCategory,
)
from .models import ONE, ZERO, HeirSet, LegalBasis

logger = logging.getLogger(__name__)

C = RelativeCategory


@dataclass(frozen=True, slots=True)
class HouseholdContext:
    heirs: HeirSet
    blocked: frozenset[RelativeCategory]

    def active(self, category: RelativeCategory) -> int:
        if category in self.blocked:
            return 0
        return self.heirs.count(category)

    @property
    def has_descendant(self) -> bool:
        return self.heirs.has(*DESCENDANTS)

    @property
    def has_male_descendant(self) -> bool:
        return self.heirs.has(*MALE_DESCENDANTS)

    @property
    def has_female_descendant(self) -> bool:
        return self.heirs.has(*FEMALE_DESCENDANTS)

    @property
    def sibling_count(self) -> int:
        # Blocked siblings still reduce the mother to a sixth.
        return self.heirs.total(SIBLINGS)

    @property
    def spouse_share(self) -> Fraction:
        if self.active(C.HUSBAND):
            return Fraction(1, 4) if self.has_descendant else Fraction(1, 2)
        if self.active(C.WIFE):
            return Fraction(1, 8) if self.has_descendant else Fraction(1, 4)
        return ZERO


@dataclass(frozen=True, slots=True)
class Portion:
    """A category's slice of the whole estate before amounts are attached."""

    category: RelativeCategory
    basis: LegalBasis
    fraction: Fraction
    count: int


@dataclass(frozen=True, slots=True)
class FixedClaim:
    """A Quranic share held jointly by its members, split per head."""

    fraction: Fraction
    members: tuple[tuple[RelativeCategory, int], ...]
    umariyyatan: bool = False

    @property
    def head_count(self) -> int:
        return sum(count for _, count in self.members)

    def split(self, fraction: Optional[Fraction] = None) -> list[Portion]:
        total = self.fraction if fraction is None else fraction
        heads = self.head_count
        if heads <= 0:
            raise ValueError("fixed claim without members")
        return [
            Portion(category, LegalBasis.FIXED, total * count / heads, count)
            for category, count in self.members
        ]


def _claim(fraction: Fraction, *members: tuple[RelativeCategory, int], **flags: bool) -> FixedClaim:
    return FixedClaim(fraction, tuple(item for item in members if item[1] > 0), **flags)


def _one_or_many(count: int) -> Fraction:
    return Fraction(1, 2) if count == 1 else Fraction(2, 3)


def _husband(ctx: HouseholdContext) -> Optional[FixedClaim]:
    count = ctx.active(C.HUSBAND)
    if not count:
        return None
    return _claim(ctx.spouse_share, (C.HUSBAND, count))


def _wives(ctx: HouseholdContext) -> Optional[FixedClaim]:
    count = ctx.active(C.WIFE)
    if not count:
        return None
    return _claim(ctx.spouse_share, (C.WIFE, count))


def _mother(ctx: HouseholdContext) -> Optional[FixedClaim]:
    if not ctx.active(C.MOTHER):
        return None
    if ctx.has_descendant or ctx.sibling_count >= 2:
        return _claim(Fraction(1, 6), (C.MOTHER, 1))
    spouse_share = ctx.spouse_share
    if ctx.active(C.FATHER) and spouse_share:
        # Umariyyatan: a third of what the spouse leaves, not of the whole.
        return _claim((ONE - spouse_share) / 3, (C.MOTHER, 1), umariyyatan=True)
    return _claim(Fraction(1, 3), (C.MOTHER, 1))


def _father(ctx: HouseholdContext) -> Optional[FixedClaim]:
    if ctx.active(C.FATHER) and ctx.has_descendant:
        return _claim(Fraction(1, 6), (C.FATHER, 1))
    return None


def _grandfather(ctx: HouseholdContext) -> Optional[FixedClaim]:
    if ctx.active(C.PATERNAL_GRANDFATHER) and ctx.has_descendant:
        return _claim(Fraction(1, 6), (C.PATERNAL_GRANDFATHER, 1))
    return None


def _daughters(ctx: HouseholdContext) -> Optional[FixedClaim]:
    count = ctx.active(C.DAUGHTER)
    if not count or ctx.active(C.SON):
        return None
    return _claim(_one_or_many(count), (C.DAUGHTER, count))


def _granddaughters(ctx: HouseholdContext) -> Optional[FixedClaim]:
    count = ctx.active(C.GRANDDAUGHTER)
    if not count or ctx.active(C.GRANDSON):
        return None
    daughters = ctx.active(C.DAUGHTER)
    if daughters == 0:
        return _claim(_one_or_many(count), (C.GRANDDAUGHTER, count))
    if daughters == 1:
        return _claim(Fraction(1, 6), (C.GRANDDAUGHTER, count))
    return None


def _grandmothers(ctx: HouseholdContext) -> Optional[FixedClaim]:
    members = [(category, ctx.active(category)) for category in RelativeCategory if category in GRANDMOTHERS]
    if not any(count for _, count in members):
        return None
    return _claim(Fraction(1, 6), *members)


def _maternal_siblings(ctx: HouseholdContext) -> Optional[FixedClaim]:
    members = [
        (C.MATERNAL_BROTHER, ctx.active(C.MATERNAL_BROTHER)),
        (C.MATERNAL_SISTER, ctx.active(C.MATERNAL_SISTER)),
    ]
    heads = sum(count for _, count in members)
    if not heads:
        return None
    return _claim(Fraction(1, 6) if heads == 1 else Fraction(1, 3), *members)


def _full_sisters(ctx: HouseholdContext) -> Optional[FixedClaim]:
    count = ctx.active(C.FULL_SISTER)
    if not count or ctx.active(C.FULL_BROTHER) or ctx.has_female_descendant:
        return None
    return _claim(_one_or_many(count), (C.FULL_SISTER, count))


def _paternal_sisters(ctx: HouseholdContext) -> Optional[FixedClaim]:
    count = ctx.active(C.PATERNAL_SISTER)
    if not count or ctx.active(C.PATERNAL_BROTHER) or ctx.has_female_descendant:
        return None
    full_sisters = ctx.active(C.FULL_SISTER)
    if full_sisters == 0:
        return _claim(_one_or_many(count), (C.PATERNAL_SISTER, count))
    if full_sisters == 1 and not ctx.active(C.FULL_BROTHER):
        return _claim(Fraction(1, 6), (C.PATERNAL_SISTER, count))
    return None


FixedShareRule = Callable[[HouseholdContext], Optional[FixedClaim]]

FIXED_SHARE_RULES: tuple[FixedShareRule, ...] = (
    _husband,
    _wives,
    _daughters,
    _granddaughters,
    _father,
    _mother,
    _grandfather,
    _grandmothers,
    _full_sisters,
    _paternal_sisters,
    _maternal_siblings,
)


def assign_fixed_shares(ctx: HouseholdContext) -> list[FixedClaim]:
    claims = []
    for rule in FIXED_SHARE_RULES:
        claim = rule(ctx)
        if claim is not None and claim.members:
            claims.append(claim)
    return claims


@dataclass(frozen=True, slots=True)
class NormalizedShares:
    portions: tuple[Portion, ...]
    problem_base: int
    adjusted_base: int
    total_numerator: int

    @property
    def aul_applied(self) -> bool:
        return self.total_numerator > self.problem_base

    @property
    def fixed_total(self) -> Fraction:
        return Fraction(self.total_numerator, self.adjusted_base)

    @property
    def residue(self) -> Fraction:
        return Fraction(self.adjusted_base - self.total_numerator, self.adjusted_base)


def normalize_fixed_shares(claims: list[FixedClaim]) -> NormalizedShares:
    """Put every fixed share on one base; raise the base (aul) if oversubscribed."""
    if not claims:
        return NormalizedShares(portions=(), problem_base=1, adjusted_base=1, total_numerator=0)

    base = math.lcm(*(claim.fraction.denominator for claim in claims))
    numerators = [claim.fraction.numerator * (base // claim.fraction.denominator) for claim in claims]
    total = sum(numerators)
    adjusted = total if total > base else base
    if adjusted != base:
        logger.debug("Aul: base %s raised to %s", base, adjusted)

    portions: list[Portion] = []
    for claim, numerator in zip(claims, numerators):
        portions.extend(claim.split(Fraction(numerator, adjusted)))
    return NormalizedShares(
        portions=tuple(portions),
        problem_base=base,
        adjusted_base=adjusted,
        total_numerator=total,
    )


def is_spouse(category: RelativeCategory) -> bool:
    return category in SPOUSES


def active_maternal_siblings(ctx: HouseholdContext) -> int:
    return sum(ctx.active(category) for category in MATERNAL_SIBLINGS)
