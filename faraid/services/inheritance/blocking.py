"""Hijb: exclusion of a relative by the presence of a nearer one.

Rules are evaluated independently against the raw heir set and their
results unioned, so the order of ``BLOCKING_RULES`` never matters.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from .categories import (
    CATEGORY_INFO,
    COLLATERAL_AGNATES,
    DESCENDANTS,
    DISTANT_KIN,
    FEMALE_DESCENDANTS,
    GRANDMOTHERS,
    MATERNAL_SIBLINGS,
    SIBLINGS,
    SPOUSES,
    LegalClass,
    RelativeCategory,
)
from .models import HeirSet

C = RelativeCategory

Predicate = Callable[[HeirSet], bool]

_COLLATERALS = frozenset(COLLATERAL_AGNATES)
_PATERNAL_SIBLINGS = frozenset({C.PATERNAL_BROTHER, C.PATERNAL_SISTER})


@dataclass(frozen=True, slots=True)
class BlockingRule:
    blockers: frozenset[RelativeCategory]
    blocked: frozenset[RelativeCategory]
    condition: Optional[Predicate] = None

    def applies(self, heirs: HeirSet) -> bool:
        if not heirs.has(*self.blockers):
            return False
        return self.condition is None or self.condition(heirs)

    def present_blockers(self, heirs: HeirSet) -> tuple[RelativeCategory, ...]:
        return tuple(category for category, _ in heirs.items() if category in self.blockers)


def _rule(
    blockers: Iterable[RelativeCategory],
    blocked: Iterable[RelativeCategory],
    condition: Optional[Predicate] = None,
) -> BlockingRule:
    return BlockingRule(frozenset(blockers), frozenset(blocked), condition)


def _has_female_descendant(heirs: HeirSet) -> bool:
    return heirs.has(*FEMALE_DESCENDANTS)


def _collateral_tier_rules() -> list[BlockingRule]:
    rules = []
    for index, category in enumerate(COLLATERAL_AGNATES[:-1]):
        rules.append(_rule({category}, COLLATERAL_AGNATES[index + 1 :]))
    return rules


_KIN_WHO_EXCLUDE_DISTANT_KIN = frozenset(
    category
    for category, info in CATEGORY_INFO.items()
    if info.legal_class is not LegalClass.DISTANT_KIN and category not in SPOUSES
)

BLOCKING_RULES: tuple[BlockingRule, ...] = (
    _rule({C.SON}, {C.GRANDSON, C.GRANDDAUGHTER} | SIBLINGS | _COLLATERALS),
    _rule({C.GRANDSON}, SIBLINGS | _COLLATERALS),
    _rule(
        {C.FATHER},
        {C.PATERNAL_GRANDFATHER, C.PATERNAL_GRANDMOTHER} | SIBLINGS | _COLLATERALS,
    ),
    # Full and paternal siblings alongside the grandfather are left to muqasamah review.
    _rule({C.PATERNAL_GRANDFATHER}, MATERNAL_SIBLINGS | _COLLATERALS),
    _rule({C.MOTHER}, GRANDMOTHERS),
    _rule(DESCENDANTS, MATERNAL_SIBLINGS),
    _rule(
        {C.DAUGHTER},
        {C.GRANDDAUGHTER},
        lambda heirs: heirs.count(C.DAUGHTER) >= 2 and not heirs.has(C.GRANDSON),
    ),
    _rule({C.FULL_BROTHER}, _PATERNAL_SIBLINGS | _COLLATERALS),
    _rule(
        {C.FULL_SISTER},
        {C.PATERNAL_SISTER},
        lambda heirs: heirs.count(C.FULL_SISTER) >= 2 and not heirs.has(C.PATERNAL_BROTHER),
    ),
    # A sister who becomes residuary alongside daughters ranks as a brother would.
    _rule({C.FULL_SISTER}, _PATERNAL_SIBLINGS | _COLLATERALS, _has_female_descendant),
    _rule({C.PATERNAL_SISTER}, _COLLATERALS, _has_female_descendant),
    _rule({C.PATERNAL_BROTHER}, _COLLATERALS),
    *_collateral_tier_rules(),
    _rule(_KIN_WHO_EXCLUDE_DISTANT_KIN, DISTANT_KIN),
)


@dataclass(frozen=True, slots=True)
class BlockingOutcome:
    blocked_by: dict[RelativeCategory, tuple[RelativeCategory, ...]]

    @property
    def blocked(self) -> frozenset[RelativeCategory]:
        return frozenset(self.blocked_by)

    def is_blocked(self, category: RelativeCategory) -> bool:
        return category in self.blocked_by

    def blockers_of(self, category: RelativeCategory) -> tuple[RelativeCategory, ...]:
        return self.blocked_by.get(category, ())


def evaluate_blocking(
    heirs: HeirSet,
    rules: Iterable[BlockingRule] = BLOCKING_RULES,
) -> BlockingOutcome:
    collected: dict[RelativeCategory, set[RelativeCategory]] = {}
    for rule in rules:
        if not rule.applies(heirs):
            continue
        blockers = rule.present_blockers(heirs)
        for category in rule.blocked:
            if category in heirs:
                collected.setdefault(category, set()).update(blockers)

    blocked = frozenset(collected)
    blocked_by: dict[RelativeCategory, tuple[RelativeCategory, ...]] = {}
    for category in RelativeCategory:
        if category not in collected:
            continue
        sources = collected[category]
        # Name only blockers that are themselves entitled, when there are any.
        direct = {source for source in sources if source not in blocked} or sources
        blocked_by[category] = tuple(item for item in RelativeCategory if item in direct)
    return BlockingOutcome(blocked_by=blocked_by)
