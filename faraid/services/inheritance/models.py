from __future__ import annotations

import re
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from fractions import Fraction
from typing import Iterable, Iterator, Mapping, Optional, Union

from .categories import RelativeCategory, parse_category
from .errors import ValidationError, ValidationReason

ZERO = Fraction(0, 1)
ONE = Fraction(1, 1)


class LegalBasis(str, Enum):
    FIXED = "fixed"
    RESIDUARY = "residuary"
    EXCLUDED = "excluded"


class ExclusionReason(str, Enum):
    BLOCKED = "blocked"
    OUTRANKED = "outranked"
    RESIDUE_EXHAUSTED = "residue_exhausted"


class WarningCode(str, Enum):
    BEQUEST_CEILING_EXCEEDED = "bequest-ceiling-exceeded"
    AUL_APPLIED = "aul-applied"
    RADD_APPLIED = "radd-applied"
    UMARIYYATAN_APPLIED = "umariyyatan-applied"
    DISTANT_KIN_APPLIED = "distant-kin-applied"
    RESIDUE_UNCLAIMED = "residue-unclaimed"
    COMPLEX_CASE = "complex-case-scholar-review-recommended"


def format_fraction(value: Fraction) -> str:
    if value.denominator == 1:
        return str(value.numerator)
    return f"{value.numerator}/{value.denominator}"


def fraction_to_decimal(value: Fraction) -> Decimal:
    return Decimal(value.numerator) / Decimal(value.denominator)


def share_of(amount: Decimal, value: Fraction) -> Decimal:
    return amount * Decimal(value.numerator) / Decimal(value.denominator)


def format_percentage(value: Fraction) -> str:
    percent = (fraction_to_decimal(value) * 100).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return f"{percent}%"


def whole_count(value: object) -> Optional[int]:
    """Accept only exact whole numbers; floats and booleans are refused."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        return int(text) if re.fullmatch(r"[+-]?\d+", text) else None
    if isinstance(value, Decimal) and not value.is_finite():
        return None
    if isinstance(value, (Decimal, Fraction)):
        whole = int(value)
        return whole if whole == value else None
    return None


class HeirSet:
    """Surviving relatives by category. Zero counts are dropped."""

    __slots__ = ("_counts",)

    def __init__(self, counts: Optional[Mapping[RelativeCategory, int]] = None) -> None:
        cleaned: dict[RelativeCategory, int] = {}
        for category, count in (counts or {}).items():
            if count < 0:
                raise ValidationError(
                    ValidationReason.NEGATIVE_COUNT,
                    f"{category.value}={count}",
                )
            if count:
                cleaned[category] = count
        self._counts = cleaned

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[object, int]]) -> "HeirSet":
        counts: dict[RelativeCategory, int] = {}
        for raw_category, raw_count in pairs:
            category = parse_category(raw_category)
            if category is None:
                raise ValidationError(ValidationReason.UNKNOWN_CATEGORY, str(raw_category))
            count = whole_count(raw_count)
            if count is None:
                raise ValidationError(ValidationReason.INVALID_COUNT, f"{category.value}={raw_count!r}")
            if count < 0:
                raise ValidationError(ValidationReason.NEGATIVE_COUNT, f"{category.value}={count}")
            counts[category] = counts.get(category, 0) + count
        return cls(counts)

    def count(self, category: RelativeCategory) -> int:
        return self._counts.get(category, 0)

    def has(self, *categories: RelativeCategory) -> bool:
        return any(self._counts.get(category, 0) > 0 for category in categories)

    def total(self, categories: Iterable[RelativeCategory]) -> int:
        return sum(self._counts.get(category, 0) for category in categories)

    def items(self) -> Iterator[tuple[RelativeCategory, int]]:
        # Enum declaration order keeps output stable regardless of input order.
        for category in RelativeCategory:
            count = self._counts.get(category, 0)
            if count:
                yield category, count

    def __contains__(self, category: object) -> bool:
        return category in self._counts

    def __len__(self) -> int:
        return len(self._counts)

    def __bool__(self) -> bool:
        return bool(self._counts)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HeirSet):
            return NotImplemented
        return self._counts == other._counts

    def __repr__(self) -> str:
        inner = ", ".join(f"{category.value}={count}" for category, count in self.items())
        return f"HeirSet({inner})"


@dataclass(frozen=True, slots=True)
class EstateFinancials:
    cash: Decimal = Decimal("0")
    land_area: Decimal = Decimal("0")
    land_unit_price: Decimal = Decimal("0")
    gold_weight: Decimal = Decimal("0")
    gold_rate: Decimal = Decimal("0")
    silver_weight: Decimal = Decimal("0")
    silver_rate: Decimal = Decimal("0")
    other_assets: Decimal = Decimal("0")
    debts: Decimal = Decimal("0")
    funeral_cost: Decimal = Decimal("0")
    bequest: Decimal = Decimal("0")

    @classmethod
    def from_gross(
        cls,
        gross_value: Decimal | int | str,
        *,
        debts: Decimal | int | str = 0,
        funeral_cost: Decimal | int | str = 0,
        bequest: Decimal | int | str = 0,
    ) -> "EstateFinancials":
        return cls(
            cash=Decimal(gross_value),
            debts=Decimal(debts),
            funeral_cost=Decimal(funeral_cost),
            bequest=Decimal(bequest),
        )

    @property
    def land_value(self) -> Decimal:
        return self.land_area * self.land_unit_price

    @property
    def gold_value(self) -> Decimal:
        return self.gold_weight * self.gold_rate

    @property
    def silver_value(self) -> Decimal:
        return self.silver_weight * self.silver_rate

    @property
    def gross_value(self) -> Decimal:
        return self.cash + self.land_value + self.gold_value + self.silver_value + self.other_assets

    @property
    def liabilities(self) -> Decimal:
        return self.debts + self.funeral_cost


@dataclass(frozen=True, slots=True)
class ShareAllocation:
    category: RelativeCategory
    basis: LegalBasis
    fraction: Fraction
    count: int
    amount: Decimal
    exclusion: Optional[ExclusionReason] = None
    excluded_by: tuple[RelativeCategory, ...] = ()
    # Raised base of an Aul case, used to show the share in its parts.
    aul_base: Optional[int] = None

    @property
    def fraction_string(self) -> str:
        if self.aul_base:
            parts = self.fraction * self.aul_base
            if parts.denominator == 1:
                return f"{parts.numerator}/{self.aul_base}"
        return format_fraction(self.fraction)

    @property
    def percentage_string(self) -> str:
        return format_percentage(self.fraction)

    @property
    def amount_per_head(self) -> Decimal:
        if self.count <= 0:
            raise ValueError(f"allocation for {self.category.value} has no members")
        return self.amount / Decimal(self.count)

    @property
    def is_excluded(self) -> bool:
        return self.basis is LegalBasis.EXCLUDED


@dataclass(frozen=True, slots=True)
class DistributionSummary:
    fixed_fraction_total: Fraction
    residue_fraction_total: Fraction
    problem_base: int
    adjusted_base: int
    unclaimed_fraction: Fraction = ZERO
    aul_applied: bool = False
    radd_applied: bool = False
    umariyyatan_applied: bool = False
    distant_kin_applied: bool = False


@dataclass(frozen=True, slots=True)
class DistributionResult:
    estate: EstateFinancials
    effective_bequest: Decimal
    net_value: Decimal
    allocations: tuple[ShareAllocation, ...]
    summary: DistributionSummary
    warnings: tuple[WarningCode, ...] = field(default_factory=tuple)

    ok = True

    @property
    def entitled(self) -> tuple[ShareAllocation, ...]:
        return tuple(item for item in self.allocations if not item.is_excluded)

    @property
    def excluded(self) -> tuple[ShareAllocation, ...]:
        return tuple(item for item in self.allocations if item.is_excluded)

    @property
    def total_fraction(self) -> Fraction:
        return sum((item.fraction for item in self.entitled), ZERO)

    def allocations_for(self, category: RelativeCategory) -> tuple[ShareAllocation, ...]:
        return tuple(item for item in self.allocations if item.category is category)

    def fraction_for(self, category: RelativeCategory) -> Fraction:
        return sum((item.fraction for item in self.allocations_for(category)), ZERO)

    def amount_for(self, category: RelativeCategory) -> Decimal:
        return sum((item.amount for item in self.allocations_for(category)), Decimal("0"))

    def has_warning(self, code: WarningCode) -> bool:
        return code in self.warnings


@dataclass(frozen=True, slots=True)
class DistributionFailure:
    reason: ValidationReason
    detail: str = ""

    ok = False


DistributionOutcome = Union[DistributionResult, DistributionFailure]
