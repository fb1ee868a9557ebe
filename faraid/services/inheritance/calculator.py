from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable, Mapping, Union

from .blocking import BlockingOutcome, evaluate_blocking
from .categories import (
    CATEGORY_INFO,
    DeceasedGender,
    RelativeCategory,
    parse_gender,
)
from .errors import ValidationError, ValidationReason
from .estate import settle_estate
from .models import (
    ZERO,
    DistributionFailure,
    DistributionOutcome,
    DistributionResult,
    DistributionSummary,
    EstateFinancials,
    ExclusionReason,
    HeirSet,
    LegalBasis,
    ShareAllocation,
    WarningCode,
    share_of,
)
from .residue import ResidueOutcome, apply_radd, distribute_residue, distribute_to_distant_kin
from .shares import (
    HouseholdContext,
    Portion,
    active_maternal_siblings,
    assign_fixed_shares,
    normalize_fixed_shares,
)

logger = logging.getLogger(__name__)

C = RelativeCategory

HeirsLike = Union[HeirSet, Mapping[object, int], Iterable[tuple[object, int]]]

_SIBLINGS_WITH_GRANDFATHER = (C.FULL_BROTHER, C.FULL_SISTER, C.PATERNAL_BROTHER, C.PATERNAL_SISTER)


def _coerce_heirs(heirs: HeirsLike) -> HeirSet:
    if isinstance(heirs, HeirSet):
        return heirs
    if isinstance(heirs, Mapping):
        return HeirSet.from_pairs(heirs.items())
    return HeirSet.from_pairs(heirs)


def _coerce_gender(value: object) -> DeceasedGender:
    gender = parse_gender(value)
    if gender is None:
        raise ValidationError(ValidationReason.UNKNOWN_GENDER, str(value))
    return gender


def validate_heirs(heirs: HeirSet, gender: DeceasedGender) -> None:
    if not heirs:
        raise ValidationError(ValidationReason.NO_HEIRS)
    for category, count in heirs.items():
        limit = CATEGORY_INFO[category].max_count
        if limit is not None and count > limit:
            raise ValidationError(
                ValidationReason.COUNT_EXCEEDS_MAX,
                f"{category.value}={count} (max {limit})",
            )
    if gender is DeceasedGender.MALE and heirs.has(C.HUSBAND):
        raise ValidationError(ValidationReason.SPOUSE_GENDER_MISMATCH, "husband of a male deceased")
    if gender is DeceasedGender.FEMALE and heirs.has(C.WIFE):
        raise ValidationError(ValidationReason.SPOUSE_GENDER_MISMATCH, "wife of a female deceased")


def _excluded_entries(
    heirs: HeirSet,
    entitled: set[RelativeCategory],
    blocking: BlockingOutcome,
    residue: ResidueOutcome,
) -> list[ShareAllocation]:
    winners = residue.winner.leaders if residue.winner else ()
    outranked = set(residue.outranked)
    entries = []
    for category, count in heirs.items():
        if category in entitled:
            continue
        if blocking.is_blocked(category):
            reason, by = ExclusionReason.BLOCKED, blocking.blockers_of(category)
        elif category in outranked:
            reason, by = ExclusionReason.OUTRANKED, tuple(item for item in winners if heirs.has(item))
        else:
            reason, by = ExclusionReason.RESIDUE_EXHAUSTED, ()
        entries.append(
            ShareAllocation(
                category=category,
                basis=LegalBasis.EXCLUDED,
                fraction=ZERO,
                count=count,
                amount=Decimal("0"),
                exclusion=reason,
                excluded_by=by,
            )
        )
    return entries


def _ordered(portions: Iterable[Portion]) -> list[Portion]:
    rank = {category: index for index, category in enumerate(RelativeCategory)}
    basis_rank = {LegalBasis.FIXED: 0, LegalBasis.RESIDUARY: 1}
    return sorted(portions, key=lambda item: (rank[item.category], basis_rank[item.basis]))


def _is_mushtarakah(ctx: HouseholdContext, residue: ResidueOutcome) -> bool:
    # Full brothers left empty-handed while maternal siblings hold a third.
    if residue.winner is None or C.FULL_BROTHER not in residue.winner.leaders:
        return False
    return not residue.portions and active_maternal_siblings(ctx) >= 2


def compute_distribution(
    heirs: HeirsLike,
    deceased_gender: Union[DeceasedGender, str],
    estate: EstateFinancials,
) -> DistributionResult:
    """Distribute the net estate among ``heirs``; raises ``ValidationError``."""
    gender = _coerce_gender(deceased_gender)
    heir_set = _coerce_heirs(heirs)
    validate_heirs(heir_set, gender)
    settlement = settle_estate(estate)

    warnings: list[WarningCode] = []
    if settlement.bequest_clamped:
        warnings.append(WarningCode.BEQUEST_CEILING_EXCEEDED)

    blocking = evaluate_blocking(heir_set)
    ctx = HouseholdContext(heirs=heir_set, blocked=blocking.blocked)

    claims = assign_fixed_shares(ctx)
    normalized = normalize_fixed_shares(claims)
    umariyyatan = any(claim.umariyyatan for claim in claims)
    if normalized.aul_applied:
        warnings.append(WarningCode.AUL_APPLIED)
    if umariyyatan:
        warnings.append(WarningCode.UMARIYYATAN_APPLIED)
    logger.debug(
        "Fixed shares on base %s (adjusted %s), residue %s",
        normalized.problem_base,
        normalized.adjusted_base,
        normalized.residue,
    )

    fixed_portions = list(normalized.portions)
    residue_fraction = normalized.residue
    residue = distribute_residue(ctx, residue_fraction)
    residuary_portions = list(residue.portions)

    radd_applied = False
    distant_kin_applied = False
    unclaimed = ZERO
    complex_case = False

    if residue_fraction > 0 and not residue.claimed:
        radd = apply_radd(fixed_portions, residue_fraction)
        if radd.applied:
            fixed_portions = list(radd.portions)
            radd_applied = True
            warnings.append(WarningCode.RADD_APPLIED)
        else:
            residue = distribute_to_distant_kin(ctx, residue_fraction)
            if residue.claimed:
                residuary_portions = list(residue.portions)
                distant_kin_applied = True
                complex_case = True
                warnings.append(WarningCode.DISTANT_KIN_APPLIED)
            else:
                unclaimed = residue_fraction
                complex_case = True
                warnings.append(WarningCode.RESIDUE_UNCLAIMED)
                logger.warning("Residue %s left without a claimant", residue_fraction)

    if ctx.active(C.PATERNAL_GRANDFATHER) and any(ctx.active(item) for item in _SIBLINGS_WITH_GRANDFATHER):
        complex_case = True
    if _is_mushtarakah(ctx, residue):
        complex_case = True
    if complex_case:
        warnings.append(WarningCode.COMPLEX_CASE)

    net_value = settlement.net_value
    aul_base = normalized.adjusted_base if normalized.aul_applied else None
    portions = _ordered(fixed_portions + residuary_portions)
    allocations = [
        ShareAllocation(
            category=item.category,
            basis=item.basis,
            fraction=item.fraction,
            count=item.count,
            amount=share_of(net_value, item.fraction),
            aul_base=aul_base if item.basis is LegalBasis.FIXED else None,
        )
        for item in portions
        if item.fraction > 0
    ]
    entitled = {item.category for item in allocations}
    allocations.extend(_excluded_entries(heir_set, entitled, blocking, residue))

    summary = DistributionSummary(
        fixed_fraction_total=sum((item.fraction for item in fixed_portions), ZERO),
        residue_fraction_total=sum((item.fraction for item in residuary_portions), ZERO),
        problem_base=normalized.problem_base,
        adjusted_base=normalized.adjusted_base,
        unclaimed_fraction=unclaimed,
        aul_applied=normalized.aul_applied,
        radd_applied=radd_applied,
        umariyyatan_applied=umariyyatan,
        distant_kin_applied=distant_kin_applied,
    )
    return DistributionResult(
        estate=estate,
        effective_bequest=settlement.effective_bequest,
        net_value=net_value,
        allocations=tuple(allocations),
        summary=summary,
        warnings=tuple(warnings),
    )


def calculate_distribution(
    heirs: HeirsLike,
    deceased_gender: Union[DeceasedGender, str],
    estate: EstateFinancials,
) -> DistributionOutcome:
    """Same as ``compute_distribution`` but returns a failure value instead of raising."""
    try:
        return compute_distribution(heirs, deceased_gender, estate)
    except ValidationError as exc:
        logger.warning("Inheritance input rejected: %s", exc)
        return DistributionFailure(reason=exc.reason, detail=exc.detail)
