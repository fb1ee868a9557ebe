from __future__ import annotations

from decimal import Decimal
from fractions import Fraction

import pytest

from faraid.services.inheritance import (
    DistributionFailure,
    EstateFinancials,
    LegalBasis,
    RelativeCategory as C,
    ValidationError,
    ValidationReason,
    WarningCode,
    calculate_distribution,
    compute_distribution,
    parse_count,
    parse_money,
    parse_money_allow_zero,
)
from faraid.services.inheritance.estate import bequest_ceiling
from faraid.services.inheritance.models import ExclusionReason

ESTATE = EstateFinancials.from_gross(1_200_000)


def test_inheritance_aul_when_husband_daughter_and_parents_oversubscribe() -> None:
    # 1/4 + 1/2 + 1/6 + 1/6 on base 12 is 13 parts, so the base rises to 13.
    result = compute_distribution(
        {C.HUSBAND: 1, C.DAUGHTER: 1, C.MOTHER: 1, C.FATHER: 1},
        "female",
        ESTATE,
    )
    assert result.summary.problem_base == 12
    assert result.summary.adjusted_base == 13
    assert result.summary.aul_applied is True
    assert result.fraction_for(C.HUSBAND) == Fraction(3, 13)
    assert result.fraction_for(C.DAUGHTER) == Fraction(6, 13)
    assert result.fraction_for(C.MOTHER) == Fraction(2, 13)
    assert result.fraction_for(C.FATHER) == Fraction(2, 13)
    assert [item.basis for item in result.allocations_for(C.FATHER)] == [LegalBasis.FIXED]
    assert result.total_fraction == 1
    assert result.has_warning(WarningCode.AUL_APPLIED)


def test_inheritance_spouse_and_children_distribution() -> None:
    result = compute_distribution({C.WIFE: 1, C.SON: 2, C.DAUGHTER: 1}, "male", ESTATE)
    assert result.fraction_for(C.WIFE) == Fraction(1, 8)
    assert result.fraction_for(C.SON) == Fraction(7, 10)
    assert result.fraction_for(C.DAUGHTER) == Fraction(7, 40)
    (sons,) = result.allocations_for(C.SON)
    assert sons.basis is LegalBasis.RESIDUARY
    assert sons.count == 2
    assert sons.amount_per_head == Decimal("420000")
    assert result.amount_for(C.DAUGHTER) == Decimal("210000")
    assert not result.warnings


def test_inheritance_sons_exclude_siblings() -> None:
    result = compute_distribution(
        {C.WIFE: 1, C.SON: 2, C.DAUGHTER: 1, C.FULL_BROTHER: 1, C.MATERNAL_SISTER: 1},
        "male",
        ESTATE,
    )
    assert result.fraction_for(C.SON) == Fraction(7, 10)
    excluded = {item.category: item for item in result.excluded}
    assert set(excluded) == {C.FULL_BROTHER, C.MATERNAL_SISTER}
    assert excluded[C.FULL_BROTHER].exclusion is ExclusionReason.BLOCKED
    assert excluded[C.FULL_BROTHER].excluded_by == (C.SON,)
    assert C.SON in excluded[C.MATERNAL_SISTER].excluded_by
    assert excluded[C.MATERNAL_SISTER].amount == 0


def test_inheritance_aul_with_husband_two_full_sisters_and_mother() -> None:
    # Two sisters drop the mother to 1/6: 3 + 4 + 1 = 8 parts on base 6.
    result = compute_distribution({C.HUSBAND: 1, C.FULL_SISTER: 2, C.MOTHER: 1}, "female", ESTATE)
    assert result.summary.problem_base == 6
    assert result.summary.adjusted_base == 8
    assert result.fraction_for(C.HUSBAND) == Fraction(3, 8)
    assert result.fraction_for(C.FULL_SISTER) == Fraction(1, 2)
    assert result.fraction_for(C.MOTHER) == Fraction(1, 8)
    (sisters,) = result.allocations_for(C.FULL_SISTER)
    assert sisters.amount_per_head == Decimal("300000")
    fractions = {item.category: item.fraction_string for item in result.allocations}
    assert fractions == {C.HUSBAND: "3/8", C.FULL_SISTER: "4/8", C.MOTHER: "1/8"}


def test_inheritance_aul_never_raises_a_share() -> None:
    nominal = {C.HUSBAND: Fraction(1, 2), C.FULL_SISTER: Fraction(2, 3), C.MOTHER: Fraction(1, 6)}
    result = compute_distribution({C.HUSBAND: 1, C.FULL_SISTER: 2, C.MOTHER: 1}, "female", ESTATE)
    assert sum(nominal.values()) > 1
    for category, share in nominal.items():
        assert result.fraction_for(category) < share


def test_inheritance_radd_returns_everything_to_mother_alone() -> None:
    result = compute_distribution({C.MOTHER: 1}, "male", ESTATE)
    assert result.fraction_for(C.MOTHER) == 1
    assert result.amount_for(C.MOTHER) == Decimal("1200000")
    assert result.summary.radd_applied is True
    assert result.has_warning(WarningCode.RADD_APPLIED)


def test_inheritance_radd_skips_the_spouse() -> None:
    result = compute_distribution({C.WIFE: 1, C.DAUGHTER: 1}, "male", ESTATE)
    assert result.fraction_for(C.WIFE) == Fraction(1, 8)
    assert result.fraction_for(C.DAUGHTER) == Fraction(7, 8)


def test_inheritance_radd_is_pro_rata_between_sharers() -> None:
    result = compute_distribution({C.MOTHER: 1, C.MATERNAL_BROTHER: 2}, "male", ESTATE)
    assert result.fraction_for(C.MOTHER) == Fraction(1, 3)
    assert result.fraction_for(C.MATERNAL_BROTHER) == Fraction(2, 3)


def test_inheritance_bequest_is_capped_at_one_third() -> None:
    estate = EstateFinancials.from_gross(900_000, bequest=400_000)
    result = compute_distribution({C.SON: 1}, "male", estate)
    assert result.effective_bequest == Decimal("300000")
    assert result.net_value == Decimal("600000")
    assert result.has_warning(WarningCode.BEQUEST_CEILING_EXCEEDED)
    assert result.amount_for(C.SON) == Decimal("600000")


def test_inheritance_bequest_ceiling_uses_value_after_liabilities() -> None:
    estate = EstateFinancials.from_gross(1_000_000, debts=100_000, funeral_cost=100_000, bequest=200_000)
    result = compute_distribution({C.SON: 1}, "male", estate)
    assert result.effective_bequest == Decimal("200000")
    assert result.net_value == Decimal("600000")
    assert not result.has_warning(WarningCode.BEQUEST_CEILING_EXCEEDED)


def test_inheritance_mother_one_third_of_remainder_case() -> None:
    # No children, spouse exists, both parents alive (umariyyatan).
    result = compute_distribution({C.WIFE: 1, C.MOTHER: 1, C.FATHER: 1}, "male", ESTATE)
    assert result.fraction_for(C.WIFE) == Fraction(1, 4)
    assert result.fraction_for(C.MOTHER) == Fraction(1, 4)
    assert result.fraction_for(C.FATHER) == Fraction(1, 2)
    assert result.summary.umariyyatan_applied is True
    assert result.has_warning(WarningCode.UMARIYYATAN_APPLIED)


def test_inheritance_umariyyatan_with_husband() -> None:
    result = compute_distribution({C.HUSBAND: 1, C.MOTHER: 1, C.FATHER: 1}, "female", ESTATE)
    assert result.fraction_for(C.HUSBAND) == Fraction(1, 2)
    assert result.fraction_for(C.MOTHER) == Fraction(1, 6)
    (father,) = result.allocations_for(C.FATHER)
    assert father.basis is LegalBasis.RESIDUARY
    assert father.fraction == Fraction(1, 3)


def test_inheritance_father_takes_sixth_and_residue_beside_daughter() -> None:
    result = compute_distribution({C.DAUGHTER: 1, C.FATHER: 1}, "male", ESTATE)
    father = result.allocations_for(C.FATHER)
    assert [(item.basis, item.fraction) for item in father] == [
        (LegalBasis.FIXED, Fraction(1, 6)),
        (LegalBasis.RESIDUARY, Fraction(1, 3)),
    ]
    assert result.fraction_for(C.FATHER) == Fraction(1, 2)
    assert result.total_fraction == 1


def test_inheritance_father_excludes_grandfather_and_brothers() -> None:
    result = compute_distribution(
        {C.FATHER: 1, C.PATERNAL_GRANDFATHER: 1, C.FULL_BROTHER: 3, C.MOTHER: 1},
        "male",
        ESTATE,
    )
    # Blocked brothers still reduce the mother to a sixth.
    assert result.fraction_for(C.MOTHER) == Fraction(1, 6)
    assert result.fraction_for(C.FATHER) == Fraction(5, 6)
    blocked = {item.category: item.excluded_by for item in result.excluded}
    assert blocked[C.PATERNAL_GRANDFATHER] == (C.FATHER,)
    assert blocked[C.FULL_BROTHER] == (C.FATHER,)


def test_inheritance_granddaughter_completes_two_thirds() -> None:
    result = compute_distribution({C.DAUGHTER: 1, C.GRANDDAUGHTER: 2, C.FULL_BROTHER: 1}, "male", ESTATE)
    assert result.fraction_for(C.DAUGHTER) == Fraction(1, 2)
    assert result.fraction_for(C.GRANDDAUGHTER) == Fraction(1, 6)
    assert result.fraction_for(C.FULL_BROTHER) == Fraction(1, 3)


def test_inheritance_two_daughters_exclude_granddaughter_unless_grandson() -> None:
    blocked = compute_distribution({C.DAUGHTER: 2, C.GRANDDAUGHTER: 1, C.FULL_BROTHER: 1}, "male", ESTATE)
    assert blocked.fraction_for(C.GRANDDAUGHTER) == 0
    assert blocked.fraction_for(C.FULL_BROTHER) == Fraction(1, 3)

    result = compute_distribution({C.DAUGHTER: 2, C.GRANDDAUGHTER: 1, C.GRANDSON: 1}, "male", ESTATE)
    assert result.fraction_for(C.DAUGHTER) == Fraction(2, 3)
    assert result.fraction_for(C.GRANDSON) == Fraction(2, 9)
    assert result.fraction_for(C.GRANDDAUGHTER) == Fraction(1, 9)


def test_inheritance_sister_becomes_residuary_with_daughters() -> None:
    result = compute_distribution({C.DAUGHTER: 2, C.FULL_SISTER: 1, C.PATERNAL_BROTHER: 1}, "male", ESTATE)
    assert result.fraction_for(C.DAUGHTER) == Fraction(2, 3)
    (sister,) = result.allocations_for(C.FULL_SISTER)
    assert sister.basis is LegalBasis.RESIDUARY
    assert sister.fraction == Fraction(1, 3)
    assert result.fraction_for(C.PATERNAL_BROTHER) == 0


def test_inheritance_paternal_sister_takes_sixth_beside_one_full_sister() -> None:
    result = compute_distribution(
        {C.FULL_SISTER: 1, C.PATERNAL_SISTER: 1, C.FULL_PATERNAL_UNCLE: 1},
        "male",
        ESTATE,
    )
    assert result.fraction_for(C.FULL_SISTER) == Fraction(1, 2)
    assert result.fraction_for(C.PATERNAL_SISTER) == Fraction(1, 6)
    assert result.fraction_for(C.FULL_PATERNAL_UNCLE) == Fraction(1, 3)


def test_inheritance_nearest_collateral_takes_the_residue() -> None:
    result = compute_distribution(
        {C.WIFE: 1, C.FULL_NEPHEW: 2, C.FULL_PATERNAL_UNCLE: 1, C.FULL_COUSIN: 4},
        "male",
        ESTATE,
    )
    assert result.fraction_for(C.FULL_NEPHEW) == Fraction(3, 4)
    assert {item.category for item in result.excluded} == {C.FULL_PATERNAL_UNCLE, C.FULL_COUSIN}


def test_inheritance_grandfather_with_brothers_is_flagged_for_review() -> None:
    result = compute_distribution({C.PATERNAL_GRANDFATHER: 1, C.FULL_BROTHER: 1}, "male", ESTATE)
    assert result.fraction_for(C.PATERNAL_GRANDFATHER) == 1
    (brother,) = result.excluded
    assert brother.exclusion is ExclusionReason.OUTRANKED
    assert brother.excluded_by == (C.PATERNAL_GRANDFATHER,)
    assert result.has_warning(WarningCode.COMPLEX_CASE)


def test_inheritance_mushtarakah_leaves_full_brother_with_nothing() -> None:
    result = compute_distribution(
        {C.HUSBAND: 1, C.MOTHER: 1, C.MATERNAL_BROTHER: 2, C.FULL_BROTHER: 1},
        "female",
        ESTATE,
    )
    assert result.fraction_for(C.HUSBAND) == Fraction(1, 2)
    assert result.fraction_for(C.MOTHER) == Fraction(1, 6)
    assert result.fraction_for(C.MATERNAL_BROTHER) == Fraction(1, 3)
    (brother,) = result.excluded
    assert brother.exclusion is ExclusionReason.RESIDUE_EXHAUSTED
    assert result.has_warning(WarningCode.COMPLEX_CASE)


def test_inheritance_distant_kin_take_what_radd_cannot() -> None:
    result = compute_distribution({C.HUSBAND: 1, C.DAUGHTERS_SON: 1}, "female", ESTATE)
    assert result.fraction_for(C.HUSBAND) == Fraction(1, 2)
    assert result.fraction_for(C.DAUGHTERS_SON) == Fraction(1, 2)
    assert result.summary.distant_kin_applied is True
    assert result.has_warning(WarningCode.DISTANT_KIN_APPLIED)
    assert result.has_warning(WarningCode.COMPLEX_CASE)


def test_inheritance_distant_kin_excluded_by_any_sharer() -> None:
    result = compute_distribution({C.MOTHER: 1, C.MATERNAL_UNCLE: 1}, "male", ESTATE)
    assert result.fraction_for(C.MOTHER) == 1
    assert result.fraction_for(C.MATERNAL_UNCLE) == 0


def test_inheritance_unclaimed_residue_with_lone_spouse() -> None:
    result = compute_distribution({C.HUSBAND: 1}, "female", ESTATE)
    assert result.fraction_for(C.HUSBAND) == Fraction(1, 2)
    assert result.summary.unclaimed_fraction == Fraction(1, 2)
    assert result.has_warning(WarningCode.RESIDUE_UNCLAIMED)
    assert result.has_warning(WarningCode.COMPLEX_CASE)


CONSERVATION_CASES = [
    ({C.WIFE: 4, C.SON: 3, C.DAUGHTER: 5, C.MOTHER: 1}, "male"),
    ({C.HUSBAND: 1, C.DAUGHTER: 2, C.FATHER: 1, C.MOTHER: 1}, "female"),
    ({C.WIFE: 2, C.PATERNAL_GRANDMOTHER: 1, C.MATERNAL_GRANDMOTHER: 1, C.PATERNAL_BROTHER: 2}, "male"),
    ({C.DAUGHTER: 1, C.GRANDDAUGHTER: 1, C.PATERNAL_SISTER: 3}, "female"),
    ({C.MATERNAL_SISTER: 1, C.MATERNAL_BROTHER: 1, C.PATERNAL_COUSIN_GRANDSON: 7}, "male"),
    ({C.SISTERS_SON: 2, C.MATERNAL_AUNT: 1}, "male"),
]


@pytest.mark.parametrize("heirs, gender", CONSERVATION_CASES)
def test_inheritance_shares_sum_to_whole_estate(heirs, gender) -> None:
    result = compute_distribution(heirs, gender, ESTATE)
    assert result.total_fraction + result.summary.unclaimed_fraction == 1
    total_amount = sum((item.amount for item in result.entitled), Decimal("0"))
    assert abs(total_amount - result.net_value) < Decimal("0.000001")
    for item in result.excluded:
        assert item.fraction == 0
        assert item.amount == 0


@pytest.mark.parametrize("heirs, gender", CONSERVATION_CASES)
def test_inheritance_is_deterministic(heirs, gender) -> None:
    first = compute_distribution(heirs, gender, ESTATE)
    second = compute_distribution(dict(reversed(list(heirs.items()))), gender, ESTATE)
    assert first == second


def test_inheritance_accepts_free_form_keys() -> None:
    result = compute_distribution([("Full Brother", 1), ("daughter's son", 1), ("Wife", "1")], "Male", ESTATE)
    assert result.fraction_for(C.FULL_BROTHER) == Fraction(3, 4)
    assert result.fraction_for(C.DAUGHTERS_SON) == 0


@pytest.mark.parametrize(
    "heirs, gender, reason",
    [
        ({}, "male", ValidationReason.NO_HEIRS),
        ({C.SON: 0}, "male", ValidationReason.NO_HEIRS),
        ({C.SON: -1}, "male", ValidationReason.NEGATIVE_COUNT),
        ([("son", "many")], "male", ValidationReason.INVALID_COUNT),
        ([("son", 1.9)], "male", ValidationReason.INVALID_COUNT),
        ([("son", True)], "male", ValidationReason.INVALID_COUNT),
        ([("son", Decimal("2.5"))], "male", ValidationReason.INVALID_COUNT),
        ({C.WIFE: 5}, "male", ValidationReason.COUNT_EXCEEDS_MAX),
        ({C.HUSBAND: 2}, "female", ValidationReason.COUNT_EXCEEDS_MAX),
        ({C.MOTHER: 2}, "male", ValidationReason.COUNT_EXCEEDS_MAX),
        ({C.HUSBAND: 1}, "male", ValidationReason.SPOUSE_GENDER_MISMATCH),
        ({C.WIFE: 1}, "female", ValidationReason.SPOUSE_GENDER_MISMATCH),
        ([("cousin twice removed", 1)], "male", ValidationReason.UNKNOWN_CATEGORY),
        ({C.SON: 1}, "unknown", ValidationReason.UNKNOWN_GENDER),
    ],
)
def test_inheritance_rejects_invalid_heirs(heirs, gender, reason) -> None:
    with pytest.raises(ValidationError) as exc_info:
        compute_distribution(heirs, gender, ESTATE)
    assert exc_info.value.reason is reason


def test_inheritance_accepts_whole_number_counts_of_any_type() -> None:
    for count in (2, "2", Decimal("2"), Fraction(2)):
        result = compute_distribution([("son", count)], "male", ESTATE)
        (sons,) = result.allocations_for(C.SON)
        assert sons.count == 2


@pytest.mark.parametrize(
    "estate, reason",
    [
        (EstateFinancials.from_gross(0), ValidationReason.ESTATE_NOT_POSITIVE),
        (EstateFinancials.from_gross(100, debts=-1), ValidationReason.NEGATIVE_AMOUNT),
        (EstateFinancials.from_gross(100, debts=60, funeral_cost=40), ValidationReason.ESTATE_EXHAUSTED_BY_LIABILITIES),
    ],
)
def test_inheritance_rejects_unusable_estates(estate, reason) -> None:
    with pytest.raises(ValidationError) as exc_info:
        compute_distribution({C.SON: 1}, "male", estate)
    assert exc_info.value.reason is reason


def test_calculate_distribution_returns_failure_value() -> None:
    outcome = calculate_distribution({}, "male", ESTATE)
    assert isinstance(outcome, DistributionFailure)
    assert outcome.ok is False
    assert outcome.reason is ValidationReason.NO_HEIRS

    outcome = calculate_distribution({C.SON: 1}, "male", ESTATE)
    assert outcome.ok is True


def test_estate_components_are_summed() -> None:
    estate = EstateFinancials(
        cash=Decimal("1000"),
        land_area=Decimal("10"),
        land_unit_price=Decimal("500"),
        gold_weight=Decimal("8"),
        gold_rate=Decimal("6000"),
        silver_weight=Decimal("100"),
        silver_rate=Decimal("80"),
        other_assets=Decimal("2000"),
    )
    assert estate.gross_value == Decimal("64000")
    result = compute_distribution({C.SON: 1}, "male", estate)
    assert result.net_value == Decimal("64000")


def test_parse_money_rules() -> None:
    assert parse_money("0") is None
    assert parse_money_allow_zero("0") == Decimal("0")
    assert parse_money("1 200 000") == Decimal("1200000")
    assert parse_money("12,5") == Decimal("12.5")
    assert parse_money("1,200,000") == Decimal("1200000")
    assert parse_money("12,00,000") == Decimal("1200000")
    assert parse_money("1.200.000,50") == Decimal("1200000.50")
    assert parse_money("1,200.50") == Decimal("1200.50")
    assert parse_money("1,200") == Decimal("1200")
    assert parse_money("1.200") is None
    assert parse_money("1,2,3") is None
    assert parse_money("100,") is None
    assert parse_money("-5") is None
    assert parse_money("abc") is None


def test_parse_count_rules() -> None:
    assert parse_count("3") == 3
    assert parse_count("0") == 0
    assert parse_count("100") is None
    assert parse_count("100", maximum=120) == 100
    assert parse_count("121", maximum=120) is None
    assert parse_count("two") is None
    assert parse_count("") is None


def test_bequest_ceiling_is_a_third_of_what_liabilities_leave() -> None:
    assert bequest_ceiling(EstateFinancials.from_gross(1_000, debts=100, funeral_cost=200)) == Decimal("700") / 3
    assert bequest_ceiling(EstateFinancials.from_gross(100, debts=100)) == 0
