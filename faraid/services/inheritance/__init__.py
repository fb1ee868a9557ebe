"""Inheritance (faraid) calculation services."""

from .calculator import calculate_distribution, compute_distribution
from .categories import DeceasedGender, RelativeCategory, parse_category
from .errors import ValidationError, ValidationReason
from .models import (
    DistributionFailure,
    DistributionOutcome,
    DistributionResult,
    EstateFinancials,
    HeirSet,
    LegalBasis,
    ShareAllocation,
    WarningCode,
)
from .parsing import (
    INHERITANCE_MAX_RELATIVES,
    format_money,
    parse_count,
    parse_money,
    parse_money_allow_zero,
)
from .render import distribution_as_dict, failure_as_dict, render_distribution, render_failure, render_outcome
from .schema import DistributionRequest

__all__ = [
    "INHERITANCE_MAX_RELATIVES",
    "DeceasedGender",
    "DistributionFailure",
    "DistributionOutcome",
    "DistributionRequest",
    "DistributionResult",
    "EstateFinancials",
    "HeirSet",
    "LegalBasis",
    "RelativeCategory",
    "ShareAllocation",
    "ValidationError",
    "ValidationReason",
    "WarningCode",
    "calculate_distribution",
    "compute_distribution",
    "distribution_as_dict",
    "failure_as_dict",
    "format_money",
    "parse_category",
    "parse_count",
    "parse_money",
    "parse_money_allow_zero",
    "render_distribution",
    "render_failure",
    "render_outcome",
]
