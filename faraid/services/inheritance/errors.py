from __future__ import annotations

from enum import Enum


class ValidationReason(str, Enum):
    NO_HEIRS = "no-heirs"
    NEGATIVE_COUNT = "negative-count"
    INVALID_COUNT = "invalid-count"
    COUNT_EXCEEDS_MAX = "count-exceeds-max"
    SPOUSE_GENDER_MISMATCH = "spouse-gender-mismatch"
    UNKNOWN_CATEGORY = "unknown-category"
    UNKNOWN_GENDER = "unknown-gender"
    NEGATIVE_AMOUNT = "negative-amount"
    ESTATE_NOT_POSITIVE = "estate-not-positive"
    ESTATE_EXHAUSTED_BY_LIABILITIES = "estate-exhausted-by-liabilities"


class ValidationError(ValueError):
    """Input that cannot produce a meaningful distribution."""

    def __init__(self, reason: ValidationReason, detail: str = "") -> None:
        self.reason = reason
        self.detail = detail
        message = reason.value if not detail else f"{reason.value}: {detail}"
        super().__init__(message)
