from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from decimal import Decimal

from .errors import ValidationError, ValidationReason
from .models import EstateFinancials

logger = logging.getLogger(__name__)

BEQUEST_CEILING_DIVISOR = Decimal(3)


@dataclass(frozen=True, slots=True)
class EstateSettlement:
    """Order of payment: funeral, debts, bequest (capped at 1/3), then heirs."""

    gross_value: Decimal
    liabilities: Decimal
    bequest_ceiling: Decimal
    requested_bequest: Decimal
    effective_bequest: Decimal
    net_value: Decimal

    @property
    def bequest_clamped(self) -> bool:
        return self.effective_bequest < self.requested_bequest


def bequest_ceiling(estate: EstateFinancials) -> Decimal:
    remaining = estate.gross_value - estate.liabilities
    if remaining <= 0:
        return Decimal("0")
    return remaining / BEQUEST_CEILING_DIVISOR


def settle_estate(estate: EstateFinancials) -> EstateSettlement:
    for item in fields(estate):
        value = getattr(estate, item.name)
        if value < 0:
            raise ValidationError(ValidationReason.NEGATIVE_AMOUNT, f"{item.name}={value}")

    gross = estate.gross_value
    if gross <= 0:
        raise ValidationError(ValidationReason.ESTATE_NOT_POSITIVE, f"gross={gross}")
    remaining = gross - estate.liabilities
    if remaining <= 0:
        raise ValidationError(
            ValidationReason.ESTATE_EXHAUSTED_BY_LIABILITIES,
            f"gross={gross} liabilities={estate.liabilities}",
        )

    ceiling = bequest_ceiling(estate)
    requested = estate.bequest
    effective = min(requested, ceiling)
    if effective < requested:
        logger.debug("Bequest %s scaled down to ceiling %s", requested, ceiling)
    net_value = max(Decimal("0"), remaining - effective)
    return EstateSettlement(
        gross_value=gross,
        liabilities=estate.liabilities,
        bequest_ceiling=ceiling,
        requested_bequest=requested,
        effective_bequest=effective,
        net_value=net_value,
    )
