from __future__ import annotations

from decimal import Decimal
from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from .models import EstateFinancials
from .parsing import parse_count, parse_money_allow_zero

_AMOUNT_FIELDS = (
    "gross_value",
    "cash",
    "land_area",
    "land_unit_price",
    "gold_weight",
    "gold_rate",
    "silver_weight",
    "silver_rate",
    "other_assets",
    "debts",
    "funeral_cost",
    "bequest",
)


class EstateIn(BaseModel):
    gross_value: Optional[Decimal] = None
    cash: Optional[Decimal] = None
    land_area: Optional[Decimal] = None
    land_unit_price: Optional[Decimal] = None
    gold_weight: Optional[Decimal] = None
    gold_rate: Optional[Decimal] = None
    silver_weight: Optional[Decimal] = None
    silver_rate: Optional[Decimal] = None
    other_assets: Optional[Decimal] = None
    debts: Optional[Decimal] = None
    funeral_cost: Optional[Decimal] = None
    bequest: Optional[Decimal] = Field(None, description="Requested wasiyyah, capped at 1/3 by the engine")

    @field_validator(*_AMOUNT_FIELDS, mode="before")
    @classmethod
    def _lenient_amount(cls, value: Any) -> Any:
        if value is None or isinstance(value, (int, float, Decimal)):
            return value
        text = str(value).strip()
        if not text:
            return None
        amount = parse_money_allow_zero(text)
        if amount is None:
            raise ValueError(f"not an amount: {text!r}")
        return amount

    def to_financials(self) -> EstateFinancials:
        return EstateFinancials(
            cash=(self.cash or Decimal("0")) + (self.gross_value or Decimal("0")),
            land_area=self.land_area or Decimal("0"),
            land_unit_price=self.land_unit_price or Decimal("0"),
            gold_weight=self.gold_weight or Decimal("0"),
            gold_rate=self.gold_rate or Decimal("0"),
            silver_weight=self.silver_weight or Decimal("0"),
            silver_rate=self.silver_rate or Decimal("0"),
            other_assets=self.other_assets or Decimal("0"),
            debts=self.debts or Decimal("0"),
            funeral_cost=self.funeral_cost or Decimal("0"),
            bequest=self.bequest or Decimal("0"),
        )


class HeirIn(BaseModel):
    type: str = Field(..., min_length=1)
    count: int = 1

    @field_validator("count", mode="before")
    @classmethod
    def _lenient_count(cls, value: Any) -> Any:
        if isinstance(value, str):
            parsed = parse_count(value)
            if parsed is None:
                raise ValueError(f"not a count: {value!r}")
            return parsed
        return value


class DistributionRequest(BaseModel):
    deceased_gender: str
    heirs: List[HeirIn]
    estate: EstateIn
    language: Optional[str] = None

    @field_validator("heirs", mode="before")
    @classmethod
    def _heirs_from_mapping(cls, value: Any) -> Any:
        # {"Son": 2, "Wife": 1} is accepted alongside [{"type": "Son", "count": 2}].
        if isinstance(value, dict):
            return [{"type": key, "count": count} for key, count in value.items()]
        return value

    @field_validator("deceased_gender", mode="before")
    @classmethod
    def _normalize_gender(cls, value: Any) -> Any:
        if value is None:
            return value
        return str(value).strip().lower()

    def heir_pairs(self) -> List[Tuple[str, int]]:
        return [(item.type, item.count) for item in self.heirs]

    def estate_financials(self) -> EstateFinancials:
        return self.estate.to_financials()
