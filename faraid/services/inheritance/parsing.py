from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Optional

INHERITANCE_MAX_RELATIVES = 99


def parse_count(text: Optional[str], *, maximum: int = INHERITANCE_MAX_RELATIVES) -> Optional[int]:
    raw = (text or "").strip()
    if not re.fullmatch(r"\d+", raw) or len(raw) > len(str(maximum)):
        return None
    value = int(raw)
    return value if value <= maximum else None


def _is_grouped(text: str, separator: str) -> bool:
    # Western 1,200,000 and Indian 12,00,000 grouping.
    groups = text.split(separator)
    if len(groups) < 2 or not all(group.isdigit() for group in groups):
        return False
    head, *middle, tail = groups
    return 1 <= len(head) <= 3 and len(tail) == 3 and all(len(group) in (2, 3) for group in middle)


def _clean_amount(raw: str) -> Optional[str]:
    """Normalize separators to a plain decimal string; None when ambiguous."""
    cleaned = re.sub(r"[^\d,\.]", "", raw)
    separators = [char for char in cleaned if char in ",."]
    if not separators:
        return cleaned or None

    last = separators[-1]
    integer, _, fraction = cleaned.rpartition(last)
    if cleaned.count(last) == 1 and fraction.isdigit() and len(fraction) <= 2:
        other = "." if last == "," else ","
        if other in integer:
            if not _is_grouped(integer, other):
                return None
            integer = integer.replace(other, "")
        return f"{integer}.{fraction}" if integer.isdigit() else None

    if len(set(separators)) > 1 or not _is_grouped(cleaned, last):
        return None
    # "1.200" reads as either 1.2 or 1200.
    if last == "." and len(separators) == 1:
        return None
    return cleaned.replace(last, "")


def parse_money_allow_zero(text: Optional[str]) -> Optional[Decimal]:
    raw = (text or "").strip()
    if not raw:
        return None
    if raw.startswith("-"):
        return None
    cleaned = _clean_amount(raw)
    if not cleaned:
        return None
    try:
        amount = Decimal(cleaned)
    except (InvalidOperation, ValueError):
        return None
    if amount < 0:
        return None
    return amount


def parse_money(text: Optional[str]) -> Optional[Decimal]:
    amount = parse_money_allow_zero(text)
    if amount is None or amount <= 0:
        return None
    return amount


def format_money(amount: Decimal, *, currency: str = "", group: str = " ", decimal_mark: str = ",") -> str:
    whole, _, cents = f"{amount.quantize(Decimal('0.01')):,.2f}".partition(".")
    number = whole.replace(",", group)
    if cents != "00":
        number = f"{number}{decimal_mark}{cents}"
    return f"{number} {currency}".rstrip()
