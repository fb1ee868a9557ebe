from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from faraid.services.i18n.localization import get_text, resolve_language

from .categories import RelativeCategory
from .models import (
    DistributionFailure,
    DistributionOutcome,
    DistributionResult,
    ShareAllocation,
    format_fraction,
    share_of,
)
from .parsing import format_money


def heir_label(category: RelativeCategory, lang_code: str) -> str:
    return get_text(f"heir.{category.value}", lang_code)


def _joined_labels(categories: tuple[RelativeCategory, ...], lang_code: str) -> str:
    return ", ".join(heir_label(category, lang_code) for category in categories)


def _allocation_line(item: ShareAllocation, lang_code: str, currency: str) -> str:
    values = {
        "label": heir_label(item.category, lang_code),
        "fraction": item.fraction_string,
        "percentage": item.percentage_string,
        "basis": get_text(f"basis.{item.basis.value}", lang_code),
        "amount": format_money(item.amount, currency=currency),
    }
    if item.count > 1:
        return get_text(
            "result.line.group",
            lang_code,
            count=item.count,
            each=format_money(item.amount_per_head, currency=currency),
            **values,
        )
    return get_text("result.line", lang_code, **values)


def _excluded_line(item: ShareAllocation, lang_code: str) -> str:
    reason = item.exclusion.value if item.exclusion else "blocked"
    return get_text(
        f"result.excluded.{reason}",
        lang_code,
        label=heir_label(item.category, lang_code),
        by=_joined_labels(item.excluded_by, lang_code),
    )


def render_distribution(
    result: DistributionResult,
    *,
    language: Optional[str] = None,
    currency: str = "",
) -> str:
    lang_code = resolve_language(language)
    estate = result.estate
    lines: list[str] = [
        get_text("result.title", lang_code),
        get_text("result.order", lang_code),
        "",
        get_text("result.gross", lang_code, amount=format_money(estate.gross_value, currency=currency)),
    ]
    if estate.liabilities:
        lines.append(
            get_text("result.liabilities", lang_code, amount=format_money(estate.liabilities, currency=currency))
        )
    if estate.bequest:
        bequest = format_money(result.effective_bequest, currency=currency)
        if result.effective_bequest < estate.bequest:
            lines.append(
                get_text(
                    "result.bequest.requested",
                    lang_code,
                    amount=bequest,
                    requested=format_money(estate.bequest, currency=currency),
                )
            )
        else:
            lines.append(get_text("result.bequest", lang_code, amount=bequest))
    lines.append(get_text("result.net", lang_code, amount=format_money(result.net_value, currency=currency)))
    lines.append("")

    if result.warnings:
        lines.extend(get_text(f"warning.{code.value}", lang_code) for code in result.warnings)
        lines.append("")

    lines.extend(_allocation_line(item, lang_code, currency) for item in result.entitled)

    unclaimed = result.summary.unclaimed_fraction
    if unclaimed:
        lines.append(
            get_text(
                "result.unclaimed",
                lang_code,
                fraction=format_fraction(unclaimed),
                amount=format_money(share_of(result.net_value, unclaimed), currency=currency),
            )
        )

    if result.excluded:
        lines.append("")
        lines.append(get_text("result.excluded.title", lang_code))
        lines.extend(_excluded_line(item, lang_code) for item in result.excluded)

    lines.extend(["", get_text("result.disclaimer", lang_code)])
    return "\n".join(lines).strip()


def render_failure(failure: DistributionFailure, *, language: Optional[str] = None) -> str:
    lang_code = resolve_language(language)
    reason = get_text(f"error.{failure.reason.value}", lang_code, detail=failure.detail)
    return get_text("result.failure", lang_code, reason=reason)


def render_outcome(outcome: DistributionOutcome, *, language: Optional[str] = None, currency: str = "") -> str:
    if isinstance(outcome, DistributionFailure):
        return render_failure(outcome, language=language)
    return render_distribution(outcome, language=language, currency=currency)


def _money(value: Decimal) -> str:
    return str(value.quantize(Decimal("0.01")))


def distribution_as_dict(result: DistributionResult, *, language: Optional[str] = None) -> dict[str, Any]:
    lang_code = resolve_language(language)
    summary = result.summary
    return {
        "ok": True,
        "gross_value": _money(result.estate.gross_value),
        "debts": _money(result.estate.debts),
        "funeral_cost": _money(result.estate.funeral_cost),
        "bequest_requested": _money(result.estate.bequest),
        "bequest_applied": _money(result.effective_bequest),
        "net_distributable_value": _money(result.net_value),
        "shares": [
            {
                "category": item.category.value,
                "label": heir_label(item.category, lang_code),
                "legal_basis": item.basis.value,
                "fraction": item.fraction_string,
                "percentage": item.percentage_string,
                "total_amount": _money(item.amount),
                "head_count": item.count,
                "amount_per_head": _money(item.amount_per_head),
                "exclusion": item.exclusion.value if item.exclusion else None,
                "excluded_by": [category.value for category in item.excluded_by],
            }
            for item in result.allocations
        ],
        "summary": {
            "fixed_fraction_total": format_fraction(summary.fixed_fraction_total),
            "residue_fraction_total": format_fraction(summary.residue_fraction_total),
            "unclaimed_fraction": format_fraction(summary.unclaimed_fraction),
            "problem_base": summary.problem_base,
            "adjusted_base": summary.adjusted_base,
            "aul_applied": summary.aul_applied,
            "radd_applied": summary.radd_applied,
            "umariyyatan_applied": summary.umariyyatan_applied,
            "distant_kin_applied": summary.distant_kin_applied,
        },
        "warnings": [code.value for code in result.warnings],
    }


def failure_as_dict(failure: DistributionFailure, *, language: Optional[str] = None) -> dict[str, Any]:
    lang_code = resolve_language(language)
    return {
        "ok": False,
        "reason": failure.reason.value,
        "detail": failure.detail,
        "message": get_text(f"error.{failure.reason.value}", lang_code, detail=failure.detail),
    }
