from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Mapping, Optional

DEFAULT_LANGUAGE = "en"
SUPPORTED_LANGUAGES = frozenset({"en", "ar", "ml", "ru", "dev"})

# Unknown keys fall back to English, then to the key itself.
TEXTS_EN: Dict[str, str] = {
    # Relatives
    "heir.husband": "Husband",
    "heir.wife": "Wife",
    "heir.son": "Son",
    "heir.daughter": "Daughter",
    "heir.grandson": "Son's son",
    "heir.granddaughter": "Son's daughter",
    "heir.father": "Father",
    "heir.mother": "Mother",
    "heir.paternal_grandfather": "Paternal grandfather",
    "heir.paternal_grandmother": "Paternal grandmother",
    "heir.maternal_grandmother": "Maternal grandmother",
    "heir.full_brother": "Full brother",
    "heir.full_sister": "Full sister",
    "heir.paternal_brother": "Paternal half-brother",
    "heir.paternal_sister": "Paternal half-sister",
    "heir.maternal_brother": "Maternal half-brother",
    "heir.maternal_sister": "Maternal half-sister",
    "heir.full_nephew": "Full brother's son",
    "heir.paternal_nephew": "Paternal brother's son",
    "heir.full_nephew_son": "Full brother's grandson",
    "heir.paternal_nephew_son": "Paternal brother's grandson",
    "heir.full_paternal_uncle": "Full paternal uncle",
    "heir.paternal_paternal_uncle": "Paternal half-uncle",
    "heir.full_cousin": "Full uncle's son",
    "heir.paternal_cousin": "Paternal uncle's son",
    "heir.full_cousin_son": "Full uncle's grandson",
    "heir.paternal_cousin_son": "Paternal uncle's grandson",
    "heir.full_cousin_grandson": "Full uncle's great-grandson",
    "heir.paternal_cousin_grandson": "Paternal uncle's great-grandson",
    "heir.daughters_son": "Daughter's son",
    "heir.daughters_daughter": "Daughter's daughter",
    "heir.sisters_son": "Sister's son",
    "heir.maternal_uncle": "Maternal uncle",
    "heir.maternal_aunt": "Maternal aunt",
    "heir.paternal_aunt": "Paternal aunt",
    # Legal basis
    "basis.fixed": "fixed share",
    "basis.residuary": "residue",
    "basis.excluded": "excluded",
    # Result
    "result.title": "📊 Faraid distribution (Shafi'i)",
    "result.order": "Order: funeral → debts → bequest (up to 1/3) → heirs.",
    "result.gross": "Gross estate: {amount}",
    "result.liabilities": "Debts and funeral: {amount}",
    "result.bequest": "Bequest applied: {amount}",
    "result.bequest.requested": "Bequest applied: {amount} (requested {requested})",
    "result.net": "Net distributable: {amount}",
    "result.line": "{label}: {fraction} ({percentage}, {basis}) → {amount}",
    "result.line.group": "{label} ×{count}: {fraction} ({percentage}, {basis}) → {amount}, each {each}",
    "result.excluded.title": "Receive nothing:",
    "result.excluded.blocked": "{label}: blocked by {by}",
    "result.excluded.outranked": "{label}: a nearer residuary takes the remainder ({by})",
    "result.excluded.residue_exhausted": "{label}: nothing remains after the fixed shares",
    "result.unclaimed": "Unassigned: {fraction} → {amount}",
    "result.disclaimer": "📌 This is a general automatic calculation; complex cases should be checked with a scholar.",
    "result.failure": "⚠️ The calculation cannot be made: {reason}",
    # Warnings
    "warning.bequest-ceiling-exceeded": "ℹ️ The bequest exceeded one third and was reduced to the one-third ceiling.",
    "warning.aul-applied": "ℹ️ Aul applied: fixed shares exceeded the estate and were reduced proportionally.",
    "warning.radd-applied": "ℹ️ Radd applied: the remainder was returned to the heirs, except the spouse.",
    "warning.umariyyatan-applied": "ℹ️ Umariyyatan: the mother takes one third of what remains after the spouse.",
    "warning.distant-kin-applied": "ℹ️ The remainder passed to distant kin (dhawu al-arham).",
    "warning.residue-unclaimed": "⚠️ Part of the estate has no automatic recipient.",
    "warning.complex-case-scholar-review-recommended": "⚠️ This is a disputed or complex case; please ask a scholar to review it.",
    # Validation failures
    "error.no-heirs": "no surviving relatives were given",
    "error.negative-count": "a relative count is negative",
    "error.invalid-count": "a relative count is not a whole number",
    "error.count-exceeds-max": "too many relatives of one kind ({detail})",
    "error.spouse-gender-mismatch": "the spouse does not match the deceased's gender",
    "error.unknown-category": "unknown relative type ({detail})",
    "error.unknown-gender": "unknown gender of the deceased ({detail})",
    "error.negative-amount": "an amount is negative ({detail})",
    "error.estate-not-positive": "the estate has no value",
    "error.estate-exhausted-by-liabilities": "debts and funeral costs consume the whole estate",
}

TEXTS_AR: Dict[str, str] = {
    "heir.husband": "الزوج",
    "heir.wife": "الزوجة",
    "heir.son": "الابن",
    "heir.daughter": "البنت",
    "heir.grandson": "ابن الابن",
    "heir.granddaughter": "بنت الابن",
    "heir.father": "الأب",
    "heir.mother": "الأم",
    "heir.paternal_grandfather": "الجد لأب",
    "heir.paternal_grandmother": "الجدة لأب",
    "heir.maternal_grandmother": "الجدة لأم",
    "heir.full_brother": "الأخ الشقيق",
    "heir.full_sister": "الأخت الشقيقة",
    "heir.paternal_brother": "الأخ لأب",
    "heir.paternal_sister": "الأخت لأب",
    "heir.maternal_brother": "الأخ لأم",
    "heir.maternal_sister": "الأخت لأم",
    "heir.full_nephew": "ابن الأخ الشقيق",
    "heir.paternal_nephew": "ابن الأخ لأب",
    "heir.full_nephew_son": "ابن ابن الأخ الشقيق",
    "heir.paternal_nephew_son": "ابن ابن الأخ لأب",
    "heir.full_paternal_uncle": "العم الشقيق",
    "heir.paternal_paternal_uncle": "العم لأب",
    "heir.full_cousin": "ابن العم الشقيق",
    "heir.paternal_cousin": "ابن العم لأب",
    "heir.full_cousin_son": "ابن ابن العم الشقيق",
    "heir.paternal_cousin_son": "ابن ابن العم لأب",
    "heir.full_cousin_grandson": "ابن ابن ابن العم الشقيق",
    "heir.paternal_cousin_grandson": "ابن ابن ابن العم لأب",
    "heir.daughters_son": "ابن البنت",
    "heir.daughters_daughter": "بنت البنت",
    "heir.sisters_son": "ابن الأخت",
    "heir.maternal_uncle": "الخال",
    "heir.maternal_aunt": "الخالة",
    "heir.paternal_aunt": "العمة",
    "basis.fixed": "فرض",
    "basis.residuary": "تعصيب",
    "basis.excluded": "محجوب",
    "result.title": "📊 قسمة التركة على المذهب الشافعي",
    "result.order": "الترتيب: تجهيز الميت ← الديون ← الوصية (إلى الثلث) ← الورثة.",
    "result.gross": "إجمالي التركة: {amount}",
    "result.liabilities": "الديون ومؤن التجهيز: {amount}",
    "result.bequest": "الوصية المنفذة: {amount}",
    "result.bequest.requested": "الوصية المنفذة: {amount} (المطلوب {requested})",
    "result.net": "الصافي للقسمة: {amount}",
    "result.excluded.title": "لا يرثون:",
    "result.excluded.blocked": "{label}: محجوب بـ {by}",
    "result.excluded.outranked": "{label}: يحجبه عاصب أقرب ({by})",
    "result.excluded.residue_exhausted": "{label}: استغرقت الفروض التركة",
    "result.disclaimer": "📌 هذا حساب آلي عام، والمسائل المشكلة تعرض على أهل العلم.",
    "warning.aul-applied": "ℹ️ عالت المسألة فنقصت الفروض بنسبها.",
    "warning.radd-applied": "ℹ️ رُدّ الباقي على أصحاب الفروض عدا الزوجين.",
    "warning.umariyyatan-applied": "ℹ️ العمريتان: للأم ثلث الباقي بعد فرض الزوج.",
    "warning.complex-case-scholar-review-recommended": "⚠️ مسألة خلافية أو مشكلة، تعرض على عالم.",
}

TEXTS_ML: Dict[str, str] = {
    "heir.husband": "ഭർത്താവ്",
    "heir.wife": "ഭാര്യമാർ",
    "heir.son": "പുത്രന്മാർ",
    "heir.daughter": "പുത്രിമാർ",
    "heir.grandson": "പുത്രന്റെ പുത്രന്മാർ",
    "heir.granddaughter": "പുത്രന്റെ പുത്രിമാർ",
    "heir.father": "പിതാവ്",
    "heir.mother": "മാതാവ്",
    "heir.paternal_grandfather": "പിതാമഹൻ (പിതാവിന്റെ പിതാവ്)",
    "heir.paternal_grandmother": "പിതാമഹി (പിതാവിന്റെ മാതാവ്)",
    "heir.maternal_grandmother": "മാതാമഹി (മാതാവിന്റെ മാതാവ്)",
    "heir.full_brother": "സഹോദരന്മാർ (Full)",
    "heir.full_sister": "സഹോദരിമാർ (Full)",
    "heir.paternal_brother": "പിതൃ സഹോദരന്മാർ",
    "heir.paternal_sister": "പിതൃ സഹോദരിമാർ",
    "heir.maternal_brother": "മാതൃ സഹോദരന്മാർ",
    "heir.maternal_sister": "മാതൃ സഹോദരിമാർ",
    "heir.full_nephew": "അനുജന്മാർ (Brother’s sons)",
    "heir.paternal_nephew": "പിതൃ അനുജന്മാർ",
    "heir.full_nephew_son": "അനുജപുത്രന്മാർ",
    "heir.paternal_nephew_son": "പിതൃ അനുജപുത്രന്മാർ",
    "heir.full_paternal_uncle": "പിതൃച്ഛന്മാർ (Full Paternal Uncles)",
    "heir.paternal_paternal_uncle": "പിതൃ പിതൃച്ഛന്മാർ",
    "heir.full_cousin": "കുസിന്‍സ് (Full Cousins)",
    "heir.paternal_cousin": "പിതൃ കുസിന്‍സ്",
    "heir.full_cousin_son": "കുസിന്‍സ് പുത്രന്മാർ",
    "heir.paternal_cousin_son": "പിതൃ കുസിന്‍സ് പുത്രന്മാർ",
    "heir.full_cousin_grandson": "കുസിന്‍സ് പുത്രപുത്രന്മാർ",
    "heir.paternal_cousin_grandson": "പിതൃ കുസിന്‍സ് പുത്രപുത്രന്മാർ",
    "heir.daughters_son": "പുത്രിയുടെ പുത്രന്മാർ",
    "heir.daughters_daughter": "പുത്രിയുടെ പുത്രിമാർ",
    "heir.sisters_son": "സഹോദരിയുടെ പുത്രന്മാർ",
    "heir.maternal_uncle": "അമ്മാവന്മാർ",
    "heir.maternal_aunt": "മാതൃസഹോദരിമാർ",
    "heir.paternal_aunt": "പിതൃസഹോദരിമാർ",
    "basis.residuary": "അസബ",
    "result.bequest": "വസീയ്യത്ത് (പരമാവധി 1/3): {amount}",
    "warning.aul-applied": "ഔൽ (Aul) നിയമപ്രകാരം വിഹിതങ്ങൾ ആനുപാതികമായി കുറച്ചിട്ടുണ്ട്.",
    "warning.complex-case-scholar-review-recommended": (
        "പിതാമഹനും സഹോദരങ്ങളും പോലുള്ള സങ്കീർണ്ണ കേസ്. ഇതിൽ പണ്ഡിതരുടെ നേരിട്ടുള്ള പരിശോധന ആവശ്യമാണ്."
    ),
}

TEXTS_RU: Dict[str, str] = {
    "heir.husband": "Муж",
    "heir.wife": "Жена",
    "heir.son": "Сын",
    "heir.daughter": "Дочь",
    "heir.grandson": "Сын сына",
    "heir.granddaughter": "Дочь сына",
    "heir.father": "Отец",
    "heir.mother": "Мать",
    "heir.paternal_grandfather": "Дед по отцу",
    "heir.paternal_grandmother": "Бабушка по отцу",
    "heir.maternal_grandmother": "Бабушка по матери",
    "heir.full_brother": "Родной брат",
    "heir.full_sister": "Родная сестра",
    "heir.paternal_brother": "Единокровный брат",
    "heir.paternal_sister": "Единокровная сестра",
    "heir.maternal_brother": "Единоутробный брат",
    "heir.maternal_sister": "Единоутробная сестра",
    "heir.full_nephew": "Сын родного брата",
    "heir.paternal_nephew": "Сын единокровного брата",
    "heir.full_nephew_son": "Внук родного брата",
    "heir.paternal_nephew_son": "Внук единокровного брата",
    "heir.full_paternal_uncle": "Родной дядя по отцу",
    "heir.paternal_paternal_uncle": "Единокровный дядя по отцу",
    "heir.full_cousin": "Сын родного дяди",
    "heir.paternal_cousin": "Сын единокровного дяди",
    "heir.full_cousin_son": "Внук родного дяди",
    "heir.paternal_cousin_son": "Внук единокровного дяди",
    "heir.full_cousin_grandson": "Правнук родного дяди",
    "heir.paternal_cousin_grandson": "Правнук единокровного дяди",
    "heir.daughters_son": "Сын дочери",
    "heir.daughters_daughter": "Дочь дочери",
    "heir.sisters_son": "Сын сестры",
    "heir.maternal_uncle": "Дядя по матери",
    "heir.maternal_aunt": "Тётя по матери",
    "heir.paternal_aunt": "Тётя по отцу",
    "basis.fixed": "фард",
    "basis.residuary": "остаток",
    "basis.excluded": "исключён",
    "result.title": "📊 Расчёт долей по Шариату (Коран 4:11–12, 4:176)",
    "result.order": "Порядок: похороны → долги → васият (до 1/3 и не наследникам) → распределение остатка.",
    "result.net": "К распределению: {amount}",
    "result.excluded.title": "Не наследуют:",
    "result.excluded.blocked": "{label}: исключён ({by})",
    "warning.aul-applied": "ℹ️ Применён ‘awl (сумма обязательных долей > 100%).",
    "warning.radd-applied": "ℹ️ Применён radd (остаток возвращён наследникам, кроме супруга/супруги).",
    "warning.residue-unclaimed": "⚠️ Остаток не распределён автоматически — лучше уточнить у учёного.",
    "result.disclaimer": "📌 Важно: это общий автоматический расчёт, сложные случаи лучше уточнить у учёного.",
}

TEXTS: Mapping[str, Mapping[str, str]] = MappingProxyType(
    {
        "en": MappingProxyType(dict(TEXTS_EN)),
        "ar": MappingProxyType(dict(TEXTS_AR)),
        "ml": MappingProxyType(dict(TEXTS_ML)),
        "ru": MappingProxyType(dict(TEXTS_RU)),
    }
)

LANGUAGE_LABELS: Mapping[str, Mapping[str, str]] = MappingProxyType(
    {
        "en": {"en": "English", "ar": "Arabic", "ml": "Malayalam", "ru": "Russian", "dev": "DEV"},
        "ar": {"en": "الإنجليزية", "ar": "العربية", "ml": "المالايالامية", "ru": "الروسية", "dev": "DEV"},
        "ml": {"en": "ഇംഗ്ലീഷ്", "ar": "അറബി", "ml": "മലയാളം", "ru": "റഷ്യൻ", "dev": "DEV"},
        "ru": {"en": "English", "ar": "العربية", "ml": "Малаялам", "ru": "Русский", "dev": "DEV"},
    }
)


def resolve_language(*codes: Optional[str]) -> str:
    for code in codes:
        if not code:
            continue
        normalized = code.lower()
        if normalized in SUPPORTED_LANGUAGES:
            return normalized
    return DEFAULT_LANGUAGE


def get_text(key: str, lang_code: str, **kwargs) -> str:
    language = (lang_code or DEFAULT_LANGUAGE).lower()
    if language == "dev":
        text = key
    else:
        text = TEXTS.get(language, {}).get(key)
        if text is None:
            text = TEXTS[DEFAULT_LANGUAGE].get(key) or key
    try:
        return text.format(**kwargs) if kwargs else text
    except (KeyError, IndexError, ValueError):
        return text


def get_language_label(locale_code: str, viewer_language: str) -> str:
    viewer = (viewer_language or DEFAULT_LANGUAGE).lower()
    labels = LANGUAGE_LABELS.get(viewer, LANGUAGE_LABELS[DEFAULT_LANGUAGE])
    return labels.get(locale_code, locale_code.upper())
