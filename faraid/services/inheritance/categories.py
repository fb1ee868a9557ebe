from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class DeceasedGender(str, Enum):
    MALE = "male"
    FEMALE = "female"


class LegalClass(str, Enum):
    SHARER = "sharer"
    RESIDUARY = "residuary"
    DISTANT_KIN = "distant_kin"


class RelativeCategory(str, Enum):
    HUSBAND = "husband"
    WIFE = "wife"
    SON = "son"
    DAUGHTER = "daughter"
    GRANDSON = "grandson"
    GRANDDAUGHTER = "granddaughter"
    FATHER = "father"
    MOTHER = "mother"
    PATERNAL_GRANDFATHER = "paternal_grandfather"
    PATERNAL_GRANDMOTHER = "paternal_grandmother"
    MATERNAL_GRANDMOTHER = "maternal_grandmother"
    FULL_BROTHER = "full_brother"
    FULL_SISTER = "full_sister"
    PATERNAL_BROTHER = "paternal_brother"
    PATERNAL_SISTER = "paternal_sister"
    MATERNAL_BROTHER = "maternal_brother"
    MATERNAL_SISTER = "maternal_sister"
    FULL_NEPHEW = "full_nephew"
    PATERNAL_NEPHEW = "paternal_nephew"
    FULL_NEPHEW_SON = "full_nephew_son"
    PATERNAL_NEPHEW_SON = "paternal_nephew_son"
    FULL_PATERNAL_UNCLE = "full_paternal_uncle"
    PATERNAL_PATERNAL_UNCLE = "paternal_paternal_uncle"
    FULL_COUSIN = "full_cousin"
    PATERNAL_COUSIN = "paternal_cousin"
    FULL_COUSIN_SON = "full_cousin_son"
    PATERNAL_COUSIN_SON = "paternal_cousin_son"
    FULL_COUSIN_GRANDSON = "full_cousin_grandson"
    PATERNAL_COUSIN_GRANDSON = "paternal_cousin_grandson"
    DAUGHTERS_SON = "daughters_son"
    DAUGHTERS_DAUGHTER = "daughters_daughter"
    SISTERS_SON = "sisters_son"
    MATERNAL_UNCLE = "maternal_uncle"
    MATERNAL_AUNT = "maternal_aunt"
    PATERNAL_AUNT = "paternal_aunt"


@dataclass(frozen=True, slots=True)
class CategoryInfo:
    legal_class: LegalClass
    max_count: Optional[int] = None
    female: bool = False


C = RelativeCategory

CATEGORY_INFO: dict[RelativeCategory, CategoryInfo] = {
    C.HUSBAND: CategoryInfo(LegalClass.SHARER, 1),
    C.WIFE: CategoryInfo(LegalClass.SHARER, 4, female=True),
    C.SON: CategoryInfo(LegalClass.RESIDUARY),
    C.DAUGHTER: CategoryInfo(LegalClass.SHARER, female=True),
    C.GRANDSON: CategoryInfo(LegalClass.RESIDUARY),
    C.GRANDDAUGHTER: CategoryInfo(LegalClass.SHARER, female=True),
    C.FATHER: CategoryInfo(LegalClass.SHARER, 1),
    C.MOTHER: CategoryInfo(LegalClass.SHARER, 1, female=True),
    C.PATERNAL_GRANDFATHER: CategoryInfo(LegalClass.SHARER, 1),
    C.PATERNAL_GRANDMOTHER: CategoryInfo(LegalClass.SHARER, 1, female=True),
    C.MATERNAL_GRANDMOTHER: CategoryInfo(LegalClass.SHARER, 1, female=True),
    C.FULL_BROTHER: CategoryInfo(LegalClass.RESIDUARY),
    C.FULL_SISTER: CategoryInfo(LegalClass.SHARER, female=True),
    C.PATERNAL_BROTHER: CategoryInfo(LegalClass.RESIDUARY),
    C.PATERNAL_SISTER: CategoryInfo(LegalClass.SHARER, female=True),
    C.MATERNAL_BROTHER: CategoryInfo(LegalClass.SHARER),
    C.MATERNAL_SISTER: CategoryInfo(LegalClass.SHARER, female=True),
    C.FULL_NEPHEW: CategoryInfo(LegalClass.RESIDUARY),
    C.PATERNAL_NEPHEW: CategoryInfo(LegalClass.RESIDUARY),
    C.FULL_NEPHEW_SON: CategoryInfo(LegalClass.RESIDUARY),
    C.PATERNAL_NEPHEW_SON: CategoryInfo(LegalClass.RESIDUARY),
    C.FULL_PATERNAL_UNCLE: CategoryInfo(LegalClass.RESIDUARY),
    C.PATERNAL_PATERNAL_UNCLE: CategoryInfo(LegalClass.RESIDUARY),
    C.FULL_COUSIN: CategoryInfo(LegalClass.RESIDUARY),
    C.PATERNAL_COUSIN: CategoryInfo(LegalClass.RESIDUARY),
    C.FULL_COUSIN_SON: CategoryInfo(LegalClass.RESIDUARY),
    C.PATERNAL_COUSIN_SON: CategoryInfo(LegalClass.RESIDUARY),
    C.FULL_COUSIN_GRANDSON: CategoryInfo(LegalClass.RESIDUARY),
    C.PATERNAL_COUSIN_GRANDSON: CategoryInfo(LegalClass.RESIDUARY),
    C.DAUGHTERS_SON: CategoryInfo(LegalClass.DISTANT_KIN),
    C.DAUGHTERS_DAUGHTER: CategoryInfo(LegalClass.DISTANT_KIN, female=True),
    C.SISTERS_SON: CategoryInfo(LegalClass.DISTANT_KIN),
    C.MATERNAL_UNCLE: CategoryInfo(LegalClass.DISTANT_KIN),
    C.MATERNAL_AUNT: CategoryInfo(LegalClass.DISTANT_KIN, female=True),
    C.PATERNAL_AUNT: CategoryInfo(LegalClass.DISTANT_KIN, female=True),
}

SPOUSES = frozenset({C.HUSBAND, C.WIFE})
DESCENDANTS = frozenset({C.SON, C.DAUGHTER, C.GRANDSON, C.GRANDDAUGHTER})
MALE_DESCENDANTS = frozenset({C.SON, C.GRANDSON})
FEMALE_DESCENDANTS = frozenset({C.DAUGHTER, C.GRANDDAUGHTER})
MATERNAL_SIBLINGS = frozenset({C.MATERNAL_BROTHER, C.MATERNAL_SISTER})
SIBLINGS = frozenset(
    {
        C.FULL_BROTHER,
        C.FULL_SISTER,
        C.PATERNAL_BROTHER,
        C.PATERNAL_SISTER,
        C.MATERNAL_BROTHER,
        C.MATERNAL_SISTER,
    }
)
GRANDMOTHERS = frozenset({C.PATERNAL_GRANDMOTHER, C.MATERNAL_GRANDMOTHER})

# Male-line collaterals after the siblings, nearest first.
COLLATERAL_AGNATES: tuple[RelativeCategory, ...] = (
    C.FULL_NEPHEW,
    C.PATERNAL_NEPHEW,
    C.FULL_NEPHEW_SON,
    C.PATERNAL_NEPHEW_SON,
    C.FULL_PATERNAL_UNCLE,
    C.PATERNAL_PATERNAL_UNCLE,
    C.FULL_COUSIN,
    C.PATERNAL_COUSIN,
    C.FULL_COUSIN_SON,
    C.PATERNAL_COUSIN_SON,
    C.FULL_COUSIN_GRANDSON,
    C.PATERNAL_COUSIN_GRANDSON,
)

DISTANT_KIN = frozenset(
    category for category, info in CATEGORY_INFO.items() if info.legal_class is LegalClass.DISTANT_KIN
)


def is_female(category: RelativeCategory) -> bool:
    return CATEGORY_INFO[category].female


def parse_category(value: object) -> Optional[RelativeCategory]:
    """Map free-form keys ("Full Brother", "full-brother") onto the enum."""
    if isinstance(value, RelativeCategory):
        return value
    raw = str(value or "").strip().lower()
    if not raw:
        return None
    normalized = raw.replace("'s", "s").replace("-", "_").replace(" ", "_")
    try:
        return RelativeCategory(normalized)
    except ValueError:
        return None


def parse_gender(value: object) -> Optional[DeceasedGender]:
    if isinstance(value, DeceasedGender):
        return value
    raw = str(value or "").strip().lower()
    try:
        return DeceasedGender(raw)
    except ValueError:
        return None
