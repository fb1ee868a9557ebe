from typing import Any, List
import json

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from faraid.services.i18n.localization import DEFAULT_LANGUAGE, SUPPORTED_LANGUAGES

_LOG_LEVELS = frozenset({"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"})


def _strip_wrapping_quotes(value: str) -> str:
    text = value.strip()
    if len(text) >= 2 and text[0] == text[-1] and text[0] in {'"', "'"}:
        return text[1:-1].strip()
    return text


def _unwrap_singleton_brackets(value: str) -> str:
    text = _strip_wrapping_quotes(value)
    if text.startswith("[") and text.endswith("]"):
        inner = text[1:-1].strip()
        if inner and "," not in inner:
            return _strip_wrapping_quotes(inner)
    return text


def _parse_string_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        return [str(item).strip() for item in value if str(item).strip()]
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return []
        try:
            parsed = json.loads(text)
        except ValueError:
            parsed = None
        if isinstance(parsed, list):
            return [str(item).strip() for item in parsed if str(item).strip()]
        if isinstance(parsed, str):
            text = parsed.strip()
        else:
            text = _unwrap_singleton_brackets(text)
        return [part.strip() for part in text.replace(";", ",").split(",") if part.strip()]
    return [str(value).strip()] if str(value).strip() else []


class Settings(BaseSettings):
    default_language: str = DEFAULT_LANGUAGE
    # Keep Any here so env parser doesn't force JSON for list fields.
    languages: Any = ["en", "ar", "ml", "ru"]
    currency: str = ""
    log_level: str = "WARNING"
    log_format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

    @field_validator("languages", mode="before")
    @classmethod
    def _split_languages(cls, value: Any) -> List[str]:
        langs = [item.lower() for item in _parse_string_list(value)]
        langs = [item for item in langs if item in SUPPORTED_LANGUAGES]
        return langs or [DEFAULT_LANGUAGE]

    @field_validator("default_language", mode="before")
    @classmethod
    def _normalize_default_language(cls, value: Any) -> str:
        if value is None:
            return DEFAULT_LANGUAGE
        text = _unwrap_singleton_brackets(str(value)).strip().lower()
        return text if text in SUPPORTED_LANGUAGES else DEFAULT_LANGUAGE

    @field_validator("currency", mode="before")
    @classmethod
    def _normalize_currency(cls, value: Any) -> str:
        if value is None:
            return ""
        return _unwrap_singleton_brackets(str(value))

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: Any) -> str:
        text = _unwrap_singleton_brackets(str(value or "")).upper()
        return text if text in _LOG_LEVELS else "WARNING"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="FARAID_",
        extra="ignore",
    )


settings = Settings()
