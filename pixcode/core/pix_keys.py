from enum import Enum
import re
from typing import Callable

from pixcode.core.config import settings
from pixcode.core.pix_sanitizers import normalize_key


class KeyClassification(str, Enum):
    PERSON_DOCUMENT = "person_document"
    COMPANY_DOCUMENT = "company_document"
    EMAIL = "email"
    PHONE = "phone"
    RANDOM_KEY = "random_key"
    UNKNOWN = "unknown"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    KeyClassification.PERSON_DOCUMENT: "CPF",
    KeyClassification.COMPANY_DOCUMENT: "CNPJ",
    KeyClassification.EMAIL: "E-mail",
    KeyClassification.PHONE: "Telefone",
    KeyClassification.RANDOM_KEY: "Chave Aleatória",
    KeyClassification.UNKNOWN: "Chave PIX",
}

_PERSON_DOCUMENT = re.compile(r"\d{11}")
_COMPANY_DOCUMENT = re.compile(r"\d{14}")
_EMAIL = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
_PHONE = re.compile(r"(?:\+\d{1,3})?\d{10,11}")
_RANDOM_KEY = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
    re.IGNORECASE,
)


def _matches(pattern: re.Pattern) -> Callable[[str], bool]:
    return lambda key: pattern.fullmatch(key) is not None


# First match wins: document lengths come before the phone shape.
CLASSIFICATION_RULES: list[tuple[Callable[[str], bool], KeyClassification]] = [
    (_matches(_PERSON_DOCUMENT), KeyClassification.PERSON_DOCUMENT),
    (_matches(_COMPANY_DOCUMENT), KeyClassification.COMPANY_DOCUMENT),
    (_matches(_EMAIL), KeyClassification.EMAIL),
    (_matches(_PHONE), KeyClassification.PHONE),
    (_matches(_RANDOM_KEY), KeyClassification.RANDOM_KEY),
]


def classify_key(key: str | None) -> KeyClassification:
    cleaned = normalize_key(key)
    for predicate, classification in CLASSIFICATION_RULES:
        if predicate(cleaned):
            return classification
    return KeyClassification.UNKNOWN


def _format_person_document(digits: str) -> str:
    return f"{digits[:3]}.{digits[3:6]}.{digits[6:9]}-{digits[9:]}"


def _format_company_document(digits: str) -> str:
    return f"{digits[:2]}.{digits[2:5]}.{digits[5:8]}/{digits[8:12]}-{digits[12:]}"


def _format_phone(key: str) -> str:
    home_prefix = f"+{settings.PIX_PHONE_COUNTRY_CODE}"
    prefix = ""
    number = key
    if key.startswith(home_prefix) and len(key) - len(home_prefix) in (10, 11):
        number = key[len(home_prefix):]
    elif key.startswith("+"):
        for size in (11, 10):
            if 2 <= len(key) - size <= 4:
                prefix = f"{key[:len(key) - size]} "
                number = key[len(key) - size:]
                break

    if len(number) == 11:
        return f"{prefix}({number[:2]}) {number[2:7]}-{number[7:]}"
    if len(number) == 10:
        return f"{prefix}({number[:2]}) {number[2:6]}-{number[6:]}"
    return key


def format_key_display(
    key: str | None,
    classification: KeyClassification | None = None,
) -> str:
    """Human readable form of a Pix key, for on-screen display only."""
    cleaned = normalize_key(key)
    if classification is None:
        classification = classify_key(cleaned)

    if classification is KeyClassification.PERSON_DOCUMENT and len(cleaned) == 11:
        return _format_person_document(cleaned)
    if classification is KeyClassification.COMPANY_DOCUMENT and len(cleaned) == 14:
        return _format_company_document(cleaned)
    if classification is KeyClassification.PHONE:
        return _format_phone(cleaned)
    return cleaned
