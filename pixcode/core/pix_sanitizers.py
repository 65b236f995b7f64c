from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
import re
import unicodedata

from pixcode.core.pix_errors import InvalidAmount


MERCHANT_NAME_MAX_LENGTH = 25
REFERENCE_MAX_LENGTH = 25

_KEY_DISALLOWED = re.compile(r"[^A-Za-z0-9@.+\-]")
_REFERENCE_DISALLOWED = re.compile(r"[^A-Za-z0-9]")
_CENT = Decimal("0.01")


def normalize_key(value: str | None) -> str:
    return _KEY_DISALLOWED.sub("", value or "")


def strip_diacritics(value: str | None) -> str:
    decomposed = unicodedata.normalize("NFD", value or "")
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def sanitize_merchant_name(value: str | None) -> str:
    # Marks are removed before truncating so no accented letter is split.
    stripped = strip_diacritics(value)
    stripped = stripped.encode("ascii", errors="ignore").decode("ascii")
    return stripped.upper()[:MERCHANT_NAME_MAX_LENGTH]


def sanitize_reference(value: str | None, default: str) -> str:
    cleaned = _REFERENCE_DISALLOWED.sub("", value or "")[:REFERENCE_MAX_LENGTH]
    return cleaned or default


def parse_amount(amount: Decimal | int | float | str | None) -> Decimal:
    """Convert ``amount`` to a Decimal rounded to cents.

    Raises InvalidAmount for None, non numeric, non finite or non positive
    values, including values that round down to 0.00.
    """
    if amount is None or isinstance(amount, bool):
        raise InvalidAmount("Amount is required")
    try:
        value = Decimal(str(amount).strip())
    except (InvalidOperation, ValueError) as exc:
        raise InvalidAmount(f"Invalid amount {amount!r}") from exc
    if not value.is_finite():
        raise InvalidAmount(f"Amount must be a finite number, got {amount!r}")
    try:
        value = value.quantize(_CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise InvalidAmount(f"Amount out of range: {amount!r}") from exc
    if value < _CENT:
        raise InvalidAmount(f"Amount must be at least 0.01, got {amount!r}")
    return value


def format_amount(amount: Decimal | int | float | str | None) -> str:
    return f"{parse_amount(amount):.2f}"
