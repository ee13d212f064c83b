"""Domain validation helpers."""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from logging import Logger

from steady.domain.exceptions import InvalidAmountError, InvalidRecordError
from steady.utils.decimal_utils import coerce_amount


def parse_amount(raw) -> Decimal:
    """Parse a user-entered amount, rejecting anything but a finite value >= 0.

    Args:
        raw: Amount as typed in a form (number or string). A comma is
            accepted as the decimal separator.

    Returns:
        Decimal: Parsed amount.

    Raises:
        InvalidAmountError: If the value is blank, non-numeric, not finite
            or negative.
    """
    if raw is None or isinstance(raw, bool):
        raise InvalidAmountError(f"Invalid amount: {raw!r}")
    if isinstance(raw, Decimal):
        value = raw
    else:
        text = str(raw).strip()
        if "," in text and "." not in text:
            text = text.replace(",", ".")
        try:
            value = Decimal(text)
        except (InvalidOperation, ValueError) as exc:
            raise InvalidAmountError(f"Invalid amount: {raw!r}") from exc
    if not value.is_finite():
        raise InvalidAmountError(f"Invalid amount: {raw!r}")
    if value < 0:
        raise InvalidAmountError(f"Amount must not be negative: {raw!r}")
    return value


def parse_installment_count(raw) -> int | None:
    """Parse an optional installment count.

    Args:
        raw: Count as typed in a form; blank means no installment plan.

    Returns:
        int | None: Parsed count, or None when blank.

    Raises:
        InvalidRecordError: If the value is not a non-negative integer.
    """
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return None
    try:
        count = int(str(raw).strip())
    except ValueError as exc:
        raise InvalidRecordError(
            f"Invalid installment count: {raw!r}"
        ) from exc
    if count < 0:
        raise InvalidRecordError(f"Invalid installment count: {raw!r}")
    return count


def parse_date(raw) -> date:
    """Parse an ISO calendar date.

    Raises:
        InvalidRecordError: If the value is not a date or ISO date string.
    """
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    try:
        return date.fromisoformat(str(raw).strip()[:10])
    except ValueError as exc:
        raise InvalidRecordError(f"Invalid date: {raw!r}") from exc


def parse_choice(enum_cls, raw, field: str):
    """Parse a closed-choice field into its enumeration member.

    Raises:
        InvalidRecordError: If the value is not one of the choices.
    """
    try:
        return enum_cls(getattr(raw, "value", raw))
    except ValueError as exc:
        raise InvalidRecordError(f"Invalid {field}: {raw!r}") from exc


def require_text(raw, field: str) -> str:
    """Return a stripped, non-empty text field.

    Raises:
        InvalidRecordError: If the value is missing or blank.
    """
    text = str(raw).strip() if raw is not None else ""
    if not text:
        raise InvalidRecordError(f"Missing {field}")
    return text


def parse_flag(raw) -> bool:
    """Read a checkbox-like value (bool, "true", "1", "sim", "on")."""
    if isinstance(raw, str):
        return raw.strip().lower() in {"true", "1", "sim", "yes", "on"}
    return bool(raw)


def optional_text(raw) -> str | None:
    """Return a stripped text field, or None when blank."""
    if raw is None:
        return None
    return str(raw).strip() or None


def validate_amount(record_id: str, value, logger: Logger) -> Decimal:
    """Return a safe amount for aggregation, warning on invalid input.

    Args:
        record_id: Identifier of the record carrying the amount.
        value: Raw amount value.
        logger: Logger used for warnings.

    Returns:
        Decimal: The amount, or zero when it is missing, non-numeric,
        not finite or negative.
    """
    amount = coerce_amount(value)
    if amount == 0 and not _is_zero(value):
        logger.warning(
            f"Invalid amount for record {record_id}: {value!r}; using 0"
        )
    return amount


def _is_zero(value) -> bool:
    try:
        return Decimal(str(value)) == 0
    except (InvalidOperation, ValueError):
        return False


__all__ = [
    "parse_amount",
    "parse_installment_count",
    "parse_date",
    "parse_choice",
    "require_text",
    "parse_flag",
    "optional_text",
    "validate_amount",
]
