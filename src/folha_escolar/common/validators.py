from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional

from ..core.constants import MAX_COUNT, MAX_OVERTIME_HOURS
from ..core.exceptions import InvalidPeriod, MissingMatricula

_PERIOD_RE = re.compile(r"[0-9]{4}-(0[1-9]|1[0-2])")
_HOURS_QUANTUM = Decimal("0.01")
_MAX_HOURS = Decimal(MAX_OVERTIME_HOURS)


def require_period(value: Any) -> str:
    """Validate a YYYY-MM period (month 01-12)."""
    period = str(value or "").strip()
    if not _PERIOD_RE.fullmatch(period):
        raise InvalidPeriod()
    return period


def require_matricula(value: Any) -> str:
    matricula = str(value if value is not None else "").strip()
    if not matricula:
        raise MissingMatricula()
    return matricula


def clean_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _parse_number(value: Any) -> Optional[Decimal]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = Decimal(str(value).strip().replace(",", "."))
    except (InvalidOperation, ValueError):
        return None
    if not number.is_finite() or number < 0:
        return None
    return number


def to_decimal(value: Any) -> Decimal:
    """Coerce loosely typed input into a non-negative Decimal with two places.

    Unparsable, non-finite, negative or out-of-range values become 0; a decimal comma is accepted.
    """
    number = _parse_number(value)
    if number is None or number > _MAX_HOURS:
        return Decimal("0")
    try:
        number = number.quantize(_HOURS_QUANTUM, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return Decimal("0")
    return number if number <= _MAX_HOURS else Decimal("0")


def to_count(value: Any) -> int:
    number = _parse_number(value)
    if number is None or number > MAX_COUNT:
        return 0
    return int(number)
