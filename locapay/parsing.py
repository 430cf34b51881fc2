"""
Lenient Form Input Parsing

The boundary between raw text typed into a form and the strictly typed
billing core. Unparsable or missing numbers become 0, exactly like the
forms always behaved; the core itself never coerces anything.

Signs are kept: "-5" parses to -5 so that the core can refuse it with
NegativeValueError instead of silently accepting it as 0.
"""

import re
from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from locapay.models.tenant import TenantDraft


_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")
_NUMBER_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def lenient_int(raw: Any) -> int:
    """
    Parse the leading integer of a form value.

    Examples: "245" -> 245, " 12abc" -> 12, "3.7" -> 3, "-4" -> -4,
    "" / None / "abc" -> 0.
    """
    if raw is None or isinstance(raw, bool):
        return 0
    if isinstance(raw, int):
        return raw
    if isinstance(raw, (float, Decimal)):
        try:
            return int(raw)
        except (ValueError, OverflowError, InvalidOperation):
            return 0

    match = _INT_PREFIX.match(str(raw))
    return int(match.group(1)) if match else 0


def lenient_number(raw: Any) -> Decimal:
    """
    Parse the leading decimal number of a form value.

    Examples: "45000" -> 45000, "45000.5 FCFA" -> 45000.5,
    "" / None / "n/a" -> 0.
    """
    if raw is None or isinstance(raw, bool):
        return Decimal(0)
    if isinstance(raw, (int, Decimal)):
        value = Decimal(raw)
    elif isinstance(raw, float):
        value = Decimal(str(raw))
    else:
        match = _NUMBER_PREFIX.match(str(raw))
        if not match:
            return Decimal(0)
        value = Decimal(match.group(1))

    return value if value.is_finite() else Decimal(0)


def _text(raw: Any) -> str:
    return "" if raw is None else str(raw).strip()


def _optional_text(raw: Any) -> Optional[str]:
    return _text(raw) or None


def draft_from_form(form: Mapping[str, Any]) -> TenantDraft:
    """
    Build a TenantDraft from raw add/edit form values.

    meter_reading stays None when the form has no such field (edit forms
    that do not show it), otherwise it is parsed leniently.
    """
    raw_reading = form.get("meter_reading")

    return TenantDraft(
        name=_text(form.get("name")),
        first_name=_text(form.get("first_name")),
        room_label=_text(form.get("room_label")),
        rent=lenient_int(form.get("rent")),
        meter_reading=None if raw_reading is None else lenient_int(raw_reading),
        phone=_optional_text(form.get("phone")),
        photo_ref=_optional_text(form.get("photo_ref")),
    )
