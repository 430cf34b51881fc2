"""
Apportionment Engine

Splits one shared electricity bill across tenants in proportion to
what each of them consumed:

    share = consumption / total_consumption * bill_amount

Everything here is pure: functions read the roster and return numbers,
they never mutate it.

ROUNDING: shares and percentages are rounded independently per tenant,
halves rounding up, using exact decimal arithmetic. The rounded shares
are NOT reconciled to the bill; their sum may differ from the bill by
at most len(roster) // 2 units for a whole-number bill.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

from locapay.models.tenant import (
    BillingSummary,
    Roster,
    Tenant,
    TenantStatement,
)
from locapay.validation.errors import InvalidNumberError, NegativeValueError
from locapay.validation.validator import validate_meter_update


Amount = Union[int, float, Decimal]

HUNDRED = Decimal(100)


def _to_amount(bill_amount: Amount) -> Decimal:
    """Normalize a bill amount to a non-negative Decimal."""
    if isinstance(bill_amount, bool) or not isinstance(bill_amount, (int, float, Decimal)):
        raise InvalidNumberError("bill_amount", bill_amount, "a number")

    try:
        # str() keeps 45000.1 from becoming 45000.1000000000014551...
        amount = Decimal(str(bill_amount)) if isinstance(bill_amount, float) else Decimal(bill_amount)
    except InvalidOperation:
        raise InvalidNumberError("bill_amount", bill_amount, "a number")

    if not amount.is_finite():
        raise InvalidNumberError("bill_amount", bill_amount, "a finite number")
    if amount < 0:
        raise NegativeValueError("bill_amount", bill_amount)

    return amount


def _round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _prorate(part: int, whole: int, scale: Decimal) -> int:
    """round(part / whole * scale), multiplying first to keep it exact."""
    return _round_half_up(Decimal(part) * scale / Decimal(whole))


def individual_consumption(tenant: Tenant) -> int:
    """
    kWh consumed by one tenant this period.

    Clamped at zero: a tenant whose stored readings went backwards
    contributes nothing rather than a negative amount.
    """
    return max(0, tenant.meter_current - tenant.meter_previous)


def total_consumption(roster: Roster) -> int:
    """kWh consumed by the whole house (0 for an empty roster)."""
    return sum(individual_consumption(tenant) for tenant in roster)


def electricity_share(tenant: Tenant, roster: Roster, bill_amount: Amount) -> int:
    """
    The tenant's portion of the electricity bill.

    Zero when nobody consumed anything. The bill amount is checked
    either way, as in summarize().
    """
    amount = _to_amount(bill_amount)
    house_total = total_consumption(roster)
    if house_total == 0:
        return 0

    return _prorate(individual_consumption(tenant), house_total, amount)


def consumption_percentage(tenant: Tenant, roster: Roster) -> int:
    """Tenant consumption as a whole percent of the house total."""
    house_total = total_consumption(roster)
    if house_total == 0:
        return 0

    return _prorate(individual_consumption(tenant), house_total, HUNDRED)


def total_due(tenant: Tenant, roster: Roster, bill_amount: Amount) -> int:
    """Rent plus electricity share."""
    return tenant.rent + electricity_share(tenant, roster, bill_amount)


def reading_difference(previous: int, current: int) -> int:
    """
    Consumption between two readings of a single meter.

    Unlike individual_consumption this does not clamp: an inconsistent
    pair is refused with the same errors as a meter update.
    """
    validate_meter_update(previous, current)
    return current - previous


def summarize(roster: Roster, bill_amount: Amount) -> BillingSummary:
    """
    Apportion the bill across the whole roster in one pass.

    Args:
        roster: Tenants to bill, in display order
        bill_amount: Total of the shared electricity bill

    Returns:
        BillingSummary with one statement per tenant plus totals
    """
    amount = _to_amount(bill_amount)
    house_total = total_consumption(roster)

    statements = []
    for tenant in roster:
        consumption = individual_consumption(tenant)
        if house_total:
            share = _prorate(consumption, house_total, amount)
            percentage = _prorate(consumption, house_total, HUNDRED)
        else:
            share = 0
            percentage = 0

        statements.append(TenantStatement(
            tenant_id=tenant.id,
            display_name=tenant.display_name,
            room_label=tenant.room_label,
            rent=tenant.rent,
            consumption=consumption,
            percentage=percentage,
            electricity_share=share,
            total_due=tenant.rent + share,
        ))

    total_shares = sum(statement.electricity_share for statement in statements)

    return BillingSummary(
        bill_amount=amount,
        total_rent=roster.total_rent(),
        total_consumption=house_total,
        statements=statements,
        total_shares=total_shares,
        rounding_drift=Decimal(total_shares) - amount,
    )
