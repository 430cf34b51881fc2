"""Billing package."""

from locapay.billing.apportionment import (
    consumption_percentage,
    electricity_share,
    individual_consumption,
    reading_difference,
    summarize,
    total_consumption,
    total_due,
)

__all__ = [
    "consumption_percentage",
    "electricity_share",
    "individual_consumption",
    "reading_difference",
    "summarize",
    "total_consumption",
    "total_due",
]
