"""Shared helpers for money and calendar handling."""
from datetime import date, datetime, time, timedelta
from decimal import ROUND_HALF_UP, Decimal

CENTS = Decimal("0.01")


def to_money(value: Decimal | float | int | str | None) -> Decimal | None:
    """Coerce to a two-decimal Decimal; preserve None."""
    if value is None:
        return None
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)


def format_money(value: Decimal | float | int | str) -> str:
    """Render an amount as ``123.45``."""
    return f"{to_money(value):.2f}"


def end_of_day(moment: datetime | date) -> datetime:
    """Last representable instant of the calendar day containing ``moment``."""
    day = moment.date() if isinstance(moment, datetime) else moment
    return datetime.combine(day + timedelta(days=1), time.min) - timedelta(microseconds=1)


def to_local_naive(moment: datetime) -> datetime:
    """Convert an aware datetime to naive server-local time; naive values pass through."""
    if moment.tzinfo is None:
        return moment
    return moment.astimezone().replace(tzinfo=None)
