from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any, Tuple

from dashboard_service.logic_modules.coercion import coerce_optional_number, parse_calendar_date

PLACEHOLDER = "-"
TOOLTIP_PRECISION = 2

_TOOLTIP_LABELS = {
    "hours": ("{value}h", "Hours"),
    "max": ("{value}h (max)", "Max"),
    "min": ("{value}h (min)", "Min"),
}


def format_date(value: Any) -> str:
    """Short axis label such as 'Jan 2'. Unparseable input is returned as given."""

    timestamp = parse_calendar_date(value, wall_clock=True)
    if timestamp is None:
        return _as_text(value)
    return f"{timestamp.strftime('%b')} {timestamp.day}"


def format_tooltip_date(value: Any) -> str:
    """Numeric US date such as '1/2/2024'. Unparseable input is returned as given."""

    timestamp = parse_calendar_date(value, wall_clock=True)
    if timestamp is None:
        return _as_text(value)
    return f"{timestamp.month}/{timestamp.day}/{timestamp.year}"


def format_number(value: Any, precision: int = 0) -> str:
    """
    Render a metric for display.

    Missing values render as the placeholder. Numbers and numeric strings are
    grouped by thousands with at most `precision` fractional digits. Anything
    else is returned unchanged.
    """

    if value is None or (isinstance(value, str) and not value.strip()):
        return PLACEHOLDER
    number = coerce_optional_number(value)
    if number is None:
        return _as_text(value)
    return _grouped(number, max(0, int(precision)))


def format_tooltip_value(value: Any, name: str) -> Tuple[str, str]:
    """Tooltip text and series label for one chart value."""

    template = _TOOLTIP_LABELS.get(name)
    if template is None:
        return _as_text(value), name
    text, label = template
    return text.format(value=format_number(value, TOOLTIP_PRECISION)), label


def _grouped(number: float, precision: int) -> str:
    try:
        with localcontext() as ctx:
            ctx.prec = 64
            rounded = Decimal(str(number)).quantize(Decimal(1).scaleb(-precision), rounding=ROUND_HALF_UP)
        text = f"{rounded:,.{precision}f}"
    except InvalidOperation:
        text = f"{number:,.{precision}f}"

    if precision:
        text = text.rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)
