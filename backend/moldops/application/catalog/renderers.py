"""Cell renderers shared by the entity pages.

Every renderer takes ``(value, row)`` and returns display text. They are
called even when ``value`` is missing, so each one chooses its own fallback.
"""

from datetime import date, datetime, timedelta
from typing import Any

from moldops.domain.entities import PLACEHOLDER, Record, Renderer


def _number(value: Any) -> float | None:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _grouped(number: float) -> str:
    if number == int(number):
        return f"{int(number):,}"
    return f"{number:,.3f}".rstrip("0").rstrip(".")


def thousands(value: Any, row: Record | None = None) -> str:
    """``1234567`` → ``"1,234,567"``; missing or zero → ``"0"``."""
    number = _number(value)
    if not number:
        return "0"
    return _grouped(number)


def fixed2(value: Any, row: Record | None = None) -> str:
    number = _number(value)
    if not number:
        return "0"
    return f"{number:.2f}"


def money(value: Any, row: Record | None = None) -> str:
    """Fixed two-decimal dollar amount, ``"$0.00"`` when missing."""
    number = _number(value)
    return f"${number:.2f}" if number is not None else "$0.00"


def money_plain(value: Any, row: Record | None = None) -> str:
    number = _number(value)
    if not number:
        return "$0"
    return f"${_grouped(number)}"


def money_grouped(value: Any, row: Record | None = None) -> str:
    return f"${thousands(value)}"


def currency_amount(value: Any, row: Record) -> str:
    """Amount prefixed with the row's currency code (IDR when unset)."""
    return f"{row.get('currency') or 'IDR'} {thousands(value)}"


def active_flag(value: Any, row: Record | None = None) -> str:
    return "Active" if value else "Inactive"


def full_name(value: Any, row: Record) -> str:
    parts = [row.get("first_name") or "", row.get("last_name") or ""]
    name = " ".join(p for p in parts if p)
    return name or PLACEHOLDER


def with_unit(unit_key: str, grouped: bool = True) -> Renderer:
    """Quantity followed by the unit stored under ``unit_key`` in the same row."""

    def render(value: Any, row: Record) -> str:
        amount = thousands(value) if grouped else _plain(value)
        return f"{amount} {row.get(unit_key) or ''}".rstrip()

    return render


def _plain(value: Any) -> str:
    number = _number(value)
    if not number:
        return "0"
    return str(int(number)) if number == int(number) else str(number)


def suffixed(unit: str) -> Renderer:
    """``frequency_days=30`` → ``"30 days"``."""

    def render(value: Any, row: Record) -> str:
        if value is None or value == "":
            return PLACEHOLDER
        return f"{value} {unit}"

    return render


def percentage(numerator_key: str, denominator_key: str) -> Renderer:
    """``numerator / denominator`` as a one-decimal percentage, ``0.0%`` when undefined."""

    def render(value: Any, row: Record) -> str:
        numerator = _number(row.get(numerator_key)) or 0.0
        denominator = _number(row.get(denominator_key)) or 0.0
        ratio = numerator / denominator * 100 if denominator > 0 else 0.0
        return f"{ratio:.1f}%"

    return render


def pass_rate(value: Any, row: Record) -> str:
    passed = _number(row.get("pass_quantity")) or 0.0
    failed = _number(row.get("fail_quantity")) or 0.0
    total = passed + failed
    rate = passed / total * 100 if total > 0 else 0.0
    return f"{rate:.1f}%"


def fill_level(value: Any, row: Record) -> str:
    """``"750 kg (75.0%)"`` relative to the container's capacity."""
    level = _number(value) or 0.0
    capacity = _number(row.get("capacity_value")) or 0.0
    percent = level / capacity * 100 if capacity > 0 else 0.0
    amount = f"{thousands(value)} {row.get('capacity_unit') or ''}".rstrip()
    return f"{amount} ({percent:.1f}%)"


def stock_status(value: Any, row: Record) -> str:
    """Critical at half the minimum, Low at the minimum, Overstock at the maximum."""
    stock = _number(row.get("current_stock")) or 0.0
    minimum = _number(row.get("minimum_stock")) or 0.0
    maximum = _number(row.get("maximum_stock"))
    if stock <= minimum * 0.5:
        return "Critical"
    if stock <= minimum:
        return "Low"
    if maximum is not None and stock >= maximum:
        return "Overstock"
    return "Normal"


def relation_name(*path: str) -> Renderer:
    """Display name from an embedded relation, falling back to the raw id.

    ``relation_name("machines", "name")`` reads ``row["machines"]["name"]``.
    Longer paths walk nested embeds.
    """

    def render(value: Any, row: Record) -> str:
        current: Any = row
        for key in path:
            if not isinstance(current, dict):
                current = None
                break
            current = current.get(key)
        if current not in (None, ""):
            return str(current)
        if value in (None, ""):
            return PLACEHOLDER
        return str(value)

    return render


def _parse_datetime(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str) or not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def timestamp(value: Any, row: Record | None = None) -> str:
    """ISO timestamp → ``"YYYY-MM-DD HH:MM"``; unparseable text is shown as-is."""
    parsed = _parse_datetime(value)
    if parsed is None:
        return str(value) if value not in (None, "") else PLACEHOLDER
    return parsed.strftime("%Y-%m-%d %H:%M")


def due_state(value: Any, today: date | None = None) -> str | None:
    """``"overdue"``, ``"due_soon"`` (within seven days) or None."""
    parsed = _parse_datetime(value)
    if parsed is None:
        return None
    today = today or date.today()
    due = parsed.date()
    if due < today:
        return "overdue"
    if due <= today + timedelta(days=7):
        return "due_soon"
    return None


def maintenance_due(value: Any, row: Record) -> str:
    if value in (None, ""):
        return PLACEHOLDER
    state = due_state(value)
    if state == "overdue":
        return f"{value} (Overdue)"
    if state == "due_soon":
        return f"{value} (Due Soon)"
    return str(value)

