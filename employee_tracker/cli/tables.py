from decimal import Decimal
from typing import Any, Mapping, Sequence


def format_money(amount: Decimal) -> str:
    if amount == amount.to_integral():
        return f"${amount:,.0f}"
    return f"${amount:,.2f}"


def _cell(value: Any) -> str:
    if value is None:
        return "None"
    if isinstance(value, Decimal):
        return f"{value.normalize():f}" if value == value.to_integral() else f"{value:f}"
    return str(value)


def render_table(rows: Sequence[Mapping[str, Any]]) -> str:
    """Plain-text table, columns taken from the first row's keys."""
    if not rows:
        return ""

    headers = list(rows[0].keys())
    cells = [[_cell(row.get(h)) for h in headers] for row in rows]
    widths = [
        max(len(h), *(len(line[i]) for line in cells))
        for i, h in enumerate(headers)
    ]

    def _line(values):
        return "  ".join(v.ljust(w) for v, w in zip(values, widths)).rstrip()

    out = [_line(headers), _line("-" * w for w in widths)]
    out.extend(_line(line) for line in cells)
    return "\n".join(out)
