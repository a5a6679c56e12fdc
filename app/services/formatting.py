from __future__ import annotations

import math


def _format_number_br(value: float, decimals: int) -> str:
    # 1,234.56 -> 1.234,56
    formatted = f"{value:,.{decimals}f}"
    return formatted.replace(",", "X").replace(".", ",").replace("X", ".")


def format_brl(value: float) -> str:
    if math.isnan(value):
        return "R$ NaN"
    if math.isinf(value):
        return "R$ ∞" if value > 0 else "R$ -∞"
    return f"R$ {_format_number_br(value, 2)}"


def format_percent(value: float, decimals: int = 1) -> str:
    if not math.isfinite(value):
        return "NaN%"
    return f"{_format_number_br(value, decimals)}%"
