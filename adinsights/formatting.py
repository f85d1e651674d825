from __future__ import annotations

from datetime import date

from adinsights.enums import Platform


def euro(value: float) -> str:
    return f"€{value:.2f}"


def percent(value: float) -> str:
    return f"{value:.2f}%"


def plain_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def day_label(value: date) -> str:
    return value.strftime("%d/%m/%Y")


def network_label(code: str) -> str:
    if code == Platform.AUDIENCE_NETWORK.value:
        return "Audience Network"
    return code[:1].upper() + code[1:]
