from __future__ import annotations

ROMAN_MONTHS: tuple[str, ...] = ("I", "II", "III", "IV", "V", "VI", "VII", "VIII", "IX", "X", "XI", "XII")


def to_roman_month(month: int) -> str:
    if not 1 <= month <= 12:
        raise ValueError(f"month out of range: {month}")
    return ROMAN_MONTHS[month - 1]


def format_number(
    sequence: int,
    location_code: str,
    department_code: str,
    document_type_code: str,
    month: int,
    year: int,
) -> str:
    """Render e.g. ``001/PI-BPN/OPS/L/I/2025``.

    The sequence is zero-padded to three digits and widens past 999.
    """
    if sequence < 1:
        raise ValueError(f"sequence must be positive: {sequence}")
    return f"{sequence:03d}/PI-{location_code}/{department_code}/{document_type_code}/{to_roman_month(month)}/{year}"
