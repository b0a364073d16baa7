# utils/currency.py
from typing import Union


def clean_currency(val):
    """
    Cleans a currency string (e.g., "$140,000.00") into a float (140000.0).
    """
    if not val:
        return 0.0

    try:
        # Strip non-digit, non-decimal characters, then convert to float.
        cleaned_val = str(val).replace('$', '').replace(',', '').strip()
        if not cleaned_val:
            return 0.0
        return float(cleaned_val)
    except ValueError:
        return 0.0


def clean_percent(raw_input: Union[str, float, int]) -> Union[float, None]:
    """
    Cleans raw input (e.g., '0.065', '6.5%', '6.5', '0.5%') and converts it to a
    float where 1.0 represents 100%.  Strings carrying a % sign are always
    percentages; bare numbers between 1 and 100 are read as percentages,
    anything else as a decimal rate.
    """
    if raw_input is None:
        return None

    if isinstance(raw_input, bool):
        return None

    if isinstance(raw_input, (float, int)):
        if 1.0 <= abs(float(raw_input)) <= 100.0:
            return float(raw_input) / 100.0
        return float(raw_input)

    s = str(raw_input).strip()
    if not s:
        return None

    is_percent = '%' in s
    s = s.replace('%', '').replace(',', '').replace(' ', '').strip()

    try:
        numeric_val = float(s)
    except ValueError:
        return None

    if is_percent or 1.0 <= abs(numeric_val) <= 100.0:
        return numeric_val / 100.0
    return numeric_val


def clean_bool(raw_input) -> bool:
    """Accepts booleans, 'true'/'false', 'yes'/'no', 'on'/'off' and 0/1."""
    if isinstance(raw_input, bool):
        return raw_input
    if isinstance(raw_input, (int, float)):
        return raw_input != 0
    if raw_input is None:
        return False
    return str(raw_input).strip().lower() in ("true", "yes", "on", "1")


def format_currency_output(val, decimals=0):
    """
    Formats a float/int into a clean currency string ($1,234,567).

    Args:
        val (float): The numerical value to format.
        decimals (int): Number of decimal places.
    """
    if val is None:
        val = 0.0
    return f"${val:,.{decimals}f}"


def format_percent_output(value: Union[float, None], decimal_places: int = 1) -> str:
    """Formats a float (0.23) to a display string ('23.0%')."""
    if value is None:
        return ""
    value = float(value)
    return f"{value * 100:.{decimal_places}f}%"
