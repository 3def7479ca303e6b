import string
from datetime import date

ACCOUNT_ID_CHARS = frozenset(string.ascii_letters + string.digits + "-.@")
_ASCII_DIGITS = frozenset(string.digits)


def is_valid_account_id(account_id: str) -> bool:
    if not account_id:
        return False
    return all(char in ACCOUNT_ID_CHARS for char in account_id)


def _is_ascii_number(value: str) -> bool:
    return bool(value) and all(char in _ASCII_DIGITS for char in value)


def parse_execution_date(value: str) -> date | None:
    """Return the calendar date for a strict ``YYYY-MM-DD`` string, else None."""
    if len(value) != 10 or value[4] != "-" or value[7] != "-":
        return None
    year_part, month_part, day_part = value[:4], value[5:7], value[8:]
    if not (_is_ascii_number(year_part) and _is_ascii_number(month_part) and _is_ascii_number(day_part)):
        return None

    year, month, day = int(year_part), int(month_part), int(day_part)
    if not (1000 <= year <= 9999 and 1 <= month <= 12 and 1 <= day <= 31):
        return None
    try:
        # Rejects days past the end of the month, e.g. 2023-02-30.
        return date(year, month, day)
    except ValueError:
        return None


def is_valid_date(value: str) -> bool:
    return parse_execution_date(value) is not None
