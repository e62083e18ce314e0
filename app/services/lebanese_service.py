"""Lebanese locale helpers: governorates, area codes, phone numbers.

Phone handling accepts the three shapes people type:
- "+961 3 123 456" / "9613123456" (country code)
- "03 123 456" (local, leading 0)
- "3123456X" (bare 8 digits)
and normalizes them to "+961 X XXX XXXX".
"""
import re
from typing import Optional

LEBANESE_GOVERNORATES = (
    "Beirut",
    "Mount Lebanon",
    "North Lebanon",
    "South Lebanon",
    "Bekaa",
    "Nabatieh",
    "Akkar",
)

LEBANESE_AREA_CODES = {
    "Beirut": "+961 1",
    "Mount Lebanon": "+961 4",
    "North Lebanon": "+961 6",
    "South Lebanon": "+961 7",
    "Bekaa": "+961 8",
    "Nabatieh": "+961 7",
    "Akkar": "+961 6",
}

COUNTRY_CODE = "961"

# Mobile numbers start with 3, 7 or 8; landlines with 1, 4, 6, 7 or 8.
_NATIONAL_NUMBER = re.compile(r"^[134678]\d{7}$")


def _national_number(phone: str) -> Optional[str]:
    digits = re.sub(r"\D", "", phone or "")
    if digits.startswith(COUNTRY_CODE):
        digits = digits[len(COUNTRY_CODE):]
    elif digits.startswith("0"):
        digits = digits[1:]
    return digits if len(digits) == 8 else None


def format_lebanese_phone(phone: str) -> str:
    """'+96176340101' → '+961 7 634 0101'. Unrecognized input is returned as-is."""
    number = _national_number(phone)
    if number is None:
        return phone
    return f"+{COUNTRY_CODE} {number[0]} {number[1:4]} {number[4:]}"


def validate_lebanese_phone(phone: Optional[str]) -> bool:
    if not phone:
        return False
    number = _national_number(phone)
    return number is not None and bool(_NATIONAL_NUMBER.match(number))


def get_area_code_for_governorate(governorate: Optional[str]) -> str:
    return LEBANESE_AREA_CODES.get(governorate or "", f"+{COUNTRY_CODE}")
