from __future__ import annotations

import re
from typing import Final

NON_DIGITS: Final = re.compile(r"\D")
DOMESTIC_COUNTRY_CODE: Final[str] = "1"
DOMESTIC_NUMBER_LENGTH: Final[int] = 10


def normalize_phone_number(raw: str) -> str:
    """
    Turn whatever the app sent into a +<country><digits> number.

    - strip everything that is not a digit
    - exactly 10 digits: assume a US/Canada number and prepend +1
    - otherwise prepend + (the digits are taken to already include
      the country code)

    "(555) 123-4567" -> "+15551234567", "+44 20 7946 0958" -> "+442079460958"
    """
    digits = NON_DIGITS.sub("", raw)
    if len(digits) == DOMESTIC_NUMBER_LENGTH:
        return f"+{DOMESTIC_COUNTRY_CODE}{digits}"
    # A leading + in the input was stripped above; put exactly one back.
    return f"+{digits}"
