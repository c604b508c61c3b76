"""Input validators shared by request schemas."""

import re
from datetime import time
from typing import Final

from zxcvbn import zxcvbn

# Minimum zxcvbn score (0-4 scale): 3 = "safely unguessable"
MIN_PASSWORD_SCORE: Final[int] = 3

TIME_OF_DAY_REGEX: Final[str] = r"^([01]?[0-9]|2[0-3]):[0-5][0-9]$"
_TIME_OF_DAY_PATTERN: Final[re.Pattern[str]] = re.compile(TIME_OF_DAY_REGEX)


def validate_password_strength(password: str) -> str:
    """Validate password strength using zxcvbn entropy estimation."""
    result = zxcvbn(password)
    score = result["score"]  # 0-4 scale

    if score < MIN_PASSWORD_SCORE:
        feedback = result.get("feedback", {})
        warning = feedback.get("warning", "")
        suggestions = feedback.get("suggestions", [])

        if warning:
            raise ValueError(f"Weak password: {warning}")
        elif suggestions:
            raise ValueError(f"Weak password: {suggestions[0]}")
        else:
            raise ValueError("Password is too weak. Use a longer password with a mix of characters.")

    return password


def validate_time_of_day(value: str) -> time:
    """Parse a 24-hour "HH:MM" string (hour may be a single digit).

    Examples:
        >>> validate_time_of_day("09:00")
        datetime.time(9, 0)
        >>> validate_time_of_day("7:30")
        datetime.time(7, 30)
        >>> validate_time_of_day("24:00")  # Invalid - hour out of range
    """
    if not _TIME_OF_DAY_PATTERN.fullmatch(value):
        raise ValueError("Time must be in 24-hour HH:MM format")
    hours, minutes = value.split(":")
    return time(int(hours), int(minutes))
