import re

# Allowed character class for database names, record names and data keys.
ID_PATTERN = re.compile(r"[A-Za-z0-9_-]+")


def is_valid(s) -> bool:
    """True if s is a non-empty string made only of letters, digits, '_' and '-'."""
    if not isinstance(s, str):
        return False
    return ID_PATTERN.fullmatch(s) is not None
