import re

# Local part, "@", domain containing at least one dot; no whitespace, single "@".
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_well_formed_email(value: str) -> bool:
    """Offline rule used when a page has no native email input to check."""
    return EMAIL_PATTERN.fullmatch(value) is not None
