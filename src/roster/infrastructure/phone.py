"""Phone number checks: the local form-field format plus E.164 normalization."""

import phonenumbers

from roster.application.validation import LOCAL_PHONE_PATTERN


def normalize_phone(raw: str, default_region: str | None = None) -> str | None:
    """Parse and return E.164 form of the number, or None if invalid.

    default_region applies when the input has no leading + (e.g. "11 99876-5432"
    with default_region "BR"). If the number already includes a country code,
    default_region is ignored.
    """
    if not raw or not str(raw).strip():
        return None
    raw = str(raw).strip()
    try:
        parsed = phonenumbers.parse(raw, default_region)
    except phonenumbers.NumberParseException:
        return None
    if not phonenumbers.is_valid_number(parsed):
        return None
    return phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)


def is_valid_phone(raw: str, default_region: str | None = None) -> bool:
    """True for the local form format or any number phonenumbers accepts."""
    if not raw or not raw.strip():
        return False
    raw = raw.strip()
    if LOCAL_PHONE_PATTERN.match(raw):
        return True
    return normalize_phone(raw, default_region) is not None
