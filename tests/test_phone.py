"""Tests for phone number normalization (E.164) and form phone checks."""


from roster.infrastructure.phone import is_valid_phone, normalize_phone


def test_normalize_with_country_code_returns_e164():
    assert normalize_phone("+39 312 345 6789", default_region=None) == "+393123456789"
    assert normalize_phone("+1 202 555 1234", default_region=None) == "+12025551234"


def test_normalize_without_country_code_uses_default_region():
    assert normalize_phone("202 555 1234", default_region="US") == "+12025551234"
    assert normalize_phone("(11) 99876-5432", default_region="BR") == "+5511998765432"


def test_normalize_invalid_returns_none():
    assert normalize_phone("", default_region=None) is None
    assert normalize_phone("   ", default_region=None) is None
    assert normalize_phone("abc", default_region=None) is None
    assert normalize_phone("+1", default_region=None) is None
    assert normalize_phone("123", default_region="US") is None  # too short


def test_is_valid_phone_accepts_local_format_without_lookup():
    # 8-digit subscriber after a 2-digit area code is accepted by the form pattern
    assert is_valid_phone("(11) 89876-5432", default_region=None) is True


def test_is_valid_phone_accepts_international_numbers():
    assert is_valid_phone("+1 202 555 1234", default_region="BR") is True
    assert is_valid_phone("+39 312 345 6789") is True


def test_is_valid_phone_rejects_garbage():
    assert is_valid_phone("", default_region="BR") is False
    assert is_valid_phone("abc", default_region="BR") is False
    assert is_valid_phone("+1", default_region="BR") is False
