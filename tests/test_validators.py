import pytest

from beautyboosters.shared.address import city_of, parse_address, same_area
from beautyboosters.shared.validators import (
    minutes_to_time,
    sanitize_reason,
    time_to_minutes,
    validate_cvr,
    validate_dk_phone,
    validate_email,
    validate_time,
)


class TestPhone:
    @pytest.mark.parametrize("raw", ["12345678", "+45 12 34 56 78", "0045 12345678", "4512345678"])
    def test_normalizes_to_e164(self, raw):
        assert validate_dk_phone(raw) == "+4512345678"

    def test_wrong_length(self):
        with pytest.raises(ValueError):
            validate_dk_phone("1234567")

    def test_empty_passes_through(self):
        assert validate_dk_phone("") == ""
        assert validate_dk_phone(None) is None


class TestEmailAndCvr:
    def test_email_lowercased(self):
        assert validate_email("  Anna@Example.COM ") == "anna@example.com"

    def test_email_rejected(self):
        with pytest.raises(ValueError):
            validate_email("anna@example")

    def test_cvr(self):
        assert validate_cvr(" 1234 5678 ") == "12345678"
        with pytest.raises(ValueError):
            validate_cvr("1234567a")


class TestTimes:
    def test_validate_time(self):
        assert validate_time(" 09:30 ") == "09:30"
        for bad in ("9:30", "24:00", "12:60", "noon"):
            with pytest.raises(ValueError):
                validate_time(bad)

    def test_minutes_conversion(self):
        assert time_to_minutes("10:30") == 630
        assert minutes_to_time(630) == "10:30"
        assert minutes_to_time(25 * 60) == "23:59"


def test_sanitize_reason():
    assert sanitize_reason("<b>Syg</b>") == "bSyg/b"
    assert sanitize_reason("x" * 600) == "x" * 500
    assert sanitize_reason("  <> ") is None
    assert sanitize_reason(None) is None


class TestAddress:
    def test_parse_full_address(self):
        assert parse_address("Vesterbrogade 10, 1620 København V") == {
            "street": "Vesterbrogade 10",
            "zipcode": "1620",
            "city": "København V",
        }

    def test_parse_rejects_other_shapes(self):
        assert parse_address("Vesterbrogade 10 København") is None
        assert parse_address("Vesterbrogade 10, 162 København") is None
        assert parse_address(None) is None

    def test_city_of(self):
        assert city_of("Vesterbrogade 10, 1620 København V") == "København V"
        assert city_of("Aarhus, Midtjylland") == "Aarhus"
        assert city_of("   ") is None

    def test_same_area(self):
        assert same_area("København V", "København")
        assert same_area("aarhus", "Aarhus C")
        assert not same_area("Odense", "Aarhus")
        assert not same_area(None, "Aarhus")
