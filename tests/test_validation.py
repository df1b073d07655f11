import pytest

from checkout.domain.validation import coerce_qty, sanitize, validate_fields, validate_order


class TestSanitize:

    def test_trims_and_lowercases_email(self, valid_order):
        raw = {**valid_order, "name": "  Ann ", "email": " Ann@X.COM "}
        clean = sanitize(raw)
        assert clean.name == "Ann"
        assert clean.email == "ann@x.com"

    def test_missing_fields_become_empty(self):
        clean = sanitize({})
        assert clean.name == ""
        assert clean.address2 == ""
        assert clean.qty == 1

    def test_non_string_values_are_stringified(self, valid_order):
        clean = sanitize({**valid_order, "pin": 560001, "country": "IN"})
        assert clean.pin == "560001"

    @pytest.mark.parametrize("raw,expected", [
        (None, 1),
        ("", 1),
        ("  ", 1),
        (3, 3),
        ("4", 4),
        (" 7 ", 7),
        (2.0, 2),
        (2.5, None),
        ("abc", None),
        ("2.5", None),
        ("2.0", 2),
        (" 3.00 ", 3),
        ("inf", None),
        ("nan", None),
        (True, None),
        (0, 0),
    ])
    def test_coerce_qty(self, raw, expected):
        assert coerce_qty(raw) == expected


class TestValidateOrder:

    def test_valid_order_has_no_errors(self, valid_order):
        assert validate_order(sanitize(valid_order)) == {}

    def test_collects_every_failing_field(self):
        errors = validate_order(sanitize({"qty": 99}))
        assert set(errors) == {"name", "email", "phone", "address1", "city", "state", "country", "pin", "qty"}

    def test_short_address(self, valid_order):
        errors = validate_order(sanitize({**valid_order, "address1": "1 A"}))
        assert set(errors) == {"address1"}

    def test_pin_depends_on_country(self, valid_order):
        errors = validate_order(sanitize({**valid_order, "country": "IN", "pin": "NW1 6XE"}))
        assert set(errors) == {"pin"}

    def test_address2_is_optional(self, valid_order):
        assert "address2" not in validate_order(sanitize({**valid_order, "address2": ""}))

    def test_quantity_out_of_range(self, valid_order):
        assert set(validate_order(sanitize({**valid_order, "qty": 11}))) == {"qty"}
        assert set(validate_order(sanitize({**valid_order, "qty": "abc"}))) == {"qty"}


class TestValidateFields:

    def test_reports_every_field(self, valid_order):
        result = validate_fields({**valid_order, "email": "a@b"})
        assert result.ok is False
        assert result.errors["email"] == "Enter a valid email"
        assert result.errors["name"] == ""
        assert result.failing() == {"email": "Enter a valid email"}

    def test_ok(self, valid_order):
        result = validate_fields(valid_order)
        assert result.ok is True
        assert result.failing() == {}
