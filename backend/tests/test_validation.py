from decimal import Decimal

import pytest

from ari.api.validation import (
    CLIENT_RULES,
    LOGIN_RULES,
    REGISTER_RULES,
    USER_UPDATE_RULES,
    collect_errors,
    validate,
)
from ari.core.exceptions import BadRequestError


def test_valid_registration_has_no_errors():
    data = {"email": "alice@example.com", "password": "s3cret!", "name": "Alice"}
    assert collect_errors(data, REGISTER_RULES) == []


def test_every_invalid_field_is_reported_in_order():
    data = {"email": "not-an-email", "password": "123", "name": None}
    errors = collect_errors(data, REGISTER_RULES)

    assert [e["field"] for e in errors] == ["email", "password", "name"]
    assert errors[0]["message"] == "Email is not a valid address."
    assert errors[1]["message"] == "Password must be at least 6 characters long."
    assert errors[2]["message"] == "Name must not be empty."


def test_first_failing_check_wins():
    # Empty email fails 'required' and is not also reported as malformed
    errors = collect_errors({"email": "   ", "password": "s3cret!", "name": "A"}, REGISTER_RULES)
    assert errors == [{"field": "email", "message": "Email must not be empty."}]


def test_login_only_requires_presence():
    assert collect_errors({"email": "x", "password": "y"}, LOGIN_RULES) == []
    assert len(collect_errors({}, LOGIN_RULES)) == 2


def test_update_rules_skip_missing_fields_but_reject_empty_ones():
    assert collect_errors({}, USER_UPDATE_RULES) == []
    assert collect_errors({"name": ""}, USER_UPDATE_RULES) == [
        {"field": "name", "message": "Name must not be empty."}
    ]


def test_validate_raises_bad_request_with_structured_detail():
    with pytest.raises(BadRequestError) as exc_info:
        validate({"email": "", "password": ""}, LOGIN_RULES)

    assert exc_info.value.status_code == 400
    assert exc_info.value.detail == [
        {"field": "email", "message": "Email must not be empty."},
        {"field": "password", "message": "Password must not be empty."},
    ]


def test_password_with_nul_character_is_rejected():
    data = {"email": "alice@example.com", "password": "abc\x00def", "name": "Alice"}
    assert collect_errors(data, REGISTER_RULES) == [
        {"field": "password", "message": "Password must not contain NUL characters."}
    ]
    assert collect_errors({"password": "abc\x00def"}, USER_UPDATE_RULES) == [
        {"field": "password", "message": "Password must not contain NUL characters."}
    ]


def test_client_numbers_are_bounded_by_column_range():
    data = {"person_id": 2**31 - 1, "score": 2**31, "last_purchase_amount": Decimal("10000000000")}
    assert collect_errors(data, CLIENT_RULES) == [
        {"field": "score", "message": "Score is too large."},
        {"field": "last_purchase_amount", "message": "Last purchase amount is too large."},
    ]
