"""
Request validation run at the route boundary, before any service call.

Each field has an ordered list of checks; the first failing check of a field
produces its error and the remaining checks of that field are skipped. All
fields are checked, so one response reports every invalid field.
"""

from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple
from email_validator import EmailNotValidError, validate_email
from ari.core.exceptions import BadRequestError

# A check returns an error message, or None when the value passes
Check = Callable[[Any], Optional[str]]

PASSWORD_MIN_LENGTH = 6

# Largest value an INTEGER column holds
MAX_ID = 2**31 - 1
# Numeric(12, 2) columns hold up to 10 digits before the point
MAX_AMOUNT = Decimal("9999999999.99")


def required(message: str) -> Check:
    def check(value: Any) -> Optional[str]:
        if value is None or (isinstance(value, str) and not value.strip()):
            return message
        return None
    return check


def min_length(length: int, message: str) -> Check:
    def check(value: Any) -> Optional[str]:
        return message if len(value) < length else None
    return check


def max_length(length: int, message: str) -> Check:
    def check(value: Any) -> Optional[str]:
        return message if len(value) > length else None
    return check


def non_negative(message: str) -> Check:
    def check(value: Any) -> Optional[str]:
        return message if value < 0 else None
    return check


def at_most(limit: Any, message: str) -> Check:
    def check(value: Any) -> Optional[str]:
        return message if value > limit else None
    return check


def no_nul(message: str) -> Check:
    # bcrypt refuses NUL bytes, so they are rejected before hashing
    def check(value: Any) -> Optional[str]:
        return message if "\x00" in value else None
    return check


def email_shape(message: str) -> Check:
    def check(value: Any) -> Optional[str]:
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError:
            return message
        return None
    return check


def optional(*checks: Check) -> List[Check]:
    """Run the checks only when a value was sent"""
    def skip_none(inner: Check) -> Check:
        def check(value: Any) -> Optional[str]:
            return None if value is None else inner(value)
        return check
    return [skip_none(c) for c in checks]


Rules = Sequence[Tuple[str, Sequence[Check]]]


def collect_errors(data: Dict[str, Any], rules: Rules) -> List[Dict[str, str]]:
    errors = []
    for field, checks in rules:
        value = data.get(field)
        for check in checks:
            message = check(value)
            if message is not None:
                errors.append({"field": field, "message": message})
                break
    return errors


def validate(data: Dict[str, Any], rules: Rules) -> None:
    """Raise a 400 listing every invalid field"""
    errors = collect_errors(data, rules)
    if errors:
        raise BadRequestError(detail=errors)


EMAIL_RULES = [
    required("Email must not be empty."),
    max_length(255, "Email must be at most 255 characters long."),
    email_shape("Email is not a valid address."),
]

PASSWORD_RULES = [
    required("Password must not be empty."),
    min_length(PASSWORD_MIN_LENGTH, f"Password must be at least {PASSWORD_MIN_LENGTH} characters long."),
    no_nul("Password must not contain NUL characters."),
]

NAME_RULES = [
    required("Name must not be empty."),
    max_length(255, "Name must be at most 255 characters long."),
]

LOGIN_RULES: Rules = [
    ("email", [required("Email must not be empty.")]),
    ("password", [required("Password must not be empty.")]),
]

REGISTER_RULES: Rules = [
    ("email", EMAIL_RULES),
    ("password", PASSWORD_RULES),
    ("name", NAME_RULES),
]

BASE_ID_CHECKS = [
    non_negative("Base id must not be negative."),
    at_most(MAX_ID, "Base id is too large."),
]

USER_CREATE_RULES: Rules = [
    *REGISTER_RULES,
    ("base_id", optional(*BASE_ID_CHECKS)),
]

# On update every field may be left out, but not sent empty
USER_UPDATE_RULES: Rules = [
    ("email", optional(*EMAIL_RULES)),
    ("password", optional(*PASSWORD_RULES)),
    ("name", optional(*NAME_RULES)),
    ("base_id", optional(*BASE_ID_CHECKS)),
]

BASE_NAME_RULES = [
    required("Name must not be empty."),
    max_length(100, "Name must be at most 100 characters long."),
]

BASE_CREATE_RULES: Rules = [("name", BASE_NAME_RULES)]

BASE_UPDATE_RULES: Rules = [("name", optional(*BASE_NAME_RULES))]

CLIENT_RULES: Rules = [
    ("person_id", optional(non_negative("Person id must not be negative."), at_most(MAX_ID, "Person id is too large."))),
    ("seller_id", optional(non_negative("Seller id must not be negative."), at_most(MAX_ID, "Seller id is too large."))),
    ("credit_limit", optional(
        non_negative("Credit limit must not be negative."),
        at_most(MAX_AMOUNT, "Credit limit is too large."),
    )),
    ("notes", optional(max_length(500, "Notes must be at most 500 characters long."))),
    ("score", optional(non_negative("Score must not be negative."), at_most(MAX_ID, "Score is too large."))),
    ("last_purchase_amount", optional(
        non_negative("Last purchase amount must not be negative."),
        at_most(MAX_AMOUNT, "Last purchase amount is too large."),
    )),
    ("base_id", optional(*BASE_ID_CHECKS)),
]
