"""
Credential checks applied before touching the database.

Each ``check_*`` function returns ``None`` when the input passes or a
``Failure`` describing the first problem found.
"""

from __future__ import annotations

import re
from typing import Optional

import email_validator
from email_validator import EmailNotValidError, validate_email

from auth.results import Failure, FailureKind

# Addresses on special-use TLDs (.test, .local, .invalid, .onion, ...) are
# well-formed; whether they can receive mail is not a signup concern.
email_validator.SPECIAL_USE_DOMAIN_NAMES = []

MIN_PASSWORD_LENGTH = 8

_LOWER = re.compile(r"[a-z]")
_UPPER = re.compile(r"[A-Z]")
_DIGIT = re.compile(r"[0-9]")
_SYMBOL = re.compile(r"[-#!$@£%^&*()_+|~=`{}\[\]:\";'<>?,./\\ ]")

# Top-level label: two or more letters, or an IDNA (punycode) label.
_TLD = re.compile(r"[a-z]{2,}|xn--[a-z0-9-]+", re.IGNORECASE)


def is_email(value: str) -> bool:
    """Syntax-only check; no DNS lookups. The domain needs a dot and a real-looking TLD."""
    try:
        result = validate_email(
            value, check_deliverability=False, globally_deliverable=False,
        )
    except EmailNotValidError:
        return False
    labels = result.ascii_domain.split(".")
    return len(labels) > 1 and _TLD.fullmatch(labels[-1]) is not None


def is_strong_password(value: str) -> bool:
    """At least 8 characters with a lowercase, an uppercase, a digit and a symbol."""
    return (
        len(value) >= MIN_PASSWORD_LENGTH
        and _LOWER.search(value) is not None
        and _UPPER.search(value) is not None
        and _DIGIT.search(value) is not None
        and _SYMBOL.search(value) is not None
    )


def check_fields_present(email: Optional[str], password: Optional[str]) -> Optional[Failure]:
    if not email or not password:
        return Failure(FailureKind.VALIDATION, "All fields must be filled")
    return None


def check_email_format(email: str) -> Optional[Failure]:
    if not is_email(email):
        return Failure(FailureKind.VALIDATION, "Email not valid")
    return None


def check_password_strength(password: str) -> Optional[Failure]:
    if not is_strong_password(password):
        return Failure(FailureKind.VALIDATION, "Password not strong enough")
    return None
