"""
Signup and login chains.

Both run their checks in a fixed order and stop at the first failure.
Store and hashing errors are not turned into results; they propagate to
the caller.
"""

from __future__ import annotations

import logging
from typing import Optional

from auth.password import DEFAULT_ROUNDS, hash_password_async, verify_password_async
from auth.results import Failure, FailureKind, Outcome, Success
from auth.validators import (
    check_email_format,
    check_fields_present,
    check_password_strength,
)
from database.repository import AccountRepository, DuplicateEmailError

logger = logging.getLogger(__name__)

EMAIL_IN_USE = "Email already in use"
INCORRECT_EMAIL = "Incorrect email"
INCORRECT_PASSWORD = "Incorrect password"


def _rejected(action: str, failure: Failure) -> Failure:
    logger.info("%s rejected: %s", action, failure.message)
    return failure


async def signup(
    repo: AccountRepository,
    email: Optional[str],
    password: Optional[str],
    *,
    rounds: int = DEFAULT_ROUNDS,
) -> Outcome:
    """Validate the credentials and create the account."""
    failure = (
        check_fields_present(email, password)
        or check_email_format(email)
        or check_password_strength(password)
    )
    if failure is not None:
        return _rejected("Signup", failure)

    if await repo.find_by_email(email) is not None:
        return _rejected("Signup", Failure(FailureKind.VALIDATION, EMAIL_IN_USE))

    password_hash = await hash_password_async(password, rounds)
    try:
        user = await repo.create(email, password_hash)
    except DuplicateEmailError:
        # Another signup for the same email committed after our lookup.
        return _rejected("Signup", Failure(FailureKind.VALIDATION, EMAIL_IN_USE))

    logger.info("Registered user %s (%s)", user.email, user.user_id)
    return Success(user)


async def login(
    repo: AccountRepository,
    email: Optional[str],
    password: Optional[str],
) -> Outcome:
    """Look the account up and check the password against its hash."""
    failure = check_fields_present(email, password)
    if failure is not None:
        return _rejected("Login", failure)

    user = await repo.find_by_email(email)
    if user is None:
        return _rejected("Login", Failure(FailureKind.AUTH, INCORRECT_EMAIL))

    if not await verify_password_async(password, user.password_hash):
        return _rejected("Login", Failure(FailureKind.AUTH, INCORRECT_PASSWORD))

    logger.info("Login: %s (%s)", user.email, user.user_id)
    return Success(user)
