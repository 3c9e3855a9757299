"""
Outcome types for the signup and login chains.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from database.models import User


class FailureKind(str, Enum):
    VALIDATION = "validation"  # missing, malformed or weak input; email taken
    AUTH = "auth"              # unknown email or wrong password


@dataclass(frozen=True)
class Failure:
    kind: FailureKind
    message: str


@dataclass(frozen=True)
class Success:
    account: User


Outcome = Union[Success, Failure]
