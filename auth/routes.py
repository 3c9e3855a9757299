"""
User API routes — signup, login.

Route prefix: /api/user
"""

from __future__ import annotations

import json
import logging
import uuid
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, ValidationError

from api.dependencies import get_account_repository, get_settings
from auth import service
from auth.results import Outcome, Success
from config.settings import Settings
from database.models import User
from database.repository import AccountRepository

logger = logging.getLogger(__name__)

router = APIRouter(tags=["user"])


# ── Request / response schemas ─────────────────────────────────────────


class CredentialsRequest(BaseModel):
    # Both optional: a missing field is reported by the credential checks,
    # not by request validation.
    email: Optional[str] = None
    password: Optional[str] = None


class AccountOut(BaseModel):
    user_id: uuid.UUID
    email: str
    password_hash: Optional[str] = Field(
        default=None,
        description="bcrypt hash of the password; omitted when EXPOSE_PASSWORD_HASH is false",
    )
    created_at: Optional[datetime] = None


class UserResponse(BaseModel):
    user: AccountOut


class ErrorResponse(BaseModel):
    error: str


# ── Body parsing ───────────────────────────────────────────────────────


def _is_json(content_type: Optional[str]) -> bool:
    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


async def read_credentials(request: Request) -> CredentialsRequest:
    """
    Parse ``{email, password}`` leniently.

    A missing body, a non-JSON content type, or JSON that is not an object
    all yield empty credentials, which the checks then report as missing
    fields.  Unparseable JSON and wrongly typed fields are request errors.
    """
    raw = await request.body()
    if not raw or not _is_json(request.headers.get("content-type")):
        return CredentialsRequest()

    try:
        data = json.loads(raw)
    except ValueError as exc:
        raise RequestValidationError(
            [{"type": "json_invalid", "loc": ("body",), "msg": f"JSON decode error: {exc}", "input": {}}]
        ) from exc

    if not isinstance(data, dict):
        return CredentialsRequest()

    try:
        return CredentialsRequest.model_validate(data)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors(), body=data) from exc


_CREDENTIALS_BODY = {
    "requestBody": {
        "content": {"application/json": {"schema": CredentialsRequest.model_json_schema()}},
        "required": False,
    },
}


# ── Responses ──────────────────────────────────────────────────────────


def _account_payload(user: User, settings: Settings) -> dict:
    account = AccountOut(
        user_id=user.user_id,
        email=user.email,
        password_hash=user.password_hash if settings.expose_password_hash else None,
        created_at=user.created_at,
    )
    exclude = None if settings.expose_password_hash else {"password_hash"}
    return {"user": account.model_dump(mode="json", exclude=exclude)}


def _error(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": message},
    )


def _respond(outcome: Outcome, settings: Settings) -> JSONResponse:
    if isinstance(outcome, Success):
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content=_account_payload(outcome.account, settings),
        )
    return _error(outcome.message)


# ── Endpoints ──────────────────────────────────────────────────────────

# Handlers build their JSONResponse directly, so these only feed the docs.
_RESPONSES = {
    200: {"model": UserResponse},
    400: {"model": ErrorResponse},
}


@router.post("/login", responses=_RESPONSES, openapi_extra=_CREDENTIALS_BODY)
async def login(
    req: CredentialsRequest = Depends(read_credentials),
    repo: AccountRepository = Depends(get_account_repository),
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    """Login with email + password."""
    try:
        outcome = await service.login(repo, req.email, req.password)
    except Exception as exc:
        logger.exception("Login failed unexpectedly")
        return _error(str(exc))
    return _respond(outcome, settings)


@router.post("/signup", responses=_RESPONSES, openapi_extra=_CREDENTIALS_BODY)
async def signup(
    req: CredentialsRequest = Depends(read_credentials),
    repo: AccountRepository = Depends(get_account_repository),
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    """Register a new user."""
    try:
        outcome = await service.signup(
            repo, req.email, req.password, rounds=settings.bcrypt_rounds,
        )
    except Exception as exc:
        logger.exception("Signup failed unexpectedly")
        return _error(str(exc))
    return _respond(outcome, settings)
