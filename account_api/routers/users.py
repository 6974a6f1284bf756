# account_api/routers/users.py
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlmodel import Session

from account_api.core.auth import get_credential_service, require_claims
from account_api.core.security import CredentialService
from account_api.database import get_session
from account_api.repositories.user_repo import UserRepository
from account_api.schemas.user import (
    ErrorResponse,
    LoginPayload,
    LoginResponse,
    RegisterPayload,
    TokenClaims,
    UserRead,
    WhoAmIResponse,
)
from account_api.services.user_service import UserService

router = APIRouter(tags=["Users"])

repo = UserRepository()
service = UserService(repo)


@router.post(
    "/register",
    response_model=UserRead,
    responses={
        203: {"model": ErrorResponse, "description": "Name missing"},
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
def register(
    payload: RegisterPayload,
    session: Session = Depends(get_session),
    credentials: CredentialService = Depends(get_credential_service),
):
    """
    Create an account.

    Returns the created user without its password hash.
    A missing name is answered with 203 and nothing is stored.
    """
    if not (payload.name or "").strip():
        return JSONResponse(
            status_code=status.HTTP_203_NON_AUTHORITATIVE_INFORMATION,
            content={"error": "Name needed"},
        )
    return service.register(session, credentials, payload)


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
def login(
    payload: LoginPayload,
    session: Session = Depends(get_session),
    credentials: CredentialService = Depends(get_credential_service),
):
    """Exchange email + password for a 24h bearer token."""
    return service.login(session, credentials, payload)


@router.get(
    "/user",
    response_model=WhoAmIResponse,
    responses={401: {"model": ErrorResponse}},
)
def who_am_i(claims: TokenClaims = Depends(require_claims)):
    """
    Return the identity embedded in the bearer token.

    Auth:
      - Requires a valid token. Claims may be stale relative to the DB.
    """
    return WhoAmIResponse(data=claims)
