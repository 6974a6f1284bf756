# account_api/services/user_service.py
import logging

from fastapi import HTTPException, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from account_api.core.errors import GENERIC_ERROR
from account_api.core.security import CredentialService
from account_api.models.user import User
from account_api.repositories.user_repo import UserRepository
from account_api.schemas.user import (
    LoginPayload,
    LoginResponse,
    RegisterPayload,
    TokenClaims,
    UserCreate,
)

logger = logging.getLogger(__name__)


class UserService:
    """
    Business logic for registration and login.

    Responsibilities:
      - validate registration data before anything is written
      - hash / verify passwords and mint tokens via CredentialService
      - orchestrate repository operations
      - map persistence and credential failures to HTTP errors
    """

    def __init__(self, repo: UserRepository):
        self.repo = repo

    def register(
        self,
        session: Session,
        credentials: CredentialService,
        payload: RegisterPayload,
    ) -> User:
        """
        Create a new account.

        Rules:
          - payload must satisfy UserCreate (400 otherwise)
          - password is stored as a bcrypt hash only
          - a failed insert (e.g. duplicate email) becomes a generic 500

        The missing-name case is answered by the router before this runs.
        """
        try:
            data = UserCreate.model_validate(payload.model_dump())
        except ValidationError as exc:
            raise RequestValidationError(exc.errors()) from exc

        user = User(
            name=data.name,
            email=str(data.email),
            password=credentials.hash_password(data.password),
        )

        try:
            created = self.repo.create(session, user)
        except SQLAlchemyError:
            session.rollback()
            logger.exception("Registration failed for %s", user.email)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=GENERIC_ERROR,
            )

        logger.info("Registered user id=%s email=%s", created.id, created.email)
        return created

    def login(
        self,
        session: Session,
        credentials: CredentialService,
        payload: LoginPayload,
    ) -> LoginResponse:
        """
        Authenticate and issue a session token.

        Pipeline (each step short-circuits):
          1. shape already validated by LoginPayload (400)
          2. unknown email => 404
          3. wrong password => 401
          4. sign {userId, email, type, name}

        Raises:
            HTTPException(404 | 401 | 500): 500 covers a failed lookup and
            a missing JWT secret.
        """
        email = str(payload.email)
        try:
            user = self.repo.get_by_email(session, email)
        except SQLAlchemyError:
            logger.exception("User lookup failed for %s", email)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=GENERIC_ERROR,
            )

        if user is None:
            logger.info("Login for unknown email %s", email)
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found",
            )

        if not credentials.verify_password(payload.password, user.password):
            logger.info("Password mismatch for user id=%s", user.id)
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Authentication failed",
            )

        try:
            token = credentials.issue_token(
                TokenClaims(user_id=user.id, email=user.email, type=user.type, name=user.name)
            )
        except RuntimeError:
            logger.exception("Token issuance unavailable")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=GENERIC_ERROR,
            )
        logger.info("User id=%s logged in", user.id)
        return LoginResponse(user_id=user.id, email=user.email, token=token)
